"""Built-in waveform sources."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from ..core.base import SignalSource
from ..core.registry import registry
from ..core.samples import SampleFormat


def phase(time: float, frequency: float) -> float:
    """Position within the current cycle, in [0, 1)."""
    return (time * frequency) % 1.0


@dataclass
@registry.register_source
class SquareSource(SignalSource):
    """Square wave alternating between the format's extremes."""

    name: str = "square"
    freq: float = 440.0

    def sample_mono(self, time: float, fmt: SampleFormat) -> Optional[int]:
        return fmt.min if phase(time, self.freq) < 0.5 else fmt.max

    def to_dict(self) -> dict[str, object]:
        data = super().to_dict()
        data.update({"freq": self.freq})
        return data


@dataclass
@registry.register_source
class SawSource(SignalSource):
    """Rising sawtooth wave."""

    name: str = "saw"
    freq: float = 440.0

    def sample_mono(self, time: float, fmt: SampleFormat) -> Optional[int]:
        return fmt.from_normalized(phase(time, self.freq))

    def to_dict(self) -> dict[str, object]:
        data = super().to_dict()
        data.update({"freq": self.freq})
        return data


@dataclass
@registry.register_source
class RandomSource(SignalSource):
    """Uniform white noise drawn from an explicitly owned generator.

    The generator is not safe to share between threads; give each thread
    its own source.
    """

    name: str = "random"
    seed: Optional[int] = None
    rng: Optional[np.random.Generator] = field(default=None, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.rng is None:
            self.rng = np.random.default_rng(self.seed)

    def sample_mono(self, time: float, fmt: SampleFormat) -> Optional[int]:
        return fmt.from_normalized(self.rng.random())

    def to_dict(self) -> dict[str, object]:
        data = super().to_dict()
        data.update({"seed": self.seed})
        return data
