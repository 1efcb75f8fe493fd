"""Core abstract interface for signal sources and the rate adapters."""

from __future__ import annotations

import abc
import itertools
from typing import Any, Iterator, Optional, Tuple

import numpy as np

from .samples import SampleFormat

Frame = Tuple[int, ...]


def iter_mono(
    source: "SignalSource",
    sample_rate: int,
    fmt: SampleFormat,
    start_time: float = 0.0,
) -> Iterator[int]:
    """Yield one sample per tick until the source is exhausted.

    The cursor is advanced by ``1 / sample_rate`` before each sample, so the
    first value corresponds to ``start_time + tick``. Unbounded for sources
    that never exhaust; callers bound it with ``itertools.islice``.
    """
    tick = 1.0 / sample_rate
    time = start_time
    while True:
        time += tick
        value = source.sample_mono(time, fmt)
        if value is None:
            return
        yield value


def iter_frames(
    source: "SignalSource",
    sample_rate: int,
    fmt: SampleFormat,
    channels: int = 1,
    start_time: float = 0.0,
) -> Iterator[Frame]:
    """Like :func:`iter_mono` but yields ``channels``-wide frames."""
    tick = 1.0 / sample_rate
    time = start_time
    while True:
        time += tick
        frame = source.sample(time, fmt, channels)
        if frame is None:
            return
        yield frame


class SignalSource(abc.ABC):
    """Base class for anything that maps a time in seconds to a sample."""

    name: str = "signal_source"

    @abc.abstractmethod
    def sample_mono(self, time: float, fmt: SampleFormat) -> Optional[int]:
        """Return the sample at ``time``, or ``None`` once exhausted."""

    def sample(self, time: float, fmt: SampleFormat, channels: int = 1) -> Optional[Frame]:
        """Return the mono sample copied across ``channels``."""
        value = self.sample_mono(time, fmt)
        if value is None:
            return None
        return (value,) * channels

    def iter_mono(self, sample_rate: int, fmt: SampleFormat, start_time: float = 0.0) -> Iterator[int]:
        return iter_mono(self, sample_rate, fmt, start_time)

    def iter(
        self,
        sample_rate: int,
        fmt: SampleFormat,
        channels: int = 1,
        start_time: float = 0.0,
    ) -> Iterator[Frame]:
        return iter_frames(self, sample_rate, fmt, channels, start_time)

    def render(
        self,
        duration: float,
        sample_rate: int,
        fmt: SampleFormat,
        channels: int = 1,
        start_time: float = 0.0,
    ) -> np.ndarray:
        """Materialize ``duration`` seconds of frames into a 2-D array."""
        total = int(duration * sample_rate)
        frames = list(itertools.islice(self.iter(sample_rate, fmt, channels, start_time), total))
        if not frames:
            return np.empty((0, channels), dtype=fmt.dtype)
        return np.array(frames, dtype=fmt.dtype)

    def to_dict(self) -> dict[str, Any]:
        """Serializable representation for configuration export."""
        return {"type": self.__class__.__name__, "name": self.name}
