"""Tuning systems mapping note indices to frequencies."""

from __future__ import annotations

import abc
from dataclasses import dataclass

#: Frequency of note 0 (A0).
BASE_FREQUENCY = 27.5


class Scale(abc.ABC):
    @abc.abstractmethod
    def to_freq(self, note: int) -> float:
        """Frequency in Hertz of ``note``; note 0 is tuned to 27.5 Hz."""


@dataclass(frozen=True)
class Edo(Scale):
    """Equal division of the octave into ``divisions`` steps."""

    divisions: float = 12.0

    def __post_init__(self) -> None:
        if self.divisions <= 0:
            raise ValueError(f"An octave needs a positive number of divisions, got {self.divisions}")

    @property
    def step(self) -> float:
        return 2.0 ** (1.0 / self.divisions)

    def to_freq(self, note: int) -> float:
        return BASE_FREQUENCY * self.step ** note
