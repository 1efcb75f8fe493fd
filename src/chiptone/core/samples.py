"""Sample formats supported by the renderer and the WAV encoder."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

import numpy as np


@dataclass(frozen=True)
class SampleFormat:
    """Numeric contract for one PCM sample representation.

    ``zero`` is the value written for silence, ``min``/``max`` bound the
    representable amplitude. Values are stored as plain integers in the
    format's NumPy dtype, which is always little-endian.
    """

    name: str
    dtype: np.dtype
    zero: int
    min: int
    max: int

    @property
    def width(self) -> int:
        return self.dtype.itemsize

    @property
    def bits(self) -> int:
        return self.width * 8

    def from_normalized(self, x: float) -> int:
        """Scale ``x`` in [0, 1] against ``max``, truncating toward zero.

        Out-of-range input is clipped to the representable range and NaN
        maps to 0.
        """
        scaled = np.nan_to_num(self.max * float(x), nan=0.0)
        return int(np.clip(scaled, self.min, self.max))

    def to_bytes(self, value: int) -> bytes:
        return np.array(value, dtype=self.dtype).tobytes()

    def saturating_add(self, a: int, b: int) -> int:
        return max(self.min, min(self.max, int(a) + int(b)))

    def saturating_add_frames(self, a: np.ndarray, b: np.ndarray) -> np.ndarray:
        total = a.astype(np.int64) + np.asarray(b, dtype=np.int64)
        return np.clip(total, self.min, self.max).astype(self.dtype)

    def silence(self, frames: int, channels: int) -> np.ndarray:
        return np.full((frames, channels), self.zero, dtype=self.dtype)


def _integer_format(name: str, dtype: str, zero: int) -> SampleFormat:
    dt = np.dtype(dtype)
    info = np.iinfo(dt)
    return SampleFormat(name=name, dtype=dt, zero=zero, min=int(info.min), max=int(info.max))


UINT8 = _integer_format("u8", "<u1", 128)
INT16 = _integer_format("i16", "<i2", 0)
INT32 = _integer_format("i32", "<i4", 0)

FORMATS: Dict[str, SampleFormat] = {fmt.name: fmt for fmt in (UINT8, INT16, INT32)}


def get_format(name: str | int | SampleFormat) -> SampleFormat:
    """Resolve a format by short name (``"i16"``) or bit depth (``16``)."""
    if isinstance(name, SampleFormat):
        return name
    key = str(name).lower()
    if key in FORMATS:
        return FORMATS[key]
    for fmt in FORMATS.values():
        if key == str(fmt.bits):
            return fmt
    raise KeyError(f"Unknown sample format '{name}'")


def format_for_width(width: int) -> SampleFormat:
    for fmt in FORMATS.values():
        if fmt.width == width:
            return fmt
    raise ValueError(f"Unsupported sample width: {width} bytes")
