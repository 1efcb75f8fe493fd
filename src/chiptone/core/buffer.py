"""Growable multi-channel sample buffer with overwrite and mixing."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Iterable

import numpy as np

from .samples import INT16, SampleFormat

logger = logging.getLogger(__name__)

Combine = Callable[[np.ndarray, np.ndarray], np.ndarray]

_MIN_CAPACITY = 1024


class AudioBuffer:
    """Frames of ``channels`` samples at a fixed ``sample_rate``.

    The buffer only grows. New frames are filled with the format's silence
    value. Incoming frames may be sequences of ``channels`` values or a
    single value, which is copied to every channel.
    """

    def __init__(self, sample_rate: int, channels: int = 1, fmt: SampleFormat = INT16) -> None:
        if sample_rate <= 0:
            raise ValueError(f"Sample rate must be positive, got {sample_rate}")
        if channels < 1:
            raise ValueError(f"Channel count must be at least 1, got {channels}")
        self.sample_rate = int(sample_rate)
        self.channels = int(channels)
        self.fmt = fmt
        self._data = fmt.silence(0, self.channels)
        self._length = 0

    # --- Introspection ----------------------------------------------
    def __len__(self) -> int:
        return self._length

    def __getitem__(self, index: int) -> tuple[int, ...]:
        if index < 0:
            index += self._length
        if not 0 <= index < self._length:
            raise IndexError("frame index out of range")
        return tuple(int(v) for v in self._data[index])

    def __repr__(self) -> str:
        return (
            f"AudioBuffer(sample_rate={self.sample_rate}, channels={self.channels}, "
            f"fmt={self.fmt.name}, frames={self._length})"
        )

    @property
    def frames(self) -> np.ndarray:
        """Read-only view of the populated frames, shape ``(len, channels)``."""
        view = self._data[: self._length]
        view.flags.writeable = False
        return view

    @property
    def duration(self) -> float:
        return self._length / self.sample_rate

    @property
    def block_align(self) -> int:
        return self.channels * self.fmt.width

    @property
    def byte_rate(self) -> int:
        return self.sample_rate * self.block_align

    @property
    def byte_size(self) -> int:
        return self._length * self.block_align

    # --- Storage -----------------------------------------------------
    def _reserve(self, length: int) -> None:
        capacity = len(self._data)
        if length <= capacity:
            return
        new_capacity = max(length, capacity * 2, _MIN_CAPACITY)
        grown = self.fmt.silence(new_capacity, self.channels)
        grown[:capacity] = self._data
        self._data = grown
        logger.debug("Grew buffer capacity from %d to %d frames", capacity, new_capacity)

    def _resize(self, length: int) -> None:
        """Extend with silent frames until the buffer holds ``length`` frames."""
        if length <= self._length:
            return
        self._reserve(length)
        self._data[self._length : length] = self.fmt.zero
        self._length = length

    def _coerce(self, frame) -> np.ndarray:
        arr = np.asarray(frame)
        if arr.ndim == 0:
            return np.full(self.channels, int(arr), dtype=np.int64)
        if arr.shape != (self.channels,):
            raise ValueError(f"Expected a frame of {self.channels} channel(s), got shape {arr.shape}")
        return arr.astype(np.int64)

    def _visit(self, start: int, frames: Iterable, combine: Combine) -> int:
        """Combine ``frames`` into the buffer from ``start`` on.

        Pads with silence up to ``start`` and appends silent frames as the
        incoming sequence runs past the end. Returns the number of frames
        consumed.
        """
        if start < 0:
            raise ValueError(f"Start index must not be negative, got {start}")
        self._resize(start)
        index = start
        for frame in frames:
            incoming = self._coerce(frame)
            if index >= self._length:
                self._resize(index + 1)
            self._data[index] = combine(self._data[index], incoming)
            index += 1
        return index - start

    def _overwrite(self, current: np.ndarray, incoming: np.ndarray) -> np.ndarray:
        return np.clip(incoming, self.fmt.min, self.fmt.max)

    def _mix(self, current: np.ndarray, incoming: np.ndarray) -> np.ndarray:
        return self.fmt.saturating_add_frames(current, incoming)

    # --- Mutation ----------------------------------------------------
    def push(self, frame) -> None:
        """Append one frame at the end."""
        self._visit(self._length, (frame,), self._overwrite)

    def extend(self, frames: Iterable) -> None:
        """Append every frame of a finite sequence in order."""
        self._visit(self._length, frames, self._overwrite)

    def write_at(self, start: int, frames: Iterable) -> int:
        """Overwrite frames starting at ``start``.

        ``frames`` may be an unbounded iterator only if it eventually stops;
        otherwise this never returns.
        """
        count = self._visit(start, frames, self._overwrite)
        logger.debug("Wrote %d frames at %d", count, start)
        return count

    def add_at(self, start: int, frames: Iterable) -> int:
        """Mix frames into the buffer from ``start`` with saturating addition."""
        count = self._visit(start, frames, self._mix)
        logger.debug("Mixed %d frames at %d", count, start)
        return count

    def to_array(self) -> np.ndarray:
        return self._data[: self._length].copy()

    def save(self, path: Path | str) -> None:
        """Write the buffer to ``path`` as an uncompressed WAV file."""
        from ..utils.audio import write_wav

        write_wav(path, self)
