"""WAV serialization for :class:`~chiptone.core.buffer.AudioBuffer`."""

from __future__ import annotations

import logging
import struct
import wave
from pathlib import Path

import numpy as np

from ..core.buffer import AudioBuffer
from ..core.samples import format_for_width

logger = logging.getLogger(__name__)

HEADER_SIZE = 44
PCM_FORMAT = 1

_HEADER = struct.Struct("<4sI8sIHHIIHH4sI")
_RIFF_LIMIT = 0xFFFFFFFF - 36


def encode_wav_header(buffer: AudioBuffer) -> bytes:
    """Return the 44-byte RIFF/WAVE header describing ``buffer``."""
    size = buffer.byte_size
    if size > _RIFF_LIMIT:
        raise ValueError(f"Audio data of {size} bytes does not fit in a RIFF container")
    return _HEADER.pack(
        b"RIFF",
        36 + size,
        b"WAVEfmt ",
        16,
        PCM_FORMAT,
        buffer.channels,
        buffer.sample_rate,
        buffer.byte_rate,
        buffer.block_align,
        buffer.fmt.bits,
        b"data",
        size,
    )


def encode_wav_data(buffer: AudioBuffer) -> bytes:
    """Interleaved little-endian sample data, frame by frame."""
    return np.ascontiguousarray(buffer.frames, dtype=buffer.fmt.dtype).tobytes()


def encode_wav_bytes(buffer: AudioBuffer) -> bytes:
    """Return WAV-formatted bytes for an in-memory buffer."""
    return encode_wav_header(buffer) + encode_wav_data(buffer)


def write_wav(path: Path | str, buffer: AudioBuffer) -> None:
    """Write ``buffer`` to ``path``, replacing any existing file.

    I/O errors propagate to the caller. A failed write may leave a partial
    file behind.
    """
    path = Path(path)
    header = encode_wav_header(buffer)
    with path.open("wb") as fh:
        fh.write(header)
        fh.write(encode_wav_data(buffer))
    logger.debug("Saved %d frames (%d bytes of audio) to %s", len(buffer), buffer.byte_size, path)


def read_wav(path: Path | str) -> AudioBuffer:
    """Load an uncompressed PCM WAV file into a new buffer."""
    with wave.open(str(path), "rb") as wf:
        fmt = format_for_width(wf.getsampwidth())
        channels = wf.getnchannels()
        buffer = AudioBuffer(wf.getframerate(), channels=channels, fmt=fmt)
        raw = wf.readframes(wf.getnframes())
    samples = np.frombuffer(raw, dtype=fmt.dtype).reshape(-1, channels)
    buffer.extend(samples)
    return buffer
