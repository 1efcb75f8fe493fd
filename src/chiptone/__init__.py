"""Chiptone - waveform synthesis, mixing and WAV encoding."""

from .core.base import SignalSource, iter_frames, iter_mono
from .core.buffer import AudioBuffer
from .core.registry import registry
from .core.samples import INT16, INT32, UINT8, SampleFormat, get_format
from .scales import Edo, Scale
from .sources.basic import RandomSource, SawSource, SquareSource
from .utils.audio import encode_wav_bytes, read_wav, write_wav

__all__ = [
    "AudioBuffer",
    "SignalSource",
    "iter_frames",
    "iter_mono",
    "registry",
    "SampleFormat",
    "UINT8",
    "INT16",
    "INT32",
    "get_format",
    "Scale",
    "Edo",
    "SquareSource",
    "SawSource",
    "RandomSource",
    "encode_wav_bytes",
    "read_wav",
    "write_wav",
]
