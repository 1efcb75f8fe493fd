"""JSON render configurations: which sources go where in the buffer."""

from __future__ import annotations

import itertools
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional

from .core.buffer import AudioBuffer
from .core.registry import registry
from .core.samples import SampleFormat, get_format
from .scales import Edo

logger = logging.getLogger(__name__)

DEFAULT_SAMPLE_RATE = 44100
MODES = ("add", "write")


@dataclass
class TrackConfig:
    """One source placed in the buffer."""

    name: str
    start: float = 0.0
    duration: float = 1.0
    mode: str = "add"
    params: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TrackConfig":
        payload = dict(data)
        name = payload.pop("name", payload.pop("type", None))
        if not name:
            raise ValueError("Track configuration missing 'name'")
        mode = payload.pop("mode", "add")
        if mode not in MODES:
            raise ValueError(f"Unknown track mode '{mode}', expected one of {MODES}")
        start = float(payload.pop("start", 0.0))
        duration = float(payload.pop("duration", 1.0))
        if start < 0 or duration < 0:
            raise ValueError("Track start and duration must not be negative")
        note = payload.pop("note", None)
        edo = payload.pop("edo", 12)
        if note is not None:
            payload["freq"] = Edo(float(edo)).to_freq(int(note))
        return cls(name=name, start=start, duration=duration, mode=mode, params=payload)


@dataclass
class RenderConfig:
    sample_rate: int = DEFAULT_SAMPLE_RATE
    channels: int = 1
    format: str = "i16"
    tracks: List[TrackConfig] = field(default_factory=list)

    @property
    def sample_format(self) -> SampleFormat:
        return get_format(self.format)

    def validate(self) -> None:
        if self.sample_rate <= 0:
            raise ValueError(f"Sample rate must be positive, got {self.sample_rate}")
        if self.channels < 1:
            raise ValueError(f"Channel count must be at least 1, got {self.channels}")
        try:
            get_format(self.format)
        except KeyError as exc:
            raise ValueError(str(exc)) from exc

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RenderConfig":
        config = cls(
            sample_rate=int(data.get("sample_rate", DEFAULT_SAMPLE_RATE)),
            channels=int(data.get("channels", 1)),
            format=str(data.get("format", "i16")),
            tracks=[TrackConfig.from_dict(track) for track in data.get("tracks", [])],
        )
        config.validate()
        return config


def load_config(path: Path | str, overrides: Optional[dict[str, Any]] = None) -> RenderConfig:
    data = json.loads(Path(path).read_text())
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a JSON object")
    data.update(overrides or {})
    return RenderConfig.from_dict(data)


def render_config(config: RenderConfig) -> AudioBuffer:
    """Compose a buffer by placing every track in order."""
    fmt = config.sample_format
    buffer = AudioBuffer(config.sample_rate, channels=config.channels, fmt=fmt)
    for track in config.tracks:
        try:
            source = registry.get(track.name)(**track.params)
        except (KeyError, TypeError) as exc:
            raise ValueError(f"Track '{track.name}': {exc}") from exc
        start = int(track.start * config.sample_rate)
        count = int(track.duration * config.sample_rate)
        frames = itertools.islice(source.iter(config.sample_rate, fmt, config.channels), count)
        if track.mode == "write":
            buffer.write_at(start, frames)
        else:
            buffer.add_at(start, frames)
        logger.info("Placed %s at frame %d for %d frames (%s)", track.name, start, count, track.mode)
    return buffer
