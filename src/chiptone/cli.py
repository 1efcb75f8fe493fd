"""Command-line interface for rendering waveform compositions to WAV."""

from __future__ import annotations

import argparse
import itertools
import logging
from pathlib import Path

from . import AudioBuffer, SawSource, SquareSource, get_format
from .config import DEFAULT_SAMPLE_RATE, load_config, render_config

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("output", type=Path, help="Path to the output WAV file")
    parser.add_argument("--duration", type=float, default=1.0, help="Duration in seconds")
    parser.add_argument("--sample-rate", type=int, help=f"Sample rate (default {DEFAULT_SAMPLE_RATE})")
    parser.add_argument("--channels", type=int, help="Number of channels (default 1)")
    parser.add_argument("--format", choices=["u8", "i16", "i32"], help="Sample format (default i16)")
    parser.add_argument("--config", type=Path, help="JSON config describing tracks")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def render_default(args: argparse.Namespace) -> AudioBuffer:
    """Mix a default square and saw wave from the start of the buffer."""
    sample_rate = DEFAULT_SAMPLE_RATE if args.sample_rate is None else args.sample_rate
    channels = 1 if args.channels is None else args.channels
    fmt = get_format(args.format or "i16")
    buffer = AudioBuffer(sample_rate, channels=channels, fmt=fmt)
    count = int(args.duration * sample_rate)
    for source in (SquareSource(), SawSource()):
        buffer.add_at(0, itertools.islice(source.iter(sample_rate, fmt, channels), count))
    return buffer


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.config:
            overrides = {
                key: value
                for key, value in (
                    ("sample_rate", args.sample_rate),
                    ("channels", args.channels),
                    ("format", args.format),
                )
                if value is not None
            }
            buffer = render_config(load_config(args.config, overrides))
        else:
            buffer = render_default(args)
    except ValueError as exc:
        parser.error(str(exc))

    buffer.save(args.output)
    logger.info("Saved %s", buffer)
    print(f"Rendered {len(buffer)} frames to {args.output} ({buffer.duration:.2f}s)")


if __name__ == "__main__":
    main()
