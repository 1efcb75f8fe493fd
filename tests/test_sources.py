import itertools

import numpy as np
import pytest

from chiptone import INT16, UINT8, RandomSource, SawSource, SignalSource, SquareSource, registry
from chiptone.core.registry import _Registry


class Countdown(SignalSource):
    """Finite source that stops after a few samples."""

    name = "countdown"

    def __init__(self, remaining: int) -> None:
        self.remaining = remaining
        self.times = []

    def sample_mono(self, time, fmt):
        if self.remaining == 0:
            return None
        self.remaining -= 1
        self.times.append(time)
        return self.remaining


def test_square_switches_at_half_cycle():
    square = SquareSource(freq=1.0)
    assert square.sample_mono(0.25, INT16) == INT16.min
    assert square.sample_mono(0.75, INT16) == INT16.max
    assert square.sample_mono(0.5, INT16) == INT16.max
    assert square.sample_mono(1.25, INT16) == INT16.min


def test_saw_follows_phase():
    saw = SawSource(freq=2.0)
    assert saw.sample_mono(0.0, INT16) == 0
    assert saw.sample_mono(0.125, INT16) == INT16.from_normalized(0.25)
    assert saw.sample_mono(0.5, INT16) == 0


def test_default_frequency():
    assert SquareSource().freq == 440.0
    assert SawSource().freq == 440.0


def test_random_is_reproducible_with_seed():
    a = list(itertools.islice(RandomSource(seed=7).iter_mono(8000, INT16), 20))
    b = list(itertools.islice(RandomSource(seed=7).iter_mono(8000, INT16), 20))
    assert a == b
    assert all(0 <= value <= INT16.max for value in a)


def test_random_uses_injected_generator():
    rng = np.random.default_rng(3)
    expected = UINT8.from_normalized(np.random.default_rng(3).random())
    assert RandomSource(rng=rng).sample_mono(0.0, UINT8) == expected


def test_rate_adapter_advances_before_sampling():
    source = Countdown(3)
    values = list(source.iter_mono(4, INT16, start_time=1.0))
    assert values == [2, 1, 0]
    assert source.times == pytest.approx([1.25, 1.5, 1.75])


def test_frame_iterator_broadcasts_channels():
    frames = list(itertools.islice(SquareSource(freq=1.0).iter(4, INT16, channels=3), 3))
    assert frames == [(INT16.min,) * 3, (INT16.max,) * 3, (INT16.max,) * 3]


def test_frame_iterator_stops_when_source_exhausts():
    assert len(list(Countdown(5).iter(8000, INT16, channels=2))) == 5


def test_render_materializes_duration():
    data = SawSource(freq=100).render(0.5, 8000, INT16, channels=2)
    assert data.shape == (4000, 2)
    assert data.dtype == INT16.dtype


def test_registry_creates_sources():
    assert {"square", "saw", "random"} <= set(registry.sources())
    source = registry.create_source("square", freq=220.0)
    assert isinstance(source, SquareSource)
    assert source.to_dict() == {"type": "SquareSource", "name": "square", "freq": 220.0}
    with pytest.raises(KeyError):
        registry.create_source("sine")


def test_saw_at_infinite_time_does_not_raise():
    assert SawSource().sample_mono(float("inf"), INT16) == 0
    assert SquareSource().sample_mono(float("inf"), INT16) in (INT16.min, INT16.max)


def test_registry_rejects_name_collision():
    local = _Registry()
    local.register_source(SquareSource)
    local.register_source(SquareSource)

    class OtherSquare(SquareSource):
        pass

    with pytest.raises(ValueError):
        local.register_source(OtherSquare)
    assert local.get("square") is SquareSource
    assert "square" in local
    assert "saw" not in local


def test_registry_get_lists_known_names():
    with pytest.raises(KeyError, match="square"):
        registry.get("theremin")
