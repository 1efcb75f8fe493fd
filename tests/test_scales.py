import pytest

from chiptone import Edo


def test_note_zero_is_a0():
    assert Edo(12).to_freq(0) == pytest.approx(27.5)


def test_octave_doubles_frequency():
    edo = Edo(12)
    assert edo.to_freq(12) == pytest.approx(55.0)
    assert edo.to_freq(48) == pytest.approx(440.0)


def test_other_divisions():
    assert Edo(19).to_freq(19) == pytest.approx(55.0)
    assert Edo(24).to_freq(-24) == pytest.approx(13.75)


def test_rejects_non_positive_divisions():
    with pytest.raises(ValueError):
        Edo(0)
