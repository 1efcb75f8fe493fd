import json
import wave

import pytest

from chiptone.cli import main


def test_default_render(tmp_path, capsys):
    path = tmp_path / "default.wav"
    main([str(path), "--duration", "0.1", "--sample-rate", "8000"])

    with wave.open(str(path), "rb") as wf:
        assert wf.getnframes() == 800
        assert wf.getframerate() == 8000
        assert wf.getsampwidth() == 2
    assert "800 frames" in capsys.readouterr().out


def test_render_from_config(tmp_path):
    config = tmp_path / "song.json"
    config.write_text(
        json.dumps(
            {
                "sample_rate": 4000,
                "tracks": [
                    {"name": "square", "note": 36, "duration": 0.25},
                    {"name": "random", "seed": 5, "start": 0.25, "duration": 0.25},
                ],
            }
        )
    )
    path = tmp_path / "song.wav"
    main([str(path), "--config", str(config), "--channels", "2", "--format", "u8"])

    with wave.open(str(path), "rb") as wf:
        assert wf.getnchannels() == 2
        assert wf.getsampwidth() == 1
        assert wf.getnframes() == 2000


def test_bad_config_argument_reports_usage_error(tmp_path, capsys):
    config = tmp_path / "typo.json"
    config.write_text(json.dumps({"tracks": [{"name": "square", "frequency": 300}]}))

    with pytest.raises(SystemExit) as excinfo:
        main([str(tmp_path / "out.wav"), "--config", str(config)])

    assert excinfo.value.code == 2
    assert "frequency" in capsys.readouterr().err
    assert not (tmp_path / "out.wav").exists()


@pytest.mark.parametrize("flag", ["--sample-rate", "--channels"])
def test_explicit_zero_is_rejected(tmp_path, flag):
    with pytest.raises(SystemExit):
        main([str(tmp_path / "out.wav"), flag, "0"])
    assert not (tmp_path / "out.wav").exists()
