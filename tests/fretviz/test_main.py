from pathlib import Path

import pytest

from fretviz.config import ScaleEntry, init_config, save_config
from fretviz.main import main


def test_scale(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["scale", "A", "min"]) == 0
    assert capsys.readouterr().out == "A C E\n"


def test_scale_flat(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["scale", "C", "7", "--flat"]) == 0
    assert capsys.readouterr().out == "C E G B♭\n"


@pytest.mark.parametrize(
    "argv",
    [
        ["scale", "C", "notAScale"],
        ["scale", "H", "maj"],
        ["grid", "--tuning", "E2", "Z9"],
        ["grid", "--frets", "-1"],
    ],
)
def test_errors_exit_nonzero(argv: list, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(argv) == 1
    assert capsys.readouterr().out == ""


def test_grid(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["grid", "--frets", "2", "--tuning", "E2", "A2"]) == 0
    assert capsys.readouterr().out.splitlines() == [
        "    A2   A♯2    B2",
        "    E2    F2   F♯2",
        "     0     1     2",
    ]


def test_grid_from_config(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "config.json"
    config = init_config(fret_count=2).with_scale(ScaleEntry("maj", "F", "red"))
    save_config(config, path)
    assert main(["grid", "--config", str(path), "--tuning", "E2", "--flat"]) == 0
    assert capsys.readouterr().out.splitlines() == [
        "    E2  [F2]   G♭2",
        "     0     1     2",
    ]


def test_analyze(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["analyze", "C4", "E4", "G4"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "Key: C major (signature: none)"
    assert "Chord: C major I" in lines
    assert "Harmonic tension: 3.5" in lines
    assert lines[-1] == "- Key detected: C major"


def test_grid_missing_config(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["grid", "--config", str(tmp_path / "missing.json")]) == 1
    assert capsys.readouterr().out == ""


def test_grid_negative_frets_in_config(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "config.json"
    path.write_text('{"numFrets": -3}', encoding="utf-8")
    assert main(["grid", "--config", str(path)]) == 1
    assert capsys.readouterr().out == ""
