"""Tests for the chordwheel command line, driven through click's CliRunner."""

from click.testing import CliRunner

from chordwheel import __version__
from chordwheel.cli import main


def _run(*args: str):
    return CliRunner().invoke(main, list(args))


def test_version() -> None:
    result = _run("--version")
    assert result.exit_code == 0
    assert __version__ in result.output


def test_parse_prints_degrees_and_notes() -> None:
    result = _run("parse", "Cm7b5")
    assert result.exit_code == 0
    assert result.output.splitlines()[0] == "Cm7(b5)"
    assert "1=C  b3=Eb  b5=Gb  b7=Bb" in result.output


def test_parse_all_shows_excluded_in_parentheses() -> None:
    result = _run("parse", "Csus", "--all")
    assert result.exit_code == 0
    assert "(3=E)" in result.output
    assert "4=F" in result.output


def test_parse_mode_option() -> None:
    assert "bb7=Bbb" in _run("parse", "Cdim7", "--mode", "doubles").output
    assert "bb7=A" in _run("parse", "Cdim7").output


def test_parse_error_exits_non_zero() -> None:
    result = _run("parse", "Cfoo")
    assert result.exit_code == 1
    assert "ERROR" in result.output


def test_parse_rejects_unknown_mode() -> None:
    result = _run("parse", "C", "--mode", "loose")
    assert result.exit_code == 2


def test_circle() -> None:
    result = _run("circle", "C")
    assert result.exit_code == 0
    assert result.output.strip() == "C G D A E B F# Db Ab Eb Bb F"


def test_circle_bad_note() -> None:
    result = _run("circle", "H")
    assert result.exit_code == 1
    assert "ERROR" in result.output


def test_midi_writes_file(tmp_path) -> None:
    path = tmp_path / "ii-V-I.mid"
    result = _run("midi", "Dm7", "G7", "Cmaj7", "--bass", "-o", str(path))
    assert result.exit_code == 0, result.output
    assert "Wrote 3 chord(s)" in result.output
    assert path.read_bytes().startswith(b"MThd")


def test_midi_stops_on_first_bad_symbol(tmp_path) -> None:
    path = tmp_path / "bad.mid"
    result = _run("midi", "Dm7", "Gxyz", "-o", str(path))
    assert result.exit_code == 1
    assert not path.exists()


def test_chroma_prints_profile() -> None:
    result = _run("chroma", "Cm7b5")
    assert result.exit_code == 0
    lines = result.output.splitlines()
    assert lines[0] == "Cm7(b5)"
    assert lines[1].split()[:3] == ["C", "C#", "D"]
    assert lines[2].split() == ["1", "0", "0", "1", "0", "0", "1", "0", "0", "0", "1", "0"]


def test_identify_against_common_chords() -> None:
    result = _run("identify", "G", "B", "D", "F")
    assert result.exit_code == 0
    assert result.output.strip() == "Closest chord: G7"


def test_identify_against_given_candidates() -> None:
    result = _run("identify", "C", "E", "G", "B", "-c", "Am7", "-c", "Cmaj7")
    assert result.exit_code == 0
    assert "Closest chord: Cmaj7" in result.output


def test_identify_bad_note() -> None:
    result = _run("identify", "C", "H")
    assert result.exit_code == 1
    assert "ERROR" in result.output
