"""Unit tests for MidiExporter."""

from chordwheel.midi_exporter import MidiExporter
from chordwheel.resolver import parse_chord
from chordwheel.voicing_strategy import BassRootVoicer


def _progression():
    chords = [parse_chord(s) for s in ("Dm7", "G7", "Cm7b5")]
    return BassRootVoicer().voice_progression(chords)


def test_defaults() -> None:
    exporter = MidiExporter()
    assert exporter.tempo == MidiExporter.DEFAULT_TEMPO
    assert exporter.velocity == MidiExporter.DEFAULT_VELOCITY


def test_export_writes_standard_midi_file(tmp_path) -> None:
    path = tmp_path / "progression.mid"
    MidiExporter(tempo=96).export(_progression(), str(path))
    data = path.read_bytes()
    assert data.startswith(b"MThd")
    assert b"MTrk" in data


def test_export_carries_track_names_and_chord_symbols(tmp_path) -> None:
    path = tmp_path / "progression.mid"
    MidiExporter().export(_progression(), str(path))
    data = path.read_bytes()
    assert b"Chords" in data
    assert b"Bass" in data
    assert b"Cm7(b5)" in data


def test_export_empty_progression(tmp_path) -> None:
    path = tmp_path / "empty.mid"
    MidiExporter().export([], str(path))
    assert path.read_bytes().startswith(b"MThd")
