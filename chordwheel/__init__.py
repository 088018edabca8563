"""chordwheel: chord-symbol parsing and correctly spelt chord notes."""

__version__ = "0.1.0"

from chordwheel.accidentals import AccidentalMode, ring, to_accidental, to_accidental_class
from chordwheel.chord import Chord, DiminishedMode, Quality, Suspension
from chordwheel.chroma import chord_chroma, closest_chord
from chordwheel.degrees import Degree, DegreeSource
from chordwheel.notes import Note, circle_of_fifths
from chordwheel.resolver import parse_chord

__all__ = [
    "AccidentalMode",
    "Chord",
    "Degree",
    "DegreeSource",
    "DiminishedMode",
    "Note",
    "Quality",
    "Suspension",
    "__version__",
    "chord_chroma",
    "circle_of_fifths",
    "closest_chord",
    "parse_chord",
    "ring",
    "to_accidental",
    "to_accidental_class",
]
