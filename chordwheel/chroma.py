"""Pitch-class (chroma) profiles of parsed chords."""

import numpy as np

from chordwheel.accidentals import AccidentalMode
from chordwheel.chord import Chord
from chordwheel.notes import Note
from chordwheel.resolver import parse_chord

# Chromatic pitch class names (index 0 = C)
NOTE_NAMES: list[str] = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]

#: Chord suffixes tried by :func:`common_chords` for every root.
COMMON_SUFFIXES: tuple[str, ...] = (
    "", "m", "7", "maj7", "m7", "6", "m6", "m7b5", "dim", "dim7", "aug", "sus2", "sus4", "9",
)


def chord_chroma(
    chord: Chord,
    accidental_mode: AccidentalMode = AccidentalMode.ALLOW_ENHARMONICS,
) -> np.ndarray:
    """
    Return a 12-element multi-hot vector of the chord's sounding pitch classes.

    Index 0 is C. Excluded degrees (removed notes, suspended thirds, macro
    alterations above the extension) do not contribute.
    """
    return notes_chroma([note for _, note in chord.notes(accidental_mode)])


def notes_chroma(notes: list[Note]) -> np.ndarray:
    """Multi-hot chroma of loose notes, e.g. the pitches of an unnamed chord."""
    vector = np.zeros(12, dtype=np.float32)
    for note in notes:
        vector[note.pitch - 1] = 1.0
    return vector


def common_chords() -> list[Chord]:
    """Every :data:`COMMON_SUFFIXES` chord over the twelve conventionally spelt roots."""
    roots = [Note.from_pitch(pitch, "auto") for pitch in range(1, 13)]
    return [parse_chord(f"{root}{suffix}") for root in roots for suffix in COMMON_SUFFIXES]


def closest_chord(
    target: np.ndarray,
    candidates: list[Chord],
    accidental_mode: AccidentalMode = AccidentalMode.ALLOW_ENHARMONICS,
) -> Chord | None:
    """
    Pick the candidate whose chroma is most similar to ``target``.

    Similarity is the cosine between the two 12-element vectors. Returns
    None when ``target`` carries no energy or there are no candidates.
    """
    target = np.asarray(target, dtype=np.float32)
    target_norm = np.linalg.norm(target)
    if target_norm < 1e-6:
        return None

    best_score = -1.0
    best_chord: Chord | None = None
    for chord in candidates:
        template = chord_chroma(chord, accidental_mode)
        template_norm = np.linalg.norm(template)
        if template_norm < 1e-6:
            continue

        score = float(np.dot(target, template) / (target_norm * template_norm))
        if score > best_score:
            best_score = score
            best_chord = chord

    return best_chord
