"""Note: a spelled pitch (letter + accidental) and interval arithmetic on it."""

from __future__ import annotations

import re
from dataclasses import dataclass

from chordwheel.accidentals import (
    ACCIDENTAL_CLASSES,
    AccidentalMode,
    ring,
    to_accidental,
)
from chordwheel.degrees import Degree
from chordwheel.errors import NoteSyntaxError

# Letter names in diatonic order; index + 1 is the letter's degree above C.
LETTERS = "CDEFGAB"

# Chromatic pitch of each natural, C = 1 ... B = 12.
NATURAL_PITCHES: dict[str, int] = {
    "C": 1,
    "D": 3,
    "E": 5,
    "F": 6,
    "G": 8,
    "A": 10,
    "B": 12,
}

# Accidental each degree (1..7) carries in the major scale built on a natural.
# Any accidental on the tonic itself shifts every degree by the same amount,
# so only the seven naturals are needed.
#
# degrees:        1  2  3  4   5  6  7
SCALE_PATTERNS: dict[str, tuple[int, ...]] = {
    "C": (0, 0, 0, 0, 0, 0, 0),
    "D": (0, 0, 1, 0, 0, 0, 1),
    "E": (0, 1, 1, 0, 0, 1, 1),
    "F": (0, 0, 0, -1, 0, 0, 0),
    "G": (0, 0, 0, 0, 0, 0, 1),
    "A": (0, 0, 1, 0, 0, 1, 1),
    "B": (0, 1, 1, 0, 1, 1, 1),
}

# Pitch -> (letter, accidental class) when sharps / flats are preferred.
_SHARP_SPELLINGS: dict[int, tuple[str, int]] = {
    1: ("C", 0), 2: ("C", 1), 3: ("D", 0), 4: ("D", 1), 5: ("E", 0), 6: ("F", 0),
    7: ("F", 1), 8: ("G", 0), 9: ("G", 1), 10: ("A", 0), 11: ("A", 1), 12: ("B", 0),
}
_FLAT_SPELLINGS: dict[int, tuple[str, int]] = {
    1: ("C", 0), 2: ("D", -1), 3: ("D", 0), 4: ("E", -1), 5: ("E", 0), 6: ("F", 0),
    7: ("G", -1), 8: ("G", 0), 9: ("A", -1), 10: ("A", 0), 11: ("B", -1), 12: ("B", 0),
}
# Meantone spellings of the twelve major-scale tonics, F# for the tritone.
_CONVENTIONAL_SPELLINGS: dict[int, tuple[str, int]] = {
    1: ("C", 0), 2: ("D", -1), 3: ("D", 0), 4: ("E", -1), 5: ("E", 0), 6: ("F", 0),
    7: ("F", 1), 8: ("G", 0), 9: ("A", -1), 10: ("A", 0), 11: ("B", -1), 12: ("B", 0),
}

#: Both F# and Gb sit six fifths from C, so both count as conventional.
CONVENTIONAL_NAMES: frozenset[str] = frozenset(
    ["C", "G", "D", "A", "E", "B", "F#", "Gb", "Db", "Ab", "Eb", "Bb", "F"]
)

_NOTE_NAME_PATTERN = re.compile(r"([A-Ga-g])(.*)")


@dataclass(frozen=True)
class Note:
    """
    A spelled pitch class such as ``C``, ``F#`` or ``Ebb``.

    Attributes:
        pitch_name:       Letter A-G.
        accidental_class: -2 (double flat) .. 2 (double sharp).
    """

    pitch_name: str
    accidental_class: int = 0

    def __post_init__(self) -> None:
        if self.pitch_name not in NATURAL_PITCHES:
            raise NoteSyntaxError(f"Unknown pitch name {self.pitch_name!r}")
        if not -2 <= self.accidental_class <= 2:
            raise ValueError(f"Accidental class out of range (-2..2): {self.accidental_class}")

    # ------------------------------------------------------------------
    # Alternate constructors
    # ------------------------------------------------------------------

    @classmethod
    def from_name(cls, name: str) -> Note:
        """
        Build a note from its name, e.g. ``"c"``, ``"F#"``, ``"Bbb"``, ``"Gx"``.

        Raises:
            NoteSyntaxError: If the letter or accidental is not recognised.
        """
        match = _NOTE_NAME_PATTERN.fullmatch(name.strip())
        if match is None:
            raise NoteSyntaxError(f"{name!r} is not a note name")

        letter, accidental = match.group(1).upper(), match.group(2).lower()
        if accidental not in ACCIDENTAL_CLASSES:
            raise NoteSyntaxError(f"Unknown accidental {accidental!r} in note {name!r}")
        return cls(letter, ACCIDENTAL_CLASSES[accidental])

    @classmethod
    def from_pitch(cls, pitch: int, preference: str = "auto") -> Note:
        """
        Build a note from a chromatic pitch, 1 = C ... 12 = B.

        Args:
            pitch:      Chromatic pitch 1-12.
            preference: "#" or "b" to choose the black-key spelling, or "auto"
                        for the conventional meantone spelling (Db, Eb, F#,
                        Ab, Bb).
        """
        if not 1 <= pitch <= 12:
            raise ValueError(f"Pitch must be between 1 and 12, got {pitch}")

        if preference == "auto":
            table = _CONVENTIONAL_SPELLINGS
        elif preference == "#":
            table = _SHARP_SPELLINGS
        elif preference == "b":
            table = _FLAT_SPELLINGS
        else:
            raise ValueError(f"Preference must be '#', 'b' or 'auto', got {preference!r}")

        letter, accidental_class = table[pitch]
        return cls(letter, accidental_class)

    @classmethod
    def from_letter(cls, letter: str | int, accidental_class: int) -> Note:
        """Build a note from a letter (or diatonic degree 1-7, C = 1) and a class."""
        if isinstance(letter, int):
            if not 1 <= letter <= 7:
                raise ValueError(f"Diatonic degree must be between 1 and 7, got {letter}")
            letter = LETTERS[letter - 1]
        return cls(letter.upper(), accidental_class)

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    @property
    def accidental(self) -> str:
        return to_accidental(self.accidental_class)

    @property
    def pitch(self) -> int:
        """Chromatic pitch 1-12 (C = 1)."""
        return ring(NATURAL_PITCHES[self.pitch_name] + self.accidental_class)

    @property
    def is_conventionally_spelt(self) -> bool:
        return str(self) in CONVENTIONAL_NAMES

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def get_interval(
        self,
        interval: Degree | str,
        accidental_mode: AccidentalMode = AccidentalMode.ALLOW_ENHARMONICS,
    ) -> Note:
        """
        Return the note a generic interval above this one.

        Args:
            interval:        Degree or degree string such as ``"#4"``, ``"9"``,
                             ``"b13"``. Numbers wrap: a 9th has the letter of a
                             2nd.
            accidental_mode: Spelling limit. A result that breaks it is
                             re-spelt as the plain sharp (or, for a lowered
                             result, flat) name of the same pitch.

        Raises:
            DegreeSyntaxError: If ``interval`` is a malformed degree string.
        """
        degree = interval if isinstance(interval, Degree) else Degree.parse(interval)

        letter_degree = LETTERS.index(self.pitch_name) + 1
        letter = LETTERS[ring(letter_degree + degree.numeral - 1, 7) - 1]

        accidental_class = (
            self.accidental_class
            + SCALE_PATTERNS[self.pitch_name][ring(degree.numeral, 7) - 1]
            + degree.accidental_class
        )

        if _breaks_mode(letter, accidental_class, accidental_mode):
            pitch = ring(NATURAL_PITCHES[letter] + accidental_class)
            return Note.from_pitch(pitch, "b" if accidental_class < 0 else "#")
        return Note(letter, accidental_class)

    def to_conventional_spelling(self) -> Note:
        """Return the meantone spelling of this pitch (self if already one)."""
        if self.is_conventionally_spelt:
            return self
        return Note.from_pitch(self.pitch, "auto")

    def __str__(self) -> str:
        return f"{self.pitch_name}{self.accidental}"


def _breaks_mode(letter: str, accidental_class: int, mode: AccidentalMode) -> bool:
    if mode is AccidentalMode.ALLOW_DOUBLE_ACCIDENTALS:
        return abs(accidental_class) > 2
    if mode is AccidentalMode.ALLOW_ENHARMONICS:
        return abs(accidental_class) >= 2
    return (
        abs(accidental_class) >= 2
        or (letter in "BE" and accidental_class == 1)
        or (letter in "CF" and accidental_class == -1)
    )


def circle_of_fifths(
    note: Note,
    accidental_mode: AccidentalMode = AccidentalMode.ALLOW_ENHARMONICS,
) -> list[Note]:
    """
    Spell the circle of fifths clockwise from ``note``.

    The root (conventionally spelt) comes first, followed by six fifths
    upward; the remaining five positions are filled with fourths going
    downward from the root, so C yields C G D A E B F# Db Ab Eb Bb F.
    """
    circle: list[Note | None] = [None] * 12

    current = note.to_conventional_spelling()
    for position in range(7):
        circle[position] = current
        current = current.get_interval("5", accidental_mode)

    current = note.to_conventional_spelling()
    for position in range(11, 6, -1):
        current = current.get_interval("4", accidental_mode)
        circle[position] = current

    return [n for n in circle if n is not None]
