"""Degree: one scale-degree token (accidental + number) with its provenance."""

import re
from dataclasses import dataclass, replace
from enum import Enum

from chordwheel.accidentals import ACCIDENTAL_CLASSES, to_accidental
from chordwheel.errors import DegreeSyntaxError

_DEGREE_PATTERN = re.compile(r"(\D*)(\d+)")


class DegreeSource(Enum):
    """Where a degree came from; the value is the label shown to users."""

    CHORD_TONE = "chord tone"
    REMOVED = "removed"
    ALTERATION = "alteration"
    DIMINISHED = "dim"
    HALF_DIMINISHED = "hdim"
    AUGMENTED = "aug"
    ADDITION = "added"
    SUSPENSION = "suspension"
    SUSPENDED_THIRD = "suspended third"


@dataclass(frozen=True)
class Degree:
    """
    A scale degree relative to a chord root, e.g. ``b9`` or ``#11``.

    Attributes:
        numeral:          Degree number, 1 = root. Compound degrees (9, 11, 13,
                          15) are kept as written.
        accidental_class: -2..2, see :mod:`chordwheel.accidentals`.
        source:           Provenance tag used by the verbose listing.
        included:         False for degrees that are listed but do not sound
                          (removed notes, suspended thirds, macro alterations
                          above the extension).
    """

    numeral: int
    accidental_class: int = 0
    source: DegreeSource = DegreeSource.CHORD_TONE
    included: bool = True

    @classmethod
    def parse(
        cls,
        token: str,
        source: DegreeSource = DegreeSource.CHORD_TONE,
        included: bool = True,
    ) -> "Degree":
        """
        Parse ``"[accidental]<number>"`` (e.g. ``"bb7"``, ``"#11"``, ``"9"``).

        Raises:
            DegreeSyntaxError: If the accidental is not one of "", "#", "x",
                               "b", "bb" or the number is not a positive integer.
        """
        match = _DEGREE_PATTERN.fullmatch(token)
        if match is None:
            raise DegreeSyntaxError(f"{token!r} is not a degree (expected e.g. 'b9' or '#11')")

        accidental, digits = match.groups()
        if accidental not in ACCIDENTAL_CLASSES:
            raise DegreeSyntaxError(f"Unknown accidental {accidental!r} in degree {token!r}")

        numeral = int(digits)
        if numeral < 1:
            raise DegreeSyntaxError(f"Degree number must be 1 or more, got {token!r}")

        return cls(numeral, ACCIDENTAL_CLASSES[accidental], source, included)

    @property
    def accidental(self) -> str:
        return to_accidental(self.accidental_class)

    @property
    def sort_key(self) -> tuple[int, int]:
        return self.numeral, self.accidental_class

    def tagged(self, source: DegreeSource, included: bool = True) -> "Degree":
        """Return a copy carrying a different provenance/inclusion."""
        return replace(self, source=source, included=included)

    def __str__(self) -> str:
        return f"{self.accidental}{self.numeral}"
