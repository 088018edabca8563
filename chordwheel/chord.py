"""Chord: the immutable harmonic description of a parsed chord symbol."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from functools import cached_property
from types import MappingProxyType
from typing import Mapping

from chordwheel.accidentals import AccidentalMode
from chordwheel.degrees import Degree, DegreeSource
from chordwheel.notes import Note


class Quality(Enum):
    MAJOR = "maj"
    DOMINANT = ""
    MINOR = "m"


class Suspension(Enum):
    NONE = 0
    TWO = 2
    FOUR = 4


class DiminishedMode(Enum):
    NONE = ""
    HALF = "hdim"
    FULL = "dim"


def _empty_alterations() -> Mapping[int, tuple[Degree, ...]]:
    return MappingProxyType({})


@dataclass(frozen=True)
class Chord:
    """
    A chord built from a symbol such as ``Cm7b5`` or ``Csus+``.

    Instances are created by :func:`chordwheel.resolver.parse_chord` (or
    :meth:`Chord.parse`) and never change afterwards. The sounding and
    excluded degrees are derived once, on first access of :attr:`degrees`.

    Attributes:
        root:           Root note as spelt in the symbol.
        quality:        Major, dominant or minor; decides the third and seventh.
        extension:      Top of the tertian stack 1, 3, 5, ... (5 for a triad).
        suspension:     Degree replacing the third, if any.
        diminished:     Which diminished macro was applied.
        augmented:      True when aug/+ was applied.
        alterations:    Degree number -> alterations of that chord tone, in
                        the order they were written. Macro alterations may
                        sit above the extension.
        added:          Free additions, always sounding.
        removed:        Degrees omitted with ``no`` (or by a power chord).
        had_explicit_quality_and_extension:
                        False while neither a quality nor an extension has
                        been written; a leading numeral or ``sus`` may then
                        still set the extension.
        sharp_extension: Major chord written with a ``#11``/``#15`` extension.
        altered:        The ``alt`` marker was present.
    """

    root: Note
    quality: Quality = Quality.DOMINANT
    extension: int = 5
    suspension: Suspension = Suspension.NONE
    diminished: DiminishedMode = DiminishedMode.NONE
    augmented: bool = False
    alterations: Mapping[int, tuple[Degree, ...]] = field(
        default_factory=_empty_alterations, hash=False
    )
    added: tuple[Degree, ...] = ()
    removed: tuple[Degree, ...] = ()
    had_explicit_quality_and_extension: bool = False
    sharp_extension: bool = False
    altered: bool = False

    @classmethod
    def parse(cls, symbol: str) -> Chord:
        """Parse a chord symbol; see :func:`chordwheel.resolver.parse_chord`."""
        from chordwheel.resolver import parse_chord

        return parse_chord(symbol)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _chord_tone_accidental(self, numeral: int) -> int:
        if numeral == 3 and self.quality is Quality.MINOR:
            return -1
        if numeral == 7 and self.quality is not Quality.MAJOR:
            return -1
        if numeral == 11 and self.quality is Quality.MAJOR and self.sharp_extension:
            return 1
        return 0

    # ------------------------------------------------------------------
    # Degree view
    # ------------------------------------------------------------------

    @cached_property
    def degrees(self) -> tuple[Degree, ...]:
        """
        Every degree of the chord, sounding or not, ordered by
        (numeral, accidental).

        The tertian stack 1, 3, 5 ... extension is spelt by quality. A
        suspension replaces the third and leaves the bare third behind as an
        excluded marker; removed degrees are excluded; alterations sound only
        up to the extension; additions always sound.
        """
        removed_numerals = {degree.numeral for degree in self.removed}
        result: list[Degree] = []

        for numeral in range(1, self.extension + 1, 2):
            if numeral == 3 and self.suspension is not Suspension.NONE:
                result.append(Degree(self.suspension.value, 0, DegreeSource.SUSPENSION))
                result.append(
                    Degree(3, self._chord_tone_accidental(3), DegreeSource.SUSPENDED_THIRD, False)
                )
                continue
            if numeral in removed_numerals or numeral in self.alterations:
                continue
            result.append(Degree(numeral, self._chord_tone_accidental(numeral)))

        # a suspended third is already listed as excluded
        result.extend(
            degree.tagged(DegreeSource.REMOVED, included=False)
            for degree in self.removed
            if not (degree.numeral == 3 and self.suspension is not Suspension.NONE)
        )

        for numeral, alterations in self.alterations.items():
            sounding = numeral <= self.extension
            result.extend(degree.tagged(degree.source, included=sounding) for degree in alterations)

        result.extend(degree.tagged(DegreeSource.ADDITION) for degree in self.added)

        return tuple(sorted(result, key=lambda degree: degree.sort_key))

    @property
    def included_degrees(self) -> list[Degree]:
        return [degree for degree in self.degrees if degree.included]

    @property
    def excluded_degrees(self) -> list[Degree]:
        return [degree for degree in self.degrees if not degree.included]

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def notes(
        self,
        accidental_mode: AccidentalMode = AccidentalMode.ALLOW_ENHARMONICS,
    ) -> list[tuple[Degree, Note]]:
        """Sounding degrees paired with their notes above the root."""
        return [
            (degree, self.root.get_interval(degree, accidental_mode))
            for degree in self.included_degrees
        ]

    def all_notes(
        self,
        accidental_mode: AccidentalMode = AccidentalMode.ALLOW_ENHARMONICS,
    ) -> list[tuple[Degree, Note]]:
        """Like :meth:`notes` but also lists removed and suspended degrees."""
        return [
            (degree, self.root.get_interval(degree, accidental_mode))
            for degree in self.degrees
        ]

    @property
    def symbol(self) -> str:
        """
        Canonical spelling of the chord.

        Order: root, quality, extension (omitted when 5, except for a
        quality-less half-diminished triad, written ``hdim5``), removals,
        dim/hdim, aug, suspension, alt, explicit alterations in parentheses,
        additions. Parentheses keep an alteration such as ``(#11)`` from
        reading as a root accidental or a bare extension when parsed again.
        """
        parts = [str(self.root), self.quality.value]

        # A bare hdim reads as a seventh, so a half-diminished triad with no
        # quality letter keeps its 5 right after the marker.
        pinned_triad = (
            self.extension == 5
            and self.quality is Quality.DOMINANT
            and self.diminished is DiminishedMode.HALF
        )
        if pinned_triad:
            parts.append(f"{self.diminished.value}5")
        elif self.extension != 5:
            parts.append(f"{'#' if self.sharp_extension else ''}{self.extension}")

        parts.extend(f"no{degree}" for degree in self.removed)
        if not pinned_triad:
            parts.append(self.diminished.value)
        if self.augmented:
            parts.append("aug")
        if self.suspension is not Suspension.NONE:
            parts.append(f"sus{self.suspension.value}")
        if self.altered:
            parts.append("alt")

        explicit = [
            degree
            for numeral in sorted(self.alterations)
            for degree in self.alterations[numeral]
            if degree.source is DegreeSource.ALTERATION
        ]
        if explicit:
            parts.append("(" + "".join(str(degree) for degree in explicit) + ")")

        parts.extend(f"add{degree}" for degree in self.added)
        return "".join(parts)

    def describe(self) -> str:
        """Verbose listing of included and excluded degrees with provenance."""

        def _line(degrees: list[Degree]) -> str:
            if not degrees:
                return "-"
            return ", ".join(f"{degree} ({degree.source.value})" for degree in degrees)

        return "\n".join(
            [
                self.symbol,
                f"  Included: {_line(self.included_degrees)}",
                f"  Excluded: {_line(self.excluded_degrees)}",
            ]
        )

    def __str__(self) -> str:
        return self.symbol
