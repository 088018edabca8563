"""
Resolve chord-symbol tokens into an immutable :class:`Chord`.

Resolution runs in a fixed order: root, quality and extension, the
power-chord / implicit-suspension shorthands, then every alteration token
strictly left to right. Order matters: the first mention of a degree claims
its alteration slot, and only the first non-marker token may set the
extension when the symbol did not state one.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType

from chordwheel.chord import Chord, DiminishedMode, Quality, Suspension
from chordwheel.degrees import Degree, DegreeSource
from chordwheel.errors import ConflictingMacroError
from chordwheel.grammar import (
    AlterationToken,
    TokenKind,
    diagnose,
    split_chord_symbol,
    tokenize_alterations,
)
from chordwheel.notes import Note

logger = logging.getLogger(__name__)

# Single-character forms are case-sensitive (M vs m); words are not.
_MAJOR_SYMBOLS = {"M", "Δ"}
_MAJOR_WORDS = {"t", "ma", "maj", "major"}
_MINOR_SYMBOLS = {"m", "-"}
_MINOR_WORDS = {"mi", "min", "minor"}

#: Numerals that can act as an extension when written in alteration position.
TERTIAN_EXTENSIONS = {3, 5, 7, 9, 11, 13}

#: Extension assumed for a bare ``sus`` that sets the extension (Csus = C9sus4).
DEFAULT_SUS_EXTENSION = 9
#: Extension assumed for ``hdim`` when none was written (Chdim = Cm7b5).
DEFAULT_HALF_DIMINISHED_EXTENSION = 7

_MACRO_ALTERATIONS: dict[TokenKind, tuple[str, ...]] = {
    TokenKind.DIMINISHED: ("b3", "b5", "bb7"),
    TokenKind.HALF_DIMINISHED: ("b3", "b5"),
    TokenKind.AUGMENTED: ("#5",),
}
_MACRO_SOURCES: dict[TokenKind, DegreeSource] = {
    TokenKind.DIMINISHED: DegreeSource.DIMINISHED,
    TokenKind.HALF_DIMINISHED: DegreeSource.HALF_DIMINISHED,
    TokenKind.AUGMENTED: DegreeSource.AUGMENTED,
}
# Tokens that never consume the first-token slot for setting the extension.
_MARKER_KINDS = {
    TokenKind.DIMINISHED,
    TokenKind.HALF_DIMINISHED,
    TokenKind.AUGMENTED,
    TokenKind.ALT,
}


def parse_quality(token: str) -> Quality | None:
    """Return the quality a token names, or None if it names none."""
    if not token:
        return Quality.DOMINANT
    if token in _MAJOR_SYMBOLS or token.lower() in _MAJOR_WORDS:
        return Quality.MAJOR
    if token in _MINOR_SYMBOLS or token.lower() in _MINOR_WORDS:
        return Quality.MINOR
    return None


@dataclass
class _ChordDraft:
    """Mutable state of one resolution; never visible outside parse_chord."""

    root: Note
    quality: Quality
    extension: int
    had_explicit_quality_and_extension: bool
    sharp_extension: bool = False
    suspension: Suspension = Suspension.NONE
    diminished: DiminishedMode = DiminishedMode.NONE
    augmented: bool = False
    altered: bool = False
    alterations: dict[int, list[Degree]] = field(default_factory=dict)
    added: list[Degree] = field(default_factory=list)
    removed: list[Degree] = field(default_factory=list)
    first_token_pending: bool = True

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    @property
    def _extension_still_open(self) -> bool:
        return not self.had_explicit_quality_and_extension and self.first_token_pending

    def _set_extension(self, extension: int) -> None:
        self.extension = extension
        self.had_explicit_quality_and_extension = True

    def _suspend(self, numeral: int) -> None:
        if self.suspension is not Suspension.NONE:
            # sus2sus4: the second suspension sounds as an added tone
            self.added.append(Degree(numeral, 0, DegreeSource.ADDITION))
            return
        self.suspension = Suspension(numeral)

    def _is_removed(self, numeral: int) -> bool:
        return any(degree.numeral == numeral for degree in self.removed)

    def _add_alt(self, degree: Degree) -> None:
        numeral = degree.numeral
        alters_chord_tone = (
            numeral % 2 == 1
            and numeral <= self.extension
            and numeral not in self.alterations
            and not self._is_removed(numeral)
            and not (numeral == 3 and self.suspension is not Suspension.NONE)
        )
        if alters_chord_tone:
            self.alterations[numeral] = [degree.tagged(DegreeSource.ALTERATION)]
        else:
            self.added.append(degree.tagged(DegreeSource.ADDITION))

    def _apply_macro(self, kind: TokenKind) -> None:
        if kind is TokenKind.AUGMENTED:
            if self.augmented:
                raise ConflictingMacroError("aug/+ may only appear once in a chord")
            self.augmented = True
        else:
            if self.diminished is not DiminishedMode.NONE:
                raise ConflictingMacroError(
                    f"{kind.value} cannot follow {self.diminished.value}: "
                    "a chord takes at most one of dim/hdim"
                )
            self.diminished = (
                DiminishedMode.FULL if kind is TokenKind.DIMINISHED else DiminishedMode.HALF
            )
            if kind is TokenKind.HALF_DIMINISHED and not self.had_explicit_quality_and_extension:
                self.extension = DEFAULT_HALF_DIMINISHED_EXTENSION

        for text in _MACRO_ALTERATIONS[kind]:
            degree = Degree.parse(text, _MACRO_SOURCES[kind])
            self.alterations.setdefault(degree.numeral, []).append(degree)

    def _apply_sus(self, suffix: str, extension_open: bool) -> None:
        if suffix in ("2", "4"):
            self._suspend(int(suffix))
        elif suffix and extension_open and int(suffix) in TERTIAN_EXTENSIONS:
            self._suspend(4)
            self._set_extension(int(suffix))
        elif suffix:
            self._suspend(4)
            self._add_alt(Degree.parse(suffix))
        elif extension_open:
            self._suspend(4)
            self._set_extension(DEFAULT_SUS_EXTENSION)
        else:
            self._suspend(4)

    def _apply_numeral(self, degree: Degree, extension_open: bool) -> None:
        if (
            extension_open
            and degree.accidental_class == 0
            and degree.numeral in TERTIAN_EXTENSIONS
        ):
            self._set_extension(degree.numeral)
        else:
            self._add_alt(degree)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def apply(self, token: AlterationToken) -> None:
        """Fold one alteration token into the draft."""
        extension_open = self._extension_still_open
        if token.kind not in _MARKER_KINDS:
            self.first_token_pending = False

        if token.kind in _MACRO_ALTERATIONS:
            self._apply_macro(token.kind)
        elif token.kind is TokenKind.ALT:
            self.altered = True
        elif token.kind is TokenKind.ADD:
            self.added.append(Degree.parse(token.argument, DegreeSource.ADDITION))
        elif token.kind is TokenKind.REMOVE:
            self.removed.append(Degree.parse(token.argument, DegreeSource.REMOVED, included=False))
        elif token.kind is TokenKind.SUS:
            self._apply_sus(token.argument, extension_open)
        else:
            self._apply_numeral(Degree.parse(token.argument), extension_open)

        logger.debug("token %r -> extension=%d, open=%s", token.text, self.extension, extension_open)

    def freeze(self) -> Chord:
        alterations = {
            numeral: tuple(self.alterations[numeral]) for numeral in sorted(self.alterations)
        }
        return Chord(
            root=self.root,
            quality=self.quality,
            extension=self.extension,
            suspension=self.suspension,
            diminished=self.diminished,
            augmented=self.augmented,
            alterations=MappingProxyType(alterations),
            added=tuple(self.added),
            removed=tuple(self.removed),
            had_explicit_quality_and_extension=self.had_explicit_quality_and_extension,
            sharp_extension=self.sharp_extension,
            altered=self.altered,
        )


def parse_chord(symbol: str) -> Chord:
    """
    Parse a chord symbol such as ``"Cmaj9hdim11b13"`` into a :class:`Chord`.

    Raises:
        NoteSyntaxError:          The symbol does not start with a root A-G.
        UnrecognizedQualityError: The quality is unknown.
        InvalidAlterationError:   An alteration after a known one is illegal.
        DegreeSyntaxError:        An add/no degree is malformed.
        ConflictingMacroError:    dim/hdim or aug is repeated.
        InternalInconsistencyError: The grammar contradicted itself.
    """
    parts = split_chord_symbol(symbol)
    root = Note.from_name(parts.root + parts.root_accidental)

    quality = parse_quality(parts.quality)
    if quality is None:
        diagnose(parts.remainder)

    extension_token, tail = parts.extension, parts.tail
    if quality is not Quality.MAJOR and extension_token.startswith("#"):
        # Lydian extensions belong to major chords only; elsewhere #11/#15
        # is an ordinary alteration.
        extension_token, tail = "", extension_token + tail

    draft = _ChordDraft(
        root=root,
        quality=quality,
        extension=int(extension_token.lstrip("#")) if extension_token else 5,
        had_explicit_quality_and_extension=bool(parts.quality or extension_token),
        sharp_extension=extension_token.startswith("#"),
    )

    if extension_token == "5" and quality is Quality.DOMINANT:
        draft.removed.append(Degree(3, 0, DegreeSource.REMOVED, included=False))
    elif extension_token in ("2", "4"):
        draft.suspension = Suspension(int(extension_token))
        draft.extension = 5

    for token in tokenize_alterations(tail):
        draft.apply(token)

    chord = draft.freeze()
    logger.debug("parsed %r as %s", symbol, chord.symbol)
    return chord
