"""
Chord-symbol grammar: structural split, alteration tokenizing and diagnosis.

A cleaned chord symbol reads as::

    <root letter><root accidental?><quality?><bare extension?><alterations*>

Stage 1 (:func:`split_chord_symbol`) finds the shortest quality token that
lets everything after it parse; Stage 2 (:func:`tokenize_alterations`) walks
the alteration tail one token at a time; Stage 3 (:func:`diagnose`) explains
what went wrong when the quality token is not a known quality.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import NoReturn

from chordwheel.errors import (
    InternalInconsistencyError,
    InvalidAlterationError,
    NoteSyntaxError,
    UnrecognizedQualityError,
)

logger = logging.getLogger(__name__)

ROOT_LETTERS = "ABCDEFG"
ROOT_ACCIDENTALS = "b#"

#: Bare extensions allowed straight after the quality, longest first.
BARE_EXTENSIONS: tuple[str, ...] = ("#11", "#15", "11", "13", "15", "2", "3", "4", "5", "7", "9")

_DISCARDED_CHARACTERS = re.compile(r"[^\w#+\-()\u00b0\U0001d1a9]|_")
_PARENTHESES = re.compile(r"[()]")


class TokenKind(Enum):
    NUMERAL = "numeral"
    ADD = "add"
    REMOVE = "no"
    SUS = "sus"
    ALT = "alt"
    HALF_DIMINISHED = "hdim"
    DIMINISHED = "dim"
    AUGMENTED = "aug"


@dataclass(frozen=True)
class AlterationToken:
    """
    One token of the alteration tail.

    Attributes:
        kind:     What the token is.
        text:     The exact source text consumed.
        argument: Degree string for NUMERAL/ADD/REMOVE (e.g. ``"b9"``), the
                  numeric suffix for SUS (``""`` when bare), else ``""``.
    """

    kind: TokenKind
    text: str
    argument: str = ""


@dataclass(frozen=True)
class ChordParts:
    """Result of the structural split of a cleaned chord symbol."""

    root: str
    root_accidental: str
    quality: str
    extension: str
    tail: str
    remainder: str  # everything after the root, parentheses kept


@dataclass(frozen=True)
class _Matcher:
    kind: TokenKind
    pattern: re.Pattern[str]
    argument_group: int | None = None


# Tried at every position; the longest match wins and ties go to the
# earlier matcher.
_MATCHERS: tuple[_Matcher, ...] = (
    _Matcher(TokenKind.ADD, re.compile(r"add([b#x]*1?\d)", re.IGNORECASE), 1),
    _Matcher(TokenKind.REMOVE, re.compile(r"no([b#x]*1?\d)", re.IGNORECASE), 1),
    _Matcher(TokenKind.SUS, re.compile(r"sus(13|11|9|7|4|2)?", re.IGNORECASE), 1),
    _Matcher(TokenKind.ALT, re.compile(r"alt", re.IGNORECASE)),
    _Matcher(TokenKind.HALF_DIMINISHED, re.compile(r"hdim|0|\u00f8|\U0001d1a9", re.IGNORECASE)),
    _Matcher(TokenKind.DIMINISHED, re.compile(r"dim|o|\u00b0", re.IGNORECASE)),
    _Matcher(TokenKind.AUGMENTED, re.compile(r"aug|\+", re.IGNORECASE)),
    _Matcher(TokenKind.NUMERAL, re.compile(r"(?:bb|b|#|x)?(?:15|13|11|9|7|6|5|4|3|2)"), 0),
)


# ----------------------------------------------------------------------
# Helpers
# ----------------------------------------------------------------------

def clean_chord_symbol(text: str) -> str:
    """Drop every character other than letters, digits, ``# + - ( )``, ``°`` and ``𝆩``."""
    return _DISCARDED_CHARACTERS.sub("", text)


def _strip_parentheses(text: str) -> str:
    return _PARENTHESES.sub("", text)


def _match_token(text: str, position: int) -> AlterationToken | None:
    best: AlterationToken | None = None
    for matcher in _MATCHERS:
        match = matcher.pattern.match(text, position)
        if match is None:
            continue
        if best is not None and len(match.group(0)) <= len(best.text):
            continue
        argument = ""
        if matcher.argument_group is not None:
            argument = match.group(matcher.argument_group) or ""
        best = AlterationToken(matcher.kind, match.group(0), argument)
    return best


def _scan(text: str) -> tuple[list[AlterationToken], int]:
    """Consume tokens from the front; return them and where scanning stopped."""
    tokens: list[AlterationToken] = []
    position = 0
    while position < len(text):
        token = _match_token(text, position)
        if token is None:
            break
        tokens.append(token)
        position += len(token.text)
    return tokens, position


def _extension_candidates(text: str) -> list[str]:
    return [ext for ext in BARE_EXTENSIONS if text.startswith(ext)] + [""]


# ----------------------------------------------------------------------
# Public API
# ----------------------------------------------------------------------

def split_chord_symbol(symbol: str) -> ChordParts:
    """
    Stage 1: split a chord symbol into root, quality, extension and tail.

    The quality is the shortest token after which an optional bare
    extension and a fully tokenizable tail follow. Because the quality may
    swallow the whole remainder, a split always exists; whether the quality
    is a real one is for the caller to decide.

    Raises:
        NoteSyntaxError: If the symbol does not start with a letter A-G.
    """
    text = clean_chord_symbol(symbol)
    if not text or text[0].upper() not in ROOT_LETTERS:
        raise NoteSyntaxError(f"{symbol!r} does not start with a chord root (A-G)")

    root = text[0].upper()
    root_accidental = text[1] if len(text) > 1 and text[1] in ROOT_ACCIDENTALS else ""
    start = 1 + len(root_accidental)
    remainder = text[start:]

    for quality_end in range(start, len(text) + 1):
        quality = text[start:quality_end]
        rest = text[quality_end:]
        for extension in _extension_candidates(rest):
            tail = _strip_parentheses(rest[len(extension):])
            _, stopped = _scan(tail)
            if stopped == len(tail):
                parts = ChordParts(root, root_accidental, quality, extension, tail, remainder)
                logger.debug("split %r -> %s", symbol, parts)
                return parts

    raise InternalInconsistencyError(f"No structural split found for {symbol!r}")


def tokenize_alterations(tail: str) -> list[AlterationToken]:
    """
    Stage 2: tokenize an alteration tail left to right.

    Raises:
        InternalInconsistencyError: If part of the tail does not tokenize.
            Stage 1 only accepts tails that do, so this is an engine defect.
    """
    tokens, stopped = _scan(tail)
    if stopped != len(tail):
        raise InternalInconsistencyError(
            f"Alteration tail {tail!r} failed to tokenize at {tail[stopped:]!r} "
            "after the structural split accepted it"
        )
    return tokens


def diagnose(remainder: str) -> NoReturn:
    """
    Stage 3: explain an unrecognized quality token. Always raises.

    Characters are skipped one at a time until some legitimate alteration
    token matches. Once one has, the first position that fails to match is
    the invalid alteration.

    Raises:
        UnrecognizedQualityError: Nothing legitimate was found, or only a
            skipped prefix stood in the way.
        InvalidAlterationError:   A legitimate run was followed by junk.
        InternalInconsistencyError: Everything tokenized without skipping,
            which the structural split should have accepted.
    """
    text = _strip_parentheses(remainder)
    position = 0
    skipped = 0
    found_legitimate = False

    while position < len(text):
        token = _match_token(text, position)
        if token is not None:
            found_legitimate = True
            position += len(token.text)
        elif found_legitimate:
            raise InvalidAlterationError(text[position:])
        else:
            position += 1
            skipped = position

    if not found_legitimate:
        raise UnrecognizedQualityError(text)
    if skipped:
        raise UnrecognizedQualityError(text[:skipped])
    raise InternalInconsistencyError(
        f"Diagnosis found nothing wrong with {remainder!r}; chord error detection broke down"
    )
