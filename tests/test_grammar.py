"""Unit tests for the chord-symbol split, tail tokenizer and error diagnosis."""

import pytest

from chordwheel.errors import (
    InternalInconsistencyError,
    InvalidAlterationError,
    NoteSyntaxError,
    UnrecognizedQualityError,
)
from chordwheel.grammar import (
    TokenKind,
    clean_chord_symbol,
    diagnose,
    split_chord_symbol,
    tokenize_alterations,
)


def test_clean_keeps_only_grammar_characters() -> None:
    assert clean_chord_symbol("C maj7 / (b9)") == "Cmaj7(b9)"
    assert clean_chord_symbol("F#m7_b5!") == "F#m7b5"
    assert clean_chord_symbol("C-7+") == "C-7+"
    assert clean_chord_symbol("C°7") == "C°7"


# ── Stage 1 ───────────────────────────────────────────────────────────────────

def test_split_takes_shortest_quality() -> None:
    parts = split_chord_symbol("Cmaj9hdim11b13")
    assert (parts.root, parts.root_accidental) == ("C", "")
    assert parts.quality == "maj"
    assert parts.extension == "9"
    assert parts.tail == "hdim11b13"
    assert parts.remainder == "maj9hdim11b13"


def test_split_leaves_quasi_qualities_in_the_tail() -> None:
    parts = split_chord_symbol("Caug13")
    assert parts.quality == ""
    assert parts.extension == ""
    assert parts.tail == "aug13"


def test_split_prefers_longest_extension() -> None:
    assert split_chord_symbol("C13b9").extension == "13"
    assert split_chord_symbol("Cmaj#11").extension == "#11"


def test_split_root_accidental_is_greedy() -> None:
    parts = split_chord_symbol("C#11")
    assert parts.root_accidental == "#"
    assert parts.extension == "11"


def test_parentheses_keep_alterations_out_of_the_extension() -> None:
    parts = split_chord_symbol("C(#11)")
    assert parts.root_accidental == ""
    assert parts.extension == ""
    assert parts.tail == "#11"


def test_split_accepts_lower_case_root() -> None:
    parts = split_chord_symbol("bbm7")
    assert (parts.root, parts.root_accidental, parts.quality, parts.extension) == (
        "B", "b", "m", "7",
    )


def test_split_swallows_unknown_quality() -> None:
    parts = split_chord_symbol("Cxyz9")
    assert parts.quality == "xyz"
    assert parts.extension == "9"


@pytest.mark.parametrize("symbol", ["", "Hmaj7", "7", "(C)"])
def test_split_requires_a_root(symbol: str) -> None:
    with pytest.raises(NoteSyntaxError):
        split_chord_symbol(symbol)


# ── Stage 2 ───────────────────────────────────────────────────────────────────

def test_tokenize_mixed_tail() -> None:
    tokens = tokenize_alterations("b9#11sus4add13no5alt")
    assert [t.kind for t in tokens] == [
        TokenKind.NUMERAL,
        TokenKind.NUMERAL,
        TokenKind.SUS,
        TokenKind.ADD,
        TokenKind.REMOVE,
        TokenKind.ALT,
    ]
    assert [t.argument for t in tokens] == ["b9", "#11", "4", "13", "5", ""]


def test_tokenize_bare_sus_and_plus() -> None:
    tokens = tokenize_alterations("sus+")
    assert [(t.kind, t.argument) for t in tokens] == [
        (TokenKind.SUS, ""),
        (TokenKind.AUGMENTED, ""),
    ]


def test_tokenize_keywords_are_case_insensitive() -> None:
    tokens = tokenize_alterations("HDIMDimAUG")
    assert [t.kind for t in tokens] == [
        TokenKind.HALF_DIMINISHED,
        TokenKind.DIMINISHED,
        TokenKind.AUGMENTED,
    ]


def test_tokenize_prefers_two_digit_numerals() -> None:
    tokens = tokenize_alterations("b13sus13")
    assert [t.text for t in tokens] == ["b13", "sus13"]


def test_tokenize_empty_tail() -> None:
    assert tokenize_alterations("") == []


def test_tokenize_failure_is_an_internal_error() -> None:
    with pytest.raises(InternalInconsistencyError):
        tokenize_alterations("b9q")


# ── Stage 3 ───────────────────────────────────────────────────────────────────

def test_diagnose_nothing_legitimate() -> None:
    with pytest.raises(UnrecognizedQualityError) as excinfo:
        diagnose("qrs")
    assert excinfo.value.remainder == "qrs"


def test_diagnose_junk_after_alterations() -> None:
    with pytest.raises(InvalidAlterationError) as excinfo:
        diagnose("maj7b5foo")
    assert excinfo.value.remainder == "foo"


def test_diagnose_bad_prefix_before_valid_run() -> None:
    with pytest.raises(UnrecognizedQualityError) as excinfo:
        diagnose("xyz9")
    assert excinfo.value.remainder == "xyz"


def test_diagnose_clean_remainder_is_an_internal_error() -> None:
    with pytest.raises(InternalInconsistencyError):
        diagnose("b9sus4")


def test_add_takes_at_most_two_digits() -> None:
    tokens = tokenize_alterations("add911")
    assert [(t.kind, t.argument) for t in tokens] == [
        (TokenKind.ADD, "9"),
        (TokenKind.NUMERAL, "11"),
    ]


@pytest.mark.parametrize(
    "tail, kind",
    [
        ("o", TokenKind.DIMINISHED),
        ("O", TokenKind.DIMINISHED),
        ("°", TokenKind.DIMINISHED),
        ("0", TokenKind.HALF_DIMINISHED),
        ("ø", TokenKind.HALF_DIMINISHED),
        ("𝆩", TokenKind.HALF_DIMINISHED),
    ],
)
def test_tokenize_diminished_shorthands(tail: str, kind: TokenKind) -> None:
    tokens = tokenize_alterations(tail + "7")
    assert [t.kind for t in tokens] == [kind, TokenKind.NUMERAL]
    assert tokens[0].text == tail


def test_remove_is_not_read_as_diminished() -> None:
    tokens = tokenize_alterations("no5")
    assert [(t.kind, t.argument) for t in tokens] == [(TokenKind.REMOVE, "5")]
