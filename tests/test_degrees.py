"""Unit tests for Degree parsing and display."""

import pytest

from chordwheel.degrees import Degree, DegreeSource
from chordwheel.errors import ChordError, DegreeSyntaxError


def test_parse_flat_ninth() -> None:
    degree = Degree.parse("b9")
    assert degree.numeral == 9
    assert degree.accidental_class == -1
    assert degree.source is DegreeSource.CHORD_TONE
    assert degree.included


def test_parse_double_accidentals() -> None:
    assert Degree.parse("bb7").accidental_class == -2
    assert Degree.parse("x4").accidental_class == 2


def test_parse_keeps_source_and_inclusion() -> None:
    degree = Degree.parse("5", DegreeSource.REMOVED, included=False)
    assert degree.source is DegreeSource.REMOVED
    assert not degree.included


@pytest.mark.parametrize("token", ["#b5", "0", "b", "", "9b", "h3"])
def test_malformed_degrees_raise(token: str) -> None:
    with pytest.raises(DegreeSyntaxError):
        Degree.parse(token)


def test_degree_syntax_error_is_a_chord_error() -> None:
    with pytest.raises(ChordError):
        Degree.parse("q7")


def test_str_shows_accidental_and_numeral() -> None:
    assert str(Degree(11, 1)) == "#11"
    assert str(Degree(13, -1)) == "b13"
    assert str(Degree(7, -2)) == "bb7"
    assert str(Degree(3)) == "3"


def test_tagged_returns_relabelled_copy() -> None:
    original = Degree.parse("#5")
    tagged = original.tagged(DegreeSource.AUGMENTED, included=False)
    assert tagged.source is DegreeSource.AUGMENTED
    assert not tagged.included
    assert original.source is DegreeSource.CHORD_TONE


def test_sort_key_orders_by_numeral_then_accidental() -> None:
    degrees = [Degree.parse(t) for t in ["#9", "3", "b9", "b3", "9"]]
    ordered = sorted(degrees, key=lambda d: d.sort_key)
    assert [str(d) for d in ordered] == ["b3", "3", "b9", "9", "#9"]
