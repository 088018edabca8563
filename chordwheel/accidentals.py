"""Modulo-ring helpers and accidental symbol <-> class conversion."""

from enum import Enum

#: Accidental symbol -> numeric class (positive = sharper).
ACCIDENTAL_CLASSES: dict[str, int] = {
    "": 0,
    "#": 1,
    "x": 2,
    "b": -1,
    "bb": -2,
}

_ACCIDENTAL_SYMBOLS: dict[int, str] = {cls: sym for sym, cls in ACCIDENTAL_CLASSES.items()}


class AccidentalMode(Enum):
    """How aggressively interval spelling is simplified."""

    BASIC = "basic"                        # no doubles, no B#/E#/Cb/Fb
    ALLOW_ENHARMONICS = "enharmonics"      # B#/E#/Cb/Fb allowed, no doubles
    ALLOW_DOUBLE_ACCIDENTALS = "doubles"   # anything up to a double sharp/flat


def ring(n: int, bounds: int = 12) -> int:
    """
    Wrap ``n`` onto the one-based range ``[1, bounds]``.

    With bounds=12: 0 -> 12, 1 -> 1, 12 -> 12, 13 -> 1, 14 -> 2.
    """
    return (n - 1) % bounds + 1


def to_accidental_class(symbol: str) -> int:
    """Map "", "#", "x", "b" or "bb" to 0, 1, 2, -1 or -2."""
    try:
        return ACCIDENTAL_CLASSES[symbol]
    except KeyError:
        raise ValueError(f"Unknown accidental {symbol!r}") from None


def to_accidental(accidental_class: int) -> str:
    """Inverse of :func:`to_accidental_class`."""
    try:
        return _ACCIDENTAL_SYMBOLS[accidental_class]
    except KeyError:
        raise ValueError(f"Accidental class out of range (-2..2): {accidental_class}") from None
