"""Exceptions raised while reading note names and chord symbols."""


class ChordError(ValueError):
    """Base class for every user-input error in a note name or chord symbol."""


class DegreeSyntaxError(ChordError):
    """A degree token such as ``b9`` or ``#11`` has a bad accidental or number."""


class NoteSyntaxError(ChordError):
    """A note name (or chord root) is not a letter A-G with a valid accidental."""


class UnrecognizedQualityError(ChordError):
    """The quality is unknown and nothing after it reads as an alteration."""

    def __init__(self, remainder: str) -> None:
        self.remainder = remainder
        super().__init__(f"{remainder!r} is not a valid chord quality/alteration")


class InvalidAlterationError(ChordError):
    """Some alterations were read before one that is not legal."""

    def __init__(self, remainder: str) -> None:
        self.remainder = remainder
        super().__init__(f"Invalid chord alteration at {remainder!r}")


class ConflictingMacroError(ChordError):
    """dim/hdim seen twice, or aug/+ seen twice."""


class InternalInconsistencyError(AssertionError):
    """
    The grammar contradicted itself.

    Raised when the alteration tokenizer rejects a tail that the structural
    split already accepted, or when error diagnosis finds nothing wrong. This
    is an engine defect, so it derives from AssertionError rather than
    ChordError and is never caught alongside user errors.
    """
