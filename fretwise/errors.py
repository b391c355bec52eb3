"""Exception types raised by the Fretwise engine."""


class FretwiseError(ValueError):
    """Base class for all engine errors."""


class FormatError(FretwiseError):
    """Raised when a pitch string cannot be parsed."""


class InvalidPitchError(FretwiseError):
    """Raised when a Pitch is built from an invalid letter, accidental or octave."""


class PitchLookupError(FretwiseError, LookupError):
    """Raised when a pitch cannot be found in the chromatic table.

    This signals a broken invariant upstream, not bad user input.
    """
