from typing import Optional


class RtttlError(ValueError):
    """
    Base class for every structural failure raised while parsing or encoding.

    Carries the offending substring (fragment) and, where known, its offset
    in the original input so callers can point at the problem.
    """

    def __init__(self, message: str, fragment: Optional[str] = None, offset: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.fragment = fragment
        self.offset = offset

    def __str__(self) -> str:
        details = self.message
        if self.fragment is not None:
            details += f" (got '{self.fragment}'"
            if self.offset is not None:
                details += f" at offset {self.offset}"
            details += ")"
        return details


class DelimiterCountError(RtttlError):
    """Input does not split into exactly name:control:tones."""


class MalformedControlPair(RtttlError):
    """A control pair without exactly one '=' or with a multi-character name."""


class UnrecognizedControlName(RtttlError):
    """A control pair name other than o, d or b."""


class InvalidControlValue(RtttlError):
    """A control pair value that is not a usable integer."""


class MalformedNoteToken(RtttlError):
    """A tone token that does not match [duration]pitch[.][octave]."""


class UnknownNote(RtttlError):
    """A well formed pitch and octave with no entry in the note table."""


class InvalidDurationError(RtttlError):
    """A duration denominator other than 1, 2, 4, 8, 16 or 32."""


class AlreadyDottedError(RtttlError):
    """Dotting a duration that is already dotted."""


class SemitoneOutOfRange(RtttlError, IndexError):
    """Semitone outside the C0..B8 note table."""


class EncoderStateError(RtttlError):
    """A tone sequence holding values that have no RTTTL spelling."""
