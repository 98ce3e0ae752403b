from .core.errors import (RtttlError, DelimiterCountError, MalformedControlPair, UnrecognizedControlName,
                          InvalidControlValue, MalformedNoteToken, UnknownNote, InvalidDurationError,
                          AlreadyDottedError, SemitoneOutOfRange, EncoderStateError)
from .core.theory import semitone_from_hz, hz_from_semitone, MIN_SEMITONE, MAX_SEMITONE
from .core.types import Note, Duration, Rest, REST, Tone, ToneSequence
from .formats.rtttl import RtttlParser, RtttlGenerator


def parse(rtttl_string: str) -> ToneSequence:
    """Parses an RTTTL string. See RtttlParser.parse."""
    return RtttlParser.parse(rtttl_string)


def encode(sequence: ToneSequence) -> str:
    """Encodes a ToneSequence as RTTTL text. See RtttlGenerator.generate."""
    return RtttlGenerator.generate(sequence)


__all__ = [
    'Note', 'Duration', 'Rest', 'REST', 'Tone', 'ToneSequence',
    'RtttlParser', 'RtttlGenerator', 'parse', 'encode',
    'semitone_from_hz', 'hz_from_semitone', 'MIN_SEMITONE', 'MAX_SEMITONE',
    'RtttlError', 'DelimiterCountError', 'MalformedControlPair', 'UnrecognizedControlName',
    'InvalidControlValue', 'MalformedNoteToken', 'UnknownNote', 'InvalidDurationError',
    'AlreadyDottedError', 'SemitoneOutOfRange', 'EncoderStateError',
]
