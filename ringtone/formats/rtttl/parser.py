from dataclasses import dataclass, field
from typing import Iterator, List, Tuple
import logging
import re

from ...core.config import (DEFAULT_OCTAVE, DEFAULT_BEATS_PER_MINUTE, MIN_OCTAVE, MAX_OCTAVE,
                            CONTROL_OCTAVE, CONTROL_DURATION, CONTROL_BEATS_PER_MINUTE)
from ...core.errors import (DelimiterCountError, MalformedControlPair, UnrecognizedControlName,
                            InvalidControlValue, MalformedNoteToken, UnknownNote,
                            InvalidDurationError, AlreadyDottedError)
from ...core.types import Duration, Note, Tone, ToneSequence, REST, DEFAULT_DURATION

logger = logging.getLogger(__name__)

# [duration] pitch [octave]; the dot is removed before matching
NOTE_PATTERN = re.compile(r"([0-9]{1,2})?([pcdefgab]#?)([0-9])?", re.IGNORECASE)
INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


@dataclass
class _ParseState:
    """Running defaults for one parse. Control pairs in the tone section update them in place."""
    octave: int = DEFAULT_OCTAVE
    duration: Duration = DEFAULT_DURATION
    beats_per_minute: int = DEFAULT_BEATS_PER_MINUTE
    tones: List[Tone] = field(default_factory=list)


class RtttlParser:
    """
    Parses RTTTL strings such as

        Auld L S:d=4,o=6,b=101:g5,c,8c,c,e,d,8c,d,8e,8d,c,8c,e,g,2a

    into ToneSequence objects.

    The grammar is looser than the original Nokia one: names may be longer
    than 10 characters, octaves 0-8 are accepted instead of 4-7, and the
    dotted marker '.' may appear anywhere in a note.
    """

    @staticmethod
    def parse(rtttl_string: str) -> ToneSequence:
        """
        Parses an RTTTL string into a ToneSequence.

        The returned sequence carries the defaults in effect at the end of the
        tone section, so a control pair halfway through the tones becomes the
        default for the whole sequence when it is encoded again.

        Raises:
            RtttlError: A subclass describing the first structural problem found.
        """
        parts = rtttl_string.split(':')
        if len(parts) != 3:
            raise DelimiterCountError(
                f"Expected 2 ':' delimiters but found {len(parts) - 1}", fragment=rtttl_string, offset=0)

        name, control_section, tone_section = parts
        control_start = len(name) + 1
        tone_start = control_start + len(control_section) + 1
        state = _ParseState()

        for token, offset in RtttlParser._tokens(control_section, control_start):
            if token:
                RtttlParser._apply_control_pair(state, token, offset)

        tone_tokens = list(RtttlParser._tokens(tone_section, tone_start))
        # Trailing commas are allowed, an empty slot between tones is not
        while tone_tokens and not tone_tokens[-1][0]:
            tone_tokens.pop()

        for token, offset in tone_tokens:
            if not token:
                raise MalformedNoteToken("Empty note between commas", fragment=token, offset=offset)
            if '=' in token:
                RtttlParser._apply_control_pair(state, token, offset)
            else:
                state.tones.append(RtttlParser._parse_note(state, token, offset))

        logger.debug(f"Parsed '{name}': {len(state.tones)} tones, o={state.octave}, "
                     f"d={state.duration.denominator}, b={state.beats_per_minute}")

        return ToneSequence(
            name=name,
            tones=state.tones,
            default_octave=state.octave,
            default_duration=state.duration,
            beats_per_minute=state.beats_per_minute,
        )

    @staticmethod
    def _tokens(section: str, section_start: int) -> Iterator[Tuple[str, int]]:
        """
        Splits a section on commas and strips every space from each token.

        Yields (token, offset) pairs where offset points into the original
        string. Empty tokens are yielded too; callers decide whether they matter.
        """
        offset = section_start
        for raw in section.split(','):
            token = raw.replace(' ', '')
            yield token, offset + len(raw) - len(raw.lstrip(' '))
            offset += len(raw) + 1

    @staticmethod
    def _apply_control_pair(state: _ParseState, token: str, offset: int):
        """control-pair := control-name "=" control-value"""
        if token.count('=') != 1:
            raise MalformedControlPair("Expected 'name=value' in control pair", fragment=token, offset=offset)

        control_name, value_str = token.split('=')
        if len(control_name) != 1:
            raise MalformedControlPair("Control name must be 1 character", fragment=token, offset=offset)

        if not INTEGER_PATTERN.fullmatch(value_str):
            raise InvalidControlValue(
                f"Could not convert value to number for control pair {token}", fragment=token, offset=offset)
        value = int(value_str)

        if control_name == CONTROL_OCTAVE:
            if not (MIN_OCTAVE <= value <= MAX_OCTAVE):
                raise InvalidControlValue(
                    f"Octave must be between {MIN_OCTAVE} and {MAX_OCTAVE}", fragment=token, offset=offset)
            state.octave = value
        elif control_name == CONTROL_DURATION:
            try:
                state.duration = Duration.from_denominator(value)
            except InvalidDurationError as e:
                raise InvalidControlValue(e.message, fragment=token, offset=offset) from e
        elif control_name == CONTROL_BEATS_PER_MINUTE:
            if value <= 0:
                raise InvalidControlValue("Beats per minute must be > 0", fragment=token, offset=offset)
            state.beats_per_minute = value
        else:
            raise UnrecognizedControlName(f"Unrecognized control name: {control_name}", fragment=token, offset=offset)

    @staticmethod
    def _parse_note(state: _ParseState, token: str, offset: int) -> Tone:
        """
        note := [duration] pitch [octave], with an optional '.' anywhere.

        Omitted duration and octave come from the running defaults.
        """
        # Only the first dot is taken out; any other one makes the match fail
        dotted = False
        dot_index = token.find('.')
        body = token
        if dot_index != -1:
            dotted = True
            body = token[:dot_index] + token[dot_index + 1:]

        match = NOTE_PATTERN.fullmatch(body)
        if not match:
            raise MalformedNoteToken(
                "Note pattern does not match [duration]note[special-duration][octave]", fragment=token, offset=offset)
        duration_str, pitch_str, octave_str = match.groups()

        if duration_str is None:
            duration = state.duration
        else:
            try:
                duration = Duration.from_denominator(int(duration_str))
            except InvalidDurationError as e:
                raise InvalidDurationError(e.message, fragment=token, offset=offset) from e

        if dotted:
            try:
                duration = duration.as_dotted()
            except AlreadyDottedError as e:
                raise AlreadyDottedError(e.message, fragment=token, offset=offset) from e

        octave = state.octave if octave_str is None else int(octave_str)

        if pitch_str.lower() == 'p':
            return Tone(REST, duration)

        note_name = f"{pitch_str}{octave}".upper()
        note = Note.by_name(note_name)
        if note is None:
            raise UnknownNote(f"Note not found: {note_name}", fragment=token, offset=offset)
        return Tone(note, duration)
