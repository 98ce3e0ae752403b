from typing import List
import logging

from ...core.config import (DEFAULT_OCTAVE, DEFAULT_BEATS_PER_MINUTE,
                            CONTROL_OCTAVE, CONTROL_DURATION, CONTROL_BEATS_PER_MINUTE)
from ...core.errors import EncoderStateError
from ...core.types import Duration, Note, Tone, ToneSequence, DEFAULT_DURATION

logger = logging.getLogger(__name__)


class RtttlGenerator:
    """
    Encodes ToneSequence objects as RTTTL text, leaving out every field that
    matches a default so that parsed canonical strings come back unchanged.
    """

    @staticmethod
    def generate(sequence: ToneSequence) -> str:
        """
        Converts a ToneSequence into an RTTTL string.

        Raises:
            EncoderStateError: If the sequence holds a name, tempo, pitch or
                duration that RTTTL cannot spell. Sequences built by the
                parser never do.
        """
        if ':' in sequence.name:
            raise EncoderStateError("Name cannot contain ':'", fragment=sequence.name)
        if not isinstance(sequence.beats_per_minute, int):
            raise EncoderStateError("Beats per minute must be an integer", fragment=str(sequence.beats_per_minute))

        rtttl_string = ":".join([
            sequence.name,
            RtttlGenerator._control_section(sequence),
            RtttlGenerator._tone_section(sequence),
        ])
        logger.debug(f"Encoded '{sequence.name}' with {len(sequence.tones)} tones")
        return rtttl_string

    @staticmethod
    def _control_section(sequence: ToneSequence) -> str:
        # Compared with the library defaults, not with whatever the text originally said
        pairs: List[str] = []
        if sequence.default_octave != DEFAULT_OCTAVE:
            pairs.append(f"{CONTROL_OCTAVE}={sequence.default_octave}")
        if sequence.default_duration is not DEFAULT_DURATION:
            pairs.append(f"{CONTROL_DURATION}={sequence.default_duration.denominator}")
        if sequence.beats_per_minute != DEFAULT_BEATS_PER_MINUTE:
            pairs.append(f"{CONTROL_BEATS_PER_MINUTE}={sequence.beats_per_minute}")
        return ",".join(pairs)

    @staticmethod
    def _tone_section(sequence: ToneSequence) -> str:
        return ",".join(RtttlGenerator._tone_to_rtttl(tone, sequence, index)
                        for index, tone in enumerate(sequence.tones))

    @staticmethod
    def _tone_to_rtttl(tone: Tone, sequence: ToneSequence, index: int) -> str:
        """Spells one tone as [duration]pitch[.][octave], e.g. 8c#.5"""
        duration = tone.duration
        if not isinstance(duration, Duration):
            raise EncoderStateError(
                f"Tone {index} has a duration with no RTTTL denominator", fragment=repr(duration))
        if not (tone.is_rest or isinstance(tone.pitch, Note)):
            raise EncoderStateError(f"Tone {index} is neither a note nor a rest", fragment=repr(tone.pitch))

        token = ""
        if duration.denominator != sequence.default_duration.denominator:
            token += str(duration.denominator)

        token += str(tone.pitch) if tone.is_rest else tone.pitch.note_name.lower()

        if duration.dotted:
            token += "."

        if not tone.is_rest and tone.pitch.octave != sequence.default_octave:
            token += str(tone.pitch.octave)

        return token
