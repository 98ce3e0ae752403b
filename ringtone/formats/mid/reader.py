from collections import Counter
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, List, Optional, Union
import logging

import mido

from ...core.config import MidiConfig, DEFAULT_OCTAVE
from ...core.errors import SemitoneOutOfRange
from ...core.types import Duration, Note, Tone, ToneSequence, REST, DEFAULT_DURATION

logger = logging.getLogger(__name__)

PERCUSSION_CHANNEL = 9


@dataclass
class _MidiNote:
    """A sounding note in ticks, before it is quantized into a Tone."""
    pitch: int
    start: int
    end: int


class MidiReader:
    """
    Reads a MIDI file into a ToneSequence.

    RTTTL is monophonic, so overlapping notes are cut: a new note-on ends
    whatever was sounding. Silence between notes becomes rests, and every
    length is snapped to the nearest RTTTL duration.
    """

    @staticmethod
    def parse(midi_source: Union[str, Path, BinaryIO], track_number: Optional[int] = None,
              config: Optional[MidiConfig] = None) -> ToneSequence:
        if config is None:
            config = MidiConfig()

        if isinstance(midi_source, (str, Path)):
            logger.info(f"--- Parsing MIDI file '{midi_source}' ---")
            midi_file = mido.MidiFile(str(midi_source))
            fallback_name = Path(midi_source).stem
        else:
            midi_file = mido.MidiFile(file=midi_source)
            fallback_name = "Untitled"

        if track_number is not None and not (1 <= track_number <= len(midi_file.tracks)):
            raise ValueError(
                f"Invalid track number '{track_number}'. File has {len(midi_file.tracks)} tracks."
            )

        ticks_per_beat = midi_file.ticks_per_beat or 480
        tempo = None
        name = None
        note_events = []

        for index, track in enumerate(midi_file.tracks):
            use_notes = track_number is None or index == track_number - 1
            now = 0
            for message in track:
                now += message.time
                if message.type == 'set_tempo' and tempo is None:
                    tempo = mido.tempo2bpm(message.tempo)
                elif message.type == 'track_name' and name is None and message.name.strip():
                    name = message.name.strip()
                elif use_notes and message.type in ('note_on', 'note_off'):
                    if message.channel != PERCUSSION_CHANNEL:
                        note_events.append((now, message))

        # Stable sort keeps each track's own ordering at equal ticks
        note_events.sort(key=lambda item: item[0])
        notes = MidiReader._monophonic_notes(note_events)
        logger.debug(f"Found {len(notes)} monophonic notes at {ticks_per_beat} ticks per beat")

        tones = MidiReader._notes_to_tones(notes, ticks_per_beat, config)
        if tempo is None:
            tempo = config.default_tempo

        return ToneSequence(
            name=(name or fallback_name).replace(':', ' '),
            tones=tones,
            default_octave=MidiReader._most_common_octave(tones),
            default_duration=MidiReader._most_common_duration(tones),
            beats_per_minute=max(1, round(tempo)),
        )

    @staticmethod
    def _monophonic_notes(note_events) -> List[_MidiNote]:
        notes: List[_MidiNote] = []
        active: Optional[_MidiNote] = None

        for tick, message in note_events:
            is_note_on = message.type == 'note_on' and message.velocity > 0
            if is_note_on:
                if active is not None and tick > active.start:
                    active.end = tick
                    notes.append(active)
                active = _MidiNote(pitch=message.note, start=tick, end=tick)
            elif active is not None and active.pitch == message.note and tick > active.start:
                active.end = tick
                notes.append(active)
                active = None

        return notes

    @staticmethod
    def _notes_to_tones(notes: List[_MidiNote], ticks_per_beat: int, config: MidiConfig) -> List[Tone]:
        tones: List[Tone] = []
        current_beat = 0.0
        longest = max(Duration, key=lambda d: d.beats)

        for midi_note in notes:
            start_beat = midi_note.start / ticks_per_beat
            end_beat = midi_note.end / ticks_per_beat

            gap = start_beat - current_beat
            while gap > longest.beats:
                tones.append(Tone.rest(longest))
                gap -= longest.beats
            if gap >= config.min_rest_beats:
                tones.append(Tone.rest(Duration.closest(gap)))

            try:
                pitch = Note.by_semitone(midi_note.pitch)
            except SemitoneOutOfRange:
                logger.warning(f"MIDI pitch {midi_note.pitch} has no RTTTL note; writing a rest instead.")
                pitch = REST

            tones.append(Tone(pitch, Duration.closest(end_beat - start_beat)))
            current_beat = end_beat

        return tones

    @staticmethod
    def _most_common_octave(tones: List[Tone]) -> int:
        octaves = Counter(tone.note.octave for tone in tones if not tone.is_rest)
        if not octaves:
            return DEFAULT_OCTAVE
        return octaves.most_common(1)[0][0]

    @staticmethod
    def _most_common_duration(tones: List[Tone]) -> Duration:
        denominators = Counter(tone.duration.denominator for tone in tones)
        if not denominators:
            return DEFAULT_DURATION
        return Duration.from_denominator(denominators.most_common(1)[0][0])
