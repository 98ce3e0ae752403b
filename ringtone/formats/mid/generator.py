from typing import Optional

from midiutil import MIDIFile as MidiUtilFile

from ...core.config import MidiConfig
from ...core.types import ToneSequence


class MidiGenerator:
    """
    Generates a MIDIFile object from a ToneSequence.
    """
    @staticmethod
    def generate(sequence: ToneSequence, config: Optional[MidiConfig] = None) -> MidiUtilFile:
        """
        Takes a ToneSequence and converts it into a single-track MIDIFile
        suitable for writing to a file. Rests only move the clock forward.
        """
        if config is None:
            config = MidiConfig()

        midi_file = MidiUtilFile(1, removeDuplicates=False, deinterleave=False,
                                 ticks_per_quarternote=config.ticks_per_beat)

        track = 0
        time = 0
        midi_file.addTrackName(track, time, sequence.name)
        midi_file.addTempo(track, time, sequence.beats_per_minute)
        midi_file.addProgramChange(track, config.channel, time, config.program)

        current_beat = 0.0
        for tone in sequence.tones:
            if not tone.is_rest:
                midi_file.addNote(
                    track=track,
                    channel=config.channel,
                    pitch=tone.note.semitone,
                    time=current_beat,            # Start time in beats
                    duration=tone.duration.beats,  # Duration in beats
                    volume=config.velocity
                )
            current_beat += tone.duration.beats

        return midi_file
