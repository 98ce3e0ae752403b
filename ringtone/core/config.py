from dataclasses import dataclass

# Values assumed when an RTTTL string leaves a control pair out.
# The encoder also compares against these when deciding what to omit.
DEFAULT_OCTAVE = 6
DEFAULT_DURATION_DENOMINATOR = 4
DEFAULT_BEATS_PER_MINUTE = 63

MIN_OCTAVE = 0
MAX_OCTAVE = 8

CONTROL_OCTAVE = 'o'
CONTROL_DURATION = 'd'
CONTROL_BEATS_PER_MINUTE = 'b'
CONTROL_NAMES = (CONTROL_OCTAVE, CONTROL_DURATION, CONTROL_BEATS_PER_MINUTE)


@dataclass
class MidiConfig:
    """Holds the tunable parameters for MIDI export and import."""
    # Export
    velocity: int = 100
    channel: int = 0
    program: int = 80  # General MIDI "Lead 1 (square)", the closest thing to a piezo buzzer
    ticks_per_beat: int = 960

    # Import
    # MIDI files without a set_tempo event play at 120 bpm
    default_tempo: float = 120.0
    # Gaps shorter than this (in beats) are treated as articulation, not rests
    min_rest_beats: float = 0.0625
