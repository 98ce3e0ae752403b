import math

# MIDI semitones covered by the note table: C0 .. B8
MIN_SEMITONE = 12
MAX_SEMITONE = 119

A4_SEMITONE = 69
A4_HZ = 440.0

# Sharps only, RTTTL has no flat spellings
PITCH_CLASS_NAMES = ('C', 'C#', 'D', 'D#', 'E', 'F', 'F#', 'G', 'G#', 'A', 'A#', 'B')


def semitone_from_hz(hz: float) -> float:
    """
    Converts a frequency in Hertz to a (fractional) MIDI semitone.

    A frequency of 0 maps to negative infinity. Negative frequencies have no
    pitch and raise ValueError.
    """
    if hz < 0:
        raise ValueError(f"Frequency must not be negative: {hz}")
    if hz == 0:
        return float('-inf')
    return A4_SEMITONE + 12 * math.log2(hz / A4_HZ)


def hz_from_semitone(semitone: float) -> float:
    """
    Converts a MIDI semitone (fractional values allowed) to its frequency in Hertz.
    """
    return A4_HZ * (2 ** ((semitone - A4_SEMITONE) / 12))


def round_half_up(value: float) -> int:
    """Rounds to the nearest integer, with .5 always going up (towards +inf)."""
    return math.floor(value + 0.5)


def octave_of(semitone: int) -> int:
    return (semitone // 12) - 1


def pitch_class_of(semitone: int) -> str:
    return PITCH_CLASS_NAMES[semitone % 12]
