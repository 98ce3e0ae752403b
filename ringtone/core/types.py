import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, List, Union

from .config import (DEFAULT_OCTAVE, DEFAULT_DURATION_DENOMINATOR, DEFAULT_BEATS_PER_MINUTE,
                     MIN_OCTAVE, MAX_OCTAVE)
from .errors import SemitoneOutOfRange, InvalidDurationError, AlreadyDottedError
from .theory import MIN_SEMITONE, MAX_SEMITONE, hz_from_semitone, semitone_from_hz, round_half_up


class Note(Enum):
    """
    Every pitch the RTTTL grammar can name, C0 through B8.

    Values are (note name, octave, MIDI semitone). Octave 4 holds A = 440 Hz.
    Only sharps are spelled; there are no flat members.
    """
    C0   = ("C",  0,  12)
    CS0  = ("C#", 0,  13)
    D0   = ("D",  0,  14)
    DS0  = ("D#", 0,  15)
    E0   = ("E",  0,  16)
    F0   = ("F",  0,  17)
    FS0  = ("F#", 0,  18)
    G0   = ("G",  0,  19)
    GS0  = ("G#", 0,  20)
    A0   = ("A",  0,  21)
    AS0  = ("A#", 0,  22)
    B0   = ("B",  0,  23)

    C1   = ("C",  1,  24)
    CS1  = ("C#", 1,  25)
    D1   = ("D",  1,  26)
    DS1  = ("D#", 1,  27)
    E1   = ("E",  1,  28)
    F1   = ("F",  1,  29)
    FS1  = ("F#", 1,  30)
    G1   = ("G",  1,  31)
    GS1  = ("G#", 1,  32)
    A1   = ("A",  1,  33)
    AS1  = ("A#", 1,  34)
    B1   = ("B",  1,  35)

    C2   = ("C",  2,  36)
    CS2  = ("C#", 2,  37)
    D2   = ("D",  2,  38)
    DS2  = ("D#", 2,  39)
    E2   = ("E",  2,  40)
    F2   = ("F",  2,  41)
    FS2  = ("F#", 2,  42)
    G2   = ("G",  2,  43)
    GS2  = ("G#", 2,  44)
    A2   = ("A",  2,  45)
    AS2  = ("A#", 2,  46)
    B2   = ("B",  2,  47)

    C3   = ("C",  3,  48)
    CS3  = ("C#", 3,  49)
    D3   = ("D",  3,  50)
    DS3  = ("D#", 3,  51)
    E3   = ("E",  3,  52)
    F3   = ("F",  3,  53)
    FS3  = ("F#", 3,  54)
    G3   = ("G",  3,  55)
    GS3  = ("G#", 3,  56)
    A3   = ("A",  3,  57)
    AS3  = ("A#", 3,  58)
    B3   = ("B",  3,  59)

    C4   = ("C",  4,  60)
    CS4  = ("C#", 4,  61)
    D4   = ("D",  4,  62)
    DS4  = ("D#", 4,  63)
    E4   = ("E",  4,  64)
    F4   = ("F",  4,  65)
    FS4  = ("F#", 4,  66)
    G4   = ("G",  4,  67)
    GS4  = ("G#", 4,  68)
    A4   = ("A",  4,  69)
    AS4  = ("A#", 4,  70)
    B4   = ("B",  4,  71)

    C5   = ("C",  5,  72)
    CS5  = ("C#", 5,  73)
    D5   = ("D",  5,  74)
    DS5  = ("D#", 5,  75)
    E5   = ("E",  5,  76)
    F5   = ("F",  5,  77)
    FS5  = ("F#", 5,  78)
    G5   = ("G",  5,  79)
    GS5  = ("G#", 5,  80)
    A5   = ("A",  5,  81)
    AS5  = ("A#", 5,  82)
    B5   = ("B",  5,  83)

    C6   = ("C",  6,  84)
    CS6  = ("C#", 6,  85)
    D6   = ("D",  6,  86)
    DS6  = ("D#", 6,  87)
    E6   = ("E",  6,  88)
    F6   = ("F",  6,  89)
    FS6  = ("F#", 6,  90)
    G6   = ("G",  6,  91)
    GS6  = ("G#", 6,  92)
    A6   = ("A",  6,  93)
    AS6  = ("A#", 6,  94)
    B6   = ("B",  6,  95)

    C7   = ("C",  7,  96)
    CS7  = ("C#", 7,  97)
    D7   = ("D",  7,  98)
    DS7  = ("D#", 7,  99)
    E7   = ("E",  7, 100)
    F7   = ("F",  7, 101)
    FS7  = ("F#", 7, 102)
    G7   = ("G",  7, 103)
    GS7  = ("G#", 7, 104)
    A7   = ("A",  7, 105)
    AS7  = ("A#", 7, 106)
    B7   = ("B",  7, 107)

    C8   = ("C",  8, 108)
    CS8  = ("C#", 8, 109)
    D8   = ("D",  8, 110)
    DS8  = ("D#", 8, 111)
    E8   = ("E",  8, 112)
    F8   = ("F",  8, 113)
    FS8  = ("F#", 8, 114)
    G8   = ("G",  8, 115)
    GS8  = ("G#", 8, 116)
    A8   = ("A",  8, 117)
    AS8  = ("A#", 8, 118)
    B8   = ("B",  8, 119)

    def __init__(self, note_name: str, octave: int, semitone: int):
        self.note_name = note_name
        self.octave = octave
        self.semitone = semitone
        self.hz = hz_from_semitone(semitone)

    @property
    def is_sharp(self) -> bool:
        return len(self.note_name) > 1

    def __str__(self) -> str:
        """Returns the note as a string, e.g., 'C#4'."""
        return f"{self.note_name}{self.octave}"

    @classmethod
    def by_name(cls, name: str) -> Optional["Note"]:
        """
        Finds a note by its uppercase name and octave (e.g., "C#4").

        Returns None rather than raising so callers can tell a note from a
        rest or from garbage without exception handling.
        """
        return _NOTES_BY_NAME.get(name)

    @classmethod
    def by_semitone(cls, semitone: int) -> "Note":
        """
        Returns the note for a MIDI semitone.

        Raises:
            SemitoneOutOfRange: If the semitone is outside C0..B8 (12..119).
        """
        if not (MIN_SEMITONE <= semitone <= MAX_SEMITONE):
            raise SemitoneOutOfRange(
                f"Semitone must be between {MIN_SEMITONE} and {MAX_SEMITONE}", fragment=str(semitone))
        return _NOTES_BY_SEMITONE[semitone]

    @classmethod
    def nearest(cls, hz: float) -> "Note":
        """
        Returns the note closest to the given frequency, clamped to C0..B8.

        Exactly halfway between two semitones resolves to the upper one.
        NaN and frequencies <= 0 give C0; infinity gives B8.
        """
        if math.isnan(hz) or hz <= 0:
            return _NOTES_BY_SEMITONE[MIN_SEMITONE]
        if math.isinf(hz):
            return _NOTES_BY_SEMITONE[MAX_SEMITONE]
        semitone = round_half_up(semitone_from_hz(hz))
        semitone = max(MIN_SEMITONE, min(MAX_SEMITONE, semitone))
        return _NOTES_BY_SEMITONE[semitone]


_NOTES_BY_NAME = {str(note): note for note in Note}
_NOTES_BY_SEMITONE = {note.semitone: note for note in Note}


class Duration(Enum):
    """
    How long a note or rest is held.

    Values are (beats, denominator, dotted) where beats are counted in quarter
    notes and the denominator is the number written in RTTTL (4 = quarter).
    """
    WHOLE                = (4.0, 1, False)
    DOTTED_WHOLE         = (6.0, 1, True)
    HALF                 = (2.0, 2, False)
    DOTTED_HALF          = (3.0, 2, True)
    QUARTER              = (1.0, 4, False)
    DOTTED_QUARTER       = (1.5, 4, True)
    EIGHTH               = (0.5, 8, False)
    DOTTED_EIGHTH        = (0.75, 8, True)
    SIXTEENTH            = (0.25, 16, False)
    DOTTED_SIXTEENTH     = (0.375, 16, True)
    THIRTY_SECOND        = (0.125, 32, False)
    DOTTED_THIRTY_SECOND = (0.1875, 32, True)

    def __init__(self, beats: float, denominator: int, dotted: bool):
        self.beats = beats
        self.denominator = denominator
        self.dotted = dotted

    @classmethod
    def from_denominator(cls, denominator: int) -> "Duration":
        """
        Returns the undotted duration written as `denominator` in RTTTL.

        Raises:
            InvalidDurationError: If denominator is not 1, 2, 4, 8, 16 or 32.
        """
        duration = _UNDOTTED_BY_DENOMINATOR.get(denominator)
        if duration is None or isinstance(denominator, bool):
            raise InvalidDurationError(
                "Duration must be one of 1, 2, 4, 8, 16, or 32", fragment=str(denominator))
        return duration

    @classmethod
    def closest(cls, beats: float) -> "Duration":
        """Quantizes a length in beats to the nearest table entry, preferring the longer one on ties."""
        longest_first = sorted(cls, key=lambda d: d.beats, reverse=True)
        return min(longest_first, key=lambda d: abs(d.beats - beats))

    def as_dotted(self) -> "Duration":
        """
        Returns this duration extended by half its length.

        Raises:
            AlreadyDottedError: If this duration is already dotted.
        """
        if self.dotted:
            raise AlreadyDottedError("Duration is already dotted", fragment=self.name)
        return _DOTTED_BY_DENOMINATOR[self.denominator]

    def seconds_at(self, beats_per_minute: float) -> float:
        """Returns how many seconds this duration lasts at the given tempo (quarter note beats)."""
        if beats_per_minute <= 0:
            raise ValueError(f"Beats per minute must be > 0, got {beats_per_minute}")
        return self.beats * 60.0 / beats_per_minute


_UNDOTTED_BY_DENOMINATOR = {d.denominator: d for d in Duration if not d.dotted}
_DOTTED_BY_DENOMINATOR = {d.denominator: d for d in Duration if d.dotted}

DEFAULT_DURATION = Duration.from_denominator(DEFAULT_DURATION_DENOMINATOR)


class Rest(Enum):
    """The pitch of a silent tone. RTTTL spells it 'p' (pause)."""
    REST = "p"

    def __str__(self) -> str:
        return self.value


REST = Rest.REST


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


Pitch = Union[Note, Rest]


@dataclass(frozen=True)
class Tone:
    """A single note or rest held for one duration."""
    pitch: Pitch
    duration: Duration

    @classmethod
    def rest(cls, duration: Duration) -> "Tone":
        return cls(REST, duration)

    @property
    def is_rest(self) -> bool:
        return self.pitch is REST

    @property
    def note(self) -> Optional[Note]:
        return None if self.is_rest else self.pitch

    @property
    def hz(self) -> float:
        # Rests have no frequency; players treat 0 Hz as silence
        return 0.0 if self.is_rest else self.pitch.hz

    def seconds_at(self, beats_per_minute: float) -> float:
        return self.duration.seconds_at(beats_per_minute)


@dataclass(frozen=True)
class ToneSequence:
    """
    A parsed ringtone: a name, its tones in playback order, and the defaults
    an encoder may leave out of the text.

    The defaults describe the whole sequence; they do not change how tones
    that were already resolved sound.
    """
    name: str
    tones: Tuple[Tone, ...] = ()
    default_octave: int = DEFAULT_OCTAVE
    default_duration: Duration = DEFAULT_DURATION
    beats_per_minute: int = DEFAULT_BEATS_PER_MINUTE

    def __post_init__(self):
        if not isinstance(self.name, str):
            raise ValueError("name must be a string")
        if self.tones is None:
            raise ValueError("tones cannot be None")
        object.__setattr__(self, 'tones', tuple(self.tones))
        if not _is_int(self.default_octave) or not (MIN_OCTAVE <= self.default_octave <= MAX_OCTAVE):
            raise ValueError(f"octave must be between {MIN_OCTAVE}-{MAX_OCTAVE}, inclusive.")
        if not isinstance(self.default_duration, Duration) or self.default_duration.dotted:
            raise ValueError("default duration must be an undotted 1, 2, 4, 8, 16 or 32.")
        if not _is_int(self.beats_per_minute) or self.beats_per_minute <= 0:
            raise ValueError("beats per minute must be an integer > 0.")

    @property
    def seconds_per_beat(self) -> float:
        return 60.0 / self.beats_per_minute

    def tone_seconds(self) -> List[float]:
        """Returns the length of each tone in seconds at this sequence's tempo."""
        return [tone.seconds_at(self.beats_per_minute) for tone in self.tones]

    @property
    def total_seconds(self) -> float:
        return sum(self.tone_seconds())
