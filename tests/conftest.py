"""Shared fixtures for the ringtone test suite."""
import io

import pytest

from ringtone import parse


# Canonical strings re-encode to exactly the same text
CANONICAL_RTTTL = [
    "name:o=8,d=2,b=10:c,d,e,f,g,a,b,c1,d1,e1,c.2,d.2,e.2,4c,16d,32e.3",
    "name::c,d,e",
    "Beep:o=5,d=8,b=120:c,e,g,2c6",
    "x:o=4:c#,8p,d#.,2g5,32a#.0",
    "Empty:b=120:",
    "Auld L S:b=101:g5,c,8c,c,e,d,8c,d,8e,8d,c,8c,e,g,2a",
]


@pytest.fixture(params=CANONICAL_RTTTL)
def canonical_rtttl(request):
    """Each canonical RTTTL string in turn."""
    return request.param


@pytest.fixture
def beep():
    """A short sequence with notes, a rest and non-default control values."""
    return parse("Beep:o=5,b=120:c,8d,p,2e")


@pytest.fixture
def midi_buffer():
    """Factory writing a midiutil MIDIFile into an in-memory buffer."""
    def _write(midi_file):
        buffer = io.BytesIO()
        midi_file.writeFile(buffer)
        buffer.seek(0)
        return buffer
    return _write
