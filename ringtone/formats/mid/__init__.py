from .generator import MidiGenerator, MidiUtilFile
from .reader import MidiReader

__all__ = ['MidiGenerator', 'MidiReader', 'MidiUtilFile']
