from .parser import RtttlParser
from .generator import RtttlGenerator

__all__ = ['RtttlParser', 'RtttlGenerator']
