from pathlib import Path
from typing import List, TextIO, Tuple
import logging
import re

from midiutil import MIDIFile

logger = logging.getLogger(__name__)

# Lines starting with // or # are comments in ringtone collections
COMMENT_PATTERN = re.compile(r'^\s*(//|#)')


def _ensure_parent(output_path: str):
    directory = Path(output_path).parent
    directory.mkdir(parents=True, exist_ok=True)


def save_text_file(content: str, output_path: str):
    """
    Saves string content to a text file, creating parent directories as needed.

    Raises:
        OSError: If the file cannot be written to the specified path.
    """
    try:
        _ensure_parent(output_path)
        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(content)
        logger.info(f"Successfully saved to {output_path}")
    except OSError:
        logger.error(f"Error: Could not write to file at {output_path}")
        raise


def save_midi_file(midi_object: MIDIFile, output_path: str):
    """
    Saves a MIDIFile object to a binary .mid file.

    Raises:
        OSError: If the file cannot be written to the specified path.
    """
    try:
        _ensure_parent(output_path)
        with open(output_path, 'wb') as output_file:
            midi_object.writeFile(output_file)
        logger.info(f"Successfully saved MIDI file to {output_path}")
    except OSError:
        logger.error(f"Error: Could not write MIDI file at {output_path}")
        raise


def read_ringtone_lines(stream: TextIO, label: str) -> List[Tuple[str, str]]:
    """
    Reads one RTTTL string per line, skipping blank and comment lines.

    Returns (location, text) pairs where location is "label:line_number".
    Only the line ending is removed, since spaces in a name are significant.
    """
    ringtones = []
    for line_number, line in enumerate(stream, 1):
        text = line.rstrip('\r\n')
        if not text.strip() or COMMENT_PATTERN.match(text):
            continue
        ringtones.append((f"{label}:{line_number}", text))
    return ringtones


def read_ringtone_file(file_path: str) -> List[Tuple[str, str]]:
    """
    Reads a text file of RTTTL strings.

    Raises:
        FileNotFoundError: If the file does not exist.
    """
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            return read_ringtone_lines(f, file_path)
    except FileNotFoundError:
        logger.error(f"Error: File not found at {file_path}")
        raise
