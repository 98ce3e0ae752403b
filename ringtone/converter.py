from pathlib import Path
from typing import List, Optional, Tuple
import logging
import sys

from .arguments import setup_parser
from .core.config import MidiConfig
from .core.errors import RtttlError
from .core.types import ToneSequence
from .formats.mid import MidiGenerator, MidiReader
from .formats.rtttl import RtttlParser, RtttlGenerator
from .utils.io import save_text_file, save_midi_file, read_ringtone_file, read_ringtone_lines
from .utils.logger import setup_logger

logger = logging.getLogger(__name__)


def describe_sequence(sequence: ToneSequence, list_tones: bool = False):
    """Logs a one-line summary of a sequence and, optionally, every tone in it."""
    logger.info(
        f"{sequence.name}: {len(sequence.tones)} tones at {sequence.beats_per_minute} bpm, "
        f"{sequence.total_seconds:.2f}s"
    )
    if not list_tones:
        return
    for index, (tone, seconds) in enumerate(zip(sequence.tones, sequence.tone_seconds()), 1):
        logger.info(f"  {index:4d}  {str(tone.pitch):4s} {tone.hz:9.2f} Hz  {seconds:.3f}s")


def parse_ringtones(sources: List[Tuple[str, str]], check: bool = False) -> Tuple[List[ToneSequence], int]:
    """
    Parses each (location, text) pair on its own.

    A ringtone that fails to parse is reported and skipped so the rest of
    a collection still gets processed. Returns the parsed sequences and the
    number of failures.
    """
    sequences = []
    failures = 0
    for location, text in sources:
        try:
            sequence = RtttlParser.parse(text)
        except RtttlError as e:
            logger.error(f"{location}: {type(e).__name__}: {e}")
            failures += 1
            continue

        if check:
            canonical = RtttlGenerator.generate(sequence)
            if canonical == text:
                logger.info(f"{location}: canonical")
            else:
                logger.warning(f"{location}: not canonical, encodes as {canonical}")

        sequences.append(sequence)
    return sequences, failures


def write_outputs(sequences: List[ToneSequence], output_paths: List[str], overwrite: bool,
                  midi_config: MidiConfig) -> bool:
    """Writes every requested output. Returns False if any could not be written."""
    ok = True
    for output_path_str in output_paths:
        output_path = Path(output_path_str)
        to_format = output_path.suffix.lstrip('.').lower()

        if output_path.exists() and not overwrite:
            logger.error(f"Error: Output file '{output_path}' already exists.")
            logger.error("Use the -y or --yes flag to allow overwriting.")
            ok = False
            continue

        if to_format == 'mid':
            if len(sequences) != 1:
                logger.error(f"Error: MIDI output needs exactly one ringtone, got {len(sequences)}.")
                ok = False
                continue
            save_midi_file(MidiGenerator.generate(sequences[0], midi_config), str(output_path))
        else:
            lines = [RtttlGenerator.generate(sequence) for sequence in sequences]
            save_text_file("\n".join(lines) + "\n", str(output_path))
    return ok


def main(argv: Optional[List[str]] = None) -> int:
    parser = setup_parser()
    args = parser.parse_args(argv)

    log_level = logging.DEBUG if args.debug else logging.INFO
    setup_logger(log_level)

    if args.rtttl is not None and args.input:
        parser.error("give either an RTTTL string or -i/--input, not both")

    midi_config = MidiConfig(velocity=args.velocity, program=args.program)
    failures = 0

    try:
        if args.input and Path(args.input).suffix.lower() == '.mid':
            sequences = [MidiReader.parse(args.input, track_number=args.track, config=midi_config)]
        else:
            if args.rtttl is not None:
                sources = [("argument", args.rtttl)]
            elif args.input:
                sources = read_ringtone_file(args.input)
            else:
                sources = read_ringtone_lines(sys.stdin, "stdin")
            sequences, failures = parse_ringtones(sources, check=args.check)
    except (OSError, EOFError, ValueError) as e:
        logger.error(f"An error occurred: {e}", exc_info=args.debug)
        return 1

    for sequence in sequences:
        describe_sequence(sequence, list_tones=args.list)

    try:
        if args.output:
            if not write_outputs(sequences, args.output, args.yes, midi_config):
                return 1
        else:
            for sequence in sequences:
                print(RtttlGenerator.generate(sequence))
    except (OSError, RtttlError) as e:
        logger.error(f"An error occurred: {e}", exc_info=args.debug)
        return 1

    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
