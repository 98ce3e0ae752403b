from argparse import ArgumentParser


def setup_parser() -> ArgumentParser:
    """Configures and returns the argument parser for the command-line interface."""
    parser = ArgumentParser(
        description="Parse, check and convert RTTTL ringtones (Ring Tone Text Transfer Language).")

    parser.add_argument(
        'rtttl',
        nargs='?',
        default=None,
        help="An RTTTL string, e.g. 'Beep:d=8,o=5,b=120:c,e,g'. Reads --input or stdin when omitted."
    )
    parser.add_argument('-i', '--input', help='Path to the input file (.mid, or a text file with one RTTTL string per line).')
    parser.add_argument(
        '-o', '--output',
        action='append',
        default=[],
        help='Path to an output file (.mid, or any other extension for RTTTL text). May be given more than once.'
    )
    parser.add_argument(
        '-y', '--yes',
        action='store_true',
        help="Automatically overwrite the output file if it already exists."
    )

    report_group = parser.add_argument_group('Reporting')
    report_group.add_argument(
        '--list',
        action='store_true',
        help="List every tone with its note, frequency and length in seconds."
    )
    report_group.add_argument(
        '--check',
        action='store_true',
        help="Report whether each input is already in canonical form (re-encodes to the same text)."
    )
    report_group.add_argument(
        '--debug',
        action='store_true',
        help="Enable detailed debug logging messages."
    )

    midi_group = parser.add_argument_group('MIDI Options')
    midi_group.add_argument(
        "--track",
        type=int,
        default=None,
        help="The track number (1-based) to read from a multi-track MIDI file. All tracks are merged if not set."
    )
    midi_group.add_argument(
        '--velocity',
        type=int,
        default=100,
        choices=range(1, 128),
        metavar='[1-127]',
        help='MIDI velocity for exported notes (default: 100).'
    )
    midi_group.add_argument(
        '--program',
        type=int,
        default=80,
        choices=range(0, 128),
        metavar='[0-127]',
        help='General MIDI program for exported notes (default: 80, square lead).'
    )

    return parser
