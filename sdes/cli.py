"""
Command Line Interface

``sdes encrypt`` and ``sdes decrypt`` wrap the file codec. The tool only
validates its arguments and turns codec failures into messages and exit
codes.
"""

import argparse
import logging
import sys
from typing import List, Optional

from .config import MAX_ROUNDS, load_params
from .errors import FormatError, InvalidKeyError, KeyScheduleError, StreamReadError
from .file_mode.stream_codec import FileCodec
from .key_schedule.mask_key_schedule import parse_key

logger = logging.getLogger('sdes')

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_FORMAT = 2
EXIT_IO = 3


def _key_arg(text: str) -> int:
    try:
        return parse_key(text)
    except InvalidKeyError as e:
        raise argparse.ArgumentTypeError(str(e))


def _rounds_arg(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number of rounds {text!r}")
    if not 1 <= value <= MAX_ROUNDS:
        raise argparse.ArgumentTypeError(f"invalid number of rounds (must be 1 - {MAX_ROUNDS})")
    return value


def build_parser(default_rounds: int) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='sdes',
        description='Encrypt or decrypt files with Simplified DES.',
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='log debug detail')
    subparsers = parser.add_subparsers(dest='command', required=True)

    for name, summary in (('encrypt', 'encrypt a file'), ('decrypt', 'decrypt a file')):
        sub = subparsers.add_parser(name, help=summary)
        sub.add_argument('-o', '--output', required=True, help='output file')
        sub.add_argument('-k', '--key', required=True, type=_key_arg,
                         help='9-bit key in hex, 0x0 - 0x1FF')
        sub.add_argument('-n', '--rounds', type=_rounds_arg, default=default_rounds,
                         help=f'number of rounds, 1 - {MAX_ROUNDS} (default: {default_rounds})')
        sub.add_argument('input', help='input file')

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    try:
        params = load_params()
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_USAGE

    parser = build_parser(params['num_rounds'])
    try:
        args = parser.parse_args(argv)
    except SystemExit as e:
        return EXIT_OK if e.code == 0 else EXIT_USAGE

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format='%(levelname)s: %(message)s')

    title = 'Encryptor' if args.command == 'encrypt' else 'Decryptor'
    logger.info("Simplified DES %s", title)
    logger.info("\tOutput File: %s", args.output)
    logger.info("\tKey: 0x%X", args.key)
    logger.info("\tNumber of rounds: %d", args.rounds)

    try:
        codec = FileCodec(args.key, args.rounds, params=params)
        if args.command == 'encrypt':
            codec.encrypt_file(args.input, args.output)
        else:
            codec.decrypt_file(args.input, args.output)
    except (InvalidKeyError, KeyScheduleError) as e:
        logger.error("%s", e)
        return EXIT_USAGE
    except FormatError as e:
        logger.error("%s", e)
        return EXIT_FORMAT
    except StreamReadError as e:
        logger.error("Error reading file: %s", e)
        return EXIT_IO
    except OSError as e:
        logger.error("could not open file %s: %s", e.filename, e.strerror)
        return EXIT_IO

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
