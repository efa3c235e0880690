#!/usr/bin/env python3
"""
Main entry point for Pi Storage
Encodes messages as coordinates inside the digits of mathematical constants
"""

import sys
import os
import argparse
import logging
from dotenv import load_dotenv

from orchestration import OrchestratorFactory
from pistorage.base_codec import AlphanumericRenderer, renderer_for
from pistorage.errors import PiStorageError

# Load environment variables from .env file
load_dotenv()


def build_config():
    """
    Create configuration from environment variables.

    Returns:
        dict: Raw configuration values (None when unset)
    """
    return {
        'PISTORAGE_CONSTANTS': os.getenv('PISTORAGE_CONSTANTS'),
        'PISTORAGE_BASES': os.getenv('PISTORAGE_BASES'),
        'PISTORAGE_SEARCH_LIMIT': os.getenv('PISTORAGE_SEARCH_LIMIT'),
        'PISTORAGE_MAX_WORKERS': os.getenv('PISTORAGE_MAX_WORKERS'),
        'PISTORAGE_MAX_DECODE_DIGITS': os.getenv('PISTORAGE_MAX_DECODE_DIGITS')
    }


def print_header(title):
    print(f"\n{'='*60}")
    print(title)
    print(f"{'='*60}")


def run_encode(orchestrator, message):
    """
    Encode a message and print its coordinates.

    Args:
        orchestrator: StorageOrchestrator instance
        message: Message text (trimmed before encoding)
    """
    message = message.strip()
    encoding = orchestrator.encode(message)
    rendered = orchestrator.render_encoding(encoding)

    print_header(f"ENCODED: {message!r}")
    print(f"{'Constant':20s}: {encoding['constant']}")
    print(f"{'Base':20s}: {encoding['base']}")
    print(f"{'Start':20s}: {encoding['start']} (base {encoding['base']}: {rendered['start']!r})")
    print(f"{'Length':20s}: {encoding['length']} (base {encoding['base']}: {rendered['length']!r})")
    return encoding


def run_decode(orchestrator, constant, base, start, length, rendered=False):
    """
    Decode coordinates and print the message.

    Args:
        orchestrator: StorageOrchestrator instance
        constant: Constant name
        base: Numeral base
        start: Start offset (decimal, or base-rendered text if rendered=True)
        length: Length (decimal, or base-rendered text if rendered=True)
        rendered: Parse start/length in the encoding base instead of decimal
    """
    if rendered:
        parsed = orchestrator.parse_rendered(constant, base, start, length)
        start, length = parsed['start'], parsed['length']
    else:
        try:
            start, length = int(start), int(length)
        except ValueError:
            raise ValueError(f"START and LENGTH must be integers, got {start!r} and {length!r}")

    message = orchestrator.decode(constant, base, start, length)

    print_header(f"DECODED: {constant}/base {base} start={start} length={length}")
    print(message)
    return message


def run_find(orchestrator, digit_text, constant, base):
    """
    Locate a digit string in a constant and print its 1-indexed position.
    """
    result = orchestrator.find_digit_string(digit_text, constant, base)

    print_header(f"FIND: {digit_text!r} in {constant} (base {base})")
    if result['found']:
        print(f"Sequence found at position {result['position']}")
    else:
        limit = orchestrator.search_limit
        print(f"Sequence not found in the first {limit} digits")
    return result


def run_digits(orchestrator, constant, base, count):
    """
    Print the first count fractional digits of a constant.
    """
    digits = orchestrator.digits(constant, base, count)
    renderer = renderer_for(base)
    if isinstance(renderer, AlphanumericRenderer):
        text = ''.join(renderer.render_digit(d) for d in digits)
    else:
        text = ' '.join(str(d) for d in digits)

    print_header(f"DIGITS: {constant} (base {base}, first {count})")
    print(text)
    return digits


def print_cache_stats(orchestrator):
    print_header("CACHE STATISTICS")
    stats = orchestrator.get_cache_stats()
    for key, value in stats.items():
        print(f"{key:30s}: {value}")


def main(argv=None):
    """Main entry point with CLI argument parsing"""
    parser = argparse.ArgumentParser(
        description="Pi Storage: encode messages as coordinates in mathematical constants",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Encode a message
  python3 main.py encode "Hi"

  # Decode coordinates (decimal start/length)
  python3 main.py decode pi 256 1234 2

  # Decode coordinates rendered in the encoding base
  python3 main.py decode pi 16 4D2 2 --rendered

  # Find a digit string in e (1-indexed position)
  python3 main.py find 1828 --constant e --base 10

  # Print the first 50 hexadecimal digits of pi
  python3 main.py digits pi 16 50

Environment (.env):
  PISTORAGE_CONSTANTS, PISTORAGE_BASES, PISTORAGE_SEARCH_LIMIT,
  PISTORAGE_MAX_WORKERS, PISTORAGE_MAX_DECODE_DIGITS, PISTORAGE_LOG_LEVEL
        """
    )

    parser.add_argument(
        '--stats',
        action='store_true',
        help='Print digit cache statistics after the command'
    )

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # Encode command
    encode_parser = subparsers.add_parser('encode', help='Encode a message')
    encode_parser.add_argument('message', help='Message text')

    # Decode command
    decode_parser = subparsers.add_parser('decode', help='Decode coordinates to a message')
    decode_parser.add_argument('constant', help='Constant name (e.g. pi)')
    decode_parser.add_argument('base', type=int, help='Numeral base (2-65536)')
    decode_parser.add_argument('start', help='Start offset')
    decode_parser.add_argument('length', help='Number of code points')
    decode_parser.add_argument(
        '--rendered',
        action='store_true',
        help='START and LENGTH are written in BASE (as printed by encode)'
    )

    # Find command
    find_parser = subparsers.add_parser('find', help='Find a digit string in a constant')
    find_parser.add_argument('digits', help='Digit string (e.g. 1828)')
    find_parser.add_argument('--constant', default='e', help='Constant to search (default: e)')
    find_parser.add_argument('--base', type=int, default=10, help='Digit base (default: 10)')

    # Digits command
    digits_parser = subparsers.add_parser('digits', help='Print fractional digits of a constant')
    digits_parser.add_argument('constant', help='Constant name (e.g. pi)')
    digits_parser.add_argument('base', type=int, help='Numeral base (2-65536)')
    digits_parser.add_argument('count', type=int, help='Number of digits')

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=os.getenv('PISTORAGE_LOG_LEVEL', 'WARNING').upper(),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )

    if not args.command:
        parser.print_help()
        return 0

    try:
        orchestrator = OrchestratorFactory.create_orchestrator(build_config())
    except (ValueError, PiStorageError) as e:
        print(f"\nERROR: Invalid configuration: {e}")
        print("Please check the PISTORAGE_* variables in your .env file (see .env.example)")
        return 1

    try:
        if args.command == 'encode':
            run_encode(orchestrator, args.message)
        elif args.command == 'decode':
            run_decode(orchestrator, args.constant, args.base, args.start, args.length, args.rendered)
        elif args.command == 'find':
            run_find(orchestrator, args.digits, args.constant, args.base)
        elif args.command == 'digits':
            run_digits(orchestrator, args.constant, args.base, args.count)
    except (PiStorageError, ValueError) as e:
        print(f"\nERROR: {e}")
        return 1

    if args.stats:
        print_cache_stats(orchestrator)

    return 0


if __name__ == "__main__":
    sys.exit(main())
