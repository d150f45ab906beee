"""Main CLI entry point for mpwire."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .. import __version__
from ..cli.dump import dump_values, encode_json, parse_hex
from ..exceptions import MpwireError


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the mpwire CLI.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = argparse.ArgumentParser(
        description="mpwire: compact MessagePack-style binary codec",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  mpwire --hex "93 01 02 03"            Decode values from a hex string
  mpwire --file data.bin --describe      Decode a file and show each header
  mpwire --encode '{"a": [1, 2]}'        Encode JSON and print hex
  mpwire --version                       Show version
        """,
    )

    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--hex",
        metavar="HEX",
        type=str,
        help="Decode concatenated values from a hex string",
    )
    source.add_argument(
        "--file",
        metavar="FILE",
        type=str,
        help="Decode concatenated values from a binary file",
    )
    source.add_argument(
        "--encode",
        metavar="JSON",
        type=str,
        help="Encode a JSON document and print the bytes as hex",
    )

    parser.add_argument(
        "--describe",
        action="store_true",
        help="With --hex/--file, show the header format and size of each value",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"mpwire {__version__}",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.encode is not None:
        try:
            print(encode_json(args.encode))
            return 0
        except (ValueError, MpwireError) as e:
            print(f"Error encoding JSON: {e}", file=sys.stderr)
            return 1

    if args.hex is not None:
        try:
            data = parse_hex(args.hex)
        except ValueError as e:
            print(f"Error: invalid hex input: {e}", file=sys.stderr)
            return 1
    elif args.file is not None:
        file_path = Path(args.file)
        if not file_path.exists():
            print(f"Error: File not found: {file_path}", file=sys.stderr)
            return 1
        try:
            data = file_path.read_bytes()
        except OSError as e:
            print(f"Error reading file: {e}", file=sys.stderr)
            return 1
    else:
        # If no command specified, show help
        parser.print_help()
        return 0

    try:
        dump_values(data, describe=args.describe)
        return 0
    except MpwireError as e:
        print(f"Error decoding input: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
