"""Main CLI entry point for lebin."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .. import __version__
from ..cli.analyze import analyze_file, parse_specs
from ..exceptions import LebinError
from ..utils.sizing import encoded_size_of


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the lebin CLI.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = argparse.ArgumentParser(
        description="lebin: Little-Endian Binary codec",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  lebin --analyze records.py            Show record layouts (offsets, padding)
  lebin --size uint16,int8,float32      Encoded size of a type sequence
  lebin --size "int32[4],char[8]"       Arrays use C declarator syntax
  lebin --version                       Show version
        """,
    )

    parser.add_argument(
        "--analyze",
        metavar="FILE",
        type=str,
        help="Analyze Record classes in a Python file and show their layouts",
    )

    parser.add_argument(
        "--size",
        metavar="SPECS",
        type=str,
        help="Print the encoded size of a comma-separated list of types",
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
        version=f"lebin {__version__}",
    )

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    # Handle --size
    if args.size:
        try:
            specs = parse_specs(args.size)
            print(encoded_size_of(*specs))
            return 0
        except (LebinError, ValueError) as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

    # Handle --analyze
    if args.analyze:
        file_path = Path(args.analyze)
        if not file_path.exists():
            print(f"Error: File not found: {file_path}", file=sys.stderr)
            return 1

        try:
            analyze_file(file_path)
            return 0
        except Exception as e:
            print(f"Error analyzing file: {e}", file=sys.stderr)
            return 1

    # If no command specified, show help
    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
