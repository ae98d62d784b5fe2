#!/usr/bin/env python3
"""
CLI entry point for the TAO Julia dependency generator
Writes `deps.jl` to the standard output
"""

import argparse
import sys
import os

# Add parent directory to sys.path for direct execution
if __name__ == '__main__' and __package__ is None:
    sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from tao_deps_generator.errors import AbiAssertionError
from tao_deps_generator.generator import DepsGenerator


class UsageParser(argparse.ArgumentParser):
    """Argument parser reporting every usage error with exit status 1"""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1)


def build_parser(prog=None):
    parser = UsageParser(
        prog=prog,
        usage="%(prog)s [--help|-h]",
        description="Generate definitions for the Julia interface to the TAO C library",
        add_help=False,
    )
    parser.add_argument(
        "-h", "--help",
        action="store_true",
        help="print usage and exit"
    )
    return parser


def main(argv=None, config=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.help:
        parser.print_usage(sys.stderr)
        return 0

    try:
        DepsGenerator(config).generate(sys.stdout)
    except AbiAssertionError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


def run():
    sys.exit(main())


if __name__ == "__main__":
    run()
