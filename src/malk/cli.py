"""Unified CLI for malk: Hit & Run save editor.

Dispatches to the tool modules via a single entry point:
    malk save view <file>
    malk save edit <file> --coins 9999999
    malk cards view <file>
    malk cards edit <file> --level 1 --unlock 3
"""

import argparse
import sys

from . import __version__
from . import save
from . import cards


def main() -> None:
    parser = argparse.ArgumentParser(
        prog='malk',
        description='The Simpsons: Hit & Run - Save File Editor',
    )
    parser.add_argument('--version', action='version', version=f'malk {__version__}')

    subparsers = parser.add_subparsers(dest='tool', help='Tool to run')

    save.register_parser(subparsers)
    cards.register_parser(subparsers)

    args = parser.parse_args()

    if not args.tool:
        parser.print_help()
        sys.exit(0)

    dispatchers = {
        'save': save.dispatch,
        'cards': cards.dispatch,
    }

    handler = dispatchers.get(args.tool)
    if handler:
        handler(args)
    else:
        parser.print_help()


if __name__ == '__main__':
    main()
