"""The Simpsons: Hit & Run - Collector Card Viewer/Editor.

Each of the 7 levels has one byte at $1C13 + (level - 1). The low 7 bits
are the level's cards in scrapbook order, card 1 in bit 0.
"""

import argparse
import sys

from .codec import card_bits, card_count, parse_card_bits, set_card
from .constants import CARD_LEVELS, CARDS_PER_LEVEL, CARD_MASK
from .json_export import export_json
from .save import load_session, commit


def cmd_view(args) -> None:
    fields = load_session(args.file).current_fields()
    masks = fields.cards
    total = sum(card_count(m) for m in masks)

    if args.json:
        result = {
            'levels': [{'level': i + 1, 'mask': m, 'bits': card_bits(m),
                        'count': card_count(m)} for i, m in enumerate(masks)],
            'total': total,
        }
        export_json(result, args.output)
        return

    print(f"\n=== Collector Cards ({total}/{CARD_LEVELS * CARDS_PER_LEVEL}) ===\n")
    print("        1234567")
    for i, mask in enumerate(masks):
        print(f"    L{i + 1}  {card_bits(mask)}  ({card_count(mask)}/{CARDS_PER_LEVEL})")
    print()


def cmd_edit(args) -> None:
    session = load_session(args.file)
    fields = session.current_fields()
    levels = range(1, CARD_LEVELS + 1) if args.level is None else [args.level]

    try:
        for level in levels:
            mask = fields.get_cards(level)
            if args.set is not None:
                mask = parse_card_bits(args.set)
            if args.all:
                mask = CARD_MASK
            if args.none:
                mask = 0
            for card in args.unlock or []:
                mask = set_card(mask, card, True)
            for card in args.lock or []:
                mask = set_card(mask, card, False)
            fields.set_cards(level, mask)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    commit(session, fields, args, args.file)


def _add_subcommands(sub) -> None:
    p_view = sub.add_parser('view', help='View collector cards')
    p_view.add_argument('file', help='Save file')
    p_view.add_argument('--json', action='store_true', help='Output as JSON')
    p_view.add_argument('--output', '-o', help='Output file (for --json)')

    p_edit = sub.add_parser('edit', help='Edit collector cards')
    p_edit.add_argument('file', help='Save file')
    p_edit.add_argument('--level', type=int, help='Level 1-7 (default: all levels)')
    group = p_edit.add_mutually_exclusive_group()
    group.add_argument('--set', help='Card bits, card 1 first (e.g. 1010000)')
    group.add_argument('--all', action='store_true', help='Unlock every card')
    group.add_argument('--none', action='store_true', help='Lock every card')
    p_edit.add_argument('--unlock', type=int, nargs='+', metavar='CARD', help='Unlock cards 1-7')
    p_edit.add_argument('--lock', type=int, nargs='+', metavar='CARD', help='Lock cards 1-7')
    p_edit.add_argument('--output', '-o', help='Output file (default: overwrite)')
    p_edit.add_argument('--backup', action='store_true', help='Create .bak backup')
    p_edit.add_argument('--dry-run', action='store_true', help='Show changes only')


def register_parser(subparsers) -> None:
    p = subparsers.add_parser('cards', help='Collector card viewer/editor')
    sub = p.add_subparsers(dest='cards_command')
    _add_subcommands(sub)


def dispatch(args) -> None:
    if args.cards_command == 'view':
        cmd_view(args)
    elif args.cards_command == 'edit':
        cmd_edit(args)
    else:
        print("Usage: malk cards {view|edit} ...", file=sys.stderr)


def main() -> None:
    parser = argparse.ArgumentParser(
        description='The Simpsons: Hit & Run - Collector Card Viewer/Editor')
    sub = parser.add_subparsers(dest='cards_command')
    _add_subcommands(sub)

    args = parser.parse_args()
    dispatch(args)


if __name__ == '__main__':
    main()
