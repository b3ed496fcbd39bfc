"""The Simpsons: Hit & Run - Save File Viewer/Editor.

Save files are at most 8192 bytes and start with the magic byte $BA.
Fields edited here:
  $0001-$0002  Save year (big-endian), $0004-$0008 month..second
  $0259        Gags collected (0-84)
  $1115/$1119/$111D  Last level played / mission / level unlocked (zero-based)
  $1129-$112B  Coins (24-bit little-endian, max 9,999,999)
  $1C13-$1C19  Collector cards, one 7-bit mask per level
Every other byte is passed through unchanged.
"""

import argparse
import json
import sys

from .codec import SaveError, SaveFields, card_bits, resolve_fields, validate_fields
from .constants import LAYOUT, FIELDS, CARD_LEVELS
from .fileutil import read_save_file, write_save_file, backup_file
from .json_export import export_json
from .session import SaveSession


def load_session(path: str) -> SaveSession:
    """Read and decode path, exiting with an error message on failure."""
    session = SaveSession()
    try:
        session.decode(read_save_file(path))
    except (SaveError, OSError) as e:
        print(f"Error: {path}: {e}", file=sys.stderr)
        sys.exit(1)
    return session


def diff_fields(old: SaveFields, new: SaveFields) -> list[tuple[str, int, int]]:
    """Return (label, old, new) for every field that differs."""
    changes = []
    for field in LAYOUT:
        before = getattr(old, field.name)
        after = getattr(new, field.name)
        if before != after:
            changes.append((field.label, before, after))
    return changes


def commit(session: SaveSession, fields: SaveFields, args, path: str) -> bool:
    """Show changes, then encode and write unless this is a dry run.

    Returns True if a file was written.
    """
    try:
        resolved = resolve_fields(fields, session.buffer)
    except (SaveError, TypeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    changes = diff_fields(session.current_fields(), resolved)
    if not changes:
        print("No changes.")
        return False
    for label, before, after in changes:
        print(f"  {label}: {before} -> {after}")
    for field in LAYOUT:
        requested = getattr(fields, field.name)
        written = getattr(resolved, field.name)
        if requested != written:
            print(f"  Warning: {field.label} {requested} clamped to {written}", file=sys.stderr)
    for warning in validate_fields(resolved):
        print(f"  Warning: {warning}", file=sys.stderr)

    if getattr(args, 'dry_run', False):
        print("  (dry run - no file written)")
        return False

    data = session.encode(resolved)

    output = args.output if getattr(args, 'output', None) else path
    try:
        if getattr(args, 'backup', False) and output == path:
            backup_file(path)
        write_save_file(output, data)
    except OSError as e:
        print(f"Error: {output}: {e}", file=sys.stderr)
        sys.exit(1)
    print(f"Saved {output}")
    return True


def display(fields: SaveFields) -> None:
    print(f"  Timestamp:       {fields.timestamp}")
    print(f"  Gags:            {fields.gags}")
    print(f"  Coins:           {fields.coins}")
    print(f"  Last level:      {fields.last_level}")
    print(f"  Last mission:    {fields.last_mission}")
    print(f"  Level unlocked:  {fields.unlocked_level}")
    print()
    print("  Collector cards  1234567")
    for level in range(1, CARD_LEVELS + 1):
        print(f"    L{level}            {card_bits(fields.get_cards(level))}")


def cmd_view(args) -> None:
    session = load_session(args.file)
    fields = session.current_fields()
    warnings = validate_fields(fields)

    if args.json:
        result = fields.to_dict()
        result['timestamp'] = fields.timestamp
        result['warnings'] = warnings
        export_json(result, args.output)
        return

    print(f"\n=== Hit & Run Save: {args.file} ===\n")
    display(fields)
    for warning in warnings:
        print(f"\n  Warning: {warning}")
    print()


def cmd_edit(args) -> None:
    session = load_session(args.file)
    fields = session.current_fields()

    if args.gags is not None:
        fields.gags = args.gags
    if args.coins is not None:
        fields.coins = args.coins
    if args.max_coins:
        fields.coins = FIELDS['coins'].max_value
    if args.last_level is not None:
        fields.last_level = args.last_level
    if args.last_mission is not None:
        fields.last_mission = args.last_mission
    if args.unlocked_level is not None:
        fields.unlocked_level = args.unlocked_level

    commit(session, fields, args, args.file)


def cmd_export(args) -> None:
    session = load_session(args.file)
    export_json(session.current_fields().to_dict(), args.output)


def cmd_import(args) -> None:
    """Apply a JSON dict of field values to a save file."""
    session = load_session(args.file)
    try:
        with open(args.json_file, 'r', encoding='utf-8') as f:
            values = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        print(f"Error: {args.json_file}: {e}", file=sys.stderr)
        sys.exit(1)
    if not isinstance(values, dict):
        print(f"Error: {args.json_file}: expected a JSON object", file=sys.stderr)
        sys.exit(1)

    fields = session.current_fields()
    try:
        ignored = fields.update(values)
    except TypeError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    for key in ignored:
        print(f"  Warning: unknown field '{key}' ignored", file=sys.stderr)

    commit(session, fields, args, args.file)


def _add_write_args(p) -> None:
    p.add_argument('--output', '-o', help='Output file (default: overwrite)')
    p.add_argument('--backup', action='store_true', help='Create .bak backup')
    p.add_argument('--dry-run', action='store_true', help='Show changes only')


def _add_subcommands(sub) -> None:
    p_view = sub.add_parser('view', help='View save file')
    p_view.add_argument('file', help='Save file')
    p_view.add_argument('--json', action='store_true', help='Output as JSON')
    p_view.add_argument('--output', '-o', help='Output file (for --json)')

    p_edit = sub.add_parser('edit', help='Edit save counters and progress')
    p_edit.add_argument('file', help='Save file')
    p_edit.add_argument('--gags', type=int, help='Gags collected (0-84)')
    p_edit.add_argument('--coins', type=int, help='Coins (0-9999999)')
    p_edit.add_argument('--max-coins', action='store_true', help='Set coins to 9999999')
    p_edit.add_argument('--last-level', type=int, help='Last level played (1-7)')
    p_edit.add_argument('--last-mission', type=int, help='Last mission selected (1-8)')
    p_edit.add_argument('--unlocked-level', type=int, help='Last level unlocked (1-7)')
    _add_write_args(p_edit)

    p_export = sub.add_parser('export', help='Export fields as JSON')
    p_export.add_argument('file', help='Save file')
    p_export.add_argument('--output', '-o', help='Output file (default: stdout)')

    p_import = sub.add_parser('import', help='Apply fields from JSON')
    p_import.add_argument('file', help='Save file')
    p_import.add_argument('json_file', help='JSON file with field values')
    _add_write_args(p_import)


def register_parser(subparsers) -> None:
    p = subparsers.add_parser('save', help='Save file viewer/editor')
    sub = p.add_subparsers(dest='save_command')
    _add_subcommands(sub)


def dispatch(args) -> None:
    if args.save_command == 'view':
        cmd_view(args)
    elif args.save_command == 'edit':
        cmd_edit(args)
    elif args.save_command == 'export':
        cmd_export(args)
    elif args.save_command == 'import':
        cmd_import(args)
    else:
        print("Usage: malk save {view|edit|export|import} ...", file=sys.stderr)


def main() -> None:
    parser = argparse.ArgumentParser(
        description='The Simpsons: Hit & Run - Save File Viewer/Editor')
    sub = parser.add_subparsers(dest='save_command')
    _add_subcommands(sub)

    args = parser.parse_args()
    dispatch(args)


if __name__ == '__main__':
    main()
