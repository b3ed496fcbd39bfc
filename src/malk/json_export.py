"""JSON output shared by the view/export commands."""

import json
import sys


def export_json(data, output: str | None = None) -> None:
    """Write data as indented JSON to output, or to stdout if not given."""
    text = json.dumps(data, indent=2)
    if output:
        with open(output, 'w', encoding='utf-8') as f:
            f.write(text + '\n')
        print(f"Exported JSON to {output}", file=sys.stderr)
    else:
        print(text)
