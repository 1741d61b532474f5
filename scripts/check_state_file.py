#!/usr/bin/env python3
"""
Check whether a persisted state file would be accepted at startup.
Usage: python scripts/check_state_file.py [path] [--strict-schema]
Exit code 0 if accepted, 1 if it would be discarded in favour of the default state.
"""

import argparse
import json
import sys
from pathlib import Path

import jsonschema

# Add project root
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from card_calculator.store import JsonFileStore
from src.scoring import ceiling, total_for
from src.state import STATE_KEY, decode_strict
from src.state.codec import StateDecodeError


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("path", nargs="?", type=Path, default=None, help="State file (default: state dir file)")
    parser.add_argument(
        "--strict-schema",
        action="store_true",
        help="Reject payloads without the modifier field instead of defaulting it to false",
    )
    args = parser.parse_args()

    path = args.path or JsonFileStore().path_for(STATE_KEY)
    if not path.exists():
        print(f"Error: state file not found: {path}", file=sys.stderr)
        sys.exit(1)

    raw = path.read_text(encoding="utf-8")
    try:
        state = decode_strict(raw, allow_legacy=not args.strict_schema)
    except StateDecodeError as e:
        print(f"REJECTED: {e}")
        sys.exit(1)
    except jsonschema.ValidationError as e:
        where = "/".join(str(p) for p in e.absolute_path) or "<root>"
        print(f"REJECTED: {where}: {e.message}")
        sys.exit(1)

    limit = ceiling(state.level, state.modifier)
    report = {
        "path": str(path),
        "level": state.level,
        "modifier": state.modifier,
        "ceiling": limit,
        "totals": [total_for(counts) for counts in state.entities],
    }
    print("ACCEPTED")
    print(json.dumps(report, indent=2))


if __name__ == "__main__":
    main()
