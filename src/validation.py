"""Schema validation for persisted calculator state."""

import json
from functools import lru_cache
from pathlib import Path

import jsonschema

SCHEMAS_DIR = Path(__file__).resolve().parent.parent / "schemas"


@lru_cache(maxsize=None)
def _load_schema(name: str) -> dict:
    path = SCHEMAS_DIR / f"{name}.schema.json"
    return json.loads(path.read_text(encoding="utf-8"))


def validate_state(data: dict) -> None:
    """Validate state against the current schema. Raises jsonschema.ValidationError if invalid."""
    schema = _load_schema("calculator_state")
    jsonschema.validate(data, schema)


def validate_legacy_state(data: dict) -> None:
    """Validate state written before the modifier field existed. Raises jsonschema.ValidationError if invalid."""
    schema = _load_schema("calculator_state.legacy")
    jsonschema.validate(data, schema)
