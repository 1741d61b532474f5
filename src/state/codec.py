"""Encode/decode the whole calculator state. Decoding fails closed: bad payload -> None."""

import json
import logging
import math
from dataclasses import dataclass, field

import jsonschema

from src.state.entity import initial_counts, is_valid_counts
from src.validation import validate_legacy_state, validate_state

log = logging.getLogger(__name__)

ENTITY_COUNT = 3
ENTITY_KEYS = tuple(f"entity{i}" for i in range(1, ENTITY_COUNT + 1))


class StateDecodeError(ValueError):
    """Raised by decode_strict when a persisted payload cannot be accepted."""


def _default_entities() -> tuple[tuple[int, ...], ...]:
    return tuple(initial_counts() for _ in range(ENTITY_COUNT))


@dataclass(frozen=True)
class PersistedState:
    level: int = 1
    modifier: bool = False
    entities: tuple[tuple[int, ...], ...] = field(default_factory=_default_entities)


def default_state() -> PersistedState:
    return PersistedState()


def encode(state: PersistedState) -> str:
    """Deterministic JSON for the full aggregate (sorted keys, compact)."""
    payload = {"level": int(state.level), "modifier": bool(state.modifier)}
    for key, counts in zip(ENTITY_KEYS, state.entities):
        payload[key] = [int(c) for c in counts]
    return json.dumps(payload, sort_keys=True, separators=(",", ":"))


def _reject_constant(name: str):
    raise ValueError(f"Non-finite number {name} in state payload")


def _coerce_level(value) -> int:
    """Integer-valued numbers and integer strings are accepted; anything else is rejected."""
    if isinstance(value, bool):
        raise StateDecodeError("level must be a number")
    if isinstance(value, str):
        text = value.strip()
        try:
            value = int(text)
        except ValueError:
            try:
                value = float(text)
            except ValueError:
                raise StateDecodeError(f"level is not numeric: {value!r}") from None
    if isinstance(value, float):
        if not math.isfinite(value) or not value.is_integer():
            raise StateDecodeError(f"level is not an integer: {value!r}")
        value = int(value)
    if not isinstance(value, int):
        raise StateDecodeError(f"level has unsupported type {type(value).__name__}")
    if value < 1:
        raise StateDecodeError(f"level must be >= 1, got {value}")
    return value


def _validate_shape(data, allow_legacy: bool) -> bool:
    """
    Validate structure; return the modifier flag.
    Absent modifier is a narrower rule than a mistyped one: only absence falls back to the legacy schema.
    """
    try:
        validate_state(data)
        return data["modifier"]
    except jsonschema.ValidationError:
        if not (allow_legacy and isinstance(data, dict) and "modifier" not in data):
            raise
    validate_legacy_state(data)
    log.info("Accepted legacy state payload without modifier; defaulting to False")
    return False


def decode_strict(raw: str | None, allow_legacy: bool = True) -> PersistedState:
    """
    Decode a persisted payload. Raises StateDecodeError or jsonschema.ValidationError
    on the first problem found; no per-field defaults are substituted.
    """
    if raw is None or not str(raw).strip():
        raise StateDecodeError("Empty state payload")
    try:
        data = json.loads(raw, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as e:
        raise StateDecodeError(f"State payload is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise StateDecodeError(f"State payload must be an object, got {type(data).__name__}")

    modifier = _validate_shape(data, allow_legacy)
    level = _coerce_level(data["level"])

    entities = []
    for key in ENTITY_KEYS:
        # Schema "integer" admits 2.0; normalise so round-trips compare equal.
        counts = tuple(int(c) for c in data[key])
        if not is_valid_counts(counts):
            raise StateDecodeError(f"{key} has a count above its category cap")
        entities.append(counts)

    return PersistedState(level=level, modifier=modifier, entities=tuple(entities))


def decode(raw: str | None, allow_legacy: bool = True) -> PersistedState | None:
    """Decode a persisted payload, or None if any field is invalid. Never raises."""
    try:
        return decode_strict(raw, allow_legacy=allow_legacy)
    except (StateDecodeError, jsonschema.ValidationError) as e:
        log.info("Discarding persisted state: %s", getattr(e, "message", e))
        return None
