"""Small coercion and timestamp helpers shared by scoring, state and audit."""

import math
from datetime import datetime, timezone


def to_non_negative_int(raw) -> int:
    """Floor `raw` to a non-negative int. Non-numeric, NaN, inf, negative and bool -> 0."""
    if isinstance(raw, bool) or raw is None:
        return 0
    # ints keep full precision; no round trip through float
    if isinstance(raw, int):
        return max(raw, 0)
    if isinstance(raw, str):
        raw = raw.strip()
        try:
            return max(int(raw), 0)
        except ValueError:
            pass
    try:
        value = float(raw)
    except (TypeError, ValueError, OverflowError):
        return 0
    if not math.isfinite(value) or value < 0:
        return 0
    return int(math.floor(value))


def iso_now() -> str:
    """Current UTC timestamp as ISO string."""
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"
