"""Count vector for one tracked entity. Every write goes through the category cap."""

from src.scoring.categories import CATEGORY_COUNT, get_category
from src.utils import to_non_negative_int


def initial_counts() -> tuple[int, ...]:
    return (0,) * CATEGORY_COUNT


def reset_entity() -> tuple[int, ...]:
    """All-zero vector."""
    return initial_counts()


def clamp_count(index: int, raw) -> int:
    """Coerce `raw` to a non-negative int and clamp it to the category cap."""
    value = to_non_negative_int(raw)
    cap = get_category(index).cap
    if cap is not None:
        value = min(value, cap)
    return value


def set_count(counts, index: int, raw) -> tuple[int, ...]:
    """
    Return a new vector equal to `counts` except at `index`.
    Input above the cap is clamped silently; the caller's sequence is not modified.
    """
    value = clamp_count(index, raw)
    next_counts = list(counts)
    next_counts[index] = value
    return tuple(next_counts)


def increment(counts, index: int) -> tuple[int, ...]:
    """No-op at the cap."""
    return set_count(counts, index, counts[index] + 1)


def decrement(counts, index: int) -> tuple[int, ...]:
    """Clamped at 0."""
    return set_count(counts, index, counts[index] - 1)


def is_valid_counts(counts) -> bool:
    """True when `counts` is a full-length vector of in-cap, non-negative ints."""
    if len(counts) != CATEGORY_COUNT:
        return False
    for i, value in enumerate(counts):
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            return False
        cap = get_category(i).cap
        if cap is not None and value > cap:
            return False
    return True
