"""Score ceiling from difficulty level (tier) and the optional modifier."""

from src.utils import to_non_negative_int

MIN_LEVEL = 1
POINTS_PER_LEVEL = 10
BASE_POINTS = 20


def coerce_level(raw) -> int:
    """Floor to an int, never below MIN_LEVEL. Non-numeric input -> MIN_LEVEL."""
    return max(MIN_LEVEL, to_non_negative_int(raw))


def ceiling(level, modifier_active: bool = False) -> int:
    """
    Maximum points an entity may hold before it is over limit.
    The modifier raises the effective level by exactly one step.
    """
    effective = coerce_level(level) + (1 if modifier_active else 0)
    return effective * POINTS_PER_LEVEL + BASE_POINTS
