"""Deterministic scoring: categories, per-entity totals, and the level ceiling."""

from src.scoring.categories import CATEGORIES, CATEGORY_COUNT, effective_cap, points_for
from src.scoring.ceiling import ceiling, coerce_level
from src.scoring.engine import compute_score, is_over_limit, remaining, total_for

__all__ = [
    "CATEGORIES",
    "CATEGORY_COUNT",
    "effective_cap",
    "points_for",
    "ceiling",
    "coerce_level",
    "compute_score",
    "is_over_limit",
    "remaining",
    "total_for",
]
