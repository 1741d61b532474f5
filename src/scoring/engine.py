"""Deterministic scoring engine: card counts -> points total. Pure code, no state."""

from src.scoring.categories import CATEGORIES, CATEGORY_COUNT, points_for

STATUS_CLEAR = "clear"
STATUS_BLURRED = "blurred"


def total_for(counts) -> int:
    """Sum of per-category points. Missing trailing entries count as 0."""
    return sum(
        points_for(i, counts[i] if i < len(counts) else 0)
        for i in range(CATEGORY_COUNT)
    )


def remaining(counts, ceiling: int) -> int:
    """Points left under the ceiling; negative when over limit."""
    return ceiling - total_for(counts)


def is_over_limit(counts, ceiling: int) -> bool:
    return remaining(counts, ceiling) < 0


def compute_score(counts, ceiling: int) -> dict:
    """
    Per-category breakdown plus totals for one entity.
    `status` is "clear" while within the ceiling, "blurred" once over it.
    """
    per_category = []
    for i, category in enumerate(CATEGORIES):
        count = counts[i] if i < len(counts) else 0
        per_category.append({
            "key": category.key,
            "label": category.label,
            "count": count,
            "cap": category.cap,
            "points": points_for(i, count),
        })

    total = sum(c["points"] for c in per_category)
    left = ceiling - total
    return {
        "per_category": per_category,
        "total": total,
        "ceiling": ceiling,
        "remaining": left,
        "over_limit": left < 0,
        "status": STATUS_BLURRED if left < 0 else STATUS_CLEAR,
    }
