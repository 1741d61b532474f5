"""Card categories: per-category cap and count -> points rule. Pure data, no state."""

from dataclasses import dataclass
from typing import Callable

from src.utils import to_non_negative_int

# Duplicate cards: 1st and 2nd copies are free, 3rd and 4th cost 40 each.
DUPLICATE_POINTS = (0, 0, 40, 40)


def _linear(multiplier: int, cap: int | None = None) -> Callable[[int], int]:
    def points(count: int) -> int:
        if cap is not None:
            count = min(count, cap)
        return count * multiplier

    return points


def _tiered(schedule: tuple[int, ...]) -> Callable[[int], int]:
    def points(count: int) -> int:
        return sum(schedule[: min(count, len(schedule))])

    return points


@dataclass(frozen=True)
class Category:
    key: str
    label: str
    cap: int | None
    points: Callable[[int], int]


CATEGORIES: tuple[Category, ...] = (
    Category("removed_starter", "刪階初始卡片", 5, _linear(20, cap=5)),
    Category("duplicate", "複製卡片", 4, _tiered(DUPLICATE_POINTS)),
    Category("divine_flash", "神閃卡片", None, _linear(20)),
    Category("neutral", "中立卡片", None, _linear(20)),
    Category("gear_reforge", "裝備重鑄", None, _linear(10)),
    Category("common_monster", "普通怪物卡", None, _linear(20)),
    Category("rare_monster", "稀有怪物卡", None, _linear(50)),
    Category("legendary_monster", "傳說怪物卡", None, _linear(80)),
)

CATEGORY_COUNT = len(CATEGORIES)


def get_category(index: int) -> Category:
    if not 0 <= index < CATEGORY_COUNT:
        raise IndexError(f"Category index {index} out of range 0..{CATEGORY_COUNT - 1}")
    return CATEGORIES[index]


def points_for(index: int, count) -> int:
    """Points contributed by `count` cards of category `index`. Never negative."""
    return get_category(index).points(to_non_negative_int(count))


def effective_cap(index: int) -> int | None:
    """Category cap, or None when the category is unbounded."""
    return get_category(index).cap


def describe_categories() -> list[dict]:
    """JSON-ready view of the category table (index, key, label, cap)."""
    return [
        {"index": i, "key": c.key, "label": c.label, "cap": c.cap}
        for i, c in enumerate(CATEGORIES)
    ]
