"""Service layer shared by the web app and the CLI: config, calculator wiring, views."""

import os

from card_calculator.store import JsonFileStore
from src.scoring.categories import CATEGORY_COUNT, describe_categories
from src.state import Calculator

ALLOW_LEGACY_STATE = os.environ.get("ALLOW_LEGACY_STATE", "1").strip().lower() not in ("0", "false", "no")
# Display bound only; the model accepts any level >= 1.
LEVEL_DISPLAY_MAX = int(os.environ.get("LEVEL_DISPLAY_MAX", "15"))


def open_calculator(state_dir=None, allow_legacy: bool | None = None) -> Calculator:
    """Calculator backed by the JSON file store. Loads persisted state once, here."""
    store = JsonFileStore(state_dir)
    return Calculator(store, allow_legacy=ALLOW_LEGACY_STATE if allow_legacy is None else allow_legacy)


def parse_category(value) -> int:
    """Category index from user input (0-based). Raises IndexError when out of range."""
    try:
        index = int(value)
    except (TypeError, ValueError):
        raise IndexError(f"Category index must be an integer, got {value!r}") from None
    if not 0 <= index < CATEGORY_COUNT:
        raise IndexError(f"Category index {index} out of range 0..{CATEGORY_COUNT - 1}")
    return index


def state_view(calc: Calculator) -> dict:
    """Snapshot plus per-category breakdown for each entity."""
    view = calc.snapshot()
    view["level_display_max"] = LEVEL_DISPLAY_MAX
    for item in view["entities"]:
        breakdown = calc.breakdown(item["id"])
        item["status"] = breakdown["status"]
        item["per_category"] = breakdown["per_category"]
    return view


def categories_view() -> list[dict]:
    return describe_categories()
