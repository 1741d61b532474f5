"""Card Calculator - score simulator for three characters against a tier ceiling."""

from card_calculator.service import open_calculator, state_view
from card_calculator.store import JsonFileStore, MemoryStore

__all__ = ["open_calculator", "state_view", "JsonFileStore", "MemoryStore"]
