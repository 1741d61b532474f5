"""State coordinator: owns level, modifier and the three count vectors.

Every mutation goes through the clamped setters in src.state.entity, then the
whole aggregate is written to the store. The store is anything with
`get(key) -> str | None` and `set(key, value) -> bool`.
"""

import logging

from src.scoring.ceiling import ceiling as ceiling_for, coerce_level
from src.scoring.engine import compute_score, total_for
from src.state import entity
from src.state.codec import ENTITY_COUNT, PersistedState, decode, default_state, encode

log = logging.getLogger(__name__)

STATE_KEY = "czn_calculator_state"


class Calculator:
    def __init__(self, store, key: str = STATE_KEY, allow_legacy: bool = True):
        self._store = store
        self._key = key
        self._level, self._modifier, self._entities = self._load(allow_legacy)

    def _load(self, allow_legacy: bool):
        try:
            raw = self._store.get(self._key)
        except Exception as e:
            log.warning("State store read failed, starting fresh: %s", e)
            raw = None
        state = decode(raw, allow_legacy=allow_legacy) if raw else None
        if state is None:
            state = default_state()
        return state.level, state.modifier, list(state.entities)

    def _save(self) -> None:
        """Write the whole aggregate. Failures are logged and swallowed."""
        try:
            ok = self._store.set(self._key, encode(self.state))
        except Exception as e:
            log.warning("State save failed: %s", e)
            return
        if ok is False:
            log.warning("State store rejected write for key %s", self._key)

    def _entity_index(self, entity_id: int) -> int:
        if isinstance(entity_id, bool) or not isinstance(entity_id, int) or not 1 <= entity_id <= ENTITY_COUNT:
            raise KeyError(f"Unknown entity {entity_id!r}; expected 1..{ENTITY_COUNT}")
        return entity_id - 1

    def _replace_counts(self, entity_id: int, counts: tuple[int, ...]) -> tuple[int, ...]:
        self._entities[self._entity_index(entity_id)] = counts
        self._save()
        return counts

    # --- derived, read-only ---

    @property
    def state(self) -> PersistedState:
        return PersistedState(
            level=self._level,
            modifier=self._modifier,
            entities=tuple(self._entities),
        )

    @property
    def level(self) -> int:
        return self._level

    @property
    def modifier(self) -> bool:
        return self._modifier

    @property
    def ceiling(self) -> int:
        return ceiling_for(self._level, self._modifier)

    def counts(self, entity_id: int) -> tuple[int, ...]:
        return self._entities[self._entity_index(entity_id)]

    def total(self, entity_id: int) -> int:
        return total_for(self.counts(entity_id))

    def remaining(self, entity_id: int) -> int:
        return self.ceiling - self.total(entity_id)

    def over_limit(self, entity_id: int) -> bool:
        return self.remaining(entity_id) < 0

    def breakdown(self, entity_id: int) -> dict:
        return compute_score(self.counts(entity_id), self.ceiling)

    def snapshot(self) -> dict:
        """JSON-ready view of the full state plus derived per-entity outputs."""
        return {
            "level": self._level,
            "modifier": self._modifier,
            "ceiling": self.ceiling,
            "entities": [
                {
                    "id": i,
                    "counts": list(self.counts(i)),
                    "total": self.total(i),
                    "remaining": self.remaining(i),
                    "over_limit": self.over_limit(i),
                }
                for i in range(1, ENTITY_COUNT + 1)
            ],
        }

    # --- mutations ---

    def set_level(self, value) -> int:
        self._level = coerce_level(value)
        self._save()
        return self._level

    def step_level(self, delta: int) -> int:
        return self.set_level(self._level + delta)

    def toggle_modifier(self) -> bool:
        self._modifier = not self._modifier
        self._save()
        return self._modifier

    def set_count(self, entity_id: int, index: int, value) -> tuple[int, ...]:
        return self._replace_counts(entity_id, entity.set_count(self.counts(entity_id), index, value))

    def increment(self, entity_id: int, index: int) -> tuple[int, ...]:
        return self._replace_counts(entity_id, entity.increment(self.counts(entity_id), index))

    def decrement(self, entity_id: int, index: int) -> tuple[int, ...]:
        return self._replace_counts(entity_id, entity.decrement(self.counts(entity_id), index))

    def reset_entity(self, entity_id: int) -> tuple[int, ...]:
        return self._replace_counts(entity_id, entity.reset_entity())

    def reset_all(self) -> None:
        """Zero every entity; level and modifier are kept."""
        self._entities = [entity.reset_entity() for _ in range(ENTITY_COUNT)]
        self._save()
