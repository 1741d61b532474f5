"""Calculator state: clamped count vectors, the persistence codec, and the coordinator."""

from src.state.calculator import STATE_KEY, Calculator
from src.state.codec import PersistedState, decode, decode_strict, default_state, encode
from src.state.entity import decrement, increment, initial_counts, reset_entity, set_count

__all__ = [
    "STATE_KEY",
    "Calculator",
    "PersistedState",
    "decode",
    "decode_strict",
    "default_state",
    "encode",
    "decrement",
    "increment",
    "initial_counts",
    "reset_entity",
    "set_count",
]
