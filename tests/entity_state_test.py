"""Count vector mutation: coercion, cap clamping, immutable updates."""

import random

import pytest

from src.scoring.categories import CATEGORY_COUNT, effective_cap
from src.scoring.engine import total_for
from src.state.entity import decrement, increment, initial_counts, reset_entity, set_count


def test_initial_counts_all_zero():
    assert initial_counts() == (0,) * 8
    assert reset_entity() == initial_counts()


def test_set_count_clamps_to_cap():
    assert set_count(initial_counts(), 0, 7)[0] == 5
    assert set_count(initial_counts(), 1, 99)[1] == 4


def test_set_count_uncapped_category_keeps_large_values():
    assert set_count(initial_counts(), 7, 1000)[7] == 1000


@pytest.mark.parametrize("raw,expected", [(-3, 0), ("abc", 0), (None, 0), ("3", 3), (2.7, 2), ("", 0)])
def test_set_count_coerces_raw_input(raw, expected):
    assert set_count(initial_counts(), 2, raw)[2] == expected


def test_set_count_does_not_mutate_input():
    counts = [0] * CATEGORY_COUNT
    result = set_count(counts, 3, 2)
    assert counts == [0] * CATEGORY_COUNT
    assert result[3] == 2
    assert result is not counts


def test_increment_at_cap_is_noop():
    counts = set_count(initial_counts(), 1, 4)
    assert increment(counts, 1) == counts


def test_decrement_from_zero_stays_zero():
    assert decrement(initial_counts(), 5) == initial_counts()


def test_set_count_bad_index_raises():
    with pytest.raises(IndexError):
        set_count(initial_counts(), 8, 1)


def test_random_sequences_respect_caps_and_non_negative():
    """Arbitrary increment/decrement/set sequences never break caps or go negative."""
    rng = random.Random(1234)
    counts = initial_counts()
    for _ in range(2000):
        i = rng.randrange(CATEGORY_COUNT)
        op = rng.choice(("inc", "dec", "set"))
        if op == "inc":
            counts = increment(counts, i)
        elif op == "dec":
            counts = decrement(counts, i)
        else:
            counts = set_count(counts, i, rng.randint(-10, 20))
        for j, value in enumerate(counts):
            cap = effective_cap(j)
            assert value >= 0
            assert cap is None or value <= cap


def test_total_monotonic_per_category():
    """Raising one count never lowers the total."""
    base = (1, 1, 1, 1, 1, 1, 1, 1)
    for i in range(CATEGORY_COUNT):
        previous = total_for(base)
        counts = base
        for _ in range(6):
            counts = increment(counts, i)
            current = total_for(counts)
            assert current >= previous
            previous = current


@pytest.mark.parametrize("raw", [10**400, 2**53 + 1, str(2**53 + 1)])
def test_large_counts_exact(raw):
    """Uncapped categories store big counts exactly; capped ones still clamp."""
    counts = set_count(initial_counts(), 2, raw)
    assert counts[2] == int(raw)
    assert set_count(initial_counts(), 0, raw)[0] == 5
    assert total_for(counts) == int(raw) * 20


@pytest.mark.parametrize("raw", ["1e400", float("inf"), -(10**400)])
def test_overflowing_input_becomes_zero(raw):
    assert set_count(initial_counts(), 2, raw)[2] == 0
