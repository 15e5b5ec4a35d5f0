"""
Correctness tests for every algorithm against the oracle (Python's built-in
sorted keyed on Record.key).

What we check:
- Stable algorithms: output exactly matches the oracle (keys and ids),
  input is not mutated, result is deterministic and idempotent
- Unstable counting sort: keys match the oracle, ids never leave their
  positions, the input list itself is rewritten
- Every algorithm: nondecreasing keys and key-multiset preservation
"""

from __future__ import annotations

from typing import List

import pytest
from hypothesis import given, settings, strategies as st

from intsort.algorithms import Algorithm, MutationStyle
from intsort.records import Record, keys_of, records_from_keys
from intsort.validate import (
    equals_oracle,
    is_nondecreasing,
    is_permutation,
    oracle_sort,
    positions_preserved,
    verify,
)

STABLE_ALGOS = [a for a in Algorithm if a.stable]


# ------------------------- helpers ------------------------- #

def _check_stable(algo: Algorithm, keys: List[int]) -> None:
    """Common assertion bundle for one input to a stable algorithm."""
    a = records_from_keys(keys)
    a_before = list(a)
    out = algo.sort(a)

    # API: input must not be mutated and a new list is returned
    assert a == a_before, "Algorithm must not mutate its input"
    assert out is not a

    # Primary: exact equality to oracle (this also covers stability)
    assert equals_oracle(a, out), "Output must exactly match the oracle"

    # Diagnostics
    assert is_nondecreasing(keys_of(out)), "Output is not nondecreasing"
    assert is_permutation(a, out), "Output is not a permutation of input"
    assert verify(out, stability_required=True)

    # Determinism and idempotence
    assert algo.sort(a) == out, "Algorithm must be deterministic"
    assert algo.sort(out) == out, "Re-sorting sorted output must not change it"


def _check_unstable(keys: List[int]) -> None:
    a = records_from_keys(keys)
    before = list(a)
    out = Algorithm.COUNTING_UNSTABLE.sort(a)

    assert out is a, "Unstable counting sort rewrites and returns its input list"
    assert keys_of(out) == sorted(keys)
    assert positions_preserved(before, out)
    assert is_permutation(before, out)
    assert verify(out, stability_required=False)


# ------------------------- unit tests (deterministic) ------------------------- #

UNIT_CASES = [
    [],
    [5],
    [2, 1],
    [1, 2, 3, 4],
    [4, 3, 2, 1],
    [7, 7, 7, 7],
    [1, 3, 2, 3, 1, 2],
    list(range(20)),
    list(range(20))[::-1],
    [0, -1, 5, -10, 3, 3, 2],
    [-5, -5, -1, -3, -3],
    [170, 45, 75, 90, 802, 24, 2, 66],
    [10, 0, 100, 7, 7, 3, 999],
    [0, 0, 100000, 0],
]


@pytest.mark.parametrize("algo", STABLE_ALGOS, ids=lambda a: a.value)
@pytest.mark.parametrize("keys", UNIT_CASES)
def test_unit_cases_stable(algo: Algorithm, keys: List[int]) -> None:
    _check_stable(algo, keys)


@pytest.mark.parametrize("keys", UNIT_CASES)
def test_unit_cases_unstable(keys: List[int]) -> None:
    _check_unstable(keys)


def test_mutation_styles() -> None:
    assert Algorithm.COUNTING_UNSTABLE.mutation is MutationStyle.KEYS_REWRITTEN
    assert not Algorithm.COUNTING_UNSTABLE.stable
    for algo in STABLE_ALGOS:
        assert algo.mutation is MutationStyle.REPLACED
    assert len(STABLE_ALGOS) == 4


# ------------------------- concrete scenario ------------------------- #

SCENARIO = [Record(5, 0), Record(3, 1), Record(5, 2), Record(1, 3)]


@pytest.mark.parametrize("algo", STABLE_ALGOS, ids=lambda a: a.value)
def test_scenario_stable(algo: Algorithm) -> None:
    out = algo.sort(list(SCENARIO))
    assert out == [Record(1, 3), Record(3, 1), Record(5, 0), Record(5, 2)]


def test_scenario_unstable() -> None:
    out = Algorithm.COUNTING_UNSTABLE.sort(list(SCENARIO))
    assert out == [Record(1, 0), Record(3, 1), Record(5, 2), Record(5, 3)]
    # keys are in order but no longer paired with their original ids
    assert not equals_oracle(SCENARIO, out)


def test_unstable_on_id_shuffled_input() -> None:
    # ids decoupled from positions before the call: ids still never move
    a = [Record(2, 3), Record(1, 0), Record(2, 1), Record(0, 2)]
    before = list(a)
    out = Algorithm.COUNTING_UNSTABLE.sort(a)
    assert out == [Record(0, 3), Record(1, 0), Record(2, 1), Record(2, 2)]
    assert positions_preserved(before, out)


@pytest.mark.parametrize("algo", STABLE_ALGOS, ids=lambda a: a.value)
def test_all_equal_keys_keep_order(algo: Algorithm) -> None:
    a = [Record(-4, i) for i in range(50)]
    assert algo.sort(a) == a


@pytest.mark.parametrize("algo", STABLE_ALGOS, ids=lambda a: a.value)
def test_negative_keys(algo: Algorithm) -> None:
    a = records_from_keys([-3, 12, -3, -100, 0, 12, -1, 5])
    out = algo.sort(a)
    assert keys_of(out) == [-100, -3, -3, -1, 0, 5, 12, 12]
    assert out == oracle_sort(a)


# ------------------------- property-based tests (randomized) ------------------------- #

small_ints = st.integers(min_value=-10_000, max_value=10_000)


@settings(deadline=None, max_examples=100)
@given(st.sampled_from(STABLE_ALGOS), st.lists(small_ints, min_size=0, max_size=400))
def test_property_stable_small_range(algo: Algorithm, keys: List[int]) -> None:
    _check_stable(algo, keys)


@settings(deadline=None, max_examples=60)
@given(
    st.sampled_from(STABLE_ALGOS),
    st.lists(st.integers(min_value=0, max_value=255), min_size=0, max_size=600),
)
def test_property_stable_many_duplicates(algo: Algorithm, keys: List[int]) -> None:
    _check_stable(algo, keys)


@settings(deadline=None, max_examples=60)
@given(
    st.sampled_from([Algorithm.RADIX_LSD, Algorithm.BUCKET]),
    st.lists(st.integers(min_value=-(2**40), max_value=2**40), min_size=0, max_size=200),
)
def test_property_wide_range(algo: Algorithm, keys: List[int]) -> None:
    # radix and bucket do not allocate by key span
    _check_stable(algo, keys)


@settings(deadline=None, max_examples=100)
@given(st.lists(small_ints, min_size=0, max_size=400))
def test_property_unstable(keys: List[int]) -> None:
    _check_unstable(keys)
