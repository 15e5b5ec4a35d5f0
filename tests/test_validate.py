"""Tests for the verifier, the oracle and the property helpers."""

from __future__ import annotations

import pytest

from intsort.algorithms import Algorithm
from intsort.records import Record, records_from_keys
from intsort.validate import (
    assert_no_mutation,
    equals_oracle,
    first_nondecreasing_violation_index,
    first_violation_index,
    is_nondecreasing,
    is_permutation,
    oracle_sort,
    permutation_counter_diff,
    positions_preserved,
    preserves_pairing,
    verify,
)


@pytest.mark.parametrize("stability", [True, False])
def test_verify_trivial(stability: bool) -> None:
    assert verify([], stability)
    assert verify([Record(3, 0)], stability)


def test_verify_order() -> None:
    assert verify(records_from_keys([1, 2, 2, 5]))
    assert not verify(records_from_keys([1, 3, 2]), stability_required=False)
    assert first_violation_index(records_from_keys([1, 3, 2])) == 1


def test_verify_stability() -> None:
    swapped = [Record(1, 0), Record(4, 2), Record(4, 1), Record(6, 3)]
    assert verify(swapped, stability_required=False)
    assert not verify(swapped, stability_required=True)
    assert first_violation_index(swapped) == 1
    assert first_violation_index(swapped, stability_required=False) is None


def test_verify_duplicate_id_in_run_fails() -> None:
    assert not verify([Record(2, 5), Record(2, 5)], stability_required=True)


def test_oracle_is_stable_and_pure() -> None:
    a = [Record(5, 0), Record(3, 1), Record(5, 2), Record(1, 3)]
    before = list(a)
    out = oracle_sort(a)
    assert a == before
    assert out == [Record(1, 3), Record(3, 1), Record(5, 0), Record(5, 2)]
    assert equals_oracle(a, out)


def test_key_properties() -> None:
    assert is_nondecreasing([])
    assert is_nondecreasing([1, 1, 2])
    assert first_nondecreasing_violation_index([1, 4, 2, 0]) == 1
    assert first_nondecreasing_violation_index([1, 2]) is None

    a = records_from_keys([3, 1, 3])
    b = [Record(1, 9), Record(3, 8), Record(3, 7)]
    assert is_permutation(a, b)
    assert not is_permutation(a, b[:2])
    assert permutation_counter_diff(a, b) == {}
    assert permutation_counter_diff(a, records_from_keys([3, 1, 1])) == {3: 1, 1: -1}


def test_pairing_detects_unstable_on_fresh_input() -> None:
    a = records_from_keys([5, 3, 5, 1])
    before = list(a)
    out = Algorithm.COUNTING_UNSTABLE.sort(a)
    # ids still increase along the output, so the positional stability check passes
    assert verify(out, stability_required=True)
    # but keys were moved away from their ids
    assert not preserves_pairing(before, out)
    assert positions_preserved(before, out)

    stable_out = Algorithm.COUNTING_STABLE.sort(before)
    assert preserves_pairing(before, stable_out)
    assert not positions_preserved(before, stable_out)


def test_pairing_on_sorted_input() -> None:
    # already-sorted input: nothing moves, pairing survives even the unstable sort
    a = records_from_keys([1, 2, 2, 3])
    before = list(a)
    assert preserves_pairing(before, Algorithm.COUNTING_UNSTABLE.sort(a))


def test_assert_no_mutation() -> None:
    a = records_from_keys([1, 2])
    assert_no_mutation(a, list(a))
    with pytest.raises(AssertionError, match="index 1"):
        assert_no_mutation(a, [Record(1, 0), Record(9, 1)])
    with pytest.raises(AssertionError, match="length changed"):
        assert_no_mutation(a, a[:1])
