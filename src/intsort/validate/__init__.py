"""
Validation utilities public API.

Re-exports:
    - Verifier:
        verify
        first_violation_index

    - Oracle:
        ORACLE_NAME
        oracle_sort
        equals_oracle

    - Property checks:
        is_nondecreasing
        first_nondecreasing_violation_index
        is_permutation
        permutation_counter_diff
        preserves_pairing
        positions_preserved
        assert_no_mutation
"""

from .oracle import ORACLE_NAME, equals_oracle, oracle_sort
from .properties import (
    assert_no_mutation,
    first_nondecreasing_violation_index,
    is_nondecreasing,
    is_permutation,
    permutation_counter_diff,
    positions_preserved,
    preserves_pairing,
)
from .verifier import first_violation_index, verify

__all__ = [
    "verify",
    "first_violation_index",
    "ORACLE_NAME",
    "oracle_sort",
    "equals_oracle",
    "is_nondecreasing",
    "first_nondecreasing_violation_index",
    "is_permutation",
    "permutation_counter_diff",
    "preserves_pairing",
    "positions_preserved",
    "assert_no_mutation",
]
