"""
Algorithm-specific behaviour: range scanning, the key-span guard and the
per-algorithm config options.
"""

from __future__ import annotations

import pytest

from intsort.algorithms import DEFAULT_MAX_RANGE, Algorithm, KeyRangeError, scan_range
from intsort.algorithms import bucket, counting_stable, pigeonhole, radix_lsd
from intsort.records import Record, keys_of, records_from_keys
from intsort.validate import oracle_sort


def test_scan_range() -> None:
    assert scan_range(records_from_keys([3, -7, 12, 0])) == (-7, 12)
    assert scan_range([Record(4, 0)]) == (4, 4)
    with pytest.raises(ValueError):
        scan_range([])


@pytest.mark.parametrize(
    "algo",
    [Algorithm.COUNTING_STABLE, Algorithm.COUNTING_UNSTABLE, Algorithm.PIGEONHOLE],
    ids=lambda a: a.value,
)
def test_key_span_guard(algo: Algorithm) -> None:
    a = records_from_keys([0, 1000])
    with pytest.raises(KeyRangeError) as exc:
        algo.sort(a, config={"max_range": 1000})
    assert exc.value.min_key == 0
    assert exc.value.max_key == 1000
    assert exc.value.limit == 1000
    # the guard fires before anything is rewritten
    assert keys_of(a) == [0, 1000]

    # a span exactly at the limit is fine
    assert keys_of(algo.sort(records_from_keys([1000, 0]), config={"max_range": 1001})) == [0, 1000]


def test_default_key_span_guard() -> None:
    a = records_from_keys([-(2**31), 2**31])
    with pytest.raises(KeyRangeError):
        counting_stable.sort(a)
    assert DEFAULT_MAX_RANGE == 2**31 - 1


def test_key_span_guard_disabled() -> None:
    a = records_from_keys([5, 2, 5, 9])
    out = pigeonhole.sort(a, config={"max_range": None})
    assert keys_of(out) == [2, 5, 5, 9]


@pytest.mark.parametrize("bad", [0, -1, "big", 2.5, True])
def test_invalid_max_range(bad) -> None:
    with pytest.raises(ValueError):
        counting_stable.sort(records_from_keys([1, 2]), config={"max_range": bad})


@pytest.mark.parametrize(
    "algo", [Algorithm.RADIX_LSD, Algorithm.BUCKET], ids=lambda a: a.value
)
def test_span_guard_not_applied(algo: Algorithm) -> None:
    a = records_from_keys([2**62, -(2**62), 0, 2**62])
    out = algo.sort(a, config={"max_range": 10})
    assert out == oracle_sort(a)


@pytest.mark.parametrize("base", [2, 3, 10, 16, 256])
def test_radix_base(base: int) -> None:
    a = records_from_keys([802, 2, 24, 45, 66, 170, 75, 90, -17, 2])
    assert radix_lsd.sort(a, config={"base": base}) == oracle_sort(a)


@pytest.mark.parametrize("base", [0, 1, True])
def test_radix_invalid_base(base) -> None:
    with pytest.raises(ValueError):
        radix_lsd.sort(records_from_keys([1]), config={"base": base})


def test_radix_all_zero_keys() -> None:
    a = [Record(0, i) for i in range(5)]
    out = radix_lsd.sort(a)
    assert out == a
    assert out is not a


@pytest.mark.parametrize("bucket_count", [1, 2, 7, 1000])
def test_bucket_count(bucket_count: int) -> None:
    a = records_from_keys([9, 3, 3, 0, 12, 7, 3, 9, 1])
    assert bucket.sort(a, config={"bucket_count": bucket_count}) == oracle_sort(a)


def test_bucket_skewed_keys() -> None:
    # nearly everything collides into the first bucket
    keys = [0] * 40 + [1] * 40 + [10_000]
    a = records_from_keys(keys)
    assert bucket.sort(a) == oracle_sort(a)


def test_bucket_invalid_count() -> None:
    with pytest.raises(ValueError):
        bucket.sort(records_from_keys([1, 2]), config={"bucket_count": 0})


def test_from_name() -> None:
    assert Algorithm.from_name("pigeonhole") is Algorithm.PIGEONHOLE
    assert Algorithm.PIGEONHOLE.label == "Pigeonhole Sort"
    with pytest.raises(ValueError, match="Unknown algorithm"):
        Algorithm.from_name("quicksort")
