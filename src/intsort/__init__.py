"""
intsort: fixed-range integer sorts over (key, id) Records, and the checks
used to validate them.

    from intsort import Algorithm, make_dataset, verify
    import numpy as np

    data = make_dataset(1000, {"dist": "random", "params": {"k": 1000}},
                        np.random.default_rng(0))
    out = Algorithm.COUNTING_STABLE.sort(data)
    assert verify(out, stability_required=True)
"""

from .algorithms import Algorithm, KeyRangeError, MutationStyle, scan_range
from .datasets import SUPPORTED_DISTS, make_dataset
from .records import Record
from .validate import first_violation_index, verify

__version__ = "0.1.0"

__all__ = [
    "Record",
    "Algorithm",
    "MutationStyle",
    "KeyRangeError",
    "scan_range",
    "make_dataset",
    "SUPPORTED_DISTS",
    "verify",
    "first_violation_index",
]
