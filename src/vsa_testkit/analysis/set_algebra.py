"""
Reference set algebra over sorted index sequences.

These are deliberately plain merge loops. They serve as the oracle that an
engine's optimised dot product is checked against, so they must not share
code with it.
"""

from typing import Sequence

from ..encoding.sparse_ternary import SparseVector


def _as_list(indices) -> list:
    return indices.tolist() if hasattr(indices, "tolist") else list(indices)


def intersection_count(a: Sequence[int], b: Sequence[int]) -> int:
    """
    Count common elements of two ascending sequences.

    Two-pointer merge, O(len(a) + len(b)). On a mismatch the pointer at the
    smaller value advances; on a match both advance.
    """
    a = _as_list(a)
    b = _as_list(b)
    i = j = count = 0
    while i < len(a) and j < len(b):
        if a[i] < b[j]:
            i += 1
        elif a[i] > b[j]:
            j += 1
        else:
            count += 1
            i += 1
            j += 1
    return count


def sparse_dot(a: SparseVector, b: SparseVector) -> int:
    """
    Sparse ternary dot product: (pp + nn) - (pn + np).

    Symmetric in its arguments for any pair of vectors.
    """
    pp = intersection_count(a.pos, b.pos)
    nn = intersection_count(a.neg, b.neg)
    pn = intersection_count(a.pos, b.neg)
    np_ = intersection_count(a.neg, b.pos)
    return (pp + nn) - (pn + np_)
