"""
Sparse ternary vector generators.

Both generators use the same rejection-sampling scheme: indices are drawn
from ``[0, dims)`` and a single ``used`` set shared by the positive and
negative fills guarantees the two index sets are disjoint. The expected
number of draws grows like the coupon-collector bound as ``sparsity``
approaches ``dims``; a diagnostic ceiling turns a runaway loop into a
:class:`~vsa_testkit.errors.ContractViolation`.
"""

import logging
import math
from typing import Callable, List, Optional, Tuple

import numpy as np

from ..encoding.constants import REJECTION_DRAW_FACTOR, REJECTION_DRAW_FLOOR
from ..encoding.sequence import DeterministicSequence, check_seed
from ..encoding.sparse_ternary import SparseVector
from ..errors import ContractViolation

log = logging.getLogger(__name__)

_EULER_GAMMA = 0.5772156649015329


def _harmonic(m: int) -> float:
    if m <= 0:
        return 0.0
    return math.log(m) + _EULER_GAMMA + 1.0 / (2 * m)


def default_max_draws(dims: int, sparsity: int) -> int:
    """Draw ceiling for collecting *sparsity* unique indices out of *dims*."""
    expected = dims * (_harmonic(dims) - _harmonic(dims - sparsity))
    return max(REJECTION_DRAW_FLOOR, int(REJECTION_DRAW_FACTOR * expected))


def _check_shape(dims: int, sparsity: int) -> None:
    for name, value in (("dims", dims), ("sparsity", sparsity)):
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
            raise ContractViolation(f"{name} must be an int, got {type(value).__name__}")
    if dims < 0:
        raise ContractViolation(f"dims must be non-negative, got {dims}")
    if sparsity < 0:
        raise ContractViolation(f"sparsity must be non-negative, got {sparsity}")
    if sparsity > dims:
        raise ContractViolation(
            f"sparsity ({sparsity}) exceeds dims ({dims}); indices must stay unique"
        )


def _sample_disjoint(
    draw: Callable[[], int],
    pos_count: int,
    neg_count: int,
    max_draws: int,
) -> Tuple[List[int], List[int]]:
    used = set()
    pos: List[int] = []
    neg: List[int] = []
    draws = 0

    for target, out in ((pos_count, pos), (neg_count, neg)):
        while len(out) < target:
            if draws >= max_draws:
                raise ContractViolation(
                    f"rejection sampling gave up after {draws} draws "
                    f"({len(used)} of {pos_count + neg_count} unique indices collected)"
                )
            idx = draw()
            draws += 1
            if idx not in used:
                used.add(idx)
                out.append(idx)

    log.debug("collected %d indices in %d draws", len(used), draws)
    pos.sort()
    neg.sort()
    return pos, neg


def random_sparse_vec(
    rng: np.random.Generator,
    dims: int,
    sparsity: int,
    max_draws: Optional[int] = None,
) -> SparseVector:
    """
    Generate a random sparse vector with specified dimensions and sparsity.

    Args:
        rng: Random source exposing ``integers(low, high)``, usually
            ``np.random.default_rng(seed)``.
        dims: Total dimensions of the vector.
        sparsity: Number of non-zero elements. ``sparsity // 2`` go to each
            polarity, so an odd value yields ``sparsity - 1`` non-zeros.
        max_draws: Optional ceiling on the number of draws.

    Returns:
        SparseVector with sorted, disjoint index arrays.
    """
    if not hasattr(rng, "integers"):
        raise TypeError(f"rng must provide integers(low, high), got {type(rng).__name__}")
    _check_shape(dims, sparsity)

    target_each = sparsity // 2
    if max_draws is None:
        max_draws = default_max_draws(dims, 2 * target_each)

    pos, neg = _sample_disjoint(
        lambda: int(rng.integers(0, dims)),
        target_each,
        target_each,
        max_draws,
    )
    return SparseVector(dimension=dims, positive_indices=pos, negative_indices=neg)


def mk_random_sparsevec(
    rng: np.random.Generator,
    dims: int,
    sparsity: int,
) -> SparseVector:
    """Alias for :func:`random_sparse_vec`."""
    return random_sparse_vec(rng, dims, sparsity)


def deterministic_sparse_vec(
    dim: int,
    nnz: int,
    seed: int,
    max_draws: Optional[int] = None,
) -> SparseVector:
    """
    Generate a sparse vector from the deterministic sequence generator.

    The same ``(dim, nnz, seed)`` always yields the same vector. ``nnz // 2``
    indices are positive and the remainder negative, so odd ``nnz`` favours
    the negative side.

    Args:
        dim: Total dimensions of the vector.
        nnz: Number of non-zero elements.
        seed: Unsigned 64-bit seed.
        max_draws: Optional ceiling on the number of draws.
    """
    _check_shape(dim, nnz)
    seed = check_seed(seed)

    pos_count = nnz // 2
    neg_count = nnz - pos_count
    if max_draws is None:
        max_draws = default_max_draws(dim, nnz)

    seq = DeterministicSequence(seed)
    pos, neg = _sample_disjoint(
        lambda: seq.next_below(dim),
        pos_count,
        neg_count,
        max_draws,
    )
    return SparseVector(dimension=dim, positive_indices=pos, negative_indices=neg)
