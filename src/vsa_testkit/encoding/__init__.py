"""Sparse vector type, reference engine and the deterministic sequence generator."""

from .constants import (
    DIM,
    DEFAULT_SPARSITY,
    LCG_MULTIPLIER,
    LCG_INCREMENT,
    U64_MASK,
    DEFAULT_PROBABILITY,
    ERASURE_SEED_OFFSET,
)
from .sequence import (
    DeterministicSequence,
    check_seed,
    lcg_next,
    lcg_words,
)
from .sparse_ternary import (
    SparseVector,
    bind,
    bundle,
    pairwise_bundle,
)

__all__ = [
    "DIM",
    "DEFAULT_SPARSITY",
    "LCG_MULTIPLIER",
    "LCG_INCREMENT",
    "U64_MASK",
    "DEFAULT_PROBABILITY",
    "ERASURE_SEED_OFFSET",
    "DeterministicSequence",
    "check_seed",
    "lcg_next",
    "lcg_words",
    "SparseVector",
    "bind",
    "bundle",
    "pairwise_bundle",
]
