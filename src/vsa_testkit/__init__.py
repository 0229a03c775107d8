"""
VSA Testkit: deterministic data generation, fault injection and integrity
validation for sparse ternary vector-symbolic engines.

This library generates reproducible inputs for an engine under test,
corrupts byte buffers in controlled ways, and checks structural and
algebraic invariants of what the engine produces.
"""

from .encoding import (
    DIM,
    SparseVector,
    DeterministicSequence,
    lcg_next,
    lcg_words,
    bind,
    bundle,
)
from .generators import (
    random_sparse_vec,
    mk_random_sparsevec,
    deterministic_sparse_vec,
    generate_noise_pattern,
    generate_gradient_pattern,
    generate_binary_blob,
)
from .analysis import (
    intersection_count,
    sparse_dot,
)
from .chaos import ChaosInjector
from .integrity import (
    IntegrityReport,
    IntegrityValidator,
)
from .errors import (
    HarnessError,
    ContractViolation,
    SnapshotError,
)

__version__ = "0.1.0"

__all__ = [
    "DIM",
    "SparseVector",
    "DeterministicSequence",
    "lcg_next",
    "lcg_words",
    "bind",
    "bundle",
    "random_sparse_vec",
    "mk_random_sparsevec",
    "deterministic_sparse_vec",
    "generate_noise_pattern",
    "generate_gradient_pattern",
    "generate_binary_blob",
    "intersection_count",
    "sparse_dot",
    "ChaosInjector",
    "IntegrityReport",
    "IntegrityValidator",
    "HarnessError",
    "ContractViolation",
    "SnapshotError",
]
