"""Generators for sparse vectors and synthetic byte patterns."""

from .sparse import (
    random_sparse_vec,
    mk_random_sparsevec,
    deterministic_sparse_vec,
    default_max_draws,
)
from .patterns import (
    generate_noise_pattern,
    generate_gradient_pattern,
    generate_binary_blob,
)

__all__ = [
    "random_sparse_vec",
    "mk_random_sparsevec",
    "deterministic_sparse_vec",
    "default_max_draws",
    "generate_noise_pattern",
    "generate_gradient_pattern",
    "generate_binary_blob",
]
