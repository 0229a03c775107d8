"""Analysis module."""

from .set_algebra import (
    intersection_count,
    sparse_dot,
)

__all__ = [
    "intersection_count",
    "sparse_dot",
]
