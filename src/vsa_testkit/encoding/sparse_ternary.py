"""Sparse ternary vector type and the reference engine operations."""

from dataclasses import dataclass, field
from typing import List
import hashlib

import msgpack
import numpy as np

from ..errors import ContractViolation, SnapshotError


def _index_array(values) -> np.ndarray:
    arr = np.array(values, dtype=np.int64)
    if arr.ndim != 1:
        raise ContractViolation(f"index array must be 1-D, got shape={arr.shape}")
    arr.setflags(write=False)
    return arr


@dataclass(eq=False)
class SparseVector:
    """
    Sparse ternary vector representation.

    Values are in {-1, 0, +1} where:
    - +1: index listed in positive_indices
    - -1: index listed in negative_indices
    - 0:  every other index

    Generators produce sorted, disjoint, in-range index arrays, but the type
    itself does not normalise them: a damaged vector keeps its damage so the
    integrity validator can see it. The arrays are read-only.
    """
    dimension: int
    positive_indices: np.ndarray = field(default_factory=lambda: np.array([], dtype=np.int64))
    negative_indices: np.ndarray = field(default_factory=lambda: np.array([], dtype=np.int64))

    def __post_init__(self):
        self.positive_indices = _index_array(self.positive_indices)
        self.negative_indices = _index_array(self.negative_indices)

    @property
    def pos(self) -> np.ndarray:
        return self.positive_indices

    @property
    def neg(self) -> np.ndarray:
        return self.negative_indices

    @property
    def nnz(self) -> int:
        """Number of non-zero elements."""
        return len(self.positive_indices) + len(self.negative_indices)

    def __eq__(self, other) -> bool:
        if not isinstance(other, SparseVector):
            return NotImplemented
        return (
            self.dimension == other.dimension
            and np.array_equal(self.positive_indices, other.positive_indices)
            and np.array_equal(self.negative_indices, other.negative_indices)
        )

    __hash__ = None

    @classmethod
    def from_dense(cls, dense: np.ndarray) -> "SparseVector":
        """Create from dense array."""
        positive = np.where(dense > 0)[0]
        negative = np.where(dense < 0)[0]
        return cls(
            dimension=len(dense),
            positive_indices=positive,
            negative_indices=negative,
        )

    def dot(self, other: "SparseVector") -> int:
        """Sparse dot product."""
        # +1 for matching positives
        pp = len(np.intersect1d(self.positive_indices, other.positive_indices))
        # +1 for matching negatives
        nn = len(np.intersect1d(self.negative_indices, other.negative_indices))
        # -1 for opposite signs
        pn = len(np.intersect1d(self.positive_indices, other.negative_indices))
        np_ = len(np.intersect1d(self.negative_indices, other.positive_indices))

        return pp + nn - pn - np_

    def serialize(self) -> bytes:
        """Serialize to msgpack bytes."""
        data = {
            "d": self.dimension,
            "p": self.positive_indices.tolist(),
            "n": self.negative_indices.tolist(),
        }
        return msgpack.packb(data)

    @classmethod
    def deserialize(cls, data: bytes) -> "SparseVector":
        """
        Deserialize from msgpack bytes.

        Raises:
            SnapshotError: if *data* is not a well-formed vector snapshot.
        """
        try:
            obj = msgpack.unpackb(data)
        except (ValueError, TypeError, msgpack.exceptions.UnpackException) as exc:
            raise SnapshotError(f"undecodable snapshot: {exc}") from exc

        if not isinstance(obj, dict) or not all(key in obj for key in ("d", "p", "n")):
            raise SnapshotError("snapshot is not a vector map")
        dimension, pos, neg = obj["d"], obj["p"], obj["n"]
        if isinstance(dimension, bool) or not isinstance(dimension, int) or dimension < 0:
            raise SnapshotError(f"bad dimension in snapshot: {dimension!r}")
        for name, values in (("p", pos), ("n", neg)):
            if not isinstance(values, list) or not all(
                isinstance(x, int) and not isinstance(x, bool) for x in values
            ):
                raise SnapshotError(f"bad index list {name!r} in snapshot")

        try:
            return cls(dimension=dimension, positive_indices=pos, negative_indices=neg)
        except OverflowError as exc:
            raise SnapshotError(f"index out of int64 range: {exc}") from exc

    def hash(self) -> str:
        """Content hash of the snapshot bytes."""
        return hashlib.sha256(self.serialize()).hexdigest()[:32]


def bind(a: SparseVector, b: SparseVector) -> SparseVector:
    """
    Bind two vectors (element-wise multiplication for ternary).

    For sparse ternary:
    - (+1) * (+1) = +1
    - (-1) * (-1) = +1
    - (+1) * (-1) = -1
    - (-1) * (+1) = -1
    - 0 * anything = 0
    """
    if a.dimension != b.dimension:
        raise ContractViolation(f"Dimension mismatch: {a.dimension} vs {b.dimension}")

    pp = np.intersect1d(a.positive_indices, b.positive_indices)
    nn = np.intersect1d(a.negative_indices, b.negative_indices)
    pn = np.intersect1d(a.positive_indices, b.negative_indices)
    np_ = np.intersect1d(a.negative_indices, b.positive_indices)

    return SparseVector(
        dimension=a.dimension,
        positive_indices=np.union1d(pp, nn),
        negative_indices=np.union1d(pn, np_),
    )


def bundle(
    vectors: List[SparseVector],
    normalize: bool = True,
) -> SparseVector:
    """
    Bundle (superposition) of multiple vectors.

    Uses majority voting: for each dimension, take the sign of the sum.
    """
    if not vectors:
        raise ContractViolation("Cannot bundle empty list")

    dimension = vectors[0].dimension
    if not all(v.dimension == dimension for v in vectors):
        raise ContractViolation("All vectors must have same dimension")

    accumulator = np.zeros(dimension, dtype=np.int32)

    for vec in vectors:
        accumulator[vec.positive_indices] += 1
        accumulator[vec.negative_indices] -= 1

    if normalize:
        result = np.sign(accumulator).astype(np.int8)
    else:
        result = accumulator

    return SparseVector.from_dense(result)


def pairwise_bundle(a: SparseVector, b: SparseVector) -> SparseVector:
    """Two-argument form of :func:`bundle`, matching the validator's engine hooks."""
    return bundle([a, b])
