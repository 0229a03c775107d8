"""Structural and algebraic validation of sparse vectors and byte buffers."""

import logging
from typing import Callable, Optional

import numpy as np

from ..analysis.set_algebra import sparse_dot
from ..encoding.sparse_ternary import SparseVector, bind as reference_bind, pairwise_bundle
from .report import IntegrityReport

log = logging.getLogger(__name__)

BinaryOp = Callable[[SparseVector, SparseVector], SparseVector]
DotOp = Callable[[SparseVector, SparseVector], int]


def _strictly_increasing(indices: np.ndarray) -> bool:
    return bool(np.all(np.diff(indices) > 0))


def _same_indices(x: SparseVector, y: SparseVector) -> bool:
    return np.array_equal(x.pos, y.pos) and np.array_equal(x.neg, y.neg)


def _as_bytes_array(buffer) -> np.ndarray:
    if isinstance(buffer, np.ndarray):
        return buffer.reshape(-1).view(np.uint8)
    return np.frombuffer(memoryview(buffer).cast("B"), dtype=np.uint8)


class IntegrityValidator:
    """
    Validates data integrity for engine inputs and outputs.

    The engine under test is plugged in through ``bind`` and ``bundle``:
    two-argument callables returning a new :class:`SparseVector`. They
    default to the reference implementations in
    :mod:`vsa_testkit.encoding.sparse_ternary`.

    Every ``validate_*`` / ``detect_*`` call returns a fresh
    :class:`IntegrityReport`; the validator itself holds no session state.
    """

    def __init__(
        self,
        bind: Optional[BinaryOp] = None,
        bundle: Optional[BinaryOp] = None,
        verbose: bool = False,
    ):
        self.bind = bind or reference_bind
        self.bundle = bundle or pairwise_bundle
        self.verbose = verbose

    def _fail(self, report: IntegrityReport, msg: str) -> None:
        report.record_failure(msg)
        log.log(logging.WARNING if self.verbose else logging.DEBUG, "integrity check failed: %s", msg)

    def _violation(self, report: IntegrityReport, msg: str) -> None:
        report.record_invariant_violation(msg)
        log.log(logging.WARNING if self.verbose else logging.DEBUG, "invariant violated: %s", msg)

    def validate_sparse(self, v: SparseVector) -> IntegrityReport:
        """
        Validate sparse vector invariants.

        Three independent checks, all of which always run:
        - no overlap between pos and neg indices
        - pos indices strictly increasing (sorted, no duplicates)
        - neg indices strictly increasing
        """
        report = IntegrityReport()

        overlap = np.intersect1d(v.pos, v.neg)
        if overlap.size:
            report.record_corruption()
            self._fail(report, f"Overlap between pos and neg indices ({overlap.size} shared)")
        else:
            report.record_pass()

        if _strictly_increasing(v.pos):
            report.record_pass()
        else:
            self._fail(report, "pos indices not sorted")

        if _strictly_increasing(v.neg):
            report.record_pass()
        else:
            self._fail(report, "neg indices not sorted")

        return report

    def validate_bounds(self, v: SparseVector) -> IntegrityReport:
        """Check that every index lies in ``[0, dimension)``."""
        report = IntegrityReport()
        out_of_range = sum(
            int(np.count_nonzero((indices < 0) | (indices >= v.dimension)))
            for indices in (v.pos, v.neg)
        )
        if out_of_range:
            report.record_corruption()
            self._fail(report, f"{out_of_range} indices outside [0, {v.dimension})")
        else:
            report.record_pass()
        return report

    def _commutes(
        self,
        report: IntegrityReport,
        name: str,
        op: BinaryOp,
        a: SparseVector,
        b: SparseVector,
    ) -> Optional[bool]:
        """Run *op* both ways. Returns None, with a violation recorded, if the engine raises."""
        try:
            return _same_indices(op(a, b), op(b, a))
        except Exception as exc:
            self._violation(report, f"{name} raised {type(exc).__name__}: {exc}")
            return None

    def validate_bind_invariants(self, a: SparseVector, b: SparseVector) -> IntegrityReport:
        """
        Commutativity of bind: A ⊙ B = B ⊙ A.

        An engine that raises on damaged inputs (out-of-range indices, mixed
        dimensions) is recorded as a violation instead of aborting the session.
        """
        report = IntegrityReport()
        commutes = self._commutes(report, "bind", self.bind, a, b)
        if commutes:
            report.record_pass()
        elif commutes is not None:
            self._violation(report, "Commutativity violation: A⊙B ≠ B⊙A")
        return report

    def validate_bundle_invariants(self, a: SparseVector, b: SparseVector) -> IntegrityReport:
        """Commutativity of bundle: A ⊕ B = B ⊕ A."""
        report = IntegrityReport()
        commutes = self._commutes(report, "bundle", self.bundle, a, b)
        if commutes:
            report.record_pass()
        elif commutes is not None:
            self._violation(report, "Bundle commutativity violation: A⊕B ≠ B⊕A")
        return report

    def validate_dot_symmetry(
        self,
        a: SparseVector,
        b: SparseVector,
        dot: Optional[DotOp] = None,
    ) -> IntegrityReport:
        """
        Check the dot product against the merge-based oracle.

        The oracle must be symmetric; when the engine's ``dot`` is given it
        must also agree with the oracle in both argument orders.
        """
        report = IntegrityReport()
        ab, ba = sparse_dot(a, b), sparse_dot(b, a)
        if ab != ba:
            self._violation(report, f"Dot symmetry violation: {ab} vs {ba}")
            return report
        if dot is not None:
            engine_ab, engine_ba = int(dot(a, b)), int(dot(b, a))
            if engine_ab != ab or engine_ba != ab:
                self._violation(
                    report,
                    f"Engine dot disagrees with oracle: {engine_ab}/{engine_ba} vs {ab}",
                )
                return report
        report.record_pass()
        return report

    def detect_differences(self, expected: SparseVector, actual: SparseVector) -> IntegrityReport:
        """
        Coarse drift detection between two vectors.

        One check per polarity. A mismatch is reported by how much the index
        counts differ, not by a positional diff.
        """
        report = IntegrityReport()
        for name in ("pos", "neg"):
            want, got = getattr(expected, name), getattr(actual, name)
            if np.array_equal(want, got):
                report.record_pass()
            else:
                report.record_corruption()
                self._fail(report, f"{name} indices differ by {abs(len(want) - len(got))} elements")
        return report

    def detect_byte_corruption(self, expected, actual) -> IntegrityReport:
        """
        Compare two byte buffers.

        Differing bytes whose XOR has one set bit count as bitflips, the rest
        as multi-bit corruption events. A length mismatch is also a
        corruption event.
        """
        report = IntegrityReport()
        want = _as_bytes_array(expected)
        got = _as_bytes_array(actual)
        common = min(len(want), len(got))

        diff = np.bitwise_xor(want[:common], got[:common])
        damaged = diff[diff != 0]
        flipped_bits = np.unpackbits(damaged).reshape(-1, 8).sum(axis=1)
        single = int(np.count_nonzero(flipped_bits == 1))
        multi = len(damaged) - single

        for _ in range(single):
            report.record_bitflip()
        for _ in range(multi + (len(want) != len(got))):
            report.record_corruption()

        if len(damaged) == 0 and len(want) == len(got):
            report.record_pass()
        else:
            self._fail(
                report,
                f"{len(damaged)} bytes differ ({single} single-bit, {multi} multi-bit), "
                f"lengths {len(want)} vs {len(got)}",
            )
        return report
