"""
Seeded fuzz campaign over the generators, chaos injector and validator.

Two reports are kept apart:

- ``engine``: structural and algebraic checks on generated vectors and on
  the engine's outputs. Any failure here is a regression.
- ``resilience``: damage injected on purpose into snapshots and byte
  buffers, and what the validator detected. Failures are expected.
"""

import argparse
import json
import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, Optional, Sequence

from .chaos import ChaosInjector
from .encoding.constants import DEFAULT_SPARSITY, DIM, U64_MASK
from .encoding.sparse_ternary import SparseVector
from .errors import ContractViolation, SnapshotError
from .generators import deterministic_sparse_vec, generate_noise_pattern
from .integrity import IntegrityReport, IntegrityValidator

log = logging.getLogger(__name__)


@dataclass
class CampaignResult:
    """Outcome of :func:`run_campaign`."""
    engine: IntegrityReport
    resilience: IntegrityReport
    stats: Dict[str, int] = field(default_factory=dict)
    latency_ms: float = 0.0

    def to_dict(self) -> Dict:
        return {
            "engine": self.engine.to_dict(),
            "resilience": self.resilience.to_dict(),
            "stats": dict(self.stats),
            "latency_ms": self.latency_ms,
        }


def run_campaign(
    dims: int = DIM,
    sparsity: int = DEFAULT_SPARSITY,
    seed: int = 42,
    iterations: int = 10,
    error_rate: float = 0.01,
    loss_rate: float = 0.1,
    packet_size: int = 64,
    erasures: int = 16,
    buffer_size: int = 4096,
    validator: Optional[IntegrityValidator] = None,
    dot: Optional[Callable[[SparseVector, SparseVector], int]] = SparseVector.dot,
) -> CampaignResult:
    """
    Run *iterations* rounds of generation, validation and corruption.

    Round ``i`` uses seeds ``seed + 2i`` and ``seed + 2i + 1`` for its two
    vectors, so any round can be replayed on its own.
    """
    if iterations < 0:
        raise ContractViolation(f"iterations must be non-negative, got {iterations}")
    validator = validator or IntegrityValidator()
    engine = IntegrityReport()
    resilience = IntegrityReport()
    stats = {"flip_events": 0, "packets_dropped": 0, "bytes_erased": 0, "unreadable_snapshots": 0}

    start = time.perf_counter()
    for i in range(iterations):
        seed_a = (seed + 2 * i) & U64_MASK
        seed_b = (seed_a + 1) & U64_MASK
        a = deterministic_sparse_vec(dims, sparsity, seed_a)
        b = deterministic_sparse_vec(dims, sparsity, seed_b)
        log.debug("round %d: seeds %d/%d, %d and %d non-zeros", i, seed_a, seed_b, a.nnz, b.nnz)

        # Generated inputs and engine outputs
        for v in (a, b):
            engine = engine.merge(validator.validate_sparse(v)).merge(validator.validate_bounds(v))
        engine = engine.merge(validator.validate_sparse(validator.bind(a, b)))
        engine = engine.merge(validator.validate_sparse(validator.bundle(a, b)))
        engine = engine.merge(validator.validate_bind_invariants(a, b))
        engine = engine.merge(validator.validate_bundle_invariants(a, b))
        engine = engine.merge(validator.validate_dot_symmetry(a, b, dot=dot))

        injector = ChaosInjector(seed=seed_a)

        # Snapshot round trip through a corrupted channel
        snapshot = a.serialize()
        damaged = injector.corrupt_copy(snapshot, error_rate)
        try:
            restored = SparseVector.deserialize(bytes(damaged))
        except SnapshotError as exc:
            stats["unreadable_snapshots"] += 1
            resilience.record_corruption()
            resilience.record_failure(f"round {i}: snapshot unreadable ({exc})")
        else:
            resilience = resilience.merge(validator.detect_differences(a, restored))

        # Raw buffers
        noise = generate_noise_pattern(buffer_size, seed_a)

        flipped = bytearray(noise)
        stats["flip_events"] += injector.corrupt_bytes(flipped, error_rate)
        resilience = resilience.merge(validator.detect_byte_corruption(noise, flipped))

        lossy = bytearray(noise)
        stats["packets_dropped"] += len(injector.simulate_packet_loss(lossy, loss_rate, packet_size))
        resilience = resilience.merge(validator.detect_byte_corruption(noise, lossy))

        erased = bytearray(noise)
        stats["bytes_erased"] += len(injector.inject_erasures(erased, erasures))
        resilience = resilience.merge(validator.detect_byte_corruption(noise, erased))

        log.info(
            "round %d: engine %.1f%% ok, resilience %d corruption events",
            i, engine.pass_rate(), resilience.corruption_events,
        )

    latency = (time.perf_counter() - start) * 1000
    return CampaignResult(engine=engine, resilience=resilience, stats=stats, latency_ms=latency)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Run a seeded fuzz campaign against the reference engine.")
    parser.add_argument("--dims", type=int, default=DIM)
    parser.add_argument("--sparsity", type=int, default=DEFAULT_SPARSITY)
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--iterations", type=int, default=10)
    parser.add_argument("--error-rate", type=float, default=0.01)
    parser.add_argument("--loss-rate", type=float, default=0.1)
    parser.add_argument("--packet-size", type=int, default=64)
    parser.add_argument("--erasures", type=int, default=16)
    parser.add_argument("--buffer-size", type=int, default=4096)
    parser.add_argument("--report", type=str, default=None, help="Write a JSON report to this path.")
    parser.add_argument("--verbose", action="store_true", help="Enable INFO logging.")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)

    try:
        result = run_campaign(
            dims=args.dims,
            sparsity=args.sparsity,
            seed=args.seed,
            iterations=args.iterations,
            error_rate=args.error_rate,
            loss_rate=args.loss_rate,
            packet_size=args.packet_size,
            erasures=args.erasures,
            buffer_size=args.buffer_size,
            validator=IntegrityValidator(verbose=args.verbose),
        )
    except ContractViolation as exc:
        parser.error(str(exc))

    print("[engine]")
    print(result.engine.summary())
    print("[resilience]")
    print(result.resilience.summary())
    print(f"Completed {args.iterations} rounds in {result.latency_ms:.1f} ms")

    if args.report:
        report_path = Path(args.report)
        report_path.parent.mkdir(parents=True, exist_ok=True)
        report_path.write_text(json.dumps(result.to_dict(), indent=2, sort_keys=True), encoding="utf-8")
        log.info("Campaign report written to %s", report_path)

    return 0 if result.engine.is_ok() else 1


if __name__ == "__main__":  # pragma: no cover - CLI entrypoint
    raise SystemExit(main())
