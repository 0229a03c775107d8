"""
Reproducible corruption of byte buffers.

Every operation re-derives its generator state from the injector's seed, so
the same injector applied to the same input always produces the same damage.
Buffers are mutated in place through a numpy view; anything exposing a
writable buffer works (``bytearray``, writable ``memoryview``, 1-D ``uint8``
arrays).
"""

import logging
import math
from dataclasses import dataclass, replace
from typing import List, Optional

import numpy as np

from ..encoding.constants import DEFAULT_PROBABILITY, ERASURE_SEED_OFFSET, U64_MASK
from ..encoding.sequence import check_seed, lcg_words
from ..errors import ContractViolation

log = logging.getLogger(__name__)

# Words generated per batch when applying many flip events
_FLIP_BATCH = 1 << 16


def _byte_view(buffer) -> np.ndarray:
    """Writable flat uint8 view of *buffer*, sharing its memory."""
    if isinstance(buffer, np.ndarray):
        if buffer.dtype != np.uint8 or buffer.ndim != 1:
            raise TypeError(f"expected a 1-D uint8 array, got {buffer.dtype} shape={buffer.shape}")
        if not buffer.flags.writeable:
            raise TypeError("buffer is read-only")
        return buffer
    view = memoryview(buffer)
    if view.readonly:
        raise TypeError(f"buffer of type {type(buffer).__name__} is read-only")
    return np.frombuffer(view.cast("B"), dtype=np.uint8)


def _check_rate(name: str, rate: float) -> float:
    rate = float(rate)
    if not 0.0 <= rate <= 1.0:
        raise ContractViolation(f"{name} must be in [0, 1], got {rate}")
    return rate


def _clamp_probability(p: float) -> float:
    p = float(p)
    if math.isnan(p):
        raise ContractViolation("probability must not be NaN")
    return min(max(p, 0.0), 1.0)


@dataclass(frozen=True)
class ChaosInjector:
    """
    Chaos injection utilities for resilience testing.

    Attributes:
        seed: Unsigned 64-bit seed all corruption streams derive from.
        probability: Default error rate for :meth:`corrupt_bytes`, clamped
            to [0, 1].
    """
    seed: int = 0
    probability: float = DEFAULT_PROBABILITY

    def __post_init__(self):
        object.__setattr__(self, "seed", check_seed(self.seed))
        object.__setattr__(self, "probability", _clamp_probability(self.probability))

    def with_probability(self, p: float) -> "ChaosInjector":
        """Return a copy with a different (clamped) injection probability."""
        return replace(self, probability=p)

    def corrupt_bytes(self, buffer, error_rate: Optional[float] = None) -> int:
        """
        Flip bits of *buffer* in place.

        ``floor(len(buffer) * error_rate)`` flip events are applied. Each
        event picks a byte and a bit from one generator word; events are
        independent, so the same bit may be hit more than once (and two
        hits cancel out).

        Args:
            buffer: Writable byte buffer.
            error_rate: Flip events per byte, defaults to ``probability``.

        Returns:
            Number of flip events applied.
        """
        view = _byte_view(buffer)
        rate = _check_rate("error_rate", self.probability if error_rate is None else error_rate)
        length = len(view)
        if length == 0:
            return 0

        num_errors = int(length * rate)
        state = self.seed
        remaining = num_errors
        while remaining:
            n = min(remaining, _FLIP_BATCH)
            state, words = lcg_words(state, n)
            positions = (words % np.uint64(length)).astype(np.intp)
            bits = (words >> np.uint64(8)) % np.uint64(8)
            masks = (np.uint64(1) << bits).astype(np.uint8)
            np.bitwise_xor.at(view, positions, masks)
            remaining -= n

        log.debug("seed=%d: applied %d flip events over %d bytes", self.seed, num_errors, length)
        return num_errors

    def corrupt_copy(self, buffer, error_rate: Optional[float] = None) -> bytearray:
        """Corrupted copy of *buffer*; the original is left untouched."""
        corrupted = bytearray(buffer)
        self.corrupt_bytes(corrupted, error_rate)
        return corrupted

    def simulate_packet_loss(self, buffer, loss_rate: float, packet_size: int) -> List[int]:
        """
        Zero out randomly chosen packets of *buffer* in place.

        The buffer is split into ``ceil(len / packet_size)`` packets (the
        last one may be short) and ``floor(num_packets * loss_rate)`` packet
        draws are made. Repeated draws collapse, so at most that many
        distinct packets are dropped.

        Returns:
            Sorted indices of the packets that were zeroed.
        """
        view = _byte_view(buffer)
        rate = _check_rate("loss_rate", loss_rate)
        if packet_size <= 0:
            raise ContractViolation(f"packet_size must be positive, got {packet_size}")
        length = len(view)
        if length == 0:
            return []

        num_packets = -(-length // packet_size)
        packets_to_drop = int(num_packets * rate)
        _, words = lcg_words(self.seed, packets_to_drop)
        dropped = sorted(set((words % np.uint64(num_packets)).tolist()))

        for packet_idx in dropped:
            start = packet_idx * packet_size
            view[start:min(start + packet_size, length)] = 0

        log.debug(
            "seed=%d: dropped %d of %d packets (%d draws)",
            self.seed, len(dropped), num_packets, packets_to_drop,
        )
        return dropped

    def inject_erasures(self, buffer, count: int) -> List[int]:
        """
        Zero up to *count* random bytes of *buffer* in place.

        ``min(count, len(buffer))`` positions are drawn from a stream offset
        from the flip stream. A byte is only erased if it is non-zero, and
        positions that repeat are not redrawn.

        Returns:
            Distinct positions actually changed, in draw order.
        """
        view = _byte_view(buffer)
        if count < 0:
            raise ContractViolation(f"count must be non-negative, got {count}")
        length = len(view)
        if length == 0:
            return []

        state = (self.seed + ERASURE_SEED_OFFSET) & U64_MASK
        _, words = lcg_words(state, min(count, length))
        erased = []
        for pos in (words % np.uint64(length)).tolist():
            if view[pos] != 0:
                view[pos] = 0
                erased.append(pos)

        log.debug("seed=%d: erased %d of %d requested bytes", self.seed, len(erased), count)
        return erased
