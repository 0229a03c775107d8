"""Deterministic sequence generator (64-bit LCG)."""

from functools import lru_cache
from typing import Tuple

import numpy as np

from ..errors import ContractViolation
from .constants import LCG_INCREMENT, LCG_MULTIPLIER, U64_MASK

WORD_BLOCK = 4096


def lcg_next(state: int) -> Tuple[int, int]:
    """
    Advance the generator by one step.

    Returns ``(new_state, word)``. The emitted word is the new state itself,
    so callers that only keep the word can feed it straight back in.
    """
    new_state = (state * LCG_MULTIPLIER + LCG_INCREMENT) & U64_MASK
    return new_state, new_state


@lru_cache(maxsize=1)
def _jump_tables() -> Tuple[np.ndarray, np.ndarray]:
    # mult[k] = a**(k+1), incr[k] = c * (1 + a + ... + a**k), both mod 2**64
    mult = np.empty(WORD_BLOCK, dtype=np.uint64)
    incr = np.empty(WORD_BLOCK, dtype=np.uint64)
    a, c = 1, 0
    for k in range(WORD_BLOCK):
        a = (a * LCG_MULTIPLIER) & U64_MASK
        c = (c * LCG_MULTIPLIER + LCG_INCREMENT) & U64_MASK
        mult[k] = a
        incr[k] = c
    return mult, incr


def lcg_words(state: int, count: int) -> Tuple[int, np.ndarray]:
    """
    Produce the next *count* words in one go.

    Equivalent to calling :func:`lcg_next` *count* times, but computed a
    block at a time with jump-ahead tables so long streams stay in numpy.
    Returns ``(new_state, words)`` with ``words`` as a ``uint64`` array.
    """
    if count < 0:
        raise ContractViolation(f"count must be non-negative, got {count}")
    mult, incr = _jump_tables()
    words = np.empty(count, dtype=np.uint64)
    state &= U64_MASK
    for start in range(0, count, WORD_BLOCK):
        n = min(WORD_BLOCK, count - start)
        block = mult[:n] * np.uint64(state) + incr[:n]
        words[start:start + n] = block
        state = int(block[-1])
    return state, words


def check_seed(seed: int) -> int:
    """Validate that *seed* fits in an unsigned 64-bit integer."""
    if isinstance(seed, bool) or not isinstance(seed, (int, np.integer)):
        raise ContractViolation(f"seed must be an int, got {type(seed).__name__}")
    seed = int(seed)
    if seed < 0 or seed > U64_MASK:
        raise ContractViolation(f"seed must be in [0, 2**64), got {seed}")
    return seed


class DeterministicSequence:
    """
    Owned wrapper around :func:`lcg_next`.

    Each instance holds its own state. Do not share one instance between
    threads; seed one per thread instead.
    """

    def __init__(self, seed: int):
        self._state = check_seed(seed)

    @property
    def state(self) -> int:
        return self._state

    def next_word(self) -> int:
        self._state, word = lcg_next(self._state)
        return word

    def next_below(self, n: int) -> int:
        """Next word reduced modulo *n*."""
        if n <= 0:
            raise ContractViolation(f"modulus must be positive, got {n}")
        return self.next_word() % n

    def __iter__(self):
        return self

    def __next__(self) -> int:
        return self.next_word()

    def __repr__(self) -> str:
        return f"DeterministicSequence(state={self._state})"
