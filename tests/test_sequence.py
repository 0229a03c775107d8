"""Tests for the deterministic sequence generator."""

import numpy as np
import pytest
from vsa_testkit.encoding.constants import LCG_MULTIPLIER, U64_MASK
from vsa_testkit.encoding.sequence import (
    WORD_BLOCK,
    DeterministicSequence,
    check_seed,
    lcg_next,
    lcg_words,
)
from vsa_testkit.errors import ContractViolation

def test_lcg_next_known_values():
    assert lcg_next(0) == (1, 1)
    assert lcg_next(1) == (LCG_MULTIPLIER + 1, LCG_MULTIPLIER + 1)

def test_lcg_next_wraps():
    state, word = lcg_next(U64_MASK)
    assert state == word
    assert state == (U64_MASK * LCG_MULTIPLIER + 1) % 2**64
    assert 0 <= state <= U64_MASK

def test_lcg_words_matches_stepwise():
    """Block generation agrees with stepping one word at a time."""
    count = WORD_BLOCK + 37
    state = 42
    expected = []
    for _ in range(count):
        state, word = lcg_next(state)
        expected.append(word)

    new_state, words = lcg_words(42, count)
    assert words.dtype == np.uint64
    assert words.tolist() == expected
    assert new_state == state

def test_lcg_words_empty():
    state, words = lcg_words(7, 0)
    assert state == 7
    assert len(words) == 0

def test_deterministic_sequence():
    seq = DeterministicSequence(42)
    state = 42
    for _ in range(5):
        state, word = lcg_next(state)
        assert seq.next_word() == word
    assert seq.state == state

def test_deterministic_sequence_independent_instances():
    a = DeterministicSequence(9)
    b = DeterministicSequence(9)
    first = [a.next_below(100) for _ in range(20)]
    assert [b.next_below(100) for _ in range(20)] == first
    assert all(0 <= x < 100 for x in first)

def test_next_below_rejects_non_positive():
    with pytest.raises(ContractViolation):
        DeterministicSequence(1).next_below(0)

@pytest.mark.parametrize("seed", [-1, 2**64, 1.5, True])
def test_check_seed_rejects(seed):
    with pytest.raises(ContractViolation):
        check_seed(seed)

@pytest.mark.parametrize("seed", [np.uint64(42), np.int64(42), np.uint32(42)])
def test_check_seed_accepts_numpy_integers(seed):
    result = check_seed(seed)
    assert result == 42
    assert type(result) is int

def test_check_seed_rejects_negative_numpy_integer():
    with pytest.raises(ContractViolation):
        check_seed(np.int64(-3))
