"""Tests for sparse vector and byte pattern generators."""

import numpy as np
import pytest
from vsa_testkit.errors import ContractViolation
from vsa_testkit.generators import (
    deterministic_sparse_vec,
    generate_binary_blob,
    generate_gradient_pattern,
    generate_noise_pattern,
    mk_random_sparsevec,
    random_sparse_vec,
)


def _assert_well_formed(vec, dims):
    assert np.all(np.diff(vec.pos) > 0)
    assert np.all(np.diff(vec.neg) > 0)
    assert len(np.intersect1d(vec.pos, vec.neg)) == 0
    for indices in (vec.pos, vec.neg):
        assert np.all((indices >= 0) & (indices < dims))


@pytest.fixture
def rng():
    return np.random.default_rng(42)


def test_random_sparse_vec(rng):
    vec = random_sparse_vec(rng, 10000, 200)
    assert vec.dimension == 10000
    assert vec.nnz == 200
    assert len(vec.pos) == len(vec.neg) == 100
    _assert_well_formed(vec, 10000)


def test_random_sparse_vec_odd_sparsity(rng):
    """Both polarities get sparsity // 2 indices."""
    vec = random_sparse_vec(rng, 1000, 7)
    assert len(vec.pos) == 3
    assert len(vec.neg) == 3


def test_random_sparse_vec_full_space(rng):
    vec = random_sparse_vec(rng, 64, 64)
    assert sorted(vec.pos.tolist() + vec.neg.tolist()) == list(range(64))


def test_mk_random_sparsevec_alias():
    a = mk_random_sparsevec(np.random.default_rng(5), 5000, 50)
    b = random_sparse_vec(np.random.default_rng(5), 5000, 50)
    assert a == b


def test_random_sparse_vec_rejects_bad_rng():
    with pytest.raises(TypeError):
        random_sparse_vec(object(), 100, 10)


def test_deterministic_sparse_vec():
    vec1 = deterministic_sparse_vec(10000, 200, 42)
    vec2 = deterministic_sparse_vec(10000, 200, 42)
    np.testing.assert_array_equal(vec1.pos, vec2.pos)
    np.testing.assert_array_equal(vec1.neg, vec2.neg)
    _assert_well_formed(vec1, 10000)

    # Different seed should give different result
    vec3 = deterministic_sparse_vec(10000, 200, 43)
    assert not np.array_equal(vec1.pos, vec3.pos)


def test_deterministic_sparse_vec_odd_nnz_favours_neg():
    vec = deterministic_sparse_vec(1000, 7, 1)
    assert len(vec.pos) == 3
    assert len(vec.neg) == 4


@pytest.mark.parametrize("dims,sparsity", [(0, 0), (10, 0), (1, 1), (17, 17)])
def test_deterministic_sparse_vec_edges(dims, sparsity):
    vec = deterministic_sparse_vec(dims, sparsity, 7)
    assert vec.nnz == sparsity
    _assert_well_formed(vec, dims)


@pytest.mark.parametrize("dims,sparsity", [(10, 11), (0, 1), (-1, 0), (10, -2)])
def test_generators_reject_bad_shape(rng, dims, sparsity):
    with pytest.raises(ContractViolation):
        deterministic_sparse_vec(dims, sparsity, 1)
    with pytest.raises(ContractViolation):
        random_sparse_vec(rng, dims, sparsity)


def test_deterministic_sparse_vec_rejects_bad_seed():
    with pytest.raises(ContractViolation):
        deterministic_sparse_vec(100, 10, -5)


def test_deterministic_sparse_vec_numpy_seed():
    assert deterministic_sparse_vec(100, 10, np.int64(3)) == deterministic_sparse_vec(100, 10, 3)


def test_draw_ceiling_reports_contract_violation():
    """A source that never produces a new index hits the draw ceiling."""
    class StuckRng:
        def integers(self, low, high):
            return 0

    with pytest.raises(ContractViolation):
        random_sparse_vec(StuckRng(), 100, 4, max_draws=50)


def test_generate_noise_pattern():
    data1 = generate_noise_pattern(1000, 42)
    data2 = generate_noise_pattern(1000, 42)
    assert len(data1) == 1000
    assert data1 == data2

    data3 = generate_noise_pattern(1000, 43)
    assert data1 != data3


def test_generate_noise_pattern_first_byte():
    # seed 0 steps to state 1, whose top byte is 0
    assert generate_noise_pattern(1, 0) == bytearray([0])


def test_generate_gradient_pattern():
    data = generate_gradient_pattern(4, 2)
    # ((x + y) * 255) // 6, row-major
    assert list(data) == [0, 42, 85, 127, 42, 85, 127, 170]
    assert generate_gradient_pattern(0, 5) == bytearray()


def test_generate_binary_blob():
    blob = generate_binary_blob(1024)
    assert len(blob) == 1024
    assert blob[:4] == b"\x7fELF"
    assert blob[4:8] == bytes([2, 1, 1, 0])
    assert blob[8:16] == bytes(8)
    assert blob[16] == 0x90
    assert blob[256 + 3] == (256 + 3) & 0xFF
    assert blob[512] == 0x00
    assert blob[1000] == 0xCC


def test_generate_binary_blob_small():
    # Too small for a header: pattern only
    assert generate_binary_blob(8) == bytearray([0x90] * 8)
