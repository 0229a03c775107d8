"""Synthetic byte patterns for feeding the engine and the chaos injector."""

import numpy as np

from ..encoding.sequence import check_seed, lcg_words
from ..errors import ContractViolation

# 64-bit, little endian, version 1, SYSV, then padding
_ELF_HEADER = bytes([0x7F, ord("E"), ord("L"), ord("F"), 2, 1, 1, 0]) + bytes(8)


def _check_size(name: str, value: int) -> None:
    if value < 0:
        raise ContractViolation(f"{name} must be non-negative, got {value}")


def generate_noise_pattern(size: int, seed: int) -> bytearray:
    """
    Reproducible pseudo-random bytes.

    Byte ``i`` is the top byte of the ``i``-th word of the deterministic
    sequence seeded with *seed*.
    """
    _check_size("size", size)
    seed = check_seed(seed)
    _, words = lcg_words(seed, size)
    return bytearray((words >> np.uint64(56)).astype(np.uint8).tobytes())


def generate_gradient_pattern(width: int, height: int) -> bytearray:
    """Linear gradient from top-left to bottom-right, row-major (image-like data)."""
    _check_size("width", width)
    _check_size("height", height)
    if width == 0 or height == 0:
        return bytearray()
    y, x = np.mgrid[0:height, 0:width]
    values = ((x + y) * 255) // (width + height)
    return bytearray(values.astype(np.uint8).tobytes())


def generate_binary_blob(size: int) -> bytearray:
    """
    Executable-like bytes: an ELF-style header followed by 256-byte runs of
    NOP slide, sequential counter, zero fill and INT3.
    """
    _check_size("size", size)
    offsets = np.arange(size, dtype=np.int64)
    kinds = (offsets // 256) % 4
    data = np.select(
        [kinds == 0, kinds == 1, kinds == 2],
        [np.full(size, 0x90), offsets & 0xFF, np.zeros(size, dtype=np.int64)],
        default=0xCC,
    ).astype(np.uint8)
    if size >= len(_ELF_HEADER):
        data[:len(_ELF_HEADER)] = np.frombuffer(_ELF_HEADER, dtype=np.uint8)
    return bytearray(data.tobytes())
