"""
Shared constants for generation and corruption.

The LCG parameters are fixed: fixtures built from the same seed must be
byte-identical regardless of which component produced them.
"""

# Default dimensionality of the sparse ternary space
DIM = 10000
DEFAULT_SPARSITY = 200

# 64-bit linear congruential generator (Knuth MMIX multiplier)
LCG_MULTIPLIER = 6364136223846793005
LCG_INCREMENT = 1
U64_MASK = (1 << 64) - 1

# Chaos injection
DEFAULT_PROBABILITY = 0.01
ERASURE_SEED_OFFSET = 12345

# Rejection sampling ceiling, as a multiple of the coupon-collector expectation
REJECTION_DRAW_FACTOR = 64
REJECTION_DRAW_FLOOR = 1024
