"""
Tests for the overflow-safe modular arithmetic utilities.

The 64-bit path must agree with Python's arbitrary-precision integers
even when operands sit right at the top of the unsigned 64-bit range,
which is exactly where a naive fixed-width product would wrap.
"""

import numpy as np
import pytest

from primekit.errors import DivisionByZeroModulus, InvalidArgument
from primekit.modular import (
    MASK64,
    U64_MAX,
    big_mul,
    bit_length,
    mod_mul,
    mod_pow,
    mod_pow_big,
    random_big_integer,
)

# Operands near 2**64 - 1, plus a few with one empty half-word
EDGE_OPERANDS = [
    0, 1, 2, 0xFFFFFFFF, 0x100000000, 0xFFFFFFFF00000000,
    U64_MAX - 58, U64_MAX - 1, U64_MAX,
]


class TestBigMul:
    """Split half-word multiplication."""

    @pytest.mark.parametrize("a", EDGE_OPERANDS)
    @pytest.mark.parametrize("b", EDGE_OPERANDS)
    def test_matches_exact_product(self, a, b):
        high, low = big_mul(a, b)
        assert 0 <= high <= U64_MAX and 0 <= low <= U64_MAX
        assert (high << 64) | low == a * b, f"big_mul({a:#x}, {b:#x}) wrong"

    def test_max_times_max(self):
        """(2**64 - 1)**2 = 2**128 - 2**65 + 1."""
        high, low = big_mul(U64_MAX, U64_MAX)
        assert high == U64_MAX - 1
        assert low == 1


class TestModMul:
    """Double-width reduction."""

    @pytest.mark.parametrize("modulus", [3, 0xFFFFFFFB, U64_MAX - 58, U64_MAX])
    def test_matches_exact_reduction(self, modulus):
        for a in EDGE_OPERANDS:
            for b in EDGE_OPERANDS:
                assert mod_mul(a, b, modulus) == (a * b) % modulus

    def test_random_operands(self):
        rng = np.random.default_rng(7)
        for _ in range(500):
            a = random_big_integer(rng, 0, U64_MAX)
            b = random_big_integer(rng, 0, U64_MAX)
            m = random_big_integer(rng, 1, U64_MAX)
            assert mod_mul(a, b, m) == (a * b) % m

    def test_zero_modulus(self):
        with pytest.raises(DivisionByZeroModulus):
            mod_mul(3, 4, 0)


class TestModPow:
    """64-bit square-and-multiply."""

    @pytest.mark.parametrize("base", [0, 1, 2, 12345, U64_MAX])
    @pytest.mark.parametrize("modulus", [2, 7, 1000, U64_MAX])
    def test_zero_exponent_is_one(self, base, modulus):
        assert mod_pow(base, 0, modulus) == 1

    @pytest.mark.parametrize("base", [0, 1, 5, U64_MAX])
    def test_modulus_one_is_zero(self, base):
        assert mod_pow(base, 0, 1) == 0
        assert mod_pow(base, 17, 1) == 0

    def test_zero_modulus_raises(self):
        with pytest.raises(DivisionByZeroModulus):
            mod_pow(5, 3, 0)

    def test_zero_modulus_is_a_zero_division_error(self):
        with pytest.raises(ZeroDivisionError):
            mod_pow(5, 3, 0)

    @pytest.mark.parametrize("args", [(-1, 2, 5), (2, -1, 5), (2, 2, U64_MAX + 1)])
    def test_out_of_range_operands(self, args):
        with pytest.raises(InvalidArgument):
            mod_pow(*args)

    def test_near_max_matches_big_integer(self):
        """Overflow-safety round trip against arbitrary precision."""
        cases = [
            (U64_MAX - 1, U64_MAX - 2, U64_MAX),
            (U64_MAX, U64_MAX, U64_MAX - 58),
            (U64_MAX - 12345, 0xDEADBEEFCAFEBABE, U64_MAX),
            (2, U64_MAX, U64_MAX - 58),
        ]
        for base, exponent, modulus in cases:
            assert mod_pow(base, exponent, modulus) == pow(base, exponent, modulus)

    def test_fermat_on_large_prime(self):
        """2**64 - 59 is prime, so a**(p-1) == 1 (mod p)."""
        p = U64_MAX - 58
        for a in (2, 3, 0xFFFFFFFF, p - 1):
            assert mod_pow(a, p - 1, p) == 1

    def test_small_values(self):
        assert mod_pow(4, 13, 497) == 445
        assert mod_pow(7, 1, 5) == 2


class TestModPowBig:
    """Arbitrary-precision path."""

    def test_matches_builtin(self):
        m = 2**127 - 1
        assert mod_pow_big(3, m - 1, m) == 1
        assert mod_pow_big(2**200 + 1, 2**70, 10**40 + 3) == pow(2**200 + 1, 2**70, 10**40 + 3)

    def test_zero_exponent(self):
        assert mod_pow_big(10**30, 0, 10**20) == 1
        assert mod_pow_big(10**30, 0, 1) == 0

    def test_zero_modulus_raises(self):
        with pytest.raises(DivisionByZeroModulus):
            mod_pow_big(2**100, 3, 0)

    def test_negative_exponent_rejected(self):
        with pytest.raises(InvalidArgument):
            mod_pow_big(3, -1, 7)


class TestBitLength:

    @pytest.mark.parametrize("n,expected", [
        (0, 0), (1, 1), (255, 8), (256, 9), (-8, 4), (MASK64, 64), (2**64, 65),
    ])
    def test_bit_length(self, n, expected):
        assert bit_length(n) == expected


class TestRandomBigInteger:
    """Bounded-range sampling by rejection."""

    def test_min_greater_than_max(self):
        rng = np.random.default_rng(0)
        with pytest.raises(InvalidArgument):
            random_big_integer(rng, 10, 9)

    def test_equal_bounds(self):
        rng = np.random.default_rng(0)
        assert random_big_integer(rng, 2**90, 2**90) == 2**90

    def test_within_bounds(self):
        rng = np.random.default_rng(1)
        lo, hi = 2**64 + 3, 2**100 - 5
        for _ in range(1000):
            value = random_big_integer(rng, lo, hi)
            assert lo <= value <= hi

    def test_reaches_both_endpoints(self):
        rng = np.random.default_rng(2)
        seen = {random_big_integer(rng, 2, 5) for _ in range(1000)}
        assert seen == {2, 3, 4, 5}

    def test_roughly_uniform(self):
        """Rejection sampling keeps buckets flat (shift-down would skew low)."""
        rng = np.random.default_rng(3)
        draws = [random_big_integer(rng, 0, 4) for _ in range(5000)]
        counts = np.bincount(draws, minlength=5)
        assert counts.min() > 800, f"bucket counts {counts}"
        assert counts.max() < 1200, f"bucket counts {counts}"

    def test_reproducible_with_seed(self):
        rng_a, rng_b = np.random.default_rng(9), np.random.default_rng(9)
        a = [random_big_integer(rng_a, 0, 10**30) for _ in range(5)]
        b = [random_big_integer(rng_b, 0, 10**30) for _ in range(5)]
        assert a == b
