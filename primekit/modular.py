"""
Modular arithmetic utilities.

Responsibility: overflow-safe arithmetic only. No primality logic.

The 64-bit path mirrors what a fixed-width implementation has to do:
a product of two 64-bit operands is built from four 32-bit partial
products into a (high, low) pair of 64-bit words, and that pair is then
reduced limb by limb through a 96-bit intermediate. A plain 64-bit
multiply followed by `% modulus` would silently drop the high word.

The arbitrary-precision path delegates to the built-in `pow`.
"""

import numpy as np
from typing import Tuple

from .errors import DivisionByZeroModulus, InvalidArgument

MASK32 = 0xFFFFFFFF
MASK64 = 0xFFFFFFFFFFFFFFFF
U64_MAX = MASK64


def _check_u64(name: str, value: int) -> None:
    if not 0 <= value <= U64_MAX:
        raise InvalidArgument(f"{name}={value} is outside the unsigned 64-bit range")


def big_mul(a: int, b: int) -> Tuple[int, int]:
    """
    Full 128-bit product of two unsigned 64-bit operands.

    Parameters
    ----------
    a, b : int
        Operands in [0, 2**64 - 1].

    Returns
    -------
    tuple of int
        (high, low) 64-bit words with a * b == high * 2**64 + low.
    """
    a_lo, a_hi = a & MASK32, a >> 32
    b_lo, b_hi = b & MASK32, b >> 32

    lo_lo = a_lo * b_lo
    hi_lo = a_hi * b_lo
    lo_hi = a_lo * b_hi
    hi_hi = a_hi * b_hi

    # Middle column: carry out of lo_lo plus both cross terms' low halves.
    # Bounded by (2**32 - 1)**2 + 2 * (2**32 - 1) < 2**64.
    cross = (lo_lo >> 32) + (hi_lo & MASK32) + lo_hi

    high = hi_hi + (hi_lo >> 32) + (cross >> 32)
    low = ((cross << 32) & MASK64) | (lo_lo & MASK32)
    return high, low


def mod_mul(a: int, b: int, modulus: int) -> int:
    """
    Compute (a * b) % modulus for unsigned 64-bit operands without overflow.

    The double-width product is reduced Horner-style in base 2**32, so no
    intermediate exceeds 96 bits.
    """
    if modulus == 0:
        raise DivisionByZeroModulus("modulus must be non-zero")

    high, low = big_mul(a, b)
    if high == 0:
        return low % modulus

    r = high % modulus
    r = ((r << 32) | (low >> 32)) % modulus
    r = ((r << 32) | (low & MASK32)) % modulus
    return r


def mod_pow(base: int, exponent: int, modulus: int) -> int:
    """
    Unsigned 64-bit modular exponentiation (square-and-multiply).

    Parameters
    ----------
    base, exponent, modulus : int
        Values in [0, 2**64 - 1].

    Returns
    -------
    int
        base ** exponent % modulus. By convention an exponent of 0 gives 1,
        or 0 when modulus == 1.

    Raises
    ------
    DivisionByZeroModulus
        If modulus == 0.
    InvalidArgument
        If any operand is outside the unsigned 64-bit range.
    """
    _check_u64("base", base)
    _check_u64("exponent", exponent)
    _check_u64("modulus", modulus)
    if modulus == 0:
        raise DivisionByZeroModulus("modulus must be non-zero")
    if modulus == 1:
        return 0
    if exponent == 0:
        return 1

    result = 1
    x = base % modulus
    while exponent > 0:
        if exponent & 1:
            result = mod_mul(result, x, modulus)
        x = mod_mul(x, x, modulus)
        exponent >>= 1
    return result


def mod_pow_big(base: int, exponent: int, modulus: int) -> int:
    """Arbitrary-precision modular exponentiation, same conventions as mod_pow."""
    if modulus == 0:
        raise DivisionByZeroModulus("modulus must be non-zero")
    if modulus < 0 or exponent < 0:
        raise InvalidArgument("exponent and modulus must be non-negative")
    return pow(base, exponent, modulus)


def bit_length(n: int) -> int:
    """Number of bits needed to represent abs(n); 0 for n == 0."""
    return abs(n).bit_length()


def random_big_integer(rng: np.random.Generator, min_value: int, max_value: int) -> int:
    """
    Draw a uniform integer from the closed range [min_value, max_value].

    Random bytes are drawn to cover the span's bit length, the unused top
    bits are masked off, and draws that still exceed the span are rejected
    and redrawn. Each draw is accepted with probability above 1/2.

    Parameters
    ----------
    rng : np.random.Generator
        Source of random bytes. Not cryptographically secure.
    min_value, max_value : int
        Inclusive bounds, arbitrary precision.

    Returns
    -------
    int
        Sampled value.
    """
    if min_value > max_value:
        raise InvalidArgument(f"min_value={min_value} exceeds max_value={max_value}")
    if min_value == max_value:
        return min_value

    span = max_value - min_value
    bits = bit_length(span)
    n_bytes = (bits + 7) // 8
    mask = (1 << bits) - 1

    while True:
        value = int.from_bytes(rng.bytes(n_bytes), "little") & mask
        if value <= span:
            return min_value + value
