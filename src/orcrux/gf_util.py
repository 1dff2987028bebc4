# This file is part of the orcrux project
#
# Copyright (c) 2019-2022 Manuel Barkhau (mbarkhau@gmail.com) - MIT License
# SPDX-License-Identifier: MIT

"""Galois Field arithmetic functions for GF(2**8)."""

# https://en.wikipedia.org/wiki/Finite_field_arithmetic#Rijndael's_finite_field
#
# x**8 + x**4 + x**3 + x + 1  (0b100011011 = 0x11B)
#
# Addition and subtraction in a characteristic 2 field are both xor.
# Multiplication is done as a carry-less product, reducing by the
# Rijndael polynomial whenever the intermediate value overflows 8 bits.
#
# For example, 0x57 * 0x83 = 0xC1 in Rijndael's field:
#
#    (x6 + x4 + x2 + x + 1)(x7 + x + 1)
#  = x13 + x11 + x9 + x8 + x6 + x5 + x4 + x3 + 1
#
#  and
#
#    x13 + x11 + x9 + x8 + x6 + x5 + x4 + x3 + 1
#      mod x8 + x4 + x3 + x + 1
#  = x7 + x6 + 1
#  = 0b11000001 = 0xC1

# The multiplicative inverse for an element a of a finite field can be
# calculated a number of different ways:
#
# Since the nonzero elements of GF(p^n) form a finite group with respect
# to multiplication, a^((p^n)−1) = 1 (for a != 0), thus the inverse of a
# is a^((p^n)−2).


RIJNDAEL_REDUCING_POLYNOMIAL = 0x011B

# The low byte of the reducing polynomial, which is what remains after
# the overflowing x**8 term has been shifted out.
_REDUCTION_BYTE = RIJNDAEL_REDUCING_POLYNOMIAL & 0xFF


def mul(a: int, b: int) -> int:
    """Multiply two elements of GF(256).

    >>> hex(mul(0x57, 0x83))
    '0xc1'
    >>> mul(0x03, 0x07)
    9
    >>> mul(0xAB, 0)
    0
    """
    assert 0 <= a < 256, a
    assert 0 <= b < 256, b

    res = 0
    for _ in range(8):
        if b & 1:
            res = res ^ a

        overflow = a & 0x80
        a        = (a << 1) & 0xFF
        if overflow:
            a = a ^ _REDUCTION_BYTE

        b = b >> 1

    return res


def pow_slow(a: int, exp: int) -> int:
    res = 1
    n   = exp
    while n > 0:
        res = mul(res, a)
        n -= 1
    return res


def inverse(val: int) -> int:
    """Calculate multiplicative inverse in GF(256).

    Since the nonzero elements of GF(p^n) form a finite group with
    respect to multiplication,

      a^((p^n)−1) = 1         (for a != 0)

      thus the inverse of a is

      a^((p^n)−2) = a^254

    which is computed with 253 multiplications. There is no inverse
    for 0, by convention inverse(0) == 0.

    >>> inverse(1)
    1
    >>> mul(0x53, inverse(0x53))
    1
    """
    if val == 0:
        return 0

    inv = val
    for _ in range(2 ** 8 - 3):
        inv = mul(inv, val)

    assert mul(val, inv) == 1
    return inv


def div(a: int, b: int) -> int:
    """Divide a by b in GF(256).

    There is no meaningful result for b == 0, by convention
    div(a, 0) == 0. Callers must make sure they never divide by zero,
    interpolation for example checks that x coordinates are distinct.
    """
    if b == 0:
        return 0
    return mul(a, inverse(b))
