# This file is part of the orcrux project
#
# Copyright (c) 2019-2022 Manuel Barkhau (mbarkhau@gmail.com) - MIT License
# SPDX-License-Identifier: MIT

"""Polynomial calculation functions.

Mainly polynomial evaluation and lagrange interpolation logic.

Helpful introduction: https://www.youtube.com/watch?v=kkMps3X_tEE
(Simple introduction to Shamir's Secret Sharing and Lagrange interpolation)

A helpful introduction to Galois Fields:
https://crypto.stackexchange.com/a/2718
"""

import collections
from typing import List
from typing import Tuple
from typing import Callable
from typing import Sequence

from . import errors
from . import gf_lut
from . import gf_util
from . import sss_random

Coefficients = Tuple[int, ...]


def poly_eval_fn(coeffs: Coefficients) -> Callable[[int], int]:
    """Return function to evaluate polynomial at x.

    The coefficients are ordered in ascending powers of x, the
    evaluation uses Horner's method:

        a0 + x * (a1 + x * (a2 + ... x * (an)))
    """
    if len(coeffs) == 0:
        raise ValueError("polynomial requires at least one coefficient")

    def eval_at(at_x: int) -> int:
        y = coeffs[-1]
        for coeff in reversed(coeffs[:-1]):
            y = gf_util.mul(y, at_x) ^ coeff
        return y

    return eval_at


def evaluate(
    secret_byte: int,
    x_coords   : Sequence[int],
    threshold  : int,
    randbytes  : sss_random.RandBytes = sss_random.urandom,
) -> List[int]:
    """Evaluate a fresh random polynomial with intercept secret_byte.

    The polynomial has degree threshold - 1. Its coefficients are
    drawn from randbytes once per call, the same polynomial is
    evaluated at every x in x_coords and the coefficients are dropped
    when this function returns. They must never be reused for another
    secret byte.
    """
    assert 0 <= secret_byte < 256, secret_byte
    assert all(0 < x < 256 for x in x_coords), x_coords
    assert threshold >= 1, threshold

    # The coefficients of the polynomial are ordered in ascending
    # powers of x, so coeffs = [2, 5, 3] represents 2x° + 5x¹ + 3x²
    #
    # Note that the secret in the above case is 2 (the 0th
    # coefficient), which corresponds to the y value when we evaluate
    # at x=0. This is also why other implementations call this value
    # "intercept" or "y_intercept".
    rand_coeffs = sss_random.randbytes(randbytes, threshold - 1)
    eval_at     = poly_eval_fn((secret_byte,) + tuple(rand_coeffs))
    return [eval_at(x) for x in x_coords]


def validate_x_coords(x_coords: Sequence[int]) -> None:
    if len(x_coords) != len(set(x_coords)):
        counts = collections.Counter(x_coords)
        dupes  = sorted(x for x, count in counts.items() if count > 1)
        errmsg = "Duplicate shares with x=" + ", ".join(f"{x:02x}" for x in dupes)
        raise errors.DuplicateShare(errmsg)

    for i, x in enumerate(x_coords):
        # x=0 would be the intercept itself
        if not (0 < x < 256):
            errmsg = f"Invalid share {i + 1} with x={x}. Possible attack."
            raise errors.MalformedShare(errmsg)


def interpolate_at_zero(x_coords: Sequence[int], y_coords: Sequence[int]) -> int:
    r"""Recover the intercept of the polynomial through (x_i, y_i).

    # \delta_i(x) = \prod{ \frac{x - j}{i - j} }
    # \space
    # \text{for} \space j \in C, j \not= i

    In a characteristic 2 field subtraction is xor, so the lagrange
    basis at x=0 is

        l_i(0) = PROD_{j != i} x_j / (x_i ^ x_j)

    The products and the division use the lookup tables, which hold
    the results of gf_util.mul and gf_util.inverse, so numer / denum
    here is gf_util.div(numer, denum).

    The caller is responsible for validating x_coords, they must be
    distinct so that no denominator is zero.
    """
    assert len(x_coords) == len(y_coords)
    if len(x_coords) < 2:
        raise errors.InsufficientShares("Cannot interpolate with fewer than two points")

    mul_lut = gf_lut.MUL_LUT
    inv_lut = gf_lut.MUL_INVERSE_LUT

    result = 0
    for i, (xi, yi) in enumerate(zip(x_coords, y_coords)):
        numer = 1
        denum = 1
        for j, xj in enumerate(x_coords):
            if i != j:
                numer = mul_lut[numer][xj]
                denum = mul_lut[denum][xi ^ xj]

        assert denum != 0
        basis  = mul_lut[numer][inv_lut[denum]]
        result = result ^ mul_lut[yi][basis]
    return result
