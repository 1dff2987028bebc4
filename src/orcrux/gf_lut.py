# This file is part of the orcrux project
#
# Copyright (c) 2019-2022 Manuel Barkhau (mbarkhau@gmail.com) - MIT License
# SPDX-License-Identifier: MIT

"""Lookup tables for multiplication in GF(2**8).

The tables are derived from gf_util at import time and are never
modified afterwards, so they can be shared between threads.
"""

from typing import List
from typing import Tuple

from . import gf_util

LUT = Tuple[int, ...]


def _init_exp_log_lut() -> Tuple[LUT, LUT]:
    # 0x03 is a generator of the multiplicative group of the
    # Rijndael field, every nonzero element is some power of it.
    exp_lut: List[int] = [0] * 255
    log_lut: List[int] = [0] * 256

    val = 1
    for i in range(255):
        exp_lut[i  ] = val
        log_lut[val] = i
        val = gf_util.mul(val, 0x03)

    return tuple(exp_lut), tuple(log_lut)


EXP_LUT, LOG_LUT = _init_exp_log_lut()

# https://www.samiam.org/galois.html
#
# Multiplication can be more quickly done with a 256-byte log table and 256-byte
# exponentiation table. For example, to multiply 0x03 by 0x07 using the above tables,
# we do the following:
#
# - Look up 0x03 on the log table. We get 0x01
# - Look up 0x07 on the log table. We get 0xC6
# - Add up these two numbers together (using normal, not galois field, addition) mod 255.
#   (0x01 + 0xC6) % 255 = 0xC7
# - Look up the sum, 0xC7, on the exponentiation table. We get 0x09.

MUL_LUT: Tuple[LUT, ...] = tuple(
    tuple(0 if (a == 0 or b == 0) else EXP_LUT[(LOG_LUT[a] + LOG_LUT[b]) % 255] for b in range(256))
    for a in range(256)
)

MUL_INVERSE_LUT: LUT = tuple(0 if a == 0 else EXP_LUT[(255 - LOG_LUT[a]) % 255] for a in range(256))


def main() -> None:
    for table in [EXP_LUT, LOG_LUT, MUL_INVERSE_LUT]:
        print()
        for i, n in enumerate(table):
            print(f"{n:02x}", end=" ")
            if (i + 1) % 16 == 0:
                print()
        print()


if __name__ == '__main__':
    main()
