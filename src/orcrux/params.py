# This file is part of the orcrux project
#
# Copyright (c) 2019-2022 Manuel Barkhau (mbarkhau@gmail.com) - MIT License
# SPDX-License-Identifier: MIT
"""Parameter validation and defaults for splitting a secret.

Limits for reference.

|    Field     |   Range    |                 Info                  |
| ------------ | ---------- | ------------------------------------- |
| `num_shares` | 2..255     | x coordinates 1..255, x=0 is reserved |
| `threshold`  | 2..n       | minimum shares required for recovery  |
| `encoding`   | hex/base64 | encoding of the share payload         |
"""

import os
import re
from typing import NamedTuple

from . import errors
from . import enc_util
from . import common_types as ct

MIN_NUM_SHARES = 2
MAX_NUM_SHARES = 255
MIN_THRESHOLD  = 2

DEFAULT_SSS_T  = int(os.getenv('ORCRUX_THRESHOLD' , "2"))
DEFAULT_SSS_N  = int(os.getenv('ORCRUX_NUM_SHARES', "3"))
DEFAULT_FORMAT = os.getenv('ORCRUX_FORMAT', "hex")


class SplitParams(NamedTuple):

    num_shares: int
    threshold : int
    encoding  : ct.Encoding


def validate_secret(secret: bytes) -> None:
    if len(secret) == 0:
        raise errors.EmptySecret("empty secret")


def init_split_params(secret: bytes, num_shares: int, threshold: int, fmt: str) -> SplitParams:
    """Validate all inputs for a split, first failure wins.

    >>> init_split_params(b"x", 3, 2, "HEX")
    SplitParams(num_shares=3, threshold=2, encoding=<Encoding.HEX: 'hex'>)
    """
    validate_secret(secret)
    validate_scheme(num_shares, threshold)

    encoding = enc_util.parse_encoding(fmt)
    return SplitParams(num_shares=num_shares, threshold=threshold, encoding=encoding)


def validate_scheme(num_shares: int, threshold: int) -> None:
    if not MIN_NUM_SHARES <= num_shares <= MAX_NUM_SHARES:
        errmsg = f"num_shares must be in [{MIN_NUM_SHARES}, {MAX_NUM_SHARES}], got {num_shares}"
        raise errors.InvalidShareCount(errmsg)

    if not MIN_THRESHOLD <= threshold <= num_shares:
        errmsg = f"threshold must be in [{MIN_THRESHOLD}, {num_shares}], got {threshold}"
        raise errors.InvalidThreshold(errmsg)


class Scheme(NamedTuple):

    threshold : int
    num_shares: int


def parse_scheme(scheme_arg: str) -> Scheme:
    """Parse a TofN scheme argument.

    Only the syntax is checked here, the ranges are checked by
    init_split_params.

    >>> parse_scheme("3of5")
    Scheme(threshold=3, num_shares=5)
    """
    match = re.match(r"^(\d+)of(\d+)$", scheme_arg.strip())
    if match is None:
        errmsg = f"Invalid parameter for --scheme={scheme_arg}. Try something like '3of5'"
        raise ValueError(errmsg)

    threshold, num_shares = map(int, match.groups())
    return Scheme(threshold, num_shares)
