# This file is part of the orcrux project
#
# Copyright (c) 2019-2022 Manuel Barkhau (mbarkhau@gmail.com) - MIT License
# SPDX-License-Identifier: MIT
"""Types used across multiple modules."""

import enum
from typing import Any
from typing import Sequence
from typing import NamedTuple

# from typing import TypeAlias
TypeAlias = Any

Secret: TypeAlias = bytes


class Encoding(enum.Enum):

    HEX          = 'hex'
    BASE64       = 'base64'
    UNRECOGNIZED = 'unrecognized'


class RawShare(NamedTuple):
    x_coord: int
    data   : bytes  # y values, one per byte of the secret


# "%02x:%s" formatted RawShare
ShareLine : TypeAlias = str
ShareLines: TypeAlias = Sequence[ShareLine]
