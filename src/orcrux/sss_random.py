# This file is part of the orcrux project
#
# Copyright (c) 2019-2022 Manuel Barkhau (mbarkhau@gmail.com) - MIT License
# SPDX-License-Identifier: MIT

"""Sources of random bytes for polynomial coefficients.

The splitter takes a RandBytes callable as an argument. Production
code uses os.urandom, tests may pass a DebugRandom for structural
assertions. Setting ORCRUX_DEBUG_RANDOM=DANGER swaps the default
for a DebugRandom, which makes every split completely insecure.
"""

import os
import warnings
from typing import List
from typing import Protocol

from . import errors


class RandBytes(Protocol):
    def __call__(self, size: int) -> bytes:
        ...


DEBUG_SEED = 4294967291

DEBUG_WARN_MSG = "Warning, orcrux using debug random! This should only happen when debugging or testing."


def is_debug_random() -> bool:
    return os.getenv('ORCRUX_DEBUG_RANDOM') == 'DANGER'


class DebugRandom:
    """Deterministic and completely insecure source of bytes.

    >>> rand = DebugRandom()
    >>> rand(4) == DebugRandom()(4)
    True
    """

    _state: int

    def __init__(self, seed: int = DEBUG_SEED) -> None:
        self._state = seed

    def __call__(self, size: int) -> bytes:
        values: List[int] = []
        for _ in range(size):
            # Knuth MMIX linear congruential generator
            self._state = (self._state * 6364136223846793005 + 1442695040888963407) % (2 ** 64)
            values.append(self._state >> 56)
        return bytes(values)


_debug_rand = DebugRandom()


def reset_debug_random() -> None:
    _debug_rand._state = DEBUG_SEED


def urandom(size: int) -> bytes:
    if is_debug_random():
        warnings.warn(DEBUG_WARN_MSG)
        return _debug_rand(size)
    else:
        return os.urandom(size)


def randbytes(source: RandBytes, size: int) -> bytes:
    """Draw exactly size bytes from source.

    Any failure of the source is converted to RandomSourceFailure.
    """
    try:
        data = source(size)
    except (OSError, NotImplementedError) as ex:
        errmsg = f"Random source failed: {ex}"
        raise errors.RandomSourceFailure(errmsg) from ex

    if not isinstance(data, bytes) or len(data) != size:
        errmsg = f"Random source returned invalid data, expected {size} bytes"
        raise errors.RandomSourceFailure(errmsg)

    return data
