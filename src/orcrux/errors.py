# This file is part of the orcrux project
#
# Copyright (c) 2019-2022 Manuel Barkhau (mbarkhau@gmail.com) - MIT License
# SPDX-License-Identifier: MIT

"""Exceptions raised by split and recompose.

All of them derive from ValueError, so callers that only care about
"bad input" can catch that, while the shell can report the kind.
"""


class SSSError(ValueError):
    pass


# split


class EmptySecret(SSSError):
    pass


class InvalidShareCount(SSSError):
    pass


class InvalidThreshold(SSSError):
    pass


class InvalidFormat(SSSError):
    pass


class RandomSourceFailure(SSSError):
    """The random source failed or returned too few bytes.

    Fatal for the whole split, it is never retried.
    """


# recompose


class NoShares(SSSError):
    pass


class MalformedShare(SSSError):
    pass


class DecodeError(SSSError):
    pass


class InconsistentShareLength(SSSError):
    pass


class InsufficientShares(SSSError):
    pass


class DuplicateShare(SSSError):
    pass
