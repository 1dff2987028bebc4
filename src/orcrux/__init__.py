# This file is part of the orcrux project
#
# Copyright (c) 2019-2022 Manuel Barkhau (mbarkhau@gmail.com) - MIT License
# SPDX-License-Identifier: MIT
"""orcrux: Split secrets with Shamir's Secret Sharing.

A cli app and library to split a secret into shares and recompose it
from any threshold of them.
"""

from .shamir import split
from .shamir import recompose

__version__ = "2026.1017-beta"

__all__ = ['split', 'recompose']
