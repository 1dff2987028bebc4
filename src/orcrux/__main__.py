#!/usr/bin/env python
# This file is part of the orcrux project
#
# Copyright (c) 2019-2022 Manuel Barkhau (mbarkhau@gmail.com) - MIT License
# SPDX-License-Identifier: MIT
"""
__main__ module for orcrux.

Enables use as module: $ python -m orcrux
"""


if __name__ == '__main__':
    from . import cli

    cli.cli()
