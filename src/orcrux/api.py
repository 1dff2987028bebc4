# This file is part of the orcrux project
#
# Copyright (c) 2019-2022 Manuel Barkhau (mbarkhau@gmail.com) - MIT License
# SPDX-License-Identifier: MIT

"""JSON responses for UI bindings.

Every call returns a JSON object with exactly two keys

    {"error": null, "data": "01:...\\n02:...\\n"}
    {"error": "empty secret", "data": null}

Errors are reported verbatim, the inputs are passed to the core
unvalidated.
"""

import json
import logging
from typing import Any
from typing import Dict
from typing import Iterable
from typing import Optional

from . import errors
from . import shamir
from . import common_types as ct

logger = logging.getLogger(__name__)

Response = Dict[str, Any]


def _response(data: Optional[str] = None, error: Optional[errors.SSSError] = None) -> str:
    resp: Response = {
        'error': None if error is None else str(error),
        'data' : data,
    }
    return json.dumps(resp)


def split_response(secret: str, num_shares: int, threshold: int, fmt: str) -> str:
    try:
        shares = shamir.split(secret.encode('utf-8'), num_shares, threshold, fmt)
    except errors.SSSError as err:
        logger.info(f"split failed: {type(err).__name__}")
        return _response(error=err)

    return _response(data=shares)


def recompose_response(share_lines: Iterable[ct.ShareLine]) -> str:
    try:
        secret = shamir.recompose(share_lines)
    except errors.SSSError as err:
        logger.info(f"recompose failed: {type(err).__name__}")
        return _response(error=err)

    # A wrong secret (too few shares) is usually not valid utf-8,
    # surrogateescape keeps it displayable without losing bytes.
    return _response(data=secret.decode('utf-8', errors='surrogateescape'))
