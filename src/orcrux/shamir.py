# This file is part of the orcrux project
#
# Copyright (c) 2019-2022 Manuel Barkhau (mbarkhau@gmail.com) - MIT License
# SPDX-License-Identifier: MIT

"""Shamir Share generation and recovery.

Each byte of the secret is the intercept of its own random polynomial
over GF(256). A share is the row of y values of all those polynomials
at one x coordinate.

#     i=  0   1   2   3   4   5   6   7
# x=1   y10 y11 y12 y13 y14 y15 y16 y17
# x=2   y20 y21 y22 y23 y24 y25 y26 y27
# x=3   y30 y31 y32 y33 y34 y35 y36 y37
"""

import logging
from typing import Dict
from typing import List
from typing import Tuple
from typing import Iterable
from typing import Iterator

from . import errors
from . import params
from . import gf_poly
from . import enc_util
from . import sss_random
from . import common_types as ct

logger = logging.getLogger(__name__)

# (x_coord, byte offset) -> y_coord
YCoords = Dict[Tuple[int, int], int]


def _split_data_gf_256(
    data      : bytes,
    threshold : int,
    num_shares: int,
    randbytes : sss_random.RandBytes,
) -> Iterator[ct.RawShare]:
    x_coords = list(range(1, num_shares + 1))

    y_coords_by_x: YCoords = {}
    for i, secret_byte in enumerate(data):
        y_coords = gf_poly.evaluate(secret_byte, x_coords, threshold, randbytes)
        for x_coord, y_coord in zip(x_coords, y_coords):
            y_coords_by_x[x_coord, i] = y_coord

    for x_coord in x_coords:
        y_values = [y_coords_by_x[x_coord, i] for i in range(len(data))]
        yield ct.RawShare(x_coord, bytes(y_values))


def split_raw(
    secret    : ct.Secret,
    num_shares: int,
    threshold : int,
    randbytes : sss_random.RandBytes = sss_random.urandom,
) -> List[ct.RawShare]:
    """Split secret into num_shares RawShares with x=1..num_shares."""
    params.validate_secret(secret)
    params.validate_scheme(num_shares, threshold)
    raw_shares = list(_split_data_gf_256(secret, threshold, num_shares, randbytes))
    assert len(raw_shares) == num_shares

    # make sure we only return shares that we can join again
    assert recompose_raw(raw_shares[:threshold]) == secret
    assert recompose_raw(raw_shares[-threshold:]) == secret

    return raw_shares


def split(
    secret    : ct.Secret,
    num_shares: int,
    threshold : int,
    fmt       : str = params.DEFAULT_FORMAT,
    randbytes : sss_random.RandBytes = sss_random.urandom,
) -> str:
    """Split secret so that any threshold of num_shares lines recover it.

    Returns num_shares newline terminated lines "%02x:%s", ordered by
    x coordinate. Either all lines are returned or an SSSError is
    raised, there is no partial output.
    """
    split_params = params.init_split_params(secret, num_shares, threshold, fmt)

    raw_shares = split_raw(secret, split_params.num_shares, split_params.threshold, randbytes)
    lines      = [enc_util.format_share(raw_share, split_params.encoding) for raw_share in raw_shares]

    logger.debug(
        f"split secret of {len(secret)} bytes into {len(lines)} shares "
        f"(threshold={split_params.threshold}, format={split_params.encoding.value})"
    )
    return "".join(line + "\n" for line in lines)


def parse_shares(share_lines: Iterable[ct.ShareLine]) -> List[ct.RawShare]:
    """Parse share lines, skipping blank lines.

    The payload encoding is detected from the first share and
    assumed for all others.
    """
    lines = list(share_lines)
    if len(lines) == 0:
        raise errors.NoShares("no shares provided")

    encoding: ct.Encoding = ct.Encoding.UNRECOGNIZED
    data_len: int         = -1

    raw_shares: List[ct.RawShare] = []
    for index, line in enumerate(lines):
        if not line.strip():
            continue

        x_coord, payload = enc_util.parse_share_line(line, index)

        if encoding == ct.Encoding.UNRECOGNIZED:
            detected = enc_util.detect_payload(payload)
            if detected.encoding == ct.Encoding.UNRECOGNIZED:
                errmsg = f"unable to detect encoding format from share at index {index}"
                raise errors.DecodeError(errmsg)
            if len(detected.data) == 0:
                errmsg = f"share at index {index} contains no data"
                raise errors.DecodeError(errmsg)

            encoding = detected.encoding
            data_len = len(detected.data)
            logger.debug(f"detected share encoding: {encoding.value}")
            data = detected.data
        else:
            try:
                data = enc_util.decode_payload(payload, encoding)
            except errors.DecodeError as ex:
                errmsg = f"failed to decode share data at index {index}: {ex}"
                raise errors.DecodeError(errmsg) from ex

        if len(data) != data_len:
            errmsg = f"share at index {index} has inconsistent length: got {len(data)}, expected {data_len}"
            raise errors.InconsistentShareLength(errmsg)

        raw_shares.append(ct.RawShare(x_coord, data))

    return raw_shares


def recompose_raw(raw_shares: List[ct.RawShare]) -> ct.Secret:
    if len(raw_shares) < 2:
        errmsg = f"at least 2 shares are required for reconstruction, got {len(raw_shares)}"
        raise errors.InsufficientShares(errmsg)

    x_coords = [raw_share.x_coord for raw_share in raw_shares]
    gf_poly.validate_x_coords(x_coords)

    data_len = len(raw_shares[0].data)
    assert all(len(raw_share.data) == data_len for raw_share in raw_shares)

    secret_ints: List[int] = []
    for i in range(data_len):
        y_coords = [raw_share.data[i] for raw_share in raw_shares]
        secret_ints.append(gf_poly.interpolate_at_zero(x_coords, y_coords))

    return bytes(secret_ints)


def recompose(share_lines: Iterable[ct.ShareLine]) -> ct.Secret:
    """Recover the secret from a subset of the lines produced by split.

    The order of the lines is irrelevant and blank lines are ignored.

    NOTE: The threshold is not part of the share format, so only a
      minimum of two shares is enforced. Fewer than threshold shares
      produce a wrong secret rather than an error.
    """
    raw_shares = parse_shares(share_lines)
    secret     = recompose_raw(raw_shares)
    logger.debug(f"recomposed secret of {len(secret)} bytes from {len(raw_shares)} shares")
    return secret
