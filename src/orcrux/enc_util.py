# This file is part of the orcrux project
#
# Copyright (c) 2019-2022 Manuel Barkhau (mbarkhau@gmail.com) - MIT License
# SPDX-License-Identifier: MIT

"""Helper functions related to share encoding/decoding.

A share line has exactly two colon separated fields

    <x-coord as 2 hex digits>:<y values as hex or base64>

for example "01:a1b2c3" or "02:obLD".
"""

import base64
import binascii
from typing import Tuple
from typing import NamedTuple

from . import errors
from . import common_types as ct


def bytes2hex(data: bytes) -> str:
    """Convert bytes to a lowercase hex string."""
    return base64.b16encode(data).decode('ascii').lower()


def hex2bytes(hex_str: str) -> bytes:
    """Convert a hex string (upper or lower case) to bytes."""
    return base64.b16decode(hex_str.encode('ascii'), casefold=True)


def bytes2base64(data: bytes) -> str:
    """Convert bytes to standard base64 with padding."""
    return base64.b64encode(data).decode('ascii')


def base642bytes(b64_str: str) -> bytes:
    return base64.b64decode(b64_str.encode('ascii'), validate=True)


def parse_encoding(fmt: str) -> ct.Encoding:
    """Parse a user supplied output format.

    >>> parse_encoding(" HEX ")
    <Encoding.HEX: 'hex'>
    >>> parse_encoding("Base64")
    <Encoding.BASE64: 'base64'>
    """
    normalized = fmt.strip().lower()
    if normalized == ct.Encoding.HEX.value:
        return ct.Encoding.HEX
    elif normalized == ct.Encoding.BASE64.value:
        return ct.Encoding.BASE64
    else:
        errmsg = f"output must be 'hex' or 'base64', got: {fmt!r}"
        raise errors.InvalidFormat(errmsg)


def encode_payload(data: bytes, encoding: ct.Encoding) -> str:
    if encoding == ct.Encoding.HEX:
        return bytes2hex(data)
    elif encoding == ct.Encoding.BASE64:
        return bytes2base64(data)
    else:
        errmsg = f"Cannot encode payload with {encoding}"
        raise errors.InvalidFormat(errmsg)


class DetectedPayload(NamedTuple):
    encoding: ct.Encoding
    data    : bytes


_DECODERS = (
    (ct.Encoding.HEX   , hex2bytes),
    (ct.Encoding.BASE64, base642bytes),
)


def detect_payload(payload: str) -> DetectedPayload:
    """Decode payload with the first encoding that accepts it.

    Hex is tried before base64, so a payload that is valid in
    both is taken to be hex.

    >>> detect_payload("6869")
    DetectedPayload(encoding=<Encoding.HEX: 'hex'>, data=b'hi')
    >>> detect_payload("aGk=")
    DetectedPayload(encoding=<Encoding.BASE64: 'base64'>, data=b'hi')
    >>> detect_payload("?!").encoding
    <Encoding.UNRECOGNIZED: 'unrecognized'>
    """
    for encoding, decode_fn in _DECODERS:
        try:
            return DetectedPayload(encoding, decode_fn(payload))
        except (binascii.Error, ValueError):
            continue

    return DetectedPayload(ct.Encoding.UNRECOGNIZED, b"")


def decode_payload(payload: str, encoding: ct.Encoding) -> bytes:
    try:
        if encoding == ct.Encoding.HEX:
            return hex2bytes(payload)
        elif encoding == ct.Encoding.BASE64:
            return base642bytes(payload)
    except (binascii.Error, ValueError) as ex:
        errmsg = f"Invalid {encoding.value} payload: {ex}"
        raise errors.DecodeError(errmsg) from ex

    errmsg = f"Cannot decode payload with {encoding}"
    raise errors.DecodeError(errmsg)


def format_share(raw_share: ct.RawShare, encoding: ct.Encoding) -> ct.ShareLine:
    """Serialize a share, without the trailing newline.

    >>> format_share(ct.RawShare(1, b"hi"), ct.Encoding.HEX)
    '01:6869'
    """
    x = raw_share.x_coord
    if not (0 < x < 256):
        errmsg = f"Invalid share with x={x}. Was not 0 < x < 256"
        raise ValueError(errmsg)

    return f"{x:02x}:{encode_payload(raw_share.data, encoding)}"


def parse_share_line(line: str, index: int = 0) -> Tuple[int, str]:
    """Split a share line into its x coordinate and raw payload.

    The payload is not decoded, since the encoding is detected
    only once per set of shares.

    >>> parse_share_line(" 0a:6869 ")
    (10, '6869')
    """
    fields = line.strip().split(":")
    if len(fields) != 2:
        errmsg = f"invalid share format at index {index}: {line.strip()!r}"
        raise errors.MalformedShare(errmsg)

    x_hex, payload = fields
    if len(x_hex) != 2:
        errmsg = f"invalid x-coordinate format at index {index}: {x_hex!r}"
        raise errors.MalformedShare(errmsg)

    try:
        x_data = hex2bytes(x_hex)
    except (binascii.Error, ValueError) as ex:
        errmsg = f"invalid x-coordinate at index {index}: {x_hex!r}"
        raise errors.MalformedShare(errmsg) from ex

    x_coord = x_data[0]
    # x=0 would be the secret itself and can never be produced by split
    if x_coord == 0:
        errmsg = f"invalid x-coordinate at index {index}: {x_hex!r} (must not be 00)"
        raise errors.MalformedShare(errmsg)

    return x_coord, payload
