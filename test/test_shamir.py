import os
import random
import itertools

import pytest

from orcrux import errors
from orcrux import shamir
from orcrux import enc_util
from orcrux import sss_random
from orcrux.common_types import RawShare


def _lines(shares_text):
    lines = shares_text.splitlines()
    assert shares_text.endswith("\n")
    return lines


def test_split_hi():
    shares = shamir.split(b"hi", 3, 2, "hex")
    lines  = _lines(shares)
    assert len(lines) == 3
    for i, line in enumerate(lines):
        x_hex, payload = line.split(":")
        assert x_hex == f"{i + 1:02x}"
        assert len(payload) == 4
        assert enc_util.hex2bytes(payload)

    for combo in itertools.combinations(lines, 2):
        assert shamir.recompose(list(combo)) == b"hi"


@pytest.mark.parametrize("fmt", ["hex", "base64", " Base64 ", "HEX"])
def test_split_and_recompose(fmt):
    secret = os.urandom(32)
    lines  = _lines(shamir.split(secret, 5, 3, fmt))
    assert len(lines) == 5
    assert shamir.recompose(lines) == secret

    random.shuffle(lines)
    assert shamir.recompose(lines[:3]) == secret
    assert shamir.recompose(lines[:4]) == secret


def test_split_base64_format():
    lines = _lines(shamir.split(b"abc", 2, 2, "base64"))
    for line in lines:
        x_hex, payload = line.split(":")
        assert enc_util.base642bytes(payload)
        assert len(enc_util.base642bytes(payload)) == 3


def test_subset_independence():
    secret = b"correct horse battery staple"
    lines  = _lines(shamir.split(secret, 6, 3, "hex"))

    first_3         = lines[:3]
    middle_3        = lines[2:5]
    non_consecutive = [lines[0], lines[3], lines[5]]

    assert shamir.recompose(first_3) == secret
    assert shamir.recompose(middle_3) == secret
    assert shamir.recompose(non_consecutive) == secret

    for combo in itertools.combinations(lines, 3):
        assert shamir.recompose(list(combo)) == secret


EDGE_CASES = [
    b"\x00",
    b"\xff",
    b"\x00" * 16,
    b"\xff" * 16,
    bytes(range(256)),
    "pässwörd ✓".encode('utf-8'),
]


@pytest.mark.parametrize("secret", EDGE_CASES)
def test_shamir_edgecases(secret):
    lines = _lines(shamir.split(secret, 11, 7, "base64"))
    assert shamir.recompose(lines[:7]) == secret
    assert shamir.recompose(lines[4:]) == secret


@pytest.mark.parametrize("num_shares, threshold", [(2, 2), (255, 2), (255, 255), (17, 9)])
def test_split_bounds(num_shares, threshold):
    secret = os.urandom(3)
    lines  = _lines(shamir.split(secret, num_shares, threshold, "hex"))
    assert len(lines) == num_shares
    assert lines[-1].startswith(f"{num_shares:02x}:")

    sample = random.sample(lines, threshold)
    assert shamir.recompose(sample) == secret


def test_split_fuzz():
    for _ in range(20):
        num_shares = random.randint(2, 12)
        threshold  = random.randint(2, num_shares)
        fmt        = random.choice(["hex", "base64"])
        secret_len = random.randint(1, 40)
        if fmt == "base64" and secret_len % 3 == 0:
            # unpadded base64 of only hex digits is detected as hex
            secret_len += 1
        secret = os.urandom(secret_len)
        debug_info = {
            'secret_len': secret_len,
            'threshold' : threshold,
            'num_shares': num_shares,
            'fmt'       : fmt,
        }
        lines = _lines(shamir.split(secret, num_shares, threshold, fmt))
        assert len(lines) == num_shares, debug_info

        for sample_size in range(threshold, num_shares + 1):
            debug_info['sample_size'] = sample_size
            sample = random.sample(lines, sample_size)
            assert shamir.recompose(sample) == secret, debug_info


def test_structure_deterministic_content_random():
    secret  = b"some secret value"
    shares1 = _lines(shamir.split(secret, 4, 2, "hex"))
    shares2 = _lines(shamir.split(secret, 4, 2, "hex"))

    xs1 = [line.split(":")[0] for line in shares1]
    xs2 = [line.split(":")[0] for line in shares2]
    assert xs1 == xs2 == ["01", "02", "03", "04"]

    payloads1 = [line.split(":")[1] for line in shares1]
    payloads2 = [line.split(":")[1] for line in shares2]
    assert payloads1 != payloads2
    assert all(len(p1) == len(p2) for p1, p2 in zip(payloads1, payloads2))


def test_split_debug_random():
    shares1 = shamir.split(b"secret", 3, 2, "hex", randbytes=sss_random.DebugRandom())
    shares2 = shamir.split(b"secret", 3, 2, "hex", randbytes=sss_random.DebugRandom())
    assert shares1 == shares2
    assert shamir.recompose(_lines(shares1)[1:]) == b"secret"


def test_split_consumes_expected_entropy():
    sizes = []

    def counting_random(size):
        sizes.append(size)
        return os.urandom(size)

    shamir.split(b"abcd", 5, 3, "hex", randbytes=counting_random)
    # one polynomial per secret byte, shared by all shares
    assert sizes == [3 - 1] * 4
    assert sum(sizes) == 4 * (3 - 1)


def test_split_fresh_coefficients_per_byte():
    drawn = []
    rand  = sss_random.DebugRandom(seed=7)

    def recording_random(size):
        data = rand(size)
        drawn.append(data)
        return data

    secret = b"\x42" * 8
    lines  = _lines(shamir.split(secret, 5, 5, "hex", randbytes=recording_random))
    assert len(drawn) == len(secret)
    assert len(set(drawn)) == len(drawn)

    # equal secret bytes end up as different y values
    for line in lines:
        _, payload = line.split(":")
        assert len(set(enc_util.hex2bytes(payload))) > 1

    assert shamir.recompose(lines) == secret


def test_split_random_failure_no_output():
    calls = []

    def failing_random(size):
        calls.append(size)
        if len(calls) > 3:
            raise OSError("entropy source unavailable")
        return os.urandom(size)

    with pytest.raises(errors.RandomSourceFailure):
        shamir.split(b"abcd", 3, 2, "hex", randbytes=failing_random)


SPLIT_VALIDATION_CASES = [
    (b""      , 3  , 2, "hex"   , errors.EmptySecret),
    (b"secret", 1  , 1, "hex"   , errors.InvalidShareCount),
    (b"secret", 256, 3, "hex"   , errors.InvalidShareCount),
    (b"secret", 5  , 1, "hex"   , errors.InvalidThreshold),
    (b"secret", 3  , 4, "hex"   , errors.InvalidThreshold),
    (b"secret", 3  , 2, "bogus" , errors.InvalidFormat),
    # first failure wins
    (b""      , 1  , 1, "bogus" , errors.EmptySecret),
    (b"secret", 1  , 5, "bogus" , errors.InvalidShareCount),
    (b"secret", 3  , 5, "bogus" , errors.InvalidThreshold),
]


@pytest.mark.parametrize("secret, num_shares, threshold, fmt, error_type", SPLIT_VALIDATION_CASES)
def test_split_validation(secret, num_shares, threshold, fmt, error_type):
    def unused_random(size):
        assert False, "random source used before validation"

    with pytest.raises(error_type):
        shamir.split(secret, num_shares, threshold, fmt, randbytes=unused_random)


def test_errors_are_value_errors():
    with pytest.raises(ValueError):
        shamir.split(b"", 3, 2, "hex")

    with pytest.raises(ValueError):
        shamir.recompose([])


def test_split_raw():
    raw_shares = shamir.split_raw(b"\x01\x02", 3, 2, randbytes=sss_random.DebugRandom())
    assert [raw_share.x_coord for raw_share in raw_shares] == [1, 2, 3]
    assert all(len(raw_share.data) == 2 for raw_share in raw_shares)
    assert shamir.recompose_raw(raw_shares[:2]) == b"\x01\x02"

    with pytest.raises(errors.InvalidThreshold):
        shamir.split_raw(b"\x01", 3, 4)


def test_recompose_no_shares():
    with pytest.raises(errors.NoShares):
        shamir.recompose([])


def test_recompose_insufficient_shares():
    with pytest.raises(errors.InsufficientShares):
        shamir.recompose(["01:616263"])

    with pytest.raises(errors.InsufficientShares):
        shamir.recompose(["01:616263", "", "   "])

    with pytest.raises(errors.InsufficientShares):
        shamir.recompose(["", "\n"])


def test_recompose_malformed():
    with pytest.raises(errors.MalformedShare):
        shamir.recompose(["01:616263", "invalid"])

    with pytest.raises(errors.MalformedShare):
        shamir.recompose(["invalid", "01:616263"])

    with pytest.raises(errors.MalformedShare):
        shamir.recompose(["01:616263", "1:616263"])

    with pytest.raises(errors.MalformedShare):
        shamir.recompose(["01:616263", "00:616263"])


def test_recompose_decode_error():
    with pytest.raises(errors.DecodeError):
        shamir.recompose(["01:not valid!", "02:616263"])

    with pytest.raises(errors.DecodeError):
        shamir.recompose(["01:", "02:"])

    # format is detected from the first share only
    with pytest.raises(errors.DecodeError):
        shamir.recompose(["01:616263", "02:YWJj"])


def test_recompose_inconsistent_length():
    with pytest.raises(errors.InconsistentShareLength):
        shamir.recompose(["01:616263", "02:6162"])

    with pytest.raises(errors.InconsistentShareLength):
        shamir.recompose(["01:YWJj", "02:YWJjZA=="])


def test_recompose_duplicate_share():
    lines = _lines(shamir.split(b"secret", 3, 2, "hex"))

    with pytest.raises(errors.DuplicateShare):
        shamir.recompose([lines[0], lines[0]])

    x_hex, _ = lines[0].split(":")
    with pytest.raises(errors.DuplicateShare):
        shamir.recompose([lines[0], lines[1], f"{x_hex}:{'00' * 6}"])


def test_recompose_whitespace_and_blank_lines():
    secret = b"whitespace"
    lines  = _lines(shamir.split(secret, 3, 2, "base64"))
    padded = ["", "  " + lines[2] + "  ", "\t", lines[0] + "\r", ""]
    assert shamir.recompose(padded) == secret


def test_recompose_accepts_any_iterable():
    secret = b"generator"
    shares = shamir.split(secret, 3, 2, "hex")
    assert shamir.recompose(iter(shares.splitlines())) == secret
    assert shamir.recompose(shares.split("\n")) == secret


def test_recompose_below_threshold_is_wrong():
    # The threshold is not encoded in the shares, so two shares of a
    # 3 of 5 split interpolate a different (wrong) secret.
    secret = b"\x00" * 32
    lines  = _lines(shamir.split(secret, 5, 3, "hex"))
    assert shamir.recompose(lines[:2]) != secret
    assert len(shamir.recompose(lines[:2])) == len(secret)


def test_parse_shares():
    raw_shares = shamir.parse_shares(["01:6869", "", "02:6a6b"])
    assert raw_shares == [RawShare(1, b"hi"), RawShare(2, b"jk")]
