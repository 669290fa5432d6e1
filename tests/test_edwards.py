"""Unit tests for the edwards module"""

import pytest

from did_simple.edwards import check_public_key, decompress, is_small_order
from did_simple.errors import InvalidKeyEncodingError

from conftest import ED25519_EXAMPLE_HEX, ED25519_VECTOR_HEX


@pytest.mark.parametrize("key_hex", [ED25519_VECTOR_HEX, ED25519_EXAMPLE_HEX])
def test_real_keys_pass(key_hex):
    raw = bytes.fromhex(key_hex)
    point = decompress(raw)
    assert point is not None
    assert not is_small_order(point)
    check_public_key(raw)


def test_generated_keys_pass(ed25519_signer):
    check_public_key(ed25519_signer.public_raw)


def test_identity_is_small_order():
    point = decompress(b"\x01" + b"\x00" * 31)
    assert point == (0, 1, 1, 0)
    assert is_small_order(point)


def test_off_curve_point():
    assert decompress(b"\x02" + b"\x00" * 31) is None
    with pytest.raises(InvalidKeyEncodingError):
        check_public_key(b"\x02" + b"\x00" * 31)
