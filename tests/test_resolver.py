"""Unit tests for the resolver module"""

import random

import pytest

from did_simple.encoding import encode
from did_simple.errors import (
    BadSignatureError,
    EmptyPayloadError,
    InvalidAlphabetCharError,
    InvalidKeyEncodingError,
    InvalidMethodSpecificIdError,
    InvalidSchemeError,
    OverlongVarintError,
    PayloadTooLongError,
    ResolutionError,
    ResolutionStage,
    TruncatedVarintError,
    UnknownCodecError,
    UnknownPrefixError,
    UnsupportedMethodError,
    WrongLengthError,
)
from did_simple.key_codecs import KeyCodec
from did_simple.keys import PublicKey
from did_simple.resolver import resolve, resolve_document, verify_did

from conftest import (
    ED25519_EXAMPLE_DID,
    ED25519_EXAMPLE_HEX,
    ED25519_VECTOR_DID,
    ED25519_VECTOR_HEX,
    P256_VECTOR_DID,
    P256_VECTOR_HEX,
    SECP256K1_VECTOR_DID,
    SECP256K1_VECTOR_HEX,
    X25519_VECTOR_DID,
    X25519_VECTOR_HEX,
)


def _did_key(payload: bytes) -> str:
    return "did:key:" + encode(payload)


def _resolution_error(did: str) -> ResolutionError:
    with pytest.raises(ResolutionError) as excinfo:
        resolve(did)
    assert excinfo.value.__cause__ is excinfo.value.cause
    return excinfo.value


def test_resolve_published_vector():
    key = resolve(ED25519_VECTOR_DID)
    assert key.codec is KeyCodec.ED25519_PUB
    assert key.raw == bytes.fromhex(ED25519_VECTOR_HEX)


def test_resolve_is_stable():
    keys = [resolve(ED25519_VECTOR_DID) for _ in range(5)]
    assert all(key == keys[0] for key in keys)
    assert keys[0] is not keys[1]


@pytest.mark.parametrize("did, codec, raw_hex", [
    (ED25519_EXAMPLE_DID, KeyCodec.ED25519_PUB, ED25519_EXAMPLE_HEX),
    (X25519_VECTOR_DID, KeyCodec.X25519_PUB, X25519_VECTOR_HEX),
    (SECP256K1_VECTOR_DID, KeyCodec.SECP256K1_PUB, SECP256K1_VECTOR_HEX),
    (P256_VECTOR_DID, KeyCodec.P256_PUB, P256_VECTOR_HEX),
])
def test_resolve_vectors(did, codec, raw_hex):
    key = resolve(did)
    assert key.codec is codec
    assert key.raw == bytes.fromhex(raw_hex)
    assert key.to_did_key() == did


def test_resolve_ignores_fragment_query_and_path():
    fragment = ED25519_VECTOR_DID.split(":")[-1]
    for url in (f"{ED25519_VECTOR_DID}#{fragment}", f"{ED25519_VECTOR_DID}/path?x=1#k"):
        assert resolve(url) == resolve(ED25519_VECTOR_DID)


def test_key_round_trip():
    raw = bytes(range(32))
    did = PublicKey.from_raw(KeyCodec.ED25519_PUB, raw).to_did_key()
    assert did.startswith("did:key:z6Mk")
    key = resolve(did)
    assert key.codec is KeyCodec.ED25519_PUB
    assert key.raw == raw


@pytest.mark.parametrize("length", [31, 33, 0, 64])
def test_wrong_length(length):
    error = _resolution_error(_did_key(b"\xed\x01" + b"\x11" * length))
    assert error.stage is ResolutionStage.KEY
    assert isinstance(error.cause, WrongLengthError)
    assert error.cause.expected == 32
    assert error.cause.got == length
    assert error.is_malformed
    assert error.error_code == "WrongLength"


def test_unknown_prefix():
    error = _resolution_error("did:key:a123")
    assert error.stage is ResolutionStage.DECODE
    assert isinstance(error.cause, UnknownPrefixError)
    assert error.cause.prefix == "a"
    assert "DecodeStage" in str(error)


def test_invalid_alphabet_char():
    error = _resolution_error("did:key:z6Mk0abc")
    assert error.stage is ResolutionStage.DECODE
    assert isinstance(error.cause, InvalidAlphabetCharError)
    assert error.cause.position == 4


def test_empty_payload():
    error = _resolution_error("did:key:z")
    assert error.stage is ResolutionStage.DECODE
    assert isinstance(error.cause, EmptyPayloadError)


def test_truncated_tag():
    error = _resolution_error(_did_key(b"\xed"))
    assert error.stage is ResolutionStage.TAG
    assert isinstance(error.cause, TruncatedVarintError)


def test_overlong_tag():
    error = _resolution_error(_did_key(b"\xed\x81\x00" + b"\x11" * 32))
    assert error.stage is ResolutionStage.TAG
    assert isinstance(error.cause, OverlongVarintError)


def test_unknown_codec():
    error = _resolution_error(_did_key(b"\xff\x01" + b"\x11" * 32))
    assert error.stage is ResolutionStage.CODEC
    assert isinstance(error.cause, UnknownCodecError)
    assert error.cause.tag == 0xff
    assert error.is_unsupported
    assert not error.is_malformed


def test_leading_zero_payload():
    error = _resolution_error("did:key:z1")
    assert error.stage is ResolutionStage.CODEC
    assert error.cause.tag == 0


def test_parse_stage_errors():
    error = _resolution_error("didkey:z6Mk")
    assert error.stage is ResolutionStage.PARSE
    assert isinstance(error.cause, InvalidSchemeError)

    error = _resolution_error("did:key:")
    assert isinstance(error.cause, InvalidMethodSpecificIdError)


def test_unsupported_method():
    error = _resolution_error("did:web:example.com")
    assert error.stage is ResolutionStage.PARSE
    assert isinstance(error.cause, UnsupportedMethodError)
    assert error.cause.method == "web"
    assert error.is_unsupported


def test_non_string_input():
    with pytest.raises(TypeError):
        resolve(None)


def test_random_payloads_never_crash():
    """Arbitrary bytes behind the prefix resolve or fail with a ResolutionError"""
    rng = random.Random(20240229)
    for _ in range(2000):
        length = rng.randrange(0, 60)
        payload = bytes(rng.randrange(256) for _ in range(length))
        did = _did_key(payload)
        try:
            key = resolve(did)
        except ResolutionError as e:
            assert e.stage in set(ResolutionStage)
        else:
            assert len(key.raw) == key.codec.key_length


def test_random_text_never_crashes():
    rng = random.Random(7)
    alphabet = "did:key:z6Mk#?/%&=.-_~ é0OIl123abcXYZ\x00"
    for _ in range(2000):
        text = "".join(rng.choice(alphabet) for _ in range(rng.randrange(0, 40)))
        try:
            resolve(text)
        except ResolutionError:
            pass


def test_verify_did(ed25519_signer):
    did = PublicKey.from_raw(KeyCodec.ED25519_PUB, ed25519_signer.public_raw).to_did_key()
    signature = ed25519_signer.sign(b"hello")
    key = verify_did(did, b"hello", signature)
    assert key.raw == ed25519_signer.public_raw
    with pytest.raises(BadSignatureError):
        verify_did(did, b"hullo", signature)


def test_resolve_document_uses_bare_did():
    fragment = ED25519_VECTOR_DID.split(":")[-1]
    document = resolve_document(f"{ED25519_VECTOR_DID}#{fragment}")
    assert document["id"] == ED25519_VECTOR_DID


def test_resolve_document_propagates_resolution_errors():
    with pytest.raises(ResolutionError):
        resolve_document("did:key:a123")


def test_oversized_method_specific_id():
    error = _resolution_error("did:key:z" + "6Mk" * 200)
    assert error.stage is ResolutionStage.DECODE
    assert isinstance(error.cause, PayloadTooLongError)
    assert error.is_malformed


def test_verify_did_rejects_identity_key():
    identity = b"\x01" + b"\x00" * 31
    did = PublicKey.from_raw(KeyCodec.ED25519_PUB, identity).to_did_key()
    # the key itself resolves, only verification refuses it
    assert resolve(did).raw == identity
    with pytest.raises(InvalidKeyEncodingError):
        verify_did(did, b"transfer all funds", identity + b"\x00" * 32)
