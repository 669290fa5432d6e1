# did_simple/keys.py
"""Typed public keys and signature verification."""

import json
import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Dict, FrozenSet, Mapping, Type, Union

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec, ed25519, x25519
from cryptography.hazmat.primitives.asymmetric.utils import encode_dss_signature
from jwcrypto import jwk

from .config import SETTINGS, Settings
from .constants import DID_KEY_PREFIX
from .edwards import check_public_key
from .encoding import encode
from .errors import (
    BadSignatureError,
    InvalidKeyEncodingError,
    MalformedSignatureLengthError,
    UnsupportedAlgorithmForVerifyError,
    WrongLengthError,
)
from .key_codecs import KeyCodec

logger = logging.getLogger(__name__)

ED25519_SIGNATURE_LENGTH = 64

PyCaPublicKey = Union[ed25519.Ed25519PublicKey, x25519.X25519PublicKey, ec.EllipticCurvePublicKey]
Verifier = Callable[[bytes, bytes, bytes], None]

# codec -> (curve, digest, scalar byte length)
_EC_PARAMS: Mapping[KeyCodec, tuple] = MappingProxyType({
    KeyCodec.SECP256K1_PUB: (ec.SECP256K1, hashes.SHA256, 32),
    KeyCodec.P256_PUB: (ec.SECP256R1, hashes.SHA256, 32),
    KeyCodec.P384_PUB: (ec.SECP384R1, hashes.SHA384, 48),
})


def _load_cryptography_key(codec: KeyCodec, raw: bytes) -> PyCaPublicKey:
    try:
        if codec is KeyCodec.ED25519_PUB:
            return ed25519.Ed25519PublicKey.from_public_bytes(raw)
        if codec is KeyCodec.X25519_PUB:
            return x25519.X25519PublicKey.from_public_bytes(raw)
        curve, _, _ = _EC_PARAMS[codec]
        return ec.EllipticCurvePublicKey.from_encoded_point(curve(), raw)
    except ValueError as e:
        raise InvalidKeyEncodingError(f"Bytes are not a valid {codec.codec_name} key: {e}")


def _verify_ed25519(raw: bytes, message: bytes, signature: bytes) -> None:
    if len(signature) != ED25519_SIGNATURE_LENGTH:
        raise MalformedSignatureLengthError(ED25519_SIGNATURE_LENGTH, len(signature))
    check_public_key(raw)
    key = _load_cryptography_key(KeyCodec.ED25519_PUB, raw)
    try:
        key.verify(signature, message)
    except InvalidSignature as e:
        raise BadSignatureError() from e


def _ecdsa_verifier(codec: KeyCodec, curve: Type[ec.EllipticCurve],
                    digest: Type[hashes.HashAlgorithm], scalar_length: int) -> Verifier:
    """Builds a verifier for fixed-width r||s ECDSA signatures (as used by JWS)."""
    signature_length = 2 * scalar_length

    def verify(raw: bytes, message: bytes, signature: bytes) -> None:
        if len(signature) != signature_length:
            raise MalformedSignatureLengthError(signature_length, len(signature))
        key = _load_cryptography_key(codec, raw)
        r = int.from_bytes(signature[:scalar_length], "big")
        s = int.from_bytes(signature[scalar_length:], "big")
        try:
            key.verify(encode_dss_signature(r, s), message, ec.ECDSA(digest()))
        except InvalidSignature as e:
            raise BadSignatureError() from e

    return verify


# X25519 is a key agreement algorithm and has no entry.
_VERIFIERS: Mapping[KeyCodec, Verifier] = MappingProxyType({
    KeyCodec.ED25519_PUB: _verify_ed25519,
    **{codec: _ecdsa_verifier(codec, *params) for codec, params in _EC_PARAMS.items()},
})


def verify_capabilities(settings: Settings) -> FrozenSet[KeyCodec]:
    """Codecs whose signatures this build verifies."""
    if not settings.verify_enabled:
        return frozenset()
    return frozenset(_VERIFIERS)


VERIFY_CAPABILITIES: FrozenSet[KeyCodec] = verify_capabilities(SETTINGS)


@dataclass(frozen=True)
class PublicKey:
    """
    A public key of one of the KeyCodec algorithms.

    Construction only checks the length of `raw`. Whether the bytes are a
    valid point for the algorithm is checked when the key is used.
    """
    codec: KeyCodec
    raw: bytes

    def __post_init__(self):
        if not isinstance(self.raw, (bytes, bytearray, memoryview)):
            raise TypeError("Public key bytes must be bytes-like")
        raw = bytes(self.raw)
        if len(raw) != self.codec.key_length:
            raise WrongLengthError(self.codec.key_length, len(raw))
        object.__setattr__(self, "raw", raw)

    @classmethod
    def from_raw(cls, codec: KeyCodec, raw: bytes) -> "PublicKey":
        """
        Raises:
            WrongLengthError: If `raw` is not exactly `codec.key_length` bytes.
        """
        return cls(codec=codec, raw=raw)

    @property
    def algorithm(self) -> str:
        return self.codec.codec_name

    def verify(self, message: Union[bytes, str], signature: bytes) -> None:
        """
        Verifies `signature` over `message` with this key.

        Ed25519 signatures are the 64 raw bytes; ECDSA signatures are the
        fixed-width big-endian r||s concatenation. String messages are
        UTF-8 encoded.

        Raises:
            UnsupportedAlgorithmForVerifyError: If this build cannot verify for the key's algorithm.
            MalformedSignatureLengthError: If the signature has the wrong size for the algorithm.
            InvalidKeyEncodingError: If the key bytes are not a valid key for the algorithm,
                                     including small-order Ed25519 keys.
            BadSignatureError: If the signature does not match.
        """
        if not isinstance(message, (str, bytes, bytearray, memoryview)):
            raise TypeError("Message must be str or bytes-like")
        if not isinstance(signature, (bytes, bytearray, memoryview)):
            raise TypeError("Signature must be bytes-like")

        if self.codec not in VERIFY_CAPABILITIES:
            if not SETTINGS.verify_enabled:
                raise UnsupportedAlgorithmForVerifyError(
                    self.algorithm, "Signature verification is disabled (DID_SIMPLE_VERIFY).")
            raise UnsupportedAlgorithmForVerifyError(self.algorithm)

        if isinstance(message, str):
            message = message.encode("utf-8")
        _VERIFIERS[self.codec](self.raw, bytes(message), bytes(signature))
        logger.debug(f"Verified {self.algorithm} signature")

    def to_cryptography_key(self) -> PyCaPublicKey:
        """
        Raises:
            InvalidKeyEncodingError: If the key bytes are not a valid key for the algorithm.
        """
        return _load_cryptography_key(self.codec, self.raw)

    def to_multibase(self) -> str:
        return encode(self.codec.prefix + self.raw)

    def to_did_key(self) -> str:
        return f"{DID_KEY_PREFIX}{self.to_multibase()}"

    def to_jwk(self) -> Dict[str, Any]:
        """The public key as a JWK dictionary (OKP or EC)."""
        key = jwk.JWK.from_pyca(self.to_cryptography_key())
        return json.loads(key.export_public())


def verify(public_key: PublicKey, message: Union[bytes, str], signature: bytes) -> None:
    """Verifies `signature` over `message` with `public_key`. See PublicKey.verify."""
    public_key.verify(message, signature)


def encode_did_key(public_key: PublicKey) -> str:
    return public_key.to_did_key()
