# did_simple/key_codecs.py
"""The closed table of public key multicodecs understood by did-simple."""

from enum import Enum
from types import MappingProxyType
from typing import Mapping

from .constants import (
    ED25519_PUB_MULTICODEC_CODE,
    P256_PUB_MULTICODEC_CODE,
    P384_PUB_MULTICODEC_CODE,
    SECP256K1_PUB_MULTICODEC_CODE,
    X25519_PUB_MULTICODEC_CODE,
)
from .errors import UnknownCodecError
from .varint import encode_varint


class KeyCodec(Enum):
    """
    Public key multicodecs. Each member carries the multicodec table name,
    the numeric tag and the exact length of the raw key that follows it.
    EC keys are SEC1 compressed points.
    """
    ED25519_PUB = ("ed25519-pub", ED25519_PUB_MULTICODEC_CODE, 32)
    X25519_PUB = ("x25519-pub", X25519_PUB_MULTICODEC_CODE, 32)
    SECP256K1_PUB = ("secp256k1-pub", SECP256K1_PUB_MULTICODEC_CODE, 33)
    P256_PUB = ("p256-pub", P256_PUB_MULTICODEC_CODE, 33)
    P384_PUB = ("p384-pub", P384_PUB_MULTICODEC_CODE, 49)

    def __init__(self, codec_name: str, tag: int, key_length: int):
        self.codec_name = codec_name
        self.tag = tag
        self.key_length = key_length

    @property
    def prefix(self) -> bytes:
        """The varint-encoded tag that precedes the raw key."""
        return encode_varint(self.tag)

    @classmethod
    def from_name(cls, codec_name: str) -> "KeyCodec":
        for codec in cls:
            if codec.codec_name == codec_name:
                return codec
        raise ValueError(f"Unknown key codec name: {codec_name}")


CODECS_BY_TAG: Mapping[int, KeyCodec] = MappingProxyType({codec.tag: codec for codec in KeyCodec})


def lookup(tag: int) -> KeyCodec:
    """
    Maps a multicodec tag to its KeyCodec.

    Raises:
        UnknownCodecError: If this build has no codec for `tag`.
    """
    codec = CODECS_BY_TAG.get(tag)
    if codec is None:
        raise UnknownCodecError(tag)
    return codec
