"""did-simple: parse, decode, resolve and verify did:key identifiers."""

from .did_url import DidMethod, DidUrl, parse
from .encoding import EncodingTag, decode, encode
from .errors import (
    BadSignatureError,
    DidSimpleError,
    MalformedInputError,
    ResolutionError,
    ResolutionStage,
    UnsupportedError,
    VerificationFailedError,
)
from .key_codecs import KeyCodec, lookup
from .keys import PublicKey, encode_did_key, verify
from .resolver import resolve, resolve_document, verify_did
from .varint import encode_varint, read_varint

__all__ = [
    "BadSignatureError",
    "DidMethod",
    "DidSimpleError",
    "DidUrl",
    "EncodingTag",
    "KeyCodec",
    "MalformedInputError",
    "PublicKey",
    "ResolutionError",
    "ResolutionStage",
    "UnsupportedError",
    "VerificationFailedError",
    "decode",
    "encode",
    "encode_did_key",
    "encode_varint",
    "lookup",
    "parse",
    "read_varint",
    "resolve",
    "resolve_document",
    "verify",
    "verify_did",
]
