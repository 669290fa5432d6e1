# did_simple/errors.py
"""Custom exception classes for did-simple.

Errors fall into three classes. ``MalformedInputError`` is structurally
invalid input, ``UnsupportedError`` is well-formed input this build does not
implement, and ``VerificationFailedError`` is a correctly shaped key and
signature that simply do not match. All three are permanent.
"""

from enum import Enum
from typing import Optional


class DidSimpleError(Exception):
    """Base class for library errors."""
    def __init__(self, message: str, error_code: str = "DidSimpleError"):
        self.message = message
        self.error_code = error_code
        super().__init__(f"[{error_code}] {message}")


class ConfigurationError(DidSimpleError):
    """Error related to configuration or environment setup."""
    def __init__(self, message: str):
        super().__init__(message, error_code="ConfigurationError")


class InvalidInputError(DidSimpleError):
    """Error for invalid caller-supplied arguments."""
    def __init__(self, message: str):
        super().__init__(message, error_code="InvalidInput")


# ---- error classes ----

class MalformedInputError(DidSimpleError):
    """Structurally invalid input."""


class UnsupportedError(DidSimpleError):
    """Well-formed input referencing a method, codec or algorithm this build lacks."""


class VerificationFailedError(DidSimpleError):
    """A well-shaped signature did not verify."""


# ---- DID URL parsing ----

class DidUrlError(MalformedInputError):
    """A DID URL does not follow the generic DID grammar."""
    def __init__(self, message: str, error_code: str, position: Optional[int] = None,
                 offending: Optional[str] = None):
        self.position = position
        self.offending = offending
        if position is not None:
            message = f"{message} (at position {position}: {offending!r})"
        super().__init__(message, error_code=error_code)


class InvalidSchemeError(DidUrlError):
    def __init__(self, message: str = "Expected the 'did:' scheme", position: Optional[int] = None,
                 offending: Optional[str] = None):
        super().__init__(message, "InvalidScheme", position, offending)


class InvalidMethodError(DidUrlError):
    def __init__(self, message: str, position: Optional[int] = None, offending: Optional[str] = None):
        super().__init__(message, "InvalidMethod", position, offending)


class InvalidMethodSpecificIdError(DidUrlError):
    def __init__(self, message: str, position: Optional[int] = None, offending: Optional[str] = None):
        super().__init__(message, "InvalidMethodSpecificId", position, offending)


class InvalidPathError(DidUrlError):
    def __init__(self, message: str, position: Optional[int] = None, offending: Optional[str] = None):
        super().__init__(message, "InvalidPath", position, offending)


class InvalidQueryError(DidUrlError):
    def __init__(self, message: str, position: Optional[int] = None, offending: Optional[str] = None):
        super().__init__(message, "InvalidQuery", position, offending)


class InvalidFragmentError(DidUrlError):
    def __init__(self, message: str, position: Optional[int] = None, offending: Optional[str] = None):
        super().__init__(message, "InvalidFragment", position, offending)


class UnsupportedMethodError(UnsupportedError):
    """The DID method is well-formed but has no resolver here."""
    def __init__(self, method: str):
        self.method = method
        super().__init__(f"DID method '{method}' is not supported; only 'did:key' resolves locally.",
                         error_code="UnsupportedMethod")


# ---- multibase ----

class UnknownPrefixError(MalformedInputError):
    """The multibase prefix character is not base58btc."""
    def __init__(self, prefix: str, known_encoding: Optional[str] = None):
        self.prefix = prefix
        self.known_encoding = known_encoding
        detail = f" ({known_encoding})" if known_encoding else ""
        super().__init__(f"Unsupported multibase prefix {prefix!r}{detail}; expected 'z' (base58btc).",
                         error_code="UnknownPrefix")


class PayloadTooLongError(MalformedInputError):
    def __init__(self, length: int, limit: int):
        self.length = length
        self.limit = limit
        super().__init__(f"Multibase string is {length} characters long (limit {limit}).",
                         error_code="PayloadTooLong")


class InvalidAlphabetCharError(MalformedInputError):
    def __init__(self, char: str, position: int):
        self.char = char
        self.position = position
        super().__init__(f"Character {char!r} at position {position} is not in the base58btc alphabet.",
                         error_code="InvalidAlphabetChar")


class EmptyPayloadError(MalformedInputError):
    def __init__(self, message: str = "Nothing to decode after the multibase prefix."):
        super().__init__(message, error_code="EmptyPayload")


# ---- varint ----

class VarintError(MalformedInputError):
    """Invalid unsigned-varint encoding."""
    def __init__(self, message: str, error_code: str, position: Optional[int] = None):
        self.position = position
        super().__init__(message, error_code=error_code)


class TruncatedVarintError(VarintError):
    def __init__(self, position: int):
        super().__init__(f"Varint truncated: input ended after {position} byte(s) without a terminating byte.",
                         "Truncated", position)


class VarintOverflowError(VarintError):
    def __init__(self, position: Optional[int] = None, message: Optional[str] = None):
        super().__init__(message or f"Varint overflow: more than 63 value bits at byte {position}.",
                         "Overflow", position)


class OverlongVarintError(VarintError):
    def __init__(self, position: int):
        super().__init__(f"Varint overlong: byte {position} is a redundant zero group.",
                         "Overlong", position)


# ---- codecs and keys ----

class UnknownCodecError(UnsupportedError):
    def __init__(self, tag: int):
        self.tag = tag
        super().__init__(f"Unknown key multicodec 0x{tag:x}.", error_code="UnknownCodec")


class WrongLengthError(MalformedInputError):
    def __init__(self, expected: int, got: int, what: str = "public key"):
        self.expected = expected
        self.got = got
        super().__init__(f"Decoded {what} has incorrect length: {got} bytes (expected {expected}).",
                         error_code="WrongLength")


class InvalidKeyEncodingError(MalformedInputError):
    """Correctly sized key bytes that are not a valid key for the algorithm."""
    def __init__(self, message: str):
        super().__init__(message, error_code="InvalidKeyEncoding")


# ---- verification ----

class MalformedSignatureLengthError(MalformedInputError):
    def __init__(self, expected: int, got: int):
        self.expected = expected
        self.got = got
        super().__init__(f"Signature has incorrect length: {got} bytes (expected {expected}).",
                         error_code="MalformedSignatureLength")


class UnsupportedAlgorithmForVerifyError(UnsupportedError):
    def __init__(self, algorithm: str, message: Optional[str] = None):
        self.algorithm = algorithm
        super().__init__(message or f"Signature verification is not available for {algorithm}.",
                         error_code="UnsupportedAlgorithmForVerify")


class BadSignatureError(VerificationFailedError):
    def __init__(self, message: str = "Signature verification failed"):
        super().__init__(message, error_code="BadSignature")


# ---- resolution ----

class ResolutionStage(str, Enum):
    PARSE = "ParseStage"
    DECODE = "DecodeStage"
    TAG = "TagStage"
    CODEC = "CodecStage"
    KEY = "KeyStage"


class ResolutionError(DidSimpleError):
    """Wraps the error of the first pipeline stage that failed."""
    def __init__(self, stage: ResolutionStage, cause: DidSimpleError):
        self.stage = stage
        self.cause = cause
        super().__init__(f"{stage.value}: {cause.message}", error_code=cause.error_code)

    @property
    def is_malformed(self) -> bool:
        return isinstance(self.cause, MalformedInputError)

    @property
    def is_unsupported(self) -> bool:
        return isinstance(self.cause, UnsupportedError)
