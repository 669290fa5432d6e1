# did_simple/encoding.py
"""Multibase decoding and encoding. Only base58btc ('z') is supported."""

import logging
from enum import Enum
from typing import FrozenSet, Optional, Tuple

import base58
import multibase

from .constants import BASE58BTC_ALPHABET, MULTIBASE_BASE58BTC_NAME, MULTIBASE_BASE58BTC_PREFIX, MULTIBASE_MAX_LENGTH
from .errors import EmptyPayloadError, InvalidAlphabetCharError, PayloadTooLongError, UnknownPrefixError

logger = logging.getLogger(__name__)

_BASE58BTC_CHARS: FrozenSet[str] = frozenset(BASE58BTC_ALPHABET)


class EncodingTag(str, Enum):
    """Multibase alphabets this build can decode, keyed by prefix character."""
    BASE58BTC = MULTIBASE_BASE58BTC_PREFIX

    @property
    def encoding_name(self) -> str:
        return MULTIBASE_BASE58BTC_NAME


def _known_encoding(prefix: str) -> Optional[str]:
    """Name of the multibase encoding registered for `prefix`, if any."""
    try:
        return multibase.get_codec(prefix).encoding
    except ValueError:
        return None


def decode(value: str) -> Tuple[EncodingTag, bytes]:
    """
    Strips the multibase prefix from `value` and decodes the rest.

    Args:
        value: A multibase string such as a did:key method-specific-id.

    Returns:
        A tuple of (encoding tag, decoded bytes).

    Raises:
        UnknownPrefixError: If the first character is not 'z'.
        EmptyPayloadError: If `value` is empty or holds only the prefix.
        PayloadTooLongError: If `value` is longer than MULTIBASE_MAX_LENGTH characters.
        InvalidAlphabetCharError: If a character after the prefix is not base58btc.
                                  The position counts the prefix as 0.
    """
    if not value:
        raise EmptyPayloadError("Multibase string is empty.")
    if len(value) > MULTIBASE_MAX_LENGTH:
        raise PayloadTooLongError(len(value), MULTIBASE_MAX_LENGTH)

    prefix, payload = value[0], value[1:]
    if prefix != MULTIBASE_BASE58BTC_PREFIX:
        raise UnknownPrefixError(prefix, _known_encoding(prefix))
    if not payload:
        raise EmptyPayloadError()

    for index, char in enumerate(payload, start=1):
        if char not in _BASE58BTC_CHARS:
            raise InvalidAlphabetCharError(char, index)

    decoded = base58.b58decode(payload, alphabet=base58.BITCOIN_ALPHABET)
    logger.debug(f"Decoded {len(decoded)} bytes from {MULTIBASE_BASE58BTC_NAME} multibase")
    return EncodingTag.BASE58BTC, decoded


def encode(data: bytes) -> str:
    """Encodes `data` as a base58btc multibase string."""
    return MULTIBASE_BASE58BTC_PREFIX + base58.b58encode(bytes(data), alphabet=base58.BITCOIN_ALPHABET).decode("ascii")
