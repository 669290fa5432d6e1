# did_simple/did_url.py
"""Parsing of DID URLs per the generic DID grammar.

    did-url = "did:" method ":" method-specific-id [path] ["?" query] ["#" fragment]

Parsing is purely textual. Nothing is percent-decoded or case-folded: the
method-specific-id in particular is often case-sensitive encoded data.
"""

import logging
import string
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import ClassVar, Dict, FrozenSet, Mapping, Optional, Type

from .constants import DID_PREFIX, DID_SCHEME
from .errors import (
    DidUrlError,
    InvalidFragmentError,
    InvalidMethodError,
    InvalidMethodSpecificIdError,
    InvalidPathError,
    InvalidQueryError,
    InvalidSchemeError,
)

logger = logging.getLogger(__name__)

_HEXDIGITS: FrozenSet[str] = frozenset(string.hexdigits)
_METHOD_CHARS: FrozenSet[str] = frozenset(string.ascii_lowercase + string.digits)
_ID_CHARS: FrozenSet[str] = frozenset(string.ascii_letters + string.digits + "._-%")

# RFC 3986 character classes
_UNRESERVED = string.ascii_letters + string.digits + "-._~"
_SUB_DELIMS = "!$&'()*+,;="
_PCHAR: FrozenSet[str] = frozenset(_UNRESERVED + _SUB_DELIMS + ":@%")
_PATH_CHARS: FrozenSet[str] = _PCHAR | {"/"}
_QUERY_CHARS: FrozenSet[str] = _PCHAR | {"/", "?"}
_FRAGMENT_CHARS: FrozenSet[str] = _QUERY_CHARS


class DidMethod(str, Enum):
    """DID methods this codebase knows by name. Only ``key`` resolves locally."""
    KEY = "key"
    WEB = "web"


@dataclass(frozen=True)
class DidUrl:
    """A parsed DID URL. The scheme is always ``did``."""
    scheme: ClassVar[str] = DID_SCHEME

    method: str
    method_specific_id: str
    path: Optional[str] = None
    # MappingProxyType is unhashable, so query is left out of __hash__.
    query: Optional[Mapping[str, str]] = field(default=None, hash=False)
    fragment: Optional[str] = None

    @property
    def did(self) -> str:
        """The bare DID, without path, query or fragment."""
        return f"{DID_PREFIX}{self.method}:{self.method_specific_id}"

    @property
    def known_method(self) -> Optional[DidMethod]:
        try:
            return DidMethod(self.method)
        except ValueError:
            return None

    def __str__(self) -> str:
        # Parameters with an empty value render without '='.
        rendered = self.did + (self.path or "")
        if self.query is not None:
            rendered += "?" + "&".join(f"{k}={v}" if v else k for k, v in self.query.items())
        if self.fragment is not None:
            rendered += "#" + self.fragment
        return rendered


def _scan(text: str, allowed: FrozenSet[str], offset: int,
          error_cls: Type[DidUrlError], what: str) -> None:
    """Checks every character of `text` against `allowed`, including percent-encodings."""
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch not in allowed:
            raise error_cls(f"Invalid character in {what}", offset + i, ch)
        if ch == "%":
            triplet = text[i:i + 3]
            if len(triplet) < 3 or triplet[1] not in _HEXDIGITS or triplet[2] not in _HEXDIGITS:
                raise error_cls(f"Malformed percent-encoding in {what}", offset + i, triplet)
            i += 3
        else:
            i += 1


def _parse_query(raw: str, offset: int) -> Dict[str, str]:
    _scan(raw, _QUERY_CHARS, offset, InvalidQueryError, "query")
    params: Dict[str, str] = {}
    if not raw:
        return params

    pos = offset
    for pair in raw.split("&"):
        if not pair:
            raise InvalidQueryError("Empty query parameter", pos, "&")
        name, _, value = pair.partition("=")
        if not name:
            raise InvalidQueryError("Query parameter without a name", pos, pair)
        if name in params:
            raise InvalidQueryError(f"Duplicate query parameter '{name}'", pos, name)
        params[name] = value
        pos += len(pair) + 1
    return params


def parse(did_url: str) -> DidUrl:
    """
    Splits a DID URL into its components.

    Args:
        did_url: The DID URL string, e.g. "did:key:z6Mk...#z6Mk...".

    Returns:
        The parsed DidUrl.

    Raises:
        TypeError: If `did_url` is not a string.
        InvalidSchemeError: If the string does not start with "did:".
        InvalidMethodError: If the method name is empty or not [a-z0-9]+.
        InvalidMethodSpecificIdError: If the method-specific-id is missing, empty
                                      or outside [A-Za-z0-9._%-]+.
        InvalidPathError, InvalidQueryError, InvalidFragmentError: If the
                                      corresponding component is malformed.
    """
    if not isinstance(did_url, str):
        raise TypeError("DID URL must be a string")

    # Component boundaries first, so errors are reported left to right.
    hash_idx = did_url.find("#")
    head = did_url if hash_idx == -1 else did_url[:hash_idx]
    query_idx = head.find("?")
    body = head if query_idx == -1 else head[:query_idx]

    if not body.startswith(DID_PREFIX):
        raise InvalidSchemeError(position=0, offending=body[:len(DID_PREFIX)])

    after_scheme = body[len(DID_PREFIX):]
    method_offset = len(DID_PREFIX)
    colon = after_scheme.find(":")
    method = after_scheme if colon == -1 else after_scheme[:colon]

    if not method:
        raise InvalidMethodError("Missing DID method", method_offset, "")
    for i, ch in enumerate(method):
        if ch not in _METHOD_CHARS:
            raise InvalidMethodError("Invalid character in DID method", method_offset + i, ch)
    if colon == -1:
        raise InvalidMethodSpecificIdError("Missing method-specific-id", len(body), "")

    rest = after_scheme[colon + 1:]
    id_offset = method_offset + colon + 1
    slash = rest.find("/")
    method_specific_id = rest if slash == -1 else rest[:slash]
    path = None if slash == -1 else rest[slash:]

    if not method_specific_id:
        raise InvalidMethodSpecificIdError("Empty method-specific-id", id_offset, "")
    _scan(method_specific_id, _ID_CHARS, id_offset, InvalidMethodSpecificIdError, "method-specific-id")

    if path is not None:
        _scan(path, _PATH_CHARS, id_offset + slash, InvalidPathError, "path")

    query = None
    if query_idx != -1:
        query = MappingProxyType(_parse_query(head[query_idx + 1:], query_idx + 1))

    fragment = None
    if hash_idx != -1:
        fragment = did_url[hash_idx + 1:]
        _scan(fragment, _FRAGMENT_CHARS, hash_idx + 1, InvalidFragmentError, "fragment")

    logger.debug(f"Parsed DID URL with method '{method}'")
    return DidUrl(
        method=method,
        method_specific_id=method_specific_id,
        path=path,
        query=query,
        fragment=fragment,
    )
