# did_simple/resolver.py
"""did:key resolution: DID URL -> multibase -> varint tag -> codec -> PublicKey."""

import logging
from typing import Any, Callable, Dict, TypeVar

from .constants import DID_KEY_METHOD
from .did_url import parse
from .document import MULTIKEY, build_did_document
from .encoding import decode
from .errors import DidSimpleError, ResolutionError, ResolutionStage, UnsupportedMethodError
from .key_codecs import lookup
from .keys import PublicKey
from .varint import read_varint

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _run_stage(stage: ResolutionStage, func: Callable[..., T], *args: Any) -> T:
    try:
        return func(*args)
    except DidSimpleError as e:
        logger.debug(f"DID resolution failed at {stage.value}: {e}")
        raise ResolutionError(stage, e) from e


def _resolve(did_url: str):
    url = _run_stage(ResolutionStage.PARSE, parse, did_url)
    if url.method != DID_KEY_METHOD:
        cause = UnsupportedMethodError(url.method)
        logger.debug(f"DID resolution failed at {ResolutionStage.PARSE.value}: {cause}")
        raise ResolutionError(ResolutionStage.PARSE, cause) from cause

    _, payload = _run_stage(ResolutionStage.DECODE, decode, url.method_specific_id)
    tag, consumed = _run_stage(ResolutionStage.TAG, read_varint, payload)
    codec = _run_stage(ResolutionStage.CODEC, lookup, tag)
    public_key = _run_stage(ResolutionStage.KEY, PublicKey.from_raw, codec, payload[consumed:])

    logger.info(f"Resolved DID: {url.did} ({codec.codec_name})")
    return url, public_key


def resolve(did_url: str) -> PublicKey:
    """
    Resolves a did:key URL to the public key it embeds.

    Path, query and fragment are allowed and ignored. The call performs no I/O
    and keeps no state.

    Args:
        did_url: The DID URL (e.g., "did:key:z6Mk...").

    Returns:
        The embedded PublicKey.

    Raises:
        TypeError: If `did_url` is not a string.
        ResolutionError: Wrapping the error of the first failing stage.
    """
    _, public_key = _resolve(did_url)
    return public_key


def resolve_document(did_url: str, representation: str = MULTIKEY) -> Dict[str, Any]:
    """
    Resolves a did:key URL to its DID Document.

    Raises:
        ResolutionError: If the key cannot be resolved.
        InvalidInputError: If `representation` is unknown.
        InvalidKeyEncodingError: If a JWK is requested for an invalid key.
    """
    url, public_key = _resolve(did_url)
    return build_did_document(url, public_key, representation)


def verify_did(did_url: str, message, signature: bytes) -> PublicKey:
    """
    Resolves `did_url` and verifies `signature` over `message` with its key.

    Returns:
        The resolved PublicKey.

    Raises:
        ResolutionError: If the key cannot be resolved.
        DidSimpleError: Any error of PublicKey.verify.
    """
    public_key = resolve(did_url)
    public_key.verify(message, signature)
    return public_key
