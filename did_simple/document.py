# did_simple/document.py
"""DID Document construction for did:key identifiers."""

import logging
from typing import Any, Dict, List

from .constants import DID_CORE_CONTEXT_V1, JWS_2020_CONTEXT_V1, MULTIKEY_CONTEXT_V1
from .did_url import DidUrl
from .errors import InvalidInputError
from .key_codecs import KeyCodec
from .keys import PublicKey
from .schemas import DidDocument, VerificationMethod

logger = logging.getLogger(__name__)

MULTIKEY = "Multikey"
JSON_WEB_KEY_2020 = "JsonWebKey2020"
REPRESENTATIONS = (MULTIKEY, JSON_WEB_KEY_2020)

_SIGNING_RELATIONSHIPS = ("authentication", "assertionMethod", "capabilityInvocation", "capabilityDelegation")
_AGREEMENT_RELATIONSHIPS = ("keyAgreement",)


def _relationships(public_key: PublicKey) -> List[str]:
    if public_key.codec is KeyCodec.X25519_PUB:
        return list(_AGREEMENT_RELATIONSHIPS)
    return list(_SIGNING_RELATIONSHIPS)


def build_did_document(did_url: DidUrl, public_key: PublicKey,
                       representation: str = MULTIKEY) -> Dict[str, Any]:
    """
    Builds the DID Document of a resolved did:key.

    Args:
        did_url: The parsed did:key URL. Only the bare DID is used.
        public_key: The key embedded in `did_url`.
        representation: "Multikey" (publicKeyMultibase) or "JsonWebKey2020" (publicKeyJwk).

    Returns:
        The DID Document as a JSON-ready dictionary.

    Raises:
        InvalidInputError: If `representation` is unknown.
        InvalidKeyEncodingError: If a JWK is requested for key bytes that are not a valid key.
    """
    did = did_url.did
    multibase_key = did_url.method_specific_id
    vm_id = f"{did}#{multibase_key}"

    if representation == MULTIKEY:
        context = [DID_CORE_CONTEXT_V1, MULTIKEY_CONTEXT_V1]
        method = VerificationMethod(id=vm_id, type=MULTIKEY, controller=did,
                                    publicKeyMultibase=multibase_key)
    elif representation == JSON_WEB_KEY_2020:
        context = [DID_CORE_CONTEXT_V1, JWS_2020_CONTEXT_V1]
        method = VerificationMethod(id=vm_id, type=JSON_WEB_KEY_2020, controller=did,
                                    publicKeyJwk=public_key.to_jwk())
    else:
        raise InvalidInputError(f"Unsupported verification method representation: {representation}. Use one of {REPRESENTATIONS}.")

    document = DidDocument(
        context=context,
        id=did,
        verificationMethod=[method],
        **{relationship: [vm_id] for relationship in _relationships(public_key)},
    )
    logger.debug(f"Built DID document for {did} ({representation})")
    return document.model_dump(by_alias=True, exclude_none=True)
