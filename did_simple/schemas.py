# did_simple/schemas.py
"""Pydantic models for input validation and output structuring."""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class InputSchema(BaseModel):
    func_name: Literal["parse", "parse-did-url", "resolve", "resolve-did", "verify", "encode"]

    func_input_data: Dict[str, Any] = Field(default_factory=dict)


class VerificationMethod(BaseModel):
    """Represents a DID Document Verification Method entry."""
    id: str
    type: str
    controller: str
    publicKeyMultibase: Optional[str] = None
    publicKeyJwk: Optional[Dict[str, Any]] = None


class DidDocument(BaseModel):
    """A DID Document as produced for did:key identifiers."""
    model_config = ConfigDict(populate_by_name=True)

    context: List[str] = Field(..., alias="@context")
    id: str
    verificationMethod: List[VerificationMethod]
    authentication: Optional[List[str]] = None
    assertionMethod: Optional[List[str]] = None
    capabilityInvocation: Optional[List[str]] = None
    capabilityDelegation: Optional[List[str]] = None
    keyAgreement: Optional[List[str]] = None


class ParseOutput(BaseModel):
    """Output data for the 'parse' function."""
    did: str = Field(..., description="The bare DID without path, query or fragment.")
    method: str
    methodSpecificId: str
    path: Optional[str] = None
    query: Optional[Dict[str, str]] = None
    fragment: Optional[str] = None


class ResolveOutput(BaseModel):
    """Output data for the 'resolve' function."""
    did: str = Field(..., description="The resolved DID.")
    codec: str = Field(..., description="Multicodec name of the key, e.g. 'ed25519-pub'.")
    tag: int = Field(..., description="Numeric multicodec tag.")
    publicKeyHex: str = Field(..., description="The raw public key bytes, hex encoded.")
    publicKeyMultibase: str
    publicKeyJwk: Optional[Dict[str, Any]] = Field(None, description="The public key as a JWK, when the key bytes are a valid key.")


class VerifyOutput(BaseModel):
    """Output data for the 'verify' function."""
    verified: bool = Field(..., description="True if the signature is valid, False otherwise.")
    did: str
    algorithm: Optional[str] = None
    error: Optional[str] = Field(None, description="Reason for verification failure, if applicable.")


class EncodeOutput(BaseModel):
    """Output data for the 'encode' function."""
    did: str = Field(..., description="The did:key string for the given key.")


class ErrorOutput(BaseModel):
    """Standardized error output format."""
    error: str = Field(..., description="A short error code or category.")
    message: str = Field(..., description="A human-readable description of the error.")
