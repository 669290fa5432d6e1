#!/usr/bin/env python3
"""Command-line entry point and payload dispatcher for did-simple."""

import argparse
import base64
import binascii
import json
import logging
import sys
from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError

from .config import SETTINGS
from .constants import EXIT_FAILURE, EXIT_SUCCESS
from .did_url import parse
from .document import MULTIKEY, REPRESENTATIONS
from .errors import DidSimpleError, InvalidInputError, InvalidKeyEncodingError, VerificationFailedError
from .key_codecs import KeyCodec
from .keys import PublicKey
from .resolver import resolve, resolve_document
from .schemas import EncodeOutput, ErrorOutput, InputSchema, ParseOutput, ResolveOutput, VerifyOutput

logger = logging.getLogger(__name__)

SIGNATURE_ENCODINGS = ("base64url", "hex")


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the application."""
    log_level = logging.DEBUG if verbose else getattr(logging, SETTINGS.log_level)
    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="did:key resolution and verification tool")
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable verbose logging')

    subparsers = parser.add_subparsers(dest='command', required=True, help='Command to execute')

    parse_parser = subparsers.add_parser('parse', help='Split a DID URL into its components')
    parse_parser.add_argument('did_url', help='DID URL to parse')

    resolve_parser = subparsers.add_parser('resolve', help='Resolve a did:key to its public key')
    resolve_parser.add_argument('did', help='DID to resolve')
    resolve_parser.add_argument('--document', action='store_true', help='Output the DID document instead')
    resolve_parser.add_argument('--representation', choices=REPRESENTATIONS, default=MULTIKEY,
                                help='Verification method representation for --document')

    verify_parser = subparsers.add_parser('verify', help='Verify a signature against a did:key')
    verify_parser.add_argument('did', help='DID whose key made the signature')
    message_group = verify_parser.add_mutually_exclusive_group(required=True)
    message_group.add_argument('--message', help='Signed message (UTF-8 text)')
    message_group.add_argument('--message-file', help='File containing the signed message bytes')
    verify_parser.add_argument('--signature', required=True, help='The signature')
    verify_parser.add_argument('--encoding', choices=SIGNATURE_ENCODINGS, default='base64url',
                               help='Encoding of --signature')

    encode_parser = subparsers.add_parser('encode', help='Build a did:key from raw public key bytes')
    encode_parser.add_argument('--codec', choices=[codec.codec_name for codec in KeyCodec],
                               default=KeyCodec.ED25519_PUB.codec_name, help='Key multicodec')
    encode_parser.add_argument('--key', required=True, help='Raw public key, hex encoded')

    return parser.parse_args(argv)


def _b64decode(data: str) -> bytes:
    """Base64url decoding, padding optional."""
    padded = data + '=' * (-len(data) % 4)
    return base64.b64decode(padded.replace('-', '+').replace('_', '/'), validate=True)


def decode_signature(signature: str, encoding: str = "base64url") -> bytes:
    """Decode a text signature. Raises InvalidInputError for bad input."""
    try:
        if encoding == "hex":
            return bytes.fromhex(signature)
        if encoding == "base64url":
            return _b64decode(signature)
    except (ValueError, binascii.Error) as e:
        raise InvalidInputError(f"Signature is not valid {encoding}: {e}")
    raise InvalidInputError(f"Unsupported signature encoding: {encoding}. Use one of {SIGNATURE_ENCODINGS}.")


def load_message_file(file_path: str) -> bytes:
    """Read the raw bytes of a message file."""
    try:
        with open(file_path, 'rb') as f:
            return f.read()
    except OSError as e:
        logger.error(f"Failed to read message from {file_path}: {e}")
        raise InvalidInputError(f"Failed to read message from {file_path}: {e}")


def parse_did_url(did_url: str) -> Dict[str, Any]:
    """Parse a DID URL into a JSON-ready dictionary."""
    url = parse(did_url)
    return ParseOutput(
        did=url.did,
        method=url.method,
        methodSpecificId=url.method_specific_id,
        path=url.path,
        query=dict(url.query) if url.query is not None else None,
        fragment=url.fragment,
    ).model_dump(exclude_none=True)


def resolve_did(did: str, document: bool = False, representation: str = MULTIKEY) -> Dict[str, Any]:
    """Resolve a DID to its key description or DID Document."""
    if document:
        return resolve_document(did, representation)

    public_key = resolve(did)
    try:
        public_jwk = public_key.to_jwk()
    except InvalidKeyEncodingError as e:
        logger.debug(f"No JWK for {did}: {e}")
        public_jwk = None

    return ResolveOutput(
        did=parse(did).did,
        codec=public_key.algorithm,
        tag=public_key.codec.tag,
        publicKeyHex=public_key.raw.hex(),
        publicKeyMultibase=public_key.to_multibase(),
        publicKeyJwk=public_jwk,
    ).model_dump(exclude_none=True)


def verify_signature(did: str, message: Union[bytes, str], signature: bytes) -> Dict[str, Any]:
    """
    Verifies a signature made by the key of a did:key.

    A signature that does not match is reported as ``verified: False``; any
    other problem (malformed DID, unsupported algorithm, bad signature
    length) raises.
    """
    public_key = resolve(did)
    try:
        public_key.verify(message, signature)
    except VerificationFailedError as e:
        logger.info(f"Signature rejected for {did}: {e.message}")
        return VerifyOutput(verified=False, did=did, algorithm=public_key.algorithm,
                            error=e.message).model_dump(exclude_none=True)
    return VerifyOutput(verified=True, did=did, algorithm=public_key.algorithm).model_dump(exclude_none=True)


def encode_did_key(codec_name: str, key_hex: str) -> Dict[str, Any]:
    """Build a did:key from a codec name and hex-encoded raw key bytes."""
    try:
        codec = KeyCodec.from_name(codec_name)
        raw = bytes.fromhex(key_hex)
    except ValueError as e:
        raise InvalidInputError(f"Invalid encode input: {e}")
    return EncodeOutput(did=PublicKey.from_raw(codec, raw).to_did_key()).model_dump()


def run(*args, **kwargs) -> Dict[str, Any]:
    """
    Process a command payload of the form
    ``{"func_name": ..., "func_input_data": {...}}``, given either as the first
    positional argument or as keyword arguments.

    Returns:
        Dict containing the result of the operation

    Raises:
        InvalidInputError: If the payload is missing or invalid.
        DidSimpleError: If the operation itself fails.
    """
    if args and isinstance(args[0], dict):
        payload = args[0]
    elif 'func_name' in kwargs:
        payload = kwargs
    else:
        raise InvalidInputError("Could not find required input payload ('func_name', 'func_input_data') in args or kwargs")

    try:
        request = InputSchema(**payload)
    except ValidationError as e:
        raise InvalidInputError(f"Invalid input payload: {e}")

    func_name = request.func_name
    params = request.func_input_data
    logger.info(f"Executing function: {func_name}")

    if func_name in ['parse', 'parse-did-url']:
        did_url = params.get('did_url') or params.get('did')
        if not did_url:
            raise InvalidInputError("Missing 'did_url' parameter for parse in func_input_data")
        return parse_did_url(did_url)

    elif func_name in ['resolve', 'resolve-did']:
        did = params.get('did')
        if not did:
            raise InvalidInputError("Missing 'did' parameter for resolve in func_input_data")
        return resolve_did(did, bool(params.get('document', False)),
                           params.get('representation', MULTIKEY))

    elif func_name == 'verify':
        did = params.get('did')
        message = params.get('message')
        signature = params.get('signature')
        if not did or message is None or not signature:
            raise InvalidInputError("Missing 'did', 'message' or 'signature' in func_input_data for verify")
        sig_bytes = decode_signature(signature, params.get('encoding', 'base64url'))
        return verify_signature(did, message, sig_bytes)

    # InputSchema admits nothing else
    codec_name = params.get('codec', KeyCodec.ED25519_PUB.codec_name)
    key_hex = params.get('key')
    if not key_hex:
        raise InvalidInputError("Missing 'key' in func_input_data for encode")
    return encode_did_key(codec_name, key_hex)


def main(argv: Optional[List[str]] = None) -> int:
    """Command-line entry point."""
    try:
        args = parse_args(argv)
        setup_logging(args.verbose)

        if args.command == 'parse':
            result = parse_did_url(args.did_url)

        elif args.command == 'resolve':
            result = resolve_did(args.did, args.document, args.representation)

        elif args.command == 'verify':
            if args.message_file:
                message = load_message_file(args.message_file)
            else:
                message = args.message
            signature = decode_signature(args.signature, args.encoding)
            result = verify_signature(args.did, message, signature)

        elif args.command == 'encode':
            result = encode_did_key(args.codec, args.key)

        else:
            print(f"Unknown command: {args.command}", file=sys.stderr)
            return EXIT_FAILURE

        print(json.dumps(result, indent=2))
        return EXIT_SUCCESS

    except DidSimpleError as e:
        error = ErrorOutput(error=e.error_code, message=e.message)
        print(json.dumps(error.model_dump(), indent=2))
        return EXIT_FAILURE
    except Exception as e:
        print(json.dumps({"error": "UnexpectedError", "message": str(e)}, indent=2))
        logger.exception("Unexpected error occurred")
        return EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
