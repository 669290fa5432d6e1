# did_simple/constants.py
"""Shared constants for did-simple."""

DID_SCHEME: str = "did"
DID_PREFIX: str = "did:"
DID_KEY_METHOD: str = "key"
DID_KEY_PREFIX: str = "did:key:"

MULTIBASE_BASE58BTC_PREFIX: str = "z"
MULTIBASE_BASE58BTC_NAME: str = "base58btc"
BASE58BTC_ALPHABET: str = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
# the longest supported key (p384-pub) encodes to about 70 characters
MULTIBASE_MAX_LENGTH: int = 256

# multicodec table codes, see https://github.com/multiformats/multicodec/blob/master/table.csv
ED25519_PUB_MULTICODEC_CODE: int = 0xED
X25519_PUB_MULTICODEC_CODE: int = 0xEC
SECP256K1_PUB_MULTICODEC_CODE: int = 0xE7
P256_PUB_MULTICODEC_CODE: int = 0x1200
P384_PUB_MULTICODEC_CODE: int = 0x1201

# unsigned-varint: 9 bytes of 7 bits each
VARINT_MAX_VALUE: int = 2**63 - 1
VARINT_MAX_BYTES: int = 9

DID_CORE_CONTEXT_V1: str = "https://www.w3.org/ns/did/v1"
MULTIKEY_CONTEXT_V1: str = "https://w3id.org/security/multikey/v1"
JWS_2020_CONTEXT_V1: str = "https://w3id.org/security/suites/jws-2020/v1"

ENV_PREFIX: str = "DID_SIMPLE_"

EXIT_SUCCESS = 0
EXIT_FAILURE = 1
