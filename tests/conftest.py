"""Configuration for pytest"""

import pytest
import logging

from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec, ed25519, x25519
from cryptography.hazmat.primitives.asymmetric.utils import decode_dss_signature

from did_simple.key_codecs import KeyCodec

# Published did:key test vectors
ED25519_VECTOR_DID = "did:key:z6MkhaXgBZDvotDkL5257faiztiGiC2QtKLGpbnnEGta2doK"
ED25519_VECTOR_HEX = "2e6fcce36701dc791488e0d0b1745cc1e33a4c1c9fcc41c63bd343dbbe0970e6"
ED25519_VECTOR_JWK_X = "Lm_M42cB3HkUiODQsXRcweM6TByfzEHGO9ND274JcOY"
ED25519_EXAMPLE_DID = "did:key:z6Mkf5rGMoatrSj1f4CyvuHBeXJELe9RPdzo2PKGNCKVtZxP"
ED25519_EXAMPLE_HEX = "095f9a1a595dde755d82786864ad03dfa5a4fbd68832566364e2b65e13cc9e44"
X25519_VECTOR_DID = "did:key:z6LSeu9HkTHSfLLeUs2nnzUSNedgDUevfNQgQjQC23ZCit6F"
X25519_VECTOR_HEX = "2fe57da347cd62431528daac5fbb290730fff684afc4cfc2ed90995f58cb3b74"
SECP256K1_VECTOR_DID = "did:key:zQ3shokFTS3brHcDQrn82RUDfCZESWL1ZdCEJwekUDPQiYBme"
SECP256K1_VECTOR_HEX = "03874c15c7fda20e539c6e5ba573c139884c351188799f5458b4b41f7924f235cd"
P256_VECTOR_DID = "did:key:zDnaerDaTF5BXEavCrfRZEk316dpbLsfPDZ3WJ5hRTPFU2169"
P256_VECTOR_HEX = "037f235830dd3defa722ef1aa249d6a0ddbba4f990b0817538933f573640653542"

EC_CURVES = {
    KeyCodec.SECP256K1_PUB: (ec.SECP256K1, hashes.SHA256, 32),
    KeyCodec.P256_PUB: (ec.SECP256R1, hashes.SHA256, 32),
    KeyCodec.P384_PUB: (ec.SECP384R1, hashes.SHA384, 48),
}


class Signer:
    """Private key wrapper producing signatures in the wire format did-simple verifies."""
    def __init__(self, codec, private_key, public_raw, sign):
        self.codec = codec
        self.private_key = private_key
        self.public_raw = public_raw
        self._sign = sign

    def sign(self, message: bytes) -> bytes:
        return self._sign(message)


def make_ed25519_signer() -> Signer:
    private_key = ed25519.Ed25519PrivateKey.generate()
    public_raw = private_key.public_key().public_bytes(
        serialization.Encoding.Raw, serialization.PublicFormat.Raw)
    return Signer(KeyCodec.ED25519_PUB, private_key, public_raw, private_key.sign)


def make_ecdsa_signer(codec: KeyCodec) -> Signer:
    curve, digest, scalar_length = EC_CURVES[codec]
    private_key = ec.generate_private_key(curve())
    public_raw = private_key.public_key().public_bytes(
        serialization.Encoding.X962, serialization.PublicFormat.CompressedPoint)

    def sign(message: bytes) -> bytes:
        r, s = decode_dss_signature(private_key.sign(message, ec.ECDSA(digest())))
        return r.to_bytes(scalar_length, "big") + s.to_bytes(scalar_length, "big")

    return Signer(codec, private_key, public_raw, sign)


def make_x25519_public_raw() -> bytes:
    return x25519.X25519PrivateKey.generate().public_key().public_bytes(
        serialization.Encoding.Raw, serialization.PublicFormat.Raw)


@pytest.fixture(autouse=True)
def setup_logging():
    logging.basicConfig(
        level=logging.DEBUG,
        format='%(levelname)s - %(name)s - %(message)s'
    )

    logging.getLogger('jwcrypto').setLevel(logging.WARNING)

    return logging.getLogger()


@pytest.fixture
def ed25519_signer():
    return make_ed25519_signer()


@pytest.fixture(params=[KeyCodec.ED25519_PUB, KeyCodec.SECP256K1_PUB, KeyCodec.P256_PUB, KeyCodec.P384_PUB],
                ids=lambda codec: codec.codec_name)
def signer(request):
    """A signer for every codec that supports signature verification."""
    if request.param is KeyCodec.ED25519_PUB:
        return make_ed25519_signer()
    return make_ecdsa_signer(request.param)
