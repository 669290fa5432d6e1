# did_simple/edwards.py
"""Point checks for Ed25519 public keys.

OpenSSL accepts any 32 bytes as an Ed25519 public key. Under a small-order
key, a signature with a small-order R and a zero S verifies for every message.

Decoding follows RFC 8032 section 5.1.3, except that y is reduced mod p and a
negative zero x is accepted. Every alternative encoding of a small-order point
therefore decodes and is caught.
"""

from typing import Optional, Tuple

from .errors import InvalidKeyEncodingError

P = 2**255 - 19
D = -121665 * pow(121666, P - 2, P) % P
SQRT_M1 = pow(2, (P - 1) // 4, P)
COFACTOR_DOUBLINGS = 3

# extended coordinates (X, Y, Z, T)
Point = Tuple[int, int, int, int]


def _recover_x(y: int, sign: int) -> Optional[int]:
    x2 = (y * y - 1) * pow(D * y * y + 1, P - 2, P) % P
    if x2 == 0:
        return 0
    x = pow(x2, (P + 3) // 8, P)
    if (x * x - x2) % P != 0:
        x = x * SQRT_M1 % P
    if (x * x - x2) % P != 0:
        return None
    if (x & 1) != sign:
        x = P - x
    return x


def decompress(raw: bytes) -> Optional[Point]:
    """Decodes a 32-byte point encoding; None if it is not on the curve."""
    value = int.from_bytes(raw, "little")
    sign = value >> 255
    y = (value & ((1 << 255) - 1)) % P
    x = _recover_x(y, sign)
    if x is None:
        return None
    return (x, y, 1, x * y % P)


def _add(a: Point, b: Point) -> Point:
    A = (a[1] - a[0]) * (b[1] - b[0]) % P
    B = (a[1] + a[0]) * (b[1] + b[0]) % P
    C = 2 * a[3] * b[3] * D % P
    E = 2 * a[2] * b[2] % P
    F, G, H, K = B - A, E - C, E + C, B + A
    return (F * G % P, H * K % P, G * H % P, F * K % P)


def _is_identity(point: Point) -> bool:
    x, y, z, _ = point
    return x % P == 0 and (y - z) % P == 0


def is_small_order(point: Point) -> bool:
    """True if the point lies in the 8-torsion subgroup."""
    for _ in range(COFACTOR_DOUBLINGS):
        point = _add(point, point)
    return _is_identity(point)


def check_public_key(raw: bytes) -> None:
    """
    Raises:
        InvalidKeyEncodingError: If `raw` is not a curve point, or is a
                                 small-order (weak) point.
    """
    point = decompress(raw)
    if point is None:
        raise InvalidKeyEncodingError("Bytes are not a valid ed25519-pub key: not on the curve")
    if is_small_order(point):
        raise InvalidKeyEncodingError("Bytes are not a valid ed25519-pub key: weak (small-order) key")
