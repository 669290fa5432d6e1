# did_simple/varint.py
"""Unsigned varints as used by multicodec.

Each byte carries 7 value bits, least significant group first. The high bit
is set on every byte except the last. Values are limited to 63 bits (9 bytes)
and only the minimal encoding of a value is accepted.
See https://github.com/multiformats/unsigned-varint
"""

from typing import Tuple, Union

from .constants import VARINT_MAX_BYTES, VARINT_MAX_VALUE
from .errors import (
    InvalidInputError,
    OverlongVarintError,
    TruncatedVarintError,
    VarintOverflowError,
)

LSB_7 = 0x7F
MSB = 0x80

BytesLike = Union[bytes, bytearray, memoryview]


def read_varint(data: BytesLike) -> Tuple[int, int]:
    """
    Decodes the varint at the start of `data`.

    Args:
        data: Bytes beginning with a varint. Trailing bytes are ignored.

    Returns:
        A tuple of (value, number of bytes consumed).

    Raises:
        TruncatedVarintError: If the input ends before a byte with the high bit clear.
        VarintOverflowError: If the value needs more than 63 bits.
        OverlongVarintError: If the value has a shorter encoding.
    """
    view = memoryview(data).cast("B")
    value = 0
    for index, byte in enumerate(view):
        if index >= VARINT_MAX_BYTES:
            raise VarintOverflowError(index)
        value |= (byte & LSB_7) << (7 * index)
        if not byte & MSB:
            # a zero final group means an earlier byte could have terminated
            if byte == 0 and index > 0:
                raise OverlongVarintError(index)
            return value, index + 1
    raise TruncatedVarintError(len(view))


def encode_varint(value: int) -> bytes:
    """Minimal varint encoding of 0 <= value <= 2**63 - 1."""
    if value < 0:
        raise InvalidInputError(f"Varint values are unsigned, got {value}.")
    if value > VARINT_MAX_VALUE:
        raise VarintOverflowError(message=f"Varint value {value} exceeds 63 bits.")

    out = bytearray()
    while True:
        group = value & LSB_7
        value >>= 7
        if value:
            out.append(group | MSB)
        else:
            out.append(group)
            return bytes(out)
