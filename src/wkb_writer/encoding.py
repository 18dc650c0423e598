"""
Fixed-width numeric encoding for WKB fields.

All multi-byte values are little-endian regardless of the host byte order,
matching the NDR flag written at the start of every geometry.
"""

import binascii
import struct

from .errors import EncodingError
from .geometry import UINT32_MAX

BYTE_SIZE = 1
UINT32_SIZE = 4
DOUBLE_SIZE = 8
COORD_SIZE = 2 * DOUBLE_SIZE

_UINT32 = struct.Struct("<I")
_DOUBLE = struct.Struct("<d")
_COORD = struct.Struct("<dd")

_HEX_DIGITS = tuple(f"{i:02X}" for i in range(256))


def pack_byte(value: int) -> bytes:
    """Encode a single unsigned byte"""
    if not 0 <= value <= 0xFF:
        raise EncodingError(f"Byte value out of range: {value}")
    return bytes((value,))


def pack_uint32(value: int) -> bytes:
    """Encode an unsigned 32-bit integer, little-endian"""
    if not 0 <= value <= UINT32_MAX:
        raise EncodingError(f"uint32 value out of range: {value}")
    return _UINT32.pack(value)


def pack_double(value: float) -> bytes:
    """Encode an IEEE-754 double, little-endian"""
    return _DOUBLE.pack(value)


def pack_coordinate(x: float, y: float) -> bytes:
    """Encode an (x, y) pair as two consecutive doubles"""
    return _COORD.pack(x, y)


def unpack_uint32_at(data: bytes, offset: int) -> int:
    """Read an unsigned 32-bit little-endian integer at a byte offset"""
    return _UINT32.unpack_from(data, offset)[0]


def unpack_double_at(data: bytes, offset: int) -> float:
    """Read a little-endian double at a byte offset"""
    return _DOUBLE.unpack_from(data, offset)[0]


def byte_to_hex(value: int) -> str:
    """
    Two uppercase hex digits for one byte.

    Example:
        >>> byte_to_hex(230)
        'E6'
    """
    if not 0 <= value <= 0xFF:
        raise EncodingError(f"Byte value out of range: {value}")
    return _HEX_DIGITS[value]


def convert_to_hex(data: bytes | bytearray) -> str:
    """
    Render bytes as uppercase hex, two characters per byte.

    Byte offset k of the input maps to character offset 2k of the result.

    Example:
        >>> convert_to_hex(b"\\x01\\x01\\x00\\x00\\x00")
        '0101000000'
    """
    return "".join(_HEX_DIGITS[b] for b in data)


def hex_to_bytes(text: str) -> bytes:
    """
    Decode a hex string produced by convert_to_hex (either case accepted).

    Raises:
        EncodingError: If the text has odd length or non-hex characters
    """
    try:
        return binascii.unhexlify(text)
    except (binascii.Error, ValueError) as e:
        raise EncodingError(f"Invalid hex string: {e}") from e
