"""
Unpadded base32 codec.

Uses the RFC 4648 alphabet (A-Z, 2-7) without '=' padding. Encoding is
canonical; decoding is lenient: trailing padding is stripped, input is
uppercased and characters outside the alphabet are skipped rather than
rejected, so tokens copied out of URLs or emails still decode.
"""

from typing import Union

BASE32_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567"

_DECODE_MAP = {char: index for index, char in enumerate(BASE32_ALPHABET)}


def encode_base32(data: Union[bytes, bytearray, memoryview]) -> str:
    """
    Encode bytes as an unpadded base32 string.

    Bits are consumed most-significant first across byte boundaries. A
    trailing group shorter than 5 bits is zero-padded on the right.

    Args:
        data: Bytes to encode

    Returns:
        Base32 string, empty for empty input

    Example:
        >>> encode_base32(bytes(5))
        'AAAAAAAA'
    """
    output = []
    buffer = 0
    bits = 0

    for byte in bytes(data):
        buffer = ((buffer << 8) | byte) & 0xFFF
        bits += 8
        while bits >= 5:
            output.append(BASE32_ALPHABET[(buffer >> (bits - 5)) & 31])
            bits -= 5

    if bits > 0:
        output.append(BASE32_ALPHABET[(buffer << (5 - bits)) & 31])

    return "".join(output)


def decode_base32(text: str) -> bytes:
    """
    Decode a base32 string, tolerating padding, case and stray characters.

    Leftover bits that do not fill a whole byte are discarded.

    Args:
        text: Base32 string

    Returns:
        Decoded bytes
    """
    output = bytearray()
    buffer = 0
    bits = 0

    for char in text.rstrip("=").upper():
        index = _DECODE_MAP.get(char)
        if index is None:
            continue
        buffer = ((buffer << 5) | index) & 0xFFF
        bits += 5
        if bits >= 8:
            output.append((buffer >> (bits - 8)) & 0xFF)
            bits -= 8

    return bytes(output)


def is_base32_symbol(char: str) -> bool:
    """Return True if ``char`` is a single canonical alphabet symbol."""
    return len(char) == 1 and char in _DECODE_MAP
