"""
Cycling XOR primitive.

SECURITY NOTE: A repeating-key XOR is NOT cryptographically secure. It is
used here only as one layer of a reversible obfuscation scheme.
"""

from typing import Union

BytesLike = Union[bytes, bytearray, memoryview]


class InvalidKeyError(ValueError):
    """Raised when an XOR key is empty."""
    pass


def xor_bytes(data: BytesLike, key: BytesLike) -> bytes:
    """
    XOR data with a key, cycling the key when it is shorter than the data.

    XOR is its own inverse, so the same call obfuscates and deobfuscates.

    Args:
        data: Bytes to transform
        key: Non-empty key bytes

    Returns:
        New bytes object with the same length as ``data``

    Raises:
        InvalidKeyError: If ``key`` is empty
    """
    key_bytes = bytes(key)
    if not key_bytes:
        raise InvalidKeyError("XOR key must not be empty")

    key_length = len(key_bytes)
    return bytes(b ^ key_bytes[i % key_length] for i, b in enumerate(bytes(data)))
