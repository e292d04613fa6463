"""
Byte-level codecs used by the obfuscation protocol.

Both codecs are pure functions over in-memory byte sequences.
"""

from .base32 import BASE32_ALPHABET, encode_base32, decode_base32, is_base32_symbol
from .xor import xor_bytes, InvalidKeyError

__all__ = [
    'BASE32_ALPHABET',
    'encode_base32',
    'decode_base32',
    'is_base32_symbol',
    'xor_bytes',
    'InvalidKeyError',
]
