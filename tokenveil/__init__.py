"""
Tokenveil - reversible obfuscation for short client-visible tokens

Wraps text in a cycling XOR with a caller key and an IV-derived SHA-256
keystream, then encodes the result with an unpadded RFC 4648 base32
alphabet. This is obfuscation against casual inspection, NOT encryption.
"""

__version__ = "0.3.0"
__author__ = "tokenveil contributors"

from tokenveil.codec.base32 import encode_base32, decode_base32
from tokenveil.codec.xor import xor_bytes, InvalidKeyError
from tokenveil.protocol.obfuscator import (
    obfuscate,
    deobfuscate,
    inspect_token,
    Obfuscator,
    DecodedToken,
)

__all__ = [
    'encode_base32',
    'decode_base32',
    'xor_bytes',
    'InvalidKeyError',
    'obfuscate',
    'deobfuscate',
    'inspect_token',
    'Obfuscator',
    'DecodedToken',
]
