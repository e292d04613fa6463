"""Obfuscation protocol package."""

from .hashing import DIGEST_SIZE, HashProvider, HashProviderError, sha256
from .iv import IV_LENGTH, InvalidIVError, derive_iv, derive_keystream
from .obfuscator import (
    obfuscate,
    deobfuscate,
    inspect_token,
    Obfuscator,
    DecodedToken,
)

__all__ = [
    "DIGEST_SIZE",
    "HashProvider",
    "HashProviderError",
    "sha256",
    "IV_LENGTH",
    "InvalidIVError",
    "derive_iv",
    "derive_keystream",
    "obfuscate",
    "deobfuscate",
    "inspect_token",
    "Obfuscator",
    "DecodedToken",
]
