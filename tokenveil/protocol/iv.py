"""
Two-stage IV and keystream derivation.

Stage one turns a random draw into a 2-symbol IV: the float's string form is
hashed, the digest is base32-encoded and the last two symbols are kept.
Stage two hashes the IV text itself into the 32-byte keystream that masks
the message. The IV travels in cleartext, so it carries roughly 10 bits of
variation and no secrecy.
"""

import logging
import random
from typing import Callable, Optional

from tokenveil.codec.base32 import encode_base32, is_base32_symbol
from tokenveil.protocol.hashing import HashProvider, sha256, check_digest

logger = logging.getLogger(__name__)

IV_LENGTH = 2

RandomSource = Callable[[], float]


class InvalidIVError(ValueError):
    """A forced IV is not made of IV_LENGTH alphabet symbols."""
    pass


def format_random_value(value: float) -> str:
    """String form of a random draw as fed to the stage-one hash."""
    return repr(float(value))


def is_valid_iv(iv: str) -> bool:
    """Return True if ``iv`` is exactly IV_LENGTH base32 alphabet symbols."""
    return (
        isinstance(iv, str)
        and len(iv) == IV_LENGTH
        and all(is_base32_symbol(char) for char in iv)
    )


async def derive_iv(
    random_source: Optional[RandomSource] = None,
    hasher: Optional[HashProvider] = None
) -> str:
    """
    Derive a fresh IV from a random draw.

    Args:
        random_source: Callable returning a float (default: random.random)
        hasher: Async hash provider (default: SHA-256)

    Returns:
        IV_LENGTH-character base32 string
    """
    random_source = random_source or random.random
    hasher = hasher or sha256

    seed = format_random_value(random_source())
    digest = check_digest(await hasher(seed))
    iv = encode_base32(digest)[-IV_LENGTH:]
    logger.debug(f"Derived IV {iv}")
    return iv


async def derive_keystream(iv: str, hasher: Optional[HashProvider] = None) -> bytes:
    """
    Hash an IV into the per-message keystream.

    The IV is not validated here; deobfuscation hashes whatever leads the
    token.

    Args:
        iv: IV text
        hasher: Async hash provider (default: SHA-256)

    Returns:
        DIGEST_SIZE-byte keystream
    """
    hasher = hasher or sha256
    return check_digest(await hasher(iv))
