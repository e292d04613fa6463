"""SHA-256 hash provider used to derive IVs and keystreams."""

import hashlib
from typing import Awaitable, Callable

DIGEST_SIZE = 32

HashProvider = Callable[[str], Awaitable[bytes]]


class HashProviderError(RuntimeError):
    """An injected hash provider returned an unusable digest."""
    pass


def sha256_digest(value: str) -> bytes:
    """Return the SHA-256 digest of the UTF-8 encoding of ``value``."""
    return hashlib.sha256(value.encode("utf-8")).digest()


async def sha256(value: str) -> bytes:
    """
    Default asynchronous hash provider.

    Hashing is done inline; the coroutine form is the seam that lets callers
    plug in a provider backed by a platform or remote crypto service.
    """
    return sha256_digest(value)


def check_digest(digest: bytes) -> bytes:
    """
    Verify a provider's digest is usable as a keystream.

    Raises:
        HashProviderError: If the digest is not DIGEST_SIZE bytes
    """
    if not isinstance(digest, (bytes, bytearray)) or len(digest) != DIGEST_SIZE:
        size = len(digest) if isinstance(digest, (bytes, bytearray)) else type(digest).__name__
        raise HashProviderError(
            f"Hash provider returned {size}, expected {DIGEST_SIZE} bytes"
        )
    return bytes(digest)
