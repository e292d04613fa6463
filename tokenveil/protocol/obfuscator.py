"""
Token obfuscation protocol.

An obfuscated token is ``IV + base32(xor(xor(utf8(text), key), hash(IV)))``.
The IV is two base32 symbols chosen per call, so the same text and key give
different tokens on each call while any of them decodes back to the text.

SECURITY NOTE: This is obfuscation, NOT encryption. Anyone holding the key,
or enough tokens produced under it, can recover the plaintext. It exists to
keep short values out of casual view in URLs and page source.

Example:
    >>> token = await obfuscate("user-42", b"site-key")
    >>> await deobfuscate(token, b"site-key")
    'user-42'
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

from tokenveil.codec.base32 import encode_base32, decode_base32
from tokenveil.codec.xor import xor_bytes, InvalidKeyError, BytesLike
from tokenveil.protocol.hashing import HashProvider
from tokenveil.protocol.iv import (
    IV_LENGTH,
    RandomSource,
    InvalidIVError,
    derive_iv,
    derive_keystream,
    is_valid_iv,
)

logger = logging.getLogger(__name__)

# Shortest token that carries a body after the IV
MIN_TOKEN_LENGTH = IV_LENGTH + 1


@dataclass(frozen=True)
class DecodedToken:
    """Intermediate values recovered while decoding a token."""
    iv: str = ""
    body: str = ""
    keystream: bytes = b""
    payload: bytes = b""
    text: str = ""

    @property
    def is_empty(self) -> bool:
        return not self.iv


def _require_key(key: BytesLike) -> bytes:
    key_bytes = bytes(key)
    if not key_bytes:
        raise InvalidKeyError("Obfuscation key must not be empty")
    return key_bytes


async def obfuscate(
    plain_text: str,
    key: BytesLike,
    *,
    random_source: Optional[RandomSource] = None,
    hasher: Optional[HashProvider] = None,
    iv: Optional[str] = None
) -> str:
    """
    Obfuscate text into an IV-prefixed base32 token.

    Args:
        plain_text: Text to obfuscate
        key: Non-empty key bytes, cycled over the UTF-8 text
        random_source: Callable returning a float for IV derivation
        hasher: Async hash provider (default: SHA-256)
        iv: Fixed IV to use instead of a random one (deterministic output)

    Returns:
        Obfuscated token

    Raises:
        InvalidKeyError: If ``key`` is empty
        InvalidIVError: If a forced ``iv`` is not two alphabet symbols
    """
    key_bytes = _require_key(key)

    if iv is None:
        iv = await derive_iv(random_source, hasher)
    elif not is_valid_iv(iv):
        raise InvalidIVError(f"IV must be {IV_LENGTH} base32 symbols, got {iv!r}")

    keystream = await derive_keystream(iv, hasher)

    masked = xor_bytes(xor_bytes(plain_text.encode("utf-8"), key_bytes), keystream)
    return iv + encode_base32(masked)


async def inspect_token(
    obfuscated: str,
    key: BytesLike,
    *,
    hasher: Optional[HashProvider] = None
) -> DecodedToken:
    """
    Decode a token and keep every intermediate value.

    Tokens shorter than MIN_TOKEN_LENGTH yield an empty DecodedToken.
    Malformed bodies never raise: unknown symbols are skipped and invalid
    UTF-8 is replaced with U+FFFD.

    Raises:
        InvalidKeyError: If ``key`` is empty
    """
    key_bytes = _require_key(key)

    # Length counts code points, not UTF-16 units; only malformed tokens differ
    if len(obfuscated) < MIN_TOKEN_LENGTH:
        logger.debug(f"Token too short to decode ({len(obfuscated)} chars)")
        return DecodedToken()

    iv = obfuscated[:IV_LENGTH]
    body = obfuscated[IV_LENGTH:]

    keystream = await derive_keystream(iv, hasher)
    payload = decode_base32(body)
    plain = xor_bytes(xor_bytes(payload, keystream), key_bytes)

    return DecodedToken(
        iv=iv,
        body=body,
        keystream=keystream,
        payload=payload,
        text=plain.decode("utf-8", errors="replace"),
    )


async def deobfuscate(
    obfuscated: str,
    key: BytesLike,
    *,
    hasher: Optional[HashProvider] = None
) -> str:
    """
    Recover the text from a token produced by obfuscate().

    Args:
        obfuscated: IV-prefixed token
        key: Key bytes used when obfuscating
        hasher: Async hash provider (default: SHA-256)

    Returns:
        Plain text, or "" when the token is shorter than MIN_TOKEN_LENGTH

    Raises:
        InvalidKeyError: If ``key`` is empty
    """
    decoded = await inspect_token(obfuscated, key, hasher=hasher)
    return decoded.text


class Obfuscator:
    """
    Obfuscation bound to one key and injected randomness/hash sources.

    Example:
        obfuscator = Obfuscator(b"site-key")
        token = obfuscator.obfuscate_sync("user-42")
        assert obfuscator.deobfuscate_sync(token) == "user-42"
    """

    def __init__(
        self,
        key: BytesLike,
        random_source: Optional[RandomSource] = None,
        hasher: Optional[HashProvider] = None
    ):
        """
        Args:
            key: Non-empty key bytes (copied)
            random_source: Callable returning a float for IV derivation
            hasher: Async hash provider

        Raises:
            InvalidKeyError: If ``key`` is empty
        """
        self.key = _require_key(key)
        self.random_source = random_source
        self.hasher = hasher

    async def obfuscate(self, text: str, iv: Optional[str] = None) -> str:
        return await obfuscate(
            text,
            self.key,
            random_source=self.random_source,
            hasher=self.hasher,
            iv=iv,
        )

    async def deobfuscate(self, token: str) -> str:
        return await deobfuscate(token, self.key, hasher=self.hasher)

    async def inspect(self, token: str) -> DecodedToken:
        return await inspect_token(token, self.key, hasher=self.hasher)

    def obfuscate_sync(self, text: str, iv: Optional[str] = None) -> str:
        """Blocking obfuscate(); must not be called from a running event loop."""
        return asyncio.run(self.obfuscate(text, iv=iv))

    def deobfuscate_sync(self, token: str) -> str:
        """Blocking deobfuscate(); must not be called from a running event loop."""
        return asyncio.run(self.deobfuscate(token))
