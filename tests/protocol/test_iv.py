import base64
import hashlib

import pytest

from tokenveil.protocol.hashing import sha256, sha256_digest, check_digest, HashProviderError, DIGEST_SIZE
from tokenveil.protocol.iv import (
    IV_LENGTH,
    derive_iv,
    derive_keystream,
    format_random_value,
    is_valid_iv,
)


@pytest.mark.unit
def test_sha256_digest_matches_hashlib():
    assert sha256_digest("AB") == hashlib.sha256(b"AB").digest()
    assert len(sha256_digest("")) == DIGEST_SIZE


@pytest.mark.unit
@pytest.mark.asyncio
async def test_async_provider_matches_sync_digest():
    assert await sha256("grüße") == sha256_digest("grüße")


@pytest.mark.unit
def test_check_digest_rejects_wrong_sizes():
    assert check_digest(bytearray(32)) == bytes(32)
    with pytest.raises(HashProviderError):
        check_digest(b"")
    with pytest.raises(HashProviderError):
        check_digest("not bytes")  # type: ignore[arg-type]


@pytest.mark.unit
@pytest.mark.parametrize(
    "value,expected",
    [(0.5, "0.5"), (0.25, "0.25"), (0.1, "0.1"), (0, "0.0")],
)
def test_format_random_value(value, expected):
    assert format_random_value(value) == expected


@pytest.mark.unit
@pytest.mark.asyncio
async def test_derive_iv_takes_last_two_symbols_of_hash():
    iv = await derive_iv(lambda: 0.25)

    digest = hashlib.sha256(b"0.25").digest()
    assert iv == base64.b32encode(digest).decode("ascii").rstrip("=")[-IV_LENGTH:]
    assert is_valid_iv(iv)


@pytest.mark.unit
@pytest.mark.asyncio
async def test_derive_iv_uses_module_random_by_default(monkeypatch):
    monkeypatch.setattr("random.random", lambda: 0.5)
    assert await derive_iv() == await derive_iv(lambda: 0.5)


@pytest.mark.unit
@pytest.mark.asyncio
async def test_derive_keystream_hashes_iv_text():
    assert await derive_keystream("KQ") == hashlib.sha256(b"KQ").digest()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_derive_keystream_does_not_validate_iv():
    # Decoding hashes whatever leads the token, even lowercase or symbols
    assert await derive_keystream("k!") == hashlib.sha256(b"k!").digest()


@pytest.mark.unit
@pytest.mark.parametrize(
    "iv,valid",
    [("AA", True), ("Z7", True), ("aa", False), ("A", False), ("ABC", False), ("A1", False)],
)
def test_is_valid_iv(iv, valid):
    assert is_valid_iv(iv) is valid
