"""
Shared pytest fixtures and utilities for the tokenveil test suite.
"""

from pathlib import Path
from typing import Dict, Any, Callable

import pytest
import yaml


@pytest.fixture
def key() -> bytes:
    """Default obfuscation key used across protocol tests."""
    return b"site-key"


@pytest.fixture
def fixed_random() -> Callable[[], float]:
    """Random source that always draws the same value."""
    return lambda: 0.5


@pytest.fixture
def recording_hasher():
    """
    Async SHA-256 provider that records every value it hashes.

    Usage:
        hasher = recording_hasher
        await obfuscate("x", key, hasher=hasher)
        assert hasher.calls == [...]
    """
    from tokenveil.protocol.hashing import sha256_digest

    class RecordingHasher:
        def __init__(self):
            self.calls = []

        async def __call__(self, value: str) -> bytes:
            self.calls.append(value)
            return sha256_digest(value)

    return RecordingHasher()


@pytest.fixture(autouse=True)
def clear_key_env(monkeypatch):
    """Keep a developer's TOKENVEIL_KEY from leaking into tests."""
    monkeypatch.delenv("TOKENVEIL_KEY", raising=False)


@pytest.fixture
def make_config(tmp_path: Path) -> Callable[[Dict[str, Any]], Path]:
    """
    Create a minimal tokenveil.yaml in a temp directory.
    
    Usage:
        path = make_config({"logging": {"level": "DEBUG"}})
    """

    def _builder(overrides: Dict[str, Any] | None = None) -> Path:
        base = {
            "obfuscation": {"key": "site-key", "key_encoding": "utf-8"},
            "logging": {"level": "WARNING", "console": False},
        }
        if overrides:
            base = merge_dicts(base, overrides)

        cfg_path = tmp_path / "tokenveil.yaml"
        cfg_path.write_text(yaml.safe_dump(base))
        return cfg_path

    return _builder


def merge_dicts(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge override into base (returns new dict)."""
    result = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = merge_dicts(result[key], value)
        else:
            result[key] = value
    return result
