"""Resolve configured key material into key bytes."""

import binascii
from typing import Dict, Any, Optional

from tokenveil.codec.base32 import decode_base32
from tokenveil.config.loader import ConfigError, get_config_value

DEFAULT_KEY_ENCODING = 'utf-8'


def decode_key(material: str, encoding: Optional[str] = None) -> bytes:
    """
    Convert key material to bytes.

    Args:
        material: Key text as written in config or on the command line
        encoding: 'utf-8' (default), 'hex' or 'base32'

    Returns:
        Non-empty key bytes

    Raises:
        ConfigError: If the encoding is unknown, the material does not
            decode, or it decodes to nothing
    """
    encoding = (encoding or DEFAULT_KEY_ENCODING).lower()

    if encoding in ('utf-8', 'utf8'):
        key = material.encode('utf-8')
    elif encoding == 'hex':
        try:
            key = binascii.unhexlify(material.strip())
        except (binascii.Error, ValueError) as e:
            raise ConfigError(f"Key is not valid hex: {e}")
    elif encoding == 'base32':
        key = decode_base32(material)
    else:
        raise ConfigError(f"Unknown key encoding: {encoding}")

    if not key:
        raise ConfigError("Obfuscation key decodes to zero bytes")

    return key


def resolve_key(config: Dict[str, Any]) -> bytes:
    """Read obfuscation.key / obfuscation.key_encoding from config as bytes."""
    material = get_config_value(config, 'obfuscation.key')
    if not material:
        raise ConfigError("obfuscation.key is not set")

    encoding = get_config_value(config, 'obfuscation.key_encoding', DEFAULT_KEY_ENCODING)
    return decode_key(str(material), encoding)
