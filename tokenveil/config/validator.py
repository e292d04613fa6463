"""Configuration validation."""

import logging
from typing import Dict, Any, List

logger = logging.getLogger(__name__)

VALID_KEY_ENCODINGS = ['utf-8', 'hex', 'base32']
VALID_LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']


class ValidationError(Exception):
    """Configuration validation errors."""
    pass


def validate_config(config: Dict[str, Any], require_key: bool = True) -> None:
    """
    Validate configuration structure and values.

    Args:
        config: Configuration dictionary from loader
        require_key: Whether obfuscation.key must be present (raw codec
            commands run without one)

    Raises:
        ValidationError: If configuration is invalid
    """
    errors = []

    obfuscation = config.get('obfuscation', {})
    if not isinstance(obfuscation, dict):
        errors.append("obfuscation must be a mapping")
    else:
        errors.extend(_validate_obfuscation(obfuscation, require_key))

    logging_section = config.get('logging', {})
    if logging_section is None:
        logging_section = {}
    if not isinstance(logging_section, dict):
        errors.append("logging must be a mapping")
    else:
        errors.extend(_validate_logging(logging_section))

    if errors:
        raise ValidationError(
            "Configuration validation failed:\n  - " + "\n  - ".join(errors)
        )

    logger.debug("Configuration validated")


def _validate_obfuscation(section: Dict[str, Any], require_key: bool = True) -> List[str]:
    """Validate obfuscation section."""
    errors = []

    key = section.get('key')
    if key is None or key == '':
        if require_key:
            errors.append("obfuscation.key is required")
    elif not isinstance(key, str):
        errors.append("obfuscation.key must be a string")

    if 'key_encoding' in section:
        encoding = section['key_encoding']
        if encoding not in VALID_KEY_ENCODINGS:
            errors.append(
                f"obfuscation.key_encoding must be one of: {', '.join(VALID_KEY_ENCODINGS)}"
            )

    if 'query_param' in section:
        param = section['query_param']
        if not isinstance(param, str) or not param.strip():
            errors.append("obfuscation.query_param must be a non-empty string")

    return errors


def _validate_logging(section: Dict[str, Any]) -> List[str]:
    """Validate logging section."""
    errors = []

    if 'level' in section:
        level = section['level']
        if not isinstance(level, str) or level.upper() not in VALID_LOG_LEVELS:
            errors.append(
                f"logging.level must be one of: {', '.join(VALID_LOG_LEVELS)}"
            )

    if 'console' in section and not isinstance(section['console'], bool):
        errors.append("logging.console must be a boolean")

    log_file = section.get('file')
    if log_file is not None and not isinstance(log_file, str):
        errors.append("logging.file must be a string path")

    return errors
