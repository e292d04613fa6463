"""Configuration loading and parsing."""

import os
import yaml
from pathlib import Path
from typing import Dict, Any, Optional, Union

DEFAULT_CONFIG_NAME = "tokenveil.yaml"

# Environment variable that overrides obfuscation.key
KEY_ENV_VAR = "TOKENVEIL_KEY"


class ConfigError(Exception):
    """Configuration-related errors."""
    pass


def load_config(config_path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """
    Load and parse configuration file.
    
    Args:
        config_path: Path to tokenveil.yaml. If None, searches current directory.
        
    Returns:
        Parsed configuration dictionary
        
    Raises:
        ConfigError: If config file cannot be loaded or parsed
    """
    if config_path is None:
        config_path = Path.cwd() / DEFAULT_CONFIG_NAME
    else:
        config_path = Path(config_path)
    
    if not config_path.exists():
        raise ConfigError(
            f"Configuration file not found: {config_path}\n"
            f"Copy tokenveil.yaml.example to {DEFAULT_CONFIG_NAME} and configure it."
        )
    
    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config file: {e}")
    except OSError as e:
        raise ConfigError(f"Failed to read config file: {e}")
    
    if not isinstance(config, dict):
        raise ConfigError("Configuration file must contain a YAML dictionary")
    
    return apply_env_overrides(config)


def apply_env_overrides(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Apply environment overrides to a configuration dictionary.

    Keeps the key out of files checked into a repository: when TOKENVEIL_KEY
    is set it replaces obfuscation.key.
    """
    env_key = os.environ.get(KEY_ENV_VAR)
    if env_key:
        section = config.get('obfuscation')
        if not isinstance(section, dict):
            section = {}
            config['obfuscation'] = section
        section['key'] = env_key
    return config


def get_config_value(config: Dict[str, Any], path: str, default: Any = None) -> Any:
    """
    Get a nested configuration value using dot notation.
    
    Args:
        config: Configuration dictionary
        path: Dot-separated path (e.g., 'obfuscation.key_encoding')
        default: Default value if path not found
        
    Returns:
        Configuration value or default
        
    Example:
        >>> get_config_value(config, 'logging.level')
        'INFO'
    """
    keys = path.split('.')
    value = config
    
    for key in keys:
        if isinstance(value, dict) and key in value:
            value = value[key]
        else:
            return default
    
    return value
