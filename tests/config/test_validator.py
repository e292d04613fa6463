import pytest

from tokenveil.config.validator import validate_config, ValidationError


@pytest.fixture
def valid_config():
    """Complete valid configuration."""
    return {
        'obfuscation': {
            'key': 'site-key',
            'key_encoding': 'utf-8',
            'query_param': 'token',
        },
        'logging': {
            'level': 'INFO',
            'console': True,
            'file': 'logs/tokenveil.log',
        },
    }


@pytest.mark.unit
def test_valid_config_passes(valid_config):
    validate_config(valid_config)


@pytest.mark.unit
def test_missing_key_is_reported(valid_config):
    del valid_config['obfuscation']['key']
    with pytest.raises(ValidationError, match="obfuscation.key is required"):
        validate_config(valid_config)


@pytest.mark.unit
def test_missing_key_allowed_when_not_required():
    validate_config({}, require_key=False)


@pytest.mark.unit
def test_all_errors_are_collected(valid_config):
    valid_config['obfuscation']['key'] = 42
    valid_config['obfuscation']['key_encoding'] = 'rot13'
    valid_config['logging']['level'] = 'LOUD'
    valid_config['logging']['console'] = 'yes'

    with pytest.raises(ValidationError) as exc_info:
        validate_config(valid_config)

    message = str(exc_info.value)
    assert "obfuscation.key must be a string" in message
    assert "obfuscation.key_encoding must be one of" in message
    assert "logging.level must be one of" in message
    assert "logging.console must be a boolean" in message


@pytest.mark.unit
@pytest.mark.parametrize("param", ["", "   ", 5])
def test_query_param_must_be_non_empty_string(valid_config, param):
    valid_config['obfuscation']['query_param'] = param
    with pytest.raises(ValidationError, match="query_param"):
        validate_config(valid_config)


@pytest.mark.unit
def test_sections_must_be_mappings():
    with pytest.raises(ValidationError) as exc_info:
        validate_config({'obfuscation': 'key', 'logging': ['INFO']})

    message = str(exc_info.value)
    assert "obfuscation must be a mapping" in message
    assert "logging must be a mapping" in message


@pytest.mark.unit
def test_lowercase_log_level_accepted(valid_config):
    valid_config['logging']['level'] = 'debug'
    validate_config(valid_config)
