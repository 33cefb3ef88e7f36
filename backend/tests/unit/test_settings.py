"""Unit tests for diffvault.config.settings."""
import pytest
from pydantic import ValidationError

from diffvault.config.settings import Environment, LogLevel, Settings


def test_defaults():
    settings = Settings(_env_file=None)
    assert settings.app_name == "DiffVault"
    assert settings.environment == Environment.DEVELOPMENT
    assert settings.max_file_size_bytes == 1_048_576
    assert settings.max_diff_input_bytes is None
    assert settings.log_level == LogLevel.INFO
    assert ".txt" in settings.supported_file_extensions


def test_diff_limit_defaults_to_twice_the_file_limit():
    settings = Settings(_env_file=None, max_file_size_bytes=1000)
    assert settings.diff_input_limit_bytes == 2000


def test_explicit_diff_limit_wins():
    settings = Settings(_env_file=None, max_file_size_bytes=1000, max_diff_input_bytes=500)
    assert settings.diff_input_limit_bytes == 500


def test_cors_origins_accepts_comma_separated_string():
    settings = Settings(_env_file=None, cors_origins="http://a.test, http://b.test,")
    assert settings.cors_origins == ["http://a.test", "http://b.test"]


def test_list_values_read_from_environment(monkeypatch):
    monkeypatch.setenv("DIFFVAULT_CORS_ORIGINS", "http://a.test,http://b.test")
    monkeypatch.setenv("DIFFVAULT_SUPPORTED_FILE_EXTENSIONS", "txt, .MD")
    monkeypatch.setenv("DIFFVAULT_MAX_FILE_SIZE_BYTES", "2048")
    settings = Settings(_env_file=None)
    assert settings.cors_origins == ["http://a.test", "http://b.test"]
    assert settings.supported_file_extensions == [".txt", ".md"]
    assert settings.max_file_size_bytes == 2048


def test_extensions_are_normalised():
    settings = Settings(_env_file=None, supported_file_extensions=["TXT", ".Py"])
    assert settings.supported_file_extensions == [".txt", ".py"]


def test_file_limit_must_be_positive():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, max_file_size_bytes=0)


def test_production_rejects_debug():
    with pytest.raises(ValidationError, match="debug must be False"):
        Settings(_env_file=None, environment="production", debug=True)


def test_production_rejects_reload():
    with pytest.raises(ValidationError, match="reload must be False"):
        Settings(_env_file=None, environment="production", reload=True)


def test_unknown_fields_are_rejected():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, not_a_setting=True)
