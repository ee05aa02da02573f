"""
Tests for service settings
"""

import pytest
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from pydantic import ValidationError

from sealgate.app.config import DEFAULT_SECRET_KEY, Settings, get_settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Remove settings variables the host environment may define."""
    for name in ("PORT", "SEALGATE_PORT", "SEALGATE_SECRET_KEY", "SEALGATE_HOST",
                 "SEALGATE_LOG_LEVEL", "SEALGATE_LOG_FORMAT"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestSettings:
    """Test suite for Settings."""

    def test_defaults(self):
        settings = Settings(_env_file=None)

        assert settings.host == "0.0.0.0"
        assert settings.port == 3000
        assert settings.log_level == "INFO"
        assert settings.log_format == "console"
        assert settings.secret_key_bytes() == DEFAULT_SECRET_KEY.encode('utf-8')

    def test_port_from_env(self, monkeypatch):
        monkeypatch.setenv("PORT", "8080")

        assert Settings(_env_file=None).port == 8080

    def test_prefixed_env(self, monkeypatch):
        monkeypatch.setenv("SEALGATE_SECRET_KEY", "from-env")
        monkeypatch.setenv("SEALGATE_LOG_LEVEL", "debug")
        monkeypatch.setenv("SEALGATE_LOG_FORMAT", "JSON")

        settings = Settings(_env_file=None)

        assert settings.secret_key_bytes() == b"from-env"
        assert settings.log_level == "DEBUG"
        assert settings.log_format == "json"

    def test_rejects_empty_secret(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, secret_key="")

    def test_rejects_bad_port(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, port=0)

    def test_rejects_unknown_log_level(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, log_level="LOUD")

    def test_secret_not_in_repr(self):
        settings = Settings(_env_file=None, secret_key="very-private")

        assert "very-private" not in repr(settings)
        assert "very-private" not in str(settings.model_dump())

    def test_get_settings_cached(self):
        assert get_settings() is get_settings()


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
