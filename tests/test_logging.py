"""
Tests for structured logging setup
"""

import logging
import pytest
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from sealgate.app.logging import _redact_secrets, get_logger, setup_logging


class TestLogging:
    """Test suite for logging helpers."""

    def test_redacts_secret_keys(self):
        event = {"event": "x", "secret_key": "abc", "Signature": "ff", "fields": 2}

        result = _redact_secrets(None, "info", event)

        assert result["secret_key"] == "***"
        assert result["Signature"] == "***"
        assert result["fields"] == 2

    def test_leaves_none_values(self):
        assert _redact_secrets(None, "info", {"secret": None})["secret"] is None

    @pytest.mark.parametrize("log_format", ["console", "json"])
    def test_setup_sets_level(self, log_format):
        setup_logging(level="WARNING", log_format=log_format)

        root = logging.getLogger()
        assert root.level == logging.WARNING
        assert len(root.handlers) == 1

        setup_logging(level="INFO")

    def test_json_output(self, capsys):
        setup_logging(level="INFO", log_format="json")

        get_logger("sealgate.test").info("payload_signed", fields=3, secret="hidden")

        err = capsys.readouterr().err
        assert '"event": "payload_signed"' in err
        assert '"fields": 3' in err
        assert "hidden" not in err

        setup_logging(level="INFO")


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
