"""Unit tests for Settings validation.

Run:  pytest tests/test_config.py -v
"""

import pytest
from pydantic import ValidationError

from src.config import Settings


class TestLogLevel:
    @pytest.mark.parametrize("value, expected", [("debug", "DEBUG"), ("Warning", "WARNING"), ("INFO", "INFO")])
    def test_level_is_uppercased(self, value, expected):
        assert Settings(log_level=value).log_level == expected

    def test_unknown_level_rejected(self):
        with pytest.raises(ValidationError, match="log_level"):
            Settings(log_level="verbose")

    def test_unknown_level_from_env_rejected(self, monkeypatch):
        monkeypatch.setenv("STRUCTIFY_LOG_LEVEL", "verbose")
        with pytest.raises(ValidationError):
            Settings()


class TestRetrySettings:
    def test_negative_retries_rejected(self):
        with pytest.raises(ValidationError):
            Settings(max_retries=-1)

    def test_non_positive_timeout_rejected(self):
        with pytest.raises(ValidationError):
            Settings(attempt_timeout=0)
