"""Tests for BatchHeapSettings."""

import pytest
from pydantic import ValidationError

from batchheap.core.settings import BatchHeapSettings, get_settings, reset_settings


class TestBatchHeapSettings:
    def test_defaults(self, monkeypatch):
        for key in ("BATCHHEAP_LOG_LEVEL", "BATCHHEAP_LOG_FORMAT", "BATCHHEAP_TRACE", "BATCHHEAP_DEFAULT_BATCH_SIZE"):
            monkeypatch.delenv(key, raising=False)
        settings = BatchHeapSettings(_env_file=None)
        assert settings.log_level == "INFO"
        assert settings.log_format == "console"
        assert settings.trace is False
        assert settings.default_batch_size == 1000

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("BATCHHEAP_LOG_LEVEL", "debug")
        monkeypatch.setenv("BATCHHEAP_LOG_FORMAT", "JSON")
        monkeypatch.setenv("BATCHHEAP_TRACE", "true")
        monkeypatch.setenv("BATCHHEAP_DEFAULT_BATCH_SIZE", "64")
        settings = BatchHeapSettings(_env_file=None)
        assert settings.log_level == "DEBUG"
        assert settings.log_format == "json"
        assert settings.trace is True
        assert settings.default_batch_size == 64

    def test_batch_size_must_be_positive(self):
        with pytest.raises(ValidationError):
            BatchHeapSettings(_env_file=None, default_batch_size=0)

    def test_unknown_level_rejected(self):
        with pytest.raises(ValidationError):
            BatchHeapSettings(_env_file=None, log_level="LOUD")


class TestGetSettings:
    def test_cached(self):
        assert get_settings() is get_settings()

    def test_reset(self, monkeypatch):
        first = get_settings()
        reset_settings()
        monkeypatch.setenv("BATCHHEAP_DEFAULT_BATCH_SIZE", "7")
        second = get_settings()
        assert second is not first
        assert second.default_batch_size == 7
