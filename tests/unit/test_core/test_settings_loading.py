"""Tests for settings models and their cached loaders."""

from __future__ import annotations

from pydantic import ValidationError
import pytest

from listing_service.core.pagination import PagingConfig
from listing_service.core.settings import (
    AppSettings,
    LoggingSettings,
    PaginationSettings,
    get_pagination_settings,
)


class TestPaginationSettings:
    """Tests for PaginationSettings."""

    def test_defaults(self):
        settings = PaginationSettings()

        assert settings.default_limit == 20
        assert settings.max_limit == 100
        assert settings.query_timeout == 3.0

    def test_to_config(self):
        config = PaginationSettings(default_limit=10, min_limit=2, max_limit=50).to_config()

        assert config == PagingConfig(default_limit=10, min_limit=2, max_limit=50)
        assert config.clamp(500) == 50
        assert config.clamp(1) == 2

    def test_default_outside_bounds(self):
        with pytest.raises(ValidationError, match="default_limit"):
            PaginationSettings(default_limit=200, max_limit=100)

    def test_timeout_must_be_positive(self):
        with pytest.raises(ValidationError):
            PaginationSettings(query_timeout=0)

    def test_environment_and_cache(self, monkeypatch):
        monkeypatch.setenv("PAGINATION_DEFAULT_LIMIT", "7")
        get_pagination_settings.cache_clear()
        try:
            assert get_pagination_settings().default_limit == 7
            assert get_pagination_settings() is get_pagination_settings()
        finally:
            get_pagination_settings.cache_clear()

    def test_frozen(self):
        settings = PaginationSettings()

        with pytest.raises(ValidationError):
            settings.default_limit = 5


class TestOtherSettings:
    """Spot checks for the app and logging settings."""

    def test_api_prefix_must_be_absolute(self):
        with pytest.raises(ValidationError):
            AppSettings(api_prefix="api/v1")

    def test_log_json_alias(self, monkeypatch):
        monkeypatch.setenv("LOG_JSON", "false")

        assert LoggingSettings().json_logs is False
