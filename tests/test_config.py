"""
Tests for settings loading.
"""

import pytest
from pydantic import ValidationError

from sheetview.config import Settings


class TestSettings:
    """Tests for environment-driven settings."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test the default viewer options."""
        monkeypatch.delenv("SHEETVIEW_PAGE_SIZE", raising=False)
        settings = Settings(_env_file=None)

        assert settings.page_size == 50
        assert settings.ignore_case is True
        assert settings.decoder == "calamine"
        assert settings.max_upload_size_bytes == 50 * 1024 * 1024

    def test_environment_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that prefixed environment variables are read."""
        monkeypatch.setenv("SHEETVIEW_PAGE_SIZE", "100")
        monkeypatch.setenv("SHEETVIEW_DECODER", "openpyxl")
        monkeypatch.setenv("SHEETVIEW_LOG_LEVEL", "debug")

        settings = Settings(_env_file=None)

        assert settings.page_size == 100
        assert settings.decoder == "openpyxl"
        assert settings.log_level == "DEBUG"

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"page_size": 0},
            {"max_upload_size_mb": 1000},
            {"log_level": "LOUD"},
            {"server_port": 70000},
            {"decoder": "pandas"},
        ],
    )
    def test_invalid_values(self, kwargs: dict) -> None:
        """Test that out-of-range values are rejected."""
        with pytest.raises(ValidationError):
            Settings(_env_file=None, **kwargs)

    def test_cors_origins_list(self) -> None:
        """Test parsing of comma-separated origins."""
        assert Settings(_env_file=None).cors_origins_list == ["*"]
        settings = Settings(_env_file=None, cors_origins="http://a.test, http://b.test,")
        assert settings.cors_origins_list == ["http://a.test", "http://b.test"]
