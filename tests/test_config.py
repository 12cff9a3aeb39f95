"""Tests for core.config."""

from __future__ import annotations

import pytest

from storefront_api.app.core.config import DEFAULT_MIDDLEWARE, Settings, parse_middleware, parse_port


class TestParsePort:
    @pytest.mark.parametrize("value, expected", [("3000", 3000), (" 8080 ", 8080), (None, None), ("", None), ("abc", None)])
    def test_values(self, value, expected):
        assert parse_port(value) == expected


class TestParseMiddleware:
    def test_default(self):
        assert parse_middleware(None) == DEFAULT_MIDDLEWARE

    def test_empty_disables_all(self):
        assert parse_middleware("") == ()

    def test_list(self):
        assert parse_middleware("CORS, request_logging,") == ("cors", "request_logging")


class TestSettings:
    def test_from_env(self, tmp_path):
        settings = Settings.from_env(
            {
                "PORT": "4000",
                "MIDDLEWARE": "security_headers",
                "LOG_LEVEL": "DEBUG",
                "DATA_DIR": str(tmp_path),
            }
        )
        assert settings.port == 4000
        assert settings.middleware == ("security_headers",)
        assert settings.log_level == "DEBUG"
        assert settings.data_dir == str(tmp_path)

    def test_defaults_from_empty_env(self):
        settings = Settings.from_env({})
        assert settings.port is None
        assert settings.middleware == DEFAULT_MIDDLEWARE
        assert settings.data_dir is None
        assert settings.log_file is None

    def test_unknown_middleware(self):
        with pytest.raises(ValueError, match="helmet"):
            Settings(middleware=("helmet",))
