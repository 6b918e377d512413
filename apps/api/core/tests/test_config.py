"""Tests for core config module."""

from apps.api.core.config import Settings


class TestSettings:
    """Test Pydantic Settings loads env vars correctly."""

    def test_settings_defaults(self, monkeypatch):
        """Settings should boot with no environment at all."""
        for name in ("LOG_LEVEL", "ENVIRONMENT", "APP_VERSION", "SOURCE_TAG", "DEMO_API_KEY", "PORT"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)
        assert settings.LOG_LEVEL == "INFO"
        assert settings.ENVIRONMENT == "development"
        assert settings.APP_VERSION == "1.0.0"
        assert settings.SOURCE_TAG == "SMS_BANK_READER"
        assert settings.DEFAULT_CURRENCY == "INR"
        assert settings.DEMO_API_KEY == ""
        assert settings.PORT == 3000
        assert settings.json_logs is False

    def test_settings_loads_allowed_origins(self, monkeypatch):
        """Settings should parse ALLOWED_ORIGINS as comma-separated list."""
        monkeypatch.setenv("ALLOWED_ORIGINS", "http://localhost:3000, https://reader.example.com")

        settings = Settings(_env_file=None)
        assert settings.allowed_origins == [
            "http://localhost:3000",
            "https://reader.example.com",
        ]

    def test_settings_loads_demo_key_and_port(self, monkeypatch):
        monkeypatch.setenv("DEMO_API_KEY", "demo-key-123")
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("ENVIRONMENT", "production")

        settings = Settings(_env_file=None)
        assert settings.DEMO_API_KEY == "demo-key-123"
        assert settings.PORT == 8080
        assert settings.json_logs is True
