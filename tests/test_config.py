"""Tests for environment-driven settings and the uvicorn entry point."""
import exercise_field_parser.main as main
from exercise_field_parser.config import Settings


class TestSettings:
    """Settings read from environment variables."""

    def test_defaults(self, monkeypatch):
        for name in ("ENVIRONMENT", "CORS_ORIGINS", "MAX_TEXT_LENGTH", "HOST", "PORT"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings()

        assert settings.ENVIRONMENT == "development"
        assert settings.is_development is True
        assert settings.CORS_ORIGINS == ["http://localhost:3000", "http://localhost:3001"]
        assert settings.MAX_TEXT_LENGTH == 2000
        assert settings.PORT == 8000

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "Production")
        monkeypatch.setenv("CORS_ORIGINS", "https://app.example.com, ,https://admin.example.com")
        monkeypatch.setenv("PORT", "9000")

        settings = Settings()

        assert settings.ENVIRONMENT == "production"
        assert settings.is_development is False
        assert settings.CORS_ORIGINS == ["https://app.example.com", "https://admin.example.com"]
        assert settings.PORT == 9000

    def test_invalid_values_fall_back(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "qa")
        monkeypatch.setenv("MAX_TEXT_LENGTH", "lots")
        monkeypatch.setenv("PORT", "http")

        settings = Settings()

        assert settings.ENVIRONMENT == "development"
        assert settings.MAX_TEXT_LENGTH == 2000
        assert settings.PORT == 8000


class TestRun:
    """The console script hands the app to uvicorn."""

    def test_run_uses_settings(self, monkeypatch):
        calls = []
        monkeypatch.setattr(main.uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))
        monkeypatch.setattr(main.settings, "ENVIRONMENT", "production")
        monkeypatch.setattr(main.settings, "PORT", 8123)

        main.run()

        assert calls == [(
            "exercise_field_parser.main:app",
            {"host": main.settings.HOST, "port": 8123, "reload": False},
        )]
