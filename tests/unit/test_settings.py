"""
Unit tests for service configuration.
"""
from config.settings import Settings


class TestSettings:
    """Tests for Settings."""

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("SUPPLIER_SERVICE_URL", "http://suppliers:8080")
        monkeypatch.setenv("HTTP_TIMEOUT_SECONDS", "2.5")

        settings = Settings(_env_file=None)

        assert settings.supplier_service_url == "http://suppliers:8080"
        assert settings.http_timeout_seconds == 2.5

    def test_cors_origins_are_split(self):
        settings = Settings(_env_file=None, cors_origins="http://a.cl, http://b.cl,")

        assert settings.get_cors_origins() == ["http://a.cl", "http://b.cl"]

    def test_has_no_unused_application_name(self):
        assert "app_name" not in Settings.model_fields
