"""
Application wiring tests: configuration, startup, health and seeding.
"""
import inspect
import logging

import pytest
from fastapi.testclient import TestClient

from estate_crm import seed
from estate_crm.api.main import create_app
from estate_crm.config import ConfigurationError, Settings
from estate_crm.store import build_stores
from estate_crm.store.mapping import as_utc, to_camel, to_snake

from .test_base import BaseAPITest


class TestSettings:
    """Test cases for environment configuration."""

    def test_defaults(self, monkeypatch):
        for name in ("STORE_BACKEND", "SUPABASE_URL", "SUPABASE_KEY", "AUTO_SEED", "ALLOWED_ORIGINS"):
            monkeypatch.delenv(name, raising=False)
        settings = Settings.from_env()
        assert settings.store_backend == "supabase"
        assert settings.auto_seed is True
        assert settings.allowed_origins == ["*"]

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("STORE_BACKEND", "SQL")
        monkeypatch.setenv("DATABASE_URL", "sqlite://")
        monkeypatch.setenv("AUTO_SEED", "false")
        monkeypatch.setenv("ALLOWED_ORIGINS", "http://a.test, http://b.test")
        settings = Settings.from_env()
        assert settings.store_backend == "sql"
        assert settings.auto_seed is False
        assert settings.allowed_origins == ["http://a.test", "http://b.test"]
        settings.validate()

    @pytest.mark.parametrize("settings", [
        Settings(store_backend="supabase"),
        Settings(store_backend="supabase", supabase_url="https://x.supabase.co"),
        Settings(store_backend="sql"),
        Settings(store_backend="redis"),
        Settings(store_backend="memory", log_level="VERBOSE"),
    ])
    def test_invalid_settings(self, settings):
        with pytest.raises(ConfigurationError):
            settings.validate()

    def test_build_memory_stores(self):
        stores = build_stores(Settings(store_backend="memory"))
        assert stores.backend == "memory"
        assert set(stores.all()) == {"clients", "properties", "transactions", "contracts"}
        with pytest.raises(KeyError):
            stores.by_resource("backend")


class TestApplication(BaseAPITest):
    """Test cases for startup and health."""

    def test_missing_credentials_abort_startup(self):
        app = create_app(settings=Settings(store_backend="supabase"))
        with pytest.raises(ConfigurationError):
            with TestClient(app):
                pass

    def test_invalid_log_level_aborts_startup(self, monkeypatch, stores):
        monkeypatch.setenv("LOG_LEVEL", "verbose")
        settings = Settings.from_env()
        settings.store_backend = "memory"
        app = create_app(settings=settings, stores=stores)
        with pytest.raises(ConfigurationError, match="LOG_LEVEL"):
            with TestClient(app):
                pass

    def test_log_level_applied_at_startup(self, stores):
        root = logging.getLogger()
        previous = root.level
        app = create_app(settings=Settings(store_backend="memory", log_level="WARNING"), stores=stores)
        try:
            with TestClient(app):
                assert root.level == logging.WARNING
        finally:
            root.setLevel(previous)

    def test_health_runs_on_event_loop(self, app):
        route = next(r for r in app.routes if getattr(r, "path", None) == "/health")
        assert inspect.iscoroutinefunction(route.endpoint)

    def test_startup_builds_configured_stores(self):
        app = create_app(settings=Settings(store_backend="sql", database_url="sqlite://"))
        with TestClient(app) as client:
            data = self.assert_success_response(client.get("/api/clients", params={"limit": 2}))
            assert [c["id"] for c in data["items"]] == ["cli-1", "cli-2"]
            health = self.assert_success_response(client.get("/health"))
            assert health["backend"] == "sql"

    def test_auto_seed_off(self, stores):
        app = create_app(settings=Settings(store_backend="memory", auto_seed=False), stores=stores)
        with TestClient(app) as client:
            data = self.assert_success_response(client.get("/api/clients"))
            assert data == {"items": [], "next": None}

    def test_health_reports_store_failure(self, app, client, monkeypatch):
        def broken():
            raise RuntimeError("down")

        monkeypatch.setattr(app.state.stores.clients, "count", broken)
        self.assert_error_response(client.get("/health"), 503, "unhealthy")

    def test_unexpected_error_is_500(self, settings, stores):
        def broken(cursor=None, limit=20):
            raise RuntimeError("boom")

        stores.properties.list = broken
        app = create_app(settings=settings, stores=stores)
        with TestClient(app, raise_server_exceptions=False) as client:
            self.assert_error_response(client.get("/api/properties"), 500, "Internal server error")


class TestSeedCommand:
    """Test cases for the estate-crm-seed entry point."""

    def test_seed_memory_backend(self, monkeypatch):
        monkeypatch.setenv("STORE_BACKEND", "memory")
        assert seed.main() == 0

    def test_seed_invalid_log_level(self, monkeypatch):
        monkeypatch.setenv("STORE_BACKEND", "memory")
        monkeypatch.setenv("LOG_LEVEL", "verbose")
        assert seed.main() == 1

    def test_seed_without_credentials(self, monkeypatch):
        monkeypatch.setenv("STORE_BACKEND", "supabase")
        monkeypatch.delenv("SUPABASE_URL", raising=False)
        monkeypatch.delenv("SUPABASE_KEY", raising=False)
        assert seed.main() == 1


class TestMapping:
    """Test cases for record/row key and timestamp translation."""

    @pytest.mark.parametrize("camel, snake", [
        ("imageUrl", "image_url"),
        ("lastContacted", "last_contacted"),
        ("propertyId", "property_id"),
        ("id", "id"),
    ])
    def test_key_translation(self, camel, snake):
        assert to_snake(camel) == snake
        assert to_camel(snake) == camel

    def test_as_utc(self):
        assert as_utc("2023-10-25").isoformat() == "2023-10-25T00:00:00+00:00"
        assert as_utc("2023-10-25T10:00:00Z").isoformat() == "2023-10-25T10:00:00+00:00"
        assert as_utc("2023-10-25T12:00:00+02:00").isoformat() == "2023-10-25T10:00:00+00:00"
        assert as_utc(None) is None
