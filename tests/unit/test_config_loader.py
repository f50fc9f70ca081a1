"""Tests for the diary config loader."""

from __future__ import annotations

import pytest

from backend.app.config import load_settings

pytestmark = [pytest.mark.config]


@pytest.fixture(autouse=True)
def _clear_store_env(monkeypatch):
    for name in (
        "DIARY_STORE_URL",
        "DIARY_STORE_ANON_KEY",
        "DIARY_STORE_BACKEND",
        "DATABASE_URL",
    ):
        monkeypatch.delenv(name, raising=False)


def test_load_settings_falls_back_to_defaults(monkeypatch, tmp_path):
    """Missing profiles should default to the built-in configuration."""

    monkeypatch.setenv("DIARY_CONFIG_PROFILE", "missing")
    monkeypatch.setenv("DIARY_CONFIG_DIR", str(tmp_path))
    settings = load_settings()

    assert settings.environment == "dev"
    assert settings.store.backend == "rest"
    assert settings.store.table == "diary_entries"
    assert settings.store.is_configured is False
    assert settings.user_id == "default-user"
    assert settings.database_url.endswith("/diary")


def test_load_settings_reads_yaml_profile(monkeypatch, tmp_path):
    profiles_dir = tmp_path / "profiles"
    profiles_dir.mkdir()
    (profiles_dir / "staging.yaml").write_text(
        """
environment: staging

store:
  backend: SQL
  table: journal
  timeout_seconds: 3
  fallback_to_memory: true

database:
  url: "postgresql+psycopg://postgres:pw@db:5432/custom"

diary:
  user_id: someone

logging:
  level: debug
""",
        encoding="utf-8",
    )

    settings = load_settings("staging", config_dir=profiles_dir)

    assert settings.environment == "staging"
    assert settings.store.backend == "sql"
    assert settings.store.table == "journal"
    assert settings.store.timeout_seconds == 3.0
    assert settings.store.fallback_to_memory is True
    assert settings.database_url.endswith("custom")
    assert settings.user_id == "someone"
    assert settings.log_level == "DEBUG"


def test_store_credentials_come_from_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("DIARY_STORE_URL", "https://example.supabase.co/")
    monkeypatch.setenv("DIARY_STORE_ANON_KEY", "anon-key")

    settings = load_settings("missing", config_dir=tmp_path)

    assert settings.store.url == "https://example.supabase.co"
    assert settings.store.anon_key == "anon-key"
    assert settings.store.is_configured is True


def test_unknown_backend_is_rejected(monkeypatch, tmp_path):
    monkeypatch.setenv("DIARY_STORE_BACKEND", "mongo")

    with pytest.raises(RuntimeError):
        load_settings("missing", config_dir=tmp_path)


def test_non_mapping_profile_is_rejected(tmp_path):
    (tmp_path / "dev.yml").write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(RuntimeError):
        load_settings("dev", config_dir=tmp_path)
