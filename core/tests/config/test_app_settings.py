from pathlib import Path

from config.app_settings import Settings
from core.enums import ChartLocale, StorageBackend


def test_chart_locale_accepts_full_tags() -> None:
    assert Settings(CHART_LOCALE="en_US").CHART_LOCALE is ChartLocale.en
    assert Settings(CHART_LOCALE="es-ES").CHART_LOCALE is ChartLocale.es


def test_data_api_url_is_normalized() -> None:
    assert Settings(DATA_API_URL="db.example.com:54321/").DATA_API_URL == "http://db.example.com:54321"
    assert Settings(DATA_API_URL="https://abc.supabase.co/").DATA_API_URL == "https://abc.supabase.co"


def test_access_token_falls_back_to_api_key() -> None:
    assert Settings(DATA_API_KEY="anon", DATA_API_ACCESS_TOKEN="").access_token == "anon"
    assert Settings(DATA_API_KEY="anon", DATA_API_ACCESS_TOKEN="jwt").access_token == "jwt"


def test_storage_settings() -> None:
    local = Settings(STORAGE_BACKEND="local", LOCAL_STORAGE_DIR="/tmp/gym")
    assert local.STORAGE_BACKEND is StorageBackend.local
    assert local.LOCAL_STORAGE_DIR == Path("/tmp/gym")


def test_default_targets() -> None:
    defaults = Settings()
    assert (defaults.DEFAULT_TARGET_SETS, defaults.DEFAULT_TARGET_REPS) == (3, 10)
