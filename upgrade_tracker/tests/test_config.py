import pytest
from pydantic import ValidationError

from upgrade_tracker.config import get_settings, Settings


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("SHEET_ID", "  sheet-123 ")
    monkeypatch.setenv("SHEETS_API_KEY", "key")
    monkeypatch.setenv("SHEET_RANGE", "Trips!A1:AB500")
    monkeypatch.setenv("CACHE_TTL_S", "60")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    get_settings.cache_clear()

    cfg = get_settings()
    assert isinstance(cfg, Settings)
    assert cfg.sheet_id == "sheet-123"
    assert cfg.api_key == "key"
    assert cfg.sheet_range == "Trips!A1:AB500"
    assert cfg.cache_ttl_s == 60
    assert cfg.fetch_retries == 3
    assert cfg.log_level == "DEBUG"
    get_settings.cache_clear()


@pytest.mark.parametrize(
    "name, value",
    [
        ("FETCH_RETRIES", "0"),
        ("POLL_INTERVAL_MIN", "0"),
        ("CACHE_TTL_S", "-1"),
        ("LOG_LEVEL", "chatty"),
    ],
)
def test_invalid_settings_rejected(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(ValidationError):
        Settings()
