import pytest

from bustrack.config import Settings


def test_origins_parse_from_json_and_comma_lists():
    assert Settings(frontend_allowed_origins='["http://a", "http://b"]').frontend_allowed_origins == (
        "http://a",
        "http://b",
    )
    assert Settings(frontend_allowed_origins="http://a, http://b").frontend_allowed_origins == ("http://a", "http://b")
    assert Settings(frontend_allowed_origins="").frontend_allowed_origins == ()


def test_poll_intervals_follow_screen_defaults():
    config = Settings()
    assert config.poll_interval("tracking") == 3.0
    assert config.poll_interval("dashboard") == 30.0
    assert config.poll_interval("bus_detail") == 5.0


def test_unknown_screen_is_rejected():
    with pytest.raises(ValueError):
        Settings().poll_interval("map")


def test_settings_read_prefixed_environment(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("BUSTRACK_ONLINE_THRESHOLD_MINUTES", "10")
    monkeypatch.setenv("BUSTRACK_SUPABASE_URL", "https://example.supabase.co")
    config = Settings()
    assert config.online_threshold_minutes == 10.0
    assert config.supabase_url == "https://example.supabase.co"


def test_location_history_window(monkeypatch: pytest.MonkeyPatch):
    assert Settings().location_history_hours == 24.0
    monkeypatch.setenv("BUSTRACK_LOCATION_HISTORY_HOURS", "6")
    assert Settings().location_history_hours == 6.0
    with pytest.raises(ValueError):
        Settings(location_history_hours=0)
