"""Settings validation and parsed values."""

import pytest

from app.core.config import Settings, get_settings


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults_are_valid() -> None:
    settings = Settings(_env_file=None)

    assert settings.discovery_field == "event_type"
    assert settings.discovery_size == 100
    assert settings.default_time_range == "24h"
    assert settings.default_hidden_types == ["anomaly", "stats", "netflow"]


def test_env_overrides(monkeypatch) -> None:
    monkeypatch.setenv("DISCOVERY_SIZE", "10")
    monkeypatch.setenv("DEFAULT_HIDDEN_EVENT_TYPES", " stats, ,dns ")

    settings = get_settings()

    assert settings.discovery_size == 10
    assert settings.default_hidden_types == ["stats", "dns"]


@pytest.mark.parametrize("size", [0, 101])
def test_discovery_size_out_of_bounds(size: int) -> None:
    with pytest.raises(ValueError, match="discovery_size"):
        Settings(_env_file=None, discovery_size=size)


def test_invalid_default_time_range() -> None:
    with pytest.raises(ValueError, match="default_time_range"):
        Settings(_env_file=None, default_time_range="yesterday")


def test_empty_default_time_range_means_all_time() -> None:
    assert Settings(_env_file=None, default_time_range="").default_time_range == ""
