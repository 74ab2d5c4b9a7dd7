import importlib

import pytest

from ats_analytics import config


@pytest.fixture
def reload_config(monkeypatch):
    yield lambda: importlib.reload(config)
    monkeypatch.undo()
    importlib.reload(config)


def test_numeric_settings_are_read_from_the_environment(monkeypatch, reload_config):
    monkeypatch.setenv("ANALYTICS_FETCH_TIMEOUT_SECONDS", "2.5")
    monkeypatch.setenv("ANALYTICS_FETCH_WORKERS", "3")

    settings = reload_config()

    assert settings.FETCH_TIMEOUT_SECONDS == 2.5
    assert settings.FETCH_WORKERS == 3


def test_blank_numeric_settings_use_defaults(monkeypatch, reload_config):
    monkeypatch.setenv("ANALYTICS_FETCH_TIMEOUT_SECONDS", "")
    monkeypatch.setenv("ANALYTICS_FETCH_WORKERS", "")

    settings = reload_config()

    assert settings.FETCH_TIMEOUT_SECONDS == 10.0
    assert settings.FETCH_WORKERS == 6


@pytest.mark.parametrize("name,value", [
    ("ANALYTICS_FETCH_TIMEOUT_SECONDS", "soon"),
    ("ANALYTICS_FETCH_WORKERS", "many"),
])
def test_malformed_numeric_settings_fail_at_startup(monkeypatch, reload_config, name, value):
    monkeypatch.setenv(name, value)

    with pytest.raises(ValueError, match=name):
        reload_config()
