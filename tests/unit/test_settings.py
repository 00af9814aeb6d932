import pytest

from crudkit.utils.settings import get_settings, module_enabled, refresh_settings_cache

_ENV = ["CRUDKIT_TABLE_PREFIX", "CRUDKIT_DEFAULT_LOCALE", "CRUDKIT_GRAPHQL_DEBUG", "CRUDKIT_MODULES"]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in _ENV:
        monkeypatch.delenv(name, raising=False)
    refresh_settings_cache()
    yield
    refresh_settings_cache()


def test_defaults():
    settings = get_settings()

    assert settings.table_prefix == ""
    assert settings.default_locale == "en"
    assert settings.graphql_debug is False
    assert settings.enabled_modules is None
    assert module_enabled("anything")


def test_values_from_environment(monkeypatch):
    monkeypatch.setenv("CRUDKIT_TABLE_PREFIX", "acme_")
    monkeypatch.setenv("CRUDKIT_DEFAULT_LOCALE", "ru")
    monkeypatch.setenv("CRUDKIT_GRAPHQL_DEBUG", "yes")
    monkeypatch.setenv("CRUDKIT_MODULES", "post, user ,")
    refresh_settings_cache()

    settings = get_settings()
    assert settings.table_prefix == "acme_"
    assert settings.default_locale == "ru"
    assert settings.graphql_debug is True
    assert settings.enabled_modules == ("post", "user")
    assert module_enabled("post")
    assert not module_enabled("payments")


@pytest.mark.parametrize("raw_value", ["maybe", "2", ""])
def test_invalid_debug_value_is_false(monkeypatch, raw_value):
    monkeypatch.setenv("CRUDKIT_GRAPHQL_DEBUG", raw_value)
    refresh_settings_cache()

    assert get_settings().graphql_debug is False


def test_settings_are_cached(monkeypatch):
    first = get_settings()
    monkeypatch.setenv("CRUDKIT_TABLE_PREFIX", "late_")

    assert get_settings() is first
