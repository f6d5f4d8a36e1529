import logging

import pytest

from catalog.utils import config

_ENV_VARS = (
    "DATABASE_URL",
    "POSTGRES_USER",
    "POSTGRES_PASSWORD",
    "POSTGRES_HOST",
    "POSTGRES_PORT",
    "POSTGRES_DB",
    "LOG_LEVEL",
    "CATALOG_DEFAULT_PAGE_SIZE",
    "CATALOG_MAX_PAGE_SIZE",
    "CATALOG_SQL_ECHO",
)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    config.refresh_settings()
    yield
    config.refresh_settings()


def test_defaults():
    settings = config.get_settings()
    assert settings.database_url is None
    assert settings.log_level == logging.INFO
    assert settings.default_page_size == 20
    assert settings.max_page_size == 100
    assert settings.sql_echo is False


def test_database_url_from_components(monkeypatch):
    monkeypatch.setenv("POSTGRES_USER", "catalog")
    monkeypatch.setenv("POSTGRES_PASSWORD", "secret")
    monkeypatch.setenv("POSTGRES_HOST", "db")
    monkeypatch.setenv("POSTGRES_PORT", "5432")
    monkeypatch.setenv("POSTGRES_DB", "catalog")
    config.refresh_settings()

    assert config.get_settings().require_database_url() == "postgresql://catalog:secret@db:5432/catalog"


def test_database_url_takes_precedence(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite:///catalog.db")
    monkeypatch.setenv("POSTGRES_USER", "ignored")
    config.refresh_settings()

    assert config.get_settings().database_url == "sqlite:///catalog.db"


def test_missing_database_vars_are_named(monkeypatch):
    monkeypatch.setenv("POSTGRES_USER", "catalog")
    config.refresh_settings()

    with pytest.raises(ValueError) as exc:
        config.get_settings().require_database_url()
    assert "POSTGRES_PASSWORD" in str(exc.value)
    assert "POSTGRES_USER" not in str(exc.value)


def test_settings_are_cached_until_refresh(monkeypatch):
    assert config.get_settings().sql_echo is False
    monkeypatch.setenv("CATALOG_SQL_ECHO", "yes")
    assert config.get_settings().sql_echo is False

    config.refresh_settings()
    assert config.get_settings().sql_echo is True


@pytest.mark.parametrize("default, maximum, requested, expected", [
    (None, None, None, 20),
    (None, None, 0, 20),
    (None, None, -5, 20),
    (None, None, 50, 50),
    (None, None, 500, 100),
    ("10", "30", 40, 30),
    ("50", "30", 40, 40),
    ("abc", None, None, 20),
])
def test_clamp_limit(monkeypatch, default, maximum, requested, expected):
    if default is not None:
        monkeypatch.setenv("CATALOG_DEFAULT_PAGE_SIZE", default)
    if maximum is not None:
        monkeypatch.setenv("CATALOG_MAX_PAGE_SIZE", maximum)
    config.refresh_settings()

    assert config.get_settings().clamp_limit(requested) == expected


@pytest.mark.parametrize("value, expected", [
    ("debug", logging.DEBUG),
    ("WARNING", logging.WARNING),
    ("nonsense", logging.INFO),
])
def test_log_level(monkeypatch, value, expected):
    monkeypatch.setenv("LOG_LEVEL", value)
    config.refresh_settings()
    assert config.get_settings().log_level == expected


def test_configure_logging_uses_level(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "ERROR")
    config.refresh_settings()
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))

    config.configure_logging()

    assert calls == [{"level": logging.ERROR}]
