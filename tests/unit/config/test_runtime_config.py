from pathlib import Path

import pytest

from propstore import config
from propstore.errors import ConfigurationError


def test_env_str_strips_and_treats_blank_as_unset(monkeypatch):
    monkeypatch.setenv("PROPSTORE_TEST_VALUE", "  spaced  ")
    assert config.env_str("PROPSTORE_TEST_VALUE") == "spaced"

    monkeypatch.setenv("PROPSTORE_TEST_BLANK", "   ")
    assert config.env_str("PROPSTORE_TEST_BLANK", or_value="fallback") == "fallback"

    monkeypatch.delenv("PROPSTORE_TEST_MISSING", raising=False)
    assert config.env_str("PROPSTORE_TEST_MISSING") is None


def test_env_bool_accepts_truthy_and_falsy(monkeypatch):
    monkeypatch.setenv("PROPSTORE_TEST_BOOL", "YeS")
    assert config.env_bool("PROPSTORE_TEST_BOOL") is True

    monkeypatch.setenv("PROPSTORE_TEST_BOOL", "off")
    assert config.env_bool("PROPSTORE_TEST_BOOL") is False

    monkeypatch.setenv("PROPSTORE_TEST_BOOL", "perhaps")
    with pytest.raises(ConfigurationError, match="invalid format"):
        config.env_bool("PROPSTORE_TEST_BOOL")

    monkeypatch.delenv("PROPSTORE_TEST_BOOL")
    assert config.env_bool("PROPSTORE_TEST_BOOL", or_value=True) is True


def test_defaults_without_environment():
    assert config.file_encoding() == "utf-8"
    assert config.write_timestamp() is True
    assert config.default_file() is None


def test_settings_follow_environment(monkeypatch):
    monkeypatch.setenv(config.ENCODING_ENV, "latin-1")
    monkeypatch.setenv(config.TIMESTAMP_ENV, "false")
    monkeypatch.setenv(config.FILE_ENV, "~/app.properties")

    assert config.file_encoding() == "latin-1"
    assert config.write_timestamp() is False
    assert config.default_file() == Path("~/app.properties").expanduser()
