from __future__ import annotations

import logging

import pytest

from core.exceptions import ConfigurationException
from infra import settings as settings_mod


def test_version_env_override_wins(tmp_path):
    version_file = tmp_path / "app_version.txt"
    version_file.write_text("2.1.1", encoding="utf-8")

    loaded = settings_mod.load_settings({"DUALIFY_APP_VERSION": "9.9.9"}, version_file=version_file)

    assert loaded.app_version == "9.9.9"


def test_version_read_from_file(tmp_path):
    version_file = tmp_path / "app_version.txt"
    version_file.write_text("2.1.1\n", encoding="utf-8")

    assert settings_mod.load_settings({}, version_file=version_file).app_version == "2.1.1"


def test_version_falls_back_when_file_missing(tmp_path):
    loaded = settings_mod.load_settings({}, version_file=tmp_path / "missing.txt")

    assert loaded.app_version == settings_mod.DEFAULT_APP_VERSION
    assert loaded.log_level == logging.INFO
    assert loaded.support_events is True


def test_get_app_version_uses_process_environment(monkeypatch, tmp_path):
    monkeypatch.setattr(settings_mod, "VERSION_FILE", tmp_path / "missing.txt")
    monkeypatch.setenv("DUALIFY_APP_VERSION", "3.0.0")

    assert settings_mod.get_app_version() == "3.0.0"


@pytest.mark.parametrize("raw, expected", [("debug", logging.DEBUG), (" WARNING ", logging.WARNING)])
def test_log_level_is_parsed(raw, expected):
    assert settings_mod.load_settings({"DUALIFY_LOG_LEVEL": raw}).log_level == expected


@pytest.mark.parametrize("raw, expected", [("off", False), ("0", False), ("Yes", True)])
def test_support_events_flag(raw, expected):
    assert settings_mod.load_settings({"DUALIFY_SUPPORT_EVENTS": raw}).support_events is expected


@pytest.mark.parametrize(
    "env, key",
    [
        ({"DUALIFY_LOG_LEVEL": "LOUD"}, "DUALIFY_LOG_LEVEL"),
        ({"DUALIFY_SUPPORT_EVENTS": "sometimes"}, "DUALIFY_SUPPORT_EVENTS"),
    ],
)
def test_invalid_values_raise_configuration_exception(env, key):
    with pytest.raises(ConfigurationException) as info:
        settings_mod.load_settings(env)

    assert info.value.code == "CONF_003"
    assert key in info.value.message
