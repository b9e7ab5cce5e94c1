# infra/settings.py
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from core.exceptions import ConfigurationException

DEFAULT_APP_VERSION = "1.0.0"
VERSION_FILE = Path(__file__).with_name("app_version.txt")

_ON_VALUES = {"1", "on", "true", "yes"}
_OFF_VALUES = {"0", "off", "false", "no"}


@dataclass(frozen=True)
class AppSettings:
    app_version: str
    log_level: int
    support_events: bool


def _read_version_file(path: Path) -> str | None:
    try:
        raw = path.read_text(encoding="utf-8").strip()
    except OSError:
        return None
    return raw or None


def _resolve_version(env: Mapping[str, str], version_file: Path) -> str:
    override = (env.get("DUALIFY_APP_VERSION") or "").strip()
    if override:
        return override
    return _read_version_file(version_file) or DEFAULT_APP_VERSION


def _resolve_log_level(env: Mapping[str, str]) -> int:
    raw = (env.get("DUALIFY_LOG_LEVEL") or "INFO").strip().upper()
    level = logging.getLevelName(raw)
    if not isinstance(level, int):
        raise ConfigurationException.invalid_configuration(
            "DUALIFY_LOG_LEVEL", "one of DEBUG, INFO, WARNING, ERROR"
        )
    return level


def _resolve_flag(env: Mapping[str, str], key: str, default: bool) -> bool:
    raw = (env.get(key) or "").strip().lower()
    if not raw:
        return default
    if raw in _ON_VALUES:
        return True
    if raw in _OFF_VALUES:
        return False
    raise ConfigurationException.invalid_configuration(key, "on/off")


def load_settings(
    environ: Mapping[str, str] | None = None,
    *,
    version_file: Path | None = None,
) -> AppSettings:
    """Read DUALIFY_* settings; bad values raise ConfigurationException (CONF_003)."""
    env = os.environ if environ is None else environ
    return AppSettings(
        app_version=_resolve_version(env, version_file or VERSION_FILE),
        log_level=_resolve_log_level(env),
        support_events=_resolve_flag(env, "DUALIFY_SUPPORT_EVENTS", True),
    )


def get_app_version() -> str:
    return _resolve_version(os.environ, VERSION_FILE)


__all__ = ["AppSettings", "DEFAULT_APP_VERSION", "get_app_version", "load_settings"]
