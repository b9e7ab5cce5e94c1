# infra/path.py
from __future__ import annotations
import os
import sys
from pathlib import Path
from typing import Mapping

APP_NAME = "DualifyDashboard"
COMPANY_NAME = "Dualify"


def _platform_base(env: Mapping[str, str], platform: str) -> Path:
    if platform.startswith("win"):
        return Path(env.get("APPDATA") or Path.home() / "AppData" / "Roaming")
    if platform == "darwin":
        return Path.home() / "Library" / "Application Support"
    return Path(env.get("XDG_DATA_HOME") or Path.home() / ".local" / "share")


def user_data_dir(environ: Mapping[str, str] | None = None, platform: str | None = None) -> Path:
    """
    Directory holding logs and support events.

    ``DUALIFY_DATA_DIR`` wins when set; otherwise
    ``%APPDATA%\\Dualify\\DualifyDashboard`` on Windows,
    ``~/Library/Application Support/Dualify/DualifyDashboard`` on macOS and
    ``$XDG_DATA_HOME/Dualify/DualifyDashboard`` elsewhere. Falls back to
    ``~/.DualifyDashboard`` when the preferred location cannot be created.
    """
    env = os.environ if environ is None else environ
    override = (env.get("DUALIFY_DATA_DIR") or "").strip()
    if override:
        path = Path(override).expanduser()
    else:
        path = _platform_base(env, platform or sys.platform) / COMPANY_NAME / APP_NAME
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError:
        path = Path.home() / f".{APP_NAME}"
        path.mkdir(parents=True, exist_ok=True)
    return path


def logs_dir(environ: Mapping[str, str] | None = None) -> Path:
    path = user_data_dir(environ) / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path
