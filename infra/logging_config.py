# infra/logging_config.py
from __future__ import annotations
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from infra.operational_support import TraceIdLogFilter
from infra.path import logs_dir
from infra.settings import AppSettings, load_settings

_FILE_FORMAT = "%(asctime)s [%(levelname)s] trace=%(trace_id)s %(name)s - %(message)s"
_CONSOLE_FORMAT = "%(levelname)s [trace=%(trace_id)s]: %(message)s"


def setup_logging(settings: AppSettings | None = None, log_dir: Path | None = None) -> Path:
    """
    Configure the root logger: a rotating file under the user data dir plus a
    console handler, both tagging lines with the current trace id.
    Returns the log file path.
    """
    settings = settings or load_settings()
    target_dir = log_dir or logs_dir()
    target_dir.mkdir(parents=True, exist_ok=True)
    log_file = target_dir / "app.log"

    root = logging.getLogger()
    root.setLevel(settings.log_level)

    # Re-running setup must not stack handlers
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    trace_filter = TraceIdLogFilter()

    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=1_000_000,  # 1 MB per file
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.addFilter(trace_filter)
    file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
    root.addHandler(file_handler)

    console = logging.StreamHandler()
    console.addFilter(trace_filter)
    console.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    root.addHandler(console)

    root.info("Logging initialized (version %s). Log file at %s", settings.app_version, log_file)
    return log_file
