from __future__ import annotations

import logging
from pathlib import Path

from core.errors import ErrorHandler
from infra.operational_support import OperationalSupport, get_operational_support
from infra.settings import AppSettings, load_settings

logger = logging.getLogger(__name__)


def build_error_handler(
    settings: AppSettings | None = None,
    *,
    events_path: Path | None = None,
) -> ErrorHandler:
    """Wire an ErrorHandler whose handled errors land in the support event log."""
    settings = settings or load_settings()
    if not settings.support_events:
        logger.info("Support events disabled; handled errors are only logged")
        return ErrorHandler()
    support = OperationalSupport(events_path) if events_path else get_operational_support()
    return ErrorHandler(event_sink=support)


__all__ = ["build_error_handler"]
