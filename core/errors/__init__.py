from core.errors.boundary import Outcome, run_guarded
from core.errors.handler import (
    ErrorHandler,
    EventSink,
    get_error_handler,
    get_recovery_suggestions,
    get_retry_delay,
    get_user_friendly_message,
    handle_exception,
    is_recoverable,
)

__all__ = [
    "ErrorHandler",
    "EventSink",
    "Outcome",
    "get_error_handler",
    "get_recovery_suggestions",
    "get_retry_delay",
    "get_user_friendly_message",
    "handle_exception",
    "is_recoverable",
    "run_guarded",
]
