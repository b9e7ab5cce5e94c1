# core/errors/handler.py
from __future__ import annotations

import asyncio
import binascii
import concurrent.futures
import csv
import json
import logging
import sqlite3
from datetime import timedelta
from typing import Any, Mapping, Protocol

from sqlalchemy.exc import SQLAlchemyError

from core.errors import catalog
from core.exceptions import (
    AppException,
    AuthException,
    ConfigurationException,
    DataException,
    DatabaseException,
    NetworkException,
    StorageException,
    ValidationException,
)
from core.failures import (
    AuthFailure,
    ConfigurationFailure,
    DataFailure,
    DatabaseFailure,
    Failure,
    NetworkFailure,
    StorageFailure,
    ValidationFailure,
)

logger = logging.getLogger(__name__)


class EventSink(Protocol):
    def emit_event(
        self,
        *,
        event_type: str,
        message: str,
        level: str = "INFO",
        trace_id: str | None = None,
        data: Mapping[str, Any] | None = None,
    ) -> str: ...


_FAILURE_BY_EXCEPTION: tuple[tuple[type[AppException], type[Failure]], ...] = (
    (DatabaseException, DatabaseFailure),
    (AuthException, AuthFailure),
    (ValidationException, ValidationFailure),
    (DataException, DataFailure),
    (StorageException, StorageFailure),
    (NetworkException, NetworkFailure),
    (ConfigurationException, ConfigurationFailure),
)

_DATABASE_ERRORS = (SQLAlchemyError, sqlite3.Error)
_TIMEOUT_ERRORS = (TimeoutError, asyncio.TimeoutError, concurrent.futures.TimeoutError)
_FORMAT_ERRORS = (json.JSONDecodeError, UnicodeError, binascii.Error, csv.Error)

# First match wins; ordering matters because JSONDecodeError is a ValueError
# and TimeoutError/ConnectionError are OSErrors.
_SYSTEM_CLASSIFIERS: tuple[tuple[tuple[type[BaseException], ...], type[Failure], str, str], ...] = (
    (_DATABASE_ERRORS, DatabaseFailure, catalog.DB_SYSTEM_ERROR, "Database operation failed"),
    (_TIMEOUT_ERRORS, NetworkFailure, catalog.NET_TIMEOUT, "Operation timed out"),
    ((ConnectionError,), NetworkFailure, catalog.NET_CONNECTION_ERROR, "Connection error"),
    ((OSError,), StorageFailure, catalog.STOR_SYSTEM_ERROR, "File system error"),
    (_FORMAT_ERRORS, DataFailure, catalog.DATA_FORMAT_ERROR, "Data format error"),
    ((ValueError, TypeError), ValidationFailure, catalog.VAL_SYSTEM_ERROR, "Invalid argument"),
    ((RuntimeError,), DataFailure, catalog.DATA_STATE_ERROR, "Invalid state"),
)


def _lookup(table: Mapping[str | None, Any], code: str | None) -> Any:
    key = code or catalog.UNKNOWN_CODE
    if key in table:
        return table[key]
    return table[None]


class ErrorHandler:
    """
    Translates exceptions into failures and answers presentation questions
    about them: what to tell the user, whether to offer a retry, how long to
    wait before retrying and what the user can do about it.

    Only the optional event sink is held as state; every lookup is a pure
    function of the failure and the static tables in ``core.errors.catalog``.
    """

    def __init__(self, event_sink: EventSink | None = None) -> None:
        self._event_sink = event_sink

    def handle_exception(self, exception: BaseException) -> Failure:
        if isinstance(exception, AppException):
            logger.error("AppException occurred: %s", exception, exc_info=exception)
            logger.debug("Technical details: %s", exception.technical_details)
            failure = self._map_app_exception(exception)
        else:
            logger.error("System exception occurred: %r", exception, exc_info=exception)
            failure = self._classify_system_exception(exception)
        self._record(exception, failure)
        return failure

    @staticmethod
    def _map_app_exception(exception: AppException) -> Failure:
        for exception_type, failure_type in _FAILURE_BY_EXCEPTION:
            if isinstance(exception, exception_type):
                if failure_type is ValidationFailure:
                    return ValidationFailure(
                        exception.message,
                        code=exception.code,
                        original_error=exception.original_error,
                        field_errors=getattr(exception, "field_errors", {}),
                    )
                return failure_type(
                    exception.message,
                    code=exception.code,
                    original_error=exception.original_error,
                )
        return DataFailure(
            exception.message,
            code=exception.code,
            original_error=exception.original_error,
        )

    @staticmethod
    def _classify_system_exception(exception: BaseException) -> Failure:
        for exception_types, failure_type, code, prefix in _SYSTEM_CLASSIFIERS:
            if isinstance(exception, exception_types):
                return failure_type(f"{prefix}: {exception}", code=code, original_error=exception)
        return DataFailure(
            f"An unexpected error occurred: {exception}",
            code=catalog.SYSTEM_UNEXPECTED_ERROR,
            original_error=exception,
        )

    def _record(self, exception: BaseException, failure: Failure) -> None:
        if self._event_sink is None:
            return
        try:
            self._event_sink.emit_event(
                event_type="error.handled",
                level="ERROR",
                message=failure.message,
                data={
                    "failure_kind": failure.kind.value if failure.kind else None,
                    "code": failure.code,
                    "exception_type": type(exception).__name__,
                },
            )
        except Exception:
            logger.warning("Could not record handled error event", exc_info=True)

    def get_user_friendly_message(self, failure: Failure) -> str:
        if isinstance(failure, ValidationFailure) and failure.field_errors:
            return next(iter(failure.field_errors.values()))
        table = catalog.USER_MESSAGES.get(failure.kind)
        if table is None:
            return catalog.GENERIC_USER_MESSAGE
        return _lookup(table, failure.code)

    def is_recoverable(self, failure: Failure) -> bool:
        if failure.kind in catalog.ALWAYS_UNRECOVERABLE:
            return False
        table = catalog.RECOVERABILITY.get(failure.kind)
        if table is None:
            return True
        return _lookup(table, failure.code)

    def get_retry_delay(self, failure: Failure, attempt_count: int) -> timedelta:
        """Backoff before retry number ``attempt_count``.

        ``attempt_count`` is expected to be 1 or more; it is not validated.
        """
        step, floor, ceiling = catalog.RETRY_POLICIES.get(failure.kind, catalog.DEFAULT_RETRY_POLICY)
        return min(max(step * attempt_count, floor), ceiling)

    def get_recovery_suggestions(self, failure: Failure) -> list[str]:
        table = catalog.RECOVERY_SUGGESTIONS.get(failure.kind)
        if table is None:
            return list(catalog.GENERIC_SUGGESTIONS)
        return list(_lookup(table, failure.code))


_DEFAULT_HANDLER: ErrorHandler | None = None


def get_error_handler() -> ErrorHandler:
    global _DEFAULT_HANDLER
    if _DEFAULT_HANDLER is None:
        _DEFAULT_HANDLER = ErrorHandler()
    return _DEFAULT_HANDLER


def handle_exception(exception: BaseException) -> Failure:
    return get_error_handler().handle_exception(exception)


def get_user_friendly_message(failure: Failure) -> str:
    return get_error_handler().get_user_friendly_message(failure)


def is_recoverable(failure: Failure) -> bool:
    return get_error_handler().is_recoverable(failure)


def get_retry_delay(failure: Failure, attempt_count: int) -> timedelta:
    return get_error_handler().get_retry_delay(failure, attempt_count)


def get_recovery_suggestions(failure: Failure) -> list[str]:
    return get_error_handler().get_recovery_suggestions(failure)


__all__ = [
    "ErrorHandler",
    "EventSink",
    "get_error_handler",
    "get_recovery_suggestions",
    "get_retry_delay",
    "get_user_friendly_message",
    "handle_exception",
    "is_recoverable",
]
