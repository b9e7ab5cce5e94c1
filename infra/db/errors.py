# infra/db/errors.py
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import (
    DisconnectionError,
    IntegrityError,
    OperationalError,
    SQLAlchemyError,
    TimeoutError as PoolTimeoutError,
)
from sqlalchemy.orm import Session

from core.exceptions import DatabaseException

logger = logging.getLogger(__name__)


def to_database_exception(operation: str, error: SQLAlchemyError) -> DatabaseException:
    """Pick the DatabaseException code that describes a SQLAlchemy error."""
    if isinstance(error, IntegrityError):
        return DatabaseException.constraint_violation(str(error.orig or error), error)
    if isinstance(error, OperationalError):
        detail = str(error.orig or error)
        if "no such table" in detail.lower():
            return DatabaseException.table_not_found(detail, error)
        return DatabaseException.connection_failed(detail, error)
    if isinstance(error, (DisconnectionError, PoolTimeoutError)):
        return DatabaseException.connection_failed(str(error), error)
    return DatabaseException.query_failed(operation, error)


@contextmanager
def translate_db_errors(operation: str) -> Iterator[None]:
    """Re-raise SQLAlchemy errors from the block as DatabaseException."""
    try:
        yield
    except SQLAlchemyError as exc:
        logger.warning("Database operation %r failed: %s", operation, exc)
        raise to_database_exception(operation, exc) from exc


def commit_or_rollback(session: Session, operation: str = "commit") -> None:
    try:
        session.commit()
    except SQLAlchemyError as exc:
        session.rollback()
        logger.warning("Rolled back %r after commit failure: %s", operation, exc)
        raise DatabaseException.transaction_failed(operation, exc) from exc


__all__ = ["commit_or_rollback", "to_database_exception", "translate_db_errors"]
