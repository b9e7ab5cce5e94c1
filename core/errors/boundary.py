# core/errors/boundary.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar

from core.errors.handler import ErrorHandler, get_error_handler
from core.failures import Failure

T = TypeVar("T")


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Either the value of a use case or the failure it ended with."""

    value: T | None = None
    failure: Failure | None = None

    @property
    def is_success(self) -> bool:
        return self.failure is None

    @property
    def is_failure(self) -> bool:
        return self.failure is not None

    def unwrap(self) -> T | None:
        if self.failure is not None:
            raise LookupError(f"Outcome holds a failure: {self.failure}")
        return self.value

    @classmethod
    def success(cls, value: T | None = None) -> "Outcome[T]":
        return cls(value=value)

    @classmethod
    def failed(cls, failure: Failure) -> "Outcome[T]":
        return cls(failure=failure)


def run_guarded(
    operation: Callable[..., T],
    *args: Any,
    handler: ErrorHandler | None = None,
    **kwargs: Any,
) -> Outcome[T]:
    """
    Run ``operation`` and convert any exception it raises into a failure.

    This is the single place where exceptions stop: callers on the
    presentation side only ever see an Outcome.
    """
    try:
        value = operation(*args, **kwargs)
    except Exception as exc:
        return Outcome.failed((handler or get_error_handler()).handle_exception(exc))
    return Outcome.success(value)


__all__ = ["Outcome", "run_guarded"]
