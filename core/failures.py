# core/failures.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, ClassVar, Mapping


class FailureKind(str, Enum):
    AUTH = "auth"
    DATABASE = "database"
    VALIDATION = "validation"
    DATA = "data"
    STORAGE = "storage"
    NETWORK = "network"
    CONFIGURATION = "configuration"


@dataclass(frozen=True)
class Failure:
    """Immutable error value handed to presentation code instead of an exception."""

    kind: ClassVar[FailureKind | None] = None

    message: str
    code: str | None = None
    original_error: Any = None

    def __str__(self) -> str:
        return f"Failure: {self.message} (Code: {self.code})"


@dataclass(frozen=True)
class AuthFailure(Failure):
    kind = FailureKind.AUTH


@dataclass(frozen=True)
class DatabaseFailure(Failure):
    kind = FailureKind.DATABASE


@dataclass(frozen=True)
class ValidationFailure(Failure):
    kind = FailureKind.VALIDATION

    field_errors: Mapping[str, str] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        # frozen: bypass __setattr__ to store a read-only view
        object.__setattr__(self, "field_errors", MappingProxyType(dict(self.field_errors)))


@dataclass(frozen=True)
class DataFailure(Failure):
    kind = FailureKind.DATA


@dataclass(frozen=True)
class StorageFailure(Failure):
    kind = FailureKind.STORAGE


@dataclass(frozen=True)
class NetworkFailure(Failure):
    kind = FailureKind.NETWORK


@dataclass(frozen=True)
class ConfigurationFailure(Failure):
    kind = FailureKind.CONFIGURATION


__all__ = [
    "AuthFailure",
    "ConfigurationFailure",
    "DataFailure",
    "DatabaseFailure",
    "Failure",
    "FailureKind",
    "NetworkFailure",
    "StorageFailure",
    "ValidationFailure",
]
