# core/exceptions.py
from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Any, ClassVar, Mapping


class ExceptionCategory(str, Enum):
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    STORAGE = "storage"
    DATA = "data"
    NETWORK = "network"
    CONFIGURATION = "configuration"
    UNKNOWN = "unknown"

    @property
    def display_name(self) -> str:
        return _CATEGORY_DISPLAY_NAMES[self]


_CATEGORY_DISPLAY_NAMES = {
    ExceptionCategory.VALIDATION: "Validation",
    ExceptionCategory.AUTHENTICATION: "Authentication",
    ExceptionCategory.STORAGE: "Storage",
    ExceptionCategory.DATA: "Data Processing",
    ExceptionCategory.NETWORK: "Network",
    ExceptionCategory.CONFIGURATION: "Configuration",
    ExceptionCategory.UNKNOWN: "Unknown",
}


class DatabaseErrorCodes:
    GENERAL = "DB_001"
    CONNECTION_FAILED = "DB_002"
    QUERY_FAILED = "DB_003"
    MIGRATION_FAILED = "DB_004"
    CONSTRAINT_VIOLATION = "DB_005"
    TRANSACTION_FAILED = "DB_006"
    TABLE_NOT_FOUND = "DB_007"
    DATA_CORRUPTION = "DB_008"


class AuthErrorCodes:
    GENERAL = "AUTH_001"
    SIGN_IN_FAILED = "AUTH_002"
    SIGN_OUT_FAILED = "AUTH_003"
    USER_NOT_FOUND = "AUTH_004"
    SESSION_EXPIRED = "AUTH_005"
    PERMISSION_DENIED = "AUTH_006"
    INVALID_CREDENTIALS = "AUTH_007"
    ACCOUNT_DISABLED = "AUTH_008"


class ValidationErrorCodes:
    GENERAL = "VAL_001"
    REQUIRED_FIELD = "VAL_002"
    INVALID_FORMAT = "VAL_003"
    OUT_OF_RANGE = "VAL_004"
    MULTIPLE_FIELDS = "VAL_005"
    INVALID_EMAIL = "VAL_006"
    INVALID_DATE = "VAL_007"
    INVALID_LENGTH = "VAL_008"


class DataErrorCodes:
    GENERAL = "DATA_001"
    PARSING_FAILED = "DATA_002"
    TRANSFORMATION_FAILED = "DATA_003"
    NOT_FOUND = "DATA_004"
    CORRUPTED = "DATA_005"
    INVALID_STRUCTURE = "DATA_006"
    MISSING_REQUIRED_FIELD = "DATA_007"


class StorageErrorCodes:
    GENERAL = "STOR_001"
    READ_FAILED = "STOR_002"
    WRITE_FAILED = "STOR_003"
    INITIALIZATION_FAILED = "STOR_004"
    PERMISSION_DENIED = "STOR_005"
    KEY_NOT_FOUND = "STOR_006"
    QUOTA_EXCEEDED = "STOR_007"


class NetworkErrorCodes:
    GENERAL = "NET_001"
    NO_CONNECTION = "NET_002"
    TIMEOUT = "NET_003"
    SERVER_ERROR = "NET_004"
    BAD_REQUEST = "NET_005"
    UNAUTHORIZED = "NET_006"
    FORBIDDEN = "NET_007"
    NOT_FOUND = "NET_008"


class ConfigErrorCodes:
    GENERAL = "CONF_001"
    MISSING_CONFIGURATION = "CONF_002"
    INVALID_CONFIGURATION = "CONF_003"
    INITIALIZATION_FAILED = "CONF_004"
    ENVIRONMENT_NOT_SET = "CONF_005"
    DEPENDENCY_MISSING = "CONF_006"


class AppException(Exception):
    """Base class for errors raised by domain and data layers.

    Subclasses pin ``category``, the code prefix and the default code; callers
    only choose the message, an optional code from the variant's namespace and
    the wrapped lower-level cause.
    """

    category: ClassVar[ExceptionCategory] = ExceptionCategory.UNKNOWN
    code_prefix: ClassVar[str] = ""
    default_code: ClassVar[str] = ""

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        original_error: Any = None,
        stack_trace: Any = None,
    ):
        super().__init__(message)
        resolved = (code or "").strip() or self.default_code
        if not resolved:
            raise ValueError(f"{type(self).__name__} requires an error code")
        if self.code_prefix and not resolved.startswith(f"{self.code_prefix}_"):
            raise ValueError(
                f"Code {resolved!r} is outside the {self.code_prefix}_ namespace of {type(self).__name__}"
            )
        self.message = message
        self.code = resolved
        self.original_error = original_error
        self.stack_trace = stack_trace

    @property
    def user_message(self) -> str:
        return self.message

    @property
    def technical_details(self) -> str:
        return (
            f"Exception: {type(self).__name__}\n"
            f"Code: {self.code}\n"
            f"Message: {self.message}\n"
            f"Category: {self.category.display_name}\n"
            f"Original Error: {self.original_error if self.original_error is not None else 'None'}\n"
            f"Stack Trace: {self.stack_trace if self.stack_trace is not None else 'None'}"
        )

    def __str__(self) -> str:
        return f"{type(self).__name__}: {self.message} (Code: {self.code})"


class DatabaseException(AppException):
    """Raised for SQLite/SQLAlchemy operations, schema issues and persistence errors."""

    category = ExceptionCategory.STORAGE
    code_prefix = "DB"
    default_code = DatabaseErrorCodes.GENERAL

    @classmethod
    def connection_failed(cls, details: str | None = None, error: Any = None) -> "DatabaseException":
        suffix = f": {details}" if details else ""
        return cls(
            f"Failed to connect to database{suffix}",
            code=DatabaseErrorCodes.CONNECTION_FAILED,
            original_error=error,
        )

    @classmethod
    def query_failed(cls, query: str, error: Any = None) -> "DatabaseException":
        return cls(
            f"Database query failed: {query}",
            code=DatabaseErrorCodes.QUERY_FAILED,
            original_error=error,
        )

    @classmethod
    def migration_failed(cls, version: str, error: Any = None) -> "DatabaseException":
        return cls(
            f"Database migration failed for version: {version}",
            code=DatabaseErrorCodes.MIGRATION_FAILED,
            original_error=error,
        )

    @classmethod
    def constraint_violation(cls, constraint: str, error: Any = None) -> "DatabaseException":
        return cls(
            f"Database constraint violation: {constraint}",
            code=DatabaseErrorCodes.CONSTRAINT_VIOLATION,
            original_error=error,
        )

    @classmethod
    def transaction_failed(cls, operation: str, error: Any = None) -> "DatabaseException":
        return cls(
            f"Database transaction failed: {operation}",
            code=DatabaseErrorCodes.TRANSACTION_FAILED,
            original_error=error,
        )

    @classmethod
    def table_not_found(cls, details: str, error: Any = None) -> "DatabaseException":
        return cls(
            f"Database table not found: {details}",
            code=DatabaseErrorCodes.TABLE_NOT_FOUND,
            original_error=error,
        )


class AuthException(AppException):
    """Raised for sign-in, sign-out and authentication state errors."""

    category = ExceptionCategory.AUTHENTICATION
    code_prefix = "AUTH"
    default_code = AuthErrorCodes.GENERAL

    @classmethod
    def sign_in_failed(cls, provider: str | None = None) -> "AuthException":
        suffix = f" with {provider}" if provider else ""
        return cls(f"Sign-in failed{suffix}", code=AuthErrorCodes.SIGN_IN_FAILED)

    @classmethod
    def sign_out_failed(cls, error: Any = None) -> "AuthException":
        return cls("Sign-out failed", code=AuthErrorCodes.SIGN_OUT_FAILED, original_error=error)

    @classmethod
    def user_not_found(cls) -> "AuthException":
        return cls("User not found or not authenticated", code=AuthErrorCodes.USER_NOT_FOUND)

    @classmethod
    def session_expired(cls) -> "AuthException":
        return cls("Authentication session has expired", code=AuthErrorCodes.SESSION_EXPIRED)

    @classmethod
    def permission_denied(cls, action: str) -> "AuthException":
        return cls(f"Permission denied for action: {action}", code=AuthErrorCodes.PERMISSION_DENIED)


class ValidationException(AppException):
    """Raised when form input or business rules are violated."""

    category = ExceptionCategory.VALIDATION
    code_prefix = "VAL"
    default_code = ValidationErrorCodes.GENERAL

    def __init__(
        self,
        message: str,
        *,
        field_errors: Mapping[str, str] | None = None,
        code: str | None = None,
        original_error: Any = None,
        stack_trace: Any = None,
    ):
        super().__init__(
            message,
            code=code,
            original_error=original_error,
            stack_trace=stack_trace,
        )
        self.field_errors: Mapping[str, str] = MappingProxyType(dict(field_errors or {}))

    @property
    def has_field_errors(self) -> bool:
        return bool(self.field_errors)

    def get_field_error(self, field_name: str) -> str | None:
        return self.field_errors.get(field_name)

    @classmethod
    def required_field(cls, field_name: str) -> "ValidationException":
        return cls(f"{field_name} is required", code=ValidationErrorCodes.REQUIRED_FIELD)

    @classmethod
    def invalid_format(cls, field_name: str, expected_format: str) -> "ValidationException":
        return cls(
            f"{field_name} has invalid format. Expected: {expected_format}",
            code=ValidationErrorCodes.INVALID_FORMAT,
        )

    @classmethod
    def out_of_range(cls, field_name: str, valid_range: str) -> "ValidationException":
        return cls(
            f"{field_name} is out of range. Valid range: {valid_range}",
            code=ValidationErrorCodes.OUT_OF_RANGE,
        )

    @classmethod
    def multiple_fields(cls, errors: Mapping[str, str]) -> "ValidationException":
        return cls(
            "Multiple validation errors occurred",
            field_errors=errors,
            code=ValidationErrorCodes.MULTIPLE_FIELDS,
        )


class DataException(AppException):
    """Raised for parsing, transformation and data integrity errors."""

    category = ExceptionCategory.DATA
    code_prefix = "DATA"
    default_code = DataErrorCodes.GENERAL

    @classmethod
    def parsing_failed(cls, data_type: str, error: Any = None) -> "DataException":
        return cls(
            f"Failed to parse {data_type} data",
            code=DataErrorCodes.PARSING_FAILED,
            original_error=error,
        )

    @classmethod
    def transformation_failed(cls, operation: str, error: Any = None) -> "DataException":
        return cls(
            f"Data transformation failed: {operation}",
            code=DataErrorCodes.TRANSFORMATION_FAILED,
            original_error=error,
        )

    @classmethod
    def not_found(cls, data_type: str, identifier: str) -> "DataException":
        return cls(f"{data_type} not found: {identifier}", code=DataErrorCodes.NOT_FOUND)

    @classmethod
    def corrupted(cls, data_type: str, details: str | None = None) -> "DataException":
        suffix = f": {details}" if details else ""
        return cls(f"Corrupted {data_type} data{suffix}", code=DataErrorCodes.CORRUPTED)


class StorageException(AppException):
    """Raised for key-value settings storage and file system errors."""

    category = ExceptionCategory.STORAGE
    code_prefix = "STOR"
    default_code = StorageErrorCodes.GENERAL

    @classmethod
    def read_failed(cls, key: str, error: Any = None) -> "StorageException":
        return cls(
            f"Failed to read from storage: {key}",
            code=StorageErrorCodes.READ_FAILED,
            original_error=error,
        )

    @classmethod
    def write_failed(cls, key: str, error: Any = None) -> "StorageException":
        return cls(
            f"Failed to write to storage: {key}",
            code=StorageErrorCodes.WRITE_FAILED,
            original_error=error,
        )

    @classmethod
    def initialization_failed(cls, error: Any = None) -> "StorageException":
        return cls(
            "Storage initialization failed",
            code=StorageErrorCodes.INITIALIZATION_FAILED,
            original_error=error,
        )

    @classmethod
    def permission_denied(cls, operation: str) -> "StorageException":
        return cls(
            f"Storage permission denied for: {operation}",
            code=StorageErrorCodes.PERMISSION_DENIED,
        )


class NetworkException(AppException):
    """Raised for connectivity problems."""

    category = ExceptionCategory.NETWORK
    code_prefix = "NET"
    default_code = NetworkErrorCodes.GENERAL

    @classmethod
    def no_connection(cls) -> "NetworkException":
        return cls("No internet connection available", code=NetworkErrorCodes.NO_CONNECTION)

    @classmethod
    def timeout(cls, operation: str) -> "NetworkException":
        return cls(f"Network timeout during: {operation}", code=NetworkErrorCodes.TIMEOUT)

    @classmethod
    def server_error(cls, status_code: int, message: str | None = None) -> "NetworkException":
        suffix = f": {message}" if message else ""
        return cls(f"Server error ({status_code}){suffix}", code=NetworkErrorCodes.SERVER_ERROR)


class ConfigurationException(AppException):
    """Raised for app configuration, environment setup and initialization errors."""

    category = ExceptionCategory.CONFIGURATION
    code_prefix = "CONF"
    default_code = ConfigErrorCodes.GENERAL

    @classmethod
    def missing_configuration(cls, config_key: str) -> "ConfigurationException":
        return cls(
            f"Missing required configuration: {config_key}",
            code=ConfigErrorCodes.MISSING_CONFIGURATION,
        )

    @classmethod
    def invalid_configuration(cls, config_key: str, expected_type: str) -> "ConfigurationException":
        return cls(
            f"Invalid configuration for {config_key}. Expected: {expected_type}",
            code=ConfigErrorCodes.INVALID_CONFIGURATION,
        )

    @classmethod
    def initialization_failed(cls, component: str, error: Any = None) -> "ConfigurationException":
        return cls(
            f"Failed to initialize {component}",
            code=ConfigErrorCodes.INITIALIZATION_FAILED,
            original_error=error,
        )


__all__ = [
    "AppException",
    "AuthErrorCodes",
    "AuthException",
    "ConfigErrorCodes",
    "ConfigurationException",
    "DataErrorCodes",
    "DataException",
    "DatabaseErrorCodes",
    "DatabaseException",
    "ExceptionCategory",
    "NetworkErrorCodes",
    "NetworkException",
    "StorageErrorCodes",
    "StorageException",
    "ValidationErrorCodes",
    "ValidationException",
]
