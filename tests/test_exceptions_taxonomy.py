from __future__ import annotations

import pytest

from core.exceptions import (
    AuthException,
    ConfigurationException,
    DataException,
    DatabaseErrorCodes,
    DatabaseException,
    ExceptionCategory,
    NetworkException,
    StorageException,
    ValidationErrorCodes,
    ValidationException,
)
from core.failures import DatabaseFailure, ValidationFailure


@pytest.mark.parametrize(
    "exc_type, category, default_code",
    [
        (DatabaseException, ExceptionCategory.STORAGE, "DB_001"),
        (AuthException, ExceptionCategory.AUTHENTICATION, "AUTH_001"),
        (ValidationException, ExceptionCategory.VALIDATION, "VAL_001"),
        (DataException, ExceptionCategory.DATA, "DATA_001"),
        (StorageException, ExceptionCategory.STORAGE, "STOR_001"),
        (NetworkException, ExceptionCategory.NETWORK, "NET_001"),
        (ConfigurationException, ExceptionCategory.CONFIGURATION, "CONF_001"),
    ],
)
def test_variant_pins_category_and_default_code(exc_type, category, default_code):
    exc = exc_type("boom")
    assert exc.category is category
    assert exc.code == default_code
    assert exc.message == "boom"


def test_code_outside_variant_namespace_is_rejected():
    with pytest.raises(ValueError, match="namespace"):
        DatabaseException("boom", code="AUTH_002")


def test_named_constructors_carry_codes_and_causes():
    cause = RuntimeError("locked")
    exc = DatabaseException.query_failed("SELECT 1", cause)
    assert exc.code == DatabaseErrorCodes.QUERY_FAILED
    assert exc.original_error is cause
    assert exc.message == "Database query failed: SELECT 1"

    assert AuthException.sign_in_failed("Google").message == "Sign-in failed with Google"
    assert AuthException.sign_in_failed().message == "Sign-in failed"
    assert NetworkException.server_error(503, "down").message == "Server error (503): down"
    assert DataException.corrupted("profile").message == "Corrupted profile data"
    assert StorageException.permission_denied("write").code == "STOR_005"
    assert ConfigurationException.missing_configuration("db_path").code == "CONF_002"


def test_str_and_technical_details_describe_exception():
    exc = DataException.not_found("Profile", "abc")
    assert str(exc) == "DataException: Profile not found: abc (Code: DATA_004)"
    details = exc.technical_details
    assert "Code: DATA_004" in details
    assert "Category: Data Processing" in details
    assert "Original Error: None" in details


def test_validation_exception_field_errors_are_read_only():
    errors = {"email": "Email must be a valid email address"}
    exc = ValidationException.multiple_fields(errors)
    errors["name"] = "later"

    assert exc.code == ValidationErrorCodes.MULTIPLE_FIELDS
    assert exc.has_field_errors
    assert exc.get_field_error("email") == "Email must be a valid email address"
    assert exc.get_field_error("name") is None
    with pytest.raises(TypeError):
        exc.field_errors["x"] = "y"


def test_failures_have_value_semantics():
    cause = KeyError("k")
    assert DatabaseFailure("x", code="DB_002", original_error=cause) == DatabaseFailure(
        "x", code="DB_002", original_error=cause
    )
    assert DatabaseFailure("x", code="DB_002") != DatabaseFailure("x", code="DB_003")
    assert ValidationFailure("x", field_errors={"a": "b"}) == ValidationFailure(
        "x", field_errors={"a": "b"}
    )
    assert ValidationFailure("x", field_errors={"a": "b"}) != ValidationFailure("x")

    failure = ValidationFailure("x")
    with pytest.raises(AttributeError):
        failure.message = "y"
