# core/validation/app_validators.py
"""Prebuilt validators for the application's forms.

Each builder returns a fresh FormValidator; callers build once per screen and
reuse it. Form keys are the snake_case names the data layer stores.
"""
from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any, Callable

from core.domain.enums import DailyLogStatus, QuestionCategory, Trade, option_values
from core.validation.factories import ValidationRules
from core.validation.form import FormValidator, FormValidatorBuilder
from core.validation.rules import CustomRule, FormData, LengthRule, PatternRule, as_datetime

PHONE_PATTERN = r"^\+?[\d\s\-\(\)]{10,}$"
MIN_APPRENTICESHIP = timedelta(days=180)
MAX_APPRENTICESHIP = timedelta(days=365 * 8)
DATE_WINDOW = timedelta(days=365 * 10)


def validate_apprenticeship_dates(start: Any, end: Any) -> str | None:
    start_at, end_at = as_datetime(start), as_datetime(end)
    if start_at is None or end_at is None:
        return None
    if end_at <= start_at:
        return "End date must be after start date"
    if end_at - start_at < MIN_APPRENTICESHIP:
        return "Apprenticeship must be at least 6 months long"
    if end_at - start_at > MAX_APPRENTICESHIP:
        return "Apprenticeship cannot exceed 8 years"
    return None


def validate_date_within_apprenticeship(value: Any, start: Any, end: Any) -> str | None:
    moment, start_at, end_at = as_datetime(value), as_datetime(start), as_datetime(end)
    if moment is None or start_at is None or end_at is None:
        return None
    if moment < start_at:
        return "Date cannot be before apprenticeship start date"
    if moment > end_at:
        return "Date cannot be after apprenticeship end date"
    return None


def validate_trade(trade: str | None) -> str | None:
    if not trade:
        return "Please select a trade"
    if trade not in option_values(Trade):
        return "Please select a valid trade"
    return None


def validate_daily_status(status: str | None) -> str | None:
    if not status:
        return "Please select a status"
    if status not in option_values(DailyLogStatus):
        return "Please select a valid status"
    return None


def _onboarding_date_range(form_data: FormData) -> str | None:
    error = validate_apprenticeship_dates(
        form_data.get("apprenticeship_start_date"),
        form_data.get("apprenticeship_end_date"),
    )
    if error == "End date must be after start date":
        return "Apprenticeship end date must be after start date"
    return error


def onboarding_validator(clock: Callable[[], datetime] = datetime.now) -> FormValidator:
    now = clock()
    return (
        FormValidatorBuilder()
        .add_required_field("first_name", [LengthRule("First Name", min_length=2, max_length=50)])
        .add_required_field("last_name", [LengthRule("Last Name", min_length=2, max_length=50)])
        .add_required_field("trade", ValidationRules.selection("Trade", option_values(Trade)))
        .add_required_field(
            "apprenticeship_start_date",
            ValidationRules.date(
                "Apprenticeship Start Date",
                allow_future=False,
                min_date=now - DATE_WINDOW,
                clock=clock,
            ),
        )
        .add_required_field(
            "apprenticeship_end_date",
            ValidationRules.date(
                "Apprenticeship End Date",
                allow_past=False,
                max_date=now + DATE_WINDOW,
                clock=clock,
            ),
        )
        .add_optional_field("company_name", [LengthRule("Company Name", max_length=100)])
        .add_optional_field("school_name", [LengthRule("School Name", max_length=100)])
        .add_form_rule(
            CustomRule(
                "Date Range",
                _onboarding_date_range,
                "validation.dateRange",
                "End date must be after start date with reasonable duration",
            )
        )
        .build()
    )


def profile_edit_validator() -> FormValidator:
    return (
        FormValidatorBuilder()
        .add_required_field("first_name", [LengthRule("First Name", min_length=2, max_length=50)])
        .add_required_field("last_name", [LengthRule("Last Name", min_length=2, max_length=50)])
        .add_required_field("trade", ValidationRules.selection("Trade", option_values(Trade)))
        .add_optional_field("company_name", [LengthRule("Company Name", max_length=100)])
        .add_optional_field("school_name", [LengthRule("School Name", max_length=100)])
        .add_optional_field("email", ValidationRules.email("Email", required=False))
        .add_optional_field(
            "phone",
            [PatternRule("Phone", PHONE_PATTERN, "must be a valid phone number")],
        )
        .build()
    )


def daily_log_status_validator() -> FormValidator:
    return (
        FormValidatorBuilder()
        .add_required_field(
            "status", ValidationRules.selection("Status", option_values(DailyLogStatus))
        )
        .add_optional_field("notes", [LengthRule("Notes", max_length=500)])
        .build()
    )


def question_response_validator() -> FormValidator:
    return (
        FormValidatorBuilder()
        .add_required_field("response", [LengthRule("Response", min_length=10, max_length=1000)])
        .add_optional_field(
            "category",
            ValidationRules.selection(
                "Category", option_values(QuestionCategory), required=False
            ),
        )
        .build()
    )


def company_verification_validator() -> FormValidator:
    return (
        FormValidatorBuilder()
        .add_required_field(
            "company_name", [LengthRule("Company Name", min_length=2, max_length=100)]
        )
        .add_required_field(
            "supervisor_name", [LengthRule("Supervisor Name", min_length=2, max_length=100)]
        )
        .add_required_field("supervisor_email", ValidationRules.email("Supervisor Email"))
        .add_optional_field(
            "supervisor_phone",
            [PatternRule("Supervisor Phone", PHONE_PATTERN, "must be a valid phone number")],
        )
        .add_optional_field("company_address", [LengthRule("Company Address", max_length=200)])
        .build()
    )


def school_verification_validator() -> FormValidator:
    return (
        FormValidatorBuilder()
        .add_required_field(
            "school_name", [LengthRule("School Name", min_length=2, max_length=100)]
        )
        .add_required_field(
            "instructor_name", [LengthRule("Instructor Name", min_length=2, max_length=100)]
        )
        .add_required_field("instructor_email", ValidationRules.email("Instructor Email"))
        .add_optional_field(
            "instructor_phone",
            [PatternRule("Instructor Phone", PHONE_PATTERN, "must be a valid phone number")],
        )
        .add_optional_field("school_address", [LengthRule("School Address", max_length=200)])
        .add_required_field(
            "program_name", [LengthRule("Program Name", min_length=2, max_length=100)]
        )
        .build()
    )


__all__ = [
    "company_verification_validator",
    "daily_log_status_validator",
    "onboarding_validator",
    "profile_edit_validator",
    "question_response_validator",
    "school_verification_validator",
    "validate_apprenticeship_dates",
    "validate_daily_status",
    "validate_date_within_apprenticeship",
    "validate_trade",
]
