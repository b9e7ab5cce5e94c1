from __future__ import annotations

from datetime import date, datetime, timedelta
from decimal import Decimal

import pytest

from core.validation import (
    ConditionalRule,
    CustomRule,
    DateRule,
    EmailRule,
    LengthRule,
    PatternRule,
    RangeRule,
    RequiredRule,
)
from core.validation.rules import as_datetime, as_number


@pytest.mark.parametrize("value", [None, "", "   ", [], (), {}])
def test_required_rejects_empty_values(value):
    assert RequiredRule("Email").validate(value) == "Email is required"


@pytest.mark.parametrize("value", ["a", 0, False, [1], date(2026, 1, 1)])
def test_required_accepts_present_values(value):
    assert RequiredRule("Email").validate(value) is None


def test_length_rule_bounds():
    rule = LengthRule("Name", min_length=2, max_length=5)

    assert rule.validate("A") == "Name must be at least 2 characters long"
    assert rule.validate("Annabel") == "Name must not exceed 5 characters"
    assert rule.validate("Ann") is None
    assert rule.validate(None) is None
    assert rule.description == "Length must be at least 2 and at most 5 characters"


def test_length_rule_needs_a_bound():
    with pytest.raises(ValueError):
        LengthRule("Name")


@pytest.mark.parametrize(
    "value, ok",
    [
        ("anna.schmidt@example.de", True),
        ("a+b@mail.co", True),
        ("no-at-sign.example.com", False),
        ("x@y", False),
        ("x@y.c", False),
        ("", True),
        (None, True),
    ],
)
def test_email_rule(value, ok):
    error = EmailRule("Email").validate(value)
    assert (error is None) is ok
    if not ok:
        assert error == "Email must be a valid email address"


def test_date_rule_future_and_past_use_calendar_days():
    clock = lambda: datetime(2026, 3, 15, 10, 30)
    not_future = DateRule("Start", allow_future=False, clock=clock)
    not_past = DateRule("End", allow_past=False, clock=clock)

    assert not_future.validate(date(2026, 3, 16)) == "Start cannot be in the future"
    assert not_future.validate(datetime(2026, 3, 15, 23, 59)) is None
    assert not_past.validate(date(2026, 3, 14)) == "End cannot be in the past"
    assert not_past.validate(date(2026, 3, 15)) is None


def test_date_rule_bounds_compare_timestamps():
    rule = DateRule("Log Date", min_date=date(2026, 1, 1), max_date=date(2026, 12, 31))

    assert rule.validate(datetime(2025, 12, 31, 23, 0)) == "Log Date must be after 1/1/2026"
    assert rule.validate(datetime(2026, 12, 31, 0, 1)) == "Log Date must be before 31/12/2026"
    assert rule.validate("2026-06-01") is None


def test_date_rule_rejects_non_dates():
    rule = DateRule("Start")

    assert rule.validate("next tuesday") == "Start must be a valid date"
    assert rule.validate(42) == "Start must be a valid date"
    assert rule.validate(None) is None


def test_date_rule_ignores_clock_for_equality():
    assert DateRule("Start", clock=lambda: datetime(2000, 1, 1)) == DateRule("Start")


def test_as_datetime_normalises_inputs():
    assert as_datetime(date(2026, 3, 1)) == datetime(2026, 3, 1)
    assert as_datetime("2026-03-01T08:00:00") == datetime(2026, 3, 1, 8)
    assert as_datetime("2026-03-01T08:00:00Z").tzinfo is None
    assert as_datetime("garbage") is None


def test_range_rule_inclusive_and_exclusive():
    inclusive = RangeRule("Hours", min_value=0, max_value=10)
    exclusive = RangeRule("Hours", min_value=0, max_value=10, inclusive=False)

    assert inclusive.validate(0) is None
    assert inclusive.validate(10) is None
    assert inclusive.validate(11) == "Hours must be at most 10"
    assert exclusive.validate(0) == "Hours must be greater than 0"
    assert exclusive.validate(10) == "Hours must be less than 10"
    assert exclusive.validate("5.5") is None
    assert inclusive.validate("ten") == "Hours must be a valid number"
    assert inclusive.validate(True) == "Hours must be a valid number"
    assert inclusive.validate(float("nan")) == "Hours must be a valid number"


def test_as_number_parses_strings():
    assert as_number(" 7 ") == 7
    assert as_number("2.5") == 2.5
    assert as_number(Decimal("1.5")) == Decimal("1.5")
    assert as_number(None) is None


def test_pattern_rule_uses_description_in_message():
    rule = PatternRule("Phone", r"^\+?[\d\s\-\(\)]{10,}$", "must be a valid phone number")

    assert rule.validate("+49 151 2345678") is None
    assert rule.validate("12345") == "Phone must be a valid phone number"
    assert rule.validate("") is None
    assert rule.error_key == "validation.pattern"


def test_custom_rule_delegates_to_callable():
    rule = CustomRule(
        "Hours",
        lambda v: None if v in (None, "") or int(v) % 2 == 0 else "Hours must be even",
        "validation.even",
        "Must be even",
    )

    assert rule.validate(3) == "Hours must be even"
    assert rule.validate(4) is None
    assert rule.error_key == "validation.even"
    assert rule.description == "Must be even"


def test_conditional_rule_consults_form_data():
    rule = ConditionalRule(
        RequiredRule("Company Name"),
        lambda form: form.get("has_company") is True,
    )

    assert rule.validate_in_form("", {"has_company": True}) == "Company Name is required"
    assert rule.validate_in_form("", {"has_company": False}) is None
    assert rule.validate("") == "Company Name is required"
    assert rule.error_key == "validation.required"
    assert rule.description == "Conditional: Field must not be empty"


def test_rules_are_immutable():
    rule = LengthRule("Name", max_length=5)
    with pytest.raises(AttributeError):
        rule.max_length = 10


def test_date_rule_defaults_to_wall_clock():
    rule = DateRule("Start", allow_future=False)
    tomorrow = datetime.now() + timedelta(days=1)
    assert rule.validate(tomorrow) == "Start cannot be in the future"


def test_date_rule_reports_first_broken_check_in_order():
    clock = lambda: datetime(2026, 3, 15, 10, 30)
    rule = DateRule("D", allow_future=False, max_date=date(2026, 1, 1), clock=clock)
    not_past = DateRule("D", allow_past=False, min_date=date(2026, 3, 1), clock=clock)

    assert rule.validate(date(2026, 4, 1)) == "D cannot be in the future"
    assert rule.validate(date(2026, 2, 1)) == "D must be before 1/1/2026"
    assert not_past.validate(date(2026, 2, 1)) == "D cannot be in the past"


def test_pattern_end_anchor_rejects_trailing_newline():
    rule = PatternRule("Zip", r"^\d{5}$", "must be a 5 digit postal code")

    assert rule.validate("12345") is None
    assert rule.validate("12345\n") == "Zip must be a 5 digit postal code"


def test_pattern_keeps_literal_dollar_signs():
    price = PatternRule("Price", r"^\$\d+$", "must be a dollar amount")
    currency = PatternRule("Currency", r"^[$€]$", "must be a currency sign")

    assert price.validate("$12") is None
    assert price.validate("$12\n") == "Price must be a dollar amount"
    assert currency.validate("$") is None
    assert currency.validate("€") is None


def test_pattern_digits_are_ascii_only():
    rule = PatternRule("Zip", r"^\d{5}$", "must be a 5 digit postal code")

    assert rule.validate("١٢٣٤٥") == "Zip must be a 5 digit postal code"
