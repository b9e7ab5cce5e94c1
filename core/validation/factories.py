# core/validation/factories.py
from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any, Callable, Sequence

from core.validation.rules import (
    CustomRule,
    DateRule,
    EmailRule,
    LengthRule,
    RangeRule,
    RequiredRule,
    ValidationRule,
)


class ValidationRules:
    """Ready-made rule lists for common field shapes."""

    @staticmethod
    def required_text(
        field_name: str,
        *,
        min_length: int | None = None,
        max_length: int | None = None,
    ) -> list[ValidationRule]:
        rules: list[ValidationRule] = [RequiredRule(field_name)]
        if min_length is not None or max_length is not None:
            rules.append(LengthRule(field_name, min_length=min_length, max_length=max_length))
        return rules

    @staticmethod
    def email(field_name: str, *, required: bool = True) -> list[ValidationRule]:
        rules: list[ValidationRule] = [RequiredRule(field_name)] if required else []
        rules.append(EmailRule(field_name))
        return rules

    @staticmethod
    def date(
        field_name: str,
        *,
        required: bool = True,
        min_date: date | None = None,
        max_date: date | None = None,
        allow_future: bool = True,
        allow_past: bool = True,
        clock: Callable[[], Any] | None = None,
    ) -> list[ValidationRule]:
        rules: list[ValidationRule] = [RequiredRule(field_name)] if required else []
        options: dict[str, Any] = {
            "min_date": min_date,
            "max_date": max_date,
            "allow_future": allow_future,
            "allow_past": allow_past,
        }
        if clock is not None:
            options["clock"] = clock
        rules.append(DateRule(field_name, **options))
        return rules

    @staticmethod
    def numeric_range(
        field_name: str,
        *,
        required: bool = True,
        min_value: int | float | Decimal | None = None,
        max_value: int | float | Decimal | None = None,
        inclusive: bool = True,
    ) -> list[ValidationRule]:
        rules: list[ValidationRule] = [RequiredRule(field_name)] if required else []
        rules.append(
            RangeRule(field_name, min_value=min_value, max_value=max_value, inclusive=inclusive)
        )
        return rules

    @staticmethod
    def selection(
        field_name: str,
        valid_options: Sequence[str],
        *,
        required: bool = True,
    ) -> list[ValidationRule]:
        options = tuple(valid_options)
        listed = ", ".join(options)

        def check(value: Any) -> str | None:
            if value is None or (isinstance(value, str) and value == ""):
                return None
            if str(value) not in options:
                return f"{field_name} must be one of: {listed}"
            return None

        rules: list[ValidationRule] = [RequiredRule(field_name)] if required else []
        rules.append(
            CustomRule(field_name, check, "validation.selection", f"Must be one of: {listed}")
        )
        return rules


__all__ = ["ValidationRules"]
