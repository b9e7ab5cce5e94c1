# core/validation/rules.py
"""
Atomic validation rules.

A rule answers one question about one value: ``validate`` returns ``None``
when the value is acceptable and a human-readable message otherwise. Apart
from ``RequiredRule``, rules let empty values through so a field's
required-ness is decided in exactly one place.
"""
from __future__ import annotations

import math
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any, Callable, Mapping, Union

FormData = Mapping[str, Any]
FormValue = Union[str, int, float, Decimal, date, datetime, bool, list, tuple, None]


class ValidationRule(ABC):
    @abstractmethod
    def validate(self, value: Any) -> str | None:
        ...

    @property
    @abstractmethod
    def error_key(self) -> str:
        ...

    @property
    @abstractmethod
    def description(self) -> str:
        ...

    def validate_in_form(self, value: Any, form_data: FormData) -> str | None:
        return self.validate(value)


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value == "")


@dataclass(frozen=True)
class RequiredRule(ValidationRule):
    field_name: str

    def validate(self, value: Any) -> str | None:
        if value is None:
            return f"{self.field_name} is required"
        if isinstance(value, str) and not value.strip():
            return f"{self.field_name} is required"
        if isinstance(value, (list, tuple, set, frozenset, dict)) and not value:
            return f"{self.field_name} is required"
        return None

    @property
    def error_key(self) -> str:
        return "validation.required"

    @property
    def description(self) -> str:
        return "Field must not be empty"


@dataclass(frozen=True)
class LengthRule(ValidationRule):
    field_name: str
    min_length: int | None = None
    max_length: int | None = None

    def __post_init__(self) -> None:
        if self.min_length is None and self.max_length is None:
            raise ValueError("At least one of min_length or max_length must be provided")

    def validate(self, value: Any) -> str | None:
        if value is None:
            return None
        length = len(str(value))
        if self.min_length is not None and length < self.min_length:
            return f"{self.field_name} must be at least {self.min_length} characters long"
        if self.max_length is not None and length > self.max_length:
            return f"{self.field_name} must not exceed {self.max_length} characters"
        return None

    @property
    def error_key(self) -> str:
        return "validation.length"

    @property
    def description(self) -> str:
        parts = []
        if self.min_length is not None:
            parts.append(f"at least {self.min_length}")
        if self.max_length is not None:
            parts.append(f"at most {self.max_length}")
        return f"Length must be {' and '.join(parts)} characters"


EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")


@dataclass(frozen=True)
class EmailRule(ValidationRule):
    field_name: str

    def validate(self, value: Any) -> str | None:
        if _is_blank(value):
            return None
        if not EMAIL_PATTERN.match(str(value).strip()):
            return f"{self.field_name} must be a valid email address"
        return None

    @property
    def error_key(self) -> str:
        return "validation.email"

    @property
    def description(self) -> str:
        return "Must be a valid email address"


def as_datetime(value: Any) -> datetime | None:
    """Coerce a form value into a naive local datetime, or ``None`` if it is not a date."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        return datetime.combine(value, time.min)
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def _format_date(value: datetime) -> str:
    return f"{value.day}/{value.month}/{value.year}"


@dataclass(frozen=True)
class DateRule(ValidationRule):
    """
    Date checks, reported in a fixed order: future, past, min bound, max bound.

    ``allow_future``/``allow_past`` compare calendar dates against today;
    ``min_date``/``max_date`` compare full timestamps, with plain dates read
    as midnight.
    """

    field_name: str
    min_date: date | None = None
    max_date: date | None = None
    allow_future: bool = True
    allow_past: bool = True
    clock: Callable[[], datetime] = field(default=datetime.now, compare=False, repr=False)

    def validate(self, value: Any) -> str | None:
        if value is None:
            return None
        moment = as_datetime(value)
        if moment is None:
            return f"{self.field_name} must be a valid date"

        today = self.clock().date()
        day = moment.date()
        if not self.allow_future and day > today:
            return f"{self.field_name} cannot be in the future"
        if not self.allow_past and day < today:
            return f"{self.field_name} cannot be in the past"

        lower = as_datetime(self.min_date)
        if lower is not None and moment < lower:
            return f"{self.field_name} must be after {_format_date(lower)}"
        upper = as_datetime(self.max_date)
        if upper is not None and moment > upper:
            return f"{self.field_name} must be before {_format_date(upper)}"
        return None

    @property
    def error_key(self) -> str:
        return "validation.date"

    @property
    def description(self) -> str:
        text = "Must be a valid date"
        if not self.allow_future:
            text += " (not in future)"
        if not self.allow_past:
            text += " (not in past)"
        return text


def as_number(value: Any) -> int | float | Decimal | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float, Decimal)):
        number = value
    elif isinstance(value, str):
        try:
            number = int(value.strip())
        except ValueError:
            try:
                number = float(value)
            except ValueError:
                return None
    else:
        return None
    if isinstance(number, float) and math.isnan(number):
        return None
    if isinstance(number, Decimal) and number.is_nan():
        return None
    return number


@dataclass(frozen=True)
class RangeRule(ValidationRule):
    field_name: str
    min_value: int | float | Decimal | None = None
    max_value: int | float | Decimal | None = None
    inclusive: bool = True

    def __post_init__(self) -> None:
        if self.min_value is None and self.max_value is None:
            raise ValueError("At least one of min_value or max_value must be provided")

    def validate(self, value: Any) -> str | None:
        if value is None:
            return None
        number = as_number(value)
        if number is None:
            return f"{self.field_name} must be a valid number"

        if self.min_value is not None:
            if self.inclusive and number < self.min_value:
                return f"{self.field_name} must be at least {self.min_value}"
            if not self.inclusive and number <= self.min_value:
                return f"{self.field_name} must be greater than {self.min_value}"
        if self.max_value is not None:
            if self.inclusive and number > self.max_value:
                return f"{self.field_name} must be at most {self.max_value}"
            if not self.inclusive and number >= self.max_value:
                return f"{self.field_name} must be less than {self.max_value}"
        return None

    @property
    def error_key(self) -> str:
        return "validation.range"

    @property
    def description(self) -> str:
        parts = []
        if self.min_value is not None:
            parts.append(f"{'at least' if self.inclusive else 'greater than'} {self.min_value}")
        if self.max_value is not None:
            parts.append(f"{'at most' if self.inclusive else 'less than'} {self.max_value}")
        return f"Must be {' and '.join(parts)}"


def _anchor_at_end(source: str) -> str:
    """Rewrite unescaped ``$`` outside character classes as ``\\Z``.

    A bare ``$`` also matches just before a trailing newline, so
    ``^\\d{5}$`` would accept ``"12345\\n"``; ``\\Z`` only matches at the end.
    """
    out: list[str] = []
    in_class = False
    index = 0
    while index < len(source):
        char = source[index]
        if char == "\\":
            out.append(source[index : index + 2])
            index += 2
            continue
        index += 1
        if in_class:
            in_class = char != "]"
        elif char == "[":
            in_class = True
            out.append(char)
            # "^" and a leading "]" belong to the class syntax
            if source[index : index + 1] == "^":
                out.append("^")
                index += 1
            if source[index : index + 1] == "]":
                out.append("]")
                index += 1
            continue
        elif char == "$":
            out.append(r"\Z")
            continue
        out.append(char)
    return "".join(out)


@dataclass(frozen=True)
class PatternRule(ValidationRule):
    field_name: str
    pattern: re.Pattern[str]
    pattern_description: str

    def __post_init__(self) -> None:
        # \d and \w match ASCII only; $ matches only at the very end
        if isinstance(self.pattern, str):
            compiled = re.compile(_anchor_at_end(self.pattern), re.ASCII)
        elif not self.pattern.flags & re.MULTILINE:
            compiled = re.compile(_anchor_at_end(self.pattern.pattern), self.pattern.flags)
        else:
            compiled = self.pattern
        object.__setattr__(self, "pattern", compiled)

    def validate(self, value: Any) -> str | None:
        if _is_blank(value):
            return None
        if not self.pattern.search(str(value)):
            return f"{self.field_name} {self.pattern_description}"
        return None

    @property
    def error_key(self) -> str:
        return "validation.pattern"

    @property
    def description(self) -> str:
        return self.pattern_description


@dataclass(frozen=True)
class CustomRule(ValidationRule):
    field_name: str
    validator: Callable[[Any], str | None]
    custom_error_key: str
    custom_description: str

    def validate(self, value: Any) -> str | None:
        return self.validator(value)

    @property
    def error_key(self) -> str:
        return self.custom_error_key

    @property
    def description(self) -> str:
        return self.custom_description


@dataclass(frozen=True)
class ConditionalRule(ValidationRule):
    """Applies ``rule`` only when ``condition(form_data)`` holds.

    Outside a form (plain ``validate``) there is nothing to test the condition
    against, so the wrapped rule is applied unconditionally.
    """

    rule: ValidationRule
    condition: Callable[[FormData], bool]

    def validate(self, value: Any) -> str | None:
        return self.rule.validate(value)

    def validate_in_form(self, value: Any, form_data: FormData) -> str | None:
        if not self.condition(form_data):
            return None
        return self.rule.validate_in_form(value, form_data)

    @property
    def error_key(self) -> str:
        return self.rule.error_key

    @property
    def description(self) -> str:
        return f"Conditional: {self.rule.description}"


__all__ = [
    "ConditionalRule",
    "CustomRule",
    "DateRule",
    "EMAIL_PATTERN",
    "EmailRule",
    "FormData",
    "FormValue",
    "LengthRule",
    "PatternRule",
    "RangeRule",
    "RequiredRule",
    "ValidationRule",
    "as_datetime",
    "as_number",
]
