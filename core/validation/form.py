# core/validation/form.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Sequence

from core.exceptions import ValidationException
from core.validation.rules import FormData, RequiredRule, ValidationRule

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldValidation:
    field_name: str
    rules: tuple[ValidationRule, ...]
    is_required: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "rules", tuple(self.rules))

    @classmethod
    def required(cls, field_name: str, rules: Iterable[ValidationRule] = ()) -> "FieldValidation":
        return cls(field_name, (RequiredRule(field_name), *rules), is_required=True)

    @classmethod
    def optional(cls, field_name: str, rules: Iterable[ValidationRule] = ()) -> "FieldValidation":
        return cls(field_name, tuple(rules), is_required=False)

    def evaluate(self, value: Any, form_data: FormData) -> str | None:
        """Run the rules in order and return the first error."""
        for rule in self.rules:
            error = rule.validate_in_form(value, form_data)
            if error is not None:
                return error
        return None


@dataclass(frozen=True)
class FormValidationResult:
    is_valid: bool
    field_errors: Mapping[str, str] = field(default_factory=dict, hash=False)
    general_errors: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "field_errors", MappingProxyType(dict(self.field_errors)))
        object.__setattr__(self, "general_errors", tuple(self.general_errors))

    @classmethod
    def valid(cls) -> "FormValidationResult":
        return cls(is_valid=True)

    @classmethod
    def invalid(
        cls,
        field_errors: Mapping[str, str],
        general_errors: Sequence[str] = (),
    ) -> "FormValidationResult":
        return cls(is_valid=False, field_errors=field_errors, general_errors=tuple(general_errors))

    def get_field_error(self, field_name: str) -> str | None:
        return self.field_errors.get(field_name)

    def has_field_error(self, field_name: str) -> bool:
        return field_name in self.field_errors

    @property
    def all_errors(self) -> list[str]:
        return [*self.field_errors.values(), *self.general_errors]

    @property
    def first_error(self) -> str | None:
        if self.field_errors:
            return next(iter(self.field_errors.values()))
        if self.general_errors:
            return self.general_errors[0]
        return None

    def __str__(self) -> str:
        if self.is_valid:
            return "FormValidationResult: Valid"
        return f"FormValidationResult: Invalid ({len(self.all_errors)} errors)"


class FormValidator:
    """
    Validates one form shape.

    Field rules run per field in registration order and stop at the first
    error; form-level rules receive the whole form mapping and all of their
    errors are collected. Instances are immutable and meant to be built once
    (see FormValidatorBuilder) and reused for every submission.
    """

    def __init__(
        self,
        field_validations: Iterable[FieldValidation],
        form_level_rules: Iterable[ValidationRule] = (),
    ) -> None:
        self._field_validations: tuple[FieldValidation, ...] = tuple(field_validations)
        self._form_level_rules: tuple[ValidationRule, ...] = tuple(form_level_rules)

    @property
    def field_validations(self) -> tuple[FieldValidation, ...]:
        return self._field_validations

    @property
    def form_level_rules(self) -> tuple[ValidationRule, ...]:
        return self._form_level_rules

    def validate_form(self, form_data: FormData) -> FormValidationResult:
        field_errors: dict[str, str] = {}
        general_errors: list[str] = []

        for validation in self._field_validations:
            error = validation.evaluate(form_data.get(validation.field_name), form_data)
            if error is not None:
                field_errors[validation.field_name] = error

        for rule in self._form_level_rules:
            error = rule.validate_in_form(form_data, form_data)
            if error is not None:
                general_errors.append(error)

        if field_errors or general_errors:
            logger.debug(
                "Form validation failed: fields=%s general=%d",
                sorted(field_errors),
                len(general_errors),
            )
            return FormValidationResult.invalid(field_errors, general_errors)
        return FormValidationResult.valid()

    def validate_field(
        self,
        field_name: str,
        value: Any,
        form_data: FormData | None = None,
    ) -> str | None:
        validation = self._find(field_name)
        if validation is None:
            return None
        return validation.evaluate(value, form_data if form_data is not None else {})

    def validate_form_or_throw(self, form_data: FormData) -> None:
        result = self.validate_form(form_data)
        if not result.is_valid:
            raise ValidationException.multiple_fields(result.field_errors)

    def is_field_required(self, field_name: str) -> bool:
        validation = self._find(field_name)
        return validation.is_required if validation is not None else False

    def get_field_rules(self, field_name: str) -> list[ValidationRule]:
        validation = self._find(field_name)
        return list(validation.rules) if validation is not None else []

    def get_field_description(self, field_name: str) -> str:
        return ", ".join(rule.description for rule in self.get_field_rules(field_name))

    def _find(self, field_name: str) -> FieldValidation | None:
        for validation in self._field_validations:
            if validation.field_name == field_name:
                return validation
        return None


class FormValidatorBuilder:
    def __init__(self) -> None:
        self._field_validations: list[FieldValidation] = []
        self._form_level_rules: list[ValidationRule] = []

    def add_required_field(
        self, field_name: str, rules: Iterable[ValidationRule] = ()
    ) -> "FormValidatorBuilder":
        self._field_validations.append(FieldValidation.required(field_name, rules))
        return self

    def add_optional_field(
        self, field_name: str, rules: Iterable[ValidationRule] = ()
    ) -> "FormValidatorBuilder":
        self._field_validations.append(FieldValidation.optional(field_name, rules))
        return self

    def add_form_rule(self, rule: ValidationRule) -> "FormValidatorBuilder":
        self._form_level_rules.append(rule)
        return self

    def build(self) -> FormValidator:
        return FormValidator(
            field_validations=tuple(self._field_validations),
            form_level_rules=tuple(self._form_level_rules),
        )


__all__ = [
    "FieldValidation",
    "FormValidationResult",
    "FormValidator",
    "FormValidatorBuilder",
]
