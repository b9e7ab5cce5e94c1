from core.validation.factories import ValidationRules
from core.validation.form import (
    FieldValidation,
    FormValidationResult,
    FormValidator,
    FormValidatorBuilder,
)
from core.validation.rules import (
    ConditionalRule,
    CustomRule,
    DateRule,
    EmailRule,
    LengthRule,
    PatternRule,
    RangeRule,
    RequiredRule,
    ValidationRule,
)

__all__ = [
    "ConditionalRule",
    "CustomRule",
    "DateRule",
    "EmailRule",
    "FieldValidation",
    "FormValidationResult",
    "FormValidator",
    "FormValidatorBuilder",
    "LengthRule",
    "PatternRule",
    "RangeRule",
    "RequiredRule",
    "ValidationRule",
    "ValidationRules",
]
