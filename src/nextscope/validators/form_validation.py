# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Validator for form validation and error messages.

A string qualifies through any one of:
- a validation property key ({ required: "This field is required" })
- a validation-flavoured variable name (const emailError = "Invalid email")
- validation wording in the text itself ("must be at least 8 characters")
"""

import re

from nextscope.validators.base import (
    BaseValidator,
    Priority,
    ValidationKind,
    ValidationResult,
    ValidatorContext,
)

VALIDATION_PROPERTIES = frozenset(
    {
        "required",
        "email",
        "password",
        "minLength",
        "maxLength",
        "pattern",
        "min",
        "max",
        "invalid",
        "valid",
        "format",
        "match",
        "confirm",
        "unique",
        "exists",
    }
)

VARIABLE_PATTERN = re.compile(
    r"validation|error|invalid|required|check|verify|confirm|validate", re.IGNORECASE
)

MESSAGE_PATTERN = re.compile(
    r"required|invalid|must be|cannot be|should be|please enter|please provide|field is"
    r"|characters?|minimum|maximum|at least|no more than|does not match|already exists"
    r"|not found|too short|too long|format",
    re.IGNORECASE,
)


class FormValidationValidator(BaseValidator):
    name = "form-validation"
    description = "Form Validation Messages - Validation and error message strings"
    priority = Priority.HIGH
    kind = ValidationKind.FORM_VALIDATION

    def check(self, context: ValidatorContext) -> ValidationResult:
        if context.property_name and context.property_name in VALIDATION_PROPERTIES:
            return ValidationResult(True)
        if context.variable_name and VARIABLE_PATTERN.search(context.variable_name):
            return ValidationResult(True)
        if MESSAGE_PATTERN.search(context.text):
            return ValidationResult(True)
        return ValidationResult(False, "Not a validation message")
