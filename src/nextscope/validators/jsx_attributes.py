# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Validator for user-facing JSX attributes.

Examples: alt="User profile picture", placeholder="Enter your email"
"""

from nextscope.validators.base import (
    BaseValidator,
    Priority,
    ValidationKind,
    ValidationResult,
    ValidatorContext,
)

USER_FACING_ATTRIBUTES = frozenset({"alt", "title", "placeholder", "label", "aria-label"})


class JsxAttributesValidator(BaseValidator):
    name = "jsx-attributes"
    description = "User-facing JSX Attributes - Only whitelisted attributes"
    priority = Priority.HIGH
    kind = ValidationKind.JSX_ATTRIBUTE

    def check(self, context: ValidatorContext) -> ValidationResult:
        attribute = context.attribute_name
        if not attribute:
            return ValidationResult(False, "No attribute name provided")
        if attribute not in USER_FACING_ATTRIBUTES:
            return ValidationResult(False, f'Attribute "{attribute}" is not user-facing')
        return ValidationResult(True)
