# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Validator for object literal properties holding user-facing text.

Examples: { success: "Data saved!", error: "Failed to save" }, { label: "Dashboard" }
"""

from nextscope.validators.base import (
    BaseValidator,
    Priority,
    ValidationKind,
    ValidationResult,
    ValidatorContext,
)

USER_FACING_PROPERTIES = frozenset(
    {
        "message",
        "text",
        "label",
        "title",
        "description",
        "placeholder",
        "tooltip",
        "error",
        "success",
        "warning",
        "info",
    }
)


class ObjectPropertiesValidator(BaseValidator):
    name = "object-properties"
    description = "User-facing Object Properties - Only whitelisted property keys"
    priority = Priority.HIGH
    kind = ValidationKind.OBJECT_PROPERTY

    def check(self, context: ValidatorContext) -> ValidationResult:
        prop = context.property_name
        if not prop:
            return ValidationResult(False, "No property name provided")
        if prop not in USER_FACING_PROPERTIES:
            return ValidationResult(False, f'Property "{prop}" is not user-facing')
        return ValidationResult(True)
