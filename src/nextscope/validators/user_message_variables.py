# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Validator for variables whose names mark them as user messages.

Examples: const welcomeMessage = "Welcome back!", const errorText = "Something went wrong"
"""

from nextscope.validators.base import (
    BaseValidator,
    Priority,
    ValidationKind,
    ValidationResult,
    ValidatorContext,
)

SEMANTIC_KEYWORDS = ("message", "text", "notification", "alert", "title", "description", "label")


class UserMessageVariablesValidator(BaseValidator):
    name = "user-message-variables"
    description = "User Message Variables - Variables with semantic names containing keywords"
    priority = Priority.HIGH
    kind = ValidationKind.VARIABLE_DECLARATION

    def check(self, context: ValidatorContext) -> ValidationResult:
        variable = context.variable_name
        if not variable:
            return ValidationResult(False, "No variable name provided")

        lowered = variable.lower()
        if not any(keyword in lowered for keyword in SEMANTIC_KEYWORDS):
            return ValidationResult(
                False,
                f'Variable "{variable}" does not contain semantic keywords: '
                f"{', '.join(SEMANTIC_KEYWORDS)}",
            )
        return ValidationResult(True)
