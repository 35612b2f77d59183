# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Validator for direct text content of JSX elements.

Examples: <h1>Welcome</h1>, <p>Loading...</p>
"""

from nextscope.validators.base import (
    BaseValidator,
    Priority,
    ValidationKind,
    ValidationResult,
    ValidatorContext,
)


class JsxTextContentValidator(BaseValidator):
    """JSX text is user-facing by definition once it passes the baseline."""

    name = "jsx-text-content"
    description = "JSX Text Content - Always translate direct text within JSX elements"
    priority = Priority.HIGH
    kind = ValidationKind.JSX_TEXT

    def check(self, context: ValidatorContext) -> ValidationResult:
        return ValidationResult(True)
