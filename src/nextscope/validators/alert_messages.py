# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Validator for messages shown through alert(), confirm() and prompt().

Developer console output is never user-facing.
Examples: alert("Please save your work"), confirm("Delete item?")
"""

import re

from nextscope.validators.base import (
    BaseValidator,
    Priority,
    ValidationKind,
    ValidationResult,
    ValidatorContext,
)

USER_FACING_FUNCTIONS = frozenset({"alert", "confirm", "prompt"})

DEVELOPER_FUNCTIONS = frozenset(
    {
        "console.log",
        "console.debug",
        "console.info",
        "console.warn",
        "console.error",
        "console.trace",
        "console.time",
        "console.timeEnd",
        "console.assert",
        "console.count",
        "console.dir",
        "console.table",
    }
)

TECHNICAL_MESSAGES = [
    re.compile(r"^(true|false)$", re.IGNORECASE),
    re.compile(r"^[\d.,\-+]+$"),
    re.compile(r"^(ok|yes|no|on|off)$", re.IGNORECASE),
    re.compile(r"^(test|debug|dev|prod)$", re.IGNORECASE),
    re.compile(r"^[A-Z_]+$"),  # ALL_CAPS constants
    re.compile(r"^\w+:\w+"),  # key:value
    re.compile(r"^\[.*\]$"),
    re.compile(r"^\{.*\}$"),
]


def is_user_facing_message(text: str) -> bool:
    """Heuristic: does an alert message read like something a user should see?"""
    trimmed = text.strip()
    if len(trimmed) <= 2:
        return False

    # Short identifiers
    if re.fullmatch(r"[a-zA-Z_]+", trimmed) and len(trimmed) < 5:
        return False

    if any(pattern.match(trimmed) for pattern in TECHNICAL_MESSAGES):
        return False

    # Paths and URLs
    if "/" in text or "@" in text or "\\" in text or "://" in text:
        return False

    if not re.search(r"[a-zA-Z]", text):
        return False

    has_spaces = re.search(r"\s", text) is not None
    has_punctuation = re.search(r"[.!?:,]", text) is not None
    has_capital = re.search(r"[A-Z]", text) is not None
    return has_spaces or has_punctuation or (len(trimmed) >= 5 and has_capital)


class AlertMessagesValidator(BaseValidator):
    name = "alert-messages"
    description = "Alert/Console Messages for Users - User-facing alerts and prompts"
    priority = Priority.MEDIUM
    kind = ValidationKind.ALERT_MESSAGE

    def check(self, context: ValidatorContext) -> ValidationResult:
        function = context.function_name
        if not function:
            return ValidationResult(False, "No function call context provided")
        if function in DEVELOPER_FUNCTIONS:
            return ValidationResult(
                False, f'Developer function "{function}" should not be translated'
            )
        if function not in USER_FACING_FUNCTIONS:
            return ValidationResult(False, f'Function "{function}" is not a user-facing alert')
        if not is_user_facing_message(context.text):
            return ValidationResult(False, "Text does not appear to be user-facing message")
        return ValidationResult(True, f"User-facing {function}() message should be translated")
