# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Validator for text-carrying props passed to components.

Examples: <Modal title="Confirm Delete" />, <Toast text="Success!" />
"""

import re

from nextscope.validators.base import (
    BaseValidator,
    Priority,
    ValidationKind,
    ValidationResult,
    ValidatorContext,
)

USER_FACING_PROPS = frozenset(
    {
        "title",
        "message",
        "text",
        "content",
        "description",
        "confirmText",
        "cancelText",
        "submitText",
        "tooltip",
        "placeholder",
        "label",
        "errorText",
        "successText",
        "warningText",
        "infoText",
        "helperText",
        "hintText",
        "statusText",
        "actionText",
        "buttonText",
    }
)

TECHNICAL_VALUES = [
    re.compile(r"^(true|false)$", re.IGNORECASE),
    re.compile(r"^[\d.,]+$"),
    re.compile(r"^#[0-9a-fA-F]{3,8}$"),  # Colors
    re.compile(r"^(left|right|top|bottom|center)$", re.IGNORECASE),
    re.compile(r"^(sm|md|lg|xl|xs)$", re.IGNORECASE),
    re.compile(r"^(none|auto|inherit|initial)$", re.IGNORECASE),
]


def is_user_facing_text(text: str) -> bool:
    """Heuristic: does a prop value read like natural language?"""
    trimmed = text.strip()
    if len(trimmed) <= 1:
        return False

    # Short single words
    if re.fullmatch(r"[a-zA-Z]+", trimmed) and len(trimmed) < 4:
        return False

    if any(pattern.match(trimmed) for pattern in TECHNICAL_VALUES):
        return False

    # Paths and technical strings
    if "/" in text or "@" in text or "\\" in text:
        return False

    if not re.search(r"[a-zA-Z]", text):
        return False

    has_spaces = re.search(r"\s", text) is not None
    has_punctuation = re.search(r"[.!?:,]", text) is not None
    has_capital = re.search(r"[A-Z]", text) is not None
    return has_spaces or has_punctuation or (len(trimmed) >= 3 and has_capital)


class ComponentPropsValidator(BaseValidator):
    name = "component-props"
    description = "User-facing Props in Components - Props that display text to users"
    priority = Priority.MEDIUM
    kind = ValidationKind.COMPONENT_PROP

    def check(self, context: ValidatorContext) -> ValidationResult:
        prop = context.attribute_name
        if not prop:
            return ValidationResult(False, "No attribute name provided")
        if prop not in USER_FACING_PROPS:
            return ValidationResult(False, f'Prop "{prop}" is not user-facing')
        if not is_user_facing_text(context.text):
            return ValidationResult(False, "Text does not appear to be user-facing content")
        return ValidationResult(True, f'User-facing prop "{prop}" contains translatable text')
