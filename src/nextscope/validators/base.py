# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Base interface for translation-string validators.

A validator is a pure rule that classifies one candidate string as
user-facing (should be translated) or not, given the syntactic context it
was found in. Each validator is bound to exactly one ValidationKind.

Every validator applies the same baseline first: the text must be
non-empty and contain at least one ASCII letter.
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Optional

BASELINE_REJECTION = "Text is empty or contains no letters"

_LETTER_RE = re.compile(r"[a-zA-Z]")


class ValidationKind(str, Enum):
    """Syntactic position a candidate string was found in."""

    JSX_TEXT = "jsx-text"
    JSX_ATTRIBUTE = "jsx-attribute"
    VARIABLE_DECLARATION = "variable-declaration"
    OBJECT_PROPERTY = "object-property"
    FORM_VALIDATION = "form-validation"
    COMPONENT_PROP = "component-prop"
    ALERT_MESSAGE = "alert-message"


class Priority:
    """Validator priority tiers.

    Design: Using class constants (not Enum) for JSON-compatible strings.
    """

    HIGH = "high"  # Always translate
    MEDIUM = "medium"  # Context dependent
    LOW = "low"


@dataclass(frozen=True)
class ValidatorContext:
    """Candidate string plus the names around it."""

    text: str
    attribute_name: Optional[str] = None  # JSX attribute or component prop
    variable_name: Optional[str] = None
    property_name: Optional[str] = None  # Object literal key
    function_name: Optional[str] = None  # Enclosing call ("alert", "console.log")


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    reason: Optional[str] = None


def basic_text_validation(text: Optional[str]) -> bool:
    """True if text is non-empty and contains a letter."""
    if not text:
        return False
    return _LETTER_RE.search(text) is not None


def generate_translation_key(text: str) -> str:
    """Suggested key: "Save changes!" -> "save_changes" (at most 50 chars)."""
    key = re.sub(r"[^a-z0-9\s]", "", text.lower())
    key = re.sub(r"\s+", "_", key)
    return key[:50]


class BaseValidator(ABC):
    """Abstract base class for validators.

    Subclasses set name, description, priority and kind, and implement
    check(). validate() applies the baseline before delegating to check().
    """

    name: str = ""
    description: str = ""
    priority: str = Priority.MEDIUM
    kind: ValidationKind

    def validate(self, context: ValidatorContext) -> ValidationResult:
        if not basic_text_validation(context.text):
            return ValidationResult(False, BASELINE_REJECTION)
        return self.check(context)

    @abstractmethod
    def check(self, context: ValidatorContext) -> ValidationResult:
        """Apply the validator's own rule to text that passed the baseline."""
        pass

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "description": self.description,
            "priority": self.priority,
            "kind": self.kind.value,
        }
