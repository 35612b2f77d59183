# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Registry dispatching candidate strings to validators by kind.

The registry maps each ValidationKind to at most one validator. It is seeded
with the seven default validators; register() rebinds a kind.

Dispatch outcomes:
- kind outside ValidationKind: is_valid=False, validator "unknown", reason "unknown type"
- known kind with no bound validator: is_valid=False, validator "not-found", reason "not found"
- otherwise the bound validator's verdict

Thread Safety:
- NOT thread-safe for register(); validate() only reads
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from nextscope.validators.alert_messages import AlertMessagesValidator
from nextscope.validators.base import BaseValidator, ValidationKind, ValidatorContext
from nextscope.validators.component_props import ComponentPropsValidator
from nextscope.validators.form_validation import FormValidationValidator
from nextscope.validators.jsx_attributes import JsxAttributesValidator
from nextscope.validators.jsx_text_content import JsxTextContentValidator
from nextscope.validators.object_properties import ObjectPropertiesValidator
from nextscope.validators.user_message_variables import UserMessageVariablesValidator

logger = logging.getLogger(__name__)

UNKNOWN_VALIDATOR = "unknown"
UNKNOWN_REASON = "unknown type"
NOT_FOUND_VALIDATOR = "not-found"
NOT_FOUND_REASON = "not found"

# Context fields forwarded to the validator of each kind
_CONTEXT_FIELDS: Dict[ValidationKind, tuple] = {
    ValidationKind.JSX_TEXT: (),
    ValidationKind.JSX_ATTRIBUTE: ("attribute_name",),
    ValidationKind.VARIABLE_DECLARATION: ("variable_name",),
    ValidationKind.OBJECT_PROPERTY: ("property_name",),
    ValidationKind.FORM_VALIDATION: ("property_name", "variable_name"),
    ValidationKind.COMPONENT_PROP: ("attribute_name",),
    ValidationKind.ALERT_MESSAGE: ("function_name",),
}


@dataclass(frozen=True)
class ValidationInput:
    """A candidate string to classify.

    Attributes:
        text: The string literal value.
        kind: ValidationKind value ("jsx-text", "jsx-attribute", ...). Other
            strings are accepted and reported as unknown.
        context: Names around the string: attribute_name, variable_name,
            property_name, function_name.
    """

    text: str
    kind: str
    context: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ValidationOutcome:
    is_valid: bool
    validator_name: str
    kind: str
    reason: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to JSON-compatible dict."""
        result: Dict[str, Any] = {
            "is_valid": self.is_valid,
            "validator": self.validator_name,
            "kind": self.kind,
        }
        if self.reason is not None:
            result["reason"] = self.reason
        return result


def default_validators() -> List[BaseValidator]:
    return [
        JsxTextContentValidator(),
        JsxAttributesValidator(),
        UserMessageVariablesValidator(),
        ObjectPropertiesValidator(),
        FormValidationValidator(),
        ComponentPropsValidator(),
        AlertMessagesValidator(),
    ]


class ValidatorRegistry:
    """Maps each validation kind to exactly one validator.

    Usage:
        registry = ValidatorRegistry()
        outcome = registry.validate(ValidationInput("Submit", "jsx-text"))
        outcome.is_valid  # True
    """

    def __init__(self, validators: Optional[List[BaseValidator]] = None) -> None:
        """Initialize registry.

        Args:
            validators: Validators to bind. None seeds the seven defaults; an
                empty list leaves every kind unbound.
        """
        self._by_kind: Dict[ValidationKind, BaseValidator] = {}
        for validator in default_validators() if validators is None else validators:
            self.register(validator)

    def register(self, validator: BaseValidator) -> None:
        """Bind validator to its kind, replacing any previous binding.

        Raises:
            TypeError: If validator is not a BaseValidator instance.
        """
        if not isinstance(validator, BaseValidator):
            raise TypeError(f"Validator must be a BaseValidator instance, got {type(validator)}")

        previous = self._by_kind.get(validator.kind)
        if previous is not None and previous is not validator:
            logger.debug(
                f"Replacing validator '{previous.name}' for kind {validator.kind.value} "
                f"with '{validator.name}'"
            )
        self._by_kind[validator.kind] = validator

    def get_validator(self, name: str) -> Optional[BaseValidator]:
        for validator in self._by_kind.values():
            if validator.name == name:
                return validator
        return None

    def get_validator_for(self, kind: ValidationKind) -> Optional[BaseValidator]:
        return self._by_kind.get(kind)

    def get_all_validators(self) -> List[BaseValidator]:
        """Bound validators in ValidationKind order."""
        return [self._by_kind[kind] for kind in ValidationKind if kind in self._by_kind]

    def validate(self, candidate: ValidationInput) -> ValidationOutcome:
        """Classify one candidate string."""
        try:
            kind = ValidationKind(candidate.kind)
        except ValueError:
            return ValidationOutcome(False, UNKNOWN_VALIDATOR, candidate.kind, UNKNOWN_REASON)

        validator = self.get_validator_for(kind)
        if validator is None:
            return ValidationOutcome(False, NOT_FOUND_VALIDATOR, kind.value, NOT_FOUND_REASON)

        context = ValidatorContext(
            text=candidate.text,
            **{name: candidate.context.get(name) for name in _CONTEXT_FIELDS[kind]},
        )
        result = validator.validate(context)
        return ValidationOutcome(result.is_valid, validator.name, kind.value, result.reason)

    def get_summary(self) -> List[Dict[str, str]]:
        return [validator.to_dict() for validator in self.get_all_validators()]
