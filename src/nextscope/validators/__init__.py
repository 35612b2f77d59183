# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Translation-string validators and their kind-based registry.

Components:
- BaseValidator: Abstract base class for validators
- ValidatorRegistry: Maps each ValidationKind to one validator

Default validators (kind -> validator):
- jsx-text -> jsx-text-content
- jsx-attribute -> jsx-attributes
- variable-declaration -> user-message-variables
- object-property -> object-properties
- form-validation -> form-validation
- component-prop -> component-props
- alert-message -> alert-messages
"""

from nextscope.validators.alert_messages import AlertMessagesValidator
from nextscope.validators.base import (
    BaseValidator,
    Priority,
    ValidationKind,
    ValidationResult,
    ValidatorContext,
    basic_text_validation,
    generate_translation_key,
)
from nextscope.validators.component_props import ComponentPropsValidator
from nextscope.validators.form_validation import FormValidationValidator
from nextscope.validators.jsx_attributes import JsxAttributesValidator
from nextscope.validators.jsx_text_content import JsxTextContentValidator
from nextscope.validators.object_properties import ObjectPropertiesValidator
from nextscope.validators.registry import ValidationInput, ValidationOutcome, ValidatorRegistry
from nextscope.validators.user_message_variables import UserMessageVariablesValidator

__all__ = [
    "AlertMessagesValidator",
    "BaseValidator",
    "ComponentPropsValidator",
    "FormValidationValidator",
    "JsxAttributesValidator",
    "JsxTextContentValidator",
    "ObjectPropertiesValidator",
    "Priority",
    "UserMessageVariablesValidator",
    "ValidationInput",
    "ValidationKind",
    "ValidationOutcome",
    "ValidationResult",
    "ValidatorContext",
    "ValidatorRegistry",
    "basic_text_validation",
    "generate_translation_key",
]
