# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Tests for translation-string validators and the validator registry."""

import pytest

from nextscope.validators import (
    AlertMessagesValidator,
    BaseValidator,
    ComponentPropsValidator,
    FormValidationValidator,
    JsxAttributesValidator,
    JsxTextContentValidator,
    ObjectPropertiesValidator,
    UserMessageVariablesValidator,
    ValidationInput,
    ValidationKind,
    ValidationResult,
    ValidatorContext,
    ValidatorRegistry,
    basic_text_validation,
    generate_translation_key,
)
from nextscope.validators.base import BASELINE_REJECTION


class TestBaseline:
    def test_basic_text_validation(self):
        assert basic_text_validation("Submit")
        assert not basic_text_validation("")
        assert not basic_text_validation(None)
        assert not basic_text_validation("123 - 456")

    def test_every_validator_applies_baseline(self):
        for validator in ValidatorRegistry().get_all_validators():
            result = validator.validate(ValidatorContext(text="42", attribute_name="title"))
            assert result == ValidationResult(False, BASELINE_REJECTION)

    def test_generate_translation_key(self):
        assert generate_translation_key("Save changes!") == "save_changes"
        assert generate_translation_key("  Hello,   World ") == "_hello_world_"
        assert len(generate_translation_key("word " * 30)) == 50


class TestValidators:
    def test_jsx_text_always_valid(self):
        assert JsxTextContentValidator().validate(ValidatorContext("Submit")).is_valid

    def test_jsx_attributes_whitelist(self):
        validator = JsxAttributesValidator()

        assert validator.validate(ValidatorContext("Company logo", attribute_name="alt")).is_valid
        rejected = validator.validate(ValidatorContext("btn-primary", attribute_name="className"))
        assert not rejected.is_valid
        assert rejected.reason == 'Attribute "className" is not user-facing'
        assert validator.validate(ValidatorContext("x y z")).reason == "No attribute name provided"

    def test_user_message_variables(self):
        validator = UserMessageVariablesValidator()

        assert validator.validate(ValidatorContext("Saved!", variable_name="successMessage")).is_valid
        assert not validator.validate(ValidatorContext("primary", variable_name="variant")).is_valid

    def test_object_properties(self):
        validator = ObjectPropertiesValidator()

        assert validator.validate(ValidatorContext("Hello", property_name="title")).is_valid
        assert not validator.validate(ValidatorContext("GET", property_name="method")).is_valid

    def test_form_validation_any_signal(self):
        validator = FormValidationValidator()

        assert validator.validate(ValidatorContext("Nope", property_name="required")).is_valid
        assert validator.validate(ValidatorContext("Nope", variable_name="emailError")).is_valid
        assert validator.validate(ValidatorContext("Must be at least 8 characters")).is_valid
        result = validator.validate(ValidatorContext("primary", property_name="variant"))
        assert result == ValidationResult(False, "Not a validation message")

    def test_component_props(self):
        validator = ComponentPropsValidator()

        assert validator.validate(
            ValidatorContext("Are you sure?", attribute_name="confirmText")
        ).is_valid
        assert not validator.validate(ValidatorContext("center", attribute_name="title")).is_valid
        assert not validator.validate(
            ValidatorContext("Are you sure?", attribute_name="variant")
        ).is_valid
        assert not validator.validate(ValidatorContext("/home/docs", attribute_name="title")).is_valid

    def test_alert_messages(self):
        validator = AlertMessagesValidator()

        assert validator.validate(
            ValidatorContext("Please save your work", function_name="alert")
        ).is_valid
        developer = validator.validate(ValidatorContext("Render done", function_name="console.log"))
        assert not developer.is_valid
        assert developer.reason == 'Developer function "console.log" should not be translated'
        assert not validator.validate(ValidatorContext("Hello there", function_name="fetch")).is_valid
        assert not validator.validate(ValidatorContext("OK", function_name="confirm")).is_valid


class TestRegistry:
    def test_default_bindings(self):
        registry = ValidatorRegistry()

        assert [v.kind for v in registry.get_all_validators()] == list(ValidationKind)
        assert registry.get_validator("component-props").kind is ValidationKind.COMPONENT_PROP
        assert registry.get_validator("missing") is None
        assert registry.get_validator_for(ValidationKind.ALERT_MESSAGE).name == "alert-messages"
        assert ValidatorRegistry([]).get_validator_for(ValidationKind.JSX_TEXT) is None

    def test_jsx_text_submit_is_valid(self):
        outcome = ValidatorRegistry().validate(ValidationInput("Submit", "jsx-text"))

        assert outcome.is_valid
        assert outcome.validator_name == "jsx-text-content"
        assert outcome.kind == "jsx-text"

    def test_classname_attribute_is_invalid(self):
        outcome = ValidatorRegistry().validate(
            ValidationInput("btn-primary", "jsx-attribute", {"attribute_name": "className"})
        )

        assert not outcome.is_valid
        assert outcome.validator_name == "jsx-attributes"

    def test_unknown_kind(self):
        outcome = ValidatorRegistry().validate(ValidationInput("Hello", "unknown-x"))

        assert not outcome.is_valid
        assert outcome.validator_name == "unknown"
        assert outcome.reason == "unknown type"
        assert outcome.to_dict() == {
            "is_valid": False,
            "validator": "unknown",
            "kind": "unknown-x",
            "reason": "unknown type",
        }

    def test_unbound_kind_reports_not_found(self):
        registry = ValidatorRegistry(validators=[])
        outcome = registry.validate(ValidationInput("Submit", "jsx-text"))

        assert not outcome.is_valid
        assert outcome.validator_name == "not-found"
        assert outcome.reason == "not found"

    def test_context_is_filtered_per_kind(self):
        """Only the names a kind uses reach its validator."""
        registry = ValidatorRegistry()
        outcome = registry.validate(
            ValidationInput("Hello", "object-property", {"attribute_name": "title"})
        )

        assert outcome.reason == "No property name provided"

    def test_register_rebinds_kind(self):
        class AcceptAllAttributes(BaseValidator):
            name = "accept-all"
            kind = ValidationKind.JSX_ATTRIBUTE

            def check(self, context):
                return ValidationResult(True)

        registry = ValidatorRegistry()
        registry.register(AcceptAllAttributes())
        outcome = registry.validate(
            ValidationInput("btn-primary", "jsx-attribute", {"attribute_name": "className"})
        )

        assert outcome.is_valid
        assert outcome.validator_name == "accept-all"
        assert registry.get_validator("jsx-attributes") is None
        assert len(registry.get_all_validators()) == 7

    def test_register_rejects_non_validators(self):
        with pytest.raises(TypeError):
            ValidatorRegistry().register(object())

    def test_summary(self):
        summary = ValidatorRegistry().get_summary()

        assert summary[0] == {
            "name": "jsx-text-content",
            "description": "JSX Text Content - Always translate direct text within JSX elements",
            "priority": "high",
            "kind": "jsx-text",
        }
