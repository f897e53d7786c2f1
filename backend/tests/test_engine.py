"""Tests for FormValidator, the host-facing engine."""

import threading

import pytest

from formrules.validation.builtins import BUILTIN_RULES
from formrules.validation.engine import FormValidator
from formrules.validation.errors import ConfigurationError, UnknownRuleError
from formrules.validation.types import FieldDescriptor


# =============================================================================
# Base state
# =============================================================================


class TestBaseState:
    @pytest.mark.parametrize(
        "kwargs",
        [
            {},
            {"validations": {"test": ["required"]}},
            {"fields": [FieldDescriptor("test", required=True, min=3)]},
        ],
    )
    def test_fresh_engine_is_not_assessed(self, kwargs):
        validator = FormValidator(**kwargs)
        assert validator.error_count == 0
        assert validator.all_valid is False
        assert dict(validator.error_messages) == {}

    def test_state_snapshot(self):
        state = FormValidator().state
        assert state.to_dict() == {"errorMessages": {}, "errorCount": 0, "allValid": False}


# =============================================================================
# Assignments
# =============================================================================


class TestAssignValidations:
    def test_accepts_explicit_validations(self):
        validations = {"test": ["required"]}
        assert FormValidator(validations=validations).validations == validations

    def test_pulls_validations_from_fields(self):
        validator = FormValidator(fields=[FieldDescriptor("test", required=True, min="3")])
        assert validator.validations == {"test": ["required", "min:3"]}

    def test_explicit_overrides_implicit(self):
        validator = FormValidator(
            fields=[FieldDescriptor("test", min=3)],
            validations={"test": ["required"]},
        )
        assert validator.validations == {"test": ["required"]}

    def test_several_fields(self):
        validator = FormValidator(fields=[
            FieldDescriptor("test", min=5, required=True),
            FieldDescriptor("test2", min=2, type_hint="email", required=True),
        ])
        assert validator.validations == {
            "test": ["required", "min:5"],
            "test2": ["required", "email", "min:2"],
        }

    def test_custom_rule_assignment(self):
        validator = FormValidator(
            fields=[FieldDescriptor("test")],
            validations={"test": ["customRule"]},
            rules={"customRule": {"test": lambda v: True, "message": lambda f: ""}},
        )
        assert validator.validations == {"test": ["customRule"]}

    def test_explicit_override_not_checked_against_implicit_min(self):
        validator = FormValidator(
            fields=[FieldDescriptor("test", required=True, min=3)],
            validations={"test": ["required"]},
        )
        assert validator.validate("test", "ab") == ()

    def test_update_fields_recomputes(self):
        validator = FormValidator(fields=[FieldDescriptor("a", required=True)])
        validator.validate("a", "")
        validator.update_fields([FieldDescriptor("b", max=2)])
        assert validator.validations == {"b": ["max:2"]}
        assert "a" not in validator.error_messages

    def test_update_validations_recomputes(self):
        validator = FormValidator(fields=[FieldDescriptor("a", required=True)])
        validator.update_validations({"a": []})
        assert validator.validations == {"a": []}
        assert validator.validate("a", "") == ()

    def test_update_drops_unassigned_field_record(self):
        validator = FormValidator(validations={"a": ["required"]})
        validator.validate("extra", "")
        validator.validate("a", "x")
        assert "extra" in validator.error_messages
        validator.update_validations({"a": ["required"]})
        assert "extra" not in validator.error_messages
        assert validator.error_messages == {"a": ()}

    def test_invalid_custom_rule_fails_construction(self):
        with pytest.raises(ConfigurationError):
            FormValidator(rules={"customRule": {"message": lambda f: "x"}})


# =============================================================================
# Input validation
# =============================================================================


class TestInputValidation:
    def test_counts_errors(self):
        validator = FormValidator(fields=[FieldDescriptor("test", min=5)])
        validator.validate("test", "test")
        assert validator.error_count == 1
        assert validator.error_messages["test"]
        assert validator.all_valid is False

    def test_all_valid_when_no_errors(self):
        validator = FormValidator(validations={"test": ["required", "min:4"]})
        validator.validate("test", "test")
        assert validator.all_valid is True

    def test_required_message(self):
        validator = FormValidator(validations={"test": ["required"]})
        assert validator.validate("test", "") == (BUILTIN_RULES["required"].message("test"),)
        assert validator.error_messages["test"] == ("test is required",)
        assert validator.validate("test", "filled") == ()

    def test_argument_rule_message(self):
        validator = FormValidator(validations={"test": ["min:3"]})
        validator.validate("test", "")
        assert validator.error_messages["test"] == (BUILTIN_RULES["min"].message("3")("test"),)

    def test_fields_are_independent(self):
        validator = FormValidator(validations={"a": ["required"], "b": ["required"]})
        validator.validate("b", "value")
        b_before = validator.error_messages["b"]
        validator.validate("a", "")
        assert validator.error_messages["b"] == b_before == ()
        assert validator.error_messages["a"] == ("a is required",)

    def test_all_valid_needs_every_assigned_field(self):
        validator = FormValidator(validations={"a": ["required"], "b": ["required"]})
        validator.validate("a", "x")
        assert validator.all_valid is False
        validator.validate("b", "y")
        assert validator.all_valid is True
        validator.validate("a", "")
        assert validator.all_valid is False
        assert validator.error_count == 1

    def test_zero_rule_field_is_trivially_valid(self):
        validator = FormValidator(validations={"notes": []})
        assert validator.validate("notes", "") == ()
        assert validator.all_valid is True

    def test_zero_rule_field_does_not_block_validity(self):
        validator = FormValidator(validations={"notes": [], "name": ["required"]})
        validator.validate("name", "Ada")
        assert validator.all_valid is True

    def test_unassigned_field_is_recorded_valid(self):
        validator = FormValidator()
        assert validator.validate("anything", "") == ()
        assert validator.error_messages == {"anything": ()}

    def test_unknown_rule_surfaces(self):
        validator = FormValidator(validations={"test": ["missing"]})
        with pytest.raises(UnknownRuleError):
            validator.validate("test", "value")
        assert "test" not in validator.error_messages

    def test_unknown_rule_not_checked_until_used(self):
        validator = FormValidator(validations={"a": ["missing"], "b": ["required"]})
        assert validator.validate("b", "x") == ()

    def test_validate_all(self):
        validator = FormValidator(fields=[
            FieldDescriptor("name", required=True),
            FieldDescriptor("email", required=True, type_hint="email"),
        ])
        state = validator.validate_all({"name": "Ada", "email": "ada@"})
        assert state.error_count == 1
        assert state.error_messages["email"] == ("email must be a valid email address",)
        assert state.all_valid is False

    def test_reset(self):
        validator = FormValidator(validations={"a": ["required"]})
        validator.validate("a", "x")
        validator.reset()
        assert validator.all_valid is False
        assert validator.error_count == 0


# =============================================================================
# Custom rules
# =============================================================================


class TestCustomRules:
    def test_overridden_required_message(self):
        validator = FormValidator(
            validations={"test": ["required"]},
            rules={"required": {"message": lambda field: "Some Custom Message"}},
        )
        assert validator.validate("test", "") == ("Some Custom Message",)
        assert validator.validate("test", "x") == ()

    def test_custom_rule_against_values(self):
        rules = {
            "customRuleName": {
                "test": lambda value: "cool" in value,
                "message": lambda field: "Must contain required value",
            }
        }
        valid = FormValidator(validations={"test": ["customRuleName"]}, rules=rules)
        invalid = FormValidator(validations={"test": ["customRuleName"]}, rules=rules)
        valid.validate("test", "cool")
        invalid.validate("test", "not valid")
        assert valid.error_messages["test"] == ()
        assert invalid.error_messages["test"] == ("Must contain required value",)


# =============================================================================
# Concurrency
# =============================================================================


class TestConcurrentTriggers:
    def test_parallel_triggers_record_every_field(self):
        names = [f"field{i}" for i in range(50)]
        validator = FormValidator(validations={name: ["required"] for name in names})

        threads = [
            threading.Thread(target=validator.validate, args=(name, "" if i % 2 else "x"))
            for i, name in enumerate(names)
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        state = validator.state
        assert len(state.error_messages) == 50
        assert state.error_count == 25
        assert state.all_valid is False
