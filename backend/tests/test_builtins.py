"""Tests for the built-in rules."""

import pytest

from formrules.validation.builtins import (
    BUILTIN_RULES,
    EMAIL_PATTERN,
    EMAIL,
    MAX_LENGTH,
    MIN_LENGTH,
    REQUIRED,
)


class TestRequired:
    def test_non_empty_value_passes(self):
        assert REQUIRED.test("some value") is True

    def test_empty_value_fails(self):
        assert REQUIRED.test("") is False

    def test_whitespace_only_fails(self):
        assert REQUIRED.test("   \t") is False

    def test_message_names_field(self):
        assert REQUIRED.message("username") == "username is required"


class TestEmail:
    def test_valid_email_passes(self):
        assert EMAIL.test("email@email.com") is True

    def test_empty_value_fails(self):
        assert EMAIL.test("") is False

    @pytest.mark.parametrize(
        "value",
        ["not-an-email", "@example.com", "user@", "user@.com", "user name@example.com"],
    )
    def test_invalid_emails_fail(self, value):
        assert EMAIL.test(value) is False

    def test_pattern_accepts_tags_and_subdomains(self):
        assert EMAIL_PATTERN.match("user+tag@mail.example.co.uk")


class TestLengthRules:
    def test_min_length(self):
        assert MIN_LENGTH.test("3")("abcd") is True
        assert MIN_LENGTH.test("3")("abc") is True
        assert MIN_LENGTH.test("3")("ab") is False

    def test_max_length(self):
        assert MAX_LENGTH.test("5")("abcd") is True
        assert MAX_LENGTH.test("5")("abcde") is True
        assert MAX_LENGTH.test("5")("abcdefg") is False

    @pytest.mark.parametrize("argument", ["abc", "", "2.5", None])
    def test_non_numeric_bound_fails_closed(self, argument):
        assert MIN_LENGTH.test(argument)("anything") is False
        assert MAX_LENGTH.test(argument)("") is False

    def test_messages_include_bound(self):
        assert MIN_LENGTH.message("3")("name") == "name must be at least 3 characters"
        assert MAX_LENGTH.message("8")("name") == "name must be at most 8 characters"


class TestBuiltinTable:
    def test_contains_four_rules(self):
        assert set(BUILTIN_RULES) == {"required", "email", "min", "max"}

    def test_argument_kinds(self):
        assert BUILTIN_RULES["required"].takes_argument is False
        assert BUILTIN_RULES["email"].takes_argument is False
        assert BUILTIN_RULES["min"].takes_argument is True
        assert BUILTIN_RULES["max"].takes_argument is True
