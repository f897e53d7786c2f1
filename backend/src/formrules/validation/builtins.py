"""Built-in rules: required, email, min and max.

Length rules take their bound from the specifier argument (``min:3``).
An argument that is not an integer can never be satisfied, so the rule
fails closed instead of raising.
"""

import re

from formrules.validation.types import ArgumentlessRule, ArgumentRule, RuleDefinition

# Email: Basic RFC 5322 compliant pattern
EMAIL_PATTERN = re.compile(
    r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"
)


def _parse_bound(argument: str | None) -> int | None:
    """Parse a length bound, returning None when it is not an integer."""
    if argument is None:
        return None
    try:
        return int(argument.strip())
    except ValueError:
        return None


# =============================================================================
# required
# =============================================================================


def _required_test(value: str) -> bool:
    return value.strip() != ""


def _required_message(field_name: str) -> str:
    return f"{field_name} is required"


# =============================================================================
# email
# =============================================================================


def _email_test(value: str) -> bool:
    return EMAIL_PATTERN.match(value) is not None


def _email_message(field_name: str) -> str:
    return f"{field_name} must be a valid email address"


# =============================================================================
# min / max
# =============================================================================


def _min_test(argument: str | None):
    bound = _parse_bound(argument)

    def test(value: str) -> bool:
        return bound is not None and len(value) >= bound

    return test


def _min_message(argument: str | None):
    def message(field_name: str) -> str:
        return f"{field_name} must be at least {argument} characters"

    return message


def _max_test(argument: str | None):
    bound = _parse_bound(argument)

    def test(value: str) -> bool:
        return bound is not None and len(value) <= bound

    return test


def _max_message(argument: str | None):
    def message(field_name: str) -> str:
        return f"{field_name} must be at most {argument} characters"

    return message


REQUIRED = ArgumentlessRule(test=_required_test, message=_required_message)
EMAIL = ArgumentlessRule(test=_email_test, message=_email_message)
MIN_LENGTH = ArgumentRule(test=_min_test, message=_min_message)
MAX_LENGTH = ArgumentRule(test=_max_test, message=_max_message)

BUILTIN_RULES: dict[str, RuleDefinition] = {
    "required": REQUIRED,
    "email": EMAIL,
    "min": MIN_LENGTH,
    "max": MAX_LENGTH,
}
