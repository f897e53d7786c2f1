"""formrules: declarative field validation.

Example:
    from formrules import FieldDescriptor, FormValidator

    validator = FormValidator(
        fields=[FieldDescriptor("username", required=True, min=3)],
    )
    validator.validate("username", "al")
    print(validator.state.to_dict())
"""

from formrules.validation import (
    AggregateState,
    ConfigurationError,
    FieldDescriptor,
    FormRulesError,
    FormValidator,
    RuleOverride,
    RuleSpecifier,
    UnknownRuleError,
    build_registry,
    parse_specifier,
)

__version__ = "0.1.0"
__all__ = [
    "AggregateState",
    "ConfigurationError",
    "FieldDescriptor",
    "FormRulesError",
    "FormValidator",
    "RuleOverride",
    "RuleSpecifier",
    "UnknownRuleError",
    "build_registry",
    "parse_specifier",
]
