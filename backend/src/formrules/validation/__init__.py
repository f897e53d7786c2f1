"""formrules validation engine.

Components:
- Rule registry: built-in rules plus caller overrides
- Specifier parser: "name" / "name:argument" strings
- Assignment resolver: implicit attributes merged with explicit config
- Executor: runs a field's rules against its value
- Aggregate state: per-field messages, error count, overall validity

Usage:
    from formrules.validation import FieldDescriptor, FormValidator

    validator = FormValidator(fields=[FieldDescriptor("email", required=True, type_hint="email")])
    validator.validate("email", "not-an-email")
"""

from formrules.validation.assignments import (
    FieldAssignment,
    derive_implicit_assignment,
    parse_assignment,
    resolve_assignments,
    specifiers_for,
)
from formrules.validation.builtins import BUILTIN_RULES, EMAIL_PATTERN
from formrules.validation.engine import FormValidator
from formrules.validation.errors import (
    ConfigurationError,
    FormRulesError,
    UnknownRuleError,
)
from formrules.validation.executor import validate_value
from formrules.validation.registry import RuleRegistry, build_registry
from formrules.validation.specifiers import (
    format_specifiers,
    parse_specifier,
    parse_specifiers,
)
from formrules.validation.state import (
    AggregateState,
    FieldErrorState,
    all_valid,
    apply_result,
    error_count,
)
from formrules.validation.types import (
    ArgumentlessRule,
    ArgumentRule,
    FieldDescriptor,
    RuleDefinition,
    RuleOverride,
    RuleSpecifier,
)

__all__ = [
    # Types
    "ArgumentlessRule",
    "ArgumentRule",
    "FieldDescriptor",
    "RuleDefinition",
    "RuleOverride",
    "RuleSpecifier",
    # Errors
    "ConfigurationError",
    "FormRulesError",
    "UnknownRuleError",
    # Registry
    "BUILTIN_RULES",
    "EMAIL_PATTERN",
    "RuleRegistry",
    "build_registry",
    # Specifiers
    "format_specifiers",
    "parse_specifier",
    "parse_specifiers",
    # Assignments
    "FieldAssignment",
    "derive_implicit_assignment",
    "parse_assignment",
    "resolve_assignments",
    "specifiers_for",
    # Execution and state
    "AggregateState",
    "FieldErrorState",
    "FormValidator",
    "all_valid",
    "apply_result",
    "error_count",
    "validate_value",
]
