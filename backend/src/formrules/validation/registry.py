"""Rule registry for formrules.

Holds the mapping from rule name to rule definition. A registry starts from
the built-in rules and layers caller-supplied custom rules on top:
- A custom rule with a new name adds a rule (test and message both required)
- A custom rule with an existing name replaces only the parts it supplies
"""

import logging
from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any

from formrules.validation.builtins import BUILTIN_RULES
from formrules.validation.errors import ConfigurationError, UnknownRuleError
from formrules.validation.types import (
    ArgumentlessRule,
    ArgumentRule,
    RuleDefinition,
    RuleOverride,
)

logger = logging.getLogger(__name__)


class RuleRegistry:
    """Immutable lookup of rule definitions by name.

    Use build_registry() to construct one with custom rules applied.

    Example:
        registry = build_registry({
            "required": {"message": lambda field: f"Please fill in {field}"},
        })
        rule = registry.get("required")
    """

    def __init__(self, rules: Mapping[str, RuleDefinition]):
        self._rules: Mapping[str, RuleDefinition] = MappingProxyType(dict(rules))

    def get(self, name: str, field_name: str | None = None) -> RuleDefinition:
        """Get a rule definition by name.

        Args:
            name: The rule name
            field_name: Field being validated, reported on lookup failure

        Returns:
            The rule definition

        Raises:
            UnknownRuleError: If no rule is registered under this name
        """
        try:
            return self._rules[name]
        except KeyError:
            raise UnknownRuleError(name, field_name) from None

    def names(self) -> list[str]:
        """List all registered rule names."""
        return sorted(self._rules.keys())

    def __contains__(self, name: object) -> bool:
        return name in self._rules

    def __iter__(self) -> Iterator[str]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return f"RuleRegistry({', '.join(self.names())})"


def _merge_override(name: str, existing: RuleDefinition, override: RuleOverride) -> RuleDefinition:
    """Replace the supplied halves of an existing rule definition."""
    if override.takes_argument is not None and override.takes_argument != existing.takes_argument:
        raise ConfigurationError(
            f"Custom rule '{name}' cannot change whether the rule takes an argument."
        )
    test = override.test if override.test is not None else existing.test
    message = override.message if override.message is not None else existing.message
    return type(existing)(test=test, message=message)


def _new_rule(name: str, override: RuleOverride) -> RuleDefinition:
    """Create a definition for a rule name that is not yet registered."""
    if override.test is None:
        raise ConfigurationError(
            f"Custom rule '{name}' must define a test function."
        )
    if override.message is None:
        raise ConfigurationError(
            f"Custom rule '{name}' must define a message function."
        )
    if override.takes_argument:
        return ArgumentRule(test=override.test, message=override.message)
    return ArgumentlessRule(test=override.test, message=override.message)


def build_registry(custom_rules: Mapping[str, Any] | None = None) -> RuleRegistry:
    """Build a registry from the built-in rules plus custom rules.

    Args:
        custom_rules: Mapping of rule name to RuleOverride, complete rule
            definition, or a dict with "test"/"message"/"takes_argument" keys

    Returns:
        A new RuleRegistry

    Raises:
        ConfigurationError: If a new rule lacks its test or message, or an
            override changes a rule's argument-taking kind
    """
    rules: dict[str, RuleDefinition] = dict(BUILTIN_RULES)

    for name, value in (custom_rules or {}).items():
        try:
            override = RuleOverride.from_value(value)
        except TypeError as e:
            raise ConfigurationError(f"Custom rule '{name}': {e}") from e

        if name in rules:
            rules[name] = _merge_override(name, rules[name], override)
            logger.debug("Overrode rule '%s'", name)
        else:
            rules[name] = _new_rule(name, override)
            logger.debug("Registered custom rule '%s'", name)

    return RuleRegistry(rules)
