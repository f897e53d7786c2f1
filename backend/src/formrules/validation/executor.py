"""Execution of a field's assigned rules against its current value."""

import logging
from collections.abc import Sequence

from formrules.validation.registry import RuleRegistry
from formrules.validation.types import RuleSpecifier

logger = logging.getLogger(__name__)


def validate_value(
    field_name: str,
    value: str | None,
    rules: Sequence[RuleSpecifier],
    registry: RuleRegistry,
) -> tuple[str, ...]:
    """Run every assigned rule against a value.

    Rules are evaluated in assignment order and all of them run; every
    failing rule contributes its message.

    Args:
        field_name: Field being validated, passed to message functions
        value: Current field value (None is treated as an empty string)
        rules: Ordered specifiers assigned to the field
        registry: Registry to look rule definitions up in

    Returns:
        Error messages of failing rules, in assignment order. Empty if valid.

    Raises:
        UnknownRuleError: If a specifier names an unregistered rule
    """
    if value is None:
        value = ""

    messages: list[str] = []

    for spec in rules:
        rule = registry.get(spec.name, field_name)

        if rule.takes_argument:
            passed = rule.test(spec.argument)(value)
        else:
            passed = rule.test(value)

        logger.debug(
            "Rule '%s' on field '%s': %s", spec, field_name, "pass" if passed else "fail"
        )
        if passed:
            continue

        if rule.takes_argument:
            messages.append(rule.message(spec.argument)(field_name))
        else:
            messages.append(rule.message(field_name))

    return tuple(messages)
