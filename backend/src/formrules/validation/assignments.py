"""Resolution of which rules apply to which field.

Two sources feed the resolved assignment:
- Implicit: derived from each field's descriptive attributes
- Explicit: the caller's ``validations`` configuration

An explicit entry replaces the implicit entry for that field as a whole,
even when it is empty.
"""

import logging
from collections.abc import Iterable, Mapping, Sequence

from formrules.validation.specifiers import parse_specifier, parse_specifiers
from formrules.validation.types import FieldDescriptor, RuleSpecifier

logger = logging.getLogger(__name__)

FieldAssignment = dict[str, tuple[RuleSpecifier, ...]]


def _format_bound(value: int | float | str) -> str:
    """Render a numeric attribute as a specifier argument."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def specifiers_for(descriptor: FieldDescriptor) -> tuple[RuleSpecifier, ...]:
    """Derive specifiers from one field's attributes.

    Order is fixed: required, email, min, max.
    """
    specifiers: list[RuleSpecifier] = []

    if descriptor.required:
        specifiers.append(RuleSpecifier("required"))

    if descriptor.type_hint == "email":
        specifiers.append(RuleSpecifier("email"))

    if descriptor.min is not None:
        specifiers.append(RuleSpecifier("min", _format_bound(descriptor.min)))

    if descriptor.max is not None:
        specifiers.append(RuleSpecifier("max", _format_bound(descriptor.max)))

    return tuple(specifiers)


def derive_implicit_assignment(descriptors: Iterable[FieldDescriptor]) -> FieldAssignment:
    """Build the implicit assignment for a set of scanned fields.

    Fields are processed in scan order. When a name is seen twice the later
    descriptor wins, keeping the field's original position.
    """
    assignment: FieldAssignment = {}
    for descriptor in descriptors:
        if descriptor.name in assignment:
            logger.warning(
                "Field '%s' described more than once; using the last description",
                descriptor.name,
            )
        assignment[descriptor.name] = specifiers_for(descriptor)
    return assignment


def parse_assignment(validations: Mapping[str, Sequence[str] | str] | None) -> FieldAssignment:
    """Parse a ``validations`` config of specifier strings.

    Example:
        parse_assignment({"email": ["required", "email"], "bio": "max:200"})
    """
    assignment: FieldAssignment = {}
    for field_name, raw in (validations or {}).items():
        if isinstance(raw, str):
            assignment[field_name] = (parse_specifier(raw),)
        else:
            assignment[field_name] = parse_specifiers(raw)
    return assignment


def resolve_assignments(
    explicit: Mapping[str, Sequence[RuleSpecifier]],
    implicit: Mapping[str, Sequence[RuleSpecifier]],
) -> FieldAssignment:
    """Merge explicit and implicit assignments, explicit winning per field.

    Fields keep implicit scan order, followed by explicit-only fields in
    config order.
    """
    resolved: FieldAssignment = {}

    for field_name, specifiers in implicit.items():
        if field_name in explicit:
            resolved[field_name] = tuple(explicit[field_name])
        else:
            resolved[field_name] = tuple(specifiers)

    for field_name, specifiers in explicit.items():
        if field_name not in resolved:
            resolved[field_name] = tuple(specifiers)

    return resolved
