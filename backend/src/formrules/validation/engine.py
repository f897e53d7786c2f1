"""Host-facing validation engine.

FormValidator ties the components together for one form:

    validator = FormValidator(
        fields=[FieldDescriptor("username", required=True, min=3)],
        validations={"nickname": ["max:12"]},
        rules={"required": {"message": lambda field: f"Please enter {field}"}},
    )
    validator.validate("username", "al")
    # ("username must be at least 3 characters",)
    validator.all_valid
    # False

The registry and resolved assignment are computed at construction and
only recomputed when the field set or the explicit validations change.
"""

import logging
import threading
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from formrules.validation.assignments import (
    FieldAssignment,
    derive_implicit_assignment,
    parse_assignment,
    resolve_assignments,
)
from formrules.validation.executor import validate_value
from formrules.validation.registry import RuleRegistry, build_registry
from formrules.validation.specifiers import format_specifiers
from formrules.validation.state import (
    AggregateState,
    FieldErrorState,
    all_valid,
    apply_result,
    discard_fields,
    error_count,
)
from formrules.validation.types import FieldDescriptor, RuleSpecifier

logger = logging.getLogger(__name__)


class FormValidator:
    """Validates the fields of one form and tracks form-wide state.

    Args:
        fields: Field descriptors scanned from the host, in display order
        validations: Explicit assignment of specifier strings per field;
            an entry replaces the field's implicit rules entirely
        rules: Custom rules to add to, or override, the built-in rules

    Raises:
        ConfigurationError: If the custom rules cannot be registered
    """

    def __init__(
        self,
        fields: Iterable[FieldDescriptor] = (),
        validations: Mapping[str, Sequence[str] | str] | None = None,
        rules: Mapping[str, Any] | None = None,
    ):
        self._registry = build_registry(rules)
        self._lock = threading.Lock()
        self._fields: tuple[FieldDescriptor, ...] = tuple(fields)
        self._explicit = parse_assignment(validations)
        self._assignments = self._resolve()
        self._state = FieldErrorState()

    # -------------------------------------------------------------------------
    # Configuration
    # -------------------------------------------------------------------------

    def _resolve(self) -> FieldAssignment:
        implicit = derive_implicit_assignment(self._fields)
        resolved = resolve_assignments(self._explicit, implicit)
        logger.debug("Resolved rules for %d field(s)", len(resolved))
        return resolved

    def _reassign(self) -> None:
        """Recompute assignments and drop state of fields no longer present."""
        self._assignments = self._resolve()
        stale = [name for name in self._state if name not in self._assignments]
        if stale:
            self._state = discard_fields(self._state, stale)

    def update_fields(self, fields: Iterable[FieldDescriptor]) -> None:
        """Replace the scanned field set and recompute assignments."""
        with self._lock:
            self._fields = tuple(fields)
            self._reassign()

    def update_validations(self, validations: Mapping[str, Sequence[str] | str] | None) -> None:
        """Replace the explicit validations and recompute assignments."""
        with self._lock:
            self._explicit = parse_assignment(validations)
            self._reassign()

    @property
    def registry(self) -> RuleRegistry:
        return self._registry

    @property
    def assignments(self) -> dict[str, tuple[RuleSpecifier, ...]]:
        """The resolved rules per field."""
        return dict(self._assignments)

    @property
    def validations(self) -> dict[str, list[str]]:
        """The resolved rules per field, as specifier strings."""
        return {name: format_specifiers(specs) for name, specs in self._assignments.items()}

    def rules_for(self, field_name: str) -> tuple[RuleSpecifier, ...]:
        """Rules assigned to a field; empty for unassigned fields."""
        return self._assignments.get(field_name, ())

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def validate(self, field_name: str, value: str | None) -> tuple[str, ...]:
        """Validate one field's current value and record the result.

        This is the entry point a host wires to its trigger (blur, change...).
        Only this field's recorded messages change. A field with no assigned
        rules is recorded as valid; that record is dropped when update_fields()
        or update_validations() leaves the field unassigned.

        Returns:
            The field's error messages, empty if the value is valid

        Raises:
            UnknownRuleError: If the field is assigned an unregistered rule
        """
        with self._lock:
            messages = validate_value(
                field_name, value, self.rules_for(field_name), self._registry
            )
            self._state = apply_result(self._state, field_name, messages)
        return messages

    def validate_all(self, values: Mapping[str, str | None]) -> AggregateState:
        """Validate every field in ``values`` and return the resulting state."""
        for field_name, value in values.items():
            self.validate(field_name, value)
        return self.state

    def reset(self) -> None:
        """Forget all recorded results; the form is no longer assessed."""
        with self._lock:
            self._state = FieldErrorState()

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    def _expected_fields(self) -> list[str]:
        return [name for name, specs in self._assignments.items() if specs]

    @property
    def state(self) -> AggregateState:
        """A consistent snapshot of messages, error count and validity."""
        with self._lock:
            return AggregateState.from_state(self._state, self._expected_fields())

    @property
    def error_messages(self) -> FieldErrorState:
        return self._state

    @property
    def error_count(self) -> int:
        return error_count(self._state)

    @property
    def all_valid(self) -> bool:
        with self._lock:
            return all_valid(self._state, self._expected_fields())
