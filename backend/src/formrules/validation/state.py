"""Form-wide error state.

FieldErrorState records, per field, the messages of its latest validation.
A field missing from the state has never been validated, which is distinct
from a field that was validated and produced no messages.

Derived values (error count, overall validity) are computed from the state
on demand rather than stored alongside it.
"""

from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any


class FieldErrorState(Mapping[str, tuple[str, ...]]):
    """Immutable mapping of field name to its current error messages."""

    __slots__ = ("_entries",)

    def __init__(self, entries: Mapping[str, Sequence[str]] | None = None):
        self._entries = MappingProxyType(
            {name: tuple(messages) for name, messages in (entries or {}).items()}
        )

    def __getitem__(self, field_name: str) -> tuple[str, ...]:
        return self._entries[field_name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"FieldErrorState({dict(self._entries)!r})"


def apply_result(
    state: FieldErrorState,
    field_name: str,
    messages: Sequence[str],
) -> FieldErrorState:
    """Return a new state with one field's messages replaced.

    All other entries are carried over unchanged.
    """
    entries = dict(state)
    entries[field_name] = tuple(messages)
    return FieldErrorState(entries)


def discard_fields(state: FieldErrorState, field_names: Iterable[str]) -> FieldErrorState:
    """Return a new state without the given fields."""
    dropped = set(field_names)
    return FieldErrorState(
        {name: messages for name, messages in state.items() if name not in dropped}
    )


def error_count(state: Mapping[str, Sequence[str]]) -> int:
    """Total number of error messages across all fields."""
    return sum(len(messages) for messages in state.values())


def all_valid(
    state: Mapping[str, Sequence[str]],
    expected_fields: Iterable[str] = (),
) -> bool:
    """Whether the form has been assessed and found free of errors.

    True only if at least one field has been validated, every validated
    field has zero messages, and every name in ``expected_fields`` has been
    validated at least once.
    """
    if not state:
        return False
    if any(messages for messages in state.values()):
        return False
    return all(name in state for name in expected_fields)


@dataclass(frozen=True)
class AggregateState:
    """Snapshot of the form-wide validation state exposed to hosts.

    Attributes:
        error_messages: Field name to ordered error messages
        error_count: Total number of messages across all fields
        all_valid: True once the form has been assessed with no errors
    """

    error_messages: FieldErrorState
    error_count: int
    all_valid: bool

    @classmethod
    def from_state(
        cls,
        state: FieldErrorState,
        expected_fields: Iterable[str] = (),
    ) -> "AggregateState":
        return cls(
            error_messages=state,
            error_count=error_count(state),
            all_valid=all_valid(state, expected_fields),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "errorMessages": {name: list(messages) for name, messages in self.error_messages.items()},
            "errorCount": self.error_count,
            "allValid": self.all_valid,
        }
