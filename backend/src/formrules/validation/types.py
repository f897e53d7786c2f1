"""Core types for the formrules validation engine.

This module defines the values that flow between the engine components:
- RuleSpecifier: a parsed "name" or "name:argument" assignment
- FieldDescriptor: the host's declarative description of one field
- ArgumentlessRule / ArgumentRule: the two shapes of rule definition
- RuleOverride: a caller-supplied, possibly partial, rule definition
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

# Argumentless rule callables
ValueTest = Callable[[str], bool]
MessageFn = Callable[[str], str]

# Argument-taking rule callables, curried over the specifier argument
ArgumentTest = Callable[[str | None], ValueTest]
ArgumentMessage = Callable[[str | None], MessageFn]


@dataclass(frozen=True)
class RuleSpecifier:
    """A rule name with its optional string argument.

    Attributes:
        name: Rule name to look up in the registry (e.g. "min")
        argument: Raw argument text (e.g. "3"), or None when absent
    """

    name: str
    argument: str | None = None

    def __str__(self) -> str:
        if self.argument is None:
            return self.name
        return f"{self.name}:{self.argument}"


@dataclass(frozen=True)
class FieldDescriptor:
    """Declarative description of a field, produced by the hosting UI.

    Attributes:
        name: Field name, unique within the form
        required: Whether the field carries a "required" flag
        min: Minimum length attribute, if any
        max: Maximum length attribute, if any
        type_hint: Input type hint (e.g. "email", "text")
    """

    name: str
    required: bool = False
    min: int | float | str | None = None
    max: int | float | str | None = None
    type_hint: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FieldDescriptor":
        """Create a FieldDescriptor from a YAML/JSON dict."""
        return cls(
            name=data["name"],
            required=bool(data.get("required", False)),
            min=data.get("min"),
            max=data.get("max"),
            type_hint=data.get("type"),
        )


@dataclass(frozen=True)
class ArgumentlessRule:
    """A rule applied directly to the value, e.g. ``required``."""

    test: ValueTest
    message: MessageFn

    takes_argument = False


@dataclass(frozen=True)
class ArgumentRule:
    """A rule curried over a specifier argument, e.g. ``min:3``."""

    test: ArgumentTest
    message: ArgumentMessage

    takes_argument = True


RuleDefinition = ArgumentlessRule | ArgumentRule


@dataclass(frozen=True)
class RuleOverride:
    """A caller-supplied rule definition.

    Either callable may be omitted when overriding a built-in rule; the
    missing half falls back to the built-in. New rules must supply both.

    Attributes:
        test: Replacement test callable, or None to keep the existing one
        message: Replacement message callable, or None to keep the existing one
        takes_argument: Whether the callables are curried over an argument.
            Only consulted for new rule names; overrides inherit the kind of
            the rule they replace.
    """

    test: Callable[..., Any] | None = None
    message: Callable[..., Any] | None = None
    takes_argument: bool | None = None

    @classmethod
    def from_value(cls, value: Any) -> "RuleOverride":
        """Normalize a custom rule entry into a RuleOverride.

        Accepts RuleOverride instances, complete rule definitions, and
        plain mappings with "test", "message" and "takes_argument" keys.
        """
        if isinstance(value, RuleOverride):
            return value
        if isinstance(value, (ArgumentlessRule, ArgumentRule)):
            return cls(
                test=value.test,
                message=value.message,
                takes_argument=value.takes_argument,
            )
        if isinstance(value, Mapping):
            return cls(
                test=value.get("test"),
                message=value.get("message"),
                takes_argument=value.get("takes_argument"),
            )
        raise TypeError(
            f"Custom rule must be a mapping or rule definition, got {type(value).__name__}"
        )
