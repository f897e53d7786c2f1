"""Parsing of compact rule specifiers such as ``"required"`` or ``"min:3"``."""

from collections.abc import Iterable

from formrules.validation.types import RuleSpecifier

SEPARATOR = ":"


def parse_specifier(raw: str) -> RuleSpecifier:
    """Parse a ``name`` or ``name:argument`` string.

    Splits on the first colon only, so ``"pattern:a:b"`` keeps ``"a:b"`` as
    its argument. Whitespace is preserved. Rule names are not checked against
    any registry here.
    """
    name, sep, argument = raw.partition(SEPARATOR)
    if not sep:
        return RuleSpecifier(name=name)
    return RuleSpecifier(name=name, argument=argument)


def parse_specifiers(raw: Iterable[str]) -> tuple[RuleSpecifier, ...]:
    """Parse a sequence of specifier strings, keeping their order."""
    return tuple(parse_specifier(item) for item in raw)


def format_specifiers(specifiers: Iterable[RuleSpecifier]) -> list[str]:
    """Render parsed specifiers back to their string form."""
    return [str(spec) for spec in specifiers]
