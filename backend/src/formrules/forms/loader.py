"""Load form definitions from YAML files."""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from formrules.validation.builtins import BUILTIN_RULES
from formrules.validation.engine import FormValidator
from formrules.validation.errors import ConfigurationError
from formrules.validation.types import FieldDescriptor, RuleOverride

logger = logging.getLogger(__name__)


# Pattern: {field} or {argument}; any other braces are left as written
PLACEHOLDER = re.compile(r"\{(?P<name>field|argument)\}")


def render_template(template: str, field_name: str, argument: str | None = None) -> str:
    """Substitute {field} and {argument} into a message template."""

    def replace(match: re.Match) -> str:
        if match.group("name") == "field":
            return field_name
        return "" if argument is None else str(argument)

    return PLACEHOLDER.sub(replace, template)


def _template_message(template: str, takes_argument: bool):
    """Build a message function from a "{field}"/"{argument}" template."""
    if takes_argument:
        def message(argument):
            return lambda field_name: render_template(template, field_name, argument)
        return message

    return lambda field_name: render_template(template, field_name)


@dataclass
class FormDefinition:
    """A form declared in YAML.

    Attributes:
        name: Unique form name
        fields: Field descriptors in declared order
        validations: Explicit specifier strings per field
        messages: Message templates keyed by rule name; "{field}" and
            "{argument}" are substituted
        description: Free-text description
    """

    name: str
    fields: list[FieldDescriptor] = field(default_factory=list)
    validations: dict[str, list[str]] = field(default_factory=dict)
    messages: dict[str, str] = field(default_factory=dict)
    description: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FormDefinition":
        """Create FormDefinition from YAML/JSON dict."""
        validations = {}
        for field_name, specs in (data.get("validations") or {}).items():
            validations[field_name] = [specs] if isinstance(specs, str) else list(specs or [])

        return cls(
            name=data["form"],
            fields=[FieldDescriptor.from_dict(f) for f in data.get("fields") or []],
            validations=validations,
            messages=dict(data.get("messages") or {}),
            description=data.get("description", ""),
        )

    def message_overrides(self) -> dict[str, RuleOverride]:
        """Message-only overrides built from the form's templates.

        Raises:
            ConfigurationError: If a template names a rule that is not built in
        """
        overrides = {}
        for rule_name, template in self.messages.items():
            builtin = BUILTIN_RULES.get(rule_name)
            if builtin is None:
                raise ConfigurationError(
                    f"Form '{self.name}' defines a message for unknown rule '{rule_name}'."
                )
            overrides[rule_name] = RuleOverride(
                message=_template_message(template, builtin.takes_argument)
            )
        return overrides

    def build_validator(self, rules: dict[str, Any] | None = None) -> FormValidator:
        """Create a FormValidator for this form.

        Args:
            rules: Python custom rules; these win over YAML message templates
        """
        custom: dict[str, Any] = dict(self.message_overrides())
        custom.update(rules or {})
        return FormValidator(
            fields=self.fields,
            validations=self.validations,
            rules=custom,
        )


class FormLoader:
    """Loads form definitions from a directory of YAML files."""

    def __init__(self, forms_path: Path):
        self.forms_path = forms_path
        self.forms: dict[str, FormDefinition] = {}

    def load_all(self) -> None:
        """Load every ``*.yaml`` file under the forms directory."""
        if not self.forms_path.exists():
            logger.warning("Forms directory %s does not exist", self.forms_path)
            return

        for yaml_file in sorted(self.forms_path.glob("*.yaml")):
            self.load_file(yaml_file)

        logger.info("Loaded %d form(s) from %s", len(self.forms), self.forms_path)

    def load_file(self, yaml_file: Path) -> FormDefinition | None:
        """Load a single form file, returning None if it declares no form."""
        try:
            with open(yaml_file) as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid form file {yaml_file}: {e}") from e

        if not isinstance(data, dict) or "form" not in data:
            logger.debug("Skipping %s: no form declared", yaml_file)
            return None

        try:
            form = FormDefinition.from_dict(data)
        except (KeyError, TypeError, AttributeError) as e:
            raise ConfigurationError(f"Invalid form file {yaml_file}: missing or malformed {e}") from e

        if form.name in self.forms:
            raise ConfigurationError(
                f"Duplicate form '{form.name}' declared in {yaml_file}"
            )
        self.forms[form.name] = form
        return form

    def get_form(self, name: str) -> FormDefinition | None:
        return self.forms.get(name)

    def list_forms(self) -> list[str]:
        return sorted(self.forms.keys())
