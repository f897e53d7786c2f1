"""Declarative form definitions loaded from YAML."""

from formrules.forms.loader import FormDefinition, FormLoader
from formrules.forms.schema import ValidationIssue, validate_form_file, validate_forms_dir

__all__ = [
    "FormDefinition",
    "FormLoader",
    "ValidationIssue",
    "validate_form_file",
    "validate_forms_dir",
]
