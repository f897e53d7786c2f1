"""
forms/schema.py — JSON Schema validation for form YAML files.

Usage:
    from formrules.forms.schema import validate_forms_dir, validate_form_file

    issues = validate_forms_dir(Path("forms"))
    for issue in issues:
        print(issue)
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError

_SCHEMA_PATH = Path(__file__).parent / "schemas" / "form.schema.json"


@dataclass
class ValidationIssue:
    """A single finding for a form YAML file."""

    file: Path
    message: str
    path: str = ""          # Location within the document, e.g. "fields[0]/min"
    severity: str = "error" # "error" | "warning"

    def __str__(self) -> str:
        loc = f" at {self.path}" if self.path else ""
        return f"[{self.severity.upper()}] {self.file}{loc}: {self.message}"


def _load_schema() -> dict[str, Any]:
    with _SCHEMA_PATH.open() as fh:
        return json.load(fh)


def _json_path(error: ValidationError) -> str:
    """Convert a jsonschema ValidationError path to a readable string."""
    parts = []
    for p in error.absolute_path:
        if isinstance(p, int):
            parts.append(f"[{p}]")
        else:
            parts.append(str(p))
    return "/".join(parts).replace("/[", "[")


def validate_form_file(yaml_path: Path, *, schema: dict[str, Any] | None = None) -> list[ValidationIssue]:
    """
    Validate a single form YAML file.

    Returns:
        A list of :class:`ValidationIssue` objects (empty on success).
    """
    try:
        with yaml_path.open() as fh:
            doc = yaml.safe_load(fh)
    except yaml.YAMLError as exc:
        return [ValidationIssue(file=yaml_path, message=f"YAML parse error: {exc}")]

    if doc is None:
        return [
            ValidationIssue(file=yaml_path, message="File is empty or contains only whitespace")
        ]

    validator = Draft202012Validator(schema or _load_schema())
    issues = [
        ValidationIssue(file=yaml_path, message=error.message, path=_json_path(error))
        for error in sorted(validator.iter_errors(doc), key=_json_path)
    ]

    # Explicit validations for undeclared fields are allowed but usually a typo
    if not issues:
        declared = {f["name"] for f in doc.get("fields") or []}
        for field_name in doc.get("validations") or {}:
            if declared and field_name not in declared:
                issues.append(
                    ValidationIssue(
                        file=yaml_path,
                        message=f"validations entry '{field_name}' has no matching field",
                        path=f"validations/{field_name}",
                        severity="warning",
                    )
                )

    return issues


def validate_forms_dir(forms_dir: Path, *, strict: bool = False) -> list[ValidationIssue]:
    """
    Validate every ``*.yaml`` file under *forms_dir*.

    Args:
        forms_dir: Directory containing form files.
        strict:    If ``True``, warnings are escalated to errors.
    """
    if not forms_dir.is_dir():
        return [
            ValidationIssue(
                file=forms_dir,
                message=f"Forms directory does not exist: {forms_dir}",
            )
        ]

    schema = _load_schema()
    all_issues: list[ValidationIssue] = []
    for yaml_file in sorted(forms_dir.glob("*.yaml")):
        file_issues = validate_form_file(yaml_file, schema=schema)
        if strict:
            for issue in file_issues:
                if issue.severity == "warning":
                    issue.severity = "error"
        all_issues.extend(file_issues)

    return all_issues
