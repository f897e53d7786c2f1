"""Form CLI commands — validate, show and check."""

from collections import Counter
from pathlib import Path

import click

from formrules.config import Settings
from formrules.forms.loader import FormDefinition, FormLoader
from formrules.forms.schema import ValidationIssue, validate_form_file, validate_forms_dir
from formrules.validation.errors import FormRulesError
from formrules.validation.registry import build_registry


def _load_form(settings: Settings, forms_path: Path | None, name: str) -> FormDefinition:
    loader = FormLoader(forms_path or settings.forms_path)
    try:
        loader.load_all()
    except FormRulesError as e:
        raise click.ClickException(str(e))
    form = loader.get_form(name)
    if form is None:
        available = ", ".join(loader.list_forms()) or "none"
        raise click.ClickException(f"Form '{name}' not found (available: {available})")
    return form


def _parse_values(pairs: tuple[str, ...]) -> dict[str, str]:
    values: dict[str, str] = {}
    for pair in pairs:
        field_name, sep, value = pair.partition("=")
        if not sep:
            raise click.BadParameter(f"expected FIELD=VALUE, got '{pair}'", param_hint="VALUES")
        values[field_name] = value
    return values


ISSUE_COLOURS = {"error": "red", "warning": "yellow"}


forms_path_option = click.option(
    "--forms-path",
    default=None,
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory of form YAML files (default: FORMRULES_FORMS_PATH or ./forms).",
)


@click.command()
def rules():
    """List the built-in rules."""
    registry = build_registry()
    for name in registry.names():
        usage = f"{name}:N" if registry.get(name).takes_argument else name
        click.echo(usage)


@click.group()
def forms():
    """Form definition commands."""
    pass


def _report_issues(issues: list[ValidationIssue]) -> int:
    """Print schema issues one per line and return the number of errors."""
    counts = Counter(issue.severity for issue in issues)
    for issue in issues:
        click.secho(str(issue), fg=ISSUE_COLOURS.get(issue.severity, "red"))

    if counts["error"]:
        summary = f"\n{counts['error']} schema error(s) found"
        if counts["warning"]:
            summary += f", {counts['warning']} warning(s)"
        click.secho(summary, fg="red", bold=True)
    elif counts["warning"]:
        click.secho(f"{counts['warning']} warning(s) found.", fg="yellow")
    return counts["error"]


def _build_all(forms_dir: Path) -> FormLoader:
    """Load every form and build its validator, so rule problems surface now."""
    loader = FormLoader(forms_dir)
    loader.load_all()
    for name in loader.list_forms():
        loader.get_form(name).build_validator()
    return loader


@forms.command()
@click.option("--strict", is_flag=True, default=False, help="Treat warnings as errors.")
@click.option(
    "--path",
    "target_path",
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Validate a single YAML file instead of the whole forms directory.",
)
@forms_path_option
@click.pass_obj
def validate(settings: Settings, strict: bool, target_path: Path | None, forms_path: Path | None):
    """Check form files against the form schema, then build every form."""
    forms_dir = forms_path or settings.forms_path

    if target_path is not None:
        if _report_issues(validate_form_file(target_path)):
            raise SystemExit(1)
        click.secho(f"\n{target_path.name} is valid.", fg="green", bold=True)
        return

    if _report_issues(validate_forms_dir(forms_dir, strict=strict)):
        raise SystemExit(1)

    try:
        loader = _build_all(forms_dir)
    except FormRulesError as e:
        click.secho(f"\nForm loading failed: {e}", fg="red", err=True)
        raise SystemExit(1)

    click.echo(f"\nLoaded {len(loader.forms)} form(s):")
    for name in loader.list_forms():
        click.echo(f"  ✓ {name} ({len(loader.get_form(name).fields)} fields)")
    click.secho("\nAll forms are valid.", fg="green", bold=True)


@forms.command()
@click.argument("name")
@forms_path_option
@click.pass_obj
def show(settings: Settings, name: str, forms_path: Path | None):
    """Show the rules each field of a form is checked against."""
    form = _load_form(settings, forms_path, name)
    try:
        validator = form.build_validator()
    except FormRulesError as e:
        raise click.ClickException(str(e))

    click.echo(f"Form: {form.name}")
    for field_name, specs in validator.validations.items():
        rendered = ", ".join(specs) if specs else "(no rules)"
        click.echo(f"  {field_name}: {rendered}")


@forms.command()
@click.argument("name")
@click.argument("values", nargs=-1)
@forms_path_option
@click.pass_obj
def check(settings: Settings, name: str, values: tuple[str, ...], forms_path: Path | None):
    """Validate FIELD=VALUE pairs against a form.

    Exits with status 1 when any field has errors or the form is incomplete.
    """
    form = _load_form(settings, forms_path, name)
    field_values = _parse_values(values)

    try:
        validator = form.build_validator()
        state = validator.validate_all(field_values)
    except FormRulesError as e:
        raise click.ClickException(str(e))

    for field_name, messages in state.error_messages.items():
        if messages:
            for message in messages:
                click.echo(click.style(f"✗ {field_name}: {message}", fg="red"))
        else:
            click.echo(click.style(f"✓ {field_name}", fg="green"))

    unchecked = [f for f in validator.validations if f not in state.error_messages]
    for field_name in unchecked:
        click.echo(click.style(f"? {field_name}: not provided", fg="yellow"))

    click.echo(f"\n{state.error_count} error(s)")
    if not state.all_valid:
        raise SystemExit(1)
