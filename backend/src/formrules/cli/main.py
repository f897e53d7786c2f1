"""formrules CLI entry point."""

import logging

import click

from formrules.config import Settings


@click.group()
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging level (default: FORMRULES_LOG_LEVEL or WARNING).",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str | None):
    """formrules — declarative field validation CLI."""
    settings = Settings.from_env()
    if log_level:
        settings.log_level = log_level.upper()
    logging.basicConfig(
        level=settings.log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = settings


# Register subcommand groups
from formrules.cli.forms_cmd import forms, rules  # noqa: E402

cli.add_command(forms)
cli.add_command(rules)
