"""fieldforge CLI entry point."""

import click

from fieldforge.config import Settings


@click.group()
@click.pass_context
def cli(ctx):
    """fieldforge - rule-string field validation CLI."""
    settings = Settings.from_env()
    settings.configure_logging()
    ctx.obj = settings


# Register subcommands
from fieldforge.cli.check_cmd import check  # noqa: E402
from fieldforge.cli.rules_cmd import rules  # noqa: E402
from fieldforge.cli.ruleset_cmd import ruleset  # noqa: E402

cli.add_command(check)
cli.add_command(rules)
cli.add_command(ruleset)
