"""Rules CLI command - list the built-in rules."""

import click

from fieldforge.validation.messages import MESSAGE_CATALOG
from fieldforge.validation.types import RuleName


@click.command()
def rules():
    """List built-in rules and their default messages."""
    width = max(len(rule.value) for rule in RuleName)
    for rule in RuleName:
        usage = f"{rule.value}:N" if rule.takes_parameter else rule.value
        click.echo(f"  {usage:<{width + 2}}  {MESSAGE_CATALOG[rule.value]}")
