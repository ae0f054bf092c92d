"""Ruleset CLI commands - validate ruleset files."""

from pathlib import Path

import click

from fieldforge.rulesets import check_ruleset_file, load_ruleset


@click.group()
def ruleset():
    """Ruleset commands."""
    pass


@ruleset.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--strict",
    is_flag=True,
    default=False,
    help="Treat warnings as errors.",
)
def validate(path: Path, strict: bool):
    """Validate a ruleset YAML file."""
    issues = check_ruleset_file(path)
    errors = [i for i in issues if i.severity == "error"]
    warnings = [i for i in issues if i.severity == "warning"]

    for issue in issues:
        colour = "red" if issue.severity == "error" else "yellow"
        click.echo(click.style(str(issue), fg=colour))

    if errors or (strict and warnings):
        click.echo(
            click.style(
                f"\n{len(errors)} error(s) found"
                + (f", {len(warnings)} warning(s)" if warnings else ""),
                fg="red",
                bold=True,
            )
        )
        raise SystemExit(1)

    loaded = load_ruleset(path)
    click.echo(f"Loaded {len(loaded.rules)} field(s):")
    for field_name, rule_string in loaded.rules.items():
        click.echo(f"  ✓ {field_name}: {rule_string}")

    click.echo(click.style("\nRuleset is valid.", fg="green", bold=True))
