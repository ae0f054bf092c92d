"""Check CLI command - validate a data file against a ruleset."""

import json
from pathlib import Path

import click

from fieldforge.config import Settings
from fieldforge.rulesets import RulesetError, load_data_file, load_ruleset
from fieldforge.validation import ErrorMode, RuleError, validate as run_validation


@click.command()
@click.argument("data_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--ruleset",
    "ruleset_path",
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Ruleset YAML file (defaults to $FIELDFORGE_RULESET).",
)
@click.option(
    "--extended/--simple",
    default=None,
    help="Emit {error, field, message} records instead of plain messages.",
)
@click.option(
    "--json",
    "as_json",
    is_flag=True,
    default=False,
    help="Print the error list as JSON.",
)
@click.pass_obj
def check(
    settings: Settings | None,
    data_file: Path,
    ruleset_path: Path | None,
    extended: bool | None,
    as_json: bool,
):
    """Validate DATA_FILE (JSON or YAML) against a ruleset.

    Exits 1 when any field fails and 2 when the ruleset is unusable.
    """
    settings = settings or Settings.from_env()
    ruleset_path = ruleset_path or settings.ruleset
    if ruleset_path is None:
        click.echo("Error: no ruleset given (use --ruleset or FIELDFORGE_RULESET)", err=True)
        raise SystemExit(2)

    try:
        ruleset = load_ruleset(ruleset_path)
        data = load_data_file(data_file)
    except RulesetError as e:
        for issue in e.issues:
            click.echo(click.style(str(issue), fg="red"), err=True)
        raise SystemExit(2)

    if extended is None:
        if ruleset.error_mode is ErrorMode.EXTENDED:
            error_mode = ErrorMode.EXTENDED
        else:
            error_mode = settings.error_mode
    else:
        error_mode = ErrorMode.EXTENDED if extended else ErrorMode.SIMPLE

    try:
        errors = run_validation(ruleset.request_for(data, error_mode=error_mode))
    except RuleError as e:
        click.echo(click.style(f"Configuration error: {e}", fg="red"), err=True)
        raise SystemExit(2)

    if as_json:
        click.echo(json.dumps(errors, indent=2))
    elif not errors:
        click.echo(click.style("All fields are valid.", fg="green"))
    else:
        for error in errors:
            if isinstance(error, dict):
                click.echo(f"{error['field']}: {error['message']} ({error['error']})")
            else:
                click.echo(error)

    if errors:
        raise SystemExit(1)
