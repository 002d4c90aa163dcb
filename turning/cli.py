"""Command-line interface for Turning model files."""

import logging
import sys

import click

from .errors import TurningError
from .output.formatter import format_search_result, format_validation_result
from .schema import SchemaLoadError, SchemaValidationError, build_suite, parse_model
from .suite import Turning
from .validators import run_validators

model_argument = click.argument("model_file", type=click.Path(exists=True, dir_okay=False))

format_option = click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    show_default=True,
    help="Output format",
)

allow_unreachable_option = click.option(
    "--allow-unreachable",
    is_flag=True,
    help="Report unreachable states and transitions as warnings",
)


def _load_suite(model_file: str) -> Turning:
    """Build a suite from a model file; exit 2 if the file is unusable, 1 if declarations are."""
    try:
        model = parse_model(model_file)
    except SchemaLoadError as e:
        click.echo(f"Error loading file: {e}", err=True)
        sys.exit(2)
    except SchemaValidationError as e:
        click.echo(f"Schema validation error: {e}", err=True)
        for err in e.errors:
            click.echo(f"  - {err['loc']}: {err['msg']}", err=True)
        sys.exit(2)

    try:
        return build_suite(model)
    except TurningError as e:
        click.echo(f"Declaration error: {e}", err=True)
        sys.exit(1)


@click.group()
@click.version_option(package_name="turning")
@click.option("--verbose", "-v", is_flag=True, help="Log search progress")
def main(verbose: bool):
    """Turning: model-based test case generation."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@model_argument
@format_option
@click.option("--strict", is_flag=True, help="Fail on warnings too")
@allow_unreachable_option
def validate(model_file: str, output_format: str, strict: bool, allow_unreachable: bool):
    """Check the declarations of MODEL_FILE and that everything in it is reachable.

    Exits with 0 when valid, 1 when errors were found (or warnings with
    --strict) and 2 when the file cannot be read as a model.
    """
    suite = _load_suite(model_file)
    result = run_validators(suite, allow_unreachable=allow_unreachable)

    click.echo(format_validation_result(result, output_format))

    failed = result.has_errors or (strict and result.has_warnings)
    sys.exit(1 if failed else 0)


@main.command()
@model_argument
@format_option
@click.option(
    "--min-count",
    type=click.IntRange(min=1),
    help="Times every transition must be covered  [default: 10]",
)
@click.option("--seed", help="Random seed  [default: today's date]")
@allow_unreachable_option
def search(
    model_file: str,
    output_format: str,
    min_count: int | None,
    seed: str | None,
    allow_unreachable: bool,
):
    """Print the test cases searched from MODEL_FILE, numbered the way they run.

    Exits with 0 on success, 1 on declaration or reachability errors and 2
    when the file cannot be read as a model.
    """
    suite = _load_suite(model_file)

    overrides: dict = {"allow_unreachable": allow_unreachable}
    if min_count is not None:
        overrides["min_transition_search_count"] = min_count
    if seed is not None:
        overrides["random_seed"] = seed

    try:
        result = suite.search(**overrides)
    except TurningError as e:
        click.echo(f"Search failed: {e}", err=True)
        sys.exit(1)

    click.echo(format_search_result(result, output_format))


if __name__ == "__main__":
    main()
