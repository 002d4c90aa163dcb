"""Console reporting of test case execution."""

import traceback
from collections.abc import Iterable

import click

INDENT = "  "


def indent(text: str, depth: int) -> str:
    """Indent every non-empty line of a text by ``depth`` levels."""
    prefix = INDENT * depth
    return "\n".join(prefix + line if line else line for line in text.splitlines())


class Reporter:
    """Prints test cases, steps and failures with click.

    Progress goes to stdout, failures to stderr.
    """

    def __init__(self, verbose: bool = False):
        self.verbose = verbose

    def case(self, test_case_id: str, depth: int) -> None:
        click.echo(indent(click.style(f"Test Case {test_case_id}", fg="green"), depth))

    def step(self, name: str, states: Iterable[str], depth: int) -> None:
        click.echo(indent(name, depth))

        if self.verbose:
            text = f"Current states [{','.join(states)}]"
            click.echo(indent(click.style(text, fg="bright_black"), depth))

    def failure(self, badge: str, error: BaseException, depth: int) -> None:
        click.echo(err=True)
        click.echo(indent(click.style(f" {badge} ", bg="red"), depth), err=True)
        click.echo(err=True)

        text = "".join(traceback.format_exception(type(error), error, error.__traceback__))
        click.echo(indent(click.style(text.rstrip(), fg="red"), depth), err=True)
        click.echo(err=True)

    def retry(self, test_case_id: str, attempt: int, max_attempts: int, depth: int) -> None:
        text = f"Retrying test case {test_case_id} ({attempt + 1}/{max_attempts})"
        click.echo(indent(click.style(text, fg="yellow"), depth), err=True)

    def summary(self, failed_test_case_ids: list[str]) -> None:
        if not failed_test_case_ids:
            return

        click.echo(err=True)
        click.echo(click.style(" Failed test cases ", bg="red"), err=True)
        click.echo(err=True)
        click.echo(indent("\n".join(failed_test_case_ids), 1), err=True)
        click.echo(err=True)
