"""Command-line interface for pushrisk."""

from __future__ import annotations

import json
import sys

import click

from pushrisk import __version__
from pushrisk.config import load_engine_config
from pushrisk.exceptions import ConfigError, InputError, InvariantError
from pushrisk.harness import configure_logging, parse_request
from pushrisk.models import ScoreRequest
from pushrisk.ui.console import Console

console = Console()
err_console = Console(stderr=True)


def _read_request(request_file) -> ScoreRequest:
    """Parse a request from an open binary file or exit with an error."""
    try:
        return parse_request(request_file.read())
    except InputError as e:
        err_console.error(str(e))
        sys.exit(1)


@click.group()
@click.version_option(version=__version__, prog_name="pushrisk")
@click.option("--verbose", "-v", is_flag=True, help="Log debug output to stderr.")
def main(verbose: bool):
    """pushrisk - deterministic impact and risk scoring for git pushes."""
    configure_logging(verbose)


@main.command()
def score():
    """Score one JSON request from stdin and write JSON to stdout.

    This is the process contract callers spawn: exit 0 on success, 1 on
    invalid input, 2 on internal failure.
    """
    from pushrisk.harness import run

    stdout = click.get_binary_stream("stdout")
    stdin = click.get_binary_stream("stdin")
    sys.exit(run(stdin, stdout))


@main.command()
@click.argument("request_file", type=click.File("rb"), default="-")
@click.option(
    "--format", "output_format",
    type=click.Choice(["table", "markdown", "json"]),
    default="table",
    help="Output format.",
)
def explain(request_file, output_format: str):
    """Score a request in-process and show the result.

    REQUEST_FILE defaults to stdin.
    """
    from pushrisk.engine import score_push
    from pushrisk.renderer import render_push_summary

    request = _read_request(request_file)
    try:
        response = score_push(request)
    except InvariantError as e:
        err_console.error(f"Internal error: {e}")
        sys.exit(2)

    if output_format == "json":
        click.echo(json.dumps(response.model_dump(mode="json"), indent=2))
    elif output_format == "markdown":
        title = request.commit_message.splitlines()[0] if request.commit_message else ""
        click.echo(render_push_summary(response, title=title))
    else:
        console.show_score(response)


@main.command()
@click.argument("request_file", type=click.File("rb"), default="-")
@click.option("--timeout-ms", type=click.IntRange(min=1), default=None, help="Override the engine timeout.")
def invoke(request_file, timeout_ms: int | None):
    """Score a request through a spawned engine process.

    Falls back to an empty result when the engine fails, the same way a
    push handler would.
    """
    from pushrisk.client import FALLBACK_RESPONSE, score_push_subprocess

    request = _read_request(request_file)
    try:
        config = load_engine_config()
    except ConfigError as e:
        err_console.error(str(e))
        sys.exit(1)
    if timeout_ms is not None:
        config.timeout_ms = timeout_ms

    response = score_push_subprocess(request, config)
    if response is None:
        err_console.warning("Engine produced no valid result; using fallback")
        response = FALLBACK_RESPONSE

    click.echo(json.dumps(response.model_dump(mode="json"), indent=2))


@main.command("config")
@click.argument("action", type=click.Choice(["show"]))
def config_cmd(action: str):
    """Show the effective engine client configuration."""
    try:
        config = load_engine_config()
    except ConfigError as e:
        err_console.error(str(e))
        sys.exit(1)

    if action == "show":
        console.console.print_json(json.dumps(config.model_dump(), indent=2))


if __name__ == "__main__":
    main()
