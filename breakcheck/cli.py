"""Typer CLI for the breaking-change reviewer."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from breakcheck.agent import review_working_tree
from breakcheck.context import ReviewSettings
from breakcheck.errors import BreakcheckError, MoonshotAuthError
from breakcheck.moonshot_client import build_review_client, get_moonshot_api_key_with_source
from breakcheck.observability import configure_logging
from breakcheck.output import render_console_report

app = typer.Typer(help="Analyze unstaged git changes for potential breaking changes using AI.")


@app.command()
def review_command(
    directory: Annotated[
        Path,
        typer.Argument(
            help="Path to the git repository to analyze.",
            exists=True,
            file_okay=False,
            dir_okay=True,
        ),
    ],
    model: Annotated[str | None, typer.Option(help="Override the analysis model.")] = None,
    timeout_seconds: Annotated[
        float | None, typer.Option(help="Timeout in seconds for the analysis API call.")
    ] = None,
    trust_env: Annotated[
        bool,
        typer.Option(
            "--trust-env/--no-trust-env",
            help="Use proxy/SSL environment variables from the current shell.",
        ),
    ] = True,
    verbose: Annotated[bool, typer.Option(help="Print debug logging to stderr.")] = False,
) -> None:
    """Review the unstaged changes of DIRECTORY and print the analysis."""
    configure_logging(verbose=verbose)

    try:
        api_key, _source = get_moonshot_api_key_with_source()
    except MoonshotAuthError as error:
        typer.echo(f"Error: {error}", err=True)
        raise typer.Exit(code=1) from error

    try:
        settings = ReviewSettings.from_env()
    except ValueError as error:
        typer.echo(f"Error: {error}", err=True)
        raise typer.Exit(code=1) from error
    if model is not None:
        settings.model = model
    if timeout_seconds is not None:
        settings.timeout_seconds = timeout_seconds

    typer.echo(f"Starting code review for: {directory}")
    try:
        with build_review_client(api_key, settings, trust_env=trust_env) as client:
            outcome = review_working_tree(repo_path=directory, client=client, settings=settings)
    except BreakcheckError as error:
        typer.echo(f"Error: {error}", err=True)
        raise typer.Exit(code=1) from error

    for warning in outcome.warnings:
        typer.echo(f"Warning: {warning}", err=True)
    typer.echo(render_console_report(outcome))
    typer.echo("\nCode review completed!")
