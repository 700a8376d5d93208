"""Command-line interface for generating the status document."""

import logging
import os
import sys
from pathlib import Path

import typer
from dotenv import load_dotenv

from vibestatus.api_logging import configure_logging
from vibestatus.config import Settings
from vibestatus.pipeline import StatusPipeline, generate_status
from vibestatus.publisher import StatusPublisher, render
from vibestatus.results import Failure, Success

app = typer.Typer(help="vibestatus: weather-flavoured status lines for the website")


# MARK: - CLI Entry Points


def cli_generate() -> None:
    """Entry point for the vibestatus-generate command."""
    typer.run(generate)


# MARK: - Commands


@app.command()
def generate(
    out: Path | None = typer.Option(
        None, "--out", "-o", help="Where to write status.json (default: ./public or .)"
    ),
    structured: bool = typer.Option(
        False,
        "--structured",
        "-s",
        help="Ask the model for mood, metrics and chips as JSON",
    ),
    stdout: bool = typer.Option(
        False, "--stdout", help="Print the record instead of writing it"
    ),
    log_file: Path | None = typer.Option(
        None, "--log-file", help="Also append call logs to this file"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Generate a status line and publish it."""
    configure_logging(logging.DEBUG if verbose else logging.INFO, log_file)
    load_dotenv()
    settings = Settings.from_env(
        os.environ, structured=True if structured else None, output_path=out
    )

    if stdout:
        _print_record(settings)
        return

    target = settings.resolve_output_path(Path.cwd())
    match generate_status(settings, target):
        case Success(value=path):
            print(f"Wrote {path}")
        case Failure(error=err):
            print(f"Error: {err}", file=sys.stderr)
            raise typer.Exit(1)


@app.command()
def fallback(
    out: Path | None = typer.Option(
        None, "--out", "-o", help="Where to write status.json (default: ./public or .)"
    ),
) -> None:
    """Write the fixed fallback status without calling any API."""
    configure_logging()
    settings = Settings(output_path=out)
    target = settings.resolve_output_path(Path.cwd())
    match StatusPublisher(target).publish_fallback():
        case Success(value=path):
            print(f"Wrote {path}")
        case Failure(error=err):
            print(f"Error: {err}", file=sys.stderr)
            raise typer.Exit(1)


# MARK: - Private Helpers


def _print_record(settings: Settings) -> None:
    """Run generation without publishing, like the live endpoint does."""
    target = settings.resolve_output_path(Path.cwd())
    pipeline = StatusPipeline(settings, StatusPublisher(target))
    try:
        record = pipeline.build_record()
    finally:
        pipeline.close()
    print(render(record), end="")


if __name__ == "__main__":
    app()
