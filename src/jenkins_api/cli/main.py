# Copyright (c) Syntropy Systems
"""Main CLI entry point for jenkins-api."""

import typer

from jenkins_api.cli.build import build
from jenkins_api.cli.classes import classes
from jenkins_api.cli.decode import decode
from jenkins_api.config import load_config
from jenkins_api.log import configure_logging

app = typer.Typer(
    name="jenkins-api",
    help="Decode Jenkins JSON API payloads, known job types or not.",
    no_args_is_help=True,
    add_completion=False,
)


@app.callback()
def main(
    verbose: bool = typer.Option(
        False,
        "--verbose", "-v",
        help="Log decoding decisions at debug level",
    ),
) -> None:
    """Configure logging before running a command."""
    config = load_config()
    configure_logging("DEBUG" if verbose else config.log_level, config.log_format)


# Register commands
_ = app.command()(decode)
_ = app.command()(build)
_ = app.command()(classes)


if __name__ == "__main__":
    app()
