# Copyright (c) Syntropy Systems
"""jenkins-api build command."""
from __future__ import annotations

import typer
from rich.console import Console

from jenkins_api.cli.render import show_value
from jenkins_api.client import get_client
from jenkins_api.config import load_config
from jenkins_api.errors import JenkinsError
from jenkins_api.models.build import BUILD_COMMON_FIELDS

console = Console()


def build(
    job: str = typer.Argument(
        ...,
        help="Job name, with folders separated by slashes",
    ),
    number: int = typer.Argument(
        ...,
        help="Build number",
    ),
    open_record: bool = typer.Option(
        False,
        "--open",
        help="Decode as an open record instead of the closed union",
    ),
    show_console: bool = typer.Option(
        False,
        "--console", "-c",
        help="Also print the console output",
    ),
) -> None:
    """Fetch a build from the Jenkins server and show its common fields."""
    config = load_config()

    try:
        with get_client(config) as client:
            if open_record:
                value = client.get_build_record(job, number)
            else:
                value = client.get_build(job, number)
            show_value(console, value, BUILD_COMMON_FIELDS)

            if show_console:
                console.print()
                console.print(client.get_console(value), markup=False)
    except JenkinsError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e
