# Copyright (c) Syntropy Systems
"""jenkins-api decode command."""
from __future__ import annotations

import sys
from pathlib import Path

import typer
from rich.console import Console

from jenkins_api.cli.render import show_value
from jenkins_api.errors import StructuralDecodeError
from jenkins_api.models.build import BUILD_COMMON_FIELDS, BUILDS
from jenkins_api.models.changeset import (
    CHANGE_SET_COMMON_FIELDS,
    CHANGE_SET_LISTS,
    CHANGE_SETS,
    CommonChangeSet,
    CommonChangeSetList,
)
from jenkins_api.models.records import CommonBuild
from jenkins_api.registry import decode_record_json

console = Console()

# Payload kind -> (closed union, open record type, common fields)
KINDS = {
    "build": (BUILDS, CommonBuild, BUILD_COMMON_FIELDS),
    "changeset": (CHANGE_SETS, CommonChangeSet, CHANGE_SET_COMMON_FIELDS),
    "changeset-list": (CHANGE_SET_LISTS, CommonChangeSetList, ()),
}


def decode(
    path: Path = typer.Argument(
        ...,
        help="JSON file to decode, or - to read stdin",
    ),
    kind: str = typer.Option(
        "build",
        "--kind", "-k",
        help="Payload kind: build, changeset or changeset-list",
    ),
    open_record: bool = typer.Option(
        False,
        "--open",
        help="Decode as an open record instead of the closed union",
    ),
) -> None:
    """Decode a Jenkins JSON payload and show its common fields.

    Payloads of an unknown _class are still decoded; the fields that cannot
    be read from them are listed.
    """
    if kind not in KINDS:
        console.print(f"[red]Error:[/red] Unknown kind '{kind}'")
        console.print(f"Expected one of: {', '.join(KINDS)}")
        raise typer.Exit(1)
    union, record_type, fields = KINDS[kind]

    try:
        data = sys.stdin.read() if str(path) == "-" else path.read_text()
    except OSError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e

    try:
        if open_record:
            value = decode_record_json(data, record_type, specialize=True)
        else:
            value = union.decode_json(data)
    except StructuralDecodeError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e

    show_value(console, value, fields)
