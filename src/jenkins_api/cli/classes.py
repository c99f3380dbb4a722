# Copyright (c) Syntropy Systems
"""jenkins-api classes command."""
from __future__ import annotations

from rich.console import Console
from rich.table import Table

from jenkins_api.models.build import BUILDS
from jenkins_api.models.changeset import CHANGE_SET_LISTS, CHANGE_SETS
from jenkins_api.registry import CLASS_REGISTRY

console = Console()


def classes() -> None:
    """List the _class names this tool knows how to decode."""
    table = Table(title="Closed unions", show_header=True, header_style="bold")
    table.add_column("Union")
    table.add_column("_class")
    table.add_column("Shape", style="dim")
    for union in (BUILDS, CHANGE_SET_LISTS, CHANGE_SETS):
        for shape in union.shapes:
            table.add_row(union.name, shape.jenkins_class, shape.__name__)
    console.print(table)

    registered = CLASS_REGISTRY.classes()
    if not registered:
        console.print("[dim]No registered open records[/dim]")
        return

    table = Table(title="Open records", show_header=True, header_style="bold")
    table.add_column("_class")
    table.add_column("Record", style="dim")
    for jenkins_class, record_type in sorted(registered.items()):
        table.add_row(jenkins_class, record_type.__name__)
    console.print(table)
