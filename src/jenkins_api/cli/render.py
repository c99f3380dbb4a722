# Copyright (c) Syntropy Systems
"""Rich rendering of decoded values for the CLI."""
from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from rich.table import Table

from jenkins_api.models.base import OpenRecord
from jenkins_api.models.user import ShortUser
from jenkins_api.tagged import read_fields

if TYPE_CHECKING:
    from collections.abc import Sequence

    from rich.console import Console


def format_value(value: object) -> str:
    """Format a field value for a table cell."""
    if value is None:
        return "-"
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, ShortUser):
        return value.full_name
    if isinstance(value, (list, tuple)):
        return f"{len(value)} item(s)"
    return str(value)


def show_value(console: Console, value: object, fields: Sequence[str]) -> None:
    """Display a decoded value: its variant, common fields and leftovers."""
    object_type = getattr(value, "object_type", type(value).__name__)
    if isinstance(value, OpenRecord):
        variant = type(value).__name__
        jenkins_class = value.class_name
    else:
        variant = getattr(value, "variant_name", type(value).__name__)
        jenkins_class = getattr(value, "discriminant", None)

    console.print(f"\n[bold]{object_type}[/bold] {variant}")
    console.print(f"  [dim]_class:[/dim] {jenkins_class or '-'}")

    values, failures = read_fields(value, fields)
    if values:
        table = Table(show_header=True, header_style="bold")
        table.add_column("Field", style="dim")
        table.add_column("Value")
        for name, field_value in values.items():
            table.add_row(name, format_value(field_value))
        console.print(table)

    for name, error in failures.items():
        console.print(
            f"  [yellow]unavailable:[/yellow] {name} "
            f"(variant {error.variant_name})"
        )

    if isinstance(value, OpenRecord) and value.other_fields:
        names = ", ".join(value.other_fields)
        console.print(f"  [dim]other fields:[/dim] {names}")
