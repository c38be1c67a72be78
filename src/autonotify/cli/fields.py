from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from autonotify.cli.generate import print_diagnostics
from autonotify.config import load_options
from autonotify.core.driver import find_notifiable_fields
from autonotify.core.grouping import build_property_spec
from autonotify.core.languages import collect_source_files
from autonotify.core.syntax import parse_file

console = Console()


def fields(
    paths: Annotated[list[Path], typer.Argument(help="C# files or directories to read.")],
) -> None:
    """List annotated fields and the property each one would get."""
    try:
        trees = [parse_file(path) for path in collect_source_files(paths)]
    except (FileNotFoundError, ValueError) as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(1) from None

    resolved, diagnostics = find_notifiable_fields(trees, load_options())
    print_diagnostics(diagnostics)

    table = Table(show_lines=False)
    for header in ("type", "field", "field_type", "property", "location"):
        table.add_column(header)
    for field in resolved:
        spec = build_property_spec(field)
        table.add_row(
            escape(field.containing_type.to_display_string()),
            escape(field.identifier),
            escape(field.declared_type),
            escape(spec.name) if spec is not None else "(skipped)",
            escape(str(field.location) if field.location else ""),
        )
    console.print(table)
    console.print(f"({len(resolved)} rows)")
