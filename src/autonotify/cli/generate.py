from collections.abc import Sequence
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from autonotify.config import load_options
from autonotify.core.driver import generate_files
from autonotify.models import Diagnostic

console = Console(stderr=True)

_SEVERITY_STYLES = {"info": "blue", "warning": "yellow", "error": "red"}


def print_diagnostics(diagnostics: Sequence[Diagnostic]) -> None:
    for diagnostic in diagnostics:
        style = _SEVERITY_STYLES[diagnostic.severity]
        console.print(f"[{style}]{escape(str(diagnostic))}[/{style}]")


def generate(
    paths: Annotated[list[Path], typer.Argument(help="C# files or directories to read.")],
    out: Annotated[Path | None, typer.Option(help="Directory to write <key>.g.cs files into.")] = None,
    qualified_keys: Annotated[
        bool | None,
        typer.Option("--qualified-keys/--simple-keys", help="Prefix generated source keys with the namespace."),
    ] = None,
    reference: Annotated[
        list[str] | None,
        typer.Option(help="Extra external type the sources compile against, e.g. 'My.Lib.IFoo=interface'."),
    ] = None,
) -> None:
    """Generate notifiable properties and print them or write them to a directory."""
    options = load_options(
        qualified_keys=qualified_keys,
        extra_references=tuple(reference) if reference else None,
    )
    try:
        result = generate_files(paths, options)
    except (FileNotFoundError, ValueError) as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(1) from None

    print_diagnostics(result.diagnostics)

    if out is None:
        for fragment in result.fragments:
            typer.echo(f"// ----- {fragment.key}")
            typer.echo(fragment.text, nl=False)
    else:
        out.mkdir(parents=True, exist_ok=True)
        for fragment in result.fragments:
            target = out / f"{fragment.key}.g.cs"
            target.write_text(fragment.text, encoding="utf-8")
            console.print(f"[green]Wrote[/green] {escape(str(target))}")

    if result.has_errors:
        raise typer.Exit(1)
