import logging
from typing import Annotated

import typer
from rich.logging import RichHandler

from autonotify.cli.fields import fields
from autonotify.cli.generate import generate

app = typer.Typer(
    name="autonotify",
    help="Generate INotifyPropertyChanged properties for annotated C# fields.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.command("generate")(generate)
app.command("fields")(fields)


@app.callback()
def configure(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log pipeline progress.")] = False,
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(show_time=False, show_path=False)],
        force=True,
    )


def main() -> None:
    app()
