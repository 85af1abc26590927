import typer
from rich.console import Console

from ainspector import __version__
from ainspector.cli.extract import extract
from ainspector.cli.fingerprint import fingerprint

app = typer.Typer(
    name="ainspector",
    help="ainspector: find the functions a changeset touched and skip the ones already reviewed.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)
console = Console()

app.command("extract")(extract)
app.command("fingerprint")(fingerprint)


@app.command("version")
def version() -> None:
    """Print the version number."""
    console.print(f"ainspector {__version__}")


def main() -> None:
    app()
