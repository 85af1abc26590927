from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from ainspector.core.fingerprint import fingerprint as compute_fingerprint
from ainspector.core.fingerprint import format_marker

console = Console()


def _read_optional(path: Path | None) -> str:
    return path.read_text(encoding="utf-8") if path else ""


def fingerprint(
    file_path: Annotated[str, typer.Argument(help="Repository path of the file holding the function.")],
    name: Annotated[str, typer.Argument(help="Function name as extracted.")],
    content_file: Annotated[Path | None, typer.Option(help="File with the function's source text.")] = None,
    diff_file: Annotated[Path | None, typer.Option(help="File with the function's scoped diff.")] = None,
    marker: Annotated[bool, typer.Option(help="Print the comment marker instead of the bare fingerprint.")] = False,
) -> None:
    """Print the fingerprint of a function."""
    value = compute_fingerprint(file_path, name, _read_optional(content_file), _read_optional(diff_file))
    typer.echo(format_marker(value) if marker else value)
