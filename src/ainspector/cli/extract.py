import json
from collections.abc import Sequence
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from ainspector.cli.logs import configure_logging
from ainspector.core.fingerprint import function_fingerprint
from ainspector.core.functions import FunctionParser
from ainspector.core.languages import build_language_registry
from ainspector.core.review import plan_review
from ainspector.errors import AinspectorError
from ainspector.models import ExtractedFunction
from ainspector.providers.git import GitChangesetProvider
from ainspector.settings import load_settings

console = Console()


def _render_table(functions: Sequence[ExtractedFunction]) -> None:
    table = Table(show_lines=False)
    for header in ("name", "file", "lines", "change", "fingerprint"):
        table.add_column(header)
    for fn in functions:
        table.add_row(
            fn.name,
            fn.file_path,
            f"{fn.start_line}-{fn.end_line}",
            fn.change_type,
            function_fingerprint(fn),
        )
    console.print(table)
    console.print(f"({len(functions)} rows)")


def _render_json(functions: Sequence[ExtractedFunction]) -> None:
    payload = [{**fn.model_dump(), "fingerprint": function_fingerprint(fn)} for fn in functions]
    typer.echo(json.dumps(payload, indent=2))


def extract(
    repo: Annotated[Path, typer.Argument(help="Path to the git checkout.")] = Path("."),
    base: Annotated[str, typer.Option(help="Base revision of the changeset.")] = "origin/main",
    head: Annotated[str, typer.Option(help="Head revision of the changeset.")] = "HEAD",
    comments: Annotated[
        Path | None, typer.Option(help="JSON file with previously posted comments ({path, line, body}).")
    ] = None,
    force: Annotated[bool, typer.Option("--force", "-f", help="Keep functions that were already reviewed.")] = False,
    ignore: Annotated[list[str] | None, typer.Option(help="Glob of files to skip (repeatable).")] = None,
    as_json: Annotated[bool, typer.Option("--json", help="Print the pending functions as JSON.")] = False,
    log_level: Annotated[str | None, typer.Option(help="Logging level, e.g. INFO or DEBUG.")] = None,
) -> None:
    """List the functions touched by base...head that still need a review."""
    settings = load_settings()
    if ignore:
        settings = settings.model_copy(update={"ignore": (*settings.ignore, *ignore)})
    configure_logging((log_level or settings.log_level).upper())

    provider = GitChangesetProvider(repo, base, head, comments_path=comments)
    parser = FunctionParser(build_language_registry())
    try:
        plan = plan_review(provider, parser, settings, force=force)
    except AinspectorError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=1) from exc

    if as_json:
        _render_json(plan.pending)
        return

    if plan.skipped:
        console.print(f"[yellow]Skipped[/yellow] {plan.skipped} already reviewed functions")
    if not plan.pending:
        console.print("[green]No functions to review[/green]")
        return
    _render_table(plan.pending)
