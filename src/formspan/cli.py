"""
formspan command line.

Reads a source file with an external reader plugin, attributes every
top-level form, and prints the span of each sub-expression.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from formspan import __version__
from formspan.core.config import AttributionConfig, resolve_config
from formspan.core.errors import FormspanError
from formspan.core.readers import load_reader, read_forms
from formspan.core.walker import AttributedExpr, detailed_exprs

app = typer.Typer(
    name="formspan",
    help="Recover source spans for every sub-expression of read forms.",
    no_args_is_help=True,
)

console = Console()


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"formspan version {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Log unmatched sub-expressions")
    ] = False,
) -> None:
    """formspan - source spans for read forms."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _expr_row(form_index: int, expr: AttributedExpr) -> dict[str, Any]:
    record = expr.attribution
    return {
        "form": form_index,
        "path": list(expr.path),
        "source": record.source,
        "line": record.line,
        "end_line": record.end_line,
        "start_character": record.start_character,
        "end_character": record.end_character,
        "attached": expr.attached,
    }


def _render_table(rows: list[dict[str, Any]], title: str) -> Table:
    table = Table(title=title)
    table.add_column("Form", justify="right", style="dim")
    table.add_column("Path")
    table.add_column("Lines")
    table.add_column("Chars")
    table.add_column("Source")

    for row in rows:
        path = escape("[" + " ".join(str(i) for i in row["path"]) + "]")
        if row["source"] is None:
            table.add_row(str(row["form"]), path, "", "", "[red]unmatched[/red]")
            continue
        table.add_row(
            str(row["form"]),
            path,
            f"{row['line']}-{row['end_line']}",
            f"{row['start_character']}-{row['end_character']}",
            escape(row["source"].replace("\n", "\\n")),
        )
    return table


@app.command(name="spans")
def spans_command(
    file: Annotated[
        Path,
        typer.Argument(exists=True, dir_okay=False, readable=True, help="Source file to read"),
    ],
    reader: Annotated[
        str | None,
        typer.Option("--reader", "-r", help="Reader plugin as 'package.module:function'"),
    ] = None,
    config_path: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="formspan.toml or pyproject.toml to use"),
    ] = None,
    output_json: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Print the source span of every sub-expression in FILE."""
    try:
        config = resolve_config(config_path, directory=file.parent)
        reader_path = reader or config.reader
        if not reader_path:
            typer.echo(
                "Error: no reader configured. Pass --reader or set 'reader' in formspan.toml",
                err=True,
            )
            raise typer.Exit(code=1)
        forms = read_forms(load_reader(reader_path), file.read_text(encoding="utf-8"))
        rows = [
            _expr_row(index, expr)
            for index, form in enumerate(forms)
            for expr in detailed_exprs(form, config)
        ]
    except FormspanError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    if output_json:
        typer.echo(json.dumps(rows, indent=2))
        return

    if not rows:
        console.print("[dim]No forms read.[/dim]")
        return

    console.print(_render_table(rows, title=str(file)))
    unmatched = sum(1 for row in rows if row["source"] is None)
    console.print(f"\n[dim]{len(forms)} form(s), {len(rows)} node(s), {unmatched} unmatched[/dim]")


@app.command(name="config")
def config_command(
    config_path: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="formspan.toml or pyproject.toml to use"),
    ] = None,
) -> None:
    """Show the resolved attribution configuration."""
    try:
        config: AttributionConfig = resolve_config(config_path)
    except FormspanError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    for key, value in asdict(config).items():
        typer.echo(f"{key} = {value if value is not None else '-'}")


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
