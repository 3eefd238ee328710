#!/usr/bin/env python3
"""
Report Rendering CLI

Renders CSV data through the built-in controllers and formatters.

Commands:
    render    - Render a CSV file as csv, text, html or pdf
    formats   - List the formats registered on a built-in controller
    templates - List the loaded formatting templates

Examples:\n

    render_data.py render data/sales.csv --format text                # Print a text table

    render_data.py render data/sales.csv --output outs/sales.html     # Format from extension

    render_data.py render data/sales.csv -f text --group-by region    # One table per region

    render_data.py formats --controller grouping
"""

import os
from pathlib import Path
from typing import List, Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from rapport import (
    ControllerError,
    GroupController,
    GroupingController,
    RowController,
    Table,
    TableController,
    Template,
)
from rapport.contexts.formatting.logger import setup_formatting_logger

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))

CONTROLLERS = {
    "table": TableController,
    "row": RowController,
    "group": GroupController,
    "grouping": GroupingController,
}

app = typer.Typer(
    help="Render CSV data as csv, text, html or pdf reports",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _parse_options(pairs: List[str]) -> dict:
    """Turn KEY=VALUE pairs into options, converting true/false."""
    options = {}
    for pair in pairs:
        if "=" not in pair:
            raise typer.BadParameter(f"Expected KEY=VALUE, got {pair!r}")
        key, value = pair.split("=", 1)
        lowered = value.lower()
        options[key] = True if lowered == "true" else False if lowered == "false" else value
    return options


@app.command("render")
def render_command(
    source: Annotated[
        Path,
        typer.Argument(help="CSV file to render", exists=True, dir_okay=False),
    ],
    format_id: Annotated[
        Optional[str],
        typer.Option("--format", "-f", help="Output format (default: from --output extension, else text)"),
    ] = None,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Append the rendered output to this file"),
    ] = None,
    group_by: Annotated[
        Optional[str],
        typer.Option("--group-by", "-g", help="Render one group per distinct value of this column"),
    ] = None,
    template: Annotated[
        Optional[str],
        typer.Option("--template", "-t", help="Formatting template to apply"),
    ] = None,
    option: Annotated[
        List[str],
        typer.Option("--option", "-O", help="Extra formatter option as KEY=VALUE (repeatable)"),
    ] = [],
    no_header: Annotated[
        bool,
        typer.Option("--no-header", help="CSV file has no header row"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug logging on the console"),
    ] = False,
):
    """
    Render a CSV file.

    Without --output the result is printed (pdf requires --output).

    Examples:\n

        $ render_data.py render sales.csv -f html -O standalone=true -O title=Sales

        $ render_data.py render sales.csv -o sales.pdf
    """
    setup_formatting_logger(LOGS_PATH / "render", console_level="DEBUG" if verbose else "WARNING")

    table = Table.from_csv(source, has_header=not no_header)
    data = table.group_by(group_by) if group_by else table

    options = _parse_options(option)
    if template:
        options["template"] = template

    try:
        if output is not None and format_id is None:
            data.save_as(output, options)
        else:
            format_id = format_id or "text"
            if output is None and format_id == "pdf":
                typer.secho("PDF output needs --output", fg=typer.colors.RED, err=True)
                raise typer.Exit(code=1)
            if output is not None:
                options["file"] = str(output)
            result = data.render_as(format_id, options)
            if output is None:
                typer.echo(result, nl=False)
    except ControllerError as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    if output is not None:
        typer.secho(f"Saved: {output}", fg=typer.colors.GREEN, err=True)


@app.command("formats")
def formats_command(
    controller: Annotated[
        str,
        typer.Option("--controller", "-c", help="Controller: table, row, group or grouping"),
    ] = "table",
):
    """List the formats registered on a built-in controller."""
    if controller not in CONTROLLERS:
        typer.secho(f"Unknown controller: {controller}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    for name, formatter in sorted(CONTROLLERS[controller].formats().items()):
        typer.echo(f"{name:<8} {formatter.__name__}")


@app.command("templates")
def templates_command():
    """List the loaded formatting templates (see RAPPORT_TEMPLATES_PATH)."""
    names = Template.names()
    if not names:
        typer.echo("No templates loaded.")
        return
    for name in names:
        typer.echo(f"{name}: {Template.get(name).options}")


if __name__ == "__main__":
    app()
