"""Typer CLI: ``mdcompose combine`` and ``mdcompose validate``.

Exit code 0 on success; 1 when the input directory is missing, holds no
templates, or fails validation.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from mdcompose import __version__
from mdcompose.errors import MdComposeError, NoTemplatesError, TemplateValidationError
from mdcompose.models.errors import ValidationIssue, ValidationResult
from mdcompose.service.documents import DocumentService
from mdcompose.settings import Settings, parse_log_level

app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help="Compile markdown templates (.mdext) by inserting fragments (.mdsrc, .md).",
)
console = Console(soft_wrap=True)


def _log_level_callback(value: str | None) -> str | None:
    if value is None:
        return None
    try:
        return parse_log_level(value)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"mdcompose {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    log_level: Annotated[
        str | None,
        typer.Option(
            "--log-level",
            callback=_log_level_callback,
            help="Logging level (overrides MDCOMPOSE_LOG_LEVEL).",
        ),
    ] = None,
    version: Annotated[
        bool,
        typer.Option("--version", callback=_version_callback, is_eager=True),
    ] = False,
) -> None:
    """Markdown template compiler."""
    try:
        settings = Settings()
    except ValidationError as exc:
        console.print(f"[red]Error: invalid MDCOMPOSE_ configuration\n{escape(str(exc))}[/]")
        raise typer.Exit(1) from None
    if log_level:
        settings = settings.model_copy(update={"log_level": log_level})
    ctx.obj = settings
    logging.basicConfig(
        level=settings.log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _format_issue(issue: ValidationIssue) -> str:
    location = issue.source_file or ""
    if issue.line_number is not None:
        location = f"{location}:{issue.line_number}"
    text = f"{location}: {issue.message}" if location else issue.message
    return escape(text)


def _print_issues(result: ValidationResult) -> None:
    if result.errors:
        console.print("\n[yellow]Issues found:[/]")
        for issue in result.errors:
            console.print(f"[red]- {_format_issue(issue)}[/]")
    if result.warnings:
        console.print("\n[yellow]Warnings:[/]")
        for issue in result.warnings:
            console.print(f"[yellow]- {_format_issue(issue)}[/]")


def _require_folder(folder: Path) -> None:
    if not folder.is_dir():
        console.print(f"[red]Error: Input folder '{escape(str(folder))}' does not exist[/]")
        raise typer.Exit(1)


@app.command()
def combine(
    ctx: typer.Context,
    input_folder: Annotated[
        Path, typer.Argument(help="Input folder containing markdown templates")
    ],
    output_folder: Annotated[
        Path, typer.Argument(help="Output folder for combined markdown files")
    ],
) -> None:
    """Combine markdown files from templates."""
    _require_folder(input_folder)
    service = DocumentService(max_concurrency=ctx.obj.max_concurrency)
    console.print(f"[green]Collecting markdown files from:[/] {escape(str(input_folder))}")
    try:
        result = asyncio.run(service.combine(input_folder, output_folder))
    except NoTemplatesError:
        console.print("[yellow]Warning: No markdown template files found[/]")
        raise typer.Exit(1) from None
    except TemplateValidationError as exc:
        console.print("[red]Validation errors found:[/]")
        _print_issues(exc.result)
        raise typer.Exit(1) from None
    except (MdComposeError, OSError, ValueError) as exc:
        console.print(f"[red]Error: {escape(str(exc))}[/]")
        raise typer.Exit(1) from None

    if result.validation.warnings:
        _print_issues(result.validation)
    console.print("[green]✓ Markdown combination completed![/]")
    console.print(f"Output location: [blue]{escape(str(result.output_dir.resolve()))}[/]")


@app.command()
def validate(
    ctx: typer.Context,
    input_folder: Annotated[
        Path, typer.Argument(help="Input folder containing markdown templates to validate")
    ],
) -> None:
    """Validate markdown templates and sources."""
    _require_folder(input_folder)
    service = DocumentService(max_concurrency=ctx.obj.max_concurrency)
    console.print(f"[green]Validating markdown files in:[/] {escape(str(input_folder))}")
    try:
        loaded = asyncio.run(service.load(input_folder))
    except NoTemplatesError:
        console.print("[yellow]Warning: No markdown template files found[/]")
        raise typer.Exit(1) from None
    except (MdComposeError, OSError, ValueError) as exc:
        console.print(f"[red]Error: {escape(str(exc))}[/]")
        raise typer.Exit(1) from None

    console.print(
        f"Found {loaded.template_count} template files and {loaded.source_count} source files"
    )
    result = service.validate(loaded.documents)

    table = Table()
    table.add_column("Status")
    table.add_column("Count")
    table.add_row("[green]Valid files[/]", str(result.valid_files_count))
    table.add_row("[red]Invalid files[/]", str(result.invalid_files_count))
    table.add_row("[yellow]Files with warnings[/]", str(result.warning_files_count))
    table.add_row("Total files", str(loaded.template_count))
    console.print(table)

    _print_issues(result)
    if not result.is_valid:
        console.print("\n[red]Validation completed with errors[/]")
        raise typer.Exit(1)
    console.print(f"\n[green]✓ All {loaded.template_count} files validated successfully![/]")


if __name__ == "__main__":
    app()
