#!/usr/bin/env python3
"""
CLI interface for the credit card statement parser.
"""
import json
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from .core.anchors import anchor_report, split_lines
from .core.exceptions import StatementParserError
from .core.loader import load_document_text, load_text_file
from .core.runner import StatementParser
from .core.templates import load_config
from .models.schema import ExtractionResult

app = typer.Typer(help="Credit Card Statement Parser")
console = Console()


def _read_source(path: Path, text: bool) -> str:
    return load_text_file(path) if text else load_document_text(path)


def _build_parser(config_dir: Optional[Path], verbose: bool = False) -> StatementParser:
    config = load_config(config_dir)
    return StatementParser(config.registry, config.field_spec, verbose=verbose)


@app.command()
def parse(
    path: Path = typer.Argument(..., help="Path to statement PDF (or text file with --text)"),
    output: Optional[Path] = typer.Option(None, "--out", "-o", help="Output JSON file path"),
    text: bool = typer.Option(False, "--text", help="Input is an already-decoded text file"),
    config_dir: Optional[Path] = typer.Option(None, "--config-dir", help="Directory with issuers.yaml and fields.yaml"),
    explain: bool = typer.Option(False, "--explain", help="Show every anchored line per field"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output")
):
    """Parse a credit card statement into structured JSON."""

    if not path.exists():
        console.print(f"[red]Error: File not found: {path}[/red]")
        raise typer.Exit(1)

    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
            transient=True
        ) as progress:
            task = progress.add_task("Loading configuration...", total=None)
            parser = _build_parser(config_dir, verbose)

            progress.update(task, description="Reading document...")
            document_text = _read_source(path, text)

            progress.update(task, description="Extracting fields...")
            result = parser.parse_text(document_text)

    except StatementParserError as e:
        console.print(f"[red]Error: {e.message}[/red]")
        if verbose and e.details:
            console.print(f"[dim]{e.details}[/dim]")
        raise typer.Exit(1)

    payload = json.dumps(result.to_dict(), indent=2)
    if output:
        output.write_text(payload)
        console.print(f"[green]✓ Parsed successfully! Output written to: {output}[/green]")
    else:
        console.print_json(payload)

    if explain:
        table = Table(title="Anchored lines")
        table.add_column("Field")
        table.add_column("Keyword")
        table.add_column("Line")
        table.add_column("Value")
        for field_name, anchor, value in anchor_report(split_lines(document_text), parser.field_spec):
            table.add_row(field_name, anchor.keyword, escape(anchor.line), escape(value) if value else "[dim]-[/dim]")
        console.print(table)


@app.command()
def detect(
    path: Path = typer.Argument(..., help="Path to statement PDF (or text file with --text)"),
    text: bool = typer.Option(False, "--text", help="Input is an already-decoded text file"),
    config_dir: Optional[Path] = typer.Option(None, "--config-dir", help="Directory with issuers.yaml and fields.yaml")
):
    """Detect which issuer produced a statement."""
    try:
        parser = _build_parser(config_dir)
        match = parser.detector.detect(_read_source(path, text))
    except StatementParserError as e:
        console.print(f"[red]Error: {e.message}[/red]")
        raise typer.Exit(1)

    if match.is_known:
        console.print(f"[green]Detected issuer: {match.issuer}[/green]")
    else:
        console.print("[yellow]Unknown issuer[/yellow]")
        raise typer.Exit(1)


@app.command()
def issuers(
    config_dir: Optional[Path] = typer.Option(None, "--config-dir", help="Directory with issuers.yaml and fields.yaml")
):
    """List configured issuers in detection order."""
    try:
        registry = load_config(config_dir).registry
    except StatementParserError as e:
        console.print(f"[red]Error: {e.message}[/red]")
        raise typer.Exit(1)

    table = Table(title="Issuers")
    table.add_column("Key")
    table.add_column("Name")
    table.add_column("Asset")
    for entry in registry:
        table.add_row(entry.key, entry.display_name, entry.asset_ref)
    console.print(table)


@app.command()
def validate(
    json_path: Path = typer.Argument(..., help="Path to JSON file to validate")
):
    """Validate a result JSON file against the schema."""
    try:
        data = ExtractionResult.model_validate_json(json_path.read_text())
    except (OSError, ValidationError) as e:
        console.print(f"[red]Validation failed: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    console.print("[green]✓ JSON is valid[/green]")
    console.print(f"Issuer: {data.issuer}")
    console.print(f"Confidence: {data.confidence}")


if __name__ == "__main__":
    app()
