"""
CLI Main - Typer-based command-line interface.

Usage:
    pdfschema extract invoice.pdf --schema invoice.schema.json
    pdfschema inspect scan.pdf
    pdfschema serve
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from pdfschema.config import PdfSchemaError, get_settings

app = typer.Typer(
    name="pdfschema",
    help="pdfschema - Extract schema-conformant JSON from PDF documents",
    add_completion=False,
)
console = Console()


@app.callback()
def configure(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Configure logging for every command."""
    level = logging.DEBUG if verbose else get_settings().log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
    )


@app.command()
def extract(
    pdf_path: Path = typer.Argument(..., help="Path to PDF file"),
    schema_path: Path = typer.Option(..., "--schema", "-s", help="JSON schema file"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Output JSON path"),
    temperature: float | None = typer.Option(None, "--temperature", "-t", help="Sampling temperature"),
    max_tokens: int | None = typer.Option(None, "--max-tokens", help="Output token limit"),
    model: str | None = typer.Option(None, "--model", "-m", help="Model for both modes"),
    text_model: str | None = typer.Option(None, "--text-model", help="Model for text PDFs"),
    vision_model: str | None = typer.Option(None, "--vision-model", help="Model for scanned PDFs"),
    no_vision: bool = typer.Option(False, "--no-vision", help="Fail instead of using vision"),
) -> None:
    """Extract structured data from a PDF using a JSON schema."""
    for path in (pdf_path, schema_path):
        if not path.exists():
            console.print(f"[red]Error:[/red] File not found: {path}")
            raise typer.Exit(1)

    try:
        schema = json.loads(schema_path.read_text(encoding="utf-8"))
    except ValueError as e:
        console.print(f"[red]Error:[/red] Schema file is not valid JSON: {e}")
        raise typer.Exit(1)

    overrides: dict[str, Any] = {
        "default_model": model,
        "text_model": text_model,
        "vision_model": vision_model,
    }
    if no_vision:
        overrides["vision_enabled"] = False

    asyncio.run(_extract_async(pdf_path, schema, output, temperature, max_tokens, overrides))


async def _extract_async(
    pdf_path: Path,
    schema: Any,
    output: Path | None,
    temperature: float | None,
    max_tokens: int | None,
    overrides: dict[str, Any],
) -> None:
    """Async extraction implementation."""
    from pdfschema.domains.extraction import ExtractionRequest, PdfDataExtractor
    from pdfschema.domains.parsing import PdfContentPipeline

    settings = get_settings()

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task("Initializing...", total=None)

        try:
            config = settings.to_extractor_config(**overrides)
            pipeline = PdfContentPipeline.from_settings(settings)
            async with PdfDataExtractor(config, pipeline=pipeline) as extractor:
                progress.update(task, description="Extracting from PDF...")
                result = await extractor.extract(
                    ExtractionRequest(
                        schema=schema,
                        pdf_path=pdf_path,
                        temperature=temperature,
                        max_output_tokens=max_tokens,
                    )
                )
        except PdfSchemaError as e:
            console.print(f"[red]Error:[/red] {e.code.value}: {escape(e.message)}")
            raise typer.Exit(1)

    table = Table(title="Extraction Summary")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Mode", result.mode.value)
    table.add_row("Model", result.model_used)
    table.add_row("Tokens Used", str(result.tokens_used) if result.tokens_used is not None else "-")
    table.add_row("Page Count", str(result.page_count))
    console.print(table)

    rendered = json.dumps(result.data, indent=2, ensure_ascii=False)
    if output:
        output.write_text(rendered, encoding="utf-8")
        console.print(f"\n[green]Saved to:[/green] {output}")
    else:
        console.print_json(rendered)


@app.command()
def inspect(
    pdf_path: Path = typer.Argument(..., help="Path to PDF file"),
    threshold: int | None = typer.Option(
        None, "--threshold", min=0, help="Minimum text length for text routing"
    ),
) -> None:
    """Show how a PDF would be routed, without calling a model."""
    if not pdf_path.exists():
        console.print(f"[red]Error:[/red] File not found: {pdf_path}")
        raise typer.Exit(1)

    asyncio.run(_inspect_async(pdf_path, threshold))


async def _inspect_async(pdf_path: Path, threshold: int | None) -> None:
    """Async inspection implementation."""
    from pdfschema.domains.parsing import ImageContent, PdfContentPipeline, validate_signature

    settings = get_settings()
    if threshold is None:
        threshold = settings.text_threshold

    if not validate_signature(pdf_path):
        console.print("[red]Error:[/red] Not a PDF (missing %PDF signature)")
        raise typer.Exit(1)

    try:
        parsed = await PdfContentPipeline.from_settings(settings).parse(pdf_path, threshold)
    except PdfSchemaError as e:
        console.print(f"[red]Error:[/red] {e.code.value}: {escape(e.message)}")
        raise typer.Exit(1)

    lines = [
        f"[bold]Routing:[/bold] {'TEXT' if parsed.is_text else 'IMAGE'}",
        f"[bold]Pages:[/bold] {parsed.page_count}",
    ]
    if isinstance(parsed.content, ImageContent):
        lines.append(f"[bold]Rendered pages:[/bold] {parsed.content.page_numbers}")
    else:
        lines.append(f"[bold]Text length:[/bold] {len(parsed.content.body)}")
    for key, value in (parsed.metadata or {}).items():
        lines.append(f"[dim]{key}: {value}[/dim]")

    console.print(Panel("\n".join(lines), title=pdf_path.name))


@app.command()
def serve(
    host: str | None = typer.Option(None, "--host", "-h", help="Host to bind"),
    port: int | None = typer.Option(None, "--port", "-p", help="Port to bind"),
    reload: bool = typer.Option(False, "--reload", "-r", help="Enable auto-reload"),
) -> None:
    """Start the API server."""
    import uvicorn

    settings = get_settings()
    host = host or settings.api_host
    port = port or settings.api_port

    console.print("\n[green]Starting pdfschema API server[/green]")
    console.print(f"[dim]http://{host}:{port}[/dim]\n")

    uvicorn.run(
        "pdfschema.interfaces.api:create_app",
        host=host,
        port=port,
        reload=reload,
        factory=True,
    )


@app.command()
def version() -> None:
    """Show version information."""
    from pdfschema import __version__

    console.print(f"pdfschema v{__version__}")


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
