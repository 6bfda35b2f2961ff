"""Command-line interface for sitelens."""

import asyncio
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from sitelens import (
    Analyzer,
    AnalyzerConfig,
    SQLiteWebsiteStore,
    save_json,
    to_record,
    __version__,
)
from sitelens.config import LogFormat
from sitelens.core.exporter import result_filename

app = typer.Typer(
    name="sitelens",
    help="Website brand and description analyzer",
    add_completion=False,
)
console = Console()


def version_callback(value: bool):
    if value:
        console.print(f"sitelens version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
):
    """sitelens - website brand and description analyzer."""
    pass


@app.command()
def analyze(
    urls: list[str] = typer.Argument(..., help="Website URLs to analyze"),
    enhance: bool = typer.Option(
        True, "--enhance/--no-enhance", help="Rewrite descriptions with AI"
    ),
    save: bool = typer.Option(
        False, "--save", "-s", help="Store successful results in the database"
    ),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Output directory for JSON files"
    ),
    timeout: Optional[int] = typer.Option(
        None, "--timeout", "-t", help="Navigation timeout in ms"
    ),
    headless: bool = typer.Option(
        True, "--headless/--no-headless", help="Run browser in headless mode"
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress output, only show errors"
    ),
):
    """Analyze one or more websites."""
    config = AnalyzerConfig(
        headless=headless,
        log_format=LogFormat.CONSOLE if not quiet else LogFormat.JSON,
    )

    async def run():
        results = []
        async with Analyzer(config) as analyzer:
            for url in urls:
                results.append(await analyzer.analyze(url, enhance=enhance, timeout_ms=timeout))

        for result in results:
            if not result.success:
                console.print(
                    f"[red]✗[/red] {result.url}: {result.error} "
                    f"[dim]({result.error_category.value})[/dim]"
                )
                continue

            if not quiet:
                _print_result(result)

            if output:
                filepath = save_json(result, output / result_filename(result))
                console.print(f"[dim]Saved to {filepath}[/dim]")

        if save:
            async with SQLiteWebsiteStore(config.database_path) as store:
                for result in results:
                    if result.success:
                        record = await store.create(to_record(result))
                        console.print(f"[dim]Stored {result.url} as record #{record.id}[/dim]")

        success_count = sum(1 for r in results if r.success)
        console.print(f"\n[bold]Analyzed {success_count}/{len(results)} websites[/bold]")
        if success_count < len(results):
            raise typer.Exit(1)

    asyncio.run(run())


@app.command("list")
def list_records():
    """List stored analyses."""
    config = AnalyzerConfig()

    async def run():
        async with SQLiteWebsiteStore(config.database_path) as store:
            records = await store.list_all()

        if not records:
            console.print("No records stored")
            return

        table = Table(title=f"{len(records)} records")
        table.add_column("ID", justify="right")
        table.add_column("Brand")
        table.add_column("URL", style="blue")
        table.add_column("AI", justify="center")
        table.add_column("Created", style="dim")
        for record in records:
            table.add_row(
                str(record.id),
                record.brand_name or "-",
                record.url,
                "✓" if record.enhanced else "",
                record.created_at.strftime("%Y-%m-%d %H:%M"),
            )
        console.print(table)

    asyncio.run(run())


@app.command()
def show(record_id: int = typer.Argument(..., help="Record ID")):
    """Show a stored analysis."""
    config = AnalyzerConfig()

    async def run():
        async with SQLiteWebsiteStore(config.database_path) as store:
            record = await store.get(record_id)

        if record is None:
            console.print(f"[red]Record #{record_id} not found[/red]")
            raise typer.Exit(1)

        table = Table(title=f"#{record.id}", show_header=False)
        table.add_column("Field", style="dim")
        table.add_column("Value")
        table.add_row("URL", record.url)
        table.add_row("Brand", record.brand_name or "-")
        table.add_row("Description", record.description or "-")
        table.add_row("Raw description", record.raw_description or "-")
        table.add_row("Enhanced", "✓" if record.enhanced else "✗")
        table.add_row("Created", record.created_at.isoformat(timespec="seconds"))
        table.add_row("Updated", record.updated_at.isoformat(timespec="seconds"))
        console.print(table)

    asyncio.run(run())


@app.command()
def delete(record_id: int = typer.Argument(..., help="Record ID")):
    """Delete a stored analysis."""
    config = AnalyzerConfig()

    async def run():
        async with SQLiteWebsiteStore(config.database_path) as store:
            record = await store.delete(record_id)

        if record is None:
            console.print(f"[red]Record #{record_id} not found[/red]")
            raise typer.Exit(1)
        console.print(f"[green]✓[/green] Deleted #{record.id} ({record.url})")

    asyncio.run(run())


@app.command()
def status():
    """Show AI enhancement status."""
    analyzer = Analyzer(AnalyzerConfig())
    info = analyzer.status()
    state = "[green]enabled[/green]" if info.enabled else "[yellow]fallback mode[/yellow]"
    console.print(f"AI enhancement: {state}")
    console.print(f"Model: {info.model}")


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", "--host", help="Bind address"),
    port: int = typer.Option(8000, "--port", "-p", help="Bind port"),
):
    """Run the REST API."""
    import uvicorn

    uvicorn.run("sitelens.api:app", host=host, port=port)


def _print_result(result):
    """Print scrape result summary."""
    ai_tag = "[dim](AI enhanced)[/dim]" if result.enhanced and not result.used_fallback else ""

    console.print(f"\n[bold]{result.brand_name}[/bold] {ai_tag}")
    console.print(f"  [blue]{result.url}[/blue]")
    console.print(f"  {result.description}")
    console.print(f"  [dim]{result.duration_ms:,.0f} ms[/dim]")


if __name__ == "__main__":
    app()
