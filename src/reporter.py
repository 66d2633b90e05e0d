from __future__ import annotations

from typing import List, Optional

from rich import box
from rich.console import Console
from rich.table import Table

from src.formats.abstract import ConversionResult


def _human_bytes(size: int) -> str:
    if size >= 1024 * 1024:
        return f"{size / (1024 * 1024):.2f} MB"
    if size >= 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size} B"


def print_results(results: List[ConversionResult], console: Optional[Console] = None) -> None:
    """
    Render converted files as a rich table, sorted by source path.

    Shows a totals row when more than one file was converted.
    """
    console = console or Console()

    if not results:
        console.print("[yellow]No CSV files converted.[/yellow]")
        return

    table = Table(
        title="CSV to Line Protocol",
        box=box.ROUNDED,
        caption="Sorted by source path",
    )

    table.add_column("Source", style="cyan", no_wrap=True)
    table.add_column("Output", style="blue", no_wrap=True)
    table.add_column("Format", style="magenta")
    table.add_column("Records", justify="right", style="bold green")
    table.add_column("Skipped", justify="right", style="red")
    table.add_column("Size", justify="right", style="yellow")

    for res in sorted(results, key=lambda r: r.get("source", "")):
        table.add_row(
            res.get("source", "Unknown"),
            res.get("output", "Unknown"),
            res.get("format", ""),
            f"{res.get('records', 0):,}",
            f"{res.get('skipped', 0):,}",
            _human_bytes(res.get("bytes_written", 0)),
        )

    if len(results) > 1:
        table.add_section()
        table.add_row(
            f"{len(results)} files",
            "",
            "",
            f"{sum(r.get('records', 0) for r in results):,}",
            f"{sum(r.get('skipped', 0) for r in results):,}",
            _human_bytes(sum(r.get("bytes_written", 0) for r in results)),
        )

    console.print(table)
