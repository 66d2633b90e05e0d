"""
Sample data generator for the CSV to line-protocol converter.

Writes deterministic pseudo-random `key,value` CSV files (optionally spread
over nested directories and salted with malformed rows) to try the converter
against.
"""

from __future__ import annotations

import csv
import random
import sys
import time
from pathlib import Path

import typer

app = typer.Typer(help="Generate sample key,value CSV files for conversion.")

KEYS = ["cpu", "mem", "disk", "net", "load"]


def _generate_rows_csv(
    csv_path: Path, rows: int, batch_size: int, seed: int, bad_rows: int = 0
) -> None:
    rng = random.Random(seed)
    bad_positions = set(rng.sample(range(rows), min(bad_rows, rows)))

    with csv_path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)

        buffer: list[list[str]] = []
        for i in range(rows):
            key = f"{rng.choice(KEYS)}-{i}"
            if i in bad_positions:
                value = "n/a"
            else:
                value = repr(round(rng.uniform(0, 1_000), 3))
            buffer.append([key, value])
            if len(buffer) >= batch_size:
                writer.writerows(buffer)
                buffer.clear()
        if buffer:
            writer.writerows(buffer)


@app.command()
def main(
    rows: int = typer.Option(
        1_000,
        "--rows",
        "-r",
        help="Number of rows per file.",
    ),
    files: int = typer.Option(
        1,
        "--files",
        "-f",
        help="Number of CSV files to generate.",
    ),
    batch_size: int = typer.Option(
        500,
        "--batch-size",
        "-b",
        help="Batch size for CSV buffering during generation.",
    ),
    seed: int = typer.Option(
        42,
        "--seed",
        help="Deterministic RNG seed.",
    ),
    bad_rows: int = typer.Option(
        0,
        "--bad-rows",
        help="Rows per file whose value is not numeric.",
    ),
    nested: bool = typer.Option(
        False,
        "--nested",
        help="Place every other file in a subdirectory to exercise the recursive walk.",
    ),
    output: Path = typer.Option(
        Path("sample_data"),
        "--output",
        "-o",
        help="Directory to write CSV files into.",
    ),
) -> None:
    """
    Generate sample CSV files.
    """
    start = time.perf_counter()
    for n in range(files):
        directory = output / f"part-{n // 2}" if nested and n % 2 else output
        directory.mkdir(parents=True, exist_ok=True)
        csv_path = directory / f"sample-{n:03d}.csv"
        _generate_rows_csv(
            csv_path, rows=rows, batch_size=batch_size, seed=seed + n, bad_rows=bad_rows
        )
        typer.echo(f"Wrote {rows:,} rows -> {csv_path}")

    duration = time.perf_counter() - start
    typer.echo(f"Generated {files} file(s) in {duration:.2f}s")


if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)
