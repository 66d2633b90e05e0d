from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import typer

from src.config import get_settings
from src.converter import run_conversion
from src.errors import ConversionError
from src.reporter import print_results
from src.utils.logging import configure_logging, get_logger

app = typer.Typer(help="Convert CSV files to InfluxDB line protocol.")

log = get_logger(__name__)


@app.command()
def convert(
    input_path: Optional[Path] = typer.Option(
        None,
        "-input",
        "--input",
        help="CSV file or directory to convert (default: path/to/file.csv).",
    ),
    output_dir: Optional[Path] = typer.Option(
        None,
        "-output",
        "--output",
        help="Output directory (default: converted/).",
    ),
    replay: bool = typer.Option(
        False,
        "-replay",
        "--replay",
        help="Create a gzip-compressed replay file (.srpl).",
    ),
    import_file: bool = typer.Option(
        False,
        "-importFile",
        "--importFile",
        help="Create an influx import file with a DDL/DML preamble.",
    ),
    database: Optional[str] = typer.Option(
        None,
        "-db",
        "--db",
        help="Database name for replay headers and the import preamble (default: mydb).",
    ),
    measurement: Optional[str] = typer.Option(
        None,
        "-table",
        "--table",
        help="Table (measurement) name (default: table_test).",
    ),
    retention_policy: Optional[str] = typer.Option(
        None,
        "-rp",
        "--rp",
        help="Database retention policy, replay files only (default: autogen).",
    ),
    fake_time: bool = typer.Option(
        False,
        "-time",
        "--time",
        help="Add a fake timestamp to the data, 10s apart starting at the epoch.",
    ),
    keep_tree: bool = typer.Option(
        False,
        "-keepTree",
        "--keepTree",
        help="Mirror input subdirectories in the output directory instead of flattening.",
    ),
    summary: bool = typer.Option(
        False,
        "-summary",
        "--summary",
        help="Print a table of converted files when done.",
    ),
) -> None:
    """
    Convert a CSV file, or every CSV file below a directory, to line protocol.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)

    options = settings.to_options(
        input_path=input_path,
        output_dir=output_dir,
        database=database,
        measurement=measurement,
        retention_policy=retention_policy,
        replay=replay,
        import_file=import_file,
        fake_time=fake_time,
        preserve_structure=keep_tree,
    )

    try:
        results = run_conversion(options)
    except ConversionError as exc:
        log.error(str(exc), extra={"input": str(options.input_path)})
        raise typer.Exit(code=1) from exc

    if summary:
        print_results(results)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
