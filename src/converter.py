"""
Converter pipeline: resolve inputs, parse CSV, render line protocol, encode and write.

Usage (example from CLI):
    from src.converter import run_conversion
    from src.domain.models import ConvertOptions

    results = run_conversion(ConvertOptions(input_path="data/", replay=True))
    print(results)

Every converted `.csv` file produces one output file in `options.output_dir`:
- `<name>.txt` for plain line protocol
- `<name>.srpl` for gzip replay files
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, List, Optional

from src.domain.models import ConvertOptions
from src.formats.abstract import ConversionResult, OutputFormat
from src.formats.plain import PlainFormat
from src.formats.replay import ReplayFormat
from src.infrastructure.files import (
    is_convertible,
    output_path,
    read_records,
    resolve_inputs,
    write_output,
)
from src.utils.logging import get_logger

log = get_logger(__name__)


def _format_factories() -> Dict[str, Callable[[], OutputFormat]]:
    """Registry of available output formats."""
    return {
        "plain": lambda: PlainFormat(),
        "replay": lambda: ReplayFormat(),
    }


def available_formats() -> List[str]:
    """List available format names."""
    return sorted(_format_factories().keys())


def resolve_format(options: ConvertOptions) -> OutputFormat:
    name = "replay" if options.replay else "plain"
    return _format_factories()[name]()


def convert_file(
    path: Path,
    options: ConvertOptions,
    output_format: Optional[OutputFormat] = None,
    root: Optional[Path] = None,
) -> Optional[ConversionResult]:
    """
    Convert a single CSV file and write the result.

    Parameters
    ----------
    path : Path
        Source file. Anything without a `.csv` extension is skipped.
    options : ConvertOptions
        Run context (measurement, database, flags, output directory).
    output_format : OutputFormat | None
        Format to render with. Defaults to the one selected by `options.replay`.
    root : Path | None
        Walk root, used to mirror subdirectories when `options.preserve_structure` is set.

    Returns
    -------
    ConversionResult | None
        Summary of the written file, or None when the file was skipped.
    """
    if not is_convertible(path):
        log.debug("Skipping non-CSV file", extra={"path": str(path)})
        return None

    fmt = output_format or resolve_format(options)
    parsed = read_records(path)
    text = fmt.render(parsed.records, options)
    data = fmt.encode(text)

    relative_to = root if options.preserve_structure and root is not None else None
    destination = output_path(path, fmt.suffix, options.output_dir, relative_to=relative_to)
    written = write_output(data, destination)

    log.info(
        f"Converted {path} -> {destination}",
        extra={
            "format": fmt.name,
            "records": len(parsed.records),
            "skipped": parsed.skipped,
            "bytes": written,
        },
    )
    return ConversionResult(
        source=str(path),
        output=str(destination),
        format=fmt.name,
        records=len(parsed.records),
        skipped=parsed.skipped,
        bytes_written=written,
    )


def run_conversion(options: ConvertOptions) -> List[ConversionResult]:
    """
    Convert the input file, or every CSV file below the input directory.

    Files are processed one at a time in walk order. Any fatal error
    (ConversionError) stops the run immediately.

    Returns
    -------
    List[ConversionResult]
        One entry per written file, in processing order.
    """
    fmt = resolve_format(options)
    root = options.input_path if options.input_path.is_dir() else None
    log.info(
        f"[CONVERT START] {options.input_path}",
        extra={"format": fmt.name, "output_dir": str(options.output_dir)},
    )

    results: List[ConversionResult] = []
    for path in resolve_inputs(options.input_path):
        result = convert_file(path, options, output_format=fmt, root=root)
        if result is not None:
            results.append(result)

    log.info(
        f"[CONVERT COMPLETE] {len(results)} file(s) converted",
        extra={"files": len(results), "records": sum(r["records"] for r in results)},
    )
    return results


__all__ = [
    "available_formats",
    "convert_file",
    "resolve_format",
    "run_conversion",
]
