"""
File system access for the converter: input discovery, CSV parsing and output writing.

Error policy:
- Missing input, unopenable source files and output write failures raise
  ConversionError and end the run.
- Unreadable directory entries, malformed CSV files and bad rows are logged
  and skipped.
"""

from __future__ import annotations

import csv
import math
import re
import stat
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, List, Tuple

from src.domain.models import Record
from src.errors import ConversionError
from src.utils.logging import get_logger

log = get_logger(__name__)

CSV_EXTENSION = "csv"
OUTPUT_DIR_MODE = 0o755

# Accepted value spellings: ASCII decimal or hex-with-exponent floats, inf/infinity, nan.
# No whitespace, digit separators or non-ASCII digits.
_DECIMAL_FLOAT = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_HEX_FLOAT = re.compile(
    r"[+-]?0[xX](?:[0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)[pP][+-]?[0-9]+"
)
_SPECIAL_FLOAT = re.compile(r"[+-]?inf(?:inity)?|nan", re.IGNORECASE)


@dataclass
class ParsedFile:
    """
    Records parsed from one CSV file plus the number of rows that were dropped.
    """

    path: Path
    records: List[Record] = field(default_factory=list)
    skipped: int = 0


def split_extension(name: str) -> Tuple[str, str]:
    """
    Split a file name at its last dot: "data.csv" -> ("data", ".csv").

    Unlike `Path.suffix`, a leading dot counts, so ".csv" -> ("", ".csv").
    """
    dot = name.rfind(".")
    if dot < 0:
        return name, ""
    return name[:dot], name[dot:]


def is_convertible(path: Path) -> bool:
    """Only `.csv` files are converted; the extension match is case-sensitive."""
    return split_extension(path.name)[1].lstrip(".") == CSV_EXTENSION


def parse_float(text: str) -> float:
    """
    Parse a value column as a 64-bit float.

    Raises
    ------
    ValueError
        If the text is not a plain ASCII float literal, or is finite but out of range.
    """
    if _HEX_FLOAT.fullmatch(text):
        value = float.fromhex(text)
    elif _DECIMAL_FLOAT.fullmatch(text) or _SPECIAL_FLOAT.fullmatch(text):
        value = float(text)
    else:
        raise ValueError(f"invalid syntax: {text!r}")
    if math.isinf(value) and not _SPECIAL_FLOAT.fullmatch(text):
        raise ValueError(f"value out of range: {text!r}")
    return value


def walk_files(root: Path) -> Iterator[Path]:
    """
    Yield every regular file below `root` in lexical order, depth first.
    Symlinked directories are not descended into; symlinked files are yielded.

    Entries that cannot be listed or stat'ed are logged and skipped so one bad
    entry does not stop the rest of the walk.
    """
    try:
        entries = sorted(root.iterdir(), key=lambda p: p.name)
    except OSError as exc:
        log.error(f"Not able to read directory: {exc}", extra={"path": str(root)})
        return

    for entry in entries:
        try:
            if entry.is_dir() and not entry.is_symlink():
                yield from walk_files(entry)
            elif entry.is_file():
                yield entry
        except OSError as exc:
            log.error(f"Not able to convert file: {exc}", extra={"path": str(entry)})


def resolve_inputs(path: Path) -> Iterator[Path]:
    """
    Expand the input path into the files to consider for conversion.

    Raises
    ------
    ConversionError
        If the path does not exist or cannot be accessed.
    """
    try:
        mode = path.stat().st_mode
    except OSError as exc:
        raise ConversionError(f"Not able to locate filepath: {exc}") from exc

    if stat.S_ISDIR(mode):
        return walk_files(path)
    return iter([path])


def read_records(path: Path) -> ParsedFile:
    """
    Parse a `key,value` CSV file into records.

    Columns past the second are ignored. Rows with fewer than two fields or a
    non-numeric value are logged and skipped. A file that is not valid CSV
    yields no records at all.
    """
    parsed = ParsedFile(path=path)
    try:
        f = path.open("r", newline="", encoding="utf-8")
    except OSError as exc:
        raise ConversionError(f"Could not open CSV file: {exc}") from exc

    with f:
        try:
            rows = [row for row in csv.reader(f, strict=True) if row]
        except (csv.Error, UnicodeDecodeError) as exc:
            log.error(f"Could not read CSV file: {exc}", extra={"path": str(path)})
            return parsed

    for line_no, row in enumerate(rows, start=1):
        if len(row) < 2:
            log.error(
                "Skipping row with fewer than two fields",
                extra={"path": str(path), "row": line_no},
            )
            parsed.skipped += 1
            continue
        key, raw_value = row[0], row[1]
        try:
            value = parse_float(raw_value)
        except (ValueError, OverflowError) as exc:
            log.error(
                f"Could not convert CSV value to float: {exc}",
                extra={"path": str(path), "row": line_no},
            )
            parsed.skipped += 1
            continue
        parsed.records.append(Record(key=key, value=value))

    return parsed


def output_path(
    source: Path, suffix: str, output_dir: Path, relative_to: Path | None = None
) -> Path:
    """
    Destination for a converted file.

    By default only the base name is kept, flattening any directory walk into
    `output_dir`. With `relative_to` the source's subdirectories below that
    root are mirrored instead.
    """
    name = split_extension(source.name)[0] + suffix
    if relative_to is None:
        return output_dir / name
    return output_dir / source.parent.relative_to(relative_to) / name


def write_output(data: bytes, destination: Path) -> int:
    """
    Write `data` to `destination`, creating parent directories and replacing any existing file.

    Returns the number of bytes written.
    """
    try:
        destination.parent.mkdir(mode=OUTPUT_DIR_MODE, parents=True, exist_ok=True)
    except OSError as exc:
        raise ConversionError(f"Not able to create output directory: {exc}") from exc

    try:
        with destination.open("wb") as f:
            f.write(data)
    except OSError as exc:
        raise ConversionError(f"Could not write output file: {exc}") from exc

    return len(data)


__all__ = [
    "CSV_EXTENSION",
    "ParsedFile",
    "is_convertible",
    "output_path",
    "parse_float",
    "read_records",
    "resolve_inputs",
    "split_extension",
    "walk_files",
    "write_output",
]
