"""
Infrastructure package for the converter.

Centralizes file system concerns (input discovery, CSV parsing, output
writing). Keep this layer focused on I/O, decoupled from line protocol
formatting and orchestration.
"""

from src.infrastructure.files import (
    ParsedFile,
    is_convertible,
    output_path,
    read_records,
    resolve_inputs,
    walk_files,
    write_output,
)

__all__ = [
    "ParsedFile",
    "is_convertible",
    "output_path",
    "read_records",
    "resolve_inputs",
    "walk_files",
    "write_output",
]
