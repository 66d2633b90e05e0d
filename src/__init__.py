"""
CSV to Line Protocol - convert key/value CSV files for InfluxDB import.

This package turns two-column delimited files into line protocol, either as
plain import text or as gzip-compressed replay files:

- Single files or whole directory trees (walked recursively)
- Optional DDL/DML preamble for `influx -import`
- Optional synthetic timestamps, 10 seconds apart from the epoch
- Per-record database/retention-policy framing for replay files
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from src.config import Settings, get_settings
from src.converter import available_formats, convert_file, run_conversion
from src.domain.models import ConvertOptions, Record
from src.errors import ConversionError
from src.formats.abstract import AbstractOutputFormat, ConversionResult, OutputFormat
from src.line_protocol import TIMESTAMP_STEP_NS, format_float, format_line, format_preamble
from src.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Conversion
    "available_formats",
    "convert_file",
    "run_conversion",
    "ConversionError",
    # Domain
    "ConvertOptions",
    "Record",
    # Formats
    "AbstractOutputFormat",
    "ConversionResult",
    "OutputFormat",
    # Line protocol
    "TIMESTAMP_STEP_NS",
    "format_float",
    "format_line",
    "format_preamble",
    # Logging
    "configure_logging",
    "get_logger",
]
