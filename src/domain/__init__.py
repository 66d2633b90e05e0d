"""
Domain package for the CSV to line-protocol converter.

Exports the record and run-option models shared by the reader, formatters
and converter. Keep this package focused on data definitions.
"""

from src.domain.models import ConvertOptions, Record

__all__ = [
    "ConvertOptions",
    "Record",
]
