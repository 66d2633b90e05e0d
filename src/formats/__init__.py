"""
Output formats package for the converter.

Re-exports the abstract interfaces and the concrete formats so downstream
code can import from `src.formats` directly.
"""

from src.formats.abstract import AbstractOutputFormat, ConversionResult, OutputFormat
from src.formats.plain import PlainFormat
from src.formats.replay import ReplayFormat

__all__ = [
    # Abstracts
    "AbstractOutputFormat",
    "ConversionResult",
    "OutputFormat",
    # Concrete formats
    "PlainFormat",
    "ReplayFormat",
]
