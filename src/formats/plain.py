"""
Plain line protocol format: uncompressed UTF-8 text with a `.txt` suffix.

This is what the influx CLI `-import` expects, optionally headed by the
DDL/DML preamble.
"""

from __future__ import annotations

from typing import Optional

from src.domain.models import ConvertOptions, Record
from src.formats.abstract import AbstractOutputFormat
from src.line_protocol import format_line


class PlainFormat(AbstractOutputFormat):
    """
    One statement per record, e.g. `cpu key="a",value=0.55 1422568543702900257`.
    """

    name: str = "plain"
    description: str = "Uncompressed line protocol (.txt)."
    suffix: str = ".txt"

    def format_record(
        self, record: Record, options: ConvertOptions, timestamp: Optional[int] = None
    ) -> str:
        return format_line(options.measurement, record, timestamp)

    def encode(self, text: str) -> bytes:
        return text.encode("utf-8")


__all__ = ["PlainFormat"]
