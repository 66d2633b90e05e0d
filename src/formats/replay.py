"""
Replay format: gzip-compressed line protocol with a `.srpl` suffix.

Every statement is framed by the target database and retention policy:

    mydb
    autogen
    cpu key="a",value=0 1486489200000

The header pair is repeated before each record, not written once per file.
"""

from __future__ import annotations

import gzip
import zlib
from typing import Optional

from src.domain.models import ConvertOptions, Record
from src.errors import ConversionError
from src.formats.abstract import AbstractOutputFormat
from src.line_protocol import format_line

# zlib's default level
DEFAULT_COMPRESS_LEVEL = 6


class ReplayFormat(AbstractOutputFormat):
    """
    Per-record `<db>\\n<rp>\\n<line>` blocks, gzip-compressed as a whole.
    """

    name: str = "replay"
    description: str = "Gzip-compressed replay stream (.srpl)."
    suffix: str = ".srpl"

    def __init__(self, compresslevel: int = DEFAULT_COMPRESS_LEVEL) -> None:
        self._compresslevel = compresslevel

    def format_record(
        self, record: Record, options: ConvertOptions, timestamp: Optional[int] = None
    ) -> str:
        header = f"{options.database}\n{options.retention_policy}\n"
        return header + format_line(options.measurement, record, timestamp)

    def encode(self, text: str) -> bytes:
        """
        Compress the rendered text. The gzip header mtime is zeroed so the same
        input always produces the same bytes.
        """
        try:
            return gzip.compress(
                text.encode("utf-8"), compresslevel=self._compresslevel, mtime=0
            )
        except (OSError, ValueError, zlib.error) as exc:
            raise ConversionError(f"Could not write to gzip buffer: {exc}") from exc


__all__ = ["DEFAULT_COMPRESS_LEVEL", "ReplayFormat"]
