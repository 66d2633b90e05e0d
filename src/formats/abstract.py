"""
Output format interfaces and result contracts for the converter.

Concrete formats (plain import text, gzip replay) implement the OutputFormat
protocol. The converter renders every record through the selected format and
reports each written file as a ConversionResult TypedDict.
"""

from __future__ import annotations

import abc
from typing import Iterable, Optional, Protocol, TypedDict, runtime_checkable

from src.domain.models import ConvertOptions, Record
from src.line_protocol import format_preamble, synthetic_timestamps


class ConversionResult(TypedDict, total=False):
    """
    Summary of one converted file.

    `skipped` counts rows dropped by the reader (short rows, non-numeric values).
    """

    source: str
    output: str
    format: str
    records: int
    skipped: int
    bytes_written: int


@runtime_checkable
class OutputFormat(Protocol):
    """
    Common interface all output formats must implement.

    Attributes
    ----------
    name : str
        A short machine-friendly identifier.
    description : str
        A human-friendly summary of the format.
    suffix : str
        File extension (with leading dot) given to converted files.
    """

    name: str
    description: str
    suffix: str

    def format_record(
        self, record: Record, options: ConvertOptions, timestamp: Optional[int] = None
    ) -> str:
        """Render one record, including any per-record framing."""
        ...

    def render(self, records: Iterable[Record], options: ConvertOptions) -> str:
        """Render the full text for one input file."""
        ...

    def encode(self, text: str) -> bytes:
        """Turn rendered text into the bytes written to disk."""
        ...


class AbstractOutputFormat(abc.ABC):
    """
    ABC helper holding the shared rendering loop.

    Subclasses set `name`, `description` and `suffix` and implement
    `format_record` and `encode`.
    """

    name: str
    description: str
    suffix: str

    @abc.abstractmethod
    def format_record(
        self, record: Record, options: ConvertOptions, timestamp: Optional[int] = None
    ) -> str:  # pragma: no cover - interface only
        raise NotImplementedError

    @abc.abstractmethod
    def encode(self, text: str) -> bytes:  # pragma: no cover - interface only
        raise NotImplementedError

    def render(self, records: Iterable[Record], options: ConvertOptions) -> str:
        """
        Render the preamble (import-file mode) followed by one statement per record.

        The synthetic clock restarts at 0 for every call; timestamps are only
        written when `options.fake_time` is set.
        """
        parts: list[str] = []
        if options.import_file:
            parts.append(format_preamble(options.database))
        for record, timestamp in synthetic_timestamps(records):
            parts.append(
                self.format_record(record, options, timestamp if options.fake_time else None)
            )
        return "".join(parts)


__all__ = [
    "AbstractOutputFormat",
    "ConversionResult",
    "OutputFormat",
]
