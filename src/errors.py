"""
Error types for the CSV to line-protocol converter.

Only fatal conditions raise. Recoverable problems (bad rows, unparseable
files, unreadable directory entries) are logged where they occur and the
conversion carries on.
"""

from __future__ import annotations


class ConversionError(RuntimeError):
    """
    Fatal conversion failure.

    Raised when the input path cannot be located, a source file cannot be
    opened, the replay stream cannot be compressed, or the output cannot be
    written. The CLI reports it and exits with a non-zero status.
    """


__all__ = ["ConversionError"]
