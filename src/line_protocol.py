"""
Line protocol rendering.

Line protocol syntax:
    <measurement>[,<tag_key>=<tag_value>...] <field_key>=<field_value>[,...] [<timestamp>]

Every record becomes `<measurement> key="<key>",value=<value>` with an optional
synthetic timestamp. Replay framing and the import preamble are layered on top
by the output formats in `src.formats`.

Usage:
    from src.line_protocol import format_line

    format_line("cpu", Record(key="a", value=0.55))            # 'cpu key="a",value=0.55\\n'
    format_line("cpu", Record(key="a", value=0.55), timestamp=0)  # 'cpu key="a",value=0.55 0\\n'
"""

from __future__ import annotations

import math
from decimal import Decimal
from typing import Iterable, Iterator, Optional, Tuple

from src.domain.models import Record

# 10 seconds in nanoseconds
TIMESTAMP_STEP_NS = 10_000_000_000

# Values whose decimal exponent falls outside [-4, 6) are written in e-notation.
_MIN_PLAIN_EXP = -4
_MAX_PLAIN_EXP = 6


def format_float(value: float) -> str:
    """
    Render a float with its shortest round-tripping digits.

    Small and moderate magnitudes are written as plain decimals without
    trailing zeros (`0.55`, `2`, `123456`); anything else uses a mantissa and
    a signed two-digit exponent (`1e+06`, `1.2e+10`, `1e-05`).
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if value == 0:
        return "-0" if math.copysign(1.0, value) < 0 else "0"

    sign, digit_tuple, exponent = Decimal(repr(value)).as_tuple()
    exp = len(digit_tuple) + exponent - 1
    digits = "".join(str(d) for d in digit_tuple).rstrip("0")
    prefix = "-" if sign else ""

    if exp < _MIN_PLAIN_EXP or exp >= _MAX_PLAIN_EXP:
        mantissa = digits[0] + ("." + digits[1:] if len(digits) > 1 else "")
        exp_sign = "-" if exp < 0 else "+"
        return f"{prefix}{mantissa}e{exp_sign}{abs(exp):02d}"

    if exp < 0:
        return f"{prefix}0.{'0' * (-exp - 1)}{digits}"

    integer = digits[: exp + 1].ljust(exp + 1, "0")
    fraction = digits[exp + 1 :]
    return prefix + integer + ("." + fraction if fraction else "")


def format_line(measurement: str, record: Record, timestamp: Optional[int] = None) -> str:
    """
    Format a single record as one newline-terminated line protocol statement.
    """
    line = f'{measurement} key="{record.key}",value={format_float(record.value)}'
    if timestamp is not None:
        line = f"{line} {timestamp}"
    return line + "\n"


def format_preamble(database: str) -> str:
    """Header for influx import files: create the database, then select it."""
    return (
        "# DDL\n"
        f"CREATE DATABASE {database}\n\n"
        "# DML\n"
        f"# CONTEXT-DATABASE: {database}\n\n"
    )


def synthetic_timestamps(records: Iterable[Record]) -> Iterator[Tuple[Record, int]]:
    """
    Pair each record with a fake timestamp starting at the epoch.

    The clock starts at 0 and advances by TIMESTAMP_STEP_NS per record; it is
    never shared between calls.
    """
    timestamp = 0
    for record in records:
        yield record, timestamp
        timestamp += TIMESTAMP_STEP_NS


__all__ = [
    "TIMESTAMP_STEP_NS",
    "format_float",
    "format_line",
    "format_preamble",
    "synthetic_timestamps",
]
