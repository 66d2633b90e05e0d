"""
Domain models for the CSV to line-protocol converter.

`Record` is a single parsed CSV row. `ConvertOptions` is the immutable run
context built once at startup and handed to every stage of the pipeline.
"""
from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field


class Record(BaseModel):
    """
    One `key,value` row from a delimited input file.
    """

    key: str = Field(..., description="First column, written as the `key` string field.")
    value: float = Field(..., description="Second column parsed as a 64-bit float.")

    model_config = {
        "frozen": True,
    }


class ConvertOptions(BaseModel):
    """
    Formatting and output context for a whole run.
    """

    input_path: Path = Field(Path("path/to/file.csv"), description="CSV file or directory.")
    output_dir: Path = Field(Path("converted/"), description="Destination directory.")
    measurement: str = Field("table_test", description="Measurement (table) name.")
    database: str = Field("mydb", description="Database for replay headers and the preamble.")
    retention_policy: str = Field("autogen", description="Retention policy for replay headers.")
    replay: bool = Field(False, description="Emit gzip-compressed .srpl replay files.")
    import_file: bool = Field(False, description="Prepend the DDL/DML import preamble.")
    fake_time: bool = Field(False, description="Append a synthetic timestamp to each line.")
    preserve_structure: bool = Field(
        False, description="Mirror input subdirectories below output_dir instead of flattening."
    )

    model_config = {
        "frozen": True,
        "populate_by_name": True,
    }


__all__ = ["ConvertOptions", "Record"]
