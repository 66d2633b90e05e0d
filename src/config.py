"""
Configuration settings for the CSV to line-protocol converter.

Uses Pydantic Settings to load environment variables (or a `.env` file) for
logging and for the defaults of the CLI options, so a deployment can pin its
database, measurement and output directory without repeating flags.
"""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.domain.models import ConvertOptions


class Settings(BaseSettings):
    # Conversion defaults
    input_path: Path = Field(Path("path/to/file.csv"), alias="CSV2LP_INPUT")
    output_dir: Path = Field(Path("converted/"), alias="CSV2LP_OUTPUT")
    database: str = Field("mydb", alias="CSV2LP_DB")
    measurement: str = Field("table_test", alias="CSV2LP_TABLE")
    retention_policy: str = Field("autogen", alias="CSV2LP_RP")

    # Logging
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_json: bool = Field(False, alias="LOG_JSON")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    def to_options(self, **overrides: object) -> ConvertOptions:
        """
        Build run options from these defaults, applying any non-None overrides.
        """
        values: dict[str, object] = {
            "input_path": self.input_path,
            "output_dir": self.output_dir,
            "database": self.database,
            "measurement": self.measurement,
            "retention_policy": self.retention_policy,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return ConvertOptions(**values)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["Settings", "get_settings"]
