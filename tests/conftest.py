"""
Pytest configuration for the CSV to line-protocol converter.

Provides fixtures for:
- Writing CSV inputs into a temporary tree
- Building run options that point at temporary output directories
- Isolating settings and logging configuration between tests
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Generator

import pytest

from src.config import get_settings
from src.domain.models import ConvertOptions

SETTINGS_ENV_VARS = (
    "CSV2LP_INPUT",
    "CSV2LP_OUTPUT",
    "CSV2LP_DB",
    "CSV2LP_TABLE",
    "CSV2LP_RP",
    "LOG_LEVEL",
    "LOG_JSON",
)


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """
    Clear settings env vars and the cached Settings instance around each test.
    """
    for name in SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def restore_root_logging() -> Generator[None, None, None]:
    """
    The CLI reconfigures the root logger; put the original handlers back afterwards.
    """
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def input_dir(tmp_path: Path) -> Path:
    path = tmp_path / "input"
    path.mkdir()
    return path


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    """Output location that does not exist yet; the writer must create it."""
    return tmp_path / "converted" / "lp"


@pytest.fixture
def write_csv(input_dir: Path) -> Callable[..., Path]:
    """
    Write a file below the input directory and return its path.
    """

    def _write(name: str, content: str | bytes) -> Path:
        path = input_dir / name
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def make_options(input_dir: Path, output_dir: Path) -> Callable[..., ConvertOptions]:
    """
    Build ConvertOptions defaulting to the temporary input/output directories.
    """

    def _make(**overrides: object) -> ConvertOptions:
        values: dict[str, object] = {
            "input_path": input_dir,
            "output_dir": output_dir,
            "measurement": "temp",
        }
        values.update(overrides)
        return ConvertOptions(**values)

    return _make
