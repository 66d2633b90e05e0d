from __future__ import annotations

import gzip
from pathlib import Path
from typing import Callable

import pytest

from src.converter import convert_file, run_conversion
from src.domain.models import ConvertOptions
from src.errors import ConversionError

PREAMBLE = "# DDL\nCREATE DATABASE mydb\n\n# DML\n# CONTEXT-DATABASE: mydb\n\n"


def test_convert_file_plain(
    write_csv: Callable[..., Path],
    make_options: Callable[..., ConvertOptions],
    output_dir: Path,
) -> None:
    source = write_csv("temps.csv", "a,1.5\nb,2\n")
    result = convert_file(source, make_options())

    assert result is not None
    assert result["records"] == 2
    assert result["format"] == "plain"
    out = output_dir / "temps.txt"
    assert result["output"] == str(out)
    assert out.read_text(encoding="utf-8") == 'temp key="a",value=1.5\ntemp key="b",value=2\n'


def test_convert_file_fake_time(
    write_csv: Callable[..., Path],
    make_options: Callable[..., ConvertOptions],
    output_dir: Path,
) -> None:
    source = write_csv("temps.csv", "a,1.5\nb,2\n")
    convert_file(source, make_options(fake_time=True))
    assert (output_dir / "temps.txt").read_text(encoding="utf-8") == (
        'temp key="a",value=1.5 0\ntemp key="b",value=2 10000000000\n'
    )


def test_convert_file_skips_non_csv(
    write_csv: Callable[..., Path],
    make_options: Callable[..., ConvertOptions],
    output_dir: Path,
) -> None:
    assert convert_file(write_csv("notes.txt", "a,1\n"), make_options()) is None
    assert not output_dir.exists()


def test_replay_is_plain_with_per_record_header(
    write_csv: Callable[..., Path],
    make_options: Callable[..., ConvertOptions],
    output_dir: Path,
) -> None:
    source = write_csv("temps.csv", "a,1.5\nb,2\nc,-0.25\n")
    convert_file(source, make_options(fake_time=True, import_file=True))
    convert_file(source, make_options(fake_time=True, import_file=True, replay=True))

    plain = (output_dir / "temps.txt").read_text(encoding="utf-8")
    replay = gzip.decompress((output_dir / "temps.srpl").read_bytes()).decode("utf-8")

    assert plain.startswith(PREAMBLE)
    assert replay.startswith(PREAMBLE)
    plain_lines = plain[len(PREAMBLE):].splitlines(keepends=True)
    expected = "".join(f"mydb\nautogen\n{line}" for line in plain_lines)
    assert replay[len(PREAMBLE):] == expected


def test_skipped_rows_do_not_advance_clock(
    write_csv: Callable[..., Path],
    make_options: Callable[..., ConvertOptions],
    output_dir: Path,
) -> None:
    source = write_csv("temps.csv", "a,1\nbad,x\nb,2\n")
    result = convert_file(source, make_options(fake_time=True))

    assert result is not None
    assert result["skipped"] == 1
    assert (output_dir / "temps.txt").read_text(encoding="utf-8") == (
        'temp key="a",value=1 0\ntemp key="b",value=2 10000000000\n'
    )


def test_run_conversion_walks_directory_and_flattens(
    write_csv: Callable[..., Path],
    make_options: Callable[..., ConvertOptions],
    output_dir: Path,
) -> None:
    write_csv("one.csv", "a,1\n")
    write_csv("sub/two.csv", "b,2\nc,3\n")
    write_csv("sub/notes.txt", "ignored,1\n")

    results = run_conversion(make_options())

    assert sorted(p.name for p in output_dir.iterdir()) == ["one.txt", "two.txt"]
    assert [r["records"] for r in results] == [1, 2]
    assert (output_dir / "two.txt").read_text(encoding="utf-8").count("\n") == 2


def test_run_conversion_preserve_structure(
    write_csv: Callable[..., Path],
    make_options: Callable[..., ConvertOptions],
    output_dir: Path,
) -> None:
    write_csv("x/data.csv", "a,1\n")
    write_csv("y/data.csv", "b,2\n")

    run_conversion(make_options(preserve_structure=True))

    assert (output_dir / "x" / "data.txt").read_text(encoding="utf-8") == 'temp key="a",value=1\n'
    assert (output_dir / "y" / "data.txt").read_text(encoding="utf-8") == 'temp key="b",value=2\n'


def test_run_conversion_single_file(
    write_csv: Callable[..., Path],
    make_options: Callable[..., ConvertOptions],
    output_dir: Path,
) -> None:
    source = write_csv("deep/one.csv", "a,1\n")
    results = run_conversion(make_options(input_path=source, preserve_structure=True))
    assert [r["output"] for r in results] == [str(output_dir / "one.txt")]


def test_run_conversion_timestamps_reset_per_file(
    write_csv: Callable[..., Path],
    make_options: Callable[..., ConvertOptions],
    output_dir: Path,
) -> None:
    write_csv("a.csv", "a,1\nb,2\n")
    write_csv("b.csv", "c,3\n")
    run_conversion(make_options(fake_time=True))
    assert (output_dir / "b.txt").read_text(encoding="utf-8") == 'temp key="c",value=3 0\n'


def test_run_conversion_missing_input_is_fatal(
    tmp_path: Path, make_options: Callable[..., ConvertOptions]
) -> None:
    with pytest.raises(ConversionError):
        run_conversion(make_options(input_path=tmp_path / "missing"))


def test_run_conversion_overwrites_previous_output(
    write_csv: Callable[..., Path],
    make_options: Callable[..., ConvertOptions],
    output_dir: Path,
) -> None:
    write_csv("a.csv", "a,1\nb,2\n")
    options = make_options()
    run_conversion(options)
    run_conversion(options)
    assert (output_dir / "a.txt").read_text(encoding="utf-8") == (
        'temp key="a",value=1\ntemp key="b",value=2\n'
    )


def test_run_conversion_skips_unreadable_subdirectory(
    write_csv: Callable[..., Path],
    make_options: Callable[..., ConvertOptions],
    output_dir: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    write_csv("a.csv", "a,1\n")
    write_csv("broken/b.csv", "b,2\n")
    write_csv("c.csv", "c,3\n")
    original_iterdir = Path.iterdir

    def _iterdir(self: Path):
        if self.name == "broken":
            raise OSError(5, "Input/output error", str(self))
        return original_iterdir(self)

    monkeypatch.setattr(Path, "iterdir", _iterdir)
    results = run_conversion(make_options())

    assert [Path(r["source"]).name for r in results] == ["a.csv", "c.csv"]
    assert sorted(p.name for p in output_dir.iterdir()) == ["a.txt", "c.txt"]


def test_convert_file_bare_csv_name(
    write_csv: Callable[..., Path],
    make_options: Callable[..., ConvertOptions],
    output_dir: Path,
) -> None:
    result = convert_file(write_csv(".csv", "a,1\n"), make_options())
    assert result is not None
    assert (output_dir / ".txt").read_text(encoding="utf-8") == 'temp key="a",value=1\n'
