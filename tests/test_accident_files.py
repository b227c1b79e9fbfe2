from __future__ import annotations

import bz2
from pathlib import Path

import pytest

from models.errors import AccidentFileNotFoundError
from storage.accident_files import AccidentFileStore, make_filename


def _write_accident_file(root: Path, name: str, content: str) -> Path:
    path = root / name
    path.write_bytes(bz2.compress(content.encode("utf-8")))
    return path


def test_make_filename_uses_integer_year() -> None:
    assert make_filename(2013) == "accident_2013.csv.bz2"
    assert make_filename("2014") == "accident_2014.csv.bz2"
    assert make_filename(2015.9) == "accident_2015.csv.bz2"


def test_make_filename_rejects_non_numeric_text() -> None:
    with pytest.raises(ValueError):
        make_filename("twenty-thirteen")


def test_read_table_keeps_header_and_rows(tmp_path) -> None:
    _write_accident_file(
        tmp_path,
        "accident_2013.csv.bz2",
        "STATE,ST_CASE,MONTH,LATITUDE,LONGITUD\n"
        "1,10001,1,33.5,-86.8\n"
        "1,10002,2,34.1,-87.2\n",
    )
    store = AccidentFileStore(root_path=tmp_path)

    table = store.read_table("accident_2013.csv.bz2")

    assert table.filename == "accident_2013.csv.bz2"
    assert table.columns == ("STATE", "ST_CASE", "MONTH", "LATITUDE", "LONGITUD")
    assert len(table) == 2
    assert table.column("MONTH") == ("1", "2")
    assert table.rows[1]["ST_CASE"] == "10002"


def test_read_table_rows_are_read_only(tmp_path) -> None:
    _write_accident_file(tmp_path, "accident_2013.csv.bz2", "STATE,MONTH\n1,1\n")
    table = AccidentFileStore(root_path=tmp_path).read_table("accident_2013.csv.bz2")

    with pytest.raises(TypeError):
        table.rows[0]["MONTH"] = "5"  # type: ignore[index]


def test_read_table_reads_plain_csv(tmp_path) -> None:
    (tmp_path / "accident_sample.csv").write_text("STATE,MONTH\n4,7\n", encoding="utf-8")

    table = AccidentFileStore(root_path=tmp_path).read_table("accident_sample.csv")

    assert table.column("STATE") == ("4",)


def test_read_table_missing_file_reports_filename(tmp_path) -> None:
    store = AccidentFileStore(root_path=tmp_path)

    with pytest.raises(AccidentFileNotFoundError) as excinfo:
        store.read_table("accident_1999.csv.bz2")

    assert excinfo.value.filename == "accident_1999.csv.bz2"
    assert "accident_1999.csv.bz2" in str(excinfo.value)
    assert isinstance(excinfo.value, FileNotFoundError)


def test_read_table_requires_header(tmp_path) -> None:
    _write_accident_file(tmp_path, "accident_2013.csv.bz2", "")
    store = AccidentFileStore(root_path=tmp_path)

    with pytest.raises(ValueError, match="missing a header row"):
        store.read_table("accident_2013.csv.bz2")


def test_unknown_column_raises_key_error(tmp_path) -> None:
    _write_accident_file(tmp_path, "accident_2013.csv.bz2", "STATE,MONTH\n1,1\n")
    table = AccidentFileStore(root_path=tmp_path).read_table("accident_2013.csv.bz2")

    with pytest.raises(KeyError):
        table.column("LATITUDE")


def test_absolute_paths_ignore_root(tmp_path) -> None:
    path = _write_accident_file(tmp_path, "accident_2013.csv.bz2", "STATE,MONTH\n1,1\n")
    store = AccidentFileStore(root_path=tmp_path / "elsewhere")

    assert store.exists(str(path))
    assert len(store.read_table(str(path))) == 1
