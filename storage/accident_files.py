from __future__ import annotations

import bz2
import csv
import logging
from contextlib import contextmanager
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterator, Optional, TextIO

from models.errors import AccidentFileNotFoundError
from models.records import AccidentTable
from settings import get_settings

logger = logging.getLogger(__name__)

FILENAME_TEMPLATE = "accident_{year:d}.csv.bz2"


def make_filename(year: Any) -> str:
    """Return the accident file name for ``year``.

    The year is passed through ``int()``, so ``2013.9`` names the 2013 file.
    Values ``int()`` rejects raise ``ValueError`` or ``TypeError``.
    """
    return FILENAME_TEMPLATE.format(year=int(year))


class AccidentFileStore:
    """Reads yearly accident files from a data directory."""

    def __init__(self, root_path: Optional[Path] = None) -> None:
        self.root_path = root_path

    def resolve(self, filename: str) -> Path:
        path = Path(filename)
        if path.is_absolute() or self.root_path is None:
            return path
        return self.root_path / path

    def exists(self, filename: str) -> bool:
        return self.resolve(filename).is_file()

    @contextmanager
    def open_text(self, filename: str, encoding: str = "utf-8") -> Iterator[TextIO]:
        """Yield a text handle, decompressing ``.bz2`` files on the fly."""

        path = self.resolve(filename)
        if not path.is_file():
            raise AccidentFileNotFoundError(filename)

        if path.suffix == ".bz2":
            handle = bz2.open(path, "rt", encoding=encoding, newline="")
        else:
            handle = path.open("r", encoding=encoding, newline="")
        with handle:
            yield handle

    def read_table(self, filename: str) -> AccidentTable:
        """Parse a whole accident file into an immutable table."""

        with self.open_text(filename) as handle:
            reader = csv.DictReader(handle)
            if not reader.fieldnames:
                raise ValueError("CSV file is missing a header row.")
            columns = tuple(reader.fieldnames)
            rows = tuple(MappingProxyType(dict(row)) for row in reader)

        logger.debug(
            "Loaded accident file",
            extra={"accident_file": filename, "row_count": len(rows)},
        )
        return AccidentTable(filename=filename, columns=columns, rows=rows)


@lru_cache
def build_default_store(root_path: Optional[str] = None) -> AccidentFileStore:
    settings = get_settings()
    data_dir = settings.data_dir if root_path is None else root_path
    return AccidentFileStore(root_path=Path(data_dir) if data_dir else None)


def read_accidents(filename: str) -> AccidentTable:
    return build_default_store().read_table(filename)
