"""Domain models shared across services."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Mapping, Optional, Tuple


AccidentRow = Mapping[str, str]


@dataclass(frozen=True)
class AccidentTable:
    """Every row of one accident file, with the header kept as written."""

    filename: str
    columns: Tuple[str, ...]
    rows: Tuple[AccidentRow, ...]

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[AccidentRow]:
        return iter(self.rows)

    def has_column(self, name: str) -> bool:
        return name in self.columns

    def column(self, name: str) -> Tuple[str, ...]:
        if name not in self.columns:
            raise KeyError(f"Column {name!r} not found in {self.filename!r}.")
        return tuple(row.get(name, "") for row in self.rows)


@dataclass(frozen=True)
class MonthYear:
    """A row reduced to the fields the monthly summary needs."""

    month: int
    year: int


@dataclass(frozen=True)
class Coordinate:
    """A sanitized accident location; unknown values are ``None``."""

    longitude: Optional[float]
    latitude: Optional[float]
