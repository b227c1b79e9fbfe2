"""Pydantic schemas for pipeline results."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from models.records import MonthYear


class YearLoadStatus(str, Enum):
    """Outcome of loading one requested year."""

    loaded = "loaded"
    missing_file = "missing_file"
    invalid_year = "invalid_year"
    unreadable_file = "unreadable_file"


class YearLoadResult(BaseModel):
    """One slot of a year batch, in the same position as the requested value."""

    model_config = ConfigDict(frozen=True)

    requested: Any = Field(..., description="The value exactly as the caller passed it.")
    year: Optional[int] = None
    status: YearLoadStatus
    filename: Optional[str] = None
    rows: Tuple[MonthYear, ...] = ()
    reason: Optional[str] = None

    @property
    def loaded(self) -> bool:
        return self.status is YearLoadStatus.loaded


class MonthlyCount(BaseModel):
    """Number of accidents observed in one month of one year."""

    model_config = ConfigDict(frozen=True)

    year: int
    month: int = Field(..., ge=1, le=12)
    count: int = Field(..., ge=0)


class SummaryTable(BaseModel):
    """Monthly accident counts, one column per year and one row per month.

    Only observed combinations are stored. A month that had no accidents in
    a given year has no cell at all, so ``cell`` returns ``None`` rather
    than ``0`` for it.
    """

    model_config = ConfigDict(frozen=True)

    years: Tuple[int, ...] = ()
    months: Tuple[int, ...] = ()
    counts: Tuple[MonthlyCount, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.years

    def _lookup(self) -> Dict[Tuple[int, int], int]:
        return {(item.year, item.month): item.count for item in self.counts}

    def cell(self, month: int, year: int) -> Optional[int]:
        return self._lookup().get((year, month))

    def column(self, year: int) -> Dict[int, int]:
        if year not in self.years:
            raise KeyError(f"Year {year} is not a column of this summary.")
        return {item.month: item.count for item in self.counts if item.year == year}

    def rows(self) -> List[Tuple[int, Tuple[Optional[int], ...]]]:
        """Wide form: ``(month, (count_for_year, ...))`` ordered by month."""
        lookup = self._lookup()
        return [
            (month, tuple(lookup.get((year, month)) for year in self.years))
            for month in self.months
        ]

    def to_records(self) -> List[Dict[str, Optional[int]]]:
        """Wide form as dictionaries keyed by ``MONTH`` and the year as text."""
        records: List[Dict[str, Optional[int]]] = []
        for month, cells in self.rows():
            record: Dict[str, Optional[int]] = {"MONTH": month}
            record.update({str(year): value for year, value in zip(self.years, cells)})
            records.append(record)
        return records
