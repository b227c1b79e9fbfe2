"""Monthly accident counts across a batch of years."""

from __future__ import annotations

import logging
from collections import Counter
from typing import Any, Dict, Iterable, Optional, Tuple

from models.records import MonthYear
from models.schemas import MonthlyCount, SummaryTable
from services.year_reader import YearBatchReader
from storage.accident_files import AccidentFileStore, build_default_store

logger = logging.getLogger(__name__)


def count_by_year_month(rows: Iterable[MonthYear]) -> Dict[Tuple[int, int], int]:
    """Group projected rows by ``(year, month)`` and count each group."""
    return dict(Counter((row.year, row.month) for row in rows))


def pivot_counts(counts: Dict[Tuple[int, int], int]) -> SummaryTable:
    """Lay grouped counts out with months as rows and years as columns.

    Both axes are sorted ascending. Only observed ``(year, month)`` pairs
    become cells.
    """
    years = tuple(sorted({year for year, _ in counts}))
    months = tuple(sorted({month for _, month in counts}))
    cells = tuple(
        MonthlyCount(year=year, month=month, count=counts[(year, month)])
        for year, month in sorted(counts)
    )
    return SummaryTable(years=years, months=months, counts=cells)


class MonthlyAggregator:
    """Reads a year batch and pivots its monthly accident counts."""

    def __init__(self, reader: YearBatchReader) -> None:
        self.reader = reader

    def summarize(self, years: Iterable[Any]) -> SummaryTable:
        results = self.reader.read_years(years)
        loaded = [result for result in results if result.loaded]

        combined = [row for result in loaded for row in result.rows]
        summary = pivot_counts(count_by_year_month(combined))

        logger.info(
            "Summarized %d of %d requested years",
            len(loaded),
            len(results),
            extra={"row_count": len(combined)},
        )
        return summary


def build_default_aggregator(store: Optional[AccidentFileStore] = None) -> MonthlyAggregator:
    """Factory that wires the aggregator with the configured data directory."""
    return MonthlyAggregator(YearBatchReader(store or build_default_store()))


def summarize_years(years: Iterable[Any]) -> SummaryTable:
    return build_default_aggregator().summarize(years)
