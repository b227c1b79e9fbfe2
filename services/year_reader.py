"""Per-year loading with failures isolated to the year that caused them."""

from __future__ import annotations

import logging
import math
from typing import Any, Iterable, List, Optional

from models.errors import AccidentFileNotFoundError, InvalidYearError
from models.records import AccidentTable, MonthYear
from models.schemas import YearLoadResult, YearLoadStatus
from storage.accident_files import AccidentFileStore, make_filename

logger = logging.getLogger(__name__)

MONTH_COLUMN = "MONTH"


def coerce_year(value: Any) -> int:
    """Convert a requested year to ``int``, truncating toward zero.

    ``2013``, ``2013.0``, ``2013.7`` and ``"2013"`` all give 2013. Booleans,
    ``None``, NaN, infinities and non-numeric text raise ``InvalidYearError``.
    """
    if value is None or isinstance(value, bool):
        raise InvalidYearError(value)
    if isinstance(value, int):
        return value
    candidate = value.strip() if isinstance(value, str) else value
    try:
        number = float(candidate)
    except (TypeError, ValueError) as exc:
        raise InvalidYearError(value) from exc
    if not math.isfinite(number):
        raise InvalidYearError(value)
    return int(number)


def parse_month(raw: Optional[str]) -> Optional[int]:
    """Return the MONTH cell as 1-12, or ``None`` if it is blank or out of range.

    FARS codes months 1-12 only; any other value is treated as unreadable
    and the row is left out of the monthly counts.
    """
    if raw is None:
        return None
    candidate = raw.strip()
    if not candidate:
        return None
    try:
        month = int(float(candidate))
    except ValueError:
        return None
    return month if 1 <= month <= 12 else None


class YearBatchReader:
    """Loads a batch of years, one independent attempt per requested value."""

    def __init__(self, store: AccidentFileStore) -> None:
        self.store = store

    def read_years(self, years: Iterable[Any]) -> List[YearLoadResult]:
        """Return one result per requested value, in the order given.

        Loaded rows carry the coerced integer year, so requesting ``2013.7``
        or ``"2013"`` yields rows tagged 2013. The value as passed stays on
        ``YearLoadResult.requested``.
        """
        return [self.read_year(value) for value in years]

    def read_year(self, requested: Any) -> YearLoadResult:
        try:
            year = coerce_year(requested)
        except InvalidYearError as exc:
            return self._failed(requested, None, None, YearLoadStatus.invalid_year, str(exc))

        filename = make_filename(year)
        try:
            table = self.store.read_table(filename)
        except AccidentFileNotFoundError as exc:
            return self._failed(requested, year, filename, YearLoadStatus.missing_file, str(exc))
        except (OSError, EOFError, ValueError) as exc:
            return self._failed(requested, year, filename, YearLoadStatus.unreadable_file, str(exc))

        if not table.has_column(MONTH_COLUMN):
            return self._failed(
                requested,
                year,
                filename,
                YearLoadStatus.unreadable_file,
                f"column {MONTH_COLUMN!r} missing from '{filename}'",
            )

        return YearLoadResult(
            requested=requested,
            year=year,
            status=YearLoadStatus.loaded,
            filename=filename,
            rows=tuple(self._project(table, year)),
        )

    def _project(self, table: AccidentTable, year: int) -> Iterable[MonthYear]:
        for row_number, row in enumerate(table, start=2):
            raw_month = row.get(MONTH_COLUMN)
            month = parse_month(raw_month)
            if month is None:
                logger.warning(
                    "Skipping row %s with unreadable month",
                    row_number,
                    extra={"accident_file": table.filename, "year": year, "invalid_value": raw_month},
                )
                continue
            yield MonthYear(month=month, year=year)

    @staticmethod
    def _failed(
        requested: Any,
        year: Optional[int],
        filename: Optional[str],
        status: YearLoadStatus,
        reason: str,
    ) -> YearLoadResult:
        logger.warning(
            "invalid year: %s",
            requested,
            extra={"year": requested, "reason": reason},
        )
        return YearLoadResult(
            requested=requested,
            year=year,
            status=status,
            filename=filename,
            reason=reason,
        )
