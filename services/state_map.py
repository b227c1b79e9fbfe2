"""Scatter maps of one state's accidents in one year."""

from __future__ import annotations

import logging
import math
from typing import Any, Callable, List, Optional, Sequence

from models.errors import InvalidStateError
from models.records import AccidentRow, AccidentTable, Coordinate
from services.map_canvas import MapCanvas, PlotlyMapCanvas, Range
from services.year_reader import coerce_year
from settings import get_settings
from storage.accident_files import AccidentFileStore, build_default_store, make_filename

logger = logging.getLogger(__name__)

STATE_COLUMN = "STATE"
LONGITUDE_COLUMN = "LONGITUD"
LATITUDE_COLUMN = "LATITUDE"

# FARS codes unknown locations as 777.7777, 888.8888, 999.9999 and the like
MAX_LONGITUDE = 900.0
MAX_LATITUDE = 90.0

CanvasFactory = Callable[[str], MapCanvas]


def _to_float(raw: Optional[str]) -> Optional[float]:
    if raw is None:
        return None
    candidate = raw.strip()
    if not candidate:
        return None
    try:
        value = float(candidate)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def _to_int(raw: Any) -> Optional[int]:
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    value = _to_float(raw) if isinstance(raw, str) else _to_float(str(raw))
    return int(value) if value is not None else None


def sanitize_coordinates(rows: Sequence[AccidentRow]) -> List[Coordinate]:
    """Read each row's location, replacing sentinel and blank values with ``None``."""
    coordinates: List[Coordinate] = []
    for row in rows:
        longitude = _to_float(row.get(LONGITUDE_COLUMN))
        latitude = _to_float(row.get(LATITUDE_COLUMN))
        if longitude is not None and longitude > MAX_LONGITUDE:
            longitude = None
        if latitude is not None and latitude > MAX_LATITUDE:
            latitude = None
        coordinates.append(Coordinate(longitude=longitude, latitude=latitude))
    return coordinates


def value_range(values: Sequence[Optional[float]]) -> Optional[Range]:
    present = [value for value in values if value is not None]
    if not present:
        return None
    return min(present), max(present)


def _default_canvas(title: str) -> MapCanvas:
    return PlotlyMapCanvas(title=title, marker_size=get_settings().map_marker_size)


class StateMapRenderer:
    """Plots where one state's accidents happened in a given year."""

    def __init__(
        self,
        store: AccidentFileStore,
        canvas_factory: CanvasFactory = _default_canvas,
    ) -> None:
        self.store = store
        self.canvas_factory = canvas_factory

    def render_state(self, state: Any, year: Any) -> Optional[MapCanvas]:
        """Draw the state's accidents for the year.

        Raises ``AccidentFileNotFoundError`` when the year's file is absent and
        ``InvalidStateError`` when the state code does not occur in it.
        Returns the canvas drawn on, or ``None`` when there was nothing to plot.
        """
        year_value = coerce_year(year)
        table = self.store.read_table(make_filename(year_value))

        state_code = _to_int(state)
        if state_code is None or state_code not in self.state_codes(table):
            raise InvalidStateError(state_code if state_code is not None else state)

        rows = [row for row in table if _to_int(row.get(STATE_COLUMN)) == state_code]
        logger.debug(
            "Selected accidents for state",
            extra={"state": state_code, "year": year_value, "row_count": len(rows)},
        )
        return self.plot_accidents(rows, title=f"State {state_code}, {year_value}")

    @staticmethod
    def state_codes(table: AccidentTable) -> set[int]:
        codes = (_to_int(value) for value in table.column(STATE_COLUMN))
        return {code for code in codes if code is not None}

    def plot_accidents(self, rows: Sequence[AccidentRow], title: str = "") -> Optional[MapCanvas]:
        if not rows:
            logger.info("no accidents to plot")
            return None

        coordinates = sanitize_coordinates(rows)
        lons = [point.longitude for point in coordinates]
        lats = [point.latitude for point in coordinates]
        lat_range = value_range(lats)
        lon_range = value_range(lons)
        if lat_range is None or lon_range is None:
            logger.warning(
                "No known coordinates among %d accidents",
                len(rows),
                extra={"row_count": len(rows)},
            )
            return None

        canvas = self.canvas_factory(title)
        canvas.draw_basemap(lat_range, lon_range)
        canvas.draw_points(lons, lats)
        return canvas


def build_default_renderer() -> StateMapRenderer:
    return StateMapRenderer(build_default_store())


def render_state(state: Any, year: Any) -> Optional[MapCanvas]:
    return build_default_renderer().render_state(state, year)
