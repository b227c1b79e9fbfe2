"""Geographic drawing surfaces for accident scatter maps."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Protocol, Sequence, Tuple

import plotly.graph_objects as go

Range = Tuple[float, float]


class MapCanvas(Protocol):
    def draw_basemap(self, lat_range: Range, lon_range: Range) -> None:
        ...

    def draw_points(
        self,
        lon_values: Sequence[Optional[float]],
        lat_values: Sequence[Optional[float]],
    ) -> None:
        ...


class PlotlyMapCanvas:
    """Draws accidents as small markers over US state boundaries."""

    def __init__(self, title: str = "", marker_size: int = 2) -> None:
        self.marker_size = marker_size
        self.figure = go.Figure()
        self.figure.update_layout(margin=dict(l=0, r=0, t=40 if title else 0, b=0), showlegend=False)
        if title:
            self.figure.update_layout(title_text=title)

    def draw_basemap(self, lat_range: Range, lon_range: Range) -> None:
        self.figure.update_geos(
            scope="north america",
            resolution=50,
            showland=True,
            landcolor="rgb(243, 243, 243)",
            showsubunits=True,
            subunitcolor="rgb(120, 120, 120)",
            showcountries=True,
            lataxis_range=list(lat_range),
            lonaxis_range=list(lon_range),
        )

    def draw_points(
        self,
        lon_values: Sequence[Optional[float]],
        lat_values: Sequence[Optional[float]],
    ) -> None:
        self.figure.add_trace(
            go.Scattergeo(
                lon=list(lon_values),
                lat=list(lat_values),
                mode="markers",
                marker=dict(size=self.marker_size, color="black"),
                hoverinfo="lon+lat",
            )
        )

    def write_html(self, path: Path) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        self.figure.write_html(str(path), include_plotlyjs="cdn")
        return path
