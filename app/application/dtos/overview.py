"""DTOs for the overview panel (no dependency on HTTP or chart rendering)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from app.domain.value_objects.time_range import TimeRange


@dataclass(frozen=True)
class CategoryCount:
    """One row of the discovery (group-by) response."""

    key: str
    count: int


@dataclass(frozen=True)
class HistogramPoint:
    """One time bucket of a per-category histogram."""

    time: int
    count: int


@dataclass(frozen=True)
class GroupByRequest:
    """Input for the discovery call: top `size` values of `field` by count."""

    field: str
    size: int
    time_range: TimeRange


@dataclass(frozen=True)
class HistogramRequest:
    """Input for one time-bucketed histogram call, scoped to one event type."""

    time_range: TimeRange
    interval: str
    event_type: str
    query_string: str = ""


@dataclass
class ChartSeries:
    """One dataset of the live chart. values are aligned index-for-index with the labels."""

    label: str
    values: list[int]
    hidden: bool = False


@dataclass(frozen=True)
class SeriesSnapshot:
    """Read-only copy of a ChartSeries handed to the render sink."""

    label: str
    values: tuple[int, ...]
    hidden: bool

    def to_dict(self) -> dict[str, Any]:
        return {"label": self.label, "data": list(self.values), "hidden": self.hidden}


@dataclass(frozen=True)
class ChartOptions:
    """Render options for the events-by-type line chart."""

    chart_type: str = "line"
    title: str = "Events by Type Over Time"
    x_scale: str = "time"
    point_radius: int = 0
    line_tension: float = 0.4
    interaction_mode: str = "nearest"
    interaction_axis: str = "x"
    legend_display: bool = True
    colors_force_override: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.chart_type,
            "title": self.title,
            "x_scale": self.x_scale,
            "point_radius": self.point_radius,
            "line_tension": self.line_tension,
            "interaction": {
                "mode": self.interaction_mode,
                "axis": self.interaction_axis,
                "intersect": False,
            },
            "legend": {"display": self.legend_display},
            "colors": {"force_override": self.colors_force_override},
        }


@dataclass(frozen=True)
class ChartSnapshot:
    """Immutable view of the chart at one point in time (what the render sink receives)."""

    generation: int
    labels: tuple[int, ...]
    series: tuple[SeriesSnapshot, ...]
    options: ChartOptions = field(default_factory=ChartOptions)

    def to_dict(self) -> dict[str, Any]:
        return {
            "generation": self.generation,
            "labels": list(self.labels),
            "datasets": [s.to_dict() for s in self.series],
            "options": self.options.to_dict(),
        }
