"""Chart model and its adapter: the renderable events-by-type chart.

The adapter owns the live chart. It is rebuilt at the start of each refresh
cycle and filled in one series at a time as histogram responses arrive.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from app.application.dtos.overview import (
    ChartOptions,
    ChartSeries,
    ChartSnapshot,
    HistogramPoint,
    SeriesSnapshot,
)
from app.domain.exceptions import SeriesLengthMismatchException, SeriesNotFoundException

if TYPE_CHECKING:
    from app.application.interfaces.services import IRenderSink
    from app.application.services.series_registry import SeriesRegistry

logger = logging.getLogger(__name__)


class ChartModel:
    """Labels (bucket timestamps) shared by all series, plus the series in merge order.

    The first histogram merged fixes the labels, even when it has no points;
    labels_fixed records that. Every series has exactly len(labels) values.
    """

    def __init__(self, generation: int) -> None:
        self.generation = generation
        self.labels: list[int] = []
        self.labels_fixed = False
        self.series: list[ChartSeries] = []

    def snapshot(self, options: ChartOptions) -> ChartSnapshot:
        return ChartSnapshot(
            generation=self.generation,
            labels=tuple(self.labels),
            series=tuple(
                SeriesSnapshot(label=s.label, values=tuple(s.values), hidden=s.hidden)
                for s in self.series
            ),
            options=options,
        )


class ChartModelAdapter:
    """Owns the live ChartModel and pushes every change to the render sink.

    Visibility of new series comes from the injected SeriesRegistry; legend
    clicks write back to it so the choice survives the next rebuild.
    """

    def __init__(
        self,
        registry: "SeriesRegistry",
        sink: "IRenderSink",
        options: ChartOptions | None = None,
    ) -> None:
        self._registry = registry
        self._sink = sink
        self._options = options or ChartOptions()
        self._model = ChartModel(generation=0)

    @property
    def registry(self) -> "SeriesRegistry":
        return self._registry

    @property
    def model(self) -> ChartModel:
        """The live chart model."""
        return self._model

    @property
    def options(self) -> ChartOptions:
        return self._options

    def reset(self, generation: int) -> ChartModel:
        """Discard the live model and start an empty one for the given generation."""
        self._model = ChartModel(generation)
        self._render()
        return self._model

    def merge_series(
        self,
        model: ChartModel,
        category: str,
        points: Sequence[HistogramPoint],
    ) -> ChartSeries:
        """Append one category's histogram to model.

        The first histogram merged into a model fixes its labels, an empty one
        included. Later ones must have the same number of points.

        Args:
            model: The cycle's chart model (passed explicitly, not the live one).
            category: Event type; becomes the series label.
            points: Histogram points, already bucketed by the API.

        Returns:
            The appended series.

        Raises:
            SeriesLengthMismatchException: If labels are fixed and the point
                count differs. Nothing is appended.
        """
        if not model.labels_fixed:
            model.labels = [p.time for p in points]
            model.labels_fixed = True
        elif len(points) != len(model.labels):
            raise SeriesLengthMismatchException(
                category, expected=len(model.labels), actual=len(points)
            )
        series = ChartSeries(
            label=category,
            values=[p.count for p in points],
            hidden=self._registry.is_hidden(category),
        )
        model.series.append(series)
        logger.debug(
            "Merged series %s (%d points) into generation %d",
            category,
            len(points),
            model.generation,
        )
        if model is self._model:
            self._render()
        return series

    def on_legend_click(
        self, series_index: int, label: str, currently_visible: bool
    ) -> bool:
        """Toggle one series from the legend and return its new visibility.

        Updates the registry and the live chart, then re-renders. Does not
        refresh data.

        Raises:
            SeriesNotFoundException: If the live chart has no series with that
                index and label.
        """
        series = self._find_series(series_index, label)
        visible = not currently_visible
        self._registry.set_hidden(label, not visible)
        series.hidden = not visible
        self._render()
        return visible

    def snapshot(self) -> ChartSnapshot:
        return self._model.snapshot(self._options)

    def _find_series(self, series_index: int, label: str) -> ChartSeries:
        series = self._model.series
        if 0 <= series_index < len(series) and series[series_index].label == label:
            return series[series_index]
        raise SeriesNotFoundException(series_index, label)

    def _render(self) -> None:
        self._sink.render(self.snapshot())
