"""Figure — a titled chart of one type, configured in Python and shown in a Qt window."""

from __future__ import annotations

import threading
from concurrent.futures import Future
from typing import TYPE_CHECKING, Iterable, List, Optional, Tuple

from ._charts import ChartType, build_plan, parse_chart_type
from ._series import CategorySeries, NumericSeries, Series

if TYPE_CHECKING:
    from ._runtime import UiRuntime


class FigureSnapshot:
    """Frozen copy of a figure's state, taken when a window is requested."""

    __slots__ = ("title", "type_code", "x_label", "y_label", "series")

    def __init__(
        self,
        title: str,
        type_code: str,
        x_label: str,
        y_label: str,
        series: Tuple[Series, ...],
    ) -> None:
        self.title = title
        self.type_code = type_code
        self.x_label = x_label
        self.y_label = y_label
        self.series = series

    def __repr__(self) -> str:
        return (
            f"FigureSnapshot(title={self.title!r}, type_code={self.type_code!r}, "
            f"series={len(self.series)})"
        )


class Figure:
    """A chart window description: title, chart type, axis labels and series.

    The type code is one of ``"l"`` (line), ``"s"`` (scatter) or ``"h"``
    (histogram of category counts), in any case. It is not checked until
    :meth:`show`, which raises :class:`~qtplot.InvalidChartTypeError` for
    anything else.

    Example::

        fig = Figure("Sample Plot", "l")
        fig.x_label = "X Axis"
        fig.y_label = "Y Axis"
        fig.add_numeric_series("Series 1", [(0, 1), (1, 2)])
        fig.show()
    """

    __slots__ = ("_title", "_type_code", "_x_label", "_y_label", "_series", "_lock")

    def __init__(self, title: str, type_code: str = "l") -> None:
        self._title = title
        self._type_code = type_code.lower()
        self._x_label = ""
        self._y_label = "Frequency"
        self._series: List[Series] = []
        self._lock = threading.Lock()

    @property
    def title(self) -> str:
        return self._title

    @property
    def type_code(self) -> str:
        return self._type_code

    @property
    def chart_type(self) -> ChartType:
        """The resolved chart type. Raises for an unknown type code."""
        return parse_chart_type(self._type_code)

    @property
    def x_label(self) -> str:
        return self._x_label

    @x_label.setter
    def x_label(self, label: str) -> None:
        with self._lock:
            self._x_label = label

    @property
    def y_label(self) -> str:
        return self._y_label

    @y_label.setter
    def y_label(self, label: str) -> None:
        with self._lock:
            self._y_label = label

    def set_xlabel(self, label: str) -> None:
        """Set the x-axis label."""
        self.x_label = label

    def set_ylabel(self, label: str) -> None:
        """Set the y-axis label (defaults to ``"Frequency"``)."""
        self.y_label = label

    @property
    def series(self) -> Tuple[Series, ...]:
        """Series in insertion order, which is also draw and legend order."""
        with self._lock:
            return tuple(self._series)

    def add_numeric_series(self, name: str, points: Iterable) -> NumericSeries:
        """Add ``(x, y)`` points for a line or scatter chart.

        The points are copied, so the caller may reuse its list afterwards.
        """
        series = NumericSeries(name, points)
        self._append(series)
        return series

    def add_category_series(self, name: str, labels: Iterable[str]) -> CategorySeries:
        """Add category labels for a histogram; repeated labels are counted at display time."""
        series = CategorySeries(name, labels)
        self._append(series)
        return series

    def _append(self, series: Series) -> None:
        with self._lock:
            self._series.append(series)

    def snapshot(self) -> FigureSnapshot:
        with self._lock:
            return FigureSnapshot(
                title=self._title,
                type_code=self._type_code,
                x_label=self._x_label,
                y_label=self._y_label,
                series=tuple(self._series),
            )

    def show(self, runtime: Optional[UiRuntime] = None) -> Future:
        """Open a new window showing the figure as it is right now.

        Starts the UI runtime on first use. The chart is built from a snapshot
        taken before returning, so later changes to the figure do not affect
        this window. Returns a future resolved with the window once it is open;
        waiting on it is optional.
        """
        from ._runtime import get_default_runtime

        plan = build_plan(self.snapshot())
        rt = runtime if runtime is not None else get_default_runtime()
        rt.ensure_started()
        return rt.submit(rt.open_window, plan)

    def __repr__(self) -> str:
        return (
            f"Figure(title={self._title!r}, type_code={self._type_code!r}, "
            f"series={len(self._series)})"
        )
