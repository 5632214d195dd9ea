"""Chart dispatch — turn a figure snapshot into a toolkit-neutral chart plan.

The plan is plain data: backends only translate it into widgets. Building it
is where an unknown chart type is rejected and where series of the wrong
shape for the chart are dropped.
"""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING, Dict, List, Optional, Tuple

from ._errors import InvalidChartTypeError
from ._log import log
from ._series import CategorySeries, NumericSeries, Point

if TYPE_CHECKING:
    from ._figure import FigureSnapshot


class ChartType(enum.Enum):
    LINE = "l"
    SCATTER = "s"
    HISTOGRAM = "h"


def parse_chart_type(code: str) -> ChartType:
    """Resolve a short type code (``l``, ``s``, ``h``; any case)."""
    try:
        return ChartType(code.lower())
    except (ValueError, AttributeError):
        raise InvalidChartTypeError(code) from None


class Trace:
    """One named entry of a chart: xy points, or bar categories with counts."""

    __slots__ = ("name", "kind", "points", "categories", "counts")

    def __init__(
        self,
        name: str,
        kind: str,
        points: Tuple[Point, ...] = (),
        categories: Tuple[str, ...] = (),
        counts: Tuple[int, ...] = (),
    ) -> None:
        self.name = name
        self.kind = kind
        self.points = points
        self.categories = categories
        self.counts = counts

    @classmethod
    def xy(cls, name: str, points: Tuple[Point, ...]) -> Trace:
        return cls(name, "xy", points=points)

    @classmethod
    def bars(cls, name: str, frequencies: List[Tuple[str, int]]) -> Trace:
        return cls(
            name,
            "bar",
            categories=tuple(c for c, _ in frequencies),
            counts=tuple(n for _, n in frequencies),
        )

    def count_map(self) -> Dict[str, int]:
        """Category to count lookup for this trace."""
        return dict(zip(self.categories, self.counts))

    def count_for(self, category: str) -> int:
        return self.count_map().get(category, 0)

    def __repr__(self) -> str:
        size = len(self.points) if self.kind == "xy" else len(self.categories)
        return f"Trace(name={self.name!r}, kind={self.kind!r}, size={size})"


def _padded(lo: float, hi: float) -> Tuple[float, float]:
    pad = (hi - lo) * 0.05 if hi != lo else 0.5
    return lo - pad, hi + pad


class ChartPlan:
    """Everything a backend needs to draw one chart window."""

    __slots__ = ("chart_type", "title", "x_label", "y_label", "traces")

    def __init__(
        self,
        chart_type: ChartType,
        title: str,
        x_label: str,
        y_label: str,
        traces: List[Trace],
    ) -> None:
        self.chart_type = chart_type
        self.title = title
        self.x_label = x_label
        self.y_label = y_label
        self.traces = traces

    @property
    def lines(self) -> bool:
        """Whether points are joined by a line."""
        return self.chart_type is ChartType.LINE

    @property
    def markers(self) -> bool:
        """Whether each point gets a marker symbol."""
        return self.chart_type is ChartType.SCATTER

    def categories(self) -> List[str]:
        """Bar categories across all traces, in first-seen order."""
        seen = {}
        for trace in self.traces:
            for c in trace.categories:
                seen.setdefault(c, None)
        return list(seen)

    def bar_values(self) -> List[List[int]]:
        """Per-trace counts aligned with :meth:`categories`, 0 where a trace lacks one."""
        categories = self.categories()
        values = []
        for trace in self.traces:
            counts = trace.count_map()
            values.append([counts.get(c, 0) for c in categories])
        return values

    def x_range(self) -> Tuple[float, float]:
        """x bounds of all xy points with 5% padding, (0, 1) when there are none."""
        xs = [x for t in self.traces for x, _ in t.points if x == x]
        if not xs:
            return 0.0, 1.0
        return _padded(min(xs), max(xs))

    def y_range(self) -> Tuple[float, float]:
        """y bounds with 5% padding. Bar charts always start at zero."""
        if self.chart_type is ChartType.HISTOGRAM:
            top = max((n for t in self.traces for n in t.counts), default=0)
            return 0.0, float(top) * 1.05 if top else 1.0
        ys = [y for t in self.traces for _, y in t.points if y == y]
        if not ys:
            return 0.0, 1.0
        return _padded(min(ys), max(ys))

    def __repr__(self) -> str:
        return (
            f"ChartPlan(type={self.chart_type.name}, title={self.title!r}, "
            f"traces={len(self.traces)})"
        )


def build_plan(snapshot: FigureSnapshot, chart_type: Optional[ChartType] = None) -> ChartPlan:
    """Dispatch on the snapshot's chart type and collect its traces.

    Raises :class:`InvalidChartTypeError` for an unknown type code. Series whose
    shape does not fit the chart (categorical under line/scatter, numeric under
    histogram) are skipped without error.
    """
    if chart_type is None:
        chart_type = parse_chart_type(snapshot.type_code)

    traces: List[Trace] = []
    for series in snapshot.series:
        if chart_type is ChartType.HISTOGRAM:
            if not isinstance(series, CategorySeries):
                log.debug("histogram %r: skipping %r (no category data)", snapshot.title, series)
                continue
            traces.append(Trace.bars(series.display_name, series.frequencies()))
        else:
            if not isinstance(series, NumericSeries):
                log.debug("%s chart %r: skipping %r (no numeric data)",
                          chart_type.name.lower(), snapshot.title, series)
                continue
            traces.append(Trace.xy(series.name or "", series.points))

    return ChartPlan(
        chart_type=chart_type,
        title=snapshot.title,
        x_label=snapshot.x_label,
        y_label=snapshot.y_label,
        traces=traces,
    )
