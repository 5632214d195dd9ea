"""qtplot — quick line, scatter and category-count charts in Qt windows.

Usage::

    import qtplot

    fig = qtplot.Figure("Sample Plot", "l")     # "l" line, "s" scatter, "h" histogram
    fig.x_label = "X Axis"
    fig.y_label = "Y Axis"
    fig.add_numeric_series("Series 1", [(0, 1), (1, 2), (2, 4)])
    fig.show()                                   # window opens, call returns immediately

    hist = qtplot.Figure("Votes", "h")
    hist.add_category_series("ballots", ["b", "a", "b", "c", "a", "a"])
    hist.show()                                  # bars b=2, a=3, c=1

The Qt event loop is started on a background thread the first time a figure
is shown and keeps running for the rest of the process.
"""

from ._figure import Figure, FigureSnapshot
from ._series import Series, NumericSeries, CategorySeries, frequency_table
from ._charts import ChartType, ChartPlan, Trace, build_plan, parse_chart_type
from ._runtime import UiRuntime, get_default_runtime, set_default_runtime
from ._errors import (
    QtPlotError,
    InvalidChartTypeError,
    RuntimeStartupError,
    BackendUnavailableError,
)

try:
    from importlib.metadata import version as _pkg_version
    __version__ = _pkg_version("qtplot")
except Exception:
    __version__ = "0.1.0"

__all__ = [
    "Figure",
    "FigureSnapshot",
    "Series",
    "NumericSeries",
    "CategorySeries",
    "frequency_table",
    "ChartType",
    "ChartPlan",
    "Trace",
    "build_plan",
    "parse_chart_type",
    "UiRuntime",
    "get_default_runtime",
    "set_default_runtime",
    "QtPlotError",
    "InvalidChartTypeError",
    "RuntimeStartupError",
    "BackendUnavailableError",
]
