"""Qt Charts backend — draw chart plans with QChart and host them in Qt windows.

Works with PySide6, PyQt6 (+ PyQt6-Charts), PySide2 and PyQt5 (+ PyQtChart).
The binding is auto-detected, or forced via the ``QT_API`` env var.

Normally used through :meth:`qtplot.Figure.show`, which starts a
:class:`QtRuntime` on a background thread. Inside an application that already
has a ``QApplication``, the runtime attaches to it instead::

    app = QApplication(sys.argv)
    fig = qtplot.Figure("Counts", "h")
    fig.add_category_series("votes", ["a", "b", "a"])
    fig.show()          # window opens once app.exec() runs
    app.exec()

Charts can also be embedded directly::

    from qtplot.backends.qtcharts import build_chart
    view = QChartView(build_chart(qtplot.build_plan(fig.snapshot())))
"""

from __future__ import annotations

import sys
import threading
from typing import Callable, Optional, Tuple

from ._qt_compat import (
    QT_API,
    HAS_CHARTS,
    CHARTS_MODULE,
    Qt,
    QObject,
    QTimer,
    Signal,
    Slot,
    QPainter,
    QApplication,
    QMainWindow,
    QChart,
    QChartView,
    QLineSeries,
    QScatterSeries,
    QBarSeries,
    QBarSet,
    QBarCategoryAxis,
    QValueAxis,
    exec_app,
)

from .._charts import ChartPlan, ChartType
from .._errors import BackendUnavailableError
from .._log import log
from .._runtime import UiRuntime

DEFAULT_WINDOW_SIZE: Tuple[int, int] = (800, 600)


def _require_charts() -> None:
    if not HAS_CHARTS:
        raise BackendUnavailableError(
            f"Qt Charts is not available for {QT_API}; install {CHARTS_MODULE}"
        )


# ─── Chart construction ──────────────────────────────────────────────────────

def _value_axis(title: str, bounds: Tuple[float, float]):
    axis = QValueAxis()
    axis.setTitleText(title)
    axis.setRange(bounds[0], bounds[1])
    return axis


def _populate_xy(chart, plan: ChartPlan) -> None:
    x_axis = _value_axis(plan.x_label, plan.x_range())
    y_axis = _value_axis(plan.y_label, plan.y_range())
    chart.addAxis(x_axis, Qt.AlignBottom)
    chart.addAxis(y_axis, Qt.AlignLeft)

    for trace in plan.traces:
        if plan.lines:
            series = QLineSeries()
            # Line mode joins points without marker symbols
            series.setPointsVisible(False)
        else:
            series = QScatterSeries()
        series.setName(trace.name)
        for x, y in trace.points:
            series.append(x, y)
        chart.addSeries(series)
        series.attachAxis(x_axis)
        series.attachAxis(y_axis)


def _populate_bars(chart, plan: ChartPlan) -> None:
    categories = plan.categories()
    bar_series = QBarSeries()
    for trace, values in zip(plan.traces, plan.bar_values()):
        bar_set = QBarSet(trace.name)
        for value in values:
            bar_set.append(float(value))
        bar_series.append(bar_set)
    chart.addSeries(bar_series)

    x_axis = QBarCategoryAxis()
    x_axis.setTitleText(plan.x_label)
    x_axis.append(categories)
    y_axis = _value_axis(plan.y_label, plan.y_range())
    chart.addAxis(x_axis, Qt.AlignBottom)
    chart.addAxis(y_axis, Qt.AlignLeft)
    bar_series.attachAxis(x_axis)
    bar_series.attachAxis(y_axis)


def build_chart(plan: ChartPlan):
    """Create a ``QChart`` for ``plan``. Must run on the thread owning the QApplication."""
    _require_charts()
    chart = QChart()
    chart.setTitle(plan.title)
    if plan.chart_type is ChartType.HISTOGRAM:
        _populate_bars(chart, plan)
    else:
        _populate_xy(chart, plan)
    return chart


def build_window(plan: ChartPlan):
    """Create (but do not show) a top-level window hosting the chart for ``plan``."""
    window = QMainWindow()
    window.setWindowTitle(plan.title)
    view = QChartView(build_chart(plan))
    view.setRenderHint(QPainter.Antialiasing)
    window.setCentralWidget(view)
    window.resize(*DEFAULT_WINDOW_SIZE)
    window.setAttribute(Qt.WA_DeleteOnClose)
    return window


# ─── Runtime ─────────────────────────────────────────────────────────────────

class _Invoker(QObject):
    """Runs callables on the thread this object lives in.

    Emitting from another thread queues the call on the receiver's event loop.
    """

    invoke = Signal(object)

    def __init__(self) -> None:
        super().__init__()
        self.invoke.connect(self._call)

    @Slot(object)
    def _call(self, task) -> None:
        task()


class QtRuntime(UiRuntime):
    """Qt event loop used to open chart windows.

    Without an existing ``QApplication`` a new one is created on a daemon
    thread that runs ``exec()`` for the rest of the process. With one, the
    runtime attaches to its thread and no loop is spawned.
    """

    def __init__(self, name: str = "qtplot-ui") -> None:
        super().__init__(name)
        self._app = None
        self._invoker: Optional[_Invoker] = None
        self._windows: set = set()
        self._windows_lock = threading.Lock()
        self._embedded = False

    @property
    def app(self):
        return self._app

    @property
    def embedded(self) -> bool:
        """True when attached to a QApplication owned by the host program."""
        return self._embedded

    @property
    def open_windows(self) -> Tuple:
        """Windows opened by this runtime that have not been closed yet."""
        with self._windows_lock:
            return tuple(self._windows)

    def _track(self, window) -> None:
        with self._windows_lock:
            self._windows.add(window)

    def _untrack(self, window) -> None:
        with self._windows_lock:
            self._windows.discard(window)

    def _launch(self) -> None:
        _require_charts()
        app = QApplication.instance()
        if app is None:
            super()._launch()
            return
        # Host program owns the loop; run tasks on its thread
        self._app = app
        self._embedded = True
        self._invoker = _Invoker()
        self._invoker.moveToThread(app.thread())
        log.debug("UI runtime %s attached to existing %s QApplication", self._name, QT_API)
        self._mark_ready()

    def _run_loop(self, ready: Callable[[], None]) -> None:
        app = QApplication(sys.argv[:1] or ["qtplot"])
        app.setQuitOnLastWindowClosed(False)
        self._app = app
        self._invoker = _Invoker()
        log.debug("UI runtime %s created %s QApplication", self._name, QT_API)
        # Readiness is signalled from inside the running loop
        QTimer.singleShot(0, ready)
        exec_app(app)

    def _post(self, task: Callable[[], None]) -> None:
        self._invoker.invoke.emit(task)

    def open_window(self, plan: ChartPlan):
        window = build_window(plan)
        self._track(window)
        window.destroyed.connect(lambda *_: self._untrack(window))
        window.show()
        log.info("opened %s window %r (%d traces)",
                 plan.chart_type.name.lower(), plan.title, len(plan.traces))
        return window
