"""Qt binding compatibility layer — auto-detects PySide6, PyQt6, PySide2 or PyQt5.

Import order (first available wins):
    1. ``QT_API`` environment variable (``pyside6``, ``pyqt6``, ``pyside2``, ``pyqt5``)
    2. Already-imported binding (check sys.modules)
    3. PySide6 → PyQt6 → PySide2 → PyQt5

Qt Charts ships with PySide6 and PySide2. The PyQt bindings need the separate
``PyQt6-Charts`` / ``PyQtChart`` wheels; without them ``HAS_CHARTS`` is False
and the chart classes are None.

Differences handled:
    - Qt6 enums moved from ``Qt.AlignLeft`` to ``Qt.AlignmentFlag.AlignLeft``
    - PySide uses ``Signal`` instead of ``pyqtSignal``
    - ``exec_()`` deprecated in Qt6 in favour of ``exec()``
    - the Qt Charts module name and namespace differ per binding
"""

from __future__ import annotations

import os
import sys

# ─── Detect binding ──────────────────────────────────────────────────────────

QT_API: str = ""  # set to "pyside6", "pyqt6", "pyside2", "pyqt5"
QT_VERSION: int = 0  # 5 or 6

_env = os.environ.get("QT_API", "").lower().strip()

_BINDINGS_5 = ["pyside2", "pyqt5"]
_BINDINGS_6 = ["pyside6", "pyqt6"]
_BINDINGS = _BINDINGS_6 + _BINDINGS_5  # prefer Qt6

_MODULE_MAP = {
    "pyside6": "PySide6",
    "pyqt6": "PyQt6",
    "pyside2": "PySide2",
    "pyqt5": "PyQt5",
}


def _try_import(api: str) -> bool:
    mod = _MODULE_MAP.get(api)
    if mod is None:
        return False
    try:
        __import__(f"{mod}.QtCore")
        __import__(f"{mod}.QtGui")
        __import__(f"{mod}.QtWidgets")
        return True
    except ImportError:
        return False


def _detect() -> str:
    # 1. Env var
    if _env in _MODULE_MAP:
        if _try_import(_env):
            return _env
        raise ImportError(
            f"QT_API={_env!r} requested but {_MODULE_MAP[_env]} is not installed"
        )

    # 2. Already imported
    for api, mod in _MODULE_MAP.items():
        if f"{mod}.QtCore" in sys.modules:
            return api

    # 3. Probe in preference order
    for api in _BINDINGS:
        if _try_import(api):
            return api

    raise ImportError(
        "No Qt binding found. Install one of:\n"
        "  pip install PySide6                 # recommended, includes Qt Charts\n"
        "  pip install PyQt6 PyQt6-Charts\n"
        "  pip install PySide2\n"
        "  pip install PyQt5 PyQtChart\n"
        "Or set QT_API=pyside6 (etc.) to force a specific binding."
    )


QT_API = _detect()
QT_VERSION = 6 if QT_API in _BINDINGS_6 else 5

# ─── Unified imports ─────────────────────────────────────────────────────────

if QT_API == "pyside6":
    from PySide6 import QtCore, QtGui, QtWidgets
    from PySide6.QtCore import Qt, QObject, QTimer, Signal, Slot
    from PySide6.QtGui import QPainter
    from PySide6.QtWidgets import QApplication, QMainWindow

elif QT_API == "pyqt6":
    from PyQt6 import QtCore, QtGui, QtWidgets
    from PyQt6.QtCore import Qt, QObject, QTimer
    from PyQt6.QtGui import QPainter
    from PyQt6.QtWidgets import QApplication, QMainWindow
    Signal = QtCore.pyqtSignal
    Slot = QtCore.pyqtSlot

elif QT_API == "pyside2":
    from PySide2 import QtCore, QtGui, QtWidgets
    from PySide2.QtCore import Qt, QObject, QTimer, Signal, Slot
    from PySide2.QtGui import QPainter
    from PySide2.QtWidgets import QApplication, QMainWindow

elif QT_API == "pyqt5":
    from PyQt5 import QtCore, QtGui, QtWidgets
    from PyQt5.QtCore import Qt, QObject, QTimer
    from PyQt5.QtGui import QPainter
    from PyQt5.QtWidgets import QApplication, QMainWindow
    Signal = QtCore.pyqtSignal
    Slot = QtCore.pyqtSlot


# ─── Qt Charts ───────────────────────────────────────────────────────────────

def _import_charts():
    """Return the namespace holding QChart & co. for the active binding."""
    if QT_API == "pyside6":
        from PySide6 import QtCharts
        return QtCharts
    if QT_API == "pyqt6":
        from PyQt6 import QtCharts
        return QtCharts
    if QT_API == "pyside2":
        from PySide2.QtCharts import QtCharts
        return QtCharts
    from PyQt5 import QtChart
    return QtChart


try:
    _charts = _import_charts()
except ImportError:
    _charts = None

HAS_CHARTS: bool = _charts is not None

QChart = getattr(_charts, "QChart", None)
QChartView = getattr(_charts, "QChartView", None)
QLineSeries = getattr(_charts, "QLineSeries", None)
QScatterSeries = getattr(_charts, "QScatterSeries", None)
QBarSeries = getattr(_charts, "QBarSeries", None)
QBarSet = getattr(_charts, "QBarSet", None)
QBarCategoryAxis = getattr(_charts, "QBarCategoryAxis", None)
QValueAxis = getattr(_charts, "QValueAxis", None)

CHARTS_MODULE: str = {
    "pyside6": "PySide6.QtCharts",
    "pyqt6": "PyQt6.QtCharts (pip install PyQt6-Charts)",
    "pyside2": "PySide2.QtCharts",
    "pyqt5": "PyQt5.QtChart (pip install PyQtChart)",
}[QT_API]


# ─── Qt6 scoped enum normalization ───────────────────────────────────────────
# Qt6 uses scoped enums: Qt.AlignmentFlag.AlignBottom
# Qt5 uses flat enums: Qt.AlignBottom
# Normalize to flat style so downstream code works on both.

if QT_VERSION >= 6:
    Qt.AlignBottom = Qt.AlignmentFlag.AlignBottom
    Qt.AlignLeft = Qt.AlignmentFlag.AlignLeft
    Qt.WA_DeleteOnClose = Qt.WidgetAttribute.WA_DeleteOnClose
    QPainter.Antialiasing = QPainter.RenderHint.Antialiasing


# ─── Compatibility helpers ───────────────────────────────────────────────────

def exec_app(app: QApplication) -> int:
    """Call app.exec() or app.exec_() depending on Qt version."""
    if hasattr(app, "exec"):
        return app.exec()
    return app.exec_()
