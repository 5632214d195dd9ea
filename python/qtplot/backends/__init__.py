"""qtplot GUI backends.

Available backends:
    - ``qtplot.backends.qtcharts`` — Qt Charts on Qt5/Qt6 (PySide6, PyQt6, PySide2, PyQt5)

Usage::

    from qtplot.backends.qtcharts import QtRuntime, build_chart
"""
