"""Exception hierarchy for qtplot."""


class QtPlotError(Exception):
    """Base exception for all qtplot errors."""
    pass


class InvalidChartTypeError(QtPlotError, ValueError):
    """A figure's type code does not name a known chart type."""

    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Unknown chart type: {code!r} (expected 'l', 's' or 'h')")


class RuntimeStartupError(QtPlotError):
    """The UI runtime did not become ready."""
    pass


class BackendUnavailableError(QtPlotError, ImportError):
    """No usable Qt binding or Qt Charts module is installed."""
    pass
