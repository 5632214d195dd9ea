"""qtplot logger.

Usage from any module::

    from ._log import log

    log.debug("launching UI runtime on %s", thread_name)
    log.warning("startup timeout %r is not a number", raw)

Enable via environment variable::

    QTPLOT_LOG=DEBUG python my_script.py   # all messages
    QTPLOT_LOG=INFO  python my_script.py   # info and above
    QTPLOT_LOG=1     python my_script.py   # alias for DEBUG

Or programmatically::

    import logging
    logging.getLogger("qtplot").setLevel(logging.DEBUG)
"""

import logging
import os

log = logging.getLogger("qtplot")

# ANSI color codes
_COLORS = {
    "DEBUG": "\033[36m",    # Cyan
    "INFO": "\033[32m",     # Green
    "WARNING": "\033[33m",  # Yellow
    "ERROR": "\033[31m",    # Red
    "RESET": "\033[0m",
}

_ALIASES = {"1": "DEBUG", "0": "WARNING", "TRUE": "DEBUG", "FALSE": "WARNING"}


class ColoredFormatter(logging.Formatter):
    """Color the level name when the handler writes to a terminal."""

    def __init__(self, fmt: str, handler: logging.Handler) -> None:
        super().__init__(fmt)
        self.handler = handler

    def _is_tty(self) -> bool:
        stream = getattr(self.handler, "stream", None)
        return stream is not None and hasattr(stream, "isatty") and stream.isatty()

    def format(self, record):
        if not self._is_tty():
            return super().format(record)
        # Copy so other handlers keep the plain level name
        record = logging.makeLogRecord(record.__dict__)
        color = _COLORS.get(record.levelname, "")
        record.levelname = f"{color}{record.levelname}{_COLORS['RESET']}"
        return super().format(record)


def level_from_env(value: str):
    """Map a ``QTPLOT_LOG`` value to a logging level, or None if unrecognised."""
    name = value.strip().upper()
    if not name:
        return None
    name = _ALIASES.get(name, name)
    level = getattr(logging, name, None)
    return level if isinstance(level, int) else None


def configure_from_env() -> None:
    """Attach a stderr handler when ``QTPLOT_LOG`` asks for one."""
    level = level_from_env(os.environ.get("QTPLOT_LOG", ""))
    if level is None:
        return
    log.setLevel(level)
    if not log.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(ColoredFormatter(
            "[qtplot %(levelname)s] %(message)s (%(filename)s:%(lineno)d)",
            handler,
        ))
        log.addHandler(handler)


configure_from_env()
