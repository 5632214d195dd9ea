"""UI runtime — the single-threaded event loop that owns every window.

The loop is started once per process on first use and never torn down.
Callers on any thread hand work to it with :meth:`UiRuntime.submit`; the
work runs later on the UI thread, in submission order.
"""

from __future__ import annotations

import os
import threading
from concurrent.futures import Future
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import TYPE_CHECKING, Any, Callable, Optional

from ._errors import BackendUnavailableError, QtPlotError, RuntimeStartupError
from ._log import log

if TYPE_CHECKING:
    from ._charts import ChartPlan

DEFAULT_STARTUP_TIMEOUT = 5.0


def startup_timeout() -> float:
    """Seconds to wait for the UI loop: ``$QTPLOT_STARTUP_TIMEOUT`` or 5.0."""
    raw = os.environ.get("QTPLOT_STARTUP_TIMEOUT", "").strip()
    if not raw:
        return DEFAULT_STARTUP_TIMEOUT
    try:
        value = float(raw)
    except ValueError:
        log.warning("QTPLOT_STARTUP_TIMEOUT=%r is not a number, using %.1fs",
                    raw, DEFAULT_STARTUP_TIMEOUT)
        return DEFAULT_STARTUP_TIMEOUT
    if value <= 0:
        log.warning("QTPLOT_STARTUP_TIMEOUT must be positive, using %.1fs",
                    DEFAULT_STARTUP_TIMEOUT)
        return DEFAULT_STARTUP_TIMEOUT
    return value


class UiRuntime:
    """Base class for a UI loop running on its own thread.

    Subclasses implement :meth:`_run_loop` (build the loop, call ``ready()``,
    then block running it), :meth:`_post` (queue a callable onto the loop)
    and :meth:`open_window`.
    """

    def __init__(self, name: str = "qtplot-ui") -> None:
        self._name = name
        self._lock = threading.Lock()
        self._started = False
        self._ready: Future = Future()
        self._thread: Optional[threading.Thread] = None

    @property
    def is_started(self) -> bool:
        return self._started

    @property
    def is_ready(self) -> bool:
        return self._ready.done() and self._ready.exception() is None

    def ensure_started(self, timeout: Optional[float] = None) -> None:
        """Launch the loop if nobody has yet, then wait until it is ready.

        Only the first caller launches; concurrent and later callers just wait.
        A launch is never retried: if the loop failed to come up, every call
        raises :class:`RuntimeStartupError`.
        """
        with self._lock:
            if not self._started:
                self._started = True
                log.debug("launching UI runtime %s", self._name)
                try:
                    self._launch()
                except Exception as exc:
                    self._fail(exc)

        if timeout is None:
            timeout = startup_timeout()
        try:
            self._ready.result(timeout=timeout)
        except FutureTimeoutError:
            raise RuntimeStartupError(
                f"UI runtime {self._name} not ready after {timeout:.1f}s"
            ) from None
        except RuntimeStartupError:
            raise
        except Exception as exc:
            raise RuntimeStartupError(f"UI runtime {self._name} failed to start: {exc}") from exc

    def _launch(self) -> None:
        self._thread = threading.Thread(target=self._thread_main, name=self._name, daemon=True)
        self._thread.start()

    def _thread_main(self) -> None:
        try:
            self._run_loop(self._mark_ready)
        except Exception as exc:
            self._fail(exc)
        else:
            log.debug("UI runtime %s loop exited", self._name)

    def _mark_ready(self) -> None:
        if not self._ready.done():
            self._ready.set_result(True)
            log.info("UI runtime %s ready", self._name)

    def _fail(self, exc: BaseException) -> None:
        if self._ready.done():
            log.error("UI runtime %s stopped: %s", self._name, exc)
            return
        log.error("UI runtime %s failed to start: %s", self._name, exc)
        self._ready.set_exception(exc)

    def submit(self, fn: Callable[..., Any], *args: Any) -> Future:
        """Run ``fn(*args)`` on the UI thread. Returns a future for its result.

        The runtime must be started. Nothing waits for the work; exceptions
        raised by ``fn`` are logged and set on the returned future.
        """
        if not self.is_ready:
            raise RuntimeStartupError(f"UI runtime {self._name} is not running")

        future: Future = Future()

        def task() -> None:
            if not future.set_running_or_notify_cancel():
                return
            try:
                result = fn(*args)
            except Exception as exc:
                log.warning("UI task %r failed: %s", fn, exc)
                future.set_exception(exc)
            else:
                future.set_result(result)

        self._post(task)
        return future

    # Subclass hooks

    def _run_loop(self, ready: Callable[[], None]) -> None:
        raise NotImplementedError

    def _post(self, task: Callable[[], None]) -> None:
        raise NotImplementedError

    def open_window(self, plan: ChartPlan) -> Any:
        """Build and show a window for ``plan``. Called on the UI thread."""
        raise NotImplementedError

    def __repr__(self) -> str:
        state = "ready" if self.is_ready else ("starting" if self._started else "idle")
        return f"{type(self).__name__}(name={self._name!r}, state={state})"


# ─── Process-wide default ────────────────────────────────────────────────────

_default_lock = threading.Lock()
_default_runtime: Optional[UiRuntime] = None


def get_default_runtime() -> UiRuntime:
    """Return the process-wide runtime, creating the Qt one on first use."""
    global _default_runtime
    with _default_lock:
        if _default_runtime is None:
            try:
                from .backends.qtcharts import QtRuntime
            except ImportError as exc:
                raise BackendUnavailableError(str(exc)) from exc

            _default_runtime = QtRuntime()
        return _default_runtime


def set_default_runtime(runtime: Optional[UiRuntime]) -> None:
    """Install the runtime used by :meth:`Figure.show` (``None`` resets to Qt)."""
    global _default_runtime
    if runtime is not None and not isinstance(runtime, UiRuntime):
        raise QtPlotError(f"expected a UiRuntime, got {type(runtime).__name__}")
    with _default_lock:
        _default_runtime = runtime
