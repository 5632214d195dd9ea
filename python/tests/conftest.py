"""Shared fixtures: a queue-driven stand-in for the Qt runtime."""

import os
import queue
import sys
import threading

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from qtplot import set_default_runtime
from qtplot._runtime import UiRuntime


class QueueRuntime(UiRuntime):
    """UI loop that drains a queue on its own thread and records opened plans."""

    def __init__(self, fail=None, never_ready=False):
        super().__init__("test-ui")
        self.launches = 0
        self.opened = []
        self.ui_threads = []
        self._fail_with = fail
        self._never_ready = never_ready
        self._queue = queue.Queue()

    def _launch(self):
        self.launches += 1
        super()._launch()

    def _run_loop(self, ready):
        if self._fail_with is not None:
            raise self._fail_with
        if not self._never_ready:
            ready()
        while True:
            task = self._queue.get()
            if task is None:
                return
            task()

    def _post(self, task):
        self._queue.put(task)

    def open_window(self, plan):
        self.opened.append(plan)
        self.ui_threads.append(threading.current_thread().name)
        return plan

    def stop(self):
        self._queue.put(None)


@pytest.fixture
def runtime():
    rt = QueueRuntime()
    yield rt
    rt.stop()


@pytest.fixture
def default_runtime(runtime):
    """Install ``runtime`` as the process-wide default for the test."""
    set_default_runtime(runtime)
    yield runtime
    set_default_runtime(None)
