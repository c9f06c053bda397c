"""Tests for the daemon loop."""

import threading
from unittest.mock import Mock

from dnspod_dyndns.daemon import DaemonManager


class CountingApplication:
    """Counts cycles and signals after the first one."""

    def __init__(self, results=(True,)):
        self.results = list(results)
        self.cycles = 0
        self.cleaned_up = False
        self.first_cycle = threading.Event()

    def run_cycle(self):
        self.cycles += 1
        self.first_cycle.set()
        result = self.results[min(self.cycles, len(self.results)) - 1]
        if isinstance(result, Exception):
            raise result
        return result

    def cleanup(self):
        self.cleaned_up = True


def make_daemon(app, interval=3600):
    return DaemonManager(app, Mock(), cycle_interval=interval, install_signal_handlers=False)


def test_start_runs_cycle_and_stop_cleans_up():
    app = CountingApplication()
    daemon = make_daemon(app)

    assert daemon.start() is True
    assert app.first_cycle.wait(timeout=5)
    assert daemon.is_running()

    assert daemon.stop(timeout=5) is True
    assert app.cycles == 1
    assert app.cleaned_up is True
    assert not daemon.is_running()


def test_start_twice_is_refused():
    app = CountingApplication()
    daemon = make_daemon(app)
    daemon.start()
    try:
        assert daemon.start() is False
    finally:
        daemon.stop(timeout=5)


def test_stop_when_not_running():
    assert make_daemon(CountingApplication()).stop() is False


def test_cycle_errors_do_not_kill_the_loop():
    app = CountingApplication(results=[RuntimeError("boom"), False, True])
    daemon = make_daemon(app, interval=0)

    daemon.start()
    try:
        for _ in range(500):
            if app.cycles >= 3:
                break
            threading.Event().wait(0.01)
    finally:
        daemon.stop(timeout=5)

    assert app.cycles >= 3
    daemon.logger.error.assert_called()
    daemon.logger.warning.assert_any_call("Cycle finished with failures - retrying next interval")


def test_wait_returns_after_stop():
    app = CountingApplication()
    daemon = make_daemon(app)
    daemon.start()
    app.first_cycle.wait(timeout=5)

    threading.Timer(0.05, daemon.stop).start()
    daemon.wait()

    assert not daemon.is_running()
