#!/usr/bin/env python3
"""
Daemon Management Module

Runs application cycles at a fixed interval in a worker thread with
graceful shutdown on SIGTERM/SIGINT.

Created: 2025-10-27
Author: Manuel Ziel
License: MIT
"""

################################################################################
# IMPORTS & DEPENDENCIES
################################################################################

# Standard library imports
import signal
import threading
import time
from typing import Optional, Any

################################################################################
# DAEMON MANAGER CLASS - Background Process Management
################################################################################

class DaemonManager:
    """Repeats Application.run_cycle() until stopped. Cycles never overlap."""

    def __init__(self, application: Any, logger: Any, cycle_interval: int = 300,
                 install_signal_handlers: bool = True) -> None:
        self.application = application
        self.logger = logger
        self.cycle_interval = cycle_interval

        self.running = False
        self._stop_event = threading.Event()
        self._daemon_thread: Optional[threading.Thread] = None

        if install_signal_handlers:
            self._setup_signal_handlers()
        self.logger.debug("Daemon manager initialized")

    ################################################################################
    # PUBLIC INTERFACE - Daemon Lifecycle Management
    ################################################################################

    def start(self) -> bool:
        """Start the daemon loop in a background thread."""
        if self.running:
            self.logger.warning("Daemon is already running")
            return False

        self.logger.info(f"Starting daemon (interval: {self.cycle_interval}s)...")
        self.running = True
        self._stop_event.clear()

        self._daemon_thread = threading.Thread(
            target=self._daemon_loop,
            name="DaemonLoop",
            daemon=False
        )
        self._daemon_thread.start()
        return True

    def stop(self, timeout: float = 30) -> bool:
        """Stop the daemon, wait for the running cycle to finish, then clean up the application."""
        if not self.running:
            self.logger.warning("Daemon is not running")
            return False

        self.logger.info("Stopping daemon...")
        self._stop_event.set()
        self.running = False

        thread = self._daemon_thread
        if thread and thread.is_alive() and thread is not threading.current_thread():
            self.logger.debug("Waiting for daemon thread to finish...")
            thread.join(timeout=timeout)

            if thread.is_alive():
                self.logger.warning("Daemon thread did not stop within timeout")
                return False

        try:
            self.application.cleanup()
        except Exception as e:
            self.logger.warning(f"Application cleanup failed: {e}")

        self.logger.info("Daemon stopped")
        return True

    def wait(self) -> None:
        """Block until the daemon thread exits."""
        while self._daemon_thread and self._daemon_thread.is_alive():
            self._daemon_thread.join(timeout=1)

    def is_running(self) -> bool:
        return self.running and not self._stop_event.is_set()

    ################################################################################
    # PRIVATE METHODS - Internal Implementation
    ################################################################################

    def _setup_signal_handlers(self) -> None:
        """Stop gracefully on SIGTERM (systemd) and SIGINT (Ctrl+C)."""
        def signal_handler(signum: int, frame: Any) -> None:
            self.logger.info(f"Received signal {signum}, initiating shutdown...")
            self.stop()

        signal.signal(signal.SIGTERM, signal_handler)
        signal.signal(signal.SIGINT, signal_handler)

    def _daemon_loop(self) -> None:
        self.logger.debug(f"Daemon loop started (interval: {self.cycle_interval}s)")

        while not self._stop_event.is_set():
            cycle_start_time = time.monotonic()

            try:
                if not self.application.run_cycle():
                    self.logger.warning("Cycle finished with failures - retrying next interval")
            except Exception as e:
                self.logger.error(f"Error in daemon cycle: {e}", exc_info=True)

            cycle_duration = time.monotonic() - cycle_start_time
            sleep_time = max(0, self.cycle_interval - cycle_duration)

            if sleep_time > 0:
                self.logger.debug(f"Cycle completed in {cycle_duration:.2f}s, sleeping for {sleep_time:.2f}s")
            else:
                self.logger.warning(f"Cycle took {cycle_duration:.2f}s, longer than interval {self.cycle_interval}s")

            if self._stop_event.wait(timeout=sleep_time):
                break

        self.logger.debug("Daemon loop finished")
