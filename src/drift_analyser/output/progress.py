"""
Progress indicator shown while remote resources are enumerated.

A render thread draws a spinner frame every DISPLAY_SPEED seconds. A watch
thread stops the spinner when no tic() arrives within TIMEOUT seconds. The
indicator is purely cosmetic and never affects the analysis.
"""

import threading
from typing import List

from ...utils import setup_logging
from .printer import Printer

logger = setup_logging()

SPINNER = ["⣾", "⣽", "⣻", "⢿", "⡿", "⣟", "⣯", "⣷"]
TIMEOUT = 10.0
DISPLAY_SPEED = 0.2


class Progress:
    def __init__(
        self,
        printer: Printer,
        timeout: float = TIMEOUT,
        display_speed: float = DISPLAY_SPEED,
    ) -> None:
        self.printer = printer
        self.timeout = timeout
        self.display_speed = display_speed
        self._lock = threading.Lock()
        self._started = False
        self._tic_event = threading.Event()
        self._end_event = threading.Event()
        self._threads: List[threading.Thread] = []

    @property
    def started(self) -> bool:
        with self._lock:
            return self._started

    def start(self) -> None:
        with self._lock:
            if self._started:
                return
            self._started = True
            self._tic_event = threading.Event()
            self._end_event = threading.Event()
            self._threads = [
                threading.Thread(target=self._watch, name="progress-watch", daemon=True),
                threading.Thread(target=self._render, name="progress-render", daemon=True),
            ]
            for thread in self._threads:
                thread.start()

    def stop(self) -> None:
        with self._lock:
            if not self._started:
                return
            self._started = False
            self._end_event.set()
            # Wakes the watch thread up
            self._tic_event.set()
            threads = self._threads
        for thread in threads:
            if thread is not threading.current_thread():
                thread.join()
        self.printer.printf("\n")

    def tic(self) -> None:
        if self.started:
            self._tic_event.set()

    def _render(self) -> None:
        end_event = self._end_event
        index = -1
        self.printer.printf("Scanning resources:\r")
        while not end_event.wait(self.display_speed):
            index = (index + 1) % len(SPINNER)
            self.printer.printf("Scanning resources: %s\r", SPINNER[index])

    def _watch(self) -> None:
        end_event = self._end_event
        tic_event = self._tic_event
        while not end_event.is_set():
            if tic_event.wait(self.timeout):
                tic_event.clear()
                continue
            if end_event.is_set():
                return
            logger.debug("Progress did not receive any tic. Stopping...")
            self.stop()
            return
