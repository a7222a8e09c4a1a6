"""
Printers for informational messages.

Informational output goes through a Printer so it can be silenced when the
report itself is written to stdout.
"""

import sys
from abc import ABC, abstractmethod
from typing import Optional, TextIO


class Printer(ABC):
    @abstractmethod
    def printf(self, format: str, *args: object) -> None:
        """Prints a %-style formatted message without adding a newline."""


class ConsolePrinter(Printer):
    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self.stream = stream

    def printf(self, format: str, *args: object) -> None:
        stream = self.stream if self.stream is not None else sys.stdout
        stream.write(format % args if args else format)
        stream.flush()

    def __eq__(self, other: object) -> bool:
        return isinstance(other, ConsolePrinter) and other.stream is self.stream


class VoidPrinter(Printer):
    def printf(self, format: str, *args: object) -> None:
        pass

    def __eq__(self, other: object) -> bool:
        return isinstance(other, VoidPrinter)
