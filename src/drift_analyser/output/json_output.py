"""
JSON Output Module.

Writes the analysis as one indented JSON document, either to a file or to
stdout. When writing to stdout, informational messages are silenced so the
stream stays a single well-formed document.
"""

import json
import sys

from ..analysis import Analysis
from .printer import ConsolePrinter, Printer, VoidPrinter

JSON_OUTPUT_TYPE = "json"
JSON_OUTPUT_EXAMPLE = "json://PATH/TO/FILE.json"
STDOUT_PATHS = ("stdout", "/dev/stdout")


def render_json(analysis: Analysis) -> str:
    return json.dumps(analysis.to_dict(), indent=2)


class JSONOutput:
    def __init__(self, path: str) -> None:
        self.path = path

    def is_stdout(self) -> bool:
        return self.path in STDOUT_PATHS

    def get_info_printer(self) -> Printer:
        if self.is_stdout():
            return VoidPrinter()
        return ConsolePrinter()

    def write(self, analysis: Analysis) -> None:
        content = render_json(analysis)
        if self.is_stdout():
            sys.stdout.write(content)
            sys.stdout.flush()
            return
        with open(self.path, "w", encoding="utf-8") as f:
            f.write(content)
