"""
Output Package.

Writers for the analysis report and printers for informational messages.
"""

from typing import Union

from .console import CONSOLE_OUTPUT_TYPE, ConsoleOutput
from .json_output import JSON_OUTPUT_EXAMPLE, JSON_OUTPUT_TYPE, JSONOutput
from .printer import ConsolePrinter, Printer, VoidPrinter
from .progress import Progress

Output = Union[ConsoleOutput, JSONOutput]

DEFAULT_OUTPUT = "console://"


def get_output(url: str = DEFAULT_OUTPUT) -> Output:
    """
    Parses an output URL such as "console://" or "json://out.json".

    Raises:
        ValueError: If the output type is unknown or a JSON path is missing
    """
    output_type, separator, path = url.partition("://")
    if not separator:
        raise ValueError(f"Invalid output {url!r}, expected TYPE://[PATH]")
    if output_type == CONSOLE_OUTPUT_TYPE:
        return ConsoleOutput()
    if output_type == JSON_OUTPUT_TYPE:
        if not path:
            raise ValueError(f"Missing path for json output, e.g. {JSON_OUTPUT_EXAMPLE}")
        return JSONOutput(path)
    raise ValueError(f"Unsupported output type {output_type!r}")


__all__ = [
    "ConsoleOutput",
    "ConsolePrinter",
    "JSONOutput",
    "Output",
    "Printer",
    "Progress",
    "VoidPrinter",
    "get_output",
]
