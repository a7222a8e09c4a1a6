"""
Console Output Module.

Prints a human-readable drift report.
"""

import json
import sys
from typing import Any, Optional, TextIO

from ..analysis import Analysis
from ..resource import ABSENT
from .printer import ConsolePrinter, Printer

CONSOLE_OUTPUT_TYPE = "console"


def _format_value(value: Any) -> str:
    if value is ABSENT or value is None:
        return "<null>"
    if isinstance(value, str):
        return f'"{value}"'
    return json.dumps(value, sort_keys=True)


class ConsoleOutput:
    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self.stream = stream

    def get_info_printer(self) -> Printer:
        return ConsolePrinter(self.stream)

    def _print(self, line: str = "") -> None:
        stream = self.stream if self.stream is not None else sys.stdout
        stream.write(line + "\n")

    def write(self, analysis: Analysis) -> None:
        """Print a human-readable drift report."""
        summary = analysis.summary
        self._print("=" * 60)
        self._print("TERRAFORM DRIFT ANALYSIS REPORT")
        self._print("=" * 60)

        if analysis.deleted:
            self._print(f"\n=== Deleted Resources ({len(analysis.deleted)}) ===")
            self._print("Found resources in state but not in the cloud provider:")
            for resource in analysis.deleted:
                self._print(f"  - {resource.type} {resource.id}")

        if analysis.unmanaged:
            self._print(f"\n=== Unmanaged Resources ({len(analysis.unmanaged)}) ===")
            self._print("Found resources not covered by IaC:")
            for resource in analysis.unmanaged:
                self._print(f"  - {resource.type} {resource.id}")

        if analysis.differences:
            self._print(f"\n=== Drifted Resources ({len(analysis.differences)}) ===")
            for difference in analysis.differences:
                resource = difference.resource
                self._print(f"  - {resource.type} {resource.id}:")
                for change in difference.changes:
                    suffix = " (computed)" if change.computed else ""
                    self._print(
                        f"      ~ {'.'.join(change.path)}: "
                        f"{_format_value(change.from_value)} => "
                        f"{_format_value(change.to_value)}{suffix}"
                    )

        self._print(f"\nFound {summary.total_resources} resource(s)")
        self._print(f"  - {analysis.coverage}% coverage")
        self._print(f"  - {summary.total_managed} covered by IaC")
        self._print(f"  - {summary.total_unmanaged} not covered by IaC")
        self._print(f"  - {summary.total_deleted} deleted on cloud provider")
        self._print(f"  - {summary.total_changed}/{summary.total_managed} drifted from IaC")

        if analysis.is_sync():
            self._print("\nCongrats! Your infrastructure is fully in sync.")

        if analysis.alerts:
            self._print("\n=== Alerts ===")
            for key in sorted(analysis.alerts):
                for alert in analysis.alerts[key]:
                    self._print(f"  ! {key}: {alert.message}")

        self._print("\n" + "=" * 60)
