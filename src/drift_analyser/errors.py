"""
Exception types raised by the drift analyser.

Recoverable conditions (a bad .driftignore line, an access denied error on a
single resource type) are never raised; they are logged or recorded as alerts.
Only conditions that must abort the whole run live here.
"""


class DriftAnalyserError(Exception):
    """Base class for fatal drift analyser errors."""


class MiddlewareError(DriftAnalyserError):
    """A middleware failed while reconciling remote and state resources."""

    def __init__(self, middleware: str, message: str) -> None:
        super().__init__(f"Middleware {middleware} failed: {message}")
        self.middleware = middleware


class EnumerationError(DriftAnalyserError):
    """Listing remote resources failed for a reason other than permissions."""

    def __init__(self, resource_type: str, message: str) -> None:
        super().__init__(f"Unable to list {resource_type}: {message}")
        self.resource_type = resource_type


class StateReadError(DriftAnalyserError):
    """The Terraform state could not be read or parsed."""
