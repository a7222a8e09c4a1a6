"""
Remote Enumeration Package.

Lists live resources from provider APIs. Enumerators run concurrently; access
denied errors become alerts so one forbidden resource type does not stop the
scan of the others.
"""

from .aws import aws_enumerators
from .scanner import Enumerator, RemoteScanner, is_access_denied

__all__ = [
    "Enumerator",
    "RemoteScanner",
    "aws_enumerators",
    "is_access_denied",
]
