"""
Middleware Pipeline Package.

Middlewares reconcile provider-specific shape mismatches between the remote
and state resource sets before they are compared. They run in a fixed order
and mutate both lists in place.
"""

from typing import Iterable, List, Mapping, Optional

from .attribute_scope import AttributeScope
from .base import Chain, ManagedMembersImporter, Middleware
from .google_compute_instance_group_manager_instances import (
    GoogleComputeInstanceGroupManagerInstances,
)


def default_middlewares(
    attribute_scopes: Optional[Mapping[str, Iterable[str]]] = None,
) -> List[Middleware]:
    """Middlewares applied to every run, in execution order."""
    middlewares: List[Middleware] = [
        GoogleComputeInstanceGroupManagerInstances(),
    ]
    if attribute_scopes:
        # Last, so resources imported by earlier middlewares are scoped too
        middlewares.append(AttributeScope(attribute_scopes))
    return middlewares


__all__ = [
    "AttributeScope",
    "Chain",
    "GoogleComputeInstanceGroupManagerInstances",
    "ManagedMembersImporter",
    "Middleware",
    "default_middlewares",
]
