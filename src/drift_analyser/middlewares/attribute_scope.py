"""
Attribute Scope Middleware.

Enumerators read a subset of each resource's attributes from the provider API,
while the state holds every argument Terraform knows about. Left alone, each
state-only argument would be reported as removed. For the scoped resource
types, this middleware restricts declared attributes to the ones the
enumerator reads.
"""

from typing import Dict, Iterable, List, Mapping, Tuple

from ..resource import Resource
from .base import Middleware

ID_ATTRIBUTE = "id"


class AttributeScope(Middleware):
    """Scoped resources always keep their id attribute."""

    def __init__(self, scopes: Mapping[str, Iterable[str]]) -> None:
        self.scopes: Dict[str, Tuple[str, ...]] = {
            resource_type: tuple(names) + (ID_ATTRIBUTE,)
            for resource_type, names in scopes.items()
        }

    def execute(
        self, remote_resources: List[Resource], state_resources: List[Resource]
    ) -> None:
        for index, resource in enumerate(state_resources):
            names = self.scopes.get(resource.type)
            if names is None:
                continue
            tree = resource.attributes.to_dict()
            scoped = {key: value for key, value in tree.items() if key in names}
            if len(scoped) == len(tree):
                continue
            state_resources[index] = Resource(
                resource.type, resource.id, scoped, source=resource.source
            )
