"""
Analyser Module.

Classifies remote and state resources into managed, unmanaged and deleted,
diffs the managed ones and applies the driftignore rules to the result.
"""

from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from ..utils import setup_logging
from .analysis import Alert, Analysis, ResourceDifference, Summary
from .differ import Differ
from .filter import DriftIgnore
from .resource import Resource, SchemaRepository

logger = setup_logging()

Identity = Tuple[str, str]


def _index(resources: Sequence[Resource]) -> Dict[Identity, Resource]:
    indexed: Dict[Identity, Resource] = {}
    for resource in resources:
        if resource.identity() in indexed:
            logger.warning(f"Duplicate resource {resource.key()}, keeping the first one")
            continue
        indexed[resource.identity()] = resource
    return indexed


def _sorted(resources: Sequence[Resource]) -> Tuple[Resource, ...]:
    return tuple(sorted(resources, key=Resource.identity))


class Analyzer:
    """Compares two resource sets and builds the Analysis."""

    def __init__(
        self,
        schema_repository: SchemaRepository,
        driftignore: Optional[DriftIgnore] = None,
    ) -> None:
        self.differ = Differ(schema_repository)
        self.driftignore = driftignore if driftignore is not None else DriftIgnore()

    def analyze(
        self,
        remote_resources: Sequence[Resource],
        state_resources: Sequence[Resource],
        alerts: Optional[Mapping[str, Sequence[Alert]]] = None,
    ) -> Analysis:
        """
        Builds the analysis of remote resources against state resources.

        Args:
            remote_resources: Resources enumerated from the provider APIs
            state_resources: Resources read from the Terraform state
            alerts: Enumeration alerts to attach to the result

        Returns:
            Analysis with every collection sorted by (type, id)
        """
        remote = _index(remote_resources)
        state = _index(state_resources)

        unmanaged: List[Resource] = []
        deleted: List[Resource] = []
        managed: List[Tuple[Resource, Resource]] = []

        for identity, remote_resource in remote.items():
            if self.driftignore.is_resource_ignored(remote_resource):
                continue
            if identity in state:
                managed.append((state[identity], remote_resource))
            else:
                unmanaged.append(remote_resource)

        for identity, state_resource in state.items():
            if identity in remote or self.driftignore.is_resource_ignored(state_resource):
                continue
            deleted.append(state_resource)

        managed.sort(key=lambda pair: pair[0].identity())
        differences: List[ResourceDifference] = []
        for state_resource, remote_resource in managed:
            changes = self.differ.diff(
                state_resource.type,
                state_resource.attributes.to_dict(),
                remote_resource.attributes.to_dict(),
            )
            changes = [
                change
                for change in changes
                if not self.driftignore.is_field_ignored(state_resource, change.path)
            ]
            if changes:
                differences.append(ResourceDifference(state_resource, tuple(changes)))

        managed_resources = _sorted([pair[0] for pair in managed])
        summary = Summary(
            total_resources=len(managed) + len(unmanaged) + len(deleted),
            total_changed=len(differences),
            total_unmanaged=len(unmanaged),
            total_deleted=len(deleted),
            total_managed=len(managed),
        )
        logger.info(
            f"Analysis complete: {summary.total_managed} managed, "
            f"{summary.total_unmanaged} unmanaged, {summary.total_deleted} deleted, "
            f"{summary.total_changed} drifted"
        )

        return Analysis(
            summary=summary,
            managed=managed_resources,
            unmanaged=_sorted(unmanaged),
            deleted=_sorted(deleted),
            differences=tuple(differences),
            alerts=MappingProxyType(
                {key: tuple(values) for key, values in sorted((alerts or {}).items())}
            ),
        )
