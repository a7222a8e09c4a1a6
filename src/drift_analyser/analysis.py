"""
Analysis report model.

An Analysis is built once by the Analyzer and never modified afterwards; every
collection it holds is a tuple or a read-only mapping. to_dict() gives the
stable wire form consumed by the output writers.
"""

import enum
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Tuple

from .resource import ABSENT, Resource
from .types import AnalysisDict


class ChangeKind(str, enum.Enum):
    ADD = "create"
    REMOVE = "delete"
    UPDATE = "update"


@dataclass(frozen=True)
class Difference:
    """A leaf-level mismatch between the declared and live value of a field."""

    path: Tuple[str, ...]
    from_value: Any
    to_value: Any
    kind: ChangeKind
    computed: bool = False

    def sort_key(self) -> Tuple[str, ...]:
        return self.path

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.kind.value,
            "path": list(self.path),
            "from": None if self.from_value is ABSENT else self.from_value,
            "to": None if self.to_value is ABSENT else self.to_value,
            "computed": self.computed,
        }


@dataclass(frozen=True)
class ResourceDifference:
    resource: Resource
    changes: Tuple[Difference, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "res": self.resource.to_dict(),
            "changelog": [change.to_dict() for change in self.changes],
        }


@dataclass(frozen=True)
class Alert:
    """Non-fatal notice attached to an analysis, e.g. a permission failure."""

    message: str

    def to_dict(self) -> Dict[str, str]:
        return {"message": self.message}


@dataclass(frozen=True)
class Summary:
    total_resources: int = 0
    total_changed: int = 0
    total_unmanaged: int = 0
    total_deleted: int = 0
    total_managed: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            "total_resources": self.total_resources,
            "total_changed": self.total_changed,
            "total_unmanaged": self.total_unmanaged,
            "total_deleted": self.total_deleted,
            "total_managed": self.total_managed,
        }


def _empty_alerts() -> Mapping[str, Tuple[Alert, ...]]:
    return MappingProxyType({})


@dataclass(frozen=True)
class Analysis:
    """Categorised result of comparing remote resources with state resources."""

    summary: Summary = field(default_factory=Summary)
    managed: Tuple[Resource, ...] = ()
    unmanaged: Tuple[Resource, ...] = ()
    deleted: Tuple[Resource, ...] = ()
    differences: Tuple[ResourceDifference, ...] = ()
    alerts: Mapping[str, Tuple[Alert, ...]] = field(default_factory=_empty_alerts)

    @property
    def coverage(self) -> int:
        if self.summary.total_resources == 0:
            return 0
        return int(self.summary.total_managed * 100 / self.summary.total_resources)

    def is_sync(self) -> bool:
        return not (self.unmanaged or self.deleted or self.differences)

    def drifted_resources(self) -> List[Resource]:
        return [difference.resource for difference in self.differences]

    def to_dict(self) -> AnalysisDict:
        return {
            "summary": self.summary.to_dict(),
            "managed": [resource.to_dict() for resource in self.managed],
            "unmanaged": [resource.to_dict() for resource in self.unmanaged],
            "deleted": [resource.to_dict() for resource in self.deleted],
            "differences": [difference.to_dict() for difference in self.differences],
            "coverage": self.coverage,
            "alerts": {
                key: [alert.to_dict() for alert in self.alerts[key]]
                for key in sorted(self.alerts)
            },
        }
