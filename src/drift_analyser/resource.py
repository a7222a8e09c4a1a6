"""
Resource and Schema Model.

A Resource is identified by its Terraform type and id and carries a normalised
attribute tree made of plain dicts, lists and scalars. Attributes are addressed
by path ("tags.Name" or ["tags", "Name"]); a path that does not exist resolves
to ABSENT rather than raising, so "missing" and "present but empty" stay
distinguishable.

Schemas hold per-type attribute metadata (computed fields, embedded JSON
strings) and flags. They are registered once at startup into a
SchemaRepository which is then sealed and only read during analysis.
"""

import copy
import enum
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Mapping, Optional, Tuple

from .types import AttributePath, AttributeTree


class _Absent:
    """Marker for a path that does not exist in an attribute tree."""

    _instance: Optional["_Absent"] = None

    def __new__(cls) -> "_Absent":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "ABSENT"

    def __copy__(self) -> "_Absent":
        return self

    def __deepcopy__(self, memo: dict) -> "_Absent":
        return self


ABSENT = _Absent()


def split_path(path: AttributePath) -> List[str]:
    """Normalise a dotted path or a segment sequence into a list of segments."""
    if isinstance(path, str):
        return path.split(".") if path else []
    return [str(segment) for segment in path]


class Attributes:
    """Path-addressable view over a resource attribute tree."""

    def __init__(self, tree: Optional[AttributeTree] = None) -> None:
        self._tree: AttributeTree = tree if tree is not None else {}

    def get(self, path: AttributePath) -> object:
        """Returns the value at path, or ABSENT if any segment is missing."""
        current: object = self._tree
        for segment in split_path(path):
            if isinstance(current, dict):
                if segment not in current:
                    return ABSENT
                current = current[segment]
            elif isinstance(current, list):
                if not segment.isdigit() or int(segment) >= len(current):
                    return ABSENT
                current = current[int(segment)]
            else:
                return ABSENT
        return current

    def get_string(self, path: AttributePath) -> object:
        value = self.get(path)
        return value if isinstance(value, str) else ABSENT

    def get_map(self, path: AttributePath) -> object:
        value = self.get(path)
        return value if isinstance(value, dict) else ABSENT

    def get_slice(self, path: AttributePath) -> object:
        value = self.get(path)
        return value if isinstance(value, list) else ABSENT

    def has(self, path: AttributePath) -> bool:
        return self.get(path) is not ABSENT

    def to_dict(self) -> AttributeTree:
        return copy.deepcopy(self._tree)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Attributes):
            return NotImplemented
        return self._tree == other._tree

    def __repr__(self) -> str:
        return f"Attributes({self._tree!r})"


class Resource:
    """
    A cloud resource, either enumerated live or read from Terraform state.

    Two resources are the same resource iff their (type, id) match exactly.
    """

    def __init__(
        self,
        type: str,
        id: str,
        attributes: Optional[AttributeTree] = None,
        source: Optional[str] = None,
    ) -> None:
        self.type = type
        self.id = id
        self.attributes = Attributes(attributes)
        # Terraform address (e.g. "module.x.aws_s3_bucket.foo") when read from state
        self.source = source

    def identity(self) -> Tuple[str, str]:
        return (self.type, self.id)

    def key(self) -> str:
        return f"{self.type}.{self.id}"

    def to_dict(self) -> Dict[str, str]:
        return {"id": self.id, "type": self.type}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Resource):
            return NotImplemented
        return self.identity() == other.identity()

    def __hash__(self) -> int:
        return hash(self.identity())

    def __repr__(self) -> str:
        return f"Resource({self.type!r}, {self.id!r})"


class Flags(enum.IntFlag):
    """Per-type schema flags."""

    NONE = 0
    # Type needs secondary API calls to be fully enumerated
    FLAG_DEEP_MODE = 1


@dataclass
class AttributeSchema:
    """Metadata for a single attribute path."""

    computed: bool = False
    json_string: bool = False


@dataclass
class Schema:
    """Attribute metadata for one resource type."""

    resource_type: str
    attributes: Dict[str, AttributeSchema] = field(default_factory=dict)
    flags: Flags = Flags.NONE

    def attribute(self, path: AttributePath) -> Optional[AttributeSchema]:
        """Looks up the schema of a diff path, ignoring list indices."""
        key = ".".join(s for s in split_path(path) if not s.isdigit())
        return self.attributes.get(key)

    def is_computed(self, path: AttributePath) -> bool:
        """True if the path or any of its ancestors is marked computed."""
        segments = [s for s in split_path(path) if not s.isdigit()]
        for end in range(1, len(segments) + 1):
            attribute = self.attributes.get(".".join(segments[:end]))
            if attribute is not None and attribute.computed:
                return True
        return False

    def is_json_string(self, path: AttributePath) -> bool:
        attribute = self.attribute(path)
        return attribute is not None and attribute.json_string

    def has_flag(self, flag: Flags) -> bool:
        return bool(self.flags & flag)


AttributeMutator = Callable[[AttributeSchema], None]


class SchemaRepository:
    """
    Registry of resource schemas.

    Populated by the init_*_metadata functions at startup, then sealed; after
    seal() the repository is read-only and safe to share between threads.
    """

    def __init__(self) -> None:
        self._schemas: Dict[str, Schema] = {}
        self._sealed = False

    def _schema_for_update(self, resource_type: str) -> Schema:
        if self._sealed:
            raise RuntimeError(
                f"Cannot update schema of {resource_type}: repository is sealed"
            )
        if resource_type not in self._schemas:
            self._schemas[resource_type] = Schema(resource_type=resource_type)
        return self._schemas[resource_type]

    def update_schema(
        self, resource_type: str, mutators: Mapping[str, AttributeMutator]
    ) -> None:
        """Applies each mutator to the attribute schema at its path."""
        schema = self._schema_for_update(resource_type)
        for path, mutator in mutators.items():
            attribute = schema.attributes.setdefault(path, AttributeSchema())
            mutator(attribute)

    def set_flags(self, resource_type: str, *flags: Flags) -> None:
        schema = self._schema_for_update(resource_type)
        for flag in flags:
            schema.flags |= flag

    def get_schema(self, resource_type: str) -> Optional[Schema]:
        return self._schemas.get(resource_type)

    def seal(self) -> None:
        self._sealed = True

    @property
    def sealed(self) -> bool:
        return self._sealed

    def resource_types(self) -> List[str]:
        return sorted(self._schemas)


def computed(attribute: AttributeSchema) -> None:
    """Mutator marking an attribute as computed."""
    attribute.computed = True


def json_string(attribute: AttributeSchema) -> None:
    """Mutator marking an attribute as a serialised JSON document."""
    attribute.json_string = True


def value_is_explicit(value: object) -> bool:
    """A declared value counts as explicit unless it is absent or null."""
    return value is not ABSENT and value is not None
