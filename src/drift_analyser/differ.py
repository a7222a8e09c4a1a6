"""
Structural Differ Module.

Walks the declared (state) and live (remote) attribute trees of a resource in
lock-step and reports one Difference per leaf path whose values disagree.

Schema metadata adjusts the walk:
- json_string fields are parsed on both sides and diffed as documents, so
  whitespace or key order changes in a policy are not drift;
- computed fields are only reported when the state declares a value for them.
"""

import json
from typing import Any, List, Optional, Tuple

from ..utils import setup_logging
from .analysis import ChangeKind, Difference
from .resource import ABSENT, Schema, SchemaRepository, value_is_explicit
from .types import AttributeTree

logger = setup_logging()

Path = Tuple[str, ...]


def _is_missing(value: Any) -> bool:
    return value is ABSENT or value is None


def _values_equal(left: Any, right: Any) -> bool:
    # bool is an int subclass; True must not equal 1
    if isinstance(left, bool) != isinstance(right, bool):
        return False
    return bool(left == right)


def _parse_json(value: str) -> Tuple[bool, Any]:
    try:
        return True, json.loads(value)
    except (TypeError, ValueError):
        return False, value


class Differ:
    """Schema-aware structural comparison of attribute trees."""

    def __init__(self, schema_repository: SchemaRepository) -> None:
        self.schema_repository = schema_repository

    def diff(
        self,
        resource_type: str,
        state_attributes: AttributeTree,
        remote_attributes: AttributeTree,
    ) -> List[Difference]:
        """
        Compare the attributes of one resource.

        Args:
            resource_type: Terraform type, used to look up the schema
            state_attributes: Declared attribute tree (the "from" side)
            remote_attributes: Live attribute tree (the "to" side)

        Returns:
            Differences sorted by path
        """
        schema = self.schema_repository.get_schema(resource_type)
        differences: List[Difference] = []
        self._walk(schema, (), state_attributes, remote_attributes, differences)
        differences.sort(key=Difference.sort_key)
        return differences

    def _walk(
        self,
        schema: Optional[Schema],
        path: Path,
        from_value: Any,
        to_value: Any,
        out: List[Difference],
    ) -> None:
        if (
            path
            and schema is not None
            and schema.is_json_string(path)
            and isinstance(from_value, str)
            and isinstance(to_value, str)
        ):
            from_ok, from_parsed = _parse_json(from_value)
            to_ok, to_parsed = _parse_json(to_value)
            if from_ok and to_ok:
                from_value, to_value = from_parsed, to_parsed
            else:
                logger.debug(f"Comparing {'.'.join(path)} as raw text: invalid JSON")

        if isinstance(from_value, dict) and isinstance(to_value, dict):
            for key in sorted(set(from_value) | set(to_value)):
                self._walk(
                    schema,
                    path + (str(key),),
                    from_value.get(key, ABSENT),
                    to_value.get(key, ABSENT),
                    out,
                )
            return

        if isinstance(from_value, list) and isinstance(to_value, list):
            for index in range(max(len(from_value), len(to_value))):
                self._walk(
                    schema,
                    path + (str(index),),
                    from_value[index] if index < len(from_value) else ABSENT,
                    to_value[index] if index < len(to_value) else ABSENT,
                    out,
                )
            return

        if _is_missing(from_value) and isinstance(to_value, (dict, list)):
            self._emit_leaves(schema, path, to_value, ChangeKind.ADD, out)
            return
        if _is_missing(to_value) and isinstance(from_value, (dict, list)):
            self._emit_leaves(schema, path, from_value, ChangeKind.REMOVE, out)
            return

        if _is_missing(from_value) and _is_missing(to_value):
            return
        if _values_equal(from_value, to_value):
            return

        if _is_missing(from_value):
            kind = ChangeKind.ADD
        elif _is_missing(to_value):
            kind = ChangeKind.REMOVE
        else:
            kind = ChangeKind.UPDATE
        self._emit(schema, path, from_value, to_value, kind, out)

    def _emit_leaves(
        self,
        schema: Optional[Schema],
        path: Path,
        value: Any,
        kind: ChangeKind,
        out: List[Difference],
    ) -> None:
        """Reports every leaf of a container that exists on one side only."""
        if isinstance(value, dict):
            children = [(str(key), value[key]) for key in sorted(value)]
        elif isinstance(value, list):
            children = [(str(index), item) for index, item in enumerate(value)]
        else:
            if value is None:
                return
            if kind == ChangeKind.ADD:
                self._emit(schema, path, ABSENT, value, kind, out)
            else:
                self._emit(schema, path, value, ABSENT, kind, out)
            return
        for segment, child in children:
            self._emit_leaves(schema, path + (segment,), child, kind, out)

    def _emit(
        self,
        schema: Optional[Schema],
        path: Path,
        from_value: Any,
        to_value: Any,
        kind: ChangeKind,
        out: List[Difference],
    ) -> None:
        is_computed = schema is not None and schema.is_computed(path)
        if is_computed and not value_is_explicit(from_value):
            # Provider populated a value the state never declared
            return
        out.append(
            Difference(
                path=path,
                from_value=from_value,
                to_value=to_value,
                kind=kind,
                computed=is_computed,
            )
        )
