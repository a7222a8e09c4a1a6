"""
Driftignore Filter Module.

Reads suppression rules from a .driftignore file. Each non-blank line is a
dot-separated rule, and lines starting with # are comments:

    # generated by the platform team
    aws_s3_bucket.my-bucket           ignore one resource
    aws_iam_user.*                    ignore every resource of a type
    aws_instance.i-123.tags.Name      ignore drift on one field
    aws_instance.*.tags.*             wildcards match any single segment

A dot preceded by a backslash is part of the segment (``foo\\.bar``), and a
doubled backslash is a literal backslash (``foo\\\\.bar`` splits after it).
"""

from typing import Dict, Iterable, List, Optional, Sequence, Set

from ..utils import setup_logging
from .resource import Resource

logger = setup_logging()

WILDCARD = "*"
DEFAULT_DRIFTIGNORE_PATH = ".driftignore"


def escapable_split(line: str) -> List[str]:
    """
    Splits a rule on unescaped dots and resolves escape sequences.

    An empty line yields no segment, and a trailing separator does not produce
    an empty last segment.
    """
    segments: List[str] = []
    current: List[str] = []
    pending = False
    i = 0
    while i < len(line):
        char = line[i]
        if char == "\\" and i + 1 < len(line):
            current.append(line[i + 1])
            pending = True
            i += 2
            continue
        if char == ".":
            segments.append("".join(current))
            current = []
            pending = False
        else:
            current.append(char)
            pending = True
        i += 1
    if pending:
        segments.append("".join(current))
    return segments


def escape_segment(segment: str) -> str:
    """Inverse of the escaping applied by escapable_split for one segment."""
    return segment.replace("\\", "\\\\").replace(".", "\\.")


def join_segments(segments: Sequence[str]) -> str:
    return ".".join(escape_segment(segment) for segment in segments)


class DriftIgnore:
    """
    Resource and field exclusion rules.

    Built once per run and never modified afterwards.
    """

    def __init__(
        self,
        resource_exclusions: Iterable[str] = (),
        field_exclusions: Optional[Dict[str, List[List[str]]]] = None,
    ) -> None:
        self._resource_exclusions: Set[str] = set(resource_exclusions)
        self._field_exclusions: Dict[str, List[List[str]]] = {
            key: [list(pattern) for pattern in patterns]
            for key, patterns in (field_exclusions or {}).items()
        }

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "DriftIgnore":
        resource_exclusions: Set[str] = set()
        field_exclusions: Dict[str, List[List[str]]] = {}

        for raw_line in lines:
            line = raw_line.strip()
            if not line or line.startswith("#"):
                continue
            segments = escapable_split(line)
            if len(segments) < 2:
                logger.warning(
                    f"Unable to parse .driftignore line {line!r}: "
                    f"invalid length, got {len(segments)} expected >= 2"
                )
                continue

            # Keys keep the type and id unescaped, matching Resource.key()
            key = f"{segments[0]}.{segments[1]}"
            if len(segments) == 2:
                logger.debug(
                    f"Found ignore resource rule in .driftignore: "
                    f"type={segments[0]} id={segments[1]}"
                )
                resource_exclusions.add(key)
                continue

            path = segments[2:]
            logger.debug(
                f"Found ignore resource field rule in .driftignore: "
                f"type={segments[0]} id={segments[1]} path={path}"
            )
            field_exclusions.setdefault(key, []).append(path)

        return cls(resource_exclusions, field_exclusions)

    @classmethod
    def from_file(cls, path: str = DEFAULT_DRIFTIGNORE_PATH) -> "DriftIgnore":
        """
        Reads rules from path.

        A missing or unreadable file is not an error: the run continues with
        no rules.
        """
        try:
            with open(path, "r", encoding="utf-8") as f:
                lines = f.read().splitlines()
        except FileNotFoundError:
            logger.debug(f"No ignore file found at {path}, no rule applied")
            return cls()
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Unable to read ignore file {path}: {e}")
            return cls()
        return cls.from_lines(lines)

    @property
    def resource_exclusions(self) -> Set[str]:
        return set(self._resource_exclusions)

    @property
    def field_exclusions(self) -> Dict[str, List[List[str]]]:
        return {
            key: [list(pattern) for pattern in patterns]
            for key, patterns in self._field_exclusions.items()
        }

    def is_resource_ignored(self, resource: Resource) -> bool:
        return (
            resource.key() in self._resource_exclusions
            or f"{resource.type}.{WILDCARD}" in self._resource_exclusions
        )

    def is_field_ignored(self, resource: Resource, path: Sequence[str]) -> bool:
        # Rules written for this exact id replace the type-wide ones
        rules = self._field_exclusions.get(resource.key())
        if rules is None:
            rules = self._field_exclusions.get(f"{resource.type}.{WILDCARD}")
        if not rules:
            return False
        return any(_pattern_matches(rule, path) for rule in rules)


def _pattern_matches(pattern: Sequence[str], path: Sequence[str]) -> bool:
    if len(pattern) > len(path):
        return False
    for expected, actual in zip(pattern, path):
        if expected != WILDCARD and expected.lower() != str(actual).lower():
            return False
    return True
