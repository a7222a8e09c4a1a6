"""
Base Middleware Module.

Defines the middleware interface, the Chain that runs middlewares in
registration order, and a reusable importer for resources that are managed
implicitly by another declared resource.
"""

from abc import ABC, abstractmethod
from typing import Iterable, List, Set, Tuple

from ...utils import setup_logging
from ..errors import MiddlewareError
from ..resource import Resource

logger = setup_logging()


class Middleware(ABC):
    """A transformation applied to both resource sets before comparison."""

    @property
    def name(self) -> str:
        return type(self).__name__

    @abstractmethod
    def execute(
        self, remote_resources: List[Resource], state_resources: List[Resource]
    ) -> None:
        """Mutates remote_resources and/or state_resources in place."""


class Chain:
    """Runs middlewares strictly in the order they were registered."""

    def __init__(self, middlewares: Iterable[Middleware] = ()) -> None:
        self.middlewares: List[Middleware] = list(middlewares)

    def add(self, middleware: Middleware) -> "Chain":
        self.middlewares.append(middleware)
        return self

    def execute(
        self, remote_resources: List[Resource], state_resources: List[Resource]
    ) -> None:
        """
        Executes every middleware over the two sets.

        Raises:
            MiddlewareError: If any middleware fails; later middlewares do not run
        """
        for middleware in self.middlewares:
            logger.debug(f"Running middleware {middleware.name}")
            try:
                middleware.execute(remote_resources, state_resources)
            except MiddlewareError:
                raise
            except Exception as e:
                raise MiddlewareError(middleware.name, str(e)) from e


class ManagedMembersImporter(Middleware):
    """
    Imports remote members of a declared manager resource into the state set.

    Some resources create child resources that are enumerated separately but
    never appear in the state. Without this, every child would be reported as
    unmanaged. Members are matched to their manager by comparing a key
    attribute on both sides, and inserted right after their manager.
    """

    manager_type: str = ""
    member_type: str = ""
    manager_key: str = "name"
    member_key: str = "name"

    def execute(
        self, remote_resources: List[Resource], state_resources: List[Resource]
    ) -> None:
        members = [r for r in remote_resources if r.type == self.member_type]
        if not members:
            return

        known: Set[Tuple[str, str]] = {r.identity() for r in state_resources}
        reconciled: List[Resource] = []
        for state_resource in state_resources:
            reconciled.append(state_resource)
            if state_resource.type != self.manager_type:
                continue

            manager_key = state_resource.attributes.get_string(self.manager_key)
            if not manager_key:
                continue

            for member in members:
                if member.identity() in known:
                    continue
                if member.attributes.get_string(self.member_key) == manager_key:
                    logger.debug(
                        f"Importing {member.key()} managed by {state_resource.key()}"
                    )
                    reconciled.append(member)
                    known.add(member.identity())

        state_resources[:] = reconciled
