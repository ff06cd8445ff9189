"""Dependency graph between the fields of a blueprint.

A field depends on another field when one of its choice sources filters on
that field. Fields without dependencies are roots and can always be resolved
first. A non-root field becomes resolvable once every field it filters on
has been resolved, whatever values those fields took.

The graph is immutable once built and can be shared freely between
generation sessions.
"""

import logging
from typing import Mapping

from ..core.models import FieldDefinition, ResolutionState
from ..errors import (
    CircularDependencyError,
    NoRootFieldsError,
    UnknownDependencyError,
)
from ..utils import find_cycle, topological_sort

logger = logging.getLogger(__name__)


class DependencyGraph:
    """Directed graph of field dependencies with multiple roots."""

    def __init__(
        self,
        order: tuple[str, ...],
        roots: tuple[str, ...],
        dependencies: Mapping[str, frozenset[str]],
    ):
        self._order = order
        self._position = {name: i for i, name in enumerate(order)}
        self._roots = roots
        # left depends on each of right
        self._dependencies = dict(dependencies)

    @classmethod
    def from_blueprints(cls, fields: Mapping[str, FieldDefinition]) -> "DependencyGraph":
        """Build the graph for a set of field definitions.

        Raises:
            NoRootFieldsError: If every field depends on some other field
            UnknownDependencyError: If a filter targets a field not in the set
            CircularDependencyError: If fields depend on each other in a cycle
        """
        roots: list[str] = []
        dependencies: dict[str, frozenset[str]] = {}

        for name, definition in fields.items():
            targets = definition.dependency_targets()
            if not targets:
                roots.append(name)
            else:
                dependencies[name] = frozenset(targets)

        if not roots:
            raise NoRootFieldsError(list(fields))

        for name, targets in dependencies.items():
            for target in sorted(targets):
                if target not in fields:
                    raise UnknownDependencyError(name, target)

        cycle = find_cycle({name: sorted(deps) for name, deps in dependencies.items()})
        if cycle:
            raise CircularDependencyError(cycle)

        logger.debug(
            "Built dependency graph: %d fields, %d roots, %d dependent",
            len(fields),
            len(roots),
            len(dependencies),
        )
        return cls(tuple(fields), tuple(roots), dependencies)

    # ── Structure ──

    @property
    def roots(self) -> tuple[str, ...]:
        return self._roots

    @property
    def fields(self) -> tuple[str, ...]:
        return self._order

    def _sorted(self, names) -> list[str]:
        return sorted(names, key=self._position.__getitem__)

    def dependencies_of(self, field: str) -> list[str]:
        """Fields that ``field`` filters on."""
        return self._sorted(self._dependencies.get(field, ()))

    def dependents_of(self, field: str) -> list[str]:
        """Fields that declare a dependency on ``field``."""
        return self._sorted(
            name for name, targets in self._dependencies.items() if field in targets
        )

    def resolution_order(self) -> list[str]:
        """One complete order in which the fields can be resolved."""
        return topological_sort(
            {name: self.dependencies_of(name) for name in self._order}
        )

    # ── Availability ──

    def determined_fields(self, state: ResolutionState) -> list[str]:
        """Non-root fields whose dependencies are all present in ``state``.

        Only presence is checked; the values matter later, when the active
        options of the field are computed.
        """
        return self._sorted(
            name
            for name, targets in self._dependencies.items()
            if all(target in state for target in targets)
        )

    def available_unset_fields(self, state: ResolutionState) -> list[str]:
        """Fields that may be resolved next, in declaration order."""
        candidates = set(self._roots) | set(self.determined_fields(state))
        return self._sorted(name for name in candidates if name not in state)

    def __repr__(self) -> str:
        return (
            f"DependencyGraph(fields={len(self._order)}, roots={list(self._roots)})"
        )
