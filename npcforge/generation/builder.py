"""Step-by-step resolution of a record from a blueprint.

A ResolutionBuilder holds the values committed so far. On each step it
exposes the next resolvable field together with its currently valid options,
and accepts a selection for that field. A rejected selection raises a
SubmitError and leaves the builder untouched; an accepted one is committed
for good (there is no undo).

One builder belongs to exactly one generation session. The blueprint and
dependency graph it reads from are immutable and may be shared.
"""

import logging
from typing import NamedTuple, Sequence

from ..core.models import Blueprint
from ..errors import AlreadyCompleteError, InvalidValueError, WrongCountError
from .dependency_graph import DependencyGraph

logger = logging.getLogger(__name__)


class FieldInfo(NamedTuple):
    """The field to resolve next."""

    field: str
    options: list[str]
    required_count: int


class ResolutionBuilder:
    """Builds one record field by field.

    Example:
        >>> builder = ResolutionBuilder(blueprint)
        >>> info = builder.current_field_info()
        >>> record = builder.submit([info.options[0]])
    """

    def __init__(self, blueprint: Blueprint, graph: DependencyGraph | None = None):
        self._blueprint = blueprint
        self._graph = graph or DependencyGraph.from_blueprints(blueprint.fields)
        self._state: dict[str, list[str]] = {}

    @property
    def blueprint(self) -> Blueprint:
        return self._blueprint

    @property
    def graph(self) -> DependencyGraph:
        return self._graph

    @property
    def state(self) -> dict[str, list[str]]:
        """Copy of the committed values, in resolution order."""
        return {name: list(values) for name, values in self._state.items()}

    @property
    def resolved_fields(self) -> list[str]:
        return list(self._state)

    @property
    def remaining_fields(self) -> list[str]:
        return [name for name in self._blueprint.fields if name not in self._state]

    def current_field_info(self) -> FieldInfo | None:
        """Return the next field to resolve, or None once the record is complete.

        When several fields are available the first one in blueprint
        declaration order is chosen.
        """
        available = self._graph.available_unset_fields(self._state)
        if not available:
            return None

        field = available[0]
        definition = self._blueprint.fields[field]
        return FieldInfo(
            field=field,
            options=definition.active_options(self._state),
            required_count=definition.required_count,
        )

    def submit(self, values: Sequence[str]) -> dict[str, list[str]] | None:
        """Commit a selection for the current field.

        Returns:
            The finished record if this selection completed it, else None

        Raises:
            AlreadyCompleteError: If there is no field left to resolve
            WrongCountError: If len(values) differs from the required count
            InvalidValueError: If a value is not among the active options
        """
        info = self.current_field_info()
        if info is None:
            raise AlreadyCompleteError()

        values = list(values)
        if len(values) != info.required_count:
            raise WrongCountError(len(values), info.required_count)

        allowed = set(info.options)
        for value in values:
            if value not in allowed:
                raise InvalidValueError(value, info.options)

        self._state[info.field] = values
        logger.debug("Resolved %s = %s", info.field, values)

        if self.is_complete():
            logger.info(
                "Completed %s record with %d fields",
                self._blueprint.name,
                len(self._state),
            )
            return self.state
        return None

    def is_complete(self) -> bool:
        return all(name in self._state for name in self._blueprint.fields)

    def __repr__(self) -> str:
        return (
            f"ResolutionBuilder(blueprint={self._blueprint.name!r}, "
            f"resolved={len(self._state)}/{len(self._blueprint.fields)})"
        )
