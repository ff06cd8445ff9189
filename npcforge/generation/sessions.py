"""Registry of concurrent generation sessions.

Every session gets its own ResolutionBuilder, keyed by a session id. The
blueprints and their dependency graphs are built once and shared read-only
between all sessions.
"""

import logging
import uuid
from typing import Mapping, Sequence

from ..core.models import Blueprint
from ..errors import UnknownBlueprintError, UnknownSessionError
from .builder import FieldInfo, ResolutionBuilder
from .dependency_graph import DependencyGraph

logger = logging.getLogger(__name__)


class SessionRegistry:
    """Keeps one ResolutionBuilder per active session."""

    def __init__(self, blueprints: Mapping[str, Blueprint]):
        self._blueprints = dict(blueprints)
        # Fail on a broken blueprint now, not when a session first uses it
        self._graphs = {
            name: DependencyGraph.from_blueprints(bp.fields)
            for name, bp in self._blueprints.items()
        }
        self._sessions: dict[str, ResolutionBuilder] = {}

    @property
    def blueprint_names(self) -> list[str]:
        return list(self._blueprints)

    def start(self, blueprint_name: str) -> str:
        """Open a new session for a blueprint and return its id."""
        blueprint = self._blueprints.get(blueprint_name)
        if blueprint is None:
            raise UnknownBlueprintError(blueprint_name, self.blueprint_names)

        session_id = uuid.uuid4().hex
        self._sessions[session_id] = ResolutionBuilder(
            blueprint, self._graphs[blueprint_name]
        )
        logger.debug("Started session %s for %s", session_id, blueprint_name)
        return session_id

    def get(self, session_id: str) -> ResolutionBuilder:
        try:
            return self._sessions[session_id]
        except KeyError:
            raise UnknownSessionError(session_id) from None

    def current_field_info(self, session_id: str) -> FieldInfo | None:
        return self.get(session_id).current_field_info()

    def submit(
        self, session_id: str, values: Sequence[str]
    ) -> dict[str, list[str]] | None:
        """Submit a selection to a session.

        A session is closed as soon as its record is complete.
        """
        record = self.get(session_id).submit(values)
        if record is not None:
            self.discard(session_id)
        return record

    def discard(self, session_id: str) -> None:
        """Drop a session, finished or abandoned."""
        if self._sessions.pop(session_id, None) is None:
            raise UnknownSessionError(session_id)
        logger.debug("Closed session %s", session_id)

    def active_sessions(self) -> list[str]:
        return list(self._sessions)

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions
