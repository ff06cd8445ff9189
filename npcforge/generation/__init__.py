"""Record generation engine.

- dependency_graph.py: which fields can be resolved given committed values
- builder.py: the per-session ResolutionBuilder
- sessions.py: a registry of concurrent sessions
"""

from .dependency_graph import DependencyGraph
from .builder import FieldInfo, ResolutionBuilder
from .sessions import SessionRegistry

__all__ = [
    "DependencyGraph",
    "FieldInfo",
    "ResolutionBuilder",
    "SessionRegistry",
]
