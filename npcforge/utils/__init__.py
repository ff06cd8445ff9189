"""Pure utility functions for npcforge.

This module contains pure functions with no dependencies on npcforge models
or engine modules. They can be imported from anywhere without circular
import risk.

Modules:
- graphs: Topological sort and cycle detection
- paths: Resolving files referenced from blueprint files
"""

from .graphs import topological_sort, find_cycle, CircularDependencyError
from .paths import resolve_relative_to, display_path

__all__ = [
    # Graphs
    "topological_sort",
    "find_cycle",
    "CircularDependencyError",
    # Paths
    "resolve_relative_to",
    "display_path",
]
