"""Dependency graph helpers: topological sort and cycle detection.

Graphs are plain ``dict[str, list[str]]`` mappings of node -> nodes it
depends on. Iteration order of the mapping is used as the tie-break, so
callers that pass declaration-ordered dicts get declaration-ordered results.
"""

from ..errors import CircularDependencyError


def find_cycle(deps: dict[str, list[str]]) -> list[str] | None:
    """Return one dependency cycle as a closed path, or None if acyclic.

    Dependencies on names that are not keys of ``deps`` are ignored.

    Example:
        >>> find_cycle({"a": ["b"], "b": ["a"], "c": []})
        ['a', 'b', 'a']
    """
    visiting: set[str] = set()
    done: set[str] = set()
    path: list[str] = []

    def visit(node: str) -> list[str] | None:
        visiting.add(node)
        path.append(node)
        for dep in deps.get(node, []):
            if dep not in deps or dep in done:
                continue
            if dep in visiting:
                return path[path.index(dep) :] + [dep]
            cycle = visit(dep)
            if cycle:
                return cycle
        visiting.discard(node)
        done.add(node)
        path.pop()
        return None

    for node in deps:
        if node not in done:
            cycle = visit(node)
            if cycle:
                return cycle
    return None


def topological_sort(deps: dict[str, list[str]]) -> list[str]:
    """Order nodes so every node comes after the nodes it depends on.

    Among nodes that are ready at the same time, the one that appears first
    in ``deps`` wins.

    Raises:
        CircularDependencyError: If the graph contains a cycle
    """
    remaining = {
        node: {d for d in node_deps if d in deps and d != node}
        for node, node_deps in deps.items()
    }
    self_loops = [node for node, node_deps in deps.items() if node in node_deps]
    if self_loops:
        raise CircularDependencyError([self_loops[0], self_loops[0]])

    order: list[str] = []
    placed: set[str] = set()
    while remaining:
        ready = next(
            (node for node, node_deps in remaining.items() if node_deps <= placed),
            None,
        )
        if ready is None:
            cycle = find_cycle({n: sorted(d) for n, d in remaining.items()})
            raise CircularDependencyError(cycle or list(remaining))
        order.append(ready)
        placed.add(ready)
        del remaining[ready]

    return order
