"""Transitive ancestor/descendant closures by breadth-first traversal."""

from collections import deque
from typing import Dict, List, Mapping, Sequence, Tuple

from ror_hierarchy.codes import Direction
from .graph import RelationshipGraph


class ClosureCache:
    """Per-run memo of computed closures keyed by (direction, node).

    Created by the caller and passed into the traversal explicitly; there is
    no module-level cache. Cached closures are stored as tuples so a hit can
    never be mutated by a caller.
    """

    def __init__(self):
        self._entries: Dict[Tuple[Direction, str], Tuple[str, ...]] = {}
        self.hits = 0
        self.misses = 0

    def get(self, direction: Direction, node: str) -> Tuple[str, ...] | None:
        entry = self._entries.get((direction, node))
        if entry is None:
            self.misses += 1
        else:
            self.hits += 1
        return entry

    def put(self, direction: Direction, node: str, closure: Sequence[str]) -> Tuple[str, ...]:
        entry = tuple(closure)
        self._entries[(direction, node)] = entry
        return entry

    def __len__(self) -> int:
        return len(self._entries)


def find_closure(origin: str, adjacency: Mapping[str, Sequence[str]]) -> List[str]:
    """All nodes reachable from origin through adjacency, in BFS order.

    The origin itself is never part of the result, even when a cycle leads
    back to it. A node reached along several paths (diamonds, duplicate
    edges) appears once, at its first discovery.
    """
    closure: List[str] = []
    discovered = {origin}
    visited = set()
    queue = deque([origin])

    while queue:
        current = queue.popleft()
        if current in visited:
            continue
        visited.add(current)

        for neighbor in adjacency.get(current, ()):
            if neighbor not in discovered:
                discovered.add(neighbor)
                closure.append(neighbor)
                queue.append(neighbor)

    return closure


def _adjacency_for(graph: RelationshipGraph, direction: Direction) -> Mapping[str, Sequence[str]]:
    if direction == Direction.ANCESTORS:
        return graph.parents_of
    return graph.children_of


def compute_closure(
    graph: RelationshipGraph,
    node: str,
    direction: Direction,
    cache: ClosureCache | None = None,
) -> Tuple[str, ...]:
    """Closure of node in one direction, consulting cache when given."""
    if cache is not None:
        cached = cache.get(direction, node)
        if cached is not None:
            return cached
    closure = find_closure(node, _adjacency_for(graph, direction))
    if cache is not None:
        return cache.put(direction, node, closure)
    return tuple(closure)


def find_ancestors(graph: RelationshipGraph, node: str, cache: ClosureCache | None = None) -> Tuple[str, ...]:
    """All ancestors via parent relationships."""
    return compute_closure(graph, node, Direction.ANCESTORS, cache)


def find_descendants(graph: RelationshipGraph, node: str, cache: ClosureCache | None = None) -> Tuple[str, ...]:
    """All descendants via child relationships."""
    return compute_closure(graph, node, Direction.DESCENDANTS, cache)
