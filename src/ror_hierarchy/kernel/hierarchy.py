"""Sparse hierarchy index: organization id -> (ancestors, descendants)."""

import logging
from typing import Any, Dict, Iterator, Optional

from pydantic import BaseModel, ConfigDict

from .closure import ClosureCache, find_ancestors, find_descendants
from .graph import RelationshipGraph

logger = logging.getLogger(__name__)


class ClosureEntry(BaseModel):
    """Ancestor and descendant closures of one organization (BFS order)."""
    ancestors: tuple[str, ...] = ()
    descendants: tuple[str, ...] = ()

    model_config = ConfigDict(extra="forbid", frozen=True)

    @property
    def is_empty(self) -> bool:
        return not self.ancestors and not self.descendants


class HierarchyStats(BaseModel):
    """Counts reported after a hierarchy build."""
    total_organizations: int
    with_ancestors: int
    with_descendants: int
    with_both: int


class HierarchyIndex:
    """Read-only mapping of organization id to ClosureEntry.

    Only organizations with at least one ancestor or descendant are stored.
    Absence therefore means either "unknown id" or "known, no relationships";
    the index cannot tell these apart.
    """

    def __init__(self, entries: Optional[Dict[str, ClosureEntry]] = None):
        self._entries: Dict[str, ClosureEntry] = {}
        for org_id, entry in (entries or {}).items():
            if not entry.is_empty:
                self._entries[org_id] = entry

    def get(self, org_id: str) -> Optional[ClosureEntry]:
        return self._entries.get(org_id)

    def __contains__(self, org_id: object) -> bool:
        return org_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HierarchyIndex):
            return NotImplemented
        return self._entries == other._entries

    def items(self):
        return self._entries.items()

    def stats(self) -> HierarchyStats:
        entries = self._entries.values()
        return HierarchyStats(
            total_organizations=len(self._entries),
            with_ancestors=sum(1 for e in entries if e.ancestors),
            with_descendants=sum(1 for e in entries if e.descendants),
            with_both=sum(1 for e in entries if e.ancestors and e.descendants),
        )

    def to_dict(self) -> Dict[str, Dict[str, list[str]]]:
        """Persisted form: {org_id: {"ancestors": [...], "descendants": [...]}}."""
        return {
            org_id: {
                "ancestors": list(entry.ancestors),
                "descendants": list(entry.descendants),
            }
            for org_id, entry in self._entries.items()
        }

    @classmethod
    def from_dict(cls, data: Any) -> "HierarchyIndex":
        """Rebuild an index from its persisted form.

        Raises:
            ValueError: if data is not an object of closure entries
        """
        if not isinstance(data, dict):
            raise ValueError(f"Hierarchy index must be a JSON object, got {type(data).__name__}")
        entries = {}
        for org_id, raw_entry in data.items():
            if not isinstance(raw_entry, dict):
                raise ValueError(f"Hierarchy entry for {org_id!r} must be an object")
            entries[org_id] = ClosureEntry.model_validate(raw_entry)
        return cls(entries)


def build_hierarchy(graph: RelationshipGraph, cache: ClosureCache | None = None) -> HierarchyIndex:
    """Compute closures for every node of the graph and keep the non-empty ones.

    Every node is visited, including dangling relationship targets that
    have no record of their own.
    """
    if cache is None:
        cache = ClosureCache()

    entries: Dict[str, ClosureEntry] = {}
    visited_nodes = 0
    for org_id in graph.node_ids():
        visited_nodes += 1
        entry = ClosureEntry(
            ancestors=find_ancestors(graph, org_id, cache),
            descendants=find_descendants(graph, org_id, cache),
        )
        if not entry.is_empty:
            entries[org_id] = entry

    logger.debug(
        "Computed closures for %d nodes (cache hits=%d, misses=%d)",
        visited_nodes, cache.hits, cache.misses,
    )
    return HierarchyIndex(entries)
