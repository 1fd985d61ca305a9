"""Build the parent/child relationship graph of organizations."""

from typing import Dict, Iterable, Iterator, List

from ror_hierarchy.codes import RelationshipType
from .records import OrganizationRecord


class RelationshipGraph:
    """Directed parent/child adjacency for a registry snapshot.

    Both maps are sparse: only organizations with at least one edge of that
    kind have a key. A missing key means an empty list. Targets are not
    required to have a record of their own (dangling references are legal).
    """

    def __init__(
        self,
        parents_of: Dict[str, List[str]] | None = None,
        children_of: Dict[str, List[str]] | None = None,
    ):
        self.parents_of: Dict[str, List[str]] = parents_of if parents_of is not None else {}
        self.children_of: Dict[str, List[str]] = children_of if children_of is not None else {}
        # Ordered set (dict keys) of ids that had their own record
        self.record_ids: Dict[str, None] = {}

    @classmethod
    def from_records(cls, records: Iterable[OrganizationRecord]) -> "RelationshipGraph":
        """Build a graph from organization records in input order."""
        graph = cls()
        for record in records:
            graph.add_record(record)
        return graph

    def add_record(self, record: OrganizationRecord) -> None:
        """Add one record's relationships.

        Records without an id are skipped. A later record with an id seen
        before replaces the earlier record's relationships.
        """
        org_id = record.id
        if not org_id:
            return

        self.record_ids[org_id] = None

        parents: List[str] = []
        children: List[str] = []
        for rel in record.relationships:
            if not rel.id:
                continue
            rel_type = rel.type.lower()
            if rel_type == RelationshipType.PARENT.value:
                parents.append(rel.id)
            elif rel_type == RelationshipType.CHILD.value:
                children.append(rel.id)

        _set_or_drop(self.parents_of, org_id, parents)
        _set_or_drop(self.children_of, org_id, children)

    def get_parents(self, node: str) -> List[str]:
        """Get direct parents of a node."""
        return self.parents_of.get(node, [])

    def get_children(self, node: str) -> List[str]:
        """Get direct children of a node."""
        return self.children_of.get(node, [])

    def node_ids(self) -> Iterator[str]:
        """Yield every node in the graph exactly once.

        Order: parent map keys, child map keys, then parent and child
        targets, first occurrence wins. Includes dangling targets.
        """
        seen: set[str] = set()
        for node in _chain_nodes(self.parents_of, self.children_of):
            if node not in seen:
                seen.add(node)
                yield node

    @property
    def edge_count(self) -> int:
        return sum(len(v) for v in self.parents_of.values()) + sum(
            len(v) for v in self.children_of.values()
        )


def _set_or_drop(adjacency: Dict[str, List[str]], org_id: str, targets: List[str]) -> None:
    if targets:
        adjacency[org_id] = targets
    else:
        adjacency.pop(org_id, None)


def _chain_nodes(parents_of: Dict[str, List[str]], children_of: Dict[str, List[str]]) -> Iterator[str]:
    yield from parents_of
    yield from children_of
    for targets in parents_of.values():
        yield from targets
    for targets in children_of.values():
        yield from targets


def build_relationship_graph(records: Iterable[OrganizationRecord]) -> RelationshipGraph:
    """Build a RelationshipGraph from records."""
    return RelationshipGraph.from_records(records)
