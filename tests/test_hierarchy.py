"""Tests for the sparse hierarchy index."""

import pytest

from ror_hierarchy.kernel.graph import RelationshipGraph, build_relationship_graph
from ror_hierarchy.kernel.hierarchy import ClosureEntry, HierarchyIndex, build_hierarchy
from ror_hierarchy.kernel.records import parse_records

ROR = "https://ror.org/"


def _index(data) -> HierarchyIndex:
    return build_hierarchy(build_relationship_graph(parse_records(data)))


def test_build_hierarchy(registry_records):
    index = _index(registry_records)

    assert index.get(ROR + "lab") == ClosureEntry(
        ancestors=(ROR + "school", ROR + "uni"), descendants=()
    )
    assert index.get(ROR + "school") == ClosureEntry(
        ancestors=(ROR + "uni",), descendants=(ROR + "lab",)
    )
    assert index.get(ROR + "uni") == ClosureEntry(
        ancestors=(), descendants=(ROR + "school", ROR + "lab")
    )


def test_org_without_relationships_omitted(registry_records):
    index = _index(registry_records)

    assert ROR + "loner" not in index
    assert index.get(ROR + "loner") is None


def test_every_entry_non_empty(registry_records):
    index = _index(registry_records)

    assert len(index) == 3
    for org_id, entry in index.items():
        assert entry.ancestors or entry.descendants, org_id


def test_origin_never_in_own_closure():
    index = _index([
        {"id": "A", "relationships": [{"type": "Parent", "id": "B"}, {"type": "Child", "id": "B"}]},
        {"id": "B", "relationships": [{"type": "Parent", "id": "A"}, {"type": "Child", "id": "A"}]},
    ])

    for org_id, entry in index.items():
        assert org_id not in entry.ancestors
        assert org_id not in entry.descendants
    assert index.get("A").ancestors == ("B",)


def test_closure_duality_on_acyclic_graph():
    """B in ancestors(A) iff A in descendants(B) when edges are declared both ways."""
    data = [
        {"id": "root", "relationships": [{"type": "Child", "id": "m1"}, {"type": "Child", "id": "m2"}]},
        {"id": "m1", "relationships": [{"type": "Parent", "id": "root"}, {"type": "Child", "id": "leaf"}]},
        {"id": "m2", "relationships": [{"type": "Parent", "id": "root"}, {"type": "Child", "id": "leaf"}]},
        {"id": "leaf", "relationships": [{"type": "Parent", "id": "m1"}, {"type": "Parent", "id": "m2"}]},
    ]
    index = _index(data)

    for a, entry in index.items():
        for b in entry.ancestors:
            assert a in index.get(b).descendants
        for b in entry.descendants:
            assert a in index.get(b).ancestors
    assert index.get("leaf").ancestors == ("m1", "m2", "root")


def test_dangling_targets_appear_only_inside_closures():
    """A target without a record is enumerated, reported in closures, and has no entry."""
    index = _index([
        {"id": "A", "relationships": [{"type": "Parent", "id": "GHOST"}]},
        {"id": "GHOST_PARENT_OF", "relationships": [{"type": "Child", "id": "KID"}]},
    ])

    # GHOST never originates edges, so it has no ancestors/descendants of its own
    assert "GHOST" not in index
    assert index.get("A").ancestors == ("GHOST",)
    # KID is only a child target, and child edges are not inverted into parents
    assert "KID" not in index
    assert index.get("GHOST_PARENT_OF").descendants == ("KID",)


def test_one_sided_declarations_are_not_inverted():
    """Parent edges feed ancestors only; child edges feed descendants only."""
    graph = RelationshipGraph(parents_of={"C": ["B"], "B": ["A"]})
    index = build_hierarchy(graph)

    assert index.get("C").ancestors == ("B", "A")
    assert index.get("A") is None


def test_build_is_idempotent(registry_records):
    first = _index(registry_records)
    second = _index(registry_records)

    assert first == second
    assert first.to_dict() == second.to_dict()
    assert list(first) == list(second)


def test_stats(registry_records):
    stats = _index(registry_records).stats()

    assert stats.total_organizations == 3
    assert stats.with_ancestors == 2
    assert stats.with_descendants == 2
    assert stats.with_both == 1


def test_to_dict_shape(registry_records):
    data = _index(registry_records).to_dict()

    assert data[ROR + "lab"] == {"ancestors": [ROR + "school", ROR + "uni"], "descendants": []}


def test_from_dict_drops_empty_entries():
    index = HierarchyIndex.from_dict({
        "A": {"ancestors": ["B"], "descendants": []},
        "E": {"ancestors": [], "descendants": []},
    })

    assert "A" in index
    assert "E" not in index
    assert index.get("A").ancestors == ("B",)


def test_from_dict_rejects_bad_shape():
    with pytest.raises(ValueError):
        HierarchyIndex.from_dict([])
    with pytest.raises(ValueError):
        HierarchyIndex.from_dict({"A": ["B"]})
    with pytest.raises(ValueError):
        HierarchyIndex.from_dict({"A": {"ancestors": "B", "descendants": []}})


def test_closure_entry_is_frozen():
    entry = ClosureEntry(ancestors=("A",))
    with pytest.raises(Exception):
        entry.ancestors = ("B",)
