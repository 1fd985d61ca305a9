"""Performance sentinel benchmarks on synthetic registries."""

from __future__ import annotations

import os
from time import perf_counter
from typing import Dict, List, Tuple

from ror_hierarchy.kernel.records import OrganizationRecord, parse_records
from ror_hierarchy.pipeline import BuildResult, build_all

PREFIX = "https://ror.org/"


def _budget_from_env(var_name: str, default_ms: float) -> float:
    raw = os.getenv(var_name)
    if not raw:
        return default_ms
    try:
        return float(raw)
    except ValueError:
        return default_ms


MAX_DEEP_CHAIN_MS = _budget_from_env("ROR_HIERARCHY_MAX_DEEP_CHAIN_MS", 2000.0)
MAX_WIDE_TREE_MS = _budget_from_env("ROR_HIERARCHY_MAX_WIDE_TREE_MS", 2000.0)
MAX_CYCLIC_RING_MS = _budget_from_env("ROR_HIERARCHY_MAX_CYCLIC_RING_MS", 2000.0)


def _record(org_id: str, parents: List[str], children: List[str]) -> Dict:
    relationships = [{"type": "Parent", "id": p} for p in parents]
    relationships += [{"type": "Child", "id": c} for c in children]
    return {"id": org_id, "relationships": relationships, "external_ids": []}


def deep_chain(length: int) -> List[OrganizationRecord]:
    """org0 <- org1 <- ... <- org(length-1), declared from both ends."""
    ids = [f"{PREFIX}chain{i}" for i in range(length)]
    data = []
    for i, org_id in enumerate(ids):
        parents = [ids[i - 1]] if i > 0 else []
        children = [ids[i + 1]] if i + 1 < length else []
        data.append(_record(org_id, parents, children))
    return parse_records(data)


def wide_tree(fanout: int, depth: int) -> List[OrganizationRecord]:
    """Complete tree with the given fanout and depth (root at depth 0)."""
    data = []
    level = [f"{PREFIX}tree"]
    parent_of: Dict[str, str] = {}
    for _ in range(depth):
        next_level = []
        for node in level:
            kids = [f"{node}.{k}" for k in range(fanout)]
            for kid in kids:
                parent_of[kid] = node
            data.append(_record(node, [parent_of[node]] if node in parent_of else [], kids))
            next_level.extend(kids)
        level = next_level
    for leaf in level:
        data.append(_record(leaf, [parent_of[leaf]], []))
    return parse_records(data)


def cyclic_ring(size: int) -> List[OrganizationRecord]:
    """Every org is both parent and child of its neighbour; one big cycle."""
    ids = [f"{PREFIX}ring{i}" for i in range(size)]
    data = [
        _record(org_id, [ids[(i + 1) % size]], [ids[(i - 1) % size]])
        for i, org_id in enumerate(ids)
    ]
    return parse_records(data)


def run_sentinel(records: List[OrganizationRecord]) -> Tuple[float, BuildResult]:
    """Build everything and return elapsed ms plus the result."""
    start = perf_counter()
    result = build_all(records)
    elapsed_ms = (perf_counter() - start) * 1000.0
    return elapsed_ms, result
