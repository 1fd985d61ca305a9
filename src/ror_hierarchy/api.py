"""Public API for ror_hierarchy package.

High-level functions that accept records, dicts or paths and return
complete, structured results. Callers should use these functions instead of
importing from _internal.
"""

import os
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from ror_hierarchy.pipeline import BuildResult, build_all
from ror_hierarchy.config import DEFAULT_CANONICAL_PREFIX
from ror_hierarchy.contracts import QueryResult
from ror_hierarchy.kernel.funders import FunderMap
from ror_hierarchy.kernel.hierarchy import HierarchyIndex
from ror_hierarchy.kernel.records import OrganizationRecord, parse_records
from ror_hierarchy.lookup import HierarchyLookup
from ror_hierarchy._internal.io.artifacts import load_funders, load_hierarchy
from ror_hierarchy._internal.io.records import load_records


PathLike = Union[str, os.PathLike, Path]


def _normalize_records(
    records: Union[PathLike, Iterable[Union[OrganizationRecord, Dict[str, Any]]]]
) -> List[OrganizationRecord]:
    if isinstance(records, (str, os.PathLike)):
        return load_records(Path(records))
    items = list(records)
    if all(isinstance(item, OrganizationRecord) for item in items):
        return items
    return parse_records([
        item.model_dump() if isinstance(item, OrganizationRecord) else item
        for item in items
    ])


def build(
    records: Union[PathLike, Iterable[Union[OrganizationRecord, Dict[str, Any]]]]
) -> BuildResult:
    """Build the relationship graph, funder mapping and hierarchy index.

    Args:
        records: path to a registry dump, or an iterable of records (models
            or decoded JSON dicts)

    Returns:
        BuildResult with graph, funders, hierarchy and stats
    """
    return build_all(_normalize_records(records))


def open_lookup(
    hierarchy: Union[PathLike, HierarchyIndex, Dict[str, Any]],
    funders: Union[PathLike, FunderMap, Dict[str, str], None] = None,
    canonical_prefix: str = DEFAULT_CANONICAL_PREFIX,
) -> HierarchyLookup:
    """Create a lookup service from artifacts given as paths, dicts or objects."""
    if isinstance(hierarchy, (str, os.PathLike)):
        hierarchy_index = load_hierarchy(hierarchy)
    elif isinstance(hierarchy, HierarchyIndex):
        hierarchy_index = hierarchy
    else:
        hierarchy_index = HierarchyIndex.from_dict(hierarchy)

    if funders is None:
        funder_map = FunderMap()
    elif isinstance(funders, (str, os.PathLike)):
        funder_map = load_funders(funders)
    elif isinstance(funders, FunderMap):
        funder_map = funders
    else:
        funder_map = FunderMap.from_dict(funders)

    return HierarchyLookup(hierarchy_index, funder_map, canonical_prefix=canonical_prefix)


def lookup(
    identifier: str,
    hierarchy: Union[PathLike, HierarchyIndex, Dict[str, Any]],
    funders: Union[PathLike, FunderMap, Dict[str, str], None] = None,
    canonical_prefix: str = DEFAULT_CANONICAL_PREFIX,
) -> Optional[QueryResult]:
    """One-shot lookup; prefer open_lookup() for repeated queries."""
    return open_lookup(hierarchy, funders, canonical_prefix).lookup(identifier)
