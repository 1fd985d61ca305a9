"""Build pipeline: load a registry dump, compute artifacts, write them out."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Optional, Tuple, Union

from ror_hierarchy.contracts import BuildStats
from ror_hierarchy.kernel.closure import ClosureCache
from ror_hierarchy.kernel.funders import FunderMap
from ror_hierarchy.kernel.graph import RelationshipGraph
from ror_hierarchy.kernel.hierarchy import HierarchyIndex, build_hierarchy
from ror_hierarchy.kernel.records import OrganizationRecord
from ror_hierarchy._internal.io.artifacts import format_size, write_json
from ror_hierarchy._internal.io.records import load_records

logger = logging.getLogger(__name__)


@dataclass
class BuildResult:
    """Everything produced by one build."""
    graph: RelationshipGraph
    funders: FunderMap
    hierarchy: Optional[HierarchyIndex]  # None for funder-only builds
    stats: BuildStats


def build_maps(records: Iterable[OrganizationRecord]) -> Tuple[RelationshipGraph, FunderMap]:
    """Build the relationship graph and the funder mapping in a single pass."""
    graph = RelationshipGraph()
    funders = FunderMap()
    for record in records:
        graph.add_record(record)
        funders.add_record(record)
    return graph, funders


def build_all(records: Iterable[OrganizationRecord], with_hierarchy: bool = True) -> BuildResult:
    """Build graph, funder mapping and (unless disabled) hierarchy index from records.

    With with_hierarchy=False the closure computation is skipped entirely;
    result.hierarchy and result.stats.hierarchy are then None.
    """
    records = list(records)

    logger.info("Building maps...")
    graph, funders = build_maps(records)
    if funders.collisions:
        logger.warning("%d funder ids were claimed by more than one organization", funders.collisions)

    hierarchy = None
    if with_hierarchy:
        logger.info("Building hierarchy...")
        hierarchy = build_hierarchy(graph, ClosureCache())

    stats = BuildStats(
        record_count=len(records),
        node_count=sum(1 for _ in graph.node_ids()),
        edge_count=graph.edge_count,
        funder_mappings=len(funders),
        alias_collisions=funders.collisions,
        hierarchy=hierarchy.stats() if hierarchy is not None else None,
    )
    return BuildResult(graph=graph, funders=funders, hierarchy=hierarchy, stats=stats)


def _write_artifact(data: Dict, output_path: Path, label: str) -> int:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    size = write_json(data, output_path)
    logger.info("Wrote %s to %s (%s)", label, output_path, format_size(size))
    return size


def run_build(
    input_path: Union[str, Path],
    funder_output: Optional[Union[str, Path]] = None,
    hierarchy_output: Optional[Union[str, Path]] = None,
    with_hierarchy: bool = True,
) -> BuildResult:
    """Load records once and write the funder mapping and/or hierarchy index.

    Either output may be None to skip writing that artifact. The hierarchy
    is computed when with_hierarchy is set or a hierarchy output is given.

    Raises:
        RecordsLoadError: if the input cannot be loaded
    """
    input_path = Path(input_path)
    records = load_records(input_path)
    result = build_all(records, with_hierarchy=with_hierarchy or hierarchy_output is not None)
    result.stats.input_path = str(input_path)

    if funder_output is not None:
        funder_output = Path(funder_output)
        result.stats.output_sizes[str(funder_output)] = _write_artifact(
            result.funders.to_dict(), funder_output, "funder mapping"
        )
    if hierarchy_output is not None:
        hierarchy_output = Path(hierarchy_output)
        result.stats.output_sizes[str(hierarchy_output)] = _write_artifact(
            result.hierarchy.to_dict(), hierarchy_output, "hierarchy"
        )
    return result


def run_build_funders(input_path: Union[str, Path], output: Union[str, Path]) -> BuildResult:
    """Write only the funder mapping; no closures are computed."""
    return run_build(input_path, funder_output=output, with_hierarchy=False)


def run_build_hierarchy(input_path: Union[str, Path], output: Union[str, Path]) -> BuildResult:
    """Write only the hierarchy index."""
    return run_build(input_path, hierarchy_output=output)
