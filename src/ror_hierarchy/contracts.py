"""Public result models for ror_hierarchy package."""

from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict

from ror_hierarchy.kernel.hierarchy import HierarchyStats


class QueryResult(BaseModel):
    """Answer to a successful lookup."""
    org_id: str  # Canonical id the input resolved to
    input_id: str  # Identifier as given by the caller (canonical id or funder id)
    ancestors: tuple[str, ...]
    descendants: tuple[str, ...]

    model_config = ConfigDict(frozen=True)

    @property
    def resolved_from_alias(self) -> bool:
        return self.input_id != self.org_id


class BuildStats(BaseModel):
    """Statistics of one build run."""
    record_count: int
    node_count: int
    edge_count: int
    funder_mappings: int
    alias_collisions: int
    hierarchy: Optional[HierarchyStats] = None  # None when no hierarchy was built
    output_sizes: Dict[str, int] = {}  # output path -> size in bytes
    input_path: Optional[str] = None
