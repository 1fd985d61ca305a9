"""Point queries against a precomputed hierarchy index.

Accepts canonical organization ids and funder ids (resolved to a canonical
id through the funder mapping). The loaded index and mapping are never
mutated, so one instance may serve concurrent readers.
"""

from pathlib import Path
from typing import Optional, Union

from ror_hierarchy.config import DEFAULT_CANONICAL_PREFIX
from ror_hierarchy.contracts import QueryResult
from ror_hierarchy.kernel.funders import FunderMap, resolve_identifier
from ror_hierarchy.kernel.hierarchy import HierarchyIndex
from ror_hierarchy._internal.io.artifacts import load_funders, load_hierarchy


class HierarchyLookup:
    """Lookup of ancestors and descendants by canonical id or funder id."""

    def __init__(
        self,
        hierarchy: HierarchyIndex,
        funders: Optional[FunderMap] = None,
        canonical_prefix: str = DEFAULT_CANONICAL_PREFIX,
    ):
        self.hierarchy = hierarchy
        self.funders = funders if funders is not None else FunderMap()
        self.canonical_prefix = canonical_prefix

    @classmethod
    def from_files(
        cls,
        hierarchy_path: Union[str, Path],
        funder_path: Union[str, Path],
        canonical_prefix: str = DEFAULT_CANONICAL_PREFIX,
    ) -> "HierarchyLookup":
        """Load both artifacts (raises ArtifactLoadError on failure)."""
        return cls(
            load_hierarchy(hierarchy_path),
            load_funders(funder_path),
            canonical_prefix=canonical_prefix,
        )

    def resolve(self, identifier: str) -> Optional[str]:
        """Canonical id for identifier, or None if it is an unknown funder id."""
        return resolve_identifier(identifier, self.funders, self.canonical_prefix)

    def lookup(self, identifier: str) -> Optional[QueryResult]:
        """Get ancestors and descendants for an organization.

        Returns None when the identifier cannot be resolved, and also when
        the organization has no relationships at all (it is not in the
        sparse index).
        """
        org_id = self.resolve(identifier)
        if org_id is None:
            return None

        entry = self.hierarchy.get(org_id)
        if entry is None:
            return None

        return QueryResult(
            org_id=org_id,
            input_id=identifier,
            ancestors=entry.ancestors,
            descendants=entry.descendants,
        )

    def ancestors(self, identifier: str) -> Optional[tuple[str, ...]]:
        result = self.lookup(identifier)
        return result.ancestors if result else None

    def descendants(self, identifier: str) -> Optional[tuple[str, ...]]:
        result = self.lookup(identifier)
        return result.descendants if result else None

    def has_ancestors(self, identifier: str) -> bool:
        return bool(self.ancestors(identifier))

    def has_descendants(self, identifier: str) -> bool:
        return bool(self.descendants(identifier))
