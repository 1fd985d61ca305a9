"""ror_hierarchy: transitive organization hierarchies and funder id resolution."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("ror-hierarchy")
except PackageNotFoundError:
    __version__ = "dev"

# Public API exports
# Note: build and lookup are exported from ror_hierarchy.api, not from root
# This avoids name conflicts with the ror_hierarchy.lookup module
from ror_hierarchy.api import open_lookup
from ror_hierarchy.pipeline import BuildResult
from ror_hierarchy.contracts import BuildStats, QueryResult
from ror_hierarchy.codes import Direction, ExternalIdType, RelationshipType
from ror_hierarchy.lookup import HierarchyLookup

__all__ = [
    "__version__",
    "open_lookup",
    "BuildResult",
    "BuildStats",
    "QueryResult",
    "Direction",
    "ExternalIdType",
    "RelationshipType",
    "HierarchyLookup",
]
