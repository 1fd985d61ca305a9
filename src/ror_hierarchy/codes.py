"""Constants for relationship, external-id and closure direction values.

These constants prevent stringly-typed comparisons when parsing registry
records and when selecting which adjacency map a traversal walks.
"""

from enum import Enum


class RelationshipType(str, Enum):
    """Relationship types that contribute edges to the graph.

    Matching against raw records is case-insensitive; every other
    relationship type ("related", "successor", ...) is ignored.
    """

    PARENT = "parent"
    CHILD = "child"


class ExternalIdType(str, Enum):
    """External identifier schemes that register aliases."""

    FUNDREF = "fundref"


class Direction(str, Enum):
    """Closure direction."""

    ANCESTORS = "ancestors"
    DESCENDANTS = "descendants"
