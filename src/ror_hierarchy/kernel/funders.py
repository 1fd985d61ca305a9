"""Funder (fundref) alias to canonical organization id mapping."""

import logging
from typing import Dict, Iterable, Iterator, List, Optional

from ror_hierarchy.codes import ExternalIdType
from .records import ExternalId, OrganizationRecord

logger = logging.getLogger(__name__)


class FunderMap:
    """Alias id -> canonical id, last write wins.

    When two records claim the same alias, the record processed later
    overwrites the earlier mapping. Each overwrite that changes the target
    is counted in ``collisions``.
    """

    def __init__(self, mapping: Optional[Dict[str, str]] = None):
        self._mapping: Dict[str, str] = dict(mapping) if mapping else {}
        self.collisions = 0

    def register(self, alias: str, org_id: str) -> None:
        previous = self._mapping.get(alias)
        if previous is not None and previous != org_id:
            self.collisions += 1
            logger.warning(
                "Funder id %s reassigned from %s to %s", alias, previous, org_id
            )
        self._mapping[alias] = org_id

    def add_record(self, record: OrganizationRecord) -> None:
        """Register every fundref alias of a record. Records without id are skipped."""
        org_id = record.id
        if not org_id:
            return
        for external_id in record.external_ids:
            if external_id.type != ExternalIdType.FUNDREF.value:
                continue
            for alias in funder_aliases(external_id):
                self.register(alias, org_id)

    def get(self, alias: str) -> Optional[str]:
        return self._mapping.get(alias)

    def __contains__(self, alias: object) -> bool:
        return alias in self._mapping

    def __len__(self) -> int:
        return len(self._mapping)

    def __iter__(self) -> Iterator[str]:
        return iter(self._mapping)

    def items(self):
        return self._mapping.items()

    def to_dict(self) -> Dict[str, str]:
        return dict(self._mapping)

    @classmethod
    def from_dict(cls, data: Dict[str, str]) -> "FunderMap":
        """Rebuild a map from its persisted form (raises ValueError on bad shape)."""
        if not isinstance(data, dict):
            raise ValueError(f"Funder mapping must be a JSON object, got {type(data).__name__}")
        for alias, org_id in data.items():
            if not isinstance(org_id, str):
                raise ValueError(f"Funder mapping value for {alias!r} must be a string")
        return cls(data)


def funder_aliases(external_id: ExternalId) -> List[str]:
    """All aliases of one fundref entry: ``all`` then ``preferred``, deduplicated."""
    aliases = list(external_id.all)
    if external_id.preferred:
        aliases.append(external_id.preferred)
    return list(dict.fromkeys(aliases))


def build_funder_map(records: Iterable[OrganizationRecord]) -> FunderMap:
    """Build a FunderMap from records in input order."""
    funders = FunderMap()
    for record in records:
        funders.add_record(record)
    return funders


def is_canonical_id(identifier: str, canonical_prefix: str) -> bool:
    return identifier.startswith(canonical_prefix)


def resolve_identifier(identifier: str, funders: FunderMap, canonical_prefix: str) -> Optional[str]:
    """Resolve an input identifier to a canonical id.

    Canonical-looking ids pass through unchanged (they are not checked
    against the registry). Anything else is looked up as a funder alias.

    Returns:
        The canonical id, or None if the alias is unknown
    """
    if is_canonical_id(identifier, canonical_prefix):
        return identifier
    return funders.get(identifier)
