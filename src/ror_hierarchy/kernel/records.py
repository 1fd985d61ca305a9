"""Pydantic models for registry organization records.

Records are parsed leniently: unknown fields are ignored and missing or null
collections default to empty. Only structurally wrong values (an object
where a list is expected, a list where a record is expected) fail
validation.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _none_to_empty_list(v: Any) -> Any:
    return [] if v is None else v


class Relationship(BaseModel):
    """A typed relationship entry pointing at another organization."""
    type: str = ""
    id: Optional[str] = None

    model_config = ConfigDict(extra="ignore")

    @field_validator("type", mode="before")
    @classmethod
    def validate_type(cls, v: Any) -> Any:
        return "" if v is None else v


class ExternalId(BaseModel):
    """An external identifier block (fundref, isni, wikidata, ...)."""
    type: str = ""
    all: List[str] = Field(default_factory=list)
    preferred: Optional[str] = None

    model_config = ConfigDict(extra="ignore")

    @field_validator("type", mode="before")
    @classmethod
    def validate_type(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("all", mode="before")
    @classmethod
    def validate_all(cls, v: Any) -> Any:
        return _none_to_empty_list(v)


class OrganizationRecord(BaseModel):
    """One organization from the registry dump."""
    id: Optional[str] = None
    relationships: List[Relationship] = Field(default_factory=list)
    external_ids: List[ExternalId] = Field(default_factory=list)

    model_config = ConfigDict(extra="ignore")

    @field_validator("relationships", "external_ids", mode="before")
    @classmethod
    def validate_collections(cls, v: Any) -> Any:
        return _none_to_empty_list(v)


def parse_records(data: Any) -> List[OrganizationRecord]:
    """Parse a decoded JSON document into organization records.

    Raises:
        ValueError: if the document is not a list
        pydantic.ValidationError: if a record is structurally malformed
    """
    if not isinstance(data, list):
        raise ValueError(f"Expected a JSON array of records, got {type(data).__name__}")
    return [OrganizationRecord.model_validate(item) for item in data]
