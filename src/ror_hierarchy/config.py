"""Configuration defaults for building and querying hierarchy artifacts."""

import os
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator


DEFAULT_CANONICAL_PREFIX = "https://ror.org/"
DEFAULT_FUNDER_OUTPUT = "funder_to_ror.json.gz"
DEFAULT_HIERARCHY_OUTPUT = "ror_hierarchy.json.gz"
DEFAULT_INPUT_PATTERN = "v*schema_v2.json"

ENV_PREFIX = "ROR_HIERARCHY_"


def _from_env(var_name: str, default: str) -> str:
    raw = os.getenv(var_name)
    if not raw:
        return default
    return raw


class HierarchyConfig(BaseModel):
    """Settings shared by the build pipeline, the lookup service and the CLI."""

    canonical_prefix: str = DEFAULT_CANONICAL_PREFIX
    funder_output: str = DEFAULT_FUNDER_OUTPUT
    hierarchy_output: str = DEFAULT_HIERARCHY_OUTPUT
    input_pattern: str = DEFAULT_INPUT_PATTERN

    model_config = ConfigDict(extra="forbid", frozen=True)

    @field_validator("canonical_prefix")
    @classmethod
    def validate_canonical_prefix(cls, v: str) -> str:
        """An empty prefix would make every identifier look canonical."""
        if not v:
            raise ValueError("canonical_prefix must not be empty")
        return v

    @classmethod
    def from_env(cls, **overrides: Optional[str]) -> "HierarchyConfig":
        """Build config from ROR_HIERARCHY_* environment variables.

        Keyword overrides that are not None win over the environment
        (this is how CLI flags are applied).
        """
        values = {
            "canonical_prefix": _from_env(f"{ENV_PREFIX}CANONICAL_PREFIX", DEFAULT_CANONICAL_PREFIX),
            "funder_output": _from_env(f"{ENV_PREFIX}FUNDER_OUTPUT", DEFAULT_FUNDER_OUTPUT),
            "hierarchy_output": _from_env(f"{ENV_PREFIX}HIERARCHY_OUTPUT", DEFAULT_HIERARCHY_OUTPUT),
            "input_pattern": _from_env(f"{ENV_PREFIX}INPUT_PATTERN", DEFAULT_INPUT_PATTERN),
        }
        for key, value in overrides.items():
            if value is not None:
                values[key] = value
        return cls(**values)
