"""Read and write JSON artifacts, gzip-compressed when the path ends in .gz."""

from __future__ import annotations

import gzip
import json
from pathlib import Path
from typing import Any, Optional, Union

from ror_hierarchy._internal.canonical_json import canonical_dumps
from ror_hierarchy.kernel.funders import FunderMap
from ror_hierarchy.kernel.hierarchy import HierarchyIndex


class ArtifactLoadError(ValueError):
    """Raised when a persisted hierarchy or funder artifact cannot be loaded."""


def _is_gzip(path: Path) -> bool:
    return path.name.endswith(".gz")


def read_json(path: Union[str, Path]) -> Any:
    """Decode a JSON file, transparently gunzipping .gz paths."""
    path = Path(path)
    if _is_gzip(path):
        with gzip.open(path, "rt", encoding="utf-8") as f:
            return json.load(f)
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def write_json(data: Any, path: Union[str, Path]) -> int:
    """Write canonical JSON to path and return the file size in bytes.

    The gzip header mtime is pinned to 0 so unchanged data yields
    identical bytes.
    """
    path = Path(path)
    payload = canonical_dumps(data).encode("utf-8")
    if _is_gzip(path):
        with open(path, "wb") as raw:
            with gzip.GzipFile(filename="", mode="wb", fileobj=raw, mtime=0) as gz:
                gz.write(payload)
    else:
        path.write_bytes(payload)
    return path.stat().st_size


def format_size(size_bytes: int) -> str:
    """Human-readable size in KB or MB."""
    size_kb = size_bytes / 1024.0
    size_mb = size_kb / 1024.0
    if size_mb >= 1.0:
        return f"{size_mb:.2f} MB"
    return f"{size_kb:.2f} KB"


def _load_artifact(path: Union[str, Path], label: str) -> Any:
    path = Path(path)
    if not path.exists():
        raise ArtifactLoadError(f"{label} file not found: {path}")
    try:
        return read_json(path)
    except (OSError, EOFError, json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ArtifactLoadError(f"Could not read {label} file {path}: {e}") from e


def load_hierarchy(path: Union[str, Path]) -> HierarchyIndex:
    """Load a persisted hierarchy index."""
    data = _load_artifact(path, "hierarchy")
    try:
        return HierarchyIndex.from_dict(data)
    except ValueError as e:
        raise ArtifactLoadError(f"Invalid hierarchy file {path}: {e}") from e


def load_funders(path: Union[str, Path]) -> FunderMap:
    """Load a persisted funder mapping."""
    data = _load_artifact(path, "funder mapping")
    try:
        return FunderMap.from_dict(data)
    except ValueError as e:
        raise ArtifactLoadError(f"Invalid funder mapping file {path}: {e}") from e


def find_latest_data_file(directory: Union[str, Path], pattern: str) -> Optional[Path]:
    """Most recent registry dump in directory.

    Dump file names start with the release version, so the lexicographically
    greatest match is the latest one.
    """
    matches = sorted(Path(directory).glob(pattern))
    if not matches:
        return None
    return matches[-1]
