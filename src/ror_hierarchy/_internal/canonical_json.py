"""Canonical JSON for the funder mapping and hierarchy artifacts."""

import json
from typing import Any


def canonical_dumps(obj: Any) -> str:
    """
    Serialize with sorted keys and compact separators.

    Closure lists keep their BFS order, so an unchanged input always
    rebuilds to identical bytes.
    """
    return json.dumps(
        obj,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False
    )
