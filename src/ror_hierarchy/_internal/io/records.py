"""Load organization records from a registry dump."""

import json
import logging
from pathlib import Path
from typing import List, Union

from pydantic import ValidationError

from ror_hierarchy.kernel.records import OrganizationRecord, parse_records
from .artifacts import read_json

logger = logging.getLogger(__name__)


class RecordsLoadError(ValueError):
    """Raised when the input record stream is missing or malformed."""


def load_records(path: Union[str, Path]) -> List[OrganizationRecord]:
    """Load and validate records from a JSON (or .json.gz) registry dump."""
    path = Path(path)
    if not path.exists():
        raise RecordsLoadError(f"Input file not found: {path}")

    logger.info("Loading data from %s", path)
    try:
        data = read_json(path)
    except (OSError, EOFError, json.JSONDecodeError, UnicodeDecodeError) as e:
        raise RecordsLoadError(f"Could not parse {path}: {e}") from e

    try:
        records = parse_records(data)
    except ValidationError as e:
        raise RecordsLoadError(f"Malformed organization record in {path}: {e}") from e
    except ValueError as e:
        raise RecordsLoadError(f"{path}: {e}") from e

    logger.info("Loaded %d organizations", len(records))
    return records
