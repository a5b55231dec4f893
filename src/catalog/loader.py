"""
Catalog loading.

The tagging pipeline writes a single JSON array of item records. Records that
fail validation are skipped (and logged) rather than failing the whole load;
a file that yields no usable items at all is an error.
"""

import json
from pathlib import Path
from typing import List, Union

from pydantic import ValidationError

from catalog.models import CatalogItem
from core.logging import get_logger

logger = get_logger(__name__)


class CatalogLoadError(Exception):
    """Raised when the catalog file is missing, malformed or empty."""
    pass


def parse_catalog(records) -> List[CatalogItem]:
    """
    Validate raw catalog records into ``CatalogItem`` objects.

    Args:
        records: Decoded JSON value (expected to be a list of dicts)

    Returns:
        Valid items in file order

    Raises:
        CatalogLoadError: If ``records`` is not a list or no record is valid
    """
    if not isinstance(records, list):
        raise CatalogLoadError(
            f"Catalog must be a JSON array, got {type(records).__name__}"
        )

    items: List[CatalogItem] = []
    skipped = 0
    for position, record in enumerate(records):
        try:
            items.append(CatalogItem.model_validate(record))
        except ValidationError as e:
            skipped += 1
            logger.warning(
                "Skipping invalid catalog record",
                position=position,
                record_id=record.get("id") if isinstance(record, dict) else None,
                errors=e.error_count(),
            )

    if not items:
        raise CatalogLoadError(f"Catalog has no valid items ({skipped} skipped)")

    logger.info("Catalog parsed", items=len(items), skipped=skipped)
    return items


def load_catalog(path: Union[str, Path]) -> List[CatalogItem]:
    """
    Read and validate a catalog JSON file.

    Raises:
        CatalogLoadError: If the file cannot be read or parsed, or holds no valid items
    """
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise CatalogLoadError(f"Cannot read catalog {path}: {e}") from e

    try:
        records = json.loads(raw)
    except json.JSONDecodeError as e:
        raise CatalogLoadError(f"Catalog {path} is not valid JSON: {e}") from e

    logger.debug("Catalog file read", path=str(path), records=len(records) if isinstance(records, list) else None)
    return parse_catalog(records)
