"""
Save a merged taxonomy as JSON records.
"""

import json
import logging
import os
from pathlib import Path

from ..exceptions import StorageError
from ..models import EntitySet

logger = logging.getLogger(__name__)


def save_entities_json(entities: EntitySet, filepath: str | Path) -> Path:
    """
    Write ``entities`` atomically as a list of records sorted by id

    Each record is ``{"id", "parent_id", "name": {"en_CA", "fr_CA"}}``.

    Raises:
        StorageError: directory or file could not be written
    """
    filepath = Path(filepath)
    temp_file = filepath.with_suffix(filepath.suffix + ".tmp")

    try:
        filepath.parent.mkdir(parents=True, exist_ok=True)
        with open(temp_file, "w", encoding="utf-8") as f:
            json.dump(entities.to_records(), f, ensure_ascii=False, indent=2)
        os.replace(temp_file, filepath)
    except OSError as e:
        if temp_file.exists():
            temp_file.unlink()
        raise StorageError(
            f"Could not save {entities.kind} JSON: {e}",
            path=str(filepath),
            operation="write",
            original_error=e,
        ) from e

    logger.info(f"💾 Saved {len(entities)} {entities.kind} records to {filepath}")
    return filepath
