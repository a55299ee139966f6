"""Utility functions for restore operations."""

import json
from pathlib import Path
from typing import Any, Dict, Union

from .._utils import logger
from ..exceptions import BackupFileError


def load_backup_file(backup_path: Union[str, Path]) -> Dict[str, Any]:
    """Load a backup file into memory.

    Args:
        backup_path: Path to a JSON file mapping collection names to documents

    Returns:
        Parsed backup document set, in file order

    Raises:
        BackupFileError: if the file is missing, unreadable or not a JSON object
    """
    backup_path = Path(backup_path)

    if not backup_path.is_file():
        raise BackupFileError(str(backup_path), "file not found")

    try:
        with open(backup_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, UnicodeDecodeError) as e:
        raise BackupFileError(str(backup_path), str(e)) from e
    except json.JSONDecodeError as e:
        raise BackupFileError(str(backup_path), f"invalid JSON ({e})") from e

    if not isinstance(data, dict):
        raise BackupFileError(str(backup_path), "top-level value must be an object of collections")

    logger.debug(f"Backup file loaded: {backup_path} ({len(data)} collections)")
    return data


def count_documents(backup: Dict[str, Any]) -> int:
    """Count documents across all list-valued collections."""
    return sum(len(docs) for docs in backup.values() if isinstance(docs, list))
