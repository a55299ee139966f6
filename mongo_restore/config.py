"""Configuration management for mongo-restore."""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ._utils import logger
from .exceptions import ConfigurationError

DEFAULT_PREFERENCES_FILE = "config.json"

# Preferences file keys, kept compatible with existing config.json files
PREFERENCE_KEYS = {
    "backup_file_path": "backupFilePath",
    "db_uri": "dbUri",
    "db_name": "dbName",
}


@dataclass(frozen=True)
class ConnectionConfig:
    """MongoDB client configuration."""
    server_selection_timeout_ms: int = 30000
    app_name: str = "mongo-restore"

    def __post_init__(self):
        """Validate configuration."""
        if self.server_selection_timeout_ms <= 0:
            raise ValueError(
                f"server_selection_timeout_ms must be positive, got {self.server_selection_timeout_ms}"
            )
        if not self.app_name.strip():
            raise ValueError("app_name cannot be empty")


@dataclass(frozen=True)
class RestoreConfig:
    """Inputs for one restore run."""
    backup_file_path: str
    db_uri: str
    db_name: str
    connection: ConnectionConfig = field(default_factory=ConnectionConfig)

    def __post_init__(self):
        """Reject blank required values."""
        if not self.backup_file_path.strip():
            raise ConfigurationError("Backup file path cannot be empty.")
        if not self.db_uri.strip():
            raise ConfigurationError("MongoDB connection URI cannot be empty.")
        if not self.db_name.strip():
            raise ConfigurationError("Database name cannot be empty.")

    @classmethod
    def from_preferences(cls, data: Dict[str, Any]) -> 'RestoreConfig':
        """Create config from a preferences dictionary."""
        return cls(**{
            attr: str(data.get(key) or "")
            for attr, key in PREFERENCE_KEYS.items()
        })

    def to_preferences(self) -> Dict[str, str]:
        """Convert to the preferences file layout."""
        return {key: getattr(self, attr) for attr, key in PREFERENCE_KEYS.items()}


def load_preferences(path: Union[str, Path] = DEFAULT_PREFERENCES_FILE) -> Optional[Dict[str, Any]]:
    """Load saved prompt defaults.

    Returns:
        Stored preferences, or None when no preferences file exists
    """
    path = Path(path)
    if not path.exists():
        return None

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"Cannot read preferences file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Preferences file {path} is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Preferences file {path} must contain a JSON object")

    logger.debug(f"Preferences loaded: {path}")
    return data


def save_preferences(config: RestoreConfig, path: Union[str, Path] = DEFAULT_PREFERENCES_FILE) -> None:
    """Persist prompt answers with 2-space indentation."""
    path = Path(path)
    try:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(config.to_preferences(), f, indent=2)
    except OSError as e:
        raise ConfigurationError(f"Cannot write preferences file {path}: {e}") from e

    logger.debug(f"Preferences saved: {path}")
