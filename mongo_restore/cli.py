"""Interactive command-line entry point."""

import asyncio
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

from ._utils import configure_logging, logger
from .backup.restorer import Restorer
from .config import (
    DEFAULT_PREFERENCES_FILE,
    RestoreConfig,
    load_preferences,
    save_preferences,
)
from .exceptions import ConfigurationError, MongoRestoreError

# (preferences key, prompt, validation message)
QUESTIONS: List[Tuple[str, str, str]] = [
    (
        "backupFilePath",
        "Enter the path to the backup JSON file:",
        "Backup file path cannot be empty.",
    ),
    (
        "dbUri",
        "Enter your MongoDB connection URI (e.g., mongodb://localhost:27017):",
        "MongoDB connection URI cannot be empty.",
    ),
    (
        "dbName",
        "Enter the database name to restore the backup to:",
        "Database name cannot be empty.",
    ),
]


def ask(
    message: str,
    default: str = "",
    error: str = "Value cannot be empty.",
    input_func: Callable[[str], str] = input,
) -> str:
    """Prompt until a non-blank answer is given; Enter accepts the default."""
    prompt = f"{message} ({default}) " if default else f"{message} "
    while True:
        answer = input_func(prompt).strip() or default.strip()
        if answer:
            return answer
        print(error)


def prompt_for_config(
    defaults: Optional[Dict[str, Any]] = None,
    input_func: Callable[[str], str] = input,
) -> RestoreConfig:
    """Ask for the three restore inputs, prefilled from saved preferences."""
    defaults = defaults or {}
    answers = {
        key: ask(message, str(defaults.get(key) or ""), error, input_func)
        for key, message, error in QUESTIONS
    }
    return RestoreConfig.from_preferences(answers)


def main(
    preferences_path: Path = Path(DEFAULT_PREFERENCES_FILE),
    input_func: Callable[[str], str] = input,
) -> int:
    """Run one interactive restore.

    Returns:
        Process exit code: 0 on a clean restore, 1 on any failure
    """
    configure_logging()

    try:
        preferences = load_preferences(preferences_path)
        config = prompt_for_config(preferences, input_func)
    except (KeyboardInterrupt, EOFError):
        logger.warning("Restore cancelled.")
        return 130
    except ConfigurationError as e:
        logger.error(e.message)
        return 1

    try:
        if preferences is None:
            save_preferences(config, preferences_path)
            logger.info(f"Configuration saved to {preferences_path}")

        report = asyncio.run(Restorer(config).restore())
    except ConfigurationError as e:
        logger.error(e.message)
        return 1
    except MongoRestoreError as e:
        logger.error(f"Error during backup restoration: {e.message}")
        return 1
    except Exception as e:
        logger.error(f"Something went wrong: {e}")
        return 1

    return 0 if report.succeeded else 1
