"""Restore orchestration: load a backup file and insert it into MongoDB."""

from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from .._storage import MongoStorage
from .._utils import logger, log_success
from ..config import RestoreConfig
from ..exceptions import CollectionRestoreError
from .models import CollectionResult, RestoreReport
from .normalizer import normalize
from .utils import count_documents, load_backup_file

StorageFactory = Callable[[RestoreConfig], Any]


def _default_storage_factory(config: RestoreConfig) -> MongoStorage:
    return MongoStorage(config.db_uri, config.db_name, config.connection)


class Restorer:
    """Restore every collection of a backup file into one database."""

    def __init__(self, config: RestoreConfig, storage_factory: Optional[StorageFactory] = None):
        """Initialize restorer.

        Args:
            config: Resolved backup path, connection URI and database name
            storage_factory: Builds the storage backend from the config.
                Defaults to MongoStorage.
        """
        self.config = config
        self.storage_factory = storage_factory or _default_storage_factory

    async def restore(self) -> RestoreReport:
        """Run the restore.

        The backup file is read before any connection is opened, so a bad
        file aborts without touching the backend.

        Returns:
            RestoreReport with one result per collection

        Raises:
            BackupFileError: backup file missing or unparsable
            StorageConnectionError: backend unreachable
        """
        report = RestoreReport(
            backup_file=self.config.backup_file_path,
            database=self.config.db_name,
            started_at=datetime.now(timezone.utc),
        )

        logger.info(f"Reading backup file: {self.config.backup_file_path}")
        backup = load_backup_file(self.config.backup_file_path)
        logger.info(
            f"Backup contains {len(backup)} collections, {count_documents(backup)} documents"
        )

        async with self.storage_factory(self.config) as storage:
            for collection_name, documents in backup.items():
                result = await self._restore_collection(storage, collection_name, documents)
                report.collections.append(result)

        report.completed_at = datetime.now(timezone.utc)

        if report.succeeded:
            log_success(
                f"Backup restoration completed successfully! "
                f"({report.inserted_total} documents inserted)"
            )
        else:
            logger.error(
                f"Backup restoration finished with failures in: {', '.join(report.failed_collections)}"
            )

        return report

    async def _restore_collection(
        self,
        storage: Any,
        collection_name: str,
        documents: Any,
    ) -> CollectionResult:
        """Normalize and insert one collection; per-collection errors are recorded, not raised."""
        if not isinstance(documents, list):
            message = f"expected a list of documents, got {type(documents).__name__}"
            logger.error(f"Cannot restore collection {collection_name}: {message}")
            return CollectionResult(name=collection_name, status="failed", error=message)

        if not documents:
            logger.warning(f"No data to restore for collection: {collection_name}")
            return CollectionResult(name=collection_name, status="skipped")

        logger.info(f"Restoring collection: {collection_name} with {len(documents)} documents")

        try:
            converted: List[Dict[str, Any]] = [normalize(doc) for doc in documents]
            inserted = await storage.insert_many(collection_name, converted)
        except CollectionRestoreError as e:
            if e.collection is None:
                e.collection = collection_name
            logger.error(f"Error restoring collection {collection_name}: {e.message}")
            return CollectionResult(
                name=collection_name,
                status="failed",
                document_count=len(documents),
                error=e.message,
            )

        log_success(f"Successfully restored {inserted} documents into {collection_name}")
        return CollectionResult(
            name=collection_name,
            status="restored",
            document_count=len(documents),
            inserted_count=inserted,
        )


async def restore_backup(
    backup_file_path: str,
    db_uri: str,
    db_name: str,
    storage_factory: Optional[StorageFactory] = None,
) -> RestoreReport:
    """Restore ``backup_file_path`` into database ``db_name`` at ``db_uri``."""
    config = RestoreConfig(
        backup_file_path=backup_file_path,
        db_uri=db_uri,
        db_name=db_name,
    )
    return await Restorer(config, storage_factory).restore()
