"""Custom exception hierarchy for mongo-restore."""

from typing import Any, Optional


class MongoRestoreError(Exception):
    """Base error."""
    def __init__(self, message: str, code: str = "MONGO_RESTORE_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ConfigurationError(MongoRestoreError):
    """Missing or blank required configuration value."""
    def __init__(self, message: str = "Invalid configuration"):
        super().__init__(message, code="CONFIG_ERROR")


class BackupFileError(MongoRestoreError):
    """Backup file missing, unreadable or not a JSON object."""
    def __init__(self, path: str, reason: str):
        self.path = path
        super().__init__(f"Cannot read backup file {path}: {reason}", code="BACKUP_FILE_ERROR")


class StorageConnectionError(MongoRestoreError):
    """Backend unreachable or connection string rejected."""
    def __init__(self, uri: str, reason: str):
        self.uri = uri
        super().__init__(f"Cannot connect to MongoDB at {uri}: {reason}", code="CONNECTION_ERROR")


class CollectionRestoreError(MongoRestoreError):
    """Failure scoped to a single collection; the run continues."""
    def __init__(self, message: str, collection: Optional[str] = None, code: str = "COLLECTION_ERROR"):
        self.collection = collection
        super().__init__(message, code=code)


class ConversionError(CollectionRestoreError):
    """A field value could not be converted to its typed representation."""
    def __init__(self, field: str, value: Any, target: str):
        self.field = field
        self.value = value
        self.target = target
        super().__init__(
            f"Field '{field}' value {value!r} is not a valid {target}",
            code="CONVERSION_ERROR",
        )


class BulkInsertError(CollectionRestoreError):
    """The backend rejected a bulk insert."""
    def __init__(self, collection: str, reason: str):
        super().__init__(
            f"Bulk insert into '{collection}' failed: {reason}",
            collection=collection,
            code="INSERT_ERROR",
        )
