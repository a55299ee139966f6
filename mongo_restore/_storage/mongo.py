"""MongoDB storage backend used as the restore target."""

from typing import Any, Dict, List, Optional

from bson.errors import BSONError
from pymongo import AsyncMongoClient
from pymongo.errors import PyMongoError

from .._utils import logger
from ..config import ConnectionConfig
from ..exceptions import BulkInsertError, StorageConnectionError


class MongoStorage:
    """Async MongoDB connection scoped to one database.

    Use as an async context manager: the connection is verified on enter and
    closed exactly once on exit, whatever happened in between.
    """

    def __init__(self, uri: str, db_name: str, config: Optional[ConnectionConfig] = None):
        self.uri = uri
        self.db_name = db_name
        self.config = config or ConnectionConfig()
        self._client: Optional[AsyncMongoClient] = None
        self._db: Optional[Any] = None

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    async def connect(self) -> None:
        """Open the client and verify the server answers a ping."""
        if self._client is not None:
            return

        logger.info(f"Connecting to MongoDB at {self.uri}")
        try:
            self._client = AsyncMongoClient(
                self.uri,
                serverSelectionTimeoutMS=self.config.server_selection_timeout_ms,
                appname=self.config.app_name,
            )
            await self._client.admin.command("ping")
        except PyMongoError as e:
            await self.close()
            raise StorageConnectionError(self.uri, str(e)) from e

        # Databases are created by the server on first write
        self._db = self._client[self.db_name]
        logger.info(f"Connected to MongoDB, using database: {self.db_name}")

    async def insert_many(self, collection_name: str, documents: List[Dict[str, Any]]) -> int:
        """Bulk-insert documents into a collection.

        Returns:
            Number of inserted documents
        """
        if self._db is None:
            raise StorageConnectionError(self.uri, "not connected")

        try:
            result = await self._db[collection_name].insert_many(documents)
        except (PyMongoError, BSONError, OverflowError) as e:
            # BSON encoding errors are raised before the batch reaches the server
            raise BulkInsertError(collection_name, str(e)) from e

        return len(result.inserted_ids)

    async def close(self) -> None:
        """Close the client if it was opened."""
        if self._client is None:
            return

        client = self._client
        self._client = None
        self._db = None
        await client.close()
        logger.info("MongoDB connection closed")

    async def __aenter__(self) -> "MongoStorage":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
