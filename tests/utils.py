"""Test utilities for mongo-restore tests."""

from typing import Any, Dict, List, Optional

from mongo_restore.exceptions import BulkInsertError


class FakeStorage:
    """In-memory stand-in for MongoStorage.

    Records every call so tests can assert on backend traffic.
    """

    def __init__(self, fail_on: Optional[Dict[str, str]] = None):
        self.fail_on = fail_on or {}
        self.inserted: Dict[str, List[Dict[str, Any]]] = {}
        self.insert_calls: List[str] = []
        self.enter_count = 0
        self.close_count = 0

    async def insert_many(self, collection_name: str, documents: List[Dict[str, Any]]) -> int:
        self.insert_calls.append(collection_name)
        if collection_name in self.fail_on:
            raise BulkInsertError(collection_name, self.fail_on[collection_name])
        self.inserted.setdefault(collection_name, []).extend(documents)
        return len(documents)

    async def __aenter__(self) -> "FakeStorage":
        self.enter_count += 1
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.close_count += 1

    def factory(self, config) -> "FakeStorage":
        return self
