"""Data models for restore results."""

from datetime import datetime
from typing import List, Literal, Optional
from pydantic import BaseModel, Field


class CollectionResult(BaseModel):
    """Outcome of restoring a single collection."""

    name: str = Field(..., description="Collection name")
    status: Literal["restored", "skipped", "failed"] = Field(..., description="Restore outcome")
    document_count: int = Field(0, description="Documents found in the backup")
    inserted_count: int = Field(0, description="Documents inserted by the backend")
    error: Optional[str] = Field(None, description="Failure message, if any")


class RestoreReport(BaseModel):
    """Summary of a restore run."""

    backup_file: str
    database: str
    started_at: datetime
    completed_at: Optional[datetime] = None
    collections: List[CollectionResult] = Field(default_factory=list)

    @property
    def inserted_total(self) -> int:
        return sum(c.inserted_count for c in self.collections)

    @property
    def failed_collections(self) -> List[str]:
        return [c.name for c in self.collections if c.status == "failed"]

    @property
    def succeeded(self) -> bool:
        return not self.failed_collections
