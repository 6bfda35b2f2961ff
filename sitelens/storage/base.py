"""Abstract website record store."""

from abc import ABC, abstractmethod

from sitelens.models.website import WebsiteRecord, WebsiteRecordCreate, WebsiteRecordUpdate


class WebsiteStore(ABC):
    """Abstract base class for website analysis persistence."""

    @abstractmethod
    async def create(self, record: WebsiteRecordCreate) -> WebsiteRecord:
        """
        Insert a new record.

        Args:
            record: Fields produced by a successful scrape

        Returns:
            Stored record with id and timestamps
        """
        ...

    @abstractmethod
    async def list_all(self) -> list[WebsiteRecord]:
        """Return all records, newest first."""
        ...

    @abstractmethod
    async def get(self, record_id: int) -> WebsiteRecord | None:
        """Fetch one record, None if it does not exist."""
        ...

    @abstractmethod
    async def update(self, record_id: int, changes: WebsiteRecordUpdate) -> WebsiteRecord | None:
        """
        Apply a partial update.

        Args:
            record_id: Record to modify
            changes: Fields to overwrite; unset fields are left alone

        Returns:
            Updated record or None if it does not exist
        """
        ...

    @abstractmethod
    async def delete(self, record_id: int) -> WebsiteRecord | None:
        """Remove a record, returning it, or None if it does not exist."""
        ...

    @abstractmethod
    async def close(self) -> None:
        """Cleanup connections and resources."""
        ...

    async def __aenter__(self) -> "WebsiteStore":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit - cleanup."""
        await self.close()
