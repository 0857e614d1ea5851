"""
Base Repository - Generic repository interfaces using Protocol.

Implements the Repository pattern for clean separation between
business logic and data access. Every collaborator method is a coroutine.
"""

from __future__ import annotations

from abc import abstractmethod
from dataclasses import dataclass
from typing import Any, Generic, Mapping, Protocol, Sequence, TypeVar

from sqlalchemy.ext.asyncio import AsyncEngine

from core.data_repository import get_engine

T = TypeVar("T")


class ReadOnlyRepository(Protocol[T]):
    """Read-only repository interface."""

    @abstractmethod
    async def list_all(self) -> Sequence[T]:
        """List every entity (single full fetch)."""
        ...

    @abstractmethod
    async def get_by_id(self, id: str) -> T | None:
        """Get entity by ID, None when absent."""
        ...


class Repository(ReadOnlyRepository[T], Protocol):
    """Full repository interface with write operations."""

    @abstractmethod
    async def create(self, entity: T) -> T:
        """Persist a new entity and return it with its generated ID."""
        ...

    @abstractmethod
    async def update(self, id: str, changes: Mapping[str, Any]) -> T:
        """Apply a partial patch and return the stored entity."""
        ...


@dataclass
class PagedResult(Generic[T]):
    """Container for paginated results."""

    items: Sequence[T]
    total: int
    page: int
    per_page: int

    @property
    def total_pages(self) -> int:
        if self.per_page <= 0:
            return 0
        return (self.total + self.per_page - 1) // self.per_page

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_prev(self) -> bool:
        return self.page > 1


class SqlRepositoryBase:
    """Shared plumbing for the SQLAlchemy implementations."""

    def __init__(self, engine: AsyncEngine | None = None):
        self._engine = engine or get_engine()

    @staticmethod
    def _as_float(value: Any) -> float | None:
        if value is None:
            return None
        return float(value)
