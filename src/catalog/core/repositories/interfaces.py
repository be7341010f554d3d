"""Generic repository interface (Dependency Inversion Principle).

Provides ``IRepository[T, C, U]``, the base abstract class that
domain-specific repository interfaces extend.  Service-layer code
depends on this abstraction, never on Django ORM directly.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, Optional, TypeVar

T = TypeVar("T")
C = TypeVar("C")
U = TypeVar("U")


class RepositoryError(Exception):
    """The underlying datastore failed to complete an operation."""


class IRepository(ABC, Generic[T, C, U]):
    """Base generic repository contract.

    Type parameters:
        ``T``: record returned to callers (e.g. ``ProductOutputDTO``).
        ``C``: typed input accepted by :meth:`create`.
        ``U``: typed partial input accepted by :meth:`update`.

    Implementations raise :class:`RepositoryError` (or a subclass) on
    storage failure and never return partially applied results.
    """

    @abstractmethod
    def find(self, id: int) -> Optional[T]:
        """Retrieve a record by primary key, ``None`` when absent."""

    @abstractmethod
    def create(self, data: C) -> int:
        """Persist a new record and return its generated id."""

    @abstractmethod
    def update(self, id: int, data: U) -> bool:
        """Apply a partial update; ``True`` when a row was affected."""

    @abstractmethod
    def delete(self, id: int) -> bool:
        """Remove a record; ``True`` when a row was affected."""

    @abstractmethod
    def exists(self, id: int) -> bool:
        """Whether a record with the given id exists."""
