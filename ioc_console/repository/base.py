"""Abstract IoC repository — the only data access surface the services use."""

from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional, Union

from ..models.ioc import IoC, IoCCreate, IoCUpdate

CreatePayload = Union[IoCCreate, Mapping[str, Any]]
UpdatePayload = Union[IoCUpdate, Mapping[str, Any]]


class IoCRepository(ABC):
    """CRUD over IoC records.

    Statistics and export code depend only on this interface, so a storage
    engine can replace the in-memory implementation without touching them.
    """

    @abstractmethod
    async def list(self) -> list[IoC]:
        """All records in insertion order. Callers may mutate the returned list."""
        ...

    @abstractmethod
    async def get_by_id(self, ioc_id: str) -> Optional[IoC]:
        ...

    @abstractmethod
    async def create(self, payload: CreatePayload) -> IoC:
        """Validate and store a new record. Raises ValidationError."""
        ...

    @abstractmethod
    async def update(self, ioc_id: str, changes: UpdatePayload) -> Optional[IoC]:
        """Shallow-merge ``changes``. Returns None when the id is unknown."""
        ...

    @abstractmethod
    async def delete(self, ioc_id: str) -> bool:
        """Remove a record. Returns whether anything was removed."""
        ...
