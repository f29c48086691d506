from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Protocol

from .person_state import PersonRecord, PersonStore


class AsyncPersonRepository(Protocol):
    """
    Domain-level person persistence interface used by the HTTP layer.
    Mirrors PersonStore one to one.
    """

    async def create(self, person: PersonRecord) -> None: ...
    async def list(self) -> list[PersonRecord]: ...
    async def get_by_id(self, person_id: int) -> PersonRecord: ...
    async def update(self, person: PersonRecord) -> None: ...
    async def delete_by_id(self, person_id: int) -> None: ...


class AsyncDiskPersonRepository(AsyncPersonRepository):
    """
    Async wrapper around the disk-backed PersonStore.
    Uses asyncio.to_thread to avoid blocking the event loop on file I/O.
    """

    def __init__(self, store: PersonStore) -> None:
        self._store = store

    @classmethod
    def open(cls, path: Path | str) -> "AsyncDiskPersonRepository":
        return cls(PersonStore.open(path))

    @property
    def store(self) -> PersonStore:
        return self._store

    async def create(self, person: PersonRecord) -> None:
        await asyncio.to_thread(self._store.create, person)

    async def list(self) -> list[PersonRecord]:
        return await asyncio.to_thread(self._store.list)

    async def get_by_id(self, person_id: int) -> PersonRecord:
        return await asyncio.to_thread(self._store.get_by_id, person_id)

    async def update(self, person: PersonRecord) -> None:
        await asyncio.to_thread(self._store.update, person)

    async def delete_by_id(self, person_id: int) -> None:
        await asyncio.to_thread(self._store.delete_by_id, person_id)
