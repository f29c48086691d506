from __future__ import annotations

import asyncio

import pytest

from persistence.errors import DuplicateIDError, NotFoundError
from persistence.person_state import PersonRecord, PersonStore
from persistence.repositories import AsyncDiskPersonRepository


def test_async_disk_person_repository_basic_flow(people_path):
    async def _run():
        repo = AsyncDiskPersonRepository.open(people_path)

        await repo.create(PersonRecord(id=1, name="A"))
        await repo.create(PersonRecord(id=2, name="B"))
        assert [p.id for p in await repo.list()] == [1, 2]

        await repo.update(PersonRecord(id=1, name="A2"))
        got = await repo.get_by_id(1)
        assert got.model_dump() == {"id": 1, "name": "A2"}

        await repo.delete_by_id(2)
        with pytest.raises(NotFoundError):
            await repo.get_by_id(2)

        with pytest.raises(DuplicateIDError):
            await repo.create(PersonRecord(id=1, name="again"))

    asyncio.run(_run())

    # Same file, fresh store.
    assert [p.model_dump() for p in PersonStore.open(people_path).list()] == [{"id": 1, "name": "A2"}]


def test_async_repository_concurrent_creates(people_path):
    async def _run():
        repo = AsyncDiskPersonRepository.open(people_path)
        await asyncio.gather(*(repo.create(PersonRecord(id=i)) for i in range(1, 31)))
        return repo

    repo = asyncio.run(_run())

    assert len(repo.store) == 30
    assert sorted(p.id for p in PersonStore.open(people_path).list()) == list(range(1, 31))
