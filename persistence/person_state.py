from __future__ import annotations

import copy
import logging
import math
from pathlib import Path
from typing import Any, Mapping, Protocol

from pydantic import BaseModel, ConfigDict, Field, StrictInt, ValidationError, field_validator, model_validator

from .disk_store import DiskJsonDocumentStore
from .errors import DecodeError, DuplicateIDError, NotFoundError, PersonValidationError, StorageIOError
from .locks import GLOBAL_PATH_LOCKS

logger = logging.getLogger(__name__)


def _check_finite(value: Any, where: str) -> None:
    # NaN/Infinity are not JSON; pydantic would write them as null.
    if isinstance(value, float) and not math.isfinite(value):
        raise ValueError(f"{where} must be a finite number, got {value!r}")
    if isinstance(value, dict):
        for key, item in value.items():
            _check_finite(item, f"{where}.{key}")
    elif isinstance(value, (list, tuple)):
        for idx, item in enumerate(value):
            _check_finite(item, f"{where}[{idx}]")


class PersonRecord(BaseModel):
    """A person: an integer ``id`` plus any other fields, carried as-is."""

    model_config = ConfigDict(extra="allow")

    id: StrictInt

    @model_validator(mode="after")
    def _extras_are_finite(self) -> "PersonRecord":
        for key, value in (self.__pydantic_extra__ or {}).items():
            _check_finite(value, key)
        return self


class PeopleDoc(BaseModel):
    """
    Mirrors the on-disk people file exactly:
      { "people": [ { "id": 1, ... }, { "id": 2, ... } ] }
    """

    model_config = ConfigDict(extra="forbid")

    people: list[PersonRecord] = Field(default_factory=list)

    @field_validator("people")
    @classmethod
    def _ids_are_unique(cls, people: list[PersonRecord]) -> list[PersonRecord]:
        seen: set[int] = set()
        for person in people:
            if person.id in seen:
                raise ValueError(f"duplicate person id {person.id}")
            seen.add(person.id)
        return people

    @classmethod
    def from_disk_doc(cls, doc: Mapping[str, Any]) -> "PeopleDoc":
        return cls.model_validate(doc)

    def to_disk_doc(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


def _own_copy(person: PersonRecord) -> PersonRecord:
    """Deep copy that re-runs validation, catching fields assigned after construction."""
    try:
        return PersonRecord.model_validate(copy.deepcopy(person.model_dump()))
    except ValidationError as e:
        raise PersonValidationError(f"person {person.id} cannot be stored: {e}") from e


class PersonRepository(Protocol):
    def create(self, person: PersonRecord) -> None:
        ...

    def list(self) -> list[PersonRecord]:
        ...

    def get_by_id(self, person_id: int) -> PersonRecord:
        ...

    def update(self, person: PersonRecord) -> None:
        ...

    def delete_by_id(self, person_id: int) -> None:
        ...


class PersonStore(PersonRepository):
    """
    Keeps the whole people collection in memory and rewrites the backing file
    after every mutation.

    Every operation runs under the lock registered for the file path, so a
    check, its mutation and the write are one critical section. If the write
    fails the in-memory change is undone, keeping memory and disk equal.
    """

    def __init__(self, documents: DiskJsonDocumentStore, doc: PeopleDoc):
        self._documents = documents
        self._doc = doc
        self._lock = GLOBAL_PATH_LOCKS.lock_for(documents.path)

    @classmethod
    def open(cls, path: Path | str) -> "PersonStore":
        documents = DiskJsonDocumentStore(Path(path))
        with GLOBAL_PATH_LOCKS.lock_for(documents.path):
            if not documents.exists():
                store = cls(documents, PeopleDoc())
                store._persist()
                logger.info("PEOPLE OPEN: created empty %s", documents.path)
                return store

            raw = documents.load()
            try:
                doc = PeopleDoc.from_disk_doc(raw)
            except ValidationError as e:
                raise DecodeError(f"{documents.path} is not a valid people document: {e}") from e

        logger.info("PEOPLE OPEN: loaded %d people from %s", len(doc.people), documents.path)
        return cls(documents, doc)

    @property
    def path(self) -> Path:
        return self._documents.path

    def __len__(self) -> int:
        with self._lock:
            return len(self._doc.people)

    def __contains__(self, person_id: object) -> bool:
        if isinstance(person_id, bool) or not isinstance(person_id, int):
            return False
        with self._lock:
            return self._index_of(person_id) is not None

    def create(self, person: PersonRecord) -> None:
        record = _own_copy(person)
        with self._lock:
            if self._index_of(record.id) is not None:
                raise DuplicateIDError(record.id)
            self._doc.people.append(record)
            try:
                self._persist()
            except StorageIOError:
                self._doc.people.pop()
                raise
        logger.debug("PEOPLE CREATE: id=%s", record.id)

    def list(self) -> list[PersonRecord]:
        with self._lock:
            return [p.model_copy(deep=True) for p in self._doc.people]

    def get_by_id(self, person_id: int) -> PersonRecord:
        with self._lock:
            idx = self._index_of(person_id)
            if idx is None:
                raise NotFoundError(person_id)
            return self._doc.people[idx].model_copy(deep=True)

    def update(self, person: PersonRecord) -> None:
        record = _own_copy(person)
        with self._lock:
            idx = self._index_of(record.id)
            if idx is None:
                raise NotFoundError(record.id)
            previous = self._doc.people[idx]
            self._doc.people[idx] = record
            try:
                self._persist()
            except StorageIOError:
                self._doc.people[idx] = previous
                raise
        logger.debug("PEOPLE UPDATE: id=%s", record.id)

    def delete_by_id(self, person_id: int) -> None:
        with self._lock:
            idx = self._index_of(person_id)
            if idx is None:
                raise NotFoundError(person_id)
            removed = self._doc.people.pop(idx)
            try:
                self._persist()
            except StorageIOError:
                self._doc.people.insert(idx, removed)
                raise
        logger.debug("PEOPLE DELETE: id=%s", person_id)

    def _index_of(self, person_id: int) -> int | None:
        for idx, person in enumerate(self._doc.people):
            if person.id == person_id:
                return idx
        return None

    def _persist(self) -> None:
        self._documents.save(self._doc.to_disk_doc())
