from __future__ import annotations

from .errors import (
    DecodeError,
    DuplicateIDError,
    NotFoundError,
    PersonStoreError,
    PersonValidationError,
    StorageIOError,
)
from .person_state import PeopleDoc, PersonRecord, PersonRepository, PersonStore
from .repositories import AsyncDiskPersonRepository, AsyncPersonRepository

__all__ = [
    "PersonRecord",
    "PeopleDoc",
    "PersonRepository",
    "PersonStore",
    "AsyncPersonRepository",
    "AsyncDiskPersonRepository",
    "PersonStoreError",
    "StorageIOError",
    "DecodeError",
    "DuplicateIDError",
    "NotFoundError",
    "PersonValidationError",
]
