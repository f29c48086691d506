from __future__ import annotations


class PersonStoreError(Exception):
    """Base class for person store failures. ``status_code`` is the HTTP mapping."""

    status_code = 500


class StorageIOError(PersonStoreError):
    """The backing file could not be checked, opened, read or written."""


class DecodeError(PersonStoreError):
    """The backing file exists but does not hold a valid people document."""


class DuplicateIDError(PersonStoreError):
    status_code = 409

    def __init__(self, person_id: int):
        super().__init__(f"a person with id {person_id} already exists")
        self.person_id = person_id


class NotFoundError(PersonStoreError):
    status_code = 404

    def __init__(self, person_id: int):
        super().__init__(f"no person with id {person_id}")
        self.person_id = person_id


class PersonValidationError(PersonStoreError):
    status_code = 400
