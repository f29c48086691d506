# person_endpoints.py
from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, Request, Response
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from persistence.errors import PersonValidationError
from persistence.person_state import PeopleDoc, PersonRecord
from persistence.repositories import AsyncPersonRepository

router = APIRouter(tags=["person"])
logger = logging.getLogger(__name__)


def get_person_repo(request: Request) -> AsyncPersonRepository:
    """The repository is opened once per process and parked on app.state."""
    return request.app.state.person_repo


def _validate_person(payload: dict[str, Any]) -> PersonRecord:
    try:
        return PersonRecord.model_validate(payload)
    except ValidationError as e:
        logger.info("PERSON BODY rejected: %s", e.errors(include_url=False))
        raise PersonValidationError("body must be a person object with an integer id") from e


def _require_positive_id(person_id: int) -> None:
    if person_id <= 0:
        raise PersonValidationError("id should be a positive integer")


@router.post("/person/", status_code=201)
async def create_person(
    body: dict[str, Any] = Body(...),
    repo: AsyncPersonRepository = Depends(get_person_repo),
) -> Response:
    person = _validate_person(body)
    _require_positive_id(person.id)
    await repo.create(person)
    return Response(status_code=201)


@router.get("/person/")
async def list_people(repo: AsyncPersonRepository = Depends(get_person_repo)) -> JSONResponse:
    people = await repo.list()
    return JSONResponse(PeopleDoc(people=people).to_disk_doc())


@router.get("/person/{person_id}")
async def get_person(person_id: int, repo: AsyncPersonRepository = Depends(get_person_repo)) -> JSONResponse:
    person = await repo.get_by_id(person_id)
    return JSONResponse(person.model_dump(mode="json"))


@router.put("/person/{person_id}")
async def update_person(
    person_id: int,
    body: dict[str, Any] = Body(...),
    repo: AsyncPersonRepository = Depends(get_person_repo),
) -> JSONResponse:
    payload = dict(body)
    payload.setdefault("id", person_id)
    person = _validate_person(payload)
    if person.id != person_id:
        raise PersonValidationError(f"body id {person.id} does not match path id {person_id}")
    await repo.update(person)
    return JSONResponse(person.model_dump(mode="json"))


@router.delete("/person/{person_id}", status_code=204)
async def delete_person(person_id: int, repo: AsyncPersonRepository = Depends(get_person_repo)) -> Response:
    await repo.delete_by_id(person_id)
    return Response(status_code=204)
