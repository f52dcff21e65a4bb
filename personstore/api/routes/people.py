"""People Routes — HTTP surface over PersonRepository and PersonService.

Invariants:
    - Request bodies for create/patch are passed to the repository unvalidated:
      schema enforcement happens once, in core/enforce_schema.py
    - Single-document lookups that miss return 404 via PersonNotFoundError
    - Multi-document reads and deletes never 404 on zero matches
    - /people/search and /people/first are declared before /people/{person_id}

Design Decisions:
    - Routes only translate HTTP <-> repository calls; errors bubble to the global handlers
"""

import logging
from typing import Any, Literal

from fastapi import APIRouter, Body, Depends, Query, status

from personstore.api.dependencies import get_person_service, get_repository
from personstore.core.domain_types import FAVORITE_FOODS, NAME, SortDirection
from personstore.core.errors import ErrorContext, PersonNotFoundError
from personstore.core.query_spec import PersonQuery
from personstore.repositories.person_repository import PersonRepository
from personstore.schemas.person import FavoriteFoodAdd
from personstore.services.person_service import PersonService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/people", tags=["people"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_person(
    body: dict[str, Any] = Body(...),
    repository: PersonRepository = Depends(get_repository),
):
    """Create one person."""
    person = await repository.create_one(body)
    return person.to_dict()


@router.post("/bulk", status_code=status.HTTP_201_CREATED)
async def create_people(
    body: list[dict[str, Any]] = Body(...),
    repository: PersonRepository = Depends(get_repository),
):
    """Create many people; nothing is written if any element is invalid."""
    people = await repository.create_many(body)
    return {"people": [p.to_dict() for p in people]}


@router.get("")
async def list_people(
    name: str | None = Query(None),
    food: str | None = Query(None),
    repository: PersonRepository = Depends(get_repository),
):
    """List people, optionally filtered by exact name and/or a favorite food."""
    filter: dict[str, Any] = {}
    if name is not None:
        filter[NAME] = name
    if food is not None:
        filter[FAVORITE_FOODS] = food
    people = await repository.find_many(filter)
    return {"people": [p.to_dict() for p in people]}


@router.get("/search")
async def search_people(
    food: str | None = Query(None),
    name: str | None = Query(None),
    sort: str | None = Query(None),
    order: Literal["asc", "desc"] = Query("asc"),
    limit: int | None = Query(None, ge=1, le=1000),
    exclude: list[str] = Query([]),
    repository: PersonRepository = Depends(get_repository),
):
    """Filter, sort, limit and project in one query."""
    query = PersonQuery()
    if food is not None:
        query = query.where(FAVORITE_FOODS, food)
    if name is not None:
        query = query.where(NAME, name)
    if sort is not None:
        direction = SortDirection.ASCENDING if order == "asc" else SortDirection.DESCENDING
        query = query.sort_by(sort, direction)
    if exclude:
        query = query.exclude(*exclude)
    query = query.limit(limit)
    people = await repository.execute_query(query)
    return {"people": [p.to_dict() for p in people]}


@router.get("/first")
async def first_person_by_food(
    food: str = Query(..., min_length=1),
    service: PersonService = Depends(get_person_service),
):
    """First person who likes `food`."""
    person = await service.find_one_by_food(food)
    if person is None:
        raise PersonNotFoundError(
            f"favoriteFoods={food!r}", ErrorContext(operation="find_one"),
        )
    return person.to_dict()


@router.get("/{person_id}")
async def get_person(
    person_id: str, service: PersonService = Depends(get_person_service),
):
    """Get one person by identity."""
    person = await service.find_person_by_id(person_id)
    if person is None:
        raise PersonNotFoundError(
            f"id {person_id}",
            ErrorContext(person_id=person_id, operation="find_by_id"),
        )
    return person.to_dict()


@router.post("/{person_id}/favorite-foods")
async def add_favorite_food(
    person_id: str,
    body: FavoriteFoodAdd,
    service: PersonService = Depends(get_person_service),
):
    """Append a favorite food (read-modify-write)."""
    person = await service.add_favorite_food(person_id, body.food)
    return person.to_dict()


@router.patch("/by-name/{name}")
async def update_person_by_name(
    name: str,
    body: dict[str, Any] = Body(...),
    repository: PersonRepository = Depends(get_repository),
):
    """Atomically patch the first person with this name; returns the updated document."""
    person = await repository.find_and_update({NAME: name}, body)
    return person.to_dict()


@router.delete("/{person_id}")
async def delete_person(
    person_id: str, service: PersonService = Depends(get_person_service),
):
    """Delete one person; returns the removed document."""
    person = await service.remove_by_id(person_id)
    return person.to_dict()


@router.delete("")
async def delete_people_by_name(
    name: str = Query(..., min_length=1),
    service: PersonService = Depends(get_person_service),
):
    """Delete every person with this name. Zero matches is not an error."""
    deleted = await service.remove_people_named(name)
    return {"deleted": deleted}
