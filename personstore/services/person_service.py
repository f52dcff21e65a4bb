"""Person Service — the everyday Person scenarios built on PersonRepository.

Invariants:
    - Every method is a thin composition of repository operations (no direct collection access)
    - add_favorite_food flags favoriteFoods via append_to() so the save transmits it
    - set_age_by_name returns the post-update document

Design Decisions:
    - Defaults (hamburger, age 20, Mary, burrito top-2) are the canonical demo values;
      callers and routes may override each one
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from personstore.core.domain_types import AGE, FAVORITE_FOODS, NAME, SortDirection
from personstore.core.query_spec import PersonQuery
from personstore.models.person import Person
from personstore.repositories.person_repository import PersonRepository

logger = logging.getLogger(__name__)

DEFAULT_PERSON = {"name": "John Doe", "age": 30, "favoriteFoods": ["pizza", "burger"]}


class PersonService:
    """Person scenarios over a single long-lived repository."""

    def __init__(self, repository: PersonRepository):
        self.repository = repository

    async def create_and_save_person(self, fields: Mapping[str, Any] | None = None) -> Person:
        """Build a transient Person in memory, then save it."""
        data = dict(DEFAULT_PERSON if fields is None else fields)
        person = Person(
            name=data.get(NAME),
            age=data.get(AGE),
            favorite_foods=data.get(FAVORITE_FOODS, data.get("favorite_foods")),
        )
        return await self.repository.save(person)

    async def create_many_people(self, people: Iterable[Mapping[str, Any]]) -> list[Person]:
        return await self.repository.create_many(people)

    async def find_people_by_name(self, name: str) -> list[Person]:
        return await self.repository.find_many({NAME: name})

    async def find_one_by_food(self, food: str) -> Person | None:
        return await self.repository.find_one({FAVORITE_FOODS: food})

    async def find_person_by_id(self, person_id: Any) -> Person | None:
        return await self.repository.find_by_id(person_id)

    async def add_favorite_food(self, person_id: Any, food: str = "hamburger") -> Person:
        """Read-modify-write: append a food and save (not atomic)."""
        return await self.repository.find_edit_then_save(
            person_id, lambda person: person.append_to(FAVORITE_FOODS, food),
        )

    async def set_age_by_name(self, name: str, age: int = 20) -> Person:
        """Atomically set the age of the first person with this name."""
        return await self.repository.find_and_update({NAME: name}, {AGE: age})

    async def remove_by_id(self, person_id: Any) -> Person:
        return await self.repository.delete_by_id(person_id)

    async def remove_people_named(self, name: str = "Mary") -> int:
        removed = await self.repository.delete_many({NAME: name})
        logger.info(f"Removed {removed} people named {name!r}", extra={"count": removed})
        return removed

    async def top_fans_of(self, food: str = "burrito", limit: int = 2) -> list[Person]:
        """People who like `food`, sorted by name, capped at `limit`, without age."""
        query = (
            PersonQuery()
            .where(FAVORITE_FOODS, food)
            .sort_by(NAME, SortDirection.ASCENDING)
            .limit(limit)
            .exclude(AGE)
        )
        return await self.repository.execute_query(query)
