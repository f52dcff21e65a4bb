"""Person Service — verifies the canonical Person scenarios end to end.

Tests:
    - create_and_save_person builds John Doe by default
    - add_favorite_food appends hamburger durably
    - set_age_by_name returns the post-update state
    - remove_people_named reports the count, zero included
    - top_fans_of returns at most two name-sorted burrito fans without age
"""

import pytest

from personstore.core.errors import DocumentValidationError, PersonNotFoundError
from personstore.services.person_service import PersonService


@pytest.fixture
def service(repository):
    return PersonService(repository)


async def test_create_and_save_person_defaults_to_john_doe(service):
    person = await service.create_and_save_person()
    assert person.id is not None
    assert (person.name, person.age, person.favorite_foods) == (
        "John Doe", 30, ["pizza", "burger"],
    )


async def test_create_and_save_person_validates(service, collection):
    with pytest.raises(DocumentValidationError):
        await service.create_and_save_person({"age": 4})
    assert collection.calls == []


async def test_find_people_by_name_and_food(service, burrito_fans):
    assert [p.name for p in await service.find_people_by_name("Zed")] == ["Zed"]
    assert (await service.find_one_by_food("tacos")).name == "Ronald"


async def test_find_person_by_id(service):
    created = await service.create_and_save_person()
    assert await service.find_person_by_id(str(created.id)) == created


async def test_add_favorite_food_is_durable(service):
    created = await service.create_and_save_person()
    updated = await service.add_favorite_food(created.id)
    assert updated.favorite_foods == ["pizza", "burger", "hamburger"]
    reread = await service.find_person_by_id(created.id)
    assert reread.favorite_foods == ["pizza", "burger", "hamburger"]


async def test_set_age_by_name(service):
    await service.create_and_save_person()
    updated = await service.set_age_by_name("John Doe")
    assert updated.age == 20
    with pytest.raises(PersonNotFoundError):
        await service.set_age_by_name("Nobody")


async def test_remove_by_id(service):
    created = await service.create_and_save_person()
    removed = await service.remove_by_id(created.id)
    assert removed.name == "John Doe"
    assert await service.find_person_by_id(created.id) is None


async def test_remove_people_named_mary(service, burrito_fans):
    assert await service.remove_people_named() == 1
    assert await service.remove_people_named() == 0


async def test_top_fans_of_burrito(service, burrito_fans):
    people = await service.top_fans_of()
    assert len(people) == 2
    assert [p.name for p in people] == sorted(p.name for p in people)
    for person in people:
        assert "burrito" in person.favorite_foods
        assert "age" not in person.to_dict()


async def test_create_many_people(service):
    people = await service.create_many_people([{"name": "A"}, {"name": "B"}])
    assert [p.name for p in people] == ["A", "B"]
