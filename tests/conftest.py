"""Root conftest — shared test configuration and fixtures.

Invariants:
    - Tests never reach a real document store: the repository runs on InMemoryCollection
    - Every test gets a fresh collection
"""

import os

import pytest

# Ensure tests don't accidentally point at a real cluster
os.environ.setdefault("MONGO_URI", "mongodb://localhost:27017")
os.environ.setdefault("LOG_FORMAT", "text")

from personstore.repositories.person_repository import PersonRepository  # noqa: E402
from tests.fake_collection import InMemoryCollection  # noqa: E402


@pytest.fixture
def collection():
    return InMemoryCollection()


@pytest.fixture
def repository(collection):
    return PersonRepository(collection)


@pytest.fixture
async def burrito_fans(repository):
    """Four burrito fans (distinct names, inserted out of order) plus one non-fan."""
    return await repository.create_many([
        {"name": "Ronald", "age": 40, "favoriteFoods": ["burrito", "tacos"]},
        {"name": "Ann", "age": 25, "favoriteFoods": ["burrito"]},
        {"name": "Mary", "age": 33, "favoriteFoods": ["sushi"]},
        {"name": "Zed", "age": 51, "favoriteFoods": ["pizza", "burrito"]},
        {"name": "Carl", "age": 19, "favoriteFoods": ["burrito", "burrito"]},
    ])
