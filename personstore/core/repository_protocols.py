"""Boundary Protocols: contracts between the repository and the document store.

Invariants:
    - The repository NEVER imports a concrete driver client: it receives a collection
    - Only the operations listed here cross the boundary
    - Result objects are read for the single attribute the repository needs

Design Decisions:
    - Protocol over ABC: pymongo's AsyncCollection satisfies it structurally and
      test doubles need no inheritance
    - find() is sync and returns a cursor, matching the driver; everything else is awaited
"""

from collections.abc import Mapping, Sequence
from typing import Any, Protocol


class InsertOneResultLike(Protocol):
    inserted_id: Any


class InsertManyResultLike(Protocol):
    inserted_ids: list[Any]


class UpdateResultLike(Protocol):
    matched_count: int


class DeleteResultLike(Protocol):
    deleted_count: int


class CursorLike(Protocol):
    """Async cursor returned by find()."""
    async def to_list(self, length: int | None = None) -> list[dict]: ...


class PersonCollection(Protocol):
    """Contract for the people collection: implemented by the driver."""
    async def insert_one(self, document: dict) -> InsertOneResultLike: ...
    async def insert_many(
        self, documents: Sequence[dict], ordered: bool = True,
    ) -> InsertManyResultLike: ...
    def find(
        self,
        filter: Mapping | None = None,
        projection: Mapping | None = None,
        *,
        sort: list[tuple[str, int]] | None = None,
        limit: int = 0,
    ) -> CursorLike: ...
    async def find_one(
        self, filter: Mapping | None = None, projection: Mapping | None = None,
    ) -> dict | None: ...
    async def update_one(self, filter: Mapping, update: Mapping) -> UpdateResultLike: ...
    async def find_one_and_update(
        self, filter: Mapping, update: Mapping, *, return_document: bool = False,
    ) -> dict | None: ...
    async def find_one_and_delete(self, filter: Mapping) -> dict | None: ...
    async def delete_many(self, filter: Mapping) -> DeleteResultLike: ...
