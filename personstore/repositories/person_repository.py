"""Person Repository — create, read, update, delete and query Person documents.

Invariants:
    - Validation runs synchronously BEFORE any collection call; invalid input never reaches the store
    - Each call returns fresh, caller-owned Person objects; nothing is cached between calls
    - Read paths return None / [] for no match; mutate-by-identity paths raise PersonNotFoundError
    - find_and_update is atomic at the store (find_one_and_update) and returns the POST-update document
    - find_edit_then_save is read-then-write and NOT atomic: concurrent writers can lose updates
    - save() transmits only dirty fields of a persisted document ($set / $unset)
    - save() of a removed document raises PersonNotFoundError, dirty or not
    - No retries: StorageError surfaces unchanged

Design Decisions:
    - create_many validates every element before inserting any (validation is all-or-nothing);
      the insert itself is one ordered insert_many, so a storage failure mid-batch is indeterminate
    - The collection is injected (PersonCollection protocol): one long-lived repository per process
"""

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from pymongo import ReturnDocument

from personstore.core.domain_types import ID_FIELD, DocumentState, parse_person_id
from personstore.core.enforce_schema import validate_patch, validate_person
from personstore.core.errors import ErrorContext, PersonNotFoundError
from personstore.core.query_spec import PersonQuery, filter_query
from personstore.core.repository_protocols import PersonCollection
from personstore.infrastructure.database import storage_errors
from personstore.models.person import Person

logger = logging.getLogger(__name__)

Filter = Mapping[str, Any] | PersonQuery | None


class PersonRepository:
    """Operational surface over the people collection."""

    def __init__(self, collection: PersonCollection):
        self.collection = collection

    # ─── Create ──────────────────────────────────────────────────

    async def create_one(self, fields: Mapping[str, Any]) -> Person:
        """Validate and insert one Person; returns it with its new identity."""
        document = validate_person(fields)
        async with storage_errors("insert_one"):
            result = await self.collection.insert_one(dict(document))
        person = Person.from_document({**document, ID_FIELD: result.inserted_id})
        logger.info("Person created", extra={"person_id": str(person.id)})
        return person

    async def create_many(self, field_sets: Iterable[Mapping[str, Any]]) -> list[Person]:
        """Validate every field-set, then insert them all in input order."""
        documents = [validate_person(fields) for fields in field_sets]
        if not documents:
            return []
        async with storage_errors("insert_many"):
            result = await self.collection.insert_many(
                [dict(d) for d in documents], ordered=True,
            )
        people = [
            Person.from_document({**document, ID_FIELD: inserted_id})
            for document, inserted_id in zip(documents, result.inserted_ids)
        ]
        logger.info("People created", extra={"count": len(people)})
        return people

    async def save(self, person: Person) -> Person:
        """Insert a transient Person or persist the dirty fields of a persisted one.

        The caller's object is updated (identity assigned, dirty flags cleared);
        an independent copy is returned.
        """
        if person.state is DocumentState.REMOVED:
            raise PersonNotFoundError(
                f"id {person.id}",
                ErrorContext(person_id=str(person.id), operation="save"),
            )
        if person.id is None:
            created = await self.create_one(person.to_document())
            person.mark_persisted(created.id)
            return person.copy()
        if not person.dirty_fields:
            return person.copy()

        changes = validate_patch(person.to_document(sorted(person.dirty_fields)))
        async with storage_errors("update_one"):
            result = await self.collection.update_one(
                {ID_FIELD: person.id}, _update_document(changes),
            )
        if result.matched_count == 0:
            raise PersonNotFoundError(
                f"id {person.id}",
                ErrorContext(person_id=str(person.id), operation="save"),
            )
        logger.info(
            f"Person saved ({', '.join(sorted(changes))})",
            extra={"person_id": str(person.id)},
        )
        person.mark_clean()
        return person.copy()

    # ─── Read ────────────────────────────────────────────────────

    async def find_many(self, filter: Filter = None) -> list[Person]:
        """All documents matching the equality filter, in store order."""
        return await self.execute_query(filter_query(filter))

    async def find_one(self, filter: Filter = None) -> Person | None:
        """First matching document, or None."""
        args = filter_query(filter).to_find_args()
        async with storage_errors("find_one"):
            raw = await self.collection.find_one(args.filter, args.projection)
        return Person.from_document(raw) if raw is not None else None

    async def find_by_id(self, person_id: Any) -> Person | None:
        """Lookup by identity; a malformed identity raises StorageError."""
        pid = parse_person_id(person_id)
        async with storage_errors("find_one"):
            raw = await self.collection.find_one({ID_FIELD: pid})
        return Person.from_document(raw) if raw is not None else None

    async def execute_query(self, query: PersonQuery) -> list[Person]:
        """Run a built query: filter -> sort -> limit -> projection."""
        args = query.to_find_args()
        async with storage_errors("find"):
            cursor = self.collection.find(
                args.filter, args.projection, sort=args.sort, limit=args.limit,
            )
            rows = await cursor.to_list(None)
        return [Person.from_document(raw) for raw in rows]

    # ─── Update ──────────────────────────────────────────────────

    async def find_edit_then_save(
        self, person_id: Any, mutation: Callable[[Person], None],
    ) -> Person:
        """Load by identity, apply mutation in memory, save dirty fields.

        The mutation must flag in-place changes (append_to / mark_modified);
        unflagged in-place changes are not saved.
        """
        pid = parse_person_id(person_id)
        person = await self.find_by_id(pid)
        if person is None:
            raise PersonNotFoundError(
                f"id {pid}", ErrorContext(person_id=str(pid), operation="find_edit_then_save"),
            )
        mutation(person)
        return await self.save(person)

    async def find_and_update(self, filter: Filter, patch: Mapping[str, Any]) -> Person:
        """Atomically patch the first match; returns the post-update document."""
        changes = validate_patch(patch)
        query = filter_query(filter)
        async with storage_errors("find_one_and_update"):
            raw = await self.collection.find_one_and_update(
                query.filter, _update_document(changes),
                return_document=ReturnDocument.AFTER,
            )
        if raw is None:
            raise PersonNotFoundError(
                _describe(query), ErrorContext(operation="find_and_update"),
            )
        person = Person.from_document(raw)
        logger.info("Person updated", extra={"person_id": str(person.id)})
        return person

    # ─── Delete ──────────────────────────────────────────────────

    async def delete_by_id(self, person_id: Any) -> Person:
        """Remove one document by identity; returns its last-known state."""
        pid = parse_person_id(person_id)
        async with storage_errors("find_one_and_delete"):
            raw = await self.collection.find_one_and_delete({ID_FIELD: pid})
        if raw is None:
            raise PersonNotFoundError(
                f"id {pid}", ErrorContext(person_id=str(pid), operation="delete_by_id"),
            )
        person = Person.from_document(raw)
        person.mark_removed()
        logger.info("Person removed", extra={"person_id": str(pid)})
        return person

    async def delete_many(self, filter: Filter) -> int:
        """Remove every match; zero matches is a successful no-op."""
        query = filter_query(filter)
        async with storage_errors("delete_many"):
            result = await self.collection.delete_many(query.filter)
        logger.info("People removed", extra={"count": result.deleted_count})
        return result.deleted_count


def _update_document(changes: dict) -> dict:
    """Split a validated patch into $set / $unset (age=None removes age)."""
    update: dict = {}
    to_set = {k: v for k, v in changes.items() if v is not None}
    to_unset = {k: "" for k, v in changes.items() if v is None}
    if to_set:
        update["$set"] = to_set
    if to_unset:
        update["$unset"] = to_unset
    return update


def _describe(query: PersonQuery) -> str:
    return ", ".join(f"{k}={v!r}" for k, v in query.filters) or "any document"
