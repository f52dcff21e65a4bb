"""Domain Types: rich types that replace bare primitives across the codebase.

Invariants:
    - PersonId wraps bson.ObjectId: never pass raw strings as identities into the repository
    - Field names have one wire spelling (camelCase) and one Python spelling (snake_case)
    - All valid states encoded as Enums: no raw string matching

Design Decisions:
    - NewType over wrapper classes: zero runtime cost, full type-checker support
    - SortDirection values match the driver's ASCENDING/DESCENDING integers
"""

from enum import Enum, IntEnum
from typing import NewType

from bson import ObjectId
from bson.errors import InvalidId

from personstore.core.errors import StorageError


# ─── Identity Types ──────────────────────────────────────────────

PersonId = NewType("PersonId", ObjectId)


# ─── Field Names ─────────────────────────────────────────────────

ID_FIELD = "_id"
NAME = "name"
AGE = "age"
FAVORITE_FOODS = "favoriteFoods"

# Declaration order; validation reports the first failing field in this order
PERSON_FIELDS: tuple[str, ...] = (NAME, AGE, FAVORITE_FOODS)

# Python spelling -> wire spelling
FIELD_ALIASES: dict[str, str] = {
    "id": ID_FIELD,
    "_id": ID_FIELD,
    "name": NAME,
    "age": AGE,
    "favorite_foods": FAVORITE_FOODS,
    "favoriteFoods": FAVORITE_FOODS,
}


def wire_field(field_name: str) -> str | None:
    """Resolve a Python or wire field name to its stored name (None if unknown)."""
    return FIELD_ALIASES.get(field_name)


# ─── Enums ───────────────────────────────────────────────────────

class SortDirection(IntEnum):
    """Sort order for query stages: values are what the driver expects."""
    ASCENDING = 1
    DESCENDING = -1


class DocumentState(str, Enum):
    """Lifecycle of an in-memory Person document."""
    TRANSIENT = "transient"
    PERSISTED = "persisted"
    DIRTY = "dirty"
    REMOVED = "removed"


# ─── Parsing ─────────────────────────────────────────────────────

def parse_person_id(raw: object) -> PersonId:
    """Coerce a caller-supplied identity into a PersonId.

    Malformed identities are a storage-level cast failure, not a lookup miss.
    """
    if isinstance(raw, ObjectId):
        return PersonId(raw)
    if raw is None:
        # ObjectId(None) would mint a fresh id
        raise StorageError("missing identity", "cast", http_status=400)
    try:
        return PersonId(ObjectId(raw))
    except (InvalidId, TypeError) as e:
        raise StorageError(
            f"malformed identity {raw!r} ({e})", "cast", http_status=400,
        ) from e
