"""Person Document: in-memory representation of one stored Person.

Invariants:
    - id is None until the repository assigns one (transient), then never changes
    - Assigning name / age / favorite_foods marks that field dirty
    - In-place list mutation is NOT tracked: call append_to() or mark_modified()
      or the change is silently dropped by the next save
    - Two documents are equal iff both have an identity and the identities match
    - Only documents with an identity are hashable
    - append_to / mark_modified refuse fields a projection excluded
    - favorite_foods is never None

Design Decisions:
    - Properties over __setattr__ hooks: only the three schema fields are tracked
    - loaded_fields records what a projection returned, so to_dict() never
      invents a field the store did not send
"""

import copy
from collections.abc import Iterable, Mapping

from bson import ObjectId

from personstore.core.domain_types import (
    AGE, FAVORITE_FOODS, ID_FIELD, NAME, PERSON_FIELDS,
    DocumentState, PersonId, wire_field,
)

_SEQUENCE_FIELDS = frozenset({FAVORITE_FOODS})


class Person:
    """One Person document with dirty-field tracking."""

    def __init__(
        self,
        name: str | None = None,
        age: int | None = None,
        favorite_foods: Iterable[str] | None = None,
    ):
        self._id: PersonId | None = None
        self._name = name
        self._age = age
        self._favorite_foods = list(favorite_foods or [])
        self._dirty: set[str] = set()
        self._removed = False
        self.loaded_fields: frozenset[str] = frozenset(PERSON_FIELDS)

    # ─── Hydration ───────────────────────────────────────────────

    @classmethod
    def from_document(cls, raw: Mapping) -> "Person":
        """Build a persisted Person from a stored document (possibly projected)."""
        person = cls(
            name=raw.get(NAME),
            age=raw.get(AGE),
            favorite_foods=raw.get(FAVORITE_FOODS),
        )
        person._id = PersonId(raw[ID_FIELD]) if raw.get(ID_FIELD) is not None else None
        person.loaded_fields = frozenset(f for f in PERSON_FIELDS if f in raw)
        return person

    def copy(self) -> "Person":
        """Independent deep copy, dirty state included."""
        return copy.deepcopy(self)

    # ─── Tracked fields ──────────────────────────────────────────

    @property
    def id(self) -> PersonId | None:
        return self._id

    @property
    def name(self) -> str | None:
        return self._name

    @name.setter
    def name(self, value: str) -> None:
        self._name = value
        self._flag(NAME)

    @property
    def age(self) -> int | None:
        return self._age

    @age.setter
    def age(self, value: int | None) -> None:
        self._age = value
        self._flag(AGE)

    @property
    def favorite_foods(self) -> list[str]:
        return self._favorite_foods

    @favorite_foods.setter
    def favorite_foods(self, value: Iterable[str] | None) -> None:
        self._favorite_foods = list(value or [])
        self._flag(FAVORITE_FOODS)

    # ─── Dirty tracking ──────────────────────────────────────────

    def append_to(self, field_name: str, value: str) -> None:
        """Append to a sequence field in place and flag it for the next save."""
        field = wire_field(field_name)
        if field not in _SEQUENCE_FIELDS:
            raise ValueError(f"{field_name!r} is not a sequence field")
        self._require_loaded(field)
        self._favorite_foods.append(value)
        self._flag(field)

    def mark_modified(self, field_name: str) -> None:
        """Flag an in-place change so save() transmits it (loaded fields only)."""
        field = self._tracked(field_name)
        self._require_loaded(field)
        self._flag(field)

    def _tracked(self, field_name: str) -> str:
        field = wire_field(field_name)
        if field is None or field == ID_FIELD:
            raise ValueError(f"{field_name!r} is not a tracked Person field")
        return field

    def _require_loaded(self, field: str) -> None:
        if field not in self.loaded_fields:
            raise ValueError(f"{field!r} was excluded when this document was loaded")

    def _flag(self, field: str) -> None:
        self._dirty.add(field)
        self.loaded_fields = self.loaded_fields | {field}

    def is_modified(self, field_name: str) -> bool:
        return wire_field(field_name) in self._dirty

    @property
    def dirty_fields(self) -> frozenset[str]:
        return frozenset(self._dirty)

    def mark_clean(self) -> None:
        self._dirty.clear()

    def mark_persisted(self, person_id: ObjectId) -> None:
        """Record the identity assigned by the store; refuses to reassign."""
        if self._id is not None and self._id != person_id:
            raise ValueError("identity is immutable once assigned")
        self._id = PersonId(person_id)
        self._dirty.clear()

    def mark_removed(self) -> None:
        self._removed = True

    @property
    def state(self) -> DocumentState:
        if self._removed:
            return DocumentState.REMOVED
        if self._id is None:
            return DocumentState.TRANSIENT
        if self._dirty:
            return DocumentState.DIRTY
        return DocumentState.PERSISTED

    # ─── Serialization ───────────────────────────────────────────

    def to_document(self, fields: Iterable[str] | None = None) -> dict:
        """Storage payload for the given wire fields (all schema fields by default)."""
        values = {
            NAME: self._name,
            AGE: self._age,
            FAVORITE_FOODS: list(self._favorite_foods),
        }
        wanted = PERSON_FIELDS if fields is None else tuple(fields)
        return {f: values[f] for f in wanted}

    def to_dict(self) -> dict:
        """Public representation: only the fields that were loaded, id as str."""
        data: dict = {"id": str(self._id) if self._id is not None else None}
        data.update(self.to_document(f for f in PERSON_FIELDS if f in self.loaded_fields))
        return data

    # ─── Identity ────────────────────────────────────────────────

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Person):
            return NotImplemented
        if self is other:
            return True
        if self._id is None or other._id is None:
            return False
        return self._id == other._id

    def __hash__(self) -> int:
        if self._id is None:
            raise TypeError("Person instances without an identity are unhashable")
        return hash(self._id)

    def __repr__(self) -> str:
        return (
            f"Person(id={self._id!r}, name={self._name!r}, age={self._age!r}, "
            f"favorite_foods={self._favorite_foods!r}, state={self.state.value})"
        )
