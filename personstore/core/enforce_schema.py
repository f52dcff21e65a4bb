"""Schema Enforcement — validates and normalizes Person payloads before persistence.

Invariants:
    - All functions are PURE: no IO, no async, no side effects
    - Raise DocumentValidationError naming the FIRST failing field, return normalized dict on success
    - Returned dicts use wire field names (favoriteFoods), never Python names
    - A full document always carries name and favoriteFoods; age only when supplied

Design Decisions:
    - Pydantic does the type work (schemas/person.py); this module only translates
      its error list into the single-field error the repository raises
"""

from collections.abc import Mapping

from pydantic import BaseModel, ValidationError

from personstore.core.domain_types import AGE, FAVORITE_FOODS, wire_field
from personstore.core.errors import DocumentValidationError
from personstore.schemas.person import PersonCreate, PersonPatch


def validate_person(payload: Mapping) -> dict:
    """Validate a full Person payload; return the normalized storage document."""
    model = _parse(PersonCreate, payload)
    document = model.model_dump(by_alias=True)
    if document.get(AGE) is None:
        document.pop(AGE, None)
    return document


def validate_patch(patch: Mapping) -> dict:
    """Validate only the supplied fields of a partial update.

    A supplied age of None means "remove age"; it is kept as None in the result.
    """
    if not patch:
        raise DocumentValidationError("patch must supply at least one field", "patch")
    model = _parse(PersonPatch, patch)
    supplied = model.model_dump(by_alias=True, include=model.model_fields_set)
    if FAVORITE_FOODS in supplied and supplied[FAVORITE_FOODS] is None:
        supplied[FAVORITE_FOODS] = []
    return supplied


def _parse(schema: type[BaseModel], payload: Mapping) -> BaseModel:
    if not isinstance(payload, Mapping):
        raise DocumentValidationError(
            f"expected a mapping, got {type(payload).__name__}", "document",
        )
    try:
        return schema.model_validate(dict(payload))
    except ValidationError as e:
        first = e.errors()[0]
        raise DocumentValidationError(
            first["msg"], _field_of(first["loc"]),
        ) from e


def _field_of(loc: tuple) -> str:
    if not loc:
        return "document"
    head = str(loc[0])
    return wire_field(head) or head
