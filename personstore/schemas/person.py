"""Person Schemas — Pydantic models that declare the shape of a stored Person.

Invariants:
    - PersonCreate.name: text, non-empty, required
    - age: integer when present (bool and float rejected, no numeric-string coercion)
    - favoriteFoods: list of text, absent or null normalized to []
    - PersonPatch validates only the fields the caller supplied
    - Unknown fields rejected on both create and patch

Design Decisions:
    - Strict scalar types over lax coercion: a stored age of "30" would break equality filters
    - AliasChoices accepts both favorite_foods and favoriteFoods; storage always uses favoriteFoods
"""

from pydantic import (
    AliasChoices, BaseModel, ConfigDict, Field, StrictInt, StrictStr,
    field_validator,
)


class PersonCreate(BaseModel):
    """Full Person document: used before insert."""
    model_config = ConfigDict(extra="forbid")

    name: StrictStr = Field(min_length=1)
    age: StrictInt | None = None
    favorite_foods: list[StrictStr] = Field(
        default_factory=list,
        validation_alias=AliasChoices("favoriteFoods", "favorite_foods"),
        serialization_alias="favoriteFoods",
    )

    @field_validator("favorite_foods", mode="before")
    @classmethod
    def null_foods_to_empty(cls, v):
        return [] if v is None else v


class PersonPatch(BaseModel):
    """Partial Person update: every field optional, only supplied ones applied."""
    model_config = ConfigDict(extra="forbid")

    name: StrictStr | None = Field(None, min_length=1)
    age: StrictInt | None = None
    favorite_foods: list[StrictStr] | None = Field(
        None,
        validation_alias=AliasChoices("favoriteFoods", "favorite_foods"),
        serialization_alias="favoriteFoods",
    )

    @field_validator("name", mode="before")
    @classmethod
    def name_not_null(cls, v):
        if v is None:
            raise ValueError("name cannot be null")
        return v

    @field_validator("favorite_foods", mode="before")
    @classmethod
    def null_foods_to_empty(cls, v):
        return [] if v is None else v


class FavoriteFoodAdd(BaseModel):
    """Body for appending one food to a person's favorites."""
    food: str = Field(min_length=1, max_length=200)

    @field_validator("food")
    @classmethod
    def strip_food(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("food cannot be empty or whitespace")
        return v
