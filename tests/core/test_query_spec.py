"""Query Spec — tests for the immutable, chainable Person query.

Tests cover:
    - Non-destructive chaining (derived queries leave the original untouched)
    - Stage order independence of the compiled find() arguments
    - Identity can never be excluded
    - Unknown fields and bad limits fail at build time
"""

import pytest
from bson import ObjectId

from personstore.core.domain_types import SortDirection
from personstore.core.errors import InvalidQueryError, StorageError
from personstore.core.query_spec import PersonQuery, filter_query


def test_empty_query_compiles_to_unbounded_find():
    args = PersonQuery().to_find_args()
    assert args.filter == {}
    assert args.projection is None
    assert args.sort is None
    assert args.limit == 0


def test_chaining_does_not_modify_receiver():
    base = PersonQuery().where("favoriteFoods", "burrito")
    limited = base.limit(2)
    assert base.max_results is None
    assert limited.max_results == 2
    assert base.filter == limited.filter == {"favoriteFoods": "burrito"}


def test_stage_call_order_does_not_change_compiled_query():
    a = (
        PersonQuery().where(favorite_foods="burrito")
        .sort_by("name").limit(2).exclude("age")
    )
    b = (
        PersonQuery().exclude("age").limit(2)
        .sort_by("name").where("favoriteFoods", "burrito")
    )
    assert a.to_find_args() == b.to_find_args()
    assert a.to_find_args().projection == {"age": 0}
    assert a.to_find_args().sort == [("name", 1)]


def test_where_predicates_are_anded():
    q = PersonQuery().where(name="Ann").where("age", 25)
    assert q.filter == {"name": "Ann", "age": 25}


def test_where_on_identity_parses_object_id():
    oid = ObjectId()
    assert PersonQuery().where(id=str(oid)).filter == {"_id": oid}


def test_where_on_malformed_identity_fails():
    with pytest.raises(StorageError):
        PersonQuery().where("_id", "nope")


def test_where_rejects_operator_documents():
    with pytest.raises(InvalidQueryError):
        PersonQuery().where("age", {"$gt": 18})


def test_where_requires_a_field():
    with pytest.raises(InvalidQueryError):
        PersonQuery().where()


def test_sort_descending_and_resort_replaces_direction():
    q = PersonQuery().sort_by("age", SortDirection.DESCENDING).sort_by("name")
    assert q.to_find_args().sort == [("age", -1), ("name", 1)]
    q = q.sort_by("age", SortDirection.ASCENDING)
    assert q.to_find_args().sort == [("name", 1), ("age", 1)]


def test_invalid_sort_direction():
    with pytest.raises(InvalidQueryError):
        PersonQuery().sort_by("name", 0)


@pytest.mark.parametrize("bad", [0, -1, 2.5, True])
def test_limit_must_be_positive_integer(bad):
    with pytest.raises(InvalidQueryError):
        PersonQuery().limit(bad)


def test_limit_none_clears_cap():
    assert PersonQuery().limit(3).limit(None).to_find_args().limit == 0


@pytest.mark.parametrize("identity", ["id", "_id"])
def test_identity_cannot_be_excluded(identity):
    with pytest.raises(InvalidQueryError):
        PersonQuery().exclude(identity)


def test_unknown_field_rejected():
    with pytest.raises(InvalidQueryError):
        PersonQuery().where(height=180)
    with pytest.raises(InvalidQueryError):
        PersonQuery().sort_by("height")


def test_filter_query_wraps_plain_dict():
    assert filter_query({"name": "Mary"}).filter == {"name": "Mary"}
    assert filter_query(None).filter == {}
    q = PersonQuery().limit(1)
    assert filter_query(q) is q
