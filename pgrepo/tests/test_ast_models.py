import pytest

from pgrepo.abstract_syntax_tree.models import (
    ArrayContains,
    ColumnOrder,
    Equals,
    In,
    NotIn,
    SearchSpec,
    TextSearch,
    predicate_from_dict,
    search_spec_from_dict,
)
from pgrepo.errors import CompilationError, UnsupportedPredicateError


def test_predicates_compare_by_value():
    assert Equals(column="id", value="1") == Equals(column="id", value="1")
    assert Equals(column="id", value="1") != Equals(column="id", value="2")


def test_search_spec_defaults():
    spec = SearchSpec()
    assert spec.where == ()
    assert spec.order == ()
    assert spec.offset is None
    assert spec.limit is None


def test_column_order_default_direction():
    assert ColumnOrder(column="id").direction == "asc"
    assert ColumnOrder(column="id", direction="DESC").direction == "DESC"


@pytest.mark.parametrize(
    "data, expected",
    [
        ({"eq": {"column": "name", "value": "Jane Doe"}}, Equals(column="name", value="Jane Doe")),
        ({"eq": {"column": "email", "value": None}}, Equals(column="email", value=None)),
        ({"in": {"column": "id", "values": ["2"]}}, In(column="id", values=("2",))),
        ({"notIn": {"column": "id", "values": ["2"]}}, NotIn(column="id", values=("2",))),
        ({"arrayContains": {"column": "roles", "value": "admin"}}, ArrayContains(column="roles", value="admin")),
        (
            {"textSearch": {"columns": ["name", "email"], "value": "doe"}},
            TextSearch(columns=("name", "email"), value="doe"),
        ),
    ],
)
def test_predicate_from_dict(data, expected):
    assert predicate_from_dict(data) == expected


@pytest.mark.parametrize(
    "data",
    [
        {},
        {"like": {"column": "name", "value": "x"}},
        {"eq": {"column": "name"}},
        {"eq": "name"},
        {"eq": {"column": "a", "value": 1}, "in": {"column": "b", "values": []}},
    ],
)
def test_predicate_from_dict_rejects_unknown_shapes(data):
    with pytest.raises(UnsupportedPredicateError) as excinfo:
        predicate_from_dict(data)
    assert isinstance(excinfo.value, CompilationError)
    assert excinfo.value.predicate == data


def test_search_spec_from_dict():
    spec = search_spec_from_dict(
        {
            "where": [{"eq": {"column": "name", "value": "Jane Doe"}}],
            "order": [{"column": "id", "direction": "desc"}, {"column": "name"}],
            "offset": 10,
            "limit": 5,
        }
    )
    assert spec == SearchSpec(
        where=(Equals(column="name", value="Jane Doe"),),
        order=(ColumnOrder(column="id", direction="desc"), ColumnOrder(column="name")),
        offset=10,
        limit=5,
    )


def test_search_spec_from_empty_dict():
    assert search_spec_from_dict({}) == SearchSpec()
