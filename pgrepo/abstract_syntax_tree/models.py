from abc import ABC
from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence, Union

from pgrepo.errors import UnsupportedPredicateError

# ==================================================
# Base classes
# ==================================================

@dataclass(frozen=True)
class ASTNode(ABC):
    """
    A generic AST node. Predicates and statements both inherit from this base class.
    """
    pass

@dataclass(frozen=True)
class PredicateNode(ASTNode):
    """
    A base class for a single filter condition compiled to a SQL boolean fragment.
    """
    pass

# ==================================================
# Predicate nodes
# ==================================================

@dataclass(frozen=True)
class Equals(PredicateNode):
    """
    Matches rows where `column` equals `value`. A `None` value compiles to IS NULL.
    """
    column: str
    value: Any

@dataclass(frozen=True)
class In(PredicateNode):
    """
    Matches rows where `column` is one of `values`.
    """
    column: str
    values: Sequence[Any] = ()

@dataclass(frozen=True)
class NotIn(PredicateNode):
    """
    Matches rows where `column` is none of `values`.
    """
    column: str
    values: Sequence[Any] = ()

@dataclass(frozen=True)
class ArrayContains(PredicateNode):
    """
    Matches rows whose array `column` contains `value`.
    """
    column: str
    value: Any

@dataclass(frozen=True)
class TextSearch(PredicateNode):
    """
    Case-insensitive substring match of `value` against any of `columns`.
    """
    columns: Sequence[str]
    value: str

Predicate = Union[Equals, In, NotIn, ArrayContains, TextSearch]

# ==================================================
# Search specification
# ==================================================

@dataclass(frozen=True)
class ColumnOrder(ASTNode):
    """
    A single item of an ORDER BY clause.
    """
    column: str
    direction: str = "asc"

    def __post_init__(self) -> None:
        if self.direction.lower() not in ("asc", "desc"):
            raise ValueError(f"Order direction must be 'asc' or 'desc', got {self.direction!r}.")

@dataclass(frozen=True)
class SearchSpec:
    """
    Predicates (AND-ed), ordering and pagination describing one query.
    """
    where: Sequence[PredicateNode] = ()
    order: Sequence[ColumnOrder] = ()
    offset: int | None = None
    limit: int | None = None

# ==================================================
# Statement nodes
# ==================================================

@dataclass(frozen=True)
class StatementNode(ASTNode):
    """
    A base class for all statement nodes in the AST.
    """
    table: str

@dataclass(frozen=True)
class SelectStatementNode(StatementNode):
    """
    SELECT * over one table. `single_row` forces a literal LIMIT 1 and ignores pagination.
    """
    where: Sequence[PredicateNode] = ()
    order: Sequence[ColumnOrder] = ()
    offset: int | None = None
    limit: int | None = None
    single_row: bool = False

@dataclass(frozen=True)
class CountStatementNode(StatementNode):
    where: Sequence[PredicateNode] = ()

@dataclass(frozen=True)
class UpsertStatementNode(StatementNode):
    """
    INSERT ... ON CONFLICT (id) DO UPDATE covering every column of `record`.
    """
    record: Mapping[str, Any] = field(default_factory=dict)
    conflict_column: str = "id"

@dataclass(frozen=True)
class UpdateStatementNode(StatementNode):
    update: Mapping[str, Any] = field(default_factory=dict)
    where: Sequence[PredicateNode] = ()

@dataclass(frozen=True)
class DeleteStatementNode(StatementNode):
    where: Sequence[PredicateNode] = ()

# ==================================================
# Dict form
# ==================================================

def predicate_from_dict(data: Mapping[str, Any]) -> PredicateNode:
    """
    Builds a predicate from its tagged dict form, e.g. {"eq": {"column": "id", "value": "1"}}.
    """
    if not isinstance(data, Mapping) or len(data) != 1:
        raise UnsupportedPredicateError(data)

    (tag, body), = data.items()
    if not isinstance(body, Mapping):
        raise UnsupportedPredicateError(data)

    try:
        if tag == "eq":
            return Equals(column=body["column"], value=body["value"])
        if tag == "in":
            return In(column=body["column"], values=tuple(body["values"]))
        if tag == "notIn":
            return NotIn(column=body["column"], values=tuple(body["values"]))
        if tag == "arrayContains":
            return ArrayContains(column=body["column"], value=body["value"])
        if tag == "textSearch":
            return TextSearch(columns=tuple(body["columns"]), value=body["value"])
    except KeyError as exc:
        raise UnsupportedPredicateError(data) from exc

    raise UnsupportedPredicateError(data)

def search_spec_from_dict(data: Mapping[str, Any]) -> SearchSpec:
    """
    Builds a SearchSpec from {"where": [...], "order": [...], "offset": n, "limit": n}.
    """
    return SearchSpec(
        where=tuple(predicate_from_dict(p) for p in data.get("where") or ()),
        order=tuple(
            ColumnOrder(column=o["column"], direction=o.get("direction", "asc"))
            for o in data.get("order") or ()
        ),
        offset=data.get("offset"),
        limit=data.get("limit"),
    )
