from pgrepo.abstract_syntax_tree.models import (
    ArrayContains,
    ColumnOrder,
    Equals,
    In,
    NotIn,
    Predicate,
    PredicateNode,
    SearchSpec,
    TextSearch,
    predicate_from_dict,
    search_spec_from_dict,
)

__all__ = [
    "ArrayContains",
    "ColumnOrder",
    "Equals",
    "In",
    "NotIn",
    "Predicate",
    "PredicateNode",
    "SearchSpec",
    "TextSearch",
    "predicate_from_dict",
    "search_spec_from_dict",
]
