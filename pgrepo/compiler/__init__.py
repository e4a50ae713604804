from pgrepo.compiler.compiled_query import CompiledQuery
from pgrepo.compiler.parameters import ParameterBinder
from pgrepo.compiler.predicate_compiler import PredicateCompiler
from pgrepo.compiler.postgres.postgres_compiler import (
    PostgresCompiler,
    count_query,
    delete_query,
    find_by_id_query,
    find_one_query,
    save_query,
    search_query,
    update_query,
)

__all__ = [
    "CompiledQuery",
    "ParameterBinder",
    "PredicateCompiler",
    "PostgresCompiler",
    "count_query",
    "delete_query",
    "find_by_id_query",
    "find_one_query",
    "save_query",
    "search_query",
    "update_query",
]
