from pgrepo.errors import CompilationError, UnsupportedPredicateError
from pgrepo.abstract_syntax_tree.models import (
    ArrayContains,
    ColumnOrder,
    Equals,
    In,
    NotIn,
    SearchSpec,
    TextSearch,
)
from pgrepo.compiler import CompiledQuery, ParameterBinder, PostgresCompiler, PredicateCompiler
from pgrepo.config import DatabaseSettings
from pgrepo.execution import (
    ChangeEvent,
    ConnectionSettings,
    InMemoryChangeRecorder,
    ObservabilitySettings,
    PostgresConnectionProvider,
    QueryObservation,
    QueryResult,
    StubConnectionProvider,
    StubbedQuery,
)
from pgrepo.client import DatabaseClient
from pgrepo.repositories import Page, User, UserRepository
from pgrepo.services import UserService

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "CompilationError",
    "UnsupportedPredicateError",
    "ArrayContains",
    "ColumnOrder",
    "Equals",
    "In",
    "NotIn",
    "SearchSpec",
    "TextSearch",
    "CompiledQuery",
    "ParameterBinder",
    "PostgresCompiler",
    "PredicateCompiler",
    "DatabaseSettings",
    "ChangeEvent",
    "ConnectionSettings",
    "InMemoryChangeRecorder",
    "ObservabilitySettings",
    "PostgresConnectionProvider",
    "QueryObservation",
    "QueryResult",
    "StubConnectionProvider",
    "StubbedQuery",
    "DatabaseClient",
    "Page",
    "User",
    "UserRepository",
    "UserService",
]
