from pgrepo.execution.connection import ConnectionProvider, ConnectionSettings, QueryResult
from pgrepo.execution.postgres import PostgresConnectionProvider
from pgrepo.execution.stub import StubCall, StubConnectionProvider, StubbedQuery, normalize_query
from pgrepo.execution.observability import (
    ChangeEvent,
    ChangeObserver,
    InMemoryChangeRecorder,
    ObservabilitySettings,
    QueryObservation,
    change_event_to_dict,
    compose_change_observers,
    make_json_change_logger,
)

__all__ = [
    "ConnectionProvider",
    "ConnectionSettings",
    "QueryResult",
    "PostgresConnectionProvider",
    "StubCall",
    "StubConnectionProvider",
    "StubbedQuery",
    "normalize_query",
    "ChangeEvent",
    "ChangeObserver",
    "InMemoryChangeRecorder",
    "ObservabilitySettings",
    "QueryObservation",
    "change_event_to_dict",
    "compose_change_observers",
    "make_json_change_logger",
]
