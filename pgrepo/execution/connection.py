from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Protocol, Sequence

# ==================================================
# Connection Provider Types
# ==================================================

Row = Mapping[str, Any]
ConnectionAcquireHook = Callable[[], Any]
ConnectionReleaseHook = Callable[[Any], None]


@dataclass(frozen=True)
class QueryResult:
    """
    Rows returned by a Connection Provider, keyed by column name as the store reports them.
    """

    rows: Sequence[Row] = field(default_factory=tuple)


class ConnectionProvider(Protocol):
    """
    Anything that can run raw SQL with positional `$n` parameters.
    """

    def execute(self, sql: str, params: Sequence[Any]) -> QueryResult:
        ...


@dataclass(frozen=True)
class ConnectionSettings:
    """
    Connection settings for the live PostgreSQL provider.
    The acquire/release hooks let an external pool hand out connections.
    """

    connect_timeout_seconds: float | None = None
    acquire_connection: ConnectionAcquireHook | None = None
    release_connection: ConnectionReleaseHook | None = None
