import logging
from typing import Any, Sequence

from pgrepo.execution.connection import (
    ConnectionAcquireHook,
    ConnectionReleaseHook,
    ConnectionSettings,
    QueryResult,
)

logger = logging.getLogger(__name__)

# ==================================================
# PostgreSQL Connection Provider
# ==================================================

class PostgresConnectionProvider:
    """
    A Connection Provider for PostgreSQL using the 'psycopg' library.
    Statements use server-side `$n` placeholders, so queries run through psycopg's RawCursor
    and rows come back as dicts keyed by column name.
    """

    def __init__(
        self,
        connection_info: str | dict[str, Any] | None = None,
        connection: Any | None = None,
        connect_timeout_seconds: float | None = None,
        acquire_connection: ConnectionAcquireHook | None = None,
        release_connection: ConnectionReleaseHook | None = None,
    ) -> None:
        """
        Initializes the provider with connection information, an existing connection, or pool hooks.

        Args:
            connection_info: A connection string or a dictionary of parameters.
            connection: An existing psycopg connection object. Transaction control stays with the caller.
            connect_timeout_seconds: Timeout passed to psycopg.connect for owned connections.
            acquire_connection: Hook returning a connection, e.g. from an external pool.
            release_connection: Hook receiving a connection obtained through acquire_connection.
        """
        if connection_info is None and connection is None and acquire_connection is None:
            raise ValueError("Provide connection_info, connection, or acquire_connection.")

        self.connection_info = connection_info
        self.connection = connection
        self.connection_settings = ConnectionSettings(
            connect_timeout_seconds=connect_timeout_seconds,
            acquire_connection=acquire_connection,
            release_connection=release_connection,
        )
        self._psycopg: Any | None = None
        self._dict_row: Any | None = None
        self._closed = False

    def _get_psycopg(self) -> Any:
        """
        Lazily imports psycopg and returns the module.
        """
        if self._psycopg is None:
            try:
                import psycopg
                from psycopg.rows import dict_row
            except ImportError:
                raise ImportError(
                    "The 'psycopg' library is required for PostgresConnectionProvider. "
                    "Install it with 'pip install psycopg[binary]'."
                )
            self._psycopg = psycopg
            self._dict_row = dict_row
        return self._psycopg

    def _ensure_open(self) -> None:
        if self._closed:
            raise RuntimeError("Connection provider is closed.")

    def _connect(self) -> Any:
        psycopg = self._get_psycopg()
        kwargs: dict[str, Any] = {}
        timeout = self.connection_settings.connect_timeout_seconds
        if timeout is not None:
            kwargs["connect_timeout"] = max(1, int(timeout))
        if isinstance(self.connection_info, dict):
            return psycopg.connect(**self.connection_info, **kwargs)
        return psycopg.connect(self.connection_info, **kwargs)

    def _get_connection_for_query(self) -> tuple[Any, str | None]:
        self._ensure_open()
        if self.connection is not None:
            return self.connection, None
        if self.connection_settings.acquire_connection is not None:
            return self.connection_settings.acquire_connection(), "release"
        return self._connect(), "close"

    def _release_connection(self, conn: Any, mode: str | None) -> None:
        if mode is None:
            return
        if mode == "release" and self.connection_settings.release_connection is not None:
            self.connection_settings.release_connection(conn)
            return
        conn.close()

    def execute(self, sql: str, params: Sequence[Any] | None = None) -> QueryResult:
        """
        Runs one statement and returns its rows (empty for statements without a result set).
        Driver errors are logged and re-raised unchanged.
        """
        psycopg = self._get_psycopg()
        conn, release_mode = self._get_connection_for_query()
        try:
            with psycopg.RawCursor(conn, row_factory=self._dict_row) as cur:
                cur.execute(sql, list(params or ()))
                rows = cur.fetchall() if cur.description else []
            if release_mode is not None and getattr(conn, "autocommit", False) is False:
                conn.commit()
            return QueryResult(rows=tuple(rows))
        except Exception:
            logger.error("Query failed: %s", sql, exc_info=True)
            if release_mode is not None and getattr(conn, "autocommit", False) is False:
                try:
                    conn.rollback()
                except Exception:
                    logger.warning("Rollback failed after query error", exc_info=True)
            raise
        finally:
            self._release_connection(conn, release_mode)

    # ==================================================
    # Lifecycle Controls
    # ==================================================

    def close(self) -> None:
        """
        Marks the provider closed. A caller-supplied connection is left open.
        """
        self._closed = True

    def __enter__(self) -> "PostgresConnectionProvider":
        return self

    def __exit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        _ = exc_type
        _ = exc
        _ = tb
        self.close()
