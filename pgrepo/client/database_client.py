import logging
import time
from typing import Any, Iterable, Mapping, Sequence

from pgrepo.abstract_syntax_tree.models import (
    PredicateNode,
    SearchSpec,
    predicate_from_dict,
    search_spec_from_dict,
)
from pgrepo.compiler.compiled_query import CompiledQuery
from pgrepo.compiler.postgres.postgres_compiler import (
    count_query,
    delete_query,
    find_by_id_query,
    find_one_query,
    save_query,
    search_query,
    update_query,
)
from pgrepo.config import DatabaseSettings
from pgrepo.execution.connection import ConnectionProvider, QueryResult
from pgrepo.execution.observability import (
    DELETED,
    SAVED,
    UPDATED,
    ChangeEvent,
    ChangeObserver,
    ObservabilitySettings,
    QueryObservation,
)
from pgrepo.execution.postgres import PostgresConnectionProvider
from pgrepo.execution.stub import StubbedQuery, StubConnectionProvider

logger = logging.getLogger(__name__)

WhereInput = Sequence[PredicateNode | Mapping[str, Any]] | None
SpecInput = SearchSpec | Mapping[str, Any] | None

# ==================================================
# Database Client
# ==================================================


def _predicates(where: WhereInput) -> tuple[PredicateNode, ...]:
    return tuple(
        predicate_from_dict(p) if isinstance(p, Mapping) else p
        for p in where or ()
    )


def _search_spec(spec: SpecInput) -> SearchSpec:
    if spec is None:
        return SearchSpec()
    if isinstance(spec, Mapping):
        return search_spec_from_dict(spec)
    return SearchSpec(
        where=_predicates(spec.where),
        order=tuple(spec.order or ()),
        offset=spec.offset,
        limit=spec.limit,
    )


class DatabaseClient:
    """
    Generic table access: compiles each call to one parameterized statement and runs it
    through a Connection Provider. Successful writes are announced to subscribed observers.
    """

    def __init__(
        self,
        provider: ConnectionProvider,
        observability_settings: ObservabilitySettings | None = None,
        change_observers: Iterable[ChangeObserver] = (),
    ) -> None:
        self.provider = provider
        self.observability_settings = observability_settings or ObservabilitySettings()
        self._observers: list[ChangeObserver] = list(change_observers)

    # --------------------------------------------------
    # Factories
    # --------------------------------------------------

    @classmethod
    def create(
        cls,
        provider: ConnectionProvider | None = None,
        settings: DatabaseSettings | None = None,
        observability_settings: ObservabilitySettings | None = None,
    ) -> "DatabaseClient":
        """
        Builds a client over a live provider, resolving connection settings from the environment if needed.
        """
        if provider is None:
            settings = settings or DatabaseSettings.from_env()
            if not settings.configured:
                raise ValueError("No database configured. Set DATABASE_URL or DB_HOST/DB_NAME.")
            provider = PostgresConnectionProvider(
                connection_info=settings.dsn,
                connect_timeout_seconds=settings.connect_timeout_seconds,
            )
        return cls(provider, observability_settings=observability_settings)

    @classmethod
    def create_null(
        cls,
        queries: Iterable[StubbedQuery | Mapping[str, Any]] = (),
        find_by_id: Mapping[str, Mapping[Any, Mapping[str, Any] | None]] | None = None,
        find_one: Mapping[str, Sequence[Mapping[str, Any]]] | None = None,
        search: Mapping[str, Sequence[Mapping[str, Any]]] | None = None,
        count: Mapping[str, Sequence[Mapping[str, Any]]] | None = None,
        observability_settings: ObservabilitySettings | None = None,
    ) -> "DatabaseClient":
        """
        Builds a client over a StubConnectionProvider.

        Args:
            queries: Raw registry entries, matched before any of the shortcuts below.
            find_by_id: {table: {id: record or None}}.
            find_one: {table: [{"where": [...], "result": record or None}]}.
            search: {table: [{"spec": SearchSpec or dict, "result": [records]}]}.
            count: {table: [{"where": [...], "result": int}]}.
        """
        stubs: list[StubbedQuery | Mapping[str, Any]] = list(queries)

        for table, records in (find_by_id or {}).items():
            for id, record in records.items():
                stubs.append(_stub(find_by_id_query(table, id), [record] if record is not None else []))

        for table, entries in (find_one or {}).items():
            for entry in entries:
                result = entry.get("result")
                compiled = find_one_query(table, _predicates(entry.get("where")))
                stubs.append(_stub(compiled, [result] if result is not None else []))

        for table, entries in (search or {}).items():
            for entry in entries:
                compiled = search_query(table, _search_spec(entry.get("spec")))
                stubs.append(_stub(compiled, entry.get("result") or []))

        for table, entries in (count or {}).items():
            for entry in entries:
                compiled = count_query(table, _predicates(entry.get("where")))
                stubs.append(_stub(compiled, [{"cnt": entry["result"]}]))

        return cls(StubConnectionProvider(stubs), observability_settings=observability_settings)

    # --------------------------------------------------
    # Change Observers
    # --------------------------------------------------

    def subscribe(self, observer: ChangeObserver) -> ChangeObserver:
        self._observers.append(observer)
        return observer

    def unsubscribe(self, observer: ChangeObserver) -> None:
        self._observers.remove(observer)

    def _notify(self, kind: str, table: str, payload: Mapping[str, Any]) -> None:
        if not self._observers:
            return
        event = ChangeEvent(
            kind=kind,
            table=table,
            payload=payload,
            metadata=dict(self.observability_settings.metadata),
        )
        for observer in list(self._observers):
            observer(event)

    # --------------------------------------------------
    # Reads
    # --------------------------------------------------

    def find_by_id(self, table: str, id: Any) -> dict[str, Any] | None:
        """
        Returns the row whose `id` equals `id`, or None.
        """
        return self._first(self._run("find_by_id", table, find_by_id_query(table, id)))

    def find_one(self, table: str, where: WhereInput = None) -> dict[str, Any] | None:
        """
        Returns the first row matching every predicate, or None.
        """
        compiled = find_one_query(table, _predicates(where))
        return self._first(self._run("find_one", table, compiled))

    def search(self, table: str, spec: SpecInput = None) -> list[dict[str, Any]]:
        compiled = search_query(table, _search_spec(spec))
        result = self._run("search", table, compiled)
        return [dict(row) for row in result.rows]

    def count(self, table: str, where: WhereInput = None) -> int:
        compiled = count_query(table, _predicates(where))
        row = self._first(self._run("count", table, compiled))
        if row is None:
            return 0
        return int(row.get("cnt") or 0)

    # --------------------------------------------------
    # Writes
    # --------------------------------------------------

    def save(self, table: str, record: Mapping[str, Any]) -> None:
        """
        Upserts the full record keyed on `id`. Every column is overwritten on conflict.
        """
        self._run("save", table, save_query(table, record))
        self._notify(SAVED, table, record)

    def update(
        self,
        table: str,
        *,
        update: Mapping[str, Any],
        where: WhereInput = None,
    ) -> None:
        """
        Sets the given columns on every row matching `where` (all rows when `where` is empty).
        """
        self._run("update", table, update_query(table, update, _predicates(where)))
        self._notify(UPDATED, table, {"where": where, "update": update})

    def delete(self, table: str, *, where: WhereInput = None) -> None:
        self._run("delete", table, delete_query(table, _predicates(where)))
        self._notify(DELETED, table, {"where": where})

    # --------------------------------------------------
    # Execution
    # --------------------------------------------------

    @staticmethod
    def _first(result: QueryResult) -> dict[str, Any] | None:
        if not result.rows:
            return None
        return dict(result.rows[0])

    def _run(self, operation: str, table: str, compiled: CompiledQuery) -> QueryResult:
        logger.debug("SQL query: %s params=%r", compiled.sql, list(compiled.params))
        observer = self.observability_settings.query_observer
        if observer is None:
            return self.provider.execute(compiled.sql, list(compiled.params))

        started = time.perf_counter()
        try:
            result = self.provider.execute(compiled.sql, list(compiled.params))
        except Exception as exc:
            try:
                observer(self._observation(operation, table, compiled, started, exc))
            except Exception:
                logger.warning("Query observer failed for %s on %s", operation, table, exc_info=True)
            raise
        observer(self._observation(operation, table, compiled, started, None))
        return result

    def _observation(
        self,
        operation: str,
        table: str,
        compiled: CompiledQuery,
        started: float,
        error: Exception | None,
    ) -> QueryObservation:
        return QueryObservation(
            operation=operation,
            table=table,
            sql=compiled.sql,
            param_count=len(compiled.params),
            duration_ms=(time.perf_counter() - started) * 1000,
            succeeded=error is None,
            metadata=dict(self.observability_settings.metadata),
            error_type=type(error).__name__ if error is not None else None,
            error_message=str(error) if error is not None else None,
        )


def _stub(compiled: CompiledQuery, rows: Sequence[Mapping[str, Any]]) -> StubbedQuery:
    return StubbedQuery(query=compiled.sql, params=compiled.params, result=QueryResult(rows=tuple(rows)))
