from dataclasses import dataclass, field
import logging
import re
from typing import Any, Iterable, Mapping, Sequence

from pgrepo.execution.connection import QueryResult

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")

# ==================================================
# Stub Connection Provider
# ==================================================


def normalize_query(query: str) -> str:
    """
    Collapses every whitespace run to a single space and trims the ends.
    """
    return _WHITESPACE.sub(" ", query).strip()


def same_value(expected: Any, actual: Any) -> bool:
    """
    Structural equality for bound parameters.

    Lists and tuples compare element-wise, mappings compare key set and values.
    Booleans only equal booleans, ints and floats compare numerically, and any other
    pair of values must share a type before `==` is consulted.
    """
    if isinstance(expected, (list, tuple)) and isinstance(actual, (list, tuple)):
        return len(expected) == len(actual) and all(
            same_value(e, a) for e, a in zip(expected, actual)
        )
    if isinstance(expected, Mapping) and isinstance(actual, Mapping):
        return expected.keys() == actual.keys() and all(
            same_value(expected[key], actual[key]) for key in expected
        )
    if isinstance(expected, bool) or isinstance(actual, bool):
        return type(expected) is type(actual) and expected == actual
    if isinstance(expected, (int, float)) and isinstance(actual, (int, float)):
        return expected == actual
    return type(expected) is type(actual) and expected == actual

@dataclass(frozen=True)
class StubbedQuery:
    """
    One canned response, matched on normalized SQL text and parameters.
    """

    query: str
    params: tuple[Any, ...] = ()
    result: QueryResult = field(default_factory=QueryResult)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "StubbedQuery":
        """
        Accepts the registry form {"query": ..., "params": [...], "result": {"rows": [...]}}.
        """
        result = data.get("result") or {}
        rows = result.rows if isinstance(result, QueryResult) else result.get("rows", ())
        return cls(
            query=data["query"],
            params=tuple(data.get("params") or ()),
            result=QueryResult(rows=tuple(rows)),
        )


@dataclass(frozen=True)
class StubCall:
    sql: str
    params: tuple[Any, ...]
    matched: bool


class StubConnectionProvider:
    """
    Null Connection Provider answering from a fixed registry of stubbed queries.
    The first entry (in registration order) with equal normalized text and params wins.
    Unmatched queries log a warning and return no rows.
    """

    def __init__(self, queries: Iterable[StubbedQuery | Mapping[str, Any]] = ()) -> None:
        self._queries: list[tuple[str, tuple[Any, ...], QueryResult]] = []
        for entry in queries:
            stub = entry if isinstance(entry, StubbedQuery) else StubbedQuery.from_dict(entry)
            self._queries.append((normalize_query(stub.query), tuple(stub.params), stub.result))
        self.calls: list[StubCall] = []

    def execute(self, sql: str, params: Sequence[Any] | None = None) -> QueryResult:
        normalized = normalize_query(sql)
        actual = tuple(params or ())

        for query, expected, result in self._queries:
            if query == normalized and same_value(expected, actual):
                self.calls.append(StubCall(sql=normalized, params=actual, matched=True))
                return result

        self.calls.append(StubCall(sql=normalized, params=actual, matched=False))
        logger.warning("No stubbed query found for: query=%r params=%r", normalized, list(params or ()))
        return QueryResult(rows=())

    def __len__(self) -> int:
        return len(self._queries)
