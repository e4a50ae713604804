from dataclasses import dataclass, field
from datetime import datetime, timezone
import json
import logging
from typing import Any, Callable, Mapping

# ==================================================
# Observability Types
# ==================================================

QueryObserveHook = Callable[["QueryObservation"], None]
ChangeObserver = Callable[["ChangeEvent"], None]

SAVED = "saved"
UPDATED = "updated"
DELETED = "deleted"
CHANGE_KINDS = (SAVED, UPDATED, DELETED)


@dataclass(frozen=True)
class ObservabilitySettings:
    """
    Database client observability settings.
    """

    query_observer: QueryObserveHook | None = None
    metadata: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class QueryObservation:
    """
    Structured query execution observation payload.
    """

    operation: str
    table: str
    sql: str
    param_count: int
    duration_ms: float
    succeeded: bool
    metadata: Mapping[str, Any] = field(default_factory=dict)
    error_type: str | None = None
    error_message: str | None = None


@dataclass(frozen=True)
class ChangeEvent:
    """
    Post-write notification. `payload` carries the inputs of the triggering call:
    the record for `saved`, {"where", "update"} for `updated`, {"where"} for `deleted`.
    """

    kind: str
    table: str
    payload: Mapping[str, Any]
    timestamp: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    metadata: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.kind not in CHANGE_KINDS:
            raise ValueError(f"Unknown change kind: {self.kind!r}")


def _jsonable(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {str(k): _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    if hasattr(value, "__dataclass_fields__"):
        fields = {name: _jsonable(getattr(value, name)) for name in value.__dataclass_fields__}
        return {type(value).__name__: fields}
    return value


def change_event_to_dict(event: ChangeEvent) -> dict[str, Any]:
    """
    Converts a ChangeEvent into a JSON-safe dictionary. Predicates are rendered by class name.
    """

    return {
        "timestamp": event.timestamp,
        "kind": event.kind,
        "table": event.table,
        "payload": _jsonable(event.payload),
        "metadata": dict(event.metadata),
    }


def make_json_change_logger(
    *,
    logger: logging.Logger,
    level: int = logging.INFO,
) -> ChangeObserver:
    """
    Builds a ChangeObserver that emits one JSON log line per ChangeEvent.
    """

    def _log_event(event: ChangeEvent) -> None:
        payload = change_event_to_dict(event)
        logger.log(level, json.dumps(payload, separators=(",", ":"), sort_keys=True, default=str))

    return _log_event


def compose_change_observers(*observers: ChangeObserver) -> ChangeObserver:
    """
    Composes multiple change observers into a single observer.
    """

    def _composed(event: ChangeEvent) -> None:
        for observer in observers:
            observer(event)

    return _composed


class InMemoryChangeRecorder:
    """
    Change observer that keeps every event, for assertions in tests.
    """

    def __init__(self) -> None:
        self.events: list[ChangeEvent] = []

    def __call__(self, event: ChangeEvent) -> None:
        self.events.append(event)

    def of_kind(self, kind: str) -> list[ChangeEvent]:
        return [event for event in self.events if event.kind == kind]

    def clear(self) -> None:
        self.events.clear()
