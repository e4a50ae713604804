import logging

from pgrepo.abstract_syntax_tree.models import Equals
from pgrepo.client.database_client import DatabaseClient
from pgrepo.execution.observability import (
    ObservabilitySettings,
    QueryObservation,
    compose_change_observers,
    make_json_change_logger,
)


def log_query(event: QueryObservation) -> None:
    print(
        f"op={event.operation} table={event.table} success={event.succeeded} "
        f"duration_ms={event.duration_ms:.2f} params={event.param_count} metadata={dict(event.metadata)}"
    )


changes_logger = logging.getLogger("pgrepo.changes")
changes_logger.setLevel(logging.INFO)
changes_logger.addHandler(logging.StreamHandler())

client = DatabaseClient.create_null(
    observability_settings=ObservabilitySettings(
        query_observer=log_query,
        metadata={"service": "pgrepo-sample"},
    ),
)
client.subscribe(
    compose_change_observers(
        make_json_change_logger(logger=changes_logger),
        lambda event: print("change:", event.kind, event.table),
    )
)

client.save("users", {"id": "1", "name": "Alice"})
client.update("users", update={"name": "Alicia"}, where=[Equals(column="id", value="1")])
client.delete("users", where=[Equals(column="id", value="1")])
