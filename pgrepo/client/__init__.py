from pgrepo.client.database_client import DatabaseClient

__all__ = ["DatabaseClient"]
