"""Database connection factory: selects implementation from config. Only place that imports concrete connections."""
from __future__ import annotations

from common.app.config.settings import Settings
from common.app.infrastructure.persistence.mongo.client import ClientFactory
from common.app.infrastructure.persistence.mongo.mongo_connection import MongoConnection
from common.app.ports.database_connection import DatabaseConnection


def create_database_connection(
    settings: Settings,
    *,
    client_factory: ClientFactory | None = None,
) -> DatabaseConnection:
    backend = settings.database_backend.strip().lower()

    if backend in ("mongo", "mongodb"):
        return MongoConnection(settings, client_factory=client_factory)

    raise ValueError(f"Unsupported database backend: {backend}")
