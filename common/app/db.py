"""
Process-wide database connection.

The connection object is created once per process behind a lock and handed to
every caller. ``ensure_connected`` brings it up (or joins/reuses an existing
attempt) and lets ``ConnectionFailure`` propagate; ``connect_db`` is the
application-boundary variant that terminates the process on failure.
"""
from __future__ import annotations

import sys
import threading

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from common.app.config.settings import Settings
from common.app.constants import CONNECTION_FAILURE_EXIT_CODE
from common.app.core.errors import ConnectionFailure
from common.app.core.log import log_event
from common.app.infrastructure.persistence.factory import create_database_connection
from common.app.infrastructure.persistence.mongo.mongo_connection import MongoConnection
from common.app.ports.database_connection import DatabaseConnection

_connection: DatabaseConnection | None = None
_connection_lock = threading.Lock()


def get_connection(settings: Settings | None = None) -> DatabaseConnection:
    """Return the process-wide connection, creating it on first use.

    ``settings`` only matters for the call that creates the connection.
    """
    global _connection
    if _connection is None:
        with _connection_lock:
            if _connection is None:
                _connection = create_database_connection(settings or Settings())
    return _connection


async def ensure_connected(settings: Settings | None = None) -> DatabaseConnection:
    connection = get_connection(settings)
    await connection.connect()
    return connection


async def connect_db(settings: Settings | None = None) -> DatabaseConnection:
    """Connect or exit the process with status 1."""
    try:
        return await ensure_connected(settings)
    except ConnectionFailure as exc:
        log_event("process_exit", "Exiting: {}", exc, level="CRITICAL", exit_code=CONNECTION_FAILURE_EXIT_CODE)
        sys.exit(CONNECTION_FAILURE_EXIT_CODE)


def _mongo_connection() -> MongoConnection:
    connection = get_connection()
    if not isinstance(connection, MongoConnection):
        raise ValueError(f"Mongo handle requires MongoConnection, got {type(connection).__name__}")
    return connection


def get_client() -> AsyncIOMotorClient:
    return _mongo_connection().client


def get_database() -> AsyncIOMotorDatabase:
    return _mongo_connection().database


async def close_connection() -> None:
    """Close and forget the process-wide connection (process shutdown)."""
    global _connection
    with _connection_lock:
        connection, _connection = _connection, None
    if connection is not None:
        await connection.close()
