"""Mongo client construction (provider-specific infrastructure)."""
from __future__ import annotations

from typing import Any, Protocol

from motor.motor_asyncio import AsyncIOMotorClient


class ClientFactory(Protocol):
    def __call__(self, uri: str, **options: Any) -> AsyncIOMotorClient: ...


def create_motor_client(
    uri: str,
    *,
    useNewUrlParser: bool = True,
    useUnifiedTopology: bool = True,
    **options: Any,
) -> AsyncIOMotorClient:
    """Build a Motor client for ``uri``.

    PyMongo 4 always parses connection strings with the modern parser and
    always runs the unified topology, so both compatibility flags are accepted
    only when true and are not forwarded to the driver. Remaining options are
    passed through as MongoClient keyword arguments.
    """
    if not useNewUrlParser:
        raise ValueError("legacy connection string parsing is not supported")
    if not useUnifiedTopology:
        raise ValueError("legacy server topology is not supported")
    return AsyncIOMotorClient(uri, **options)
