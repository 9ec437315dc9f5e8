import asyncio
import inspect
from typing import Any

from loguru import logger
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from common.app.config.settings import Settings
from common.app.constants import CLIENT_COMPAT_OPTIONS, ConnectionState
from common.app.core.errors import ConnectionFailure
from common.app.core.log import log_event, redact_uri
from common.app.infrastructure.persistence.mongo.client import ClientFactory, create_motor_client


async def _close_client(client: Any) -> None:
    res = client.close()
    if inspect.isawaitable(res):
        await res


async def _discard_client(client: Any) -> None:
    """Close a client that never became the shared handle; close errors are only logged."""
    if client is None:
        return
    try:
        await _close_client(client)
    except Exception as exc:
        logger.warning("mongo client close failed: {}", exc)


class MongoConnection:
    """DatabaseConnection implementation using MongoDB.

    ``connect()`` performs the handshake at most once: callers arriving while
    an attempt is in flight await that same attempt, and callers arriving after
    it succeeded return immediately. A failed attempt leaves the state FAILED
    and raises ``ConnectionFailure``; the next ``connect()`` starts afresh.
    """

    def __init__(self, settings: Settings, *, client_factory: ClientFactory | None = None) -> None:
        self._settings = settings
        self._uri = settings.resolved_mongo_uri
        self._client_factory = client_factory or create_motor_client
        self._state = ConnectionState.DISCONNECTED
        self._client: AsyncIOMotorClient | None = None
        self._inflight: asyncio.Task | None = None

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def ready(self) -> bool:
        return self._state == ConnectionState.CONNECTED

    @property
    def uri(self) -> str:
        return self._uri

    @property
    def client(self) -> AsyncIOMotorClient:
        if not self.ready or self._client is None:
            raise RuntimeError("db_not_connected")
        return self._client

    @property
    def database(self) -> AsyncIOMotorDatabase:
        """Default database named in the URI, else ``DATABASE_NAME``."""
        return self.client.get_default_database(default=self._settings.database_name)

    def client_options(self) -> dict[str, Any]:
        return {
            **CLIENT_COMPAT_OPTIONS,
            "serverSelectionTimeoutMS": self._settings.database_connection_timeout_ms,
            "appname": self._settings.database_app_name,
        }

    async def connect(self) -> None:
        if self._state == ConnectionState.CONNECTED:
            return
        if self._inflight is None:
            self._state = ConnectionState.CONNECTING
            self._inflight = asyncio.get_running_loop().create_task(self._handshake())
            self._inflight.add_done_callback(self._handshake_done)
        # shield: a cancelled waiter must not cancel the attempt other callers share
        await asyncio.shield(self._inflight)

    def _handshake_done(self, task: asyncio.Task) -> None:
        if self._inflight is task:
            self._inflight = None
        if task.cancelled() and self._state == ConnectionState.CONNECTING:
            self._state = ConnectionState.DISCONNECTED

    async def _handshake(self) -> None:
        uri = redact_uri(self._uri)
        log_event("db_connecting", "Connecting to MongoDB at: {}", uri, uri=uri)
        client = None
        try:
            client = self._client_factory(self._uri, **self.client_options())
            await client.admin.command("ping")
        except Exception as exc:
            self._state = ConnectionState.FAILED
            log_event(
                "db_connect_failed",
                "MongoDB connection error: {}",
                exc,
                level="ERROR",
                uri=uri,
                error_type=type(exc).__name__,
            )
            await _discard_client(client)
            raise ConnectionFailure(uri, str(exc)) from exc
        except BaseException:
            # cancelled by close() mid-handshake
            await _discard_client(client)
            raise
        self._client = client
        self._state = ConnectionState.CONNECTED
        log_event("db_connected", "MongoDB connection established", uri=uri)

    async def ping(self) -> bool:
        """Return True if the database responds to ping; False if not connected or any error."""
        if not self._client:
            return False
        try:
            await self._client.admin.command("ping")
            return True
        except Exception:
            return False

    async def close(self) -> None:
        inflight, self._inflight = self._inflight, None
        if inflight is not None and not inflight.done():
            inflight.cancel()
            await asyncio.wait({inflight})
        if self._client:
            await _close_client(self._client)
            self._client = None
        self._state = ConnectionState.DISCONNECTED
        log_event("db_closed")
