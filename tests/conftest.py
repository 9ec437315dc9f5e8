from __future__ import annotations

import asyncio
from typing import Any

import pytest
from fastapi import FastAPI
from loguru import logger

from common.app import db
from common.app.config.settings import Settings
from common.app.constants import ConnectionState
from common.app.infrastructure.persistence.mongo import mongo_connection
from common.app.routers.health import health_router


class _FakeAdmin:
    def __init__(self, client: "FakeMotorClient") -> None:
        self._client = client

    async def command(self, name: str) -> dict[str, Any]:
        self._client.commands.append(name)
        if self._client.gate is not None:
            await self._client.gate.wait()
        if self._client.error is not None:
            raise self._client.error
        return {"ok": 1.0}


class FakeMotorClient:
    """Stands in for AsyncIOMotorClient; only admin.command, close and get_default_database are used."""

    def __init__(
        self,
        uri: str,
        options: dict[str, Any],
        *,
        error: Exception | None = None,
        gate: asyncio.Event | None = None,
    ) -> None:
        self.uri = uri
        self.options = options
        self.error = error
        self.gate = gate
        self.commands: list[str] = []
        self.closed = False
        self.admin = _FakeAdmin(self)

    def close(self) -> None:
        self.closed = True

    def get_default_database(self, default: str | None = None) -> tuple[str, str | None]:
        return ("database", default)


class FakeClientFactory:
    """Client factory that counts handshakes. ``errors`` are consumed one per call."""

    def __init__(
        self,
        *errors: Exception | None,
        gate: asyncio.Event | None = None,
    ) -> None:
        self._errors = list(errors)
        self.gate = gate
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.clients: list[FakeMotorClient] = []

    def __call__(self, uri: str, **options: Any) -> FakeMotorClient:
        self.calls.append((uri, options))
        error = self._errors.pop(0) if self._errors else None
        client = FakeMotorClient(uri, options, error=error, gate=self.gate)
        self.clients.append(client)
        return client


class FakeDatabase:
    """Implements DatabaseConnection for router tests."""

    def __init__(self, state: ConnectionState = ConnectionState.CONNECTED, ping_ok: bool = True) -> None:
        self._state = state
        self._ping_ok = ping_ok

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def ready(self) -> bool:
        return self._state == ConnectionState.CONNECTED

    @property
    def uri(self) -> str:
        return "store://fake/db"

    async def connect(self) -> None:
        self._state = ConnectionState.CONNECTED

    async def ping(self) -> bool:
        return self._ping_ok

    async def close(self) -> None:
        self._state = ConnectionState.DISCONNECTED


def make_settings(uri: str | None = "store://testhost/db", **overrides: Any) -> Settings:
    return Settings(MONGO_URI=uri, **overrides)


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch):
    """No ambient MONGO_URI and a fresh process-wide connection per test."""
    monkeypatch.delenv("MONGO_URI", raising=False)
    monkeypatch.delenv("DATABASE_BACKEND", raising=False)
    monkeypatch.setattr(db, "_connection", None)


@pytest.fixture()
def client_factory(monkeypatch) -> FakeClientFactory:
    """Replaces the Motor client factory used by MongoConnection."""
    factory = FakeClientFactory()
    monkeypatch.setattr(mongo_connection, "create_motor_client", factory)
    return factory


@pytest.fixture()
def log_messages() -> list[str]:
    messages: list[str] = []
    handler_id = logger.add(lambda message: messages.append(message.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)


@pytest.fixture()
def test_app() -> FastAPI:
    app = FastAPI()
    app.state.database = FakeDatabase()
    app.include_router(health_router)
    return app
