"""Port: shared database connection. Implementations live in infrastructure."""
from __future__ import annotations

from typing import Protocol

from common.app.constants import ConnectionState


class DatabaseConnection(Protocol):
    """Interface for the process-wide connection lifecycle and ping."""

    @property
    def state(self) -> ConnectionState: ...

    @property
    def ready(self) -> bool: ...

    @property
    def uri(self) -> str: ...

    async def connect(self) -> None: ...

    async def ping(self) -> bool: ...

    async def close(self) -> None: ...
