from __future__ import annotations

from fastapi import Request

from common.app.config.settings import Settings

READINESS_PING_TIMEOUT_DEFAULT: float = Settings.model_fields["readiness_ping_timeout_seconds"].default


def readiness_ping_timeout_seconds(request: Request) -> float:
    """Read readiness DB ping timeout from app.state.settings or default."""
    settings = getattr(request.app.state, "settings", None)
    if settings is not None:
        return getattr(settings, "readiness_ping_timeout_seconds", READINESS_PING_TIMEOUT_DEFAULT)
    return READINESS_PING_TIMEOUT_DEFAULT


__all__ = ["readiness_ping_timeout_seconds"]
