import asyncio

from fastapi import APIRouter, Request, Response

from common.app.core.log import log_event
from common.app.routers.utils import readiness_ping_timeout_seconds

health_router = APIRouter(tags=["Health"])


@health_router.get(
    "/health/live",
    summary="Liveness probe",
    description="Returns 200 if the process is running.",
    responses={200: {"description": "Service is alive."}},
)
async def live() -> dict:
    return {"status": "ok"}


@health_router.get(
    "/health/ready",
    summary="Readiness probe",
    description="Returns 200 only when the shared MongoDB connection is established and answers ping.",
    responses={
        200: {"description": "Database is ready."},
        503: {"description": "Database not ready."},
    },
)
async def ready(request: Request) -> Response:
    database = getattr(request.app.state, "database", None)
    if database is None:
        log_event("components_not_initialized")
        return Response(status_code=503, content="Not ready")
    if not database.ready:
        log_event("db_not_ready", state=database.state.value)
        return Response(status_code=503, content=f"Database {database.state.value}")

    try:
        ping_ok = await asyncio.wait_for(database.ping(), timeout=readiness_ping_timeout_seconds(request))
    except asyncio.TimeoutError:
        log_event("db_ping_timeout")
        return Response(status_code=503, content="Database not ready")
    if not ping_ok:
        log_event("db_ping_failed")
        return Response(status_code=503, content="Database not ready")
    return Response(status_code=200, content="OK")
