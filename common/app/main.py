from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from common.app.config.settings import Settings
from common.app.core.log import configure_logging, log_event
from common.app.db import close_connection, connect_db
from common.app.routers.health import health_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = Settings()
    configure_logging(settings.log_level, serialize=settings.log_json)
    log_event("app_starting")
    app.state.settings = settings
    app.state.database = await connect_db(settings)
    try:
        yield
    finally:
        log_event("app_stopping")
        await close_connection()


app = FastAPI(
    title="Streaming App Common",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(health_router)


def main() -> None:
    settings = Settings()
    uvicorn.run(app, host=settings.http_host, port=settings.http_port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
