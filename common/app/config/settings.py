"""Settings for the shared database bootstrap."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from common.app.constants import DEFAULT_MONGO_URI


def resolve_mongo_uri(uri: str | None) -> str:
    """Return the configured URI, or the built-in default when unset or blank."""
    if uri and uri.strip():
        return uri.strip()
    return DEFAULT_MONGO_URI


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    mongo_uri: str | None = Field(None, validation_alias="MONGO_URI")
    database_name: str = Field("streamingapp", validation_alias="DATABASE_NAME")
    database_backend: str = Field("mongo", validation_alias="DATABASE_BACKEND")
    database_connection_timeout_ms: int = Field(30000, validation_alias="DATABASE_CONNECTION_TIMEOUT_MS")
    database_app_name: str = Field("streamingapp-common", validation_alias="DATABASE_APP_NAME")

    log_level: str = Field("INFO", validation_alias="LOG_LEVEL")
    log_json: bool = Field(False, validation_alias="LOG_JSON")

    http_host: str = Field("0.0.0.0", validation_alias="HTTP_HOST")
    http_port: int = Field(8000, validation_alias="HTTP_PORT")

    readiness_ping_timeout_seconds: float = Field(5.0, validation_alias="READINESS_PING_TIMEOUT_SECONDS")

    @property
    def resolved_mongo_uri(self) -> str:
        return resolve_mongo_uri(self.mongo_uri)
