"""Constants shared across the bootstrap modules."""
from __future__ import annotations

from enum import Enum

# Local development fallback; deployments set MONGO_URI.
DEFAULT_MONGO_URI = "mongodb://localhost:27017/streamingapp"

# Options handed to the client's connect operation on every handshake.
CLIENT_COMPAT_OPTIONS: dict[str, bool] = {
    "useNewUrlParser": True,
    "useUnifiedTopology": True,
}

CONNECTION_FAILURE_EXIT_CODE = 1


class ConnectionState(str, Enum):
    DISCONNECTED = "DISCONNECTED"
    CONNECTING = "CONNECTING"
    CONNECTED = "CONNECTED"
    FAILED = "FAILED"
