"""Loguru setup and the event helper used by every module."""
from __future__ import annotations

import re
import sys
from typing import Any

from loguru import logger

from common.app.core import SERVICE_NAME

_URI_CREDENTIALS = re.compile(r"(?P<scheme>[a-zA-Z][a-zA-Z0-9+.-]*://)(?P<user>[^:@/]+):[^@/]*@")


def log_event(event: str, message: str = "", *args: Any, level: str = "INFO", **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).log(level, message, *args)


def redact_uri(uri: str) -> str:
    """Mask the password part of a connection URI, keeping user and hosts."""
    return _URI_CREDENTIALS.sub(r"\g<scheme>\g<user>:***@", uri)


def configure_logging(level: str = "INFO", *, serialize: bool = False) -> None:
    logger.remove()
    logger.add(sys.stderr, level=level.upper(), serialize=serialize)
