from __future__ import annotations


class ConnectionFailure(RuntimeError):
    """Raised when the database handshake fails for any reason.

    Network, auth, DNS, TLS and timeout errors are not distinguished; the
    driver exception is kept as ``__cause__``.
    """

    def __init__(self, uri: str, detail: str) -> None:
        super().__init__(f"could not connect to {uri}: {detail}")
        self.uri = uri
        self.detail = detail
