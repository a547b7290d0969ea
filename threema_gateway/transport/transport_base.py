from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Optional

from threema_gateway.constants import MSGAPI_URL

Headers = Dict[str, str]
Params = Dict[str, str]


class TransportError(Exception):
    pass


class TransportTransientError(TransportError):
    """Timeouts and dropped connections; the caller may retry."""


class TransportPermanentError(TransportError):
    pass


@dataclass
class TransportResponse:
    status: int
    body: bytes = b""
    headers: Headers = field(default_factory=dict)

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")


class BaseTransport:
    """
    Request/response contract between the gateway client and HTTP.

    A transport only moves bytes: it returns whatever status and body the
    server sent and raises TransportError only when no response arrived.
    Status interpretation happens in threema_gateway.errors.
    """
    name: str = "base"
    base_url: str = MSGAPI_URL

    def post(
        self,
        url: str,
        data: Optional[Params] = None,
        body: Optional[bytes] = None,
        headers: Optional[Headers] = None,
        params: Optional[Params] = None,
    ) -> TransportResponse:
        raise NotImplementedError

    def get(
        self,
        url: str,
        headers: Optional[Headers] = None,
        params: Optional[Params] = None,
    ) -> TransportResponse:
        raise NotImplementedError

    def close(self) -> None:
        return

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
