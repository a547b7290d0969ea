# threema_gateway/transport/transport_local.py
from __future__ import annotations
from collections import deque
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from threema_gateway.constants import MSGAPI_URL
from threema_gateway.logger import get_logger
from threema_gateway.transport.transport_base import BaseTransport, TransportResponse, TransportError

log = get_logger("Threema.Transport.Local")


@dataclass
class RecordedRequest:
    method: str
    url: str
    data: Optional[Dict[str, str]] = None
    body: Optional[bytes] = None
    headers: Optional[Dict[str, str]] = None
    params: Optional[Dict[str, str]] = None


class LocalTransport(BaseTransport):
    """
    Offline transport: replays queued responses and records every request.

    Queue a TransportResponse, an (status, body) tuple, or an exception
    instance (raised on the matching call). With nothing queued every call
    answers 200 with an empty body.
    """
    name = "local"

    def __init__(self, responses: Optional[List[Any]] = None, base_url: str = MSGAPI_URL):
        self.base_url = base_url.rstrip("/")
        self.responses = deque(responses or [])
        self.requests: List[RecordedRequest] = []

    def queue(self, status: int, body: bytes | str = b"") -> "LocalTransport":
        if isinstance(body, str):
            body = body.encode("utf-8")
        self.responses.append(TransportResponse(status=status, body=body))
        return self

    def _next(self, req: RecordedRequest) -> TransportResponse:
        self.requests.append(req)
        log.info(f"[LOCAL {req.method}] {req.url}")
        if not self.responses:
            return TransportResponse(status=200)
        res = self.responses.popleft()
        if isinstance(res, TransportError):
            raise res
        if isinstance(res, tuple):
            status, body = res
            res = TransportResponse(status=status, body=body.encode("utf-8") if isinstance(body, str) else body)
        return res

    @property
    def last_request(self) -> RecordedRequest:
        return self.requests[-1]

    def post(self, url, data=None, body=None, headers=None, params=None):
        return self._next(RecordedRequest("POST", url, data=data, body=body, headers=headers, params=params))

    def get(self, url, headers=None, params=None):
        return self._next(RecordedRequest("GET", url, headers=headers, params=params))
