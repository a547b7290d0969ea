# threema_gateway/transport/transport_http.py
import requests

from threema_gateway.constants import DEFAULT_TIMEOUT, MSGAPI_URL
from threema_gateway.logger import get_logger
from threema_gateway.transport.transport_base import (
    BaseTransport, TransportResponse, TransportTransientError, TransportPermanentError,
)

log = get_logger("Threema.Transport.HTTP")


class HTTPTransport(BaseTransport):
    """
    HTTP transport backed by one long-lived requests.Session.

    The session (and its connection pool) is created once and reused for
    every call; share a single instance across threads.
    """
    name = "http"

    def __init__(self, base_url: str = MSGAPI_URL, timeout: float = DEFAULT_TIMEOUT,
                 session: requests.Session = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _request(self, method, url, **kwargs):
        # query params carry the API secret, so only the path is logged
        log.debug(f"[HTTP {method}] -> {url}")
        try:
            res = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except (requests.Timeout, requests.ConnectionError) as e:
            log.warning(f"[HTTP {method}] {url} failed: {e.__class__.__name__}")
            raise TransportTransientError(str(e)) from e
        except requests.RequestException as e:
            log.error(f"[HTTP {method}] {url} failed: {e}")
            raise TransportPermanentError(str(e)) from e
        log.debug(f"[HTTP {method}] {res.status_code} {res.reason}")
        return TransportResponse(status=res.status_code, body=res.content, headers=dict(res.headers))

    def post(self, url, data=None, body=None, headers=None, params=None):
        return self._request("POST", url, data=body if body is not None else data,
                             headers=headers, params=params)

    def get(self, url, headers=None, params=None):
        return self._request("GET", url, headers=headers, params=params)

    def close(self):
        self.session.close()
