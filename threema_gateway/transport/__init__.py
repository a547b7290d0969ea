# threema_gateway/transport/__init__.py
from threema_gateway.config import GatewayConfig
from threema_gateway.transport.transport_base import (
    BaseTransport, TransportResponse, TransportError,
    TransportTransientError, TransportPermanentError,
)
from threema_gateway.transport.transport_http import HTTPTransport
from threema_gateway.transport.transport_local import LocalTransport


def transport_factory(config: GatewayConfig = None) -> BaseTransport:
    """
    Build the transport named by THREEMA_GATEWAY_TRANSPORT:
      - "http"  -> HTTPTransport (default)
      - "local" -> LocalTransport (offline, canned 200 responses)
    """
    config = config or GatewayConfig.from_env()

    if config.transport == "local":
        return LocalTransport(base_url=config.base_url)

    if config.transport == "http":
        return HTTPTransport(base_url=config.base_url, timeout=config.timeout)

    raise ValueError(f"unknown transport: {config.transport!r}")
