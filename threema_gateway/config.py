# threema_gateway/config.py
from __future__ import annotations
from dataclasses import dataclass
import os

from .constants import MSGAPI_URL, DEFAULT_TIMEOUT


@dataclass(frozen=True)
class GatewayConfig:
    """
    Runtime settings for talking to the gateway.

    Read from the environment by from_env(); callers embedding the library
    can just build one directly.
    """
    base_url: str = MSGAPI_URL
    timeout: float = DEFAULT_TIMEOUT
    transport: str = "http"     # "http" | "local"

    @classmethod
    def from_env(cls) -> "GatewayConfig":
        timeout = os.getenv("THREEMA_GATEWAY_TIMEOUT")
        return cls(
            base_url=os.getenv("THREEMA_GATEWAY_URL", MSGAPI_URL).rstrip("/"),
            timeout=float(timeout) if timeout else DEFAULT_TIMEOUT,
            transport=os.getenv("THREEMA_GATEWAY_TRANSPORT", "http").lower(),
        )
