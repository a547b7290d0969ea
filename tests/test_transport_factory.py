import logging
import pytest
import requests
from threema_gateway.config import GatewayConfig
from threema_gateway.transport import (
    transport_factory, HTTPTransport, LocalTransport, TransportTransientError, TransportPermanentError,
)

# CMD Line Usage: pytest -v -s --log-cli-level=DEBUG ./tests/test_transport_factory.py


class FakeResponse:
    def __init__(self, status_code, content=b"", reason="OK"):
        self.status_code = status_code
        self.content = content
        self.reason = reason
        self.headers = {"Content-Type": "text/plain"}


class FakeSession:
    def __init__(self, result):
        self.result = result
        self.calls = []
        self.closed = False

    def request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        if isinstance(self.result, Exception):
            raise self.result
        return self.result

    def close(self):
        self.closed = True


def test_local_transport_records(caplog):
    """LocalTransport answers 200 and records what was sent."""
    caplog.set_level(logging.INFO, logger="Threema.Transport.Local")
    transport = LocalTransport()
    res = transport.post("http://gw.local/send_e2e", data={"to": "ECHOECHO"})

    assert res.status == 200 and res.body == b""
    assert transport.last_request.data == {"to": "ECHOECHO"}
    assert "LOCAL POST" in caplog.text


def test_transport_factory_modes(monkeypatch):
    """transport_factory() picks the adapter named by THREEMA_GATEWAY_TRANSPORT."""
    monkeypatch.delenv("THREEMA_GATEWAY_TRANSPORT", raising=False)
    assert isinstance(transport_factory(), HTTPTransport)

    monkeypatch.setenv("THREEMA_GATEWAY_TRANSPORT", "local")
    assert isinstance(transport_factory(), LocalTransport)

    with pytest.raises(ValueError):
        transport_factory(GatewayConfig(transport="carrier-pigeon"))


def test_config_from_env(monkeypatch):
    monkeypatch.setenv("THREEMA_GATEWAY_URL", "http://gw.local/")
    monkeypatch.setenv("THREEMA_GATEWAY_TIMEOUT", "2.5")
    cfg = GatewayConfig.from_env()
    assert cfg.base_url == "http://gw.local"
    assert cfg.timeout == 2.5
    assert isinstance(transport_factory(GatewayConfig(timeout=cfg.timeout)), HTTPTransport)


def test_http_transport_reuses_session():
    """Every call goes through the same requests.Session."""
    session = FakeSession(FakeResponse(200, b"abc"))
    transport = HTTPTransport(timeout=3, session=session)

    res = transport.post("http://gw.local/upload_blob", body=b"\x00raw", headers={"Accept": "text/plain"},
                         params={"from": "*TESTID1"})
    assert res.status == 200 and res.text == "abc"
    transport.get("http://gw.local/credits")

    assert len(session.calls) == 2
    method, url, kwargs = session.calls[0]
    assert method == "POST"
    assert kwargs["data"] == b"\x00raw"
    assert kwargs["timeout"] == 3

    transport.close()
    assert session.closed


def test_http_transport_errors():
    """requests failures map to transient or permanent TransportErrors."""
    with pytest.raises(TransportTransientError):
        HTTPTransport(session=FakeSession(requests.ConnectionError("refused"))).get("http://gw.local/x")
    with pytest.raises(TransportPermanentError):
        HTTPTransport(session=FakeSession(requests.exceptions.InvalidURL("bad"))).get("http://gw.local/x")
