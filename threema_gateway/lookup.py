# threema_gateway/lookup.py
from __future__ import annotations
from typing import Optional
from urllib.parse import quote

from .connection import call, ACCEPT_TEXT
from .constants import PUBLIC_KEY_SIZE
from .errors import OtherError, map_response_code
from .logger import get_logger
from .recipient import LookupCriterion
from .transport.transport_base import BaseTransport
from .validation import check_hex, is_valid_identity

log = get_logger("Threema.Lookup")


def _get(transport: BaseTransport, url: str, from_: str, secret: str) -> str:
    res = call("GET", transport, url, headers=dict(ACCEPT_TEXT), params={"from": from_, "secret": secret})
    map_response_code(res.status)
    return res.text.strip()


def lookup_id(transport: BaseTransport, criterion: LookupCriterion, from_: str, secret: str,
              base_url: Optional[str] = None) -> str:
    """Resolve a phone number, e-mail address or one of their hashes to an identity."""
    log.info(f"[LOOKUP] id by {criterion.label}")
    base_url = base_url or transport.base_url
    url = f"{base_url}/lookup/{criterion.url_path}/{quote(criterion.value, safe='')}"
    identity = _get(transport, url, from_, secret)
    if not is_valid_identity(identity):
        log.warning(f"[LOOKUP] unusual identity format: {identity!r}")
    return identity


def lookup_pubkey(transport: BaseTransport, from_: str, their_id: str, secret: str,
                  base_url: Optional[str] = None) -> bytes:
    """Fetch the 32 byte public key of an identity."""
    log.info(f"[LOOKUP] public key of {their_id}")
    base_url = base_url or transport.base_url
    body = _get(transport, f"{base_url}/pubkeys/{quote(their_id, safe='')}", from_, secret)
    if not check_hex(body, PUBLIC_KEY_SIZE * 2):
        raise OtherError(f"Invalid public key: {body[:64]!r}")
    return bytes.fromhex(body)


def lookup_credits(transport: BaseTransport, from_: str, secret: str, base_url: Optional[str] = None) -> int:
    body = _get(transport, f"{base_url or transport.base_url}/credits", from_, secret)
    try:
        return int(body)
    except ValueError:
        raise OtherError(f"Invalid credits response: {body[:64]!r}") from None
