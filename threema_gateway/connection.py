"""
threema_gateway.connection
--------------------------
Send messages and move blobs through the gateway.

Every function takes the transport as its first argument so a single
long-lived HTTPTransport can be shared by all calls. Nothing here retries;
each call either returns its result or raises an ApiError.
"""

from __future__ import annotations
from typing import Dict, Optional, Union

from .blob import BlobId, build_upload_body, parse_upload_response, upload_content_type
from .crypto import EncryptedMessage
from .errors import BadBlob, BadBlobId, BadSenderOrRecipient, OtherError, map_response_code
from .logger import get_logger
from .recipient import Recipient
from .transport.transport_base import BaseTransport, TransportError, TransportResponse
from .validation import check_text_length

log = get_logger("Threema.Connection")

ACCEPT_JSON = {"Accept": "application/json"}
ACCEPT_TEXT = {"Accept": "text/plain"}


def call(method: str, transport: BaseTransport, url: str, **kwargs) -> TransportResponse:
    """Run one transport call, turning transport failures into OtherError."""
    try:
        if method == "POST":
            return transport.post(url, **kwargs)
        return transport.get(url, **kwargs)
    except TransportError as e:
        raise OtherError(f"Transport error: {e}") from e


# ------------------------------------------------------------------
# Request parameters
# ------------------------------------------------------------------
def build_simple_params(from_: str, to: Recipient, secret: str, text: str) -> Dict[str, str]:
    return {
        "from": from_,
        to.param_name: to.value,
        "secret": secret,
        "text": text,
    }


def build_e2e_params(
    from_: str,
    to: str,
    secret: str,
    message: EncryptedMessage,
    additional_params: Optional[Dict[str, str]] = None,
) -> Dict[str, str]:
    """Form fields for /send_e2e; nonce and box travel as separate hex fields."""
    params = dict(additional_params or {})
    params.update({
        "from": from_,
        "to": to,
        "secret": secret,
        "nonce": message.nonce_hex,
        "box": message.box_hex,
    })
    return params


# ------------------------------------------------------------------
# Messages
# ------------------------------------------------------------------
def send_simple(transport: BaseTransport, from_: str, to: Recipient, secret: str, text: str,
                base_url: Optional[str] = None) -> str:
    """
    Send a basic-mode (server encrypted) text message.

    Text longer than 3500 UTF-8 bytes raises MessageTooLong before anything
    is sent. Returns the response body (the message id).
    """
    check_text_length(text)
    log.info(f"[SEND SIMPLE] {from_} -> {to.kind.value}")
    res = call("POST", transport, f"{base_url or transport.base_url}/send_simple",
               data=build_simple_params(from_, to, secret, text), headers=dict(ACCEPT_JSON))
    map_response_code(res.status, BadSenderOrRecipient())
    return res.text


def send_e2e(transport: BaseTransport, from_: str, to: str, secret: str, message: EncryptedMessage,
             additional_params: Optional[Dict[str, str]] = None, base_url: Optional[str] = None) -> str:
    """Submit an already encrypted message. Returns the response body (the message id)."""
    log.info(f"[SEND E2E] {from_} -> {to} ({len(message.ciphertext)} bytes)")
    res = call("POST", transport, f"{base_url or transport.base_url}/send_e2e",
               data=build_e2e_params(from_, to, secret, message, additional_params),
               headers=dict(ACCEPT_JSON))
    map_response_code(res.status, BadSenderOrRecipient())
    return res.text


# ------------------------------------------------------------------
# Blobs
# ------------------------------------------------------------------
def blob_upload(transport: BaseTransport, from_: str, secret: str, data: Union[EncryptedMessage, bytes],
                base_url: Optional[str] = None) -> BlobId:
    ciphertext = data.ciphertext if isinstance(data, EncryptedMessage) else bytes(data)
    headers = dict(ACCEPT_TEXT)
    headers["Content-Type"] = upload_content_type()

    log.info(f"[BLOB UP] {len(ciphertext)} bytes")
    res = call("POST", transport, f"{base_url or transport.base_url}/upload_blob",
               body=build_upload_body(ciphertext), headers=headers,
               params={"from": from_, "secret": secret})
    map_response_code(res.status, BadBlob())

    try:
        blob_id = parse_upload_response(res.body)
    except BadBlobId:
        log.error(f"[BLOB UP] unexpected response body: {res.text[:64]!r}")
        raise BadBlob() from None
    log.info(f"[BLOB UP] stored as {blob_id}")
    return blob_id


def blob_download(transport: BaseTransport, from_: str, secret: str, blob_id: Union[BlobId, str],
                  base_url: Optional[str] = None) -> bytes:
    if not isinstance(blob_id, BlobId):
        blob_id = BlobId.from_str(blob_id)
    res = call("GET", transport, f"{base_url or transport.base_url}/blobs/{blob_id}",
               headers={"Accept": "application/octet-stream"},
               params={"from": from_, "secret": secret})
    map_response_code(res.status)
    log.info(f"[BLOB DOWN] {blob_id} ({len(res.body)} bytes)")
    return res.body
