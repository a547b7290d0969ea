"""
threema_gateway.blob
--------------------
Blob identifiers and the binary framing used by /upload_blob.

- BlobId: 16 raw bytes, canonical text form is 32 lowercase hex chars
- build_upload_body(): hand-built single-part multipart/form-data body
- parse_upload_response(): raw response text -> BlobId

The upload body is assembled by hand instead of with a multipart encoder:
there is exactly one field and the gateway parser is strict about layout.
"""

from __future__ import annotations
from dataclasses import dataclass

from .constants import BLOB_ID_SIZE, BLOB_BOUNDARY
from .errors import BadBlobId
from .validation import check_hex


@dataclass(frozen=True)
class BlobId:
    raw: bytes

    def __post_init__(self):
        if not isinstance(self.raw, (bytes, bytearray)) or len(self.raw) != BLOB_ID_SIZE:
            raise ValueError(f"BlobId needs exactly {BLOB_ID_SIZE} bytes")
        object.__setattr__(self, "raw", bytes(self.raw))

    @classmethod
    def from_bytes(cls, raw: bytes) -> "BlobId":
        return cls(raw)

    @classmethod
    def from_str(cls, text: str) -> "BlobId":
        """
        Parse a 32 character hex string (either case).

        The input is not trimmed: surrounding whitespace or a trailing
        newline is a malformed id, as is any non-hex character.
        """
        if not isinstance(text, str) or not check_hex(text, BLOB_ID_SIZE * 2):
            raise BadBlobId()
        return cls(bytes.fromhex(text))

    def to_str(self) -> str:
        return self.raw.hex()

    def __str__(self) -> str:
        return self.to_str()

    def __repr__(self) -> str:
        return f"BlobId({self.to_str()!r})"


def upload_content_type(boundary: str = BLOB_BOUNDARY) -> str:
    return f"multipart/form-data; boundary={boundary}"


def build_upload_body(data: bytes, boundary: str = BLOB_BOUNDARY) -> bytes:
    """Wrap raw (already encrypted) bytes as the single `blob` part."""
    delimiter = b"--" + boundary.encode("ascii")
    if delimiter in data:
        raise ValueError("blob data contains the multipart boundary")
    return b"".join([
        delimiter, b"\r\n",
        b'Content-Disposition: form-data; name="blob"\r\n',
        b"Content-Type: application/octet-stream\r\n\r\n",
        data,
        b"\r\n", delimiter, b"--\r\n",
    ])


def parse_upload_body(body: bytes, boundary: str = BLOB_BOUNDARY) -> bytes:
    """Inverse of build_upload_body(); raises ValueError on any layout mismatch."""
    delimiter = b"--" + boundary.encode("ascii")
    head = b"".join([
        delimiter, b"\r\n",
        b'Content-Disposition: form-data; name="blob"\r\n',
        b"Content-Type: application/octet-stream\r\n\r\n",
    ])
    tail = b"\r\n" + delimiter + b"--\r\n"
    if not body.startswith(head) or not body.endswith(tail) or len(body) < len(head) + len(tail):
        raise ValueError("not a blob upload body")
    return body[len(head):len(body) - len(tail)]


def parse_upload_response(body: bytes | str) -> BlobId:
    if isinstance(body, (bytes, bytearray)):
        try:
            body = bytes(body).decode("ascii")
        except UnicodeDecodeError:
            raise BadBlobId() from None
    return BlobId.from_str(body.strip(" \t\r\n"))
