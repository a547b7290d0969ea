import os
import pytest
from threema_gateway.blob import (
    BlobId, build_upload_body, parse_upload_body, parse_upload_response, upload_content_type,
)
from threema_gateway.constants import BLOB_BOUNDARY
from threema_gateway.errors import BadBlobId


def test_blob_id_from_str():
    """Hex parsing accepts either case and never trims its input."""
    assert BlobId.from_str("0123456789abcdef0123456789abcdef")
    assert BlobId.from_str("0123456789abcdef0123456789abcdeF")

    for bad in [
        "0123456789abcdef0123456789abcde",
        "0123456789abcdef0123456789abcdef\n",
        " 0123456789abcdef0123456789abcdef",
        "0123456789abcdef0123456789abcdeg",
        "0123456789abcdef0123456789abcdef00",
        "",
    ]:
        with pytest.raises(BadBlobId):
            BlobId.from_str(bad)


def test_blob_id_bytes():
    """Each byte maps to two zero-padded lowercase hex digits."""
    expected = BlobId(bytes([0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 0xa, 0xb, 0xc, 0xd, 0xe, 0xff]))
    assert BlobId.from_str("000102030405060708090a0b0c0d0eff") == expected
    assert str(expected) == "000102030405060708090a0b0c0d0eff"


def test_blob_id_roundtrip_and_case():
    """Text form round-trips byte for byte, whatever the input case."""
    for _ in range(20):
        blob_id = BlobId.from_bytes(os.urandom(16))
        text = blob_id.to_str()
        assert len(text) == 32 and text == text.lower()
        assert BlobId.from_str(text) == blob_id
        assert BlobId.from_str(text.upper()) == blob_id
        assert hash(BlobId.from_str(text)) == hash(blob_id)


def test_blob_id_wrong_length():
    with pytest.raises(ValueError):
        BlobId(b"\x00" * 15)


def test_upload_body_layout():
    """Upload body matches the exact single-part layout the gateway parses."""
    body = build_upload_body(b"\x00\x01binary\xff")
    assert body == (
        b"--" + BLOB_BOUNDARY.encode() + b"\r\n"
        b'Content-Disposition: form-data; name="blob"\r\n'
        b"Content-Type: application/octet-stream\r\n\r\n"
        b"\x00\x01binary\xff"
        b"\r\n--" + BLOB_BOUNDARY.encode() + b"--\r\n"
    )
    assert parse_upload_body(body) == b"\x00\x01binary\xff"
    assert upload_content_type() == f"multipart/form-data; boundary={BLOB_BOUNDARY}"


def test_upload_body_rejects_boundary_in_data():
    with pytest.raises(ValueError):
        build_upload_body(b"abc--" + BLOB_BOUNDARY.encode() + b"xyz")


def test_parse_upload_response():
    """A bare hex body becomes a BlobId; anything else is malformed."""
    expected = BlobId.from_str("0123456789abcdef0123456789abcdef")
    assert parse_upload_response(b"0123456789abcdef0123456789abcdef") == expected
    assert parse_upload_response("0123456789abcdef0123456789abcdef\r\n") == expected

    for bad in [b"0123456789abcdef0123456789abcdef0", b"0123456789abcdef0123456789abcdeg", b"\xff\xfe"]:
        with pytest.raises(BadBlobId):
            parse_upload_response(bad)


def test_parse_upload_response_trims_only_whitespace():
    """Only spaces, tabs and line endings around the id are tolerated."""
    hex_id = b"0123456789abcdef0123456789abcdef"
    assert parse_upload_response(b" \t" + hex_id + b"\r\n") == BlobId.from_str(hex_id.decode())
    for bad in [b"\x1f" + hex_id + b"\x1c", b"\x0b" + hex_id, hex_id + b"\x0c", hex_id + b"\x00"]:
        with pytest.raises(BadBlobId):
            parse_upload_response(bad)
