# threema_gateway/validation.py
from __future__ import annotations
import re

from .constants import MAX_SIMPLE_TEXT_BYTES, IDENTITY_LENGTH
from .errors import MessageTooLong
from .utils import is_hex

_IDENTITY_RE = re.compile(r"[0-9A-Z*][0-9A-Z]{%d}" % (IDENTITY_LENGTH - 1))


def encoded_length(text: str | bytes) -> int:
    if isinstance(text, (bytes, bytearray)):
        return len(text)
    return len(text.encode("utf-8"))


def check_text_length(text: str | bytes, limit: int = MAX_SIMPLE_TEXT_BYTES) -> None:
    """Raise MessageTooLong if the UTF-8 encoding of text exceeds limit bytes.

    This counts bytes, not characters: 1750 two-byte glyphs are exactly at
    the 3500 byte limit.
    """
    if encoded_length(text) > limit:
        raise MessageTooLong()


def is_valid_identity(value: str) -> bool:
    """8 chars, uppercase alphanumerics; gateway ids start with '*'."""
    return _IDENTITY_RE.fullmatch(value) is not None


def check_hex(text: str, length: int) -> bool:
    """True if text is exactly `length` hex characters, no padding or whitespace."""
    return len(text) == length and is_hex(text)
