"""
threema_gateway.utils
---------------------
Small helpers shared by the validators and the recipient model.
"""

from __future__ import annotations
import string

HEX_DIGITS = frozenset(string.hexdigits)


def is_hex(s: str) -> bool:
    # bytes.fromhex() silently skips whitespace, so check every char first
    return len(s) % 2 == 0 and all(c in HEX_DIGITS for c in s)


def to_text(value: str | bytes) -> str:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8")
    return str(value)
