from __future__ import annotations
from dataclasses import dataclass
from enum import IntEnum
from typing import Tuple, Union
import re

import nacl.public
import nacl.secret
import nacl.utils
import nacl.exceptions
from nacl.bindings.crypto_box import crypto_box_MACBYTES, crypto_box_NONCEBYTES
from cryptography.hazmat.primitives import hashes, hmac

from .constants import PHONE_HASH_KEY, EMAIL_HASH_KEY
from .errors import DecryptionFailed
"""
threema_gateway.crypto
----------------------
End-to-end encryption for gateway messages:

- NaCl box (Curve25519 + XSalsa20 + Poly1305): encrypt() / decrypt()
- Message framing: type byte + body + random padding
- Blob encryption: SecretBox with a fresh key and the fixed blob nonce
- Phone/email hashing for privacy-preserving lookups

NONCES: every call to encrypt() under the same key pair MUST use a nonce
that has never been used before. Reusing a nonce breaks the confidentiality
of both messages. Use random_nonce() (or encrypt_raw(), which calls it)
unless you have a process-wide scheme that guarantees uniqueness.
"""

NONCE_SIZE = crypto_box_NONCEBYTES  # 24
MAC_SIZE = crypto_box_MACBYTES      # 16
KEY_SIZE = 32

# blobs are encrypted with a single-use key, so a constant nonce is safe
BLOB_NONCE = b"\x00" * (NONCE_SIZE - 1) + b"\x01"

MIN_PADDED_LENGTH = 32


class MessageType(IntEnum):
    TEXT = 0x01
    FILE = 0x17


@dataclass(frozen=True)
class EncryptedMessage:
    nonce: bytes
    ciphertext: bytes

    def __post_init__(self):
        if len(self.nonce) != NONCE_SIZE:
            raise ValueError(f"nonce must be {NONCE_SIZE} bytes, got {len(self.nonce)}")

    @property
    def nonce_hex(self) -> str:
        return self.nonce.hex()

    @property
    def box_hex(self) -> str:
        return self.ciphertext.hex()


# --------- Keys / nonces ----------
def generate_keypair() -> Tuple[bytes, bytes]:
    sk = nacl.public.PrivateKey.generate()
    return bytes(sk), bytes(sk.public_key)


def random_nonce() -> bytes:
    return nacl.utils.random(NONCE_SIZE)


def _box(own_private_key: bytes, their_public_key: bytes) -> nacl.public.Box:
    return nacl.public.Box(
        nacl.public.PrivateKey(own_private_key),
        nacl.public.PublicKey(their_public_key),
    )


# --------- Box encrypt/decrypt ----------
def encrypt(plaintext: bytes, own_private_key: bytes, their_public_key: bytes, nonce: bytes) -> EncryptedMessage:
    """
    Encrypt and authenticate plaintext for the owner of their_public_key.

    The nonce is a hard precondition: it must be unique for this key pair,
    across all threads and processes. Nonce reuse is a security failure,
    not a recoverable error, and cannot be detected here.
    """
    if len(nonce) != NONCE_SIZE:
        raise ValueError(f"nonce must be {NONCE_SIZE} bytes, got {len(nonce)}")
    encrypted = _box(own_private_key, their_public_key).encrypt(plaintext, nonce)
    return EncryptedMessage(nonce=nonce, ciphertext=encrypted.ciphertext)


def encrypt_raw(data: bytes, own_private_key: bytes, their_public_key: bytes) -> EncryptedMessage:
    return encrypt(data, own_private_key, their_public_key, random_nonce())


def decrypt(message: EncryptedMessage, own_private_key: bytes, their_public_key: bytes) -> bytes:
    try:
        box = _box(own_private_key, their_public_key)
        return box.decrypt(message.ciphertext, message.nonce)
    except nacl.exceptions.CryptoError:
        raise DecryptionFailed() from None


# --------- Message framing ----------
def pad(data: bytes) -> bytes:
    """PKCS#7 style padding of 1..255 random bytes, each equal to the pad length."""
    pad_len = nacl.utils.random(1)[0] % 255 + 1
    if len(data) + pad_len < MIN_PADDED_LENGTH:
        pad_len = MIN_PADDED_LENGTH - len(data)
    return data + bytes([pad_len]) * pad_len


def unpad(data: bytes) -> bytes:
    if not data:
        raise DecryptionFailed("empty message")
    pad_len = data[-1]
    if pad_len == 0 or pad_len > len(data) or data[-pad_len:] != bytes([pad_len]) * pad_len:
        raise DecryptionFailed("invalid padding")
    return data[:-pad_len]


def encrypt_message(msg_type: int, body: bytes, own_private_key: bytes, their_public_key: bytes) -> EncryptedMessage:
    return encrypt_raw(pad(bytes([msg_type]) + body), own_private_key, their_public_key)


def encrypt_text_message(text: str, own_private_key: bytes, their_public_key: bytes) -> EncryptedMessage:
    return encrypt_message(MessageType.TEXT, text.encode("utf-8"), own_private_key, their_public_key)


def decrypt_message(message: EncryptedMessage, own_private_key: bytes,
                    their_public_key: bytes) -> Tuple[Union[MessageType, int], bytes]:
    data = unpad(decrypt(message, own_private_key, their_public_key))
    if not data:
        raise DecryptionFailed("missing message type")
    try:
        msg_type = MessageType(data[0])
    except ValueError:
        msg_type = data[0]
    return msg_type, data[1:]


# --------- Blob encryption ----------
def encrypt_blob(data: bytes) -> Tuple[EncryptedMessage, bytes]:
    """Encrypt a blob with a fresh random key; returns (message, key)."""
    key = nacl.utils.random(KEY_SIZE)
    encrypted = nacl.secret.SecretBox(key).encrypt(data, BLOB_NONCE)
    return EncryptedMessage(nonce=BLOB_NONCE, ciphertext=encrypted.ciphertext), key


def decrypt_blob(ciphertext: bytes, key: bytes) -> bytes:
    try:
        box = nacl.secret.SecretBox(key)
        return box.decrypt(ciphertext, BLOB_NONCE)
    except nacl.exceptions.CryptoError:
        raise DecryptionFailed() from None


# --------- Lookup hashing ----------
def _hmac_hex(key: bytes, value: str) -> str:
    h = hmac.HMAC(key, hashes.SHA256())
    h.update(value.encode("utf-8"))
    return h.finalize().hex()


def hash_phone(phone: str) -> str:
    """HMAC-SHA256 of the E.164 digits only ("+41 79 123" -> "4179123")."""
    return _hmac_hex(PHONE_HASH_KEY, re.sub(r"[^0-9]", "", phone))


def hash_email(email: str) -> str:
    return _hmac_hex(EMAIL_HASH_KEY, email.strip().lower())
