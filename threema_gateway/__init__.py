"""
Threema Gateway Client
======================
Client library for the Threema Gateway message API.

Provides:
- End-to-end encryption (NaCl box) and message padding
- Blob identifiers and blob upload framing
- Basic and E2E sending, identity and public key lookup
- Status code to ApiError mapping
"""

from .blob import BlobId
from .connection import send_simple, send_e2e, blob_upload, blob_download
from .crypto import (
    EncryptedMessage, MessageType, encrypt, decrypt, encrypt_raw, random_nonce,
    generate_keypair, encrypt_text_message, decrypt_message, encrypt_blob, decrypt_blob,
    hash_phone, hash_email,
)
from .errors import (
    ApiError, BadCredentials, NoCredits, IdNotFound, MessageTooLong, BadBlobId,
    BadSenderOrRecipient, BadBlob, ServerError, DecryptionFailed, OtherError,
    classify_status, map_response_code,
)
from .lookup import lookup_id, lookup_pubkey, lookup_credits
from .recipient import Recipient, LookupCriterion

__version__ = "0.8.0"
