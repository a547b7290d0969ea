# threema_gateway/constants.py

MSGAPI_URL = "https://msgapi.threema.ch"

# send_simple accepts at most 3500 bytes of UTF-8 text
MAX_SIMPLE_TEXT_BYTES = 3500

BLOB_ID_SIZE = 16
IDENTITY_LENGTH = 8
PUBLIC_KEY_SIZE = 32

# multipart boundary for /upload_blob; the gateway parser expects this exact layout
BLOB_BOUNDARY = "3ma-d84f64f5-a138-4b0a-9e25-339257990c81-3ma"

# static HMAC-SHA256 keys published for phone/email hashing
PHONE_HASH_KEY = bytes.fromhex("85adf8226953f3d96cfd5d09bf29555eb955fcd8aa5ec4f9fcd869e258370723")
EMAIL_HASH_KEY = bytes.fromhex("30a5500fed9701fa6defdb610841900febb8e430881f7ad816826264ec09bad7")

DEFAULT_TIMEOUT = 10.0
