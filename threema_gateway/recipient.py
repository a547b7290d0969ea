# threema_gateway/recipient.py

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Union

from .crypto import hash_phone, hash_email
from .utils import to_text

TextLike = Union[str, bytes]


class RecipientKind(Enum):
    ID = "id"
    PHONE = "phone"
    EMAIL = "email"


# request parameter used by send_simple for each kind
_RECIPIENT_PARAMS = {
    RecipientKind.ID: "to",
    RecipientKind.PHONE: "phone",
    RecipientKind.EMAIL: "email",
}


@dataclass(frozen=True)
class Recipient:
    """
    Addressee of a basic-mode message: exactly one of an 8 character
    identity, an E.164 phone number without the leading '+', or an e-mail
    address. Values are not validated here; the gateway rejects bad ones.
    """
    kind: RecipientKind
    value: str

    @classmethod
    def new_id(cls, identity: TextLike) -> "Recipient":
        return cls(RecipientKind.ID, to_text(identity))

    @classmethod
    def new_phone(cls, phone: TextLike) -> "Recipient":
        return cls(RecipientKind.PHONE, to_text(phone))

    @classmethod
    def new_email(cls, email: TextLike) -> "Recipient":
        return cls(RecipientKind.EMAIL, to_text(email))

    @property
    def param_name(self) -> str:
        return _RECIPIENT_PARAMS[self.kind]


class CriterionKind(Enum):
    PHONE = "phone"
    PHONE_HASH = "phone_hash"
    EMAIL = "email"
    EMAIL_HASH = "email_hash"


@dataclass(frozen=True)
class LookupCriterion:
    """How to find an identity via /lookup/<kind>/<value>."""
    kind: CriterionKind
    value: str

    @classmethod
    def phone(cls, phone: TextLike) -> "LookupCriterion":
        return cls(CriterionKind.PHONE, to_text(phone))

    @classmethod
    def phone_hash(cls, digest: TextLike) -> "LookupCriterion":
        return cls(CriterionKind.PHONE_HASH, to_text(digest))

    @classmethod
    def email(cls, email: TextLike) -> "LookupCriterion":
        return cls(CriterionKind.EMAIL, to_text(email))

    @classmethod
    def email_hash(cls, digest: TextLike) -> "LookupCriterion":
        return cls(CriterionKind.EMAIL_HASH, to_text(digest))

    @property
    def url_path(self) -> str:
        return self.kind.value

    @property
    def label(self) -> str:
        return self.kind.value.replace("_", " ")

    def hashed(self) -> "LookupCriterion":
        """Same criterion with the raw value replaced by its lookup hash."""
        if self.kind is CriterionKind.PHONE:
            return LookupCriterion.phone_hash(hash_phone(self.value))
        if self.kind is CriterionKind.EMAIL:
            return LookupCriterion.email_hash(hash_email(self.value))
        return self
