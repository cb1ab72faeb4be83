"""
Pydantic schemas for franchise records.

Field names are snake_case in Python and camelCase on the wire
(``contactName``, ``createdAt`` and so on).  ``FranchiseCreate`` and
``FranchiseUpdate`` accept every text field as optional: presence of
the required fields is checked by the store so that a missing field is
reported as a franchise validation error rather than a parsing error.
Keys the API does not know about, as well as ``id`` and ``createdAt``,
are ignored on input.
"""

import re
import uuid
from datetime import datetime
from typing import NewType, Optional

from pydantic import BaseModel, Field

REQUIRED_FIELDS = ("name", "company", "contact_name")
TEXT_FIELDS = REQUIRED_FIELDS + ("contact_email", "contact_phone")

# Franchise ids are 32 lowercase hex characters (a UUID4 without dashes).
FranchiseId = NewType("FranchiseId", str)

_FRANCHISE_ID_RE = re.compile(r"[0-9a-f]{32}")


def new_franchise_id() -> FranchiseId:
    return FranchiseId(uuid.uuid4().hex)


def parse_franchise_id(value: str) -> FranchiseId:
    """Return ``value`` as a ``FranchiseId`` or raise ``ValueError``."""
    if not isinstance(value, str) or not _FRANCHISE_ID_RE.fullmatch(value):
        raise ValueError(f"Cast to FranchiseId failed for value {value!r}")
    return FranchiseId(value)


class FranchiseBase(BaseModel):
    name: Optional[str] = Field(None, examples=["Acme Burgers Downtown"])
    company: Optional[str] = Field(None, examples=["Acme Corp"])
    contact_name: Optional[str] = Field(None, alias="contactName", examples=["Jane Doe"])
    contact_email: Optional[str] = Field(None, alias="contactEmail", examples=["jane@acme.test"])
    contact_phone: Optional[str] = Field(None, alias="contactPhone", examples=["+1 555 0100"])

    # JSON numbers are accepted for text fields and stored as strings.
    model_config = {
        "populate_by_name": True,
        "extra": "ignore",
        "coerce_numbers_to_str": True,
    }


class FranchiseCreate(FranchiseBase):
    """Schema for creating a franchise."""
    pass


class FranchiseUpdate(FranchiseBase):
    """Schema for updating a franchise.

    Only the keys present in the request body are applied.  Use
    ``model_dump(exclude_unset=True)`` to obtain them.
    """
    pass


class FranchiseRead(BaseModel):
    """Schema for reading a franchise from the API."""

    id: str
    name: str
    company: str
    contact_name: str = Field(..., alias="contactName")
    contact_email: Optional[str] = Field(None, alias="contactEmail")
    contact_phone: Optional[str] = Field(None, alias="contactPhone")
    created_at: datetime = Field(..., alias="createdAt")

    model_config = {
        "populate_by_name": True,
        "from_attributes": True,
    }


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    message: str
    error: Optional[str] = None
