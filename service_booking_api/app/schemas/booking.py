"""
Pydantic models for service bookings.

``BookingCreate`` is the public intake form.  ``BookingRecord`` is the
row handed to storage (intake fields plus ``customer_id`` and
``status``), and ``BookingRead`` is a stored booking as returned by
storage.  ``BookingStatusUpdate`` is the admin status change payload.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field, StrictInt, field_validator

from .common import CamelModel


class BookingStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class BookingBase(CamelModel):
    service_type: str = Field(..., examples=["Windows Cleaning"])
    quantity: str = Field(..., examples=["3 Windows"])
    # Display string such as "R60"; never parsed as a number.
    price: str = Field(..., examples=["R60"])
    customer_name: str
    customer_email: str
    customer_phone: str
    service_date: Optional[str] = Field(None, examples=["2026-02-20"])
    notes: Optional[str] = None


class BookingCreate(BookingBase):
    """Schema for the public booking request form.

    Required text fields must be non‑empty.  Unknown keys, including any
    ``status`` supplied by a client, are ignored.  The optional fields
    may be omitted but not sent as ``null``.
    """

    service_type: str = Field(..., min_length=1)
    quantity: str = Field(..., min_length=1)
    price: str = Field(..., min_length=1)
    customer_name: str = Field(..., min_length=1)
    customer_email: str = Field(..., min_length=1)
    customer_phone: str = Field(..., min_length=1)

    @field_validator("service_date", "notes", mode="before")
    @classmethod
    def reject_explicit_null(cls, value):
        if value is None:
            raise ValueError("must be a string when provided")
        return value


class BookingRecord(BookingBase):
    """A booking ready to be inserted by ``BookingService.create_booking``."""

    customer_id: int = 0
    status: BookingStatus = BookingStatus.PENDING


class BookingRead(BookingRecord):
    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class BookingStatusUpdate(CamelModel):
    # No coercion from "1", true or 1.0.
    id: StrictInt
    status: BookingStatus
