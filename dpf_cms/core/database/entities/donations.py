"""
Donation entity models.

Donations come either from the payment gateway (``midtrans``) or are entered
by an admin (``manual``).
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlmodel import DateTime, Field, Text

from ..base import Base, utc_now


class DonationBase(Base):
    """Base fields for a donation."""

    program_id: Optional[int] = Field(default=None, foreign_key="programs.id", index=True)
    donation_code: str = Field(max_length=64, unique=True, index=True)
    donor_name: Optional[str] = Field(default=None, max_length=255)
    donor_email: Optional[str] = Field(default=None, max_length=255)
    donor_phone: Optional[str] = Field(default=None, max_length=50)
    amount: Decimal = Field(max_digits=14, decimal_places=2)
    is_anonymous: bool = Field(default=False)
    payment_source: str = Field(default="midtrans", max_length=20, index=True)
    payment_method: Optional[str] = Field(default=None, max_length=50)
    payment_channel: Optional[str] = Field(default=None, max_length=50)
    status: str = Field(default="pending", max_length=20, index=True)
    midtrans_order_id: Optional[str] = Field(default=None, max_length=100)
    manual_proof_path: Optional[str] = Field(default=None, max_length=255)
    paid_at: Optional[datetime] = Field(default=None, sa_type=DateTime)
    notes: Optional[str] = Field(default=None, sa_type=Text)


class Donation(DonationBase, table=True):
    """Donation record.

    Table: donations
    """

    __tablename__ = "donations"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)

    created_at: datetime = Field(sa_type=DateTime, default_factory=utc_now, index=True)
    updated_at: datetime = Field(sa_type=DateTime, default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    def __repr__(self) -> str:
        return f"Donation(id={self.id}, code={self.donation_code}, status={self.status})"
