"""
Donation and donation report I/O models.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from dpf_cms.core.models.domain.enums import DonationStatus

from .common import Money, UtcDateTime


class DonationRead(BaseModel):
    """Schema for reading a donation, with the program title denormalized for listings."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    program_id: Optional[int] = None
    program_title: Optional[str] = None
    donation_code: str
    donor_name: Optional[str] = None
    donor_email: Optional[str] = None
    donor_phone: Optional[str] = None
    amount: Money
    is_anonymous: bool
    payment_source: str
    payment_method: Optional[str] = None
    payment_channel: Optional[str] = None
    status: str
    midtrans_order_id: Optional[str] = None
    manual_proof_path: Optional[str] = None
    paid_at: Optional[datetime] = None
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class ManualDonationCreate(BaseModel):
    """Schema for recording an offline (manual) donation."""

    program_id: Optional[int] = Field(default=None, description="Program credited with the amount")
    donor_name: str = Field(min_length=1, max_length=255)
    donor_email: Optional[EmailStr] = Field(default=None, max_length=255)
    donor_phone: Optional[str] = Field(default=None, max_length=50)
    amount: Decimal = Field(ge=1, max_digits=14, decimal_places=2)
    is_anonymous: bool
    payment_method: str = Field(min_length=1, max_length=50)
    payment_channel: Optional[str] = Field(default=None, max_length=50)
    manual_proof_path: Optional[str] = Field(default=None, max_length=255)
    notes: Optional[str] = None


class DonationStatusUpdate(BaseModel):
    status: DonationStatus
    paid_at: Optional[UtcDateTime] = None
    notes: Optional[str] = None


class DonationReportSummary(BaseModel):
    total_count: int = 0
    total_amount: float = 0.0
    manual_count: int = 0
    manual_amount: float = 0.0
    midtrans_count: int = 0
    midtrans_amount: float = 0.0


class DonationReportAll(BaseModel):
    """Unpaginated report response (``all=true``)."""

    data: List[DonationRead]
    total: int
    summary: DonationReportSummary


class HomeStats(BaseModel):
    """Site-wide figures shown on the home page."""

    total_programs: int
    total_donations: int
    amount_collected: float


class DonationTotals(BaseModel):
    count: int = 0
    amount: float = 0.0


class PublicDonationSummary(BaseModel):
    """Paid donations not tied to any program."""

    general: DonationTotals


class DonationConfirmation(BaseModel):
    """A donor's report of a bank transfer, awaiting verification by an admin."""

    program_id: Optional[int] = None
    donor_name: str = Field(min_length=1, max_length=255)
    donor_phone: str = Field(min_length=1, max_length=30)
    donor_email: Optional[EmailStr] = None
    amount: Decimal = Field(ge=1000, max_digits=14, decimal_places=2)
    bank_destination: str = Field(min_length=1, max_length=255)
    purpose: str = Field(min_length=1, max_length=255)
    notes: Optional[str] = None

    def combined_notes(self) -> str:
        """
        >>> DonationConfirmation(donor_name="A", donor_phone="1", amount=1000, bank_destination="BSI",
        ...                      purpose="Zakat", notes="via mobile").combined_notes()
        'Tujuan: Zakat | via mobile'
        """
        purpose = f"Tujuan: {self.purpose}"
        return f"{purpose} | {self.notes}" if self.notes else purpose


class DonationConfirmationResult(BaseModel):
    message: str
    donation: DonationRead
