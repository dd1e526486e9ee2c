"""
Donation bookkeeping.

A program's ``collected_amount`` tracks the sum of its paid donations: it
grows when a donation becomes ``paid`` and shrinks when a paid donation
changes status or is deleted.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional

from fastapi import UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from dpf_cms.core.database.base import utc_now
from dpf_cms.core.database.entities.donations import Donation
from dpf_cms.core.database.repositories.donations import DonationRepository
from dpf_cms.core.database.repositories.programs import ProgramRepository
from dpf_cms.core.logging_config import get_logger
from dpf_cms.core.models.domain.enums import DonationStatus, PaymentSource
from dpf_cms.core.models.io.donations import DonationConfirmation, DonationStatusUpdate, ManualDonationCreate
from dpf_cms.core.monitoring import log_domain_event
from dpf_cms.server.core.config import settings
from dpf_cms.server.exception_handlers.errors import ValidationFailed

from .storage import LocalStorage

logger = get_logger(__name__)

CODE_PREFIX = "DPF"
PAID = DonationStatus.PAID.value

PROOF_FOLDER = "donation-proofs"
PROOF_EXTENSIONS = ("jpg", "jpeg", "png", "pdf")


def code_prefix(day: date) -> str:
    return f"{CODE_PREFIX}-{day.strftime('%Y%m%d')}-"


def next_code(prefix: str, last_code: Optional[str]) -> str:
    """Return the code following ``last_code`` within ``prefix``.

    >>> next_code("DPF-20250101-", "DPF-20250101-0009")
    'DPF-20250101-0010'
    >>> next_code("DPF-20250101-", None)
    'DPF-20250101-0001'
    """
    sequence = 1
    if last_code:
        tail = last_code[len(prefix):]
        if tail.isdigit():
            sequence = int(tail) + 1
    return f"{prefix}{sequence:04d}"


async def generate_donation_code(repo: DonationRepository, day: Optional[date] = None) -> str:
    prefix = code_prefix(day or utc_now().date())
    return next_code(prefix, await repo.last_code_with_prefix(prefix))


class DonationService:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.donations = DonationRepository(session)
        self.programs = ProgramRepository(session)

    async def _ensure_program(self, program_id: Optional[int]) -> None:
        if program_id is not None and await self.programs.get_by_id(program_id) is None:
            raise ValidationFailed.single("program_id", "The selected program id is invalid.")

    async def create_manual(self, payload: ManualDonationCreate) -> Donation:
        """Record an offline donation as paid now and credit its program."""
        await self._ensure_program(payload.program_id)
        now = utc_now()
        donation = Donation(
            **payload.model_dump(),
            donation_code=await generate_donation_code(self.donations, now.date()),
            payment_source=PaymentSource.MANUAL.value,
            status=PAID,
            paid_at=now,
        )
        self.session.add(donation)
        await self.programs.adjust_collected(donation.program_id, Decimal(donation.amount))
        await self.session.commit()
        await self.session.refresh(donation)
        log_domain_event(
            "donation.manual_created",
            {"donation_id": donation.id, "code": donation.donation_code, "amount": float(donation.amount)},
        )
        return donation

    async def confirm_transfer(
        self, payload: DonationConfirmation, proof: Optional[UploadFile], storage: LocalStorage
    ) -> Donation:
        """Record a donor's transfer confirmation as a pending manual donation.

        The program total is untouched until an admin marks the donation paid.
        """
        await self._ensure_program(payload.program_id)
        proof_path = None
        if proof is not None and proof.filename:
            stored = await storage.save(proof, PROOF_FOLDER, PROOF_EXTENSIONS, settings.max_upload_kb, field="proof")
            proof_path = stored.path

        donation = Donation(
            program_id=payload.program_id,
            donation_code=await generate_donation_code(self.donations),
            donor_name=payload.donor_name,
            donor_email=payload.donor_email,
            donor_phone=payload.donor_phone,
            amount=payload.amount,
            is_anonymous=False,
            payment_source=PaymentSource.MANUAL.value,
            payment_method="transfer",
            payment_channel=payload.bank_destination,
            status=DonationStatus.PENDING.value,
            notes=payload.combined_notes(),
            manual_proof_path=proof_path,
        )
        self.session.add(donation)
        await self.session.commit()
        await self.session.refresh(donation)
        log_domain_event(
            "donation.confirmation_received",
            {"donation_id": donation.id, "code": donation.donation_code, "amount": float(donation.amount)},
        )
        return donation

    async def change_status(self, donation: Donation, payload: DonationStatusUpdate) -> Donation:
        """Move a donation to a new status and keep the program total in step."""
        previous = donation.status
        target = payload.status.value
        amount = Decimal(donation.amount)

        if previous != PAID and target == PAID:
            donation.paid_at = payload.paid_at or donation.paid_at or utc_now()
            await self.programs.adjust_collected(donation.program_id, amount)
        elif previous == PAID and target != PAID:
            await self.programs.adjust_collected(donation.program_id, -amount)
        elif payload.paid_at is not None:
            donation.paid_at = payload.paid_at

        donation.status = target
        if payload.notes is not None:
            donation.notes = payload.notes
        donation = await self.donations.update(donation)
        if previous != target:
            log_domain_event(
                "donation.status_changed", {"donation_id": donation.id, "from": previous, "to": target}
            )
        return donation

    async def delete(self, donation: Donation) -> None:
        if donation.status == PAID:
            await self.programs.adjust_collected(donation.program_id, -Decimal(donation.amount))
        await self.session.delete(donation)
        await self.session.commit()
        logger.info(f"Deleted donation {donation.donation_code}")
