"""
Public site endpoints (no authentication).

Programs and articles are exposed by slug; only published articles and
programs in a public status are visible.
"""

from __future__ import annotations

from decimal import Decimal
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from pydantic import BaseModel, ValidationError
from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from dpf_cms.core.database import get_session
from dpf_cms.core.database.entities.donations import Donation
from dpf_cms.core.database.entities.programs import Program
from dpf_cms.core.database.repositories.articles import ArticleRepository
from dpf_cms.core.database.repositories.donations import DonationRepository
from dpf_cms.core.database.repositories.ordered import BannerRepository, PartnerRepository, TagRepository
from dpf_cms.core.database.repositories.organization_members import OrganizationMemberRepository
from dpf_cms.core.database.repositories.programs import PUBLIC_STATUSES, ProgramRepository
from dpf_cms.core.models.io.articles import ArticleRead, PublicArticleDetail
from dpf_cms.core.models.io.common import Page
from dpf_cms.core.models.io.display import BannerRead, PartnerRead, TagRead
from dpf_cms.core.models.io.donations import (
    DonationConfirmation,
    DonationConfirmationResult,
    DonationTotals,
    HomeStats,
    PublicDonationSummary,
)
from dpf_cms.core.models.io.organization import OrganizationMemberRead
from dpf_cms.core.models.io.programs import (
    ProgramRead,
    ProgramUpdateSummary,
    PublicDonation,
    PublicProgramDetail,
)
from dpf_cms.server.core.pagination import PageParams, page_params
from dpf_cms.server.exception_handlers.app_handlers import validation_errors_to_dict
from dpf_cms.server.exception_handlers.errors import NotFound, ValidationFailed
from dpf_cms.server.services.donation_report import DonationReportService
from dpf_cms.server.services.donations import DonationService
from dpf_cms.server.services.storage import LocalStorage, get_storage

router = APIRouter()

ANONYMOUS_DONOR = "Hamba Allah"
HOME_HIGHLIGHTS = 6
HOME_ARTICLES = 4
HOME_PARTNERS = 12


class HomePayload(BaseModel):
    highlights: List[ProgramRead]
    latest_articles: List[ArticleRead]
    partners: List[PartnerRead]
    stats: HomeStats


def progress_percent(collected, target) -> float:
    """Collected share of the target in percent, one decimal, capped at 100.

    >>> progress_percent(Decimal("250"), Decimal("1000"))
    25.0
    >>> progress_percent(5, 0)
    0.0
    """
    target = Decimal(target or 0)
    if target <= 0:
        return 0.0
    return float(min(Decimal(100), round(Decimal(collected or 0) / target * 100, 1)))


def public_donation(donation: Donation) -> PublicDonation:
    return PublicDonation(
        id=donation.id,
        donor_name=ANONYMOUS_DONOR if donation.is_anonymous else donation.donor_name,
        amount=donation.amount,
        is_anonymous=donation.is_anonymous,
        paid_at=donation.paid_at,
    )


async def home_stats(session: AsyncSession) -> HomeStats:
    programs = await session.execute(select(func.count(Program.id)).where(Program.status == "active"))
    paid = await session.execute(
        select(func.count(Donation.id), func.coalesce(func.sum(Donation.amount), 0)).where(Donation.status == "paid")
    )
    count, amount = paid.one()
    return HomeStats(
        total_programs=int(programs.scalar_one()),
        total_donations=int(count),
        amount_collected=float(Decimal(str(amount))),
    )


@router.get(
    "/ping",
    summary="Ping",
    description="Liveness probe for the public API.",
    response_description="Pong.",
)
async def ping():
    return {"message": "pong"}


@router.get(
    "/home",
    response_model=HomePayload,
    summary="Home Page",
    description="Highlighted programs, latest articles, active partners and donation statistics.",
    response_description="Home page payload.",
)
async def home(session: AsyncSession = Depends(get_session)) -> HomePayload:
    programs = ProgramRepository(session)
    highlights = await programs.all(programs.public_search(highlight=True).limit(HOME_HIGHLIGHTS))
    if not highlights:
        highlights = await programs.all(programs.public_search(status="active").limit(HOME_HIGHLIGHTS))
    articles = ArticleRepository(session)
    latest = await articles.all(articles.public_search().limit(HOME_ARTICLES))
    if not latest:
        latest = await articles.all(articles.newest().limit(HOME_ARTICLES))
    partners = (await PartnerRepository(session).list_ordered(active_only=True))[:HOME_PARTNERS]
    return HomePayload(
        highlights=[ProgramRead.model_validate(p) for p in highlights],
        latest_articles=[ArticleRead.model_validate(a) for a in latest],
        partners=[PartnerRead.model_validate(p) for p in partners],
        stats=await home_stats(session),
    )


@router.get(
    "/programs",
    response_model=Page[ProgramRead],
    summary="Public Programs",
    description="Programs in a public status, highlighted first, then by publication date.",
    response_description="A page of programs.",
)
async def public_programs(
    status: Optional[str] = None,
    category: Optional[str] = None,
    highlight: bool = Query(default=False, description="Only highlighted programs"),
    paging: PageParams = Depends(page_params(12)),
    session: AsyncSession = Depends(get_session),
) -> Page[ProgramRead]:
    repo = ProgramRepository(session)
    items, total = await repo.paginate(repo.public_search(status, category, highlight), paging.page, paging.per_page)
    return Page[ProgramRead].build(
        [ProgramRead.model_validate(p) for p in items], total, paging.page, paging.per_page
    )


@router.get(
    "/programs/{slug}",
    response_model=PublicProgramDetail,
    summary="Public Program Detail",
    description="A program with its progress, recent paid donations and linked published articles.",
    response_description="Program detail payload.",
    responses={404: {"description": "Program not found"}},
)
async def public_program(slug: str, session: AsyncSession = Depends(get_session)) -> PublicProgramDetail:
    program = await ProgramRepository(session).get_by_slug(slug, statuses=PUBLIC_STATUSES)
    if program is None:
        raise NotFound("Program", slug)
    donations = await DonationRepository(session).recent_paid_for_program(program.id)
    updates = await ArticleRepository(session).updates_for_program(program.id)
    return PublicProgramDetail(
        program=ProgramRead.model_validate(program),
        progress_percent=progress_percent(program.collected_amount, program.target_amount),
        recent_donations=[public_donation(d) for d in donations],
        latest_updates=[ProgramUpdateSummary.model_validate(a) for a in updates],
    )


@router.get(
    "/articles",
    response_model=Page[ArticleRead],
    summary="Public Articles",
    description="Published articles, newest first, with category filter and title search.",
    response_description="A page of articles.",
)
async def public_articles(
    category: Optional[str] = None,
    q: Optional[str] = None,
    paging: PageParams = Depends(page_params(12)),
    session: AsyncSession = Depends(get_session),
) -> Page[ArticleRead]:
    repo = ArticleRepository(session)
    items, total = await repo.paginate(repo.public_search(q, category), paging.page, paging.per_page)
    return Page[ArticleRead].build(
        [ArticleRead.model_validate(a) for a in items], total, paging.page, paging.per_page
    )


@router.get(
    "/articles/{slug}",
    response_model=PublicArticleDetail,
    summary="Public Article Detail",
    description="A published article with up to three related articles from the same category.",
    response_description="Article detail payload.",
    responses={404: {"description": "Article not found or not published"}},
)
async def public_article(slug: str, session: AsyncSession = Depends(get_session)) -> PublicArticleDetail:
    repo = ArticleRepository(session)
    article = await repo.get_published_by_slug(slug)
    if article is None:
        raise NotFound("Article", slug)
    related = await repo.related(article)
    return PublicArticleDetail(
        article=ArticleRead.model_validate(article),
        related=[ArticleRead.model_validate(a) for a in related],
    )


@router.get(
    "/banners",
    response_model=List[BannerRead],
    summary="Public Banners",
    description="Homepage banners in display order.",
    response_description="Banners.",
)
async def public_banners(session: AsyncSession = Depends(get_session)) -> List[BannerRead]:
    return [BannerRead.model_validate(b) for b in await BannerRepository(session).list_ordered()]


@router.get(
    "/tags",
    response_model=List[TagRead],
    summary="Public Tags",
    description="Active quick-link tags in sort order.",
    response_description="Tags.",
)
async def public_tags(session: AsyncSession = Depends(get_session)) -> List[TagRead]:
    return [TagRead.model_validate(t) for t in await TagRepository(session).list_ordered(active_only=True)]


@router.get(
    "/partners",
    response_model=List[PartnerRead],
    summary="Public Partners",
    description="Active partners in display order.",
    response_description="Partners.",
)
async def public_partners(session: AsyncSession = Depends(get_session)) -> List[PartnerRead]:
    return [PartnerRead.model_validate(p) for p in await PartnerRepository(session).list_ordered(active_only=True)]


@router.get(
    "/organization",
    response_model=List[OrganizationMemberRead],
    summary="Public Organization Structure",
    description="Active organization members sorted by group then order.",
    response_description="Organization members.",
)
async def public_organization(session: AsyncSession = Depends(get_session)) -> List[OrganizationMemberRead]:
    members = await OrganizationMemberRepository(session).active_members()
    return [OrganizationMemberRead.model_validate(m) for m in members]


@router.get(
    "/donations/summary",
    response_model=PublicDonationSummary,
    summary="Public Donation Summary",
    description="Count and total of paid general donations, i.e. donations not tied to a program.",
    response_description="Donation summary.",
)
async def public_donation_summary(session: AsyncSession = Depends(get_session)) -> PublicDonationSummary:
    result = await session.execute(
        select(func.count(Donation.id), func.coalesce(func.sum(Donation.amount), 0)).where(
            Donation.status == "paid", Donation.program_id.is_(None)  # type: ignore[union-attr]
        )
    )
    count, amount = result.one()
    return PublicDonationSummary(general=DonationTotals(count=int(count), amount=float(Decimal(str(amount)))))


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None or not value.strip():
        return None
    return value.strip()


@router.post(
    "/donations/confirm",
    response_model=DonationConfirmationResult,
    status_code=201,
    summary="Confirm Bank Transfer",
    description="Report a bank transfer donation with an optional proof file (jpg, jpeg, png or pdf, 10 MB max). "
    "The donation is stored as pending until an admin verifies it.",
    response_description="Acknowledgement and the pending donation.",
    responses={422: {"description": "Validation failed, unknown program or unsupported proof file"}},
)
async def confirm_donation(
    donor_name: Optional[str] = Form(default=None),
    donor_phone: Optional[str] = Form(default=None),
    amount: Optional[str] = Form(default=None, description="At least 1000"),
    bank_destination: Optional[str] = Form(default=None, description="Bank account the transfer was sent to"),
    purpose: Optional[str] = Form(default=None, description="Program name or general donation"),
    program_id: Optional[str] = Form(default=None),
    donor_email: Optional[str] = Form(default=None),
    notes: Optional[str] = Form(default=None),
    proof: Optional[UploadFile] = File(default=None, description="Transfer receipt"),
    session: AsyncSession = Depends(get_session),
    storage: LocalStorage = Depends(get_storage),
) -> DonationConfirmationResult:
    fields = {
        "donor_name": donor_name,
        "donor_phone": donor_phone,
        "amount": amount,
        "bank_destination": bank_destination,
        "purpose": purpose,
        "program_id": program_id,
        "donor_email": donor_email,
        "notes": notes,
    }
    try:
        payload = DonationConfirmation.model_validate({k: _blank_to_none(v) for k, v in fields.items()})
    except ValidationError as e:
        raise ValidationFailed(validation_errors_to_dict(e.errors())) from e

    donation = await DonationService(session).confirm_transfer(payload, proof, storage)
    return DonationConfirmationResult(
        message="Konfirmasi donasi diterima. Tim akan memverifikasi.",
        donation=(await DonationReportService(session).to_read([donation]))[0],
    )
