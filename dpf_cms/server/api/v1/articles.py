"""
Article management endpoints.

``router`` is mounted for editors and admins; ``admin_router`` adds the
publish workflow step for admins.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from dpf_cms.core.database import get_session
from dpf_cms.core.database.base import utc_now
from dpf_cms.core.database.entities.articles import Article
from dpf_cms.core.database.repositories.articles import ArticleRepository
from dpf_cms.core.database.repositories.programs import ProgramRepository
from dpf_cms.core.logging_config import get_logger
from dpf_cms.core.models.domain.enums import ArticleStatus
from dpf_cms.core.models.io.articles import ArticleCreate, ArticlePublish, ArticleRead, ArticleUpdate
from dpf_cms.core.models.io.common import MessageResponse, Page
from dpf_cms.server.core.pagination import PageParams, page_params
from dpf_cms.server.core.payloads import changes_from
from dpf_cms.server.exception_handlers.errors import NotFound, ValidationFailed
from dpf_cms.server.services.slugs import resolve_slug

logger = get_logger(__name__)

router = APIRouter()
admin_router = APIRouter()

REQUIRED_FIELDS = ("title", "category", "excerpt", "body", "status")


async def _get_article(article_id: int, session: AsyncSession) -> Article:
    article = await ArticleRepository(session).get_by_id(article_id)
    if article is None:
        raise NotFound("Article", article_id)
    return article


async def _ensure_program(session: AsyncSession, program_id: Optional[int]) -> None:
    if program_id is not None and await ProgramRepository(session).get_by_id(program_id) is None:
        raise ValidationFailed.single("program_id", "The selected program id is invalid.")


def _stamp_publication(changes: dict, current_status: Optional[str] = None, current_date=None) -> dict:
    """Give an article that ends up published a ``published_at`` when it has none."""
    final_status = changes.get("status", current_status)
    final_date = changes.get("published_at", current_date)
    if final_status == ArticleStatus.PUBLISHED.value and final_date is None:
        changes["published_at"] = utc_now()
    return changes


@router.get(
    "",
    response_model=Page[ArticleRead],
    summary="List Articles",
    description="Paginated article listing with title/excerpt search and status and category filters, recently edited first.",
    response_description="A page of articles.",
)
async def list_articles(
    q: Optional[str] = None,
    status_filter: Optional[str] = Query(default=None, alias="status"),
    category: Optional[str] = None,
    paging: PageParams = Depends(page_params(15)),
    session: AsyncSession = Depends(get_session),
) -> Page[ArticleRead]:
    repo = ArticleRepository(session)
    items, total = await repo.paginate(repo.search(q, status_filter, category), paging.page, paging.per_page)
    return Page[ArticleRead].build(
        [ArticleRead.model_validate(a) for a in items], total, paging.page, paging.per_page
    )


@router.post(
    "",
    response_model=ArticleRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Article",
    description="Create an article. The slug is derived from the title when omitted.",
    response_description="The created article.",
    responses={422: {"description": "Validation failed, unknown program or slug already taken"}},
)
async def create_article(payload: ArticleCreate, session: AsyncSession = Depends(get_session)) -> ArticleRead:
    """
    Create an article.

    A published article without ``published_at`` is stamped with the current time.
    """
    repo = ArticleRepository(session)
    await _ensure_program(session, payload.program_id)
    data = payload.model_dump()
    data["slug"] = resolve_slug(payload.slug, payload.title, await repo.slugs())
    data["status"] = payload.status.value
    article = await repo.create(Article(**_stamp_publication(data)))
    logger.info(f"Article {article.id} created ({article.slug})")
    return ArticleRead.model_validate(article)


@router.get(
    "/{article_id}",
    response_model=ArticleRead,
    summary="Get Article",
    description="Retrieve an article for editing.",
    response_description="The article.",
    responses={404: {"description": "Article not found"}},
)
async def get_article(article_id: int, session: AsyncSession = Depends(get_session)) -> ArticleRead:
    return ArticleRead.model_validate(await _get_article(article_id, session))


@router.put(
    "/{article_id}",
    response_model=ArticleRead,
    summary="Update Article",
    description="Partially update an article. Only submitted fields change.",
    response_description="The updated article.",
    responses={404: {"description": "Article not found"}, 422: {"description": "Validation failed"}},
)
async def update_article(
    article_id: int, payload: ArticleUpdate, session: AsyncSession = Depends(get_session)
) -> ArticleRead:
    repo = ArticleRepository(session)
    article = await _get_article(article_id, session)
    changes = changes_from(payload, REQUIRED_FIELDS)
    if "program_id" in changes:
        await _ensure_program(session, changes["program_id"])
    if "slug" in changes:
        changes["slug"] = resolve_slug(
            changes["slug"], changes.get("title") or article.title, await repo.slugs(), current=article.slug
        )
    article = await repo.update(article, _stamp_publication(changes, article.status, article.published_at))
    return ArticleRead.model_validate(article)


@router.delete(
    "/{article_id}",
    response_model=MessageResponse,
    summary="Delete Article",
    description="Delete an article.",
    response_description="Confirmation message.",
    responses={404: {"description": "Article not found"}},
)
async def delete_article(article_id: int, session: AsyncSession = Depends(get_session)) -> MessageResponse:
    await _get_article(article_id, session)
    await ArticleRepository(session).delete(article_id)
    return MessageResponse(message="Article deleted.")


@admin_router.post(
    "/{article_id}/publish",
    response_model=ArticleRead,
    summary="Publish Article",
    description="Move an article through the publish workflow. Defaults to publishing now.",
    response_description="The updated article.",
    responses={404: {"description": "Article not found"}},
)
async def publish_article(
    article_id: int, payload: Optional[ArticlePublish] = None, session: AsyncSession = Depends(get_session)
) -> ArticleRead:
    """
    Publish an article.

    - **status**: target status, ``published`` when omitted.
    - **published_at**: publication date, now when omitted and the article ends up published.
    """
    payload = payload or ArticlePublish()
    article = await _get_article(article_id, session)
    changes = {"status": (payload.status or ArticleStatus.PUBLISHED).value}
    if payload.published_at is not None:
        changes["published_at"] = payload.published_at
    article = await ArticleRepository(session).update(
        article, _stamp_publication(changes, article.status, article.published_at)
    )
    logger.info(f"Article {article.id} moved to {article.status}")
    return ArticleRead.model_validate(article)
