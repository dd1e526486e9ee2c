"""
Editor task count feed.

``/count`` is the polling endpoint; ``/stream`` pushes the same number as
server-sent events and accepts the token as a query parameter because
EventSource cannot send headers.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sse_starlette.sse import EventSourceResponse

from dpf_cms.core.database import get_session, get_session_factory
from dpf_cms.core.database.entities.users import User
from dpf_cms.core.database.repositories.editor_tasks import EditorTaskRepository
from dpf_cms.core.logging_config import get_logger
from dpf_cms.core.models.domain.enums import EDITOR_AREA_ROLES
from dpf_cms.core.models.io.editor_tasks import TaskCount
from dpf_cms.server.core.auth import ensure_role, get_current_user, get_stream_user
from dpf_cms.server.core.config import settings
from dpf_cms.server.services.task_notifier import task_count_broker, task_count_events

logger = get_logger(__name__)

router = APIRouter()


@router.get(
    "/count",
    response_model=TaskCount,
    summary="Open Task Count",
    description="Number of open tasks that are unassigned or assigned to the caller.",
    response_description="The open task count.",
)
async def task_count(
    user: User = Depends(get_current_user), session: AsyncSession = Depends(get_session)
) -> TaskCount:
    ensure_role(user, EDITOR_AREA_ROLES)
    return TaskCount(count=await EditorTaskRepository(session).open_count_for(user.id))


@router.get(
    "/stream",
    summary="Open Task Count Stream",
    description="Server-sent events carrying the caller's open task count. "
    "Sends ``event: tasks`` with ``{count}`` on change and a ping comment otherwise; closes after about a minute.",
    response_description="text/event-stream",
)
async def task_stream(
    request: Request,
    user: User = Depends(get_stream_user),
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
):
    """
    Stream the caller's open task count.

    Each poll opens its own short-lived session so the connection never holds
    a database session for the stream's lifetime.
    """
    ensure_role(user, EDITOR_AREA_ROLES)
    user_id = user.id
    feed = settings.task_feed

    async def load_count() -> int:
        async with session_factory() as session:
            return await EditorTaskRepository(session).open_count_for(user_id)

    logger.debug(f"Task stream opened for user {user_id}")
    return EventSourceResponse(
        task_count_events(
            user_id,
            load_count,
            broker=task_count_broker,
            poll_interval=feed.poll_interval_seconds,
            ttl=feed.stream_ttl_seconds,
            retry_ms=feed.retry_ms,
            is_disconnected=request.is_disconnected,
        )
    )
