"""
Editor task count notifications.

A user's count is the number of open tasks that are either unassigned or
assigned to them. After every task mutation the counts of all active
editor/admin/superadmin users are published on ``editor-tasks.{user_id}``
as a ``tasks.count`` event through an in-process broker. The SSE stream
listens to that broker and falls back to polling the database.
"""

from __future__ import annotations

import asyncio
import json
from collections import defaultdict
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import AsyncIterator, Awaitable, Callable, Dict, Iterable, List, Optional, Set

from sqlalchemy.ext.asyncio import AsyncSession

from dpf_cms.core.database.repositories.editor_tasks import EditorTaskRepository
from dpf_cms.core.database.repositories.users import UserRepository
from dpf_cms.core.logging_config import get_logger
from dpf_cms.core.models.domain.enums import EDITOR_AREA_ROLES

logger = get_logger(__name__)

COUNT_EVENT = "tasks.count"
STREAM_EVENT = "tasks"


def channel_for(user_id: int) -> str:
    return f"editor-tasks.{user_id}"


@dataclass
class BrokerMessage:
    channel: str
    event: str
    payload: Dict[str, int] = field(default_factory=dict)


class TaskCountBroker:
    """In-process publish/subscribe hub keyed by channel name.

    Each subscriber owns an unbounded queue; publishing never blocks.
    """

    def __init__(self) -> None:
        self._subscribers: Dict[str, Set[asyncio.Queue]] = defaultdict(set)

    @asynccontextmanager
    async def subscribe(self, channel: str) -> AsyncIterator[asyncio.Queue]:
        queue: asyncio.Queue = asyncio.Queue()
        self._subscribers[channel].add(queue)
        try:
            yield queue
        finally:
            self._subscribers[channel].discard(queue)
            if not self._subscribers[channel]:
                del self._subscribers[channel]

    def publish(self, channel: str, event: str, payload: Dict[str, int]) -> int:
        """Deliver a message to every subscriber of ``channel`` and return how many received it."""
        queues = list(self._subscribers.get(channel, ()))
        for queue in queues:
            queue.put_nowait(BrokerMessage(channel=channel, event=event, payload=dict(payload)))
        return len(queues)

    def subscriber_count(self, channel: str) -> int:
        return len(self._subscribers.get(channel, ()))


task_count_broker = TaskCountBroker()


async def compute_counts(session: AsyncSession, user_ids: Iterable[Optional[int]]) -> Dict[int, int]:
    """Return ``{user_id: open unassigned + open assigned to user}`` for the given users."""
    ids = sorted({int(user_id) for user_id in user_ids if user_id is not None})
    if not ids:
        return {}
    tasks = EditorTaskRepository(session)
    global_count = await tasks.count_open_unassigned()
    per_user = await tasks.count_open_assigned(ids)
    return {user_id: global_count + per_user.get(user_id, 0) for user_id in ids}


async def dispatch_count_for_user(
    session: AsyncSession, user_id: int, broker: TaskCountBroker = task_count_broker
) -> Optional[int]:
    counts = await compute_counts(session, [user_id])
    if user_id not in counts:
        return None
    broker.publish(channel_for(user_id), COUNT_EVENT, {"count": counts[user_id]})
    return counts[user_id]


async def dispatch_count_for_all(session: AsyncSession, broker: TaskCountBroker = task_count_broker) -> Dict[int, int]:
    """Publish fresh counts to every active editor, admin and superadmin."""
    listeners = await UserRepository(session).list_active_with_roles(role.value for role in EDITOR_AREA_ROLES)
    listener_ids: List[int] = [user.id for user in listeners if user.id is not None]
    if not listener_ids:
        return {}
    counts = await compute_counts(session, listener_ids)
    for user_id in listener_ids:
        broker.publish(channel_for(user_id), COUNT_EVENT, {"count": counts.get(user_id, 0)})
    logger.debug(f"Published task counts to {len(listener_ids)} listeners")
    return counts


def _count_event(count: int) -> dict:
    return {"event": STREAM_EVENT, "data": json.dumps({"count": count})}


async def task_count_events(
    user_id: int,
    load_count: Callable[[], Awaitable[int]],
    *,
    broker: TaskCountBroker = task_count_broker,
    poll_interval: float = 5.0,
    ttl: float = 55.0,
    retry_ms: int = 15000,
    is_disconnected: Optional[Callable[[], Awaitable[bool]]] = None,
) -> AsyncIterator[dict]:
    """
    Yield server-sent events for one user's task count.

    Emits a ``retry`` hint first. Every ``poll_interval`` seconds the count is
    reloaded: a changed value is sent as a ``tasks`` event, an unchanged one
    as a ``ping`` comment. Broker publications in between are forwarded
    immediately when they change the count. The generator ends after ``ttl``
    seconds so the client reconnects.

    Args:
        user_id: User whose channel is followed
        load_count: Coroutine factory returning the current count from the database
        broker: Broker to subscribe to
        poll_interval: Seconds between database polls
        ttl: Lifetime of the stream in seconds
        retry_ms: Reconnect delay advertised to the client
        is_disconnected: Optional check that stops the stream when the client went away
    """
    loop = asyncio.get_running_loop()
    deadline = loop.time() + ttl
    last_count: Optional[int] = None

    yield {"retry": retry_ms}

    async with broker.subscribe(channel_for(user_id)) as queue:
        next_poll = loop.time()
        while loop.time() < deadline:
            if is_disconnected is not None and await is_disconnected():
                logger.debug(f"Task stream client for user {user_id} disconnected")
                break

            if loop.time() >= next_poll:
                count = await load_count()
                if count != last_count:
                    last_count = count
                    yield _count_event(count)
                else:
                    yield {"comment": "ping"}
                next_poll = loop.time() + poll_interval

            timeout = min(next_poll, deadline) - loop.time()
            if timeout <= 0:
                continue
            try:
                message: BrokerMessage = await asyncio.wait_for(queue.get(), timeout)
            except asyncio.TimeoutError:
                continue
            pushed = message.payload.get("count")
            if message.event == COUNT_EVENT and pushed is not None and pushed != last_count:
                last_count = pushed
                yield _count_event(pushed)
