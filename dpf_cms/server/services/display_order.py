"""
Display-order assignment for banners, tags, partners and organization members.

A missing order on create gets the suggested value; an explicit order that
collides with a peer is rejected on that field.
"""

from __future__ import annotations

from typing import Optional

from dpf_cms.core.database.repositories.ordered import OrderedRepository
from dpf_cms.core.database.repositories.organization_members import OrganizationMemberRepository
from dpf_cms.core.ordering import next_available_order, next_order_at_end
from dpf_cms.server.exception_handlers.errors import ValidationFailed


def _taken(field: str) -> ValidationFailed:
    return ValidationFailed.single(field, f"The {field.replace('_', ' ')} has already been taken.")


async def suggest_order(repo: OrderedRepository) -> int:
    return next_available_order(await repo.used_orders())


async def resolve_order(repo: OrderedRepository, value: Optional[int], exclude_id: Optional[int] = None) -> int:
    """Return ``value`` when free among all rows, or the lowest free slot when ``value`` is None."""
    if value is None:
        return await suggest_order(repo)
    if await repo.order_taken(value, exclude_id=exclude_id):
        raise _taken(repo.order_field)
    return value


async def suggest_member_order(repo: OrganizationMemberRepository, group: str) -> int:
    return next_order_at_end(await repo.orders_in_group(group))


async def resolve_member_order(
    repo: OrganizationMemberRepository, group: str, value: Optional[int], exclude_id: Optional[int] = None
) -> int:
    """Same as ``resolve_order`` but scoped to one group and appending at its end."""
    used = await repo.orders_in_group(group, exclude_id=exclude_id)
    if value is None:
        return next_order_at_end(used)
    if value in used:
        raise _taken("order")
    return value
