"""
Users repository.

Data access for backoffice users and their personal access tokens.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from sqlalchemy import delete, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..base import utc_now
from ..entities.users import AccessToken, User
from .base import BaseRepository, QueryBuilder


class UserRepository(BaseRepository[User]):
    """Repository for user data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, User)

    async def get_by_email(self, email: str) -> Optional[User]:
        result = await self.session.execute(select(User).where(func.lower(User.email) == email.strip().lower()))
        return result.scalars().first()

    def search(self, role: Optional[str] = None, q: Optional[str] = None):
        """Build the superadmin user listing: optional role filter and name/email search, sorted by name."""
        stmt = select(User)
        stmt = QueryBuilder.apply_filters(stmt, User, {"role": role})
        stmt = QueryBuilder.apply_search(stmt, [User.name, User.email], q)
        return stmt.order_by(User.name)

    async def count_by_role(self) -> Dict[str, int]:
        result = await self.session.execute(select(User.role, func.count()).group_by(User.role))
        return {role: int(count) for role, count in result.all()}

    async def count_by_active(self) -> Dict[str, int]:
        result = await self.session.execute(select(User.is_active, func.count()).group_by(User.is_active))
        counts = {"active": 0, "inactive": 0}
        for is_active, count in result.all():
            counts["active" if is_active else "inactive"] += int(count)
        return counts

    async def list_active_with_roles(self, roles: Iterable[str]) -> List[User]:
        stmt = (
            select(User)
            .where(User.is_active == True)  # noqa: E712
            .where(User.role.in_(list(roles)))  # type: ignore[attr-defined]
            .order_by(User.name)
        )
        return await self.all(stmt)

    async def count_all(self) -> int:
        return int((await self.session.execute(select(func.count()).select_from(User))).scalar_one())


class AccessTokenRepository(BaseRepository[AccessToken]):
    """Repository for hashed personal access tokens."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, AccessToken)

    async def get_by_hash(self, token_hash: str) -> Optional[AccessToken]:
        result = await self.session.execute(select(AccessToken).where(AccessToken.token_hash == token_hash))
        return result.scalars().first()

    async def touch(self, token: AccessToken) -> None:
        token.last_used_at = utc_now()
        self.session.add(token)
        await self.session.commit()

    async def delete_for_user(self, user_id: int) -> None:
        await self.session.execute(delete(AccessToken).where(AccessToken.user_id == user_id))
        await self.session.commit()
