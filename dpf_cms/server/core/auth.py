"""
Authentication and role-based access dependencies.

Requests authenticate with ``Authorization: Bearer <token>``. The editor task
stream may also pass the token as ``?token=`` because EventSource cannot set
headers.
"""

from __future__ import annotations

from typing import Iterable, Optional

from fastapi import Depends, Query, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from dpf_cms.core.database import get_session
from dpf_cms.core.database.entities.users import AccessToken, User
from dpf_cms.core.database.repositories.users import AccessTokenRepository, UserRepository
from dpf_cms.core.logging_config import get_logger
from dpf_cms.core.models.domain.enums import UserRole
from dpf_cms.server.exception_handlers.errors import Forbidden, Unauthenticated

from .security import generate_token, hash_token

logger = get_logger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


async def issue_token(session: AsyncSession, user: User, name: str = "spa") -> str:
    """Create a personal access token for ``user`` and return its plain text once."""
    plain = generate_token()
    await AccessTokenRepository(session).create(AccessToken(user_id=user.id, name=name, token_hash=hash_token(plain)))
    return plain


async def _authenticate(session: AsyncSession, token: Optional[str], request: Request) -> User:
    if not token:
        raise Unauthenticated()
    tokens = AccessTokenRepository(session)
    record = await tokens.get_by_hash(hash_token(token))
    if record is None:
        raise Unauthenticated()
    user = await UserRepository(session).get_by_id(record.user_id)
    if user is None:
        raise Unauthenticated()
    if not user.is_active:
        raise Forbidden("Account is inactive.")
    await tokens.touch(record)
    request.state.access_token_id = record.id
    return user


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    session: AsyncSession = Depends(get_session),
) -> User:
    """Resolve the user behind the bearer token, rejecting inactive accounts."""
    return await _authenticate(session, credentials.credentials if credentials else None, request)


async def get_stream_user(
    request: Request,
    token: Optional[str] = Query(default=None, description="Access token for clients that cannot send headers"),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    session: AsyncSession = Depends(get_session),
) -> User:
    """Like ``get_current_user`` but also accepts the token from the query string."""
    return await _authenticate(session, credentials.credentials if credentials else token, request)


def ensure_role(user: User, roles: Iterable[UserRole]) -> User:
    allowed = {role.value for role in roles}
    if user.role not in allowed:
        logger.info(f"User {user.id} with role {user.role} denied; requires one of {sorted(allowed)}")
        raise Forbidden()
    return user


def require_roles(*roles: UserRole):
    """Dependency factory granting access only to users holding one of ``roles``."""

    async def dependency(user: User = Depends(get_current_user)) -> User:
        return ensure_role(user, roles)

    return dependency
