"""
User management endpoints (superadmin only).
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from dpf_cms.core.database import get_session
from dpf_cms.core.database.entities.users import User
from dpf_cms.core.database.repositories.users import AccessTokenRepository, UserRepository
from dpf_cms.core.logging_config import get_logger
from dpf_cms.core.models.domain.enums import UserRole
from dpf_cms.core.models.io.common import MessageResponse, Page
from dpf_cms.core.models.io.users import RoleSummary, UserCreate, UserRead, UserUpdate
from dpf_cms.server.core.auth import get_current_user
from dpf_cms.server.core.pagination import PageParams, page_params
from dpf_cms.server.core.payloads import changes_from
from dpf_cms.server.core.security import hash_password
from dpf_cms.server.exception_handlers.errors import BusinessRuleViolation, NotFound, ValidationFailed

logger = get_logger(__name__)

router = APIRouter()

MIN_PASSWORD_LENGTH = 8


async def _get_user(user_id: int, session: AsyncSession) -> User:
    user = await UserRepository(session).get_by_id(user_id)
    if user is None:
        raise NotFound("User", user_id)
    return user


async def _ensure_email_free(repo: UserRepository, email: str, exclude_id: Optional[int] = None) -> str:
    email = email.strip().lower()
    existing = await repo.get_by_email(email)
    if existing is not None and existing.id != exclude_id:
        raise ValidationFailed.single("email", "The email has already been taken.")
    return email


@router.get(
    "",
    response_model=Page[UserRead],
    summary="List Users",
    description="Paginated user listing sorted by name, with role filter and name/email search.",
    response_description="A page of users.",
)
async def list_users(
    role: Optional[UserRole] = None,
    q: Optional[str] = None,
    paging: PageParams = Depends(page_params(20)),
    session: AsyncSession = Depends(get_session),
) -> Page[UserRead]:
    repo = UserRepository(session)
    stmt = repo.search(role.value if role else None, q)
    items, total = await repo.paginate(stmt, paging.page, paging.per_page)
    return Page[UserRead].build([UserRead.model_validate(u) for u in items], total, paging.page, paging.per_page)


@router.get(
    "/roles",
    response_model=List[RoleSummary],
    summary="List Roles",
    description="The three roles with their labels and user counts.",
    response_description="Role summaries.",
)
async def list_roles(session: AsyncSession = Depends(get_session)) -> List[RoleSummary]:
    counts = await UserRepository(session).count_by_role()
    return [RoleSummary(name=role.value, label=role.label, users_count=counts.get(role.value, 0)) for role in UserRole]


@router.post(
    "",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create User",
    description="Create a backoffice user with one role.",
    response_description="The created user.",
    responses={422: {"description": "Validation failed or email already taken"}},
)
async def create_user(payload: UserCreate, session: AsyncSession = Depends(get_session)) -> UserRead:
    """
    Create a user.

    - **email**: unique (case-insensitive).
    - **password**: at least 8 characters, stored as a bcrypt hash.
    - **role**: editor (default), admin or superadmin.
    """
    repo = UserRepository(session)
    data = payload.model_dump(exclude={"password"})
    data["email"] = await _ensure_email_free(repo, payload.email)
    data["role"] = payload.role.value
    user = await repo.create(User(**data, password_hash=hash_password(payload.password)))
    logger.info(f"User {user.id} created with role {user.role}")
    return UserRead.model_validate(user)


@router.get(
    "/{user_id}",
    response_model=UserRead,
    summary="Get User",
    description="Retrieve one user.",
    response_description="The user.",
    responses={404: {"description": "User not found"}},
)
async def get_user(user_id: int, session: AsyncSession = Depends(get_session)) -> UserRead:
    return UserRead.model_validate(await _get_user(user_id, session))


@router.put(
    "/{user_id}",
    response_model=UserRead,
    summary="Update User",
    description="Partially update a user. An empty password keeps the current one; deactivating revokes all tokens.",
    response_description="The updated user.",
    responses={404: {"description": "User not found"}, 422: {"description": "Validation failed"}},
)
async def update_user(user_id: int, payload: UserUpdate, session: AsyncSession = Depends(get_session)) -> UserRead:
    repo = UserRepository(session)
    user = await _get_user(user_id, session)
    changes = changes_from(payload, ("name", "email", "role", "is_active"))

    password = changes.pop("password", None)
    if password:
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationFailed.single(
                "password", f"The password must be at least {MIN_PASSWORD_LENGTH} characters."
            )
        changes["password_hash"] = hash_password(password)
    if "email" in changes:
        changes["email"] = await _ensure_email_free(repo, changes["email"], exclude_id=user.id)

    user = await repo.update(user, changes)
    if changes.get("is_active") is False:
        await AccessTokenRepository(session).delete_for_user(user.id)
        logger.info(f"User {user.id} deactivated; tokens revoked")
    return UserRead.model_validate(user)


@router.delete(
    "/{user_id}",
    response_model=MessageResponse,
    summary="Delete User",
    description="Delete a user. Superadmins cannot delete their own account.",
    response_description="Confirmation message.",
    responses={404: {"description": "User not found"}, 422: {"description": "Attempt to delete own account"}},
)
async def delete_user(
    user_id: int,
    current: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> MessageResponse:
    await _get_user(user_id, session)
    if user_id == current.id:
        raise BusinessRuleViolation("You cannot delete your own account.")
    await AccessTokenRepository(session).delete_for_user(user_id)
    await UserRepository(session).delete(user_id)
    logger.info(f"User {user_id} deleted by {current.id}")
    return MessageResponse(message="User deleted.")
