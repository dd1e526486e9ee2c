"""
Authentication endpoints.

Login exchanges email and password for an opaque bearer token; logout
revokes the token used for the request.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from dpf_cms.core.database import get_session
from dpf_cms.core.database.entities.users import User
from dpf_cms.core.database.repositories.users import AccessTokenRepository, UserRepository
from dpf_cms.core.logging_config import get_logger
from dpf_cms.core.models.io.common import MessageResponse
from dpf_cms.core.models.io.users import CurrentUser, LoginRequest, PasswordChange, TokenResponse, UserRead
from dpf_cms.server.core.auth import get_current_user, issue_token
from dpf_cms.server.core.security import hash_password, verify_password
from dpf_cms.server.exception_handlers.errors import BusinessRuleViolation, Forbidden, ValidationFailed

logger = get_logger(__name__)

router = APIRouter()


@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Log In",
    description="Exchange email and password for a bearer token.",
    response_description="The issued token and the authenticated user.",
    responses={
        200: {"description": "Credentials accepted"},
        403: {"description": "Account is inactive"},
        422: {"description": "Credentials rejected"},
    },
)
async def login(payload: LoginRequest, session: AsyncSession = Depends(get_session)) -> TokenResponse:
    """
    Authenticate a backoffice user.

    The token is returned once in plain text; only its digest is stored.
    """
    user = await UserRepository(session).get_by_email(payload.email)
    if user is None or not verify_password(payload.password, user.password_hash):
        logger.info(f"Failed login for {payload.email}")
        raise ValidationFailed.single("email", "These credentials do not match our records.")
    if not user.is_active:
        raise Forbidden("Account is inactive.")
    token = await issue_token(session, user)
    logger.info(f"User {user.id} logged in")
    return TokenResponse(token=token, user=UserRead.model_validate(user))


@router.post(
    "/logout",
    response_model=MessageResponse,
    summary="Log Out",
    description="Revoke the bearer token used for this request.",
    response_description="Confirmation message.",
)
async def logout(
    request: Request,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> MessageResponse:
    await AccessTokenRepository(session).delete(request.state.access_token_id)
    logger.info(f"User {user.id} logged out")
    return MessageResponse(message="Logged out.")


@router.get(
    "/me",
    response_model=CurrentUser,
    summary="Current User",
    description="Return the user behind the bearer token.",
    response_description="The authenticated user.",
)
async def me(user: User = Depends(get_current_user)) -> CurrentUser:
    return CurrentUser(user=UserRead.model_validate(user))


@router.put(
    "/password",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Change Password",
    description="Change the caller's password after confirming the current one.",
    response_description="Confirmation message.",
    responses={422: {"description": "Current password wrong or confirmation mismatch"}},
)
async def change_password(
    payload: PasswordChange,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> MessageResponse:
    """
    Change the password of the authenticated user.

    - **current_password**: must match the stored password.
    - **new_password**: at least 8 characters.
    - **new_password_confirmation**: must equal ``new_password``.
    """
    if payload.new_password != payload.new_password_confirmation:
        raise ValidationFailed.single("new_password", "The new password confirmation does not match.")
    if not verify_password(payload.current_password, user.password_hash):
        raise BusinessRuleViolation("The current password is incorrect.")
    await UserRepository(session).update(user, {"password_hash": hash_password(payload.new_password)})
    logger.info(f"User {user.id} changed their password")
    return MessageResponse(message="Password updated.")
