"""
First-start provisioning.

When the users table is empty and bootstrap credentials are configured, a
superadmin account is created so the backoffice can be reached.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from dpf_cms.core.database.entities.users import User
from dpf_cms.core.database.repositories.users import UserRepository
from dpf_cms.core.logging_config import get_logger
from dpf_cms.core.models.domain.enums import UserRole
from dpf_cms.server.core.config import BootstrapConfig
from dpf_cms.server.core.security import hash_password

logger = get_logger(__name__)


async def ensure_superadmin(session: AsyncSession, config: BootstrapConfig) -> Optional[User]:
    """Create the bootstrap superadmin if no user exists yet; return it, or None when skipped."""
    if not config.email or not config.password:
        logger.debug("No bootstrap credentials configured; skipping superadmin provisioning")
        return None

    repo = UserRepository(session)
    if await repo.count_all() > 0:
        return None

    user = await repo.create(
        User(
            name=config.name,
            email=config.email.strip().lower(),
            password_hash=hash_password(config.password),
            role=UserRole.SUPERADMIN.value,
            role_label=UserRole.SUPERADMIN.label,
            is_active=True,
        )
    )
    logger.info(f"Bootstrap superadmin created: {user.email}")
    return user
