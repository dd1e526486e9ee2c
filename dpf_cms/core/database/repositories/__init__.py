"""
Repositories, one per entity, sharing ``BaseRepository`` CRUD helpers.
"""

from .articles import ArticleRepository
from .base import BaseRepository, QueryBuilder
from .donations import DonationRepository
from .editor_tasks import EditorTaskRepository
from .ordered import BannerRepository, OrderedRepository, PartnerRepository, TagRepository
from .organization_members import OrganizationMemberRepository
from .programs import ProgramRepository
from .users import AccessTokenRepository, UserRepository

__all__ = [
    "AccessTokenRepository",
    "ArticleRepository",
    "BannerRepository",
    "BaseRepository",
    "DonationRepository",
    "EditorTaskRepository",
    "OrderedRepository",
    "OrganizationMemberRepository",
    "PartnerRepository",
    "ProgramRepository",
    "QueryBuilder",
    "TagRepository",
    "UserRepository",
]
