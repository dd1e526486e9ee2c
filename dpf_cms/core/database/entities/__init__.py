"""
Database entities, one module per table.

Importing this package registers every table on ``Base.metadata``.
"""

from .articles import Article
from .banners import Banner
from .donations import Donation
from .editor_tasks import EditorTask, EditorTaskAttachment
from .organization_members import OrganizationMember
from .partners import Partner
from .programs import Program
from .tags import Tag
from .users import AccessToken, User

__all__ = [
    "AccessToken",
    "Article",
    "Banner",
    "Donation",
    "EditorTask",
    "EditorTaskAttachment",
    "OrganizationMember",
    "Partner",
    "Program",
    "Tag",
    "User",
]
