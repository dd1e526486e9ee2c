"""Initial schema for DPF CMS

Revision ID: 20260116_000000
Revises: None
Create Date: 2026-01-16 00:00:00.000000

Creates every table used by the CMS:
- Users and personal access tokens
- Programs, donations and articles
- Organization members, partners, banners and tags
- Editor tasks and their attachments

Revision format: YYYYMMDD_HHMMSS_description

"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "20260116_000000"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    ]


def upgrade() -> None:
    """Create all tables."""

    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("role", sa.String(32), nullable=False, server_default="editor"),
        sa.Column("role_label", sa.String(100), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("password_hash", sa.String(255), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_users_email", "email", unique=True),
        sa.Index("ix_users_role", "role"),
    )

    op.create_table(
        "personal_access_tokens",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(255), nullable=False, server_default="api"),
        sa.Column("token_hash", sa.String(64), nullable=False),
        sa.Column("last_used_at", sa.DateTime(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.Index("ix_personal_access_tokens_user_id", "user_id"),
        sa.Index("ix_personal_access_tokens_token_hash", "token_hash", unique=True),
    )

    op.create_table(
        "programs",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("title_en", sa.String(255), nullable=True),
        sa.Column("slug", sa.String(255), nullable=False),
        sa.Column("category", sa.String(100), nullable=False),
        sa.Column("category_en", sa.String(100), nullable=True),
        sa.Column("short_description", sa.Text(), nullable=False),
        sa.Column("short_description_en", sa.Text(), nullable=True),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("description_en", sa.Text(), nullable=True),
        sa.Column("benefits", sa.Text(), nullable=True),
        sa.Column("benefits_en", sa.Text(), nullable=True),
        sa.Column("target_amount", sa.Numeric(14, 2), nullable=False, server_default="0"),
        sa.Column("collected_amount", sa.Numeric(14, 2), nullable=False, server_default="0"),
        sa.Column("thumbnail_path", sa.String(255), nullable=True),
        sa.Column("banner_path", sa.String(255), nullable=True),
        sa.Column("is_highlight", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("status", sa.String(20), nullable=False, server_default="draft"),
        sa.Column("deadline_days", sa.Integer(), nullable=True),
        sa.Column("published_at", sa.DateTime(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_programs_slug", "slug", unique=True),
        sa.Index("ix_programs_category", "category"),
        sa.Index("ix_programs_status", "status"),
    )

    op.create_table(
        "donations",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("program_id", sa.Integer(), nullable=True),
        sa.Column("donation_code", sa.String(64), nullable=False),
        sa.Column("donor_name", sa.String(255), nullable=True),
        sa.Column("donor_email", sa.String(255), nullable=True),
        sa.Column("donor_phone", sa.String(50), nullable=True),
        sa.Column("amount", sa.Numeric(14, 2), nullable=False),
        sa.Column("is_anonymous", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("payment_source", sa.String(20), nullable=False, server_default="midtrans"),
        sa.Column("payment_method", sa.String(50), nullable=True),
        sa.Column("payment_channel", sa.String(50), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("midtrans_order_id", sa.String(100), nullable=True),
        sa.Column("manual_proof_path", sa.String(255), nullable=True),
        sa.Column("paid_at", sa.DateTime(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["program_id"], ["programs.id"]),
        sa.Index("ix_donations_program_id", "program_id"),
        sa.Index("ix_donations_donation_code", "donation_code", unique=True),
        sa.Index("ix_donations_payment_source", "payment_source"),
        sa.Index("ix_donations_status", "status"),
        sa.Index("ix_donations_created_at", "created_at"),
    )

    op.create_table(
        "articles",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("title_en", sa.String(255), nullable=True),
        sa.Column("slug", sa.String(255), nullable=False),
        sa.Column("program_id", sa.Integer(), nullable=True),
        sa.Column("category", sa.String(100), nullable=False),
        sa.Column("category_en", sa.String(100), nullable=True),
        sa.Column("thumbnail_path", sa.String(255), nullable=True),
        sa.Column("excerpt", sa.Text(), nullable=False),
        sa.Column("excerpt_en", sa.Text(), nullable=True),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column("body_en", sa.Text(), nullable=True),
        sa.Column("author_name", sa.String(255), nullable=True),
        sa.Column("published_at", sa.DateTime(), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="draft"),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["program_id"], ["programs.id"]),
        sa.Index("ix_articles_slug", "slug", unique=True),
        sa.Index("ix_articles_program_id", "program_id"),
        sa.Index("ix_articles_category", "category"),
        sa.Index("ix_articles_status", "status"),
    )

    op.create_table(
        "organization_members",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("name_en", sa.String(255), nullable=True),
        sa.Column("slug", sa.String(255), nullable=False),
        sa.Column("position_title", sa.String(255), nullable=False),
        sa.Column("position_title_en", sa.String(255), nullable=True),
        sa.Column("group", sa.String(100), nullable=False),
        sa.Column("group_en", sa.String(100), nullable=True),
        sa.Column("photo_path", sa.String(255), nullable=True),
        sa.Column("short_bio", sa.Text(), nullable=True),
        sa.Column("short_bio_en", sa.Text(), nullable=True),
        sa.Column("long_bio", sa.Text(), nullable=True),
        sa.Column("long_bio_en", sa.Text(), nullable=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("show_contact", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("group", "order", name="uq_organization_members_group_order"),
        sa.Index("ix_organization_members_slug", "slug", unique=True),
        sa.Index("ix_organization_members_group", "group"),
    )

    op.create_table(
        "partners",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("name_en", sa.String(255), nullable=True),
        sa.Column("logo_path", sa.String(255), nullable=True),
        sa.Column("url", sa.String(255), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("description_en", sa.Text(), nullable=True),
        sa.Column("order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("order"),
    )

    op.create_table(
        "banners",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("image_path", sa.String(255), nullable=False),
        sa.Column("display_order", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("display_order"),
    )

    op.create_table(
        "tags",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("url", sa.String(255), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("open_in_new_tab", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("sort_order"),
    )

    op.create_table(
        "editor_tasks",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(180), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("priority", sa.String(10), nullable=False, server_default="normal"),
        sa.Column("status", sa.String(20), nullable=False, server_default="open"),
        sa.Column("cancel_reason", sa.String(500), nullable=True),
        sa.Column("due_at", sa.DateTime(), nullable=True),
        sa.Column("assigned_to", sa.Integer(), nullable=True),
        sa.Column("created_by", sa.Integer(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["assigned_to"], ["users.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["created_by"], ["users.id"], ondelete="SET NULL"),
        sa.Index("ix_editor_tasks_priority", "priority"),
        sa.Index("ix_editor_tasks_status", "status"),
        sa.Index("ix_editor_tasks_assigned_to", "assigned_to"),
    )

    op.create_table(
        "editor_task_attachments",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("editor_task_id", sa.Integer(), nullable=False),
        sa.Column("file_path", sa.String(255), nullable=False),
        sa.Column("original_name", sa.String(255), nullable=False),
        sa.Column("mime_type", sa.String(100), nullable=True),
        sa.Column("file_size", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("uploaded_by", sa.Integer(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["editor_task_id"], ["editor_tasks.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["uploaded_by"], ["users.id"], ondelete="SET NULL"),
        sa.Index("ix_editor_task_attachments_editor_task_id", "editor_task_id"),
    )


def downgrade() -> None:
    """Drop all tables in reverse dependency order."""
    for table in (
        "editor_task_attachments",
        "editor_tasks",
        "tags",
        "banners",
        "partners",
        "organization_members",
        "articles",
        "donations",
        "programs",
        "personal_access_tokens",
        "users",
    ):
        op.drop_table(table)
