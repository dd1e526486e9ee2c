"""Unit tests for entity-specific repository queries."""

from __future__ import annotations

from datetime import date, datetime, timedelta
from decimal import Decimal

import pytest

from dpf_cms.core.database.base import utc_now
from dpf_cms.core.database.entities.banners import Banner
from dpf_cms.core.database.entities.donations import Donation
from dpf_cms.core.database.entities.editor_tasks import EditorTask
from dpf_cms.core.database.entities.organization_members import OrganizationMember
from dpf_cms.core.database.repositories.articles import ArticleRepository
from dpf_cms.core.database.repositories.donations import DonationRepository
from dpf_cms.core.database.repositories.editor_tasks import EditorTaskRepository
from dpf_cms.core.database.repositories.ordered import BannerRepository
from dpf_cms.core.database.repositories.organization_members import OrganizationMemberRepository
from dpf_cms.core.database.repositories.programs import ProgramRepository
from dpf_cms.core.database.repositories.users import AccessTokenRepository, UserRepository

pytestmark = pytest.mark.asyncio


async def _persist(session, *rows):
    session.add_all(rows)
    await session.commit()
    for row in rows:
        await session.refresh(row)
    return rows


class TestProgramRepository:
    async def test_adjust_collected(self, in_memory_session, add_program):
        program = await add_program("Water")
        repo = ProgramRepository(in_memory_session)

        await repo.adjust_collected(program.id, Decimal("250"))
        await repo.adjust_collected(program.id, Decimal("-100"))
        await repo.adjust_collected(None, Decimal("999"))
        await in_memory_session.commit()

        assert (await repo.get_by_id(program.id)).collected_amount == Decimal("150")

    async def test_get_by_slug_with_statuses(self, in_memory_session, add_program):
        await add_program("Old", status="archived")
        repo = ProgramRepository(in_memory_session)

        assert await repo.get_by_slug("old") is not None
        assert await repo.get_by_slug("old", statuses=("active",)) is None

    async def test_titles_by_id(self, in_memory_session, add_program):
        first = await add_program("First")
        repo = ProgramRepository(in_memory_session)

        assert await repo.titles_by_id([first.id, None, 999]) == {first.id: "First"}
        assert await repo.titles_by_id([]) == {}


class TestArticleRepository:
    async def test_published_requires_date(self, in_memory_session, add_article):
        await add_article("Live", status="published", published_at=utc_now())
        await add_article("Undated", status="published")
        await add_article("Draft")
        repo = ArticleRepository(in_memory_session)

        rows = await repo.all(repo.public_search())

        assert [a.title for a in rows] == ["Live"]

    async def test_detach_program(self, in_memory_session, add_program, add_article):
        program = await add_program("Water")
        article = await add_article("Update", program_id=program.id)
        repo = ArticleRepository(in_memory_session)

        await repo.detach_program(program.id)
        await in_memory_session.commit()
        await in_memory_session.refresh(article)

        assert article.program_id is None

    async def test_related_same_category(self, in_memory_session, add_article):
        now = utc_now()
        main = await add_article("Main", status="published", published_at=now)
        await add_article("Sibling", status="published", published_at=now)
        await add_article("Elsewhere", status="published", published_at=now, category="Report")

        related = await ArticleRepository(in_memory_session).related(main)

        assert [a.title for a in related] == ["Sibling"]


class TestDonationRepository:
    async def test_last_code_with_prefix(self, in_memory_session):
        await _persist(
            in_memory_session,
            Donation(donation_code="DPF-20250101-0002", amount=Decimal("1")),
            Donation(donation_code="DPF-20250101-0010", amount=Decimal("1")),
            Donation(donation_code="DPF-20250102-0001", amount=Decimal("1")),
        )
        repo = DonationRepository(in_memory_session)

        assert await repo.last_code_with_prefix("DPF-20250101-") == "DPF-20250101-0010"
        assert await repo.last_code_with_prefix("DPF-20250103-") is None

    async def test_totals_by_source_and_date_filters(self, in_memory_session):
        yesterday = utc_now() - timedelta(days=1)
        await _persist(
            in_memory_session,
            Donation(donation_code="A", amount=Decimal("100"), payment_source="manual", status="paid"),
            Donation(donation_code="B", amount=Decimal("50"), payment_source="midtrans", status="paid"),
            Donation(
                donation_code="C", amount=Decimal("70"), payment_source="midtrans", status="paid", created_at=yesterday
            ),
        )
        repo = DonationRepository(in_memory_session)

        everything = await repo.totals_by_source()
        today_only = await repo.totals_by_source(date_from=utc_now().date())

        assert everything == {"manual": (1, Decimal("100")), "midtrans": (2, Decimal("120"))}
        assert today_only["midtrans"] == (1, Decimal("50"))

    async def test_search_email_only_when_requested(self, in_memory_session):
        await _persist(
            in_memory_session,
            Donation(donation_code="A", amount=Decimal("1"), donor_name="Ani", donor_email="secret@example.org"),
        )
        repo = DonationRepository(in_memory_session)

        plain = await repo.all(repo.search(q="secret"))
        with_email = await repo.all(repo.search(q="secret", search_email=True))

        assert plain == []
        assert len(with_email) == 1


class TestEditorTaskRepository:
    async def test_open_counts(self, in_memory_session, add_user):
        editor = await add_user()
        other = await add_user()
        await _persist(
            in_memory_session,
            EditorTask(title="Unassigned"),
            EditorTask(title="Mine", assigned_to=editor.id),
            EditorTask(title="Mine done", assigned_to=editor.id, status="done"),
            EditorTask(title="Theirs", assigned_to=other.id),
        )
        repo = EditorTaskRepository(in_memory_session)

        assert await repo.count_open_unassigned() == 1
        assert await repo.count_open_assigned() == {editor.id: 1, other.id: 1}
        assert await repo.open_count_for(editor.id) == 2

    async def test_visible_to(self, in_memory_session, add_user):
        editor = await add_user()
        other = await add_user()
        await _persist(
            in_memory_session,
            EditorTask(title="Unassigned"),
            EditorTask(title="Theirs", assigned_to=other.id),
        )
        repo = EditorTaskRepository(in_memory_session)

        rows = await repo.all(repo.visible_to(editor.id))

        assert [t.title for t in rows] == ["Unassigned"]


class TestOrderingRepositories:
    async def test_banner_orders(self, in_memory_session):
        first, _ = await _persist(
            in_memory_session,
            Banner(image_path="a.png", display_order=2),
            Banner(image_path="b.png", display_order=0),
        )
        repo = BannerRepository(in_memory_session)

        assert sorted(await repo.used_orders()) == [0, 2]
        assert await repo.order_taken(2) is True
        assert await repo.order_taken(2, exclude_id=first.id) is False
        assert [b.image_path for b in await repo.list_ordered()] == ["b.png", "a.png"]

    async def test_member_orders_per_group(self, in_memory_session):
        member, _ = await _persist(
            in_memory_session,
            OrganizationMember(name="Ani", slug="ani", position_title="Chair", group="Board", order=0),
            OrganizationMember(name="Budi", slug="budi", position_title="Staff", group="Staff", order=3),
        )
        repo = OrganizationMemberRepository(in_memory_session)

        assert await repo.orders_in_group("Board") == [0]
        assert await repo.orders_in_group("Board", exclude_id=member.id) == []
        assert await repo.slugs() == {"ani", "budi"}


class TestUserRepository:
    async def test_lookup_by_email_is_case_insensitive(self, in_memory_session, add_user):
        user = await add_user(email="ani@example.org")

        assert (await UserRepository(in_memory_session).get_by_email(" ANI@example.org ")).id == user.id

    async def test_counts(self, in_memory_session, add_user):
        await add_user("editor")
        await add_user("admin", is_active=False)
        repo = UserRepository(in_memory_session)

        assert await repo.count_by_role() == {"editor": 1, "admin": 1}
        assert await repo.count_by_active() == {"active": 1, "inactive": 1}
        assert await repo.count_all() == 2

    async def test_delete_tokens_for_user(self, in_memory_session, add_user):
        from dpf_cms.core.database.entities.users import AccessToken

        user = await add_user()
        await _persist(in_memory_session, AccessToken(user_id=user.id, token_hash="a" * 64))
        repo = AccessTokenRepository(in_memory_session)

        await repo.delete_for_user(user.id)

        assert await repo.get_by_hash("a" * 64) is None
