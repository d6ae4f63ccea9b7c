"""Unit tests for AccountLinkService."""

from datetime import datetime, timedelta, timezone
import random
from uuid import uuid4

import pytest

from sociallink.domain.error import (
    AlreadyLinkedElsewhereError,
    CannotUnlinkLastMethodError,
    NotFoundError,
)
from sociallink.domain.service import AccountLinkService, UserService
from sociallink.domain.value import AuthProvider, SocialAccountLinkId
from sociallink.persistence.repository.inmemory import (
    InMemorySocialAccountLinkRepository,
    InMemoryUserRepository,
)
from tests.conftest import make_identity, make_user

WIDGET_IDENTITY = make_identity(
    provider=AuthProvider.WIDGET,
    provider_id="12345",
    email=None,
    name="Dara",
    username="dara",
)
OAUTH2_IDENTITY = make_identity(provider_id="g-1", email="dara@example.com")


@pytest.fixture
def user_repo() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def link_repo() -> InMemorySocialAccountLinkRepository:
    return InMemorySocialAccountLinkRepository()


@pytest.fixture
def service(link_repo, user_repo) -> AccountLinkService:
    return AccountLinkService(link_repository=link_repo, user_repository=user_repo)


async def primary_ids(service: AccountLinkService, user_id) -> list:
    return [link.id for link in await service.list_links(user_id) if link.is_primary]


class TestLink:
    """Tests for AccountLinkService.link()."""

    @pytest.mark.asyncio
    async def test_first_link_is_primary(self, service, user_repo):
        user = await user_repo.save(make_user())

        link = await service.link(user.id, OAUTH2_IDENTITY)

        assert link.is_primary is True
        assert link.last_used_at is not None
        assert link.provider_email == "dara@example.com"

    @pytest.mark.asyncio
    async def test_second_link_is_not_primary(self, service, user_repo):
        user = await user_repo.save(make_user())
        first = await service.link(user.id, OAUTH2_IDENTITY)

        second = await service.link(user.id, WIDGET_IDENTITY)

        assert second.is_primary is False
        assert await primary_ids(service, user.id) == [first.id]

    @pytest.mark.asyncio
    async def test_link_with_make_primary(self, service, user_repo):
        user = await user_repo.save(make_user())
        await service.link(user.id, OAUTH2_IDENTITY)

        second = await service.link(user.id, WIDGET_IDENTITY, make_primary=True)

        assert second.is_primary is True
        assert await primary_ids(service, user.id) == [second.id]

    @pytest.mark.asyncio
    async def test_relinking_own_identity_refreshes(self, service, user_repo):
        user = await user_repo.save(make_user())
        first = await service.link(user.id, WIDGET_IDENTITY)
        updated_identity = WIDGET_IDENTITY.model_copy(update={"username": "dara_new"})

        again = await service.link(user.id, updated_identity)

        assert again.id == first.id
        assert again.provider_username == "dara_new"
        assert len(await service.list_links(user.id)) == 1

    @pytest.mark.asyncio
    async def test_identity_of_other_user_is_rejected(
        self, service, user_repo, link_repo
    ):
        """Linking someone else's identity fails and changes nothing."""
        # Arrange
        owner = await user_repo.save(make_user("owner", "owner@example.com"))
        intruder = await user_repo.save(make_user("intruder", "intruder@example.com"))
        owned = await service.link(owner.id, WIDGET_IDENTITY)

        # Act
        with pytest.raises(AlreadyLinkedElsewhereError) as exc_info:
            await service.link(intruder.id, WIDGET_IDENTITY)

        # Assert
        assert exc_info.value.provider == "widget"
        assert exc_info.value.provider_id == "12345"
        assert await service.list_links(intruder.id) == []
        assert await link_repo.find_by_id(owned.id) == owned


class TestMakePrimary:
    """Tests for AccountLinkService.make_primary()."""

    @pytest.mark.asyncio
    async def test_switches_primary(self, service, user_repo):
        user = await user_repo.save(make_user())
        first = await service.link(user.id, OAUTH2_IDENTITY)
        second = await service.link(user.id, WIDGET_IDENTITY)

        promoted = await service.make_primary(user.id, second.id)

        assert promoted.id == second.id
        assert promoted.is_primary is True
        assert await primary_ids(service, user.id) == [second.id]
        links = {link.id: link for link in await service.list_links(user.id)}
        assert links[first.id].is_primary is False

    @pytest.mark.asyncio
    async def test_already_primary_is_a_no_op(self, service, user_repo):
        user = await user_repo.save(make_user())
        first = await service.link(user.id, OAUTH2_IDENTITY)

        promoted = await service.make_primary(user.id, first.id)

        assert promoted == first

    @pytest.mark.asyncio
    async def test_link_of_other_user_is_not_found(self, service, user_repo):
        owner = await user_repo.save(make_user("owner", "owner@example.com"))
        other = await user_repo.save(make_user("other", "other@example.com"))
        link = await service.link(owner.id, OAUTH2_IDENTITY)

        with pytest.raises(NotFoundError):
            await service.make_primary(other.id, link.id)


class TestUnlink:
    """Tests for AccountLinkService.unlink()."""

    @pytest.mark.asyncio
    async def test_cannot_remove_only_login_method(self, service, user_repo):
        """A social-only user keeps their last link until they set a password."""
        # Arrange
        user = await user_repo.save(make_user())
        link = await service.link(user.id, OAUTH2_IDENTITY)

        # Act / Assert
        with pytest.raises(CannotUnlinkLastMethodError):
            await service.unlink(user.id, link.id)
        assert len(await service.list_links(user.id)) == 1

        await UserService(user_repo).set_password_hash(user.id, "$argon2id$hash")
        await service.unlink(user.id, link.id)

        assert await service.list_links(user.id) == []

    @pytest.mark.asyncio
    async def test_unlinked_row_is_soft_deleted(self, service, user_repo, link_repo):
        user = await user_repo.save(make_user(password_hash="$argon2id$hash"))
        link = await service.link(user.id, OAUTH2_IDENTITY)

        await service.unlink(user.id, link.id)

        stored = await link_repo.find_by_id(link.id)
        assert stored.is_deleted is True
        assert stored.is_primary is False
        assert await link_repo.find_by_provider(AuthProvider.OAUTH2, "g-1") is None

    @pytest.mark.asyncio
    async def test_removing_primary_promotes_most_recently_used(
        self, service, user_repo, link_repo
    ):
        # Arrange
        user = await user_repo.save(make_user())
        primary = await service.link(user.id, OAUTH2_IDENTITY)
        older = await service.link(user.id, WIDGET_IDENTITY)
        newer = await service.link(
            user.id,
            make_identity(provider=AuthProvider.WIDGET, provider_id="777", email=None),
        )
        now = datetime.now(timezone.utc)
        await link_repo.save(
            older.model_copy(update={"last_used_at": now - timedelta(days=2)})
        )
        await link_repo.save(
            newer.model_copy(update={"last_used_at": now - timedelta(hours=1)})
        )

        # Act
        await service.unlink(user.id, primary.id)

        # Assert
        assert await primary_ids(service, user.id) == [newer.id]

    @pytest.mark.asyncio
    async def test_removing_secondary_keeps_primary(self, service, user_repo):
        user = await user_repo.save(make_user())
        primary = await service.link(user.id, OAUTH2_IDENTITY)
        secondary = await service.link(user.id, WIDGET_IDENTITY)

        await service.unlink(user.id, secondary.id)

        assert await primary_ids(service, user.id) == [primary.id]

    @pytest.mark.asyncio
    async def test_unknown_link(self, service, user_repo):
        user = await user_repo.save(make_user(password_hash="$argon2id$hash"))

        with pytest.raises(NotFoundError):
            await service.unlink(user.id, SocialAccountLinkId(uuid4()))

    @pytest.mark.asyncio
    async def test_identity_can_be_linked_again_after_unlink(self, service, user_repo):
        """After unlinking, another user may claim the identity."""
        first = await user_repo.save(make_user("first", "first@example.com", "$h"))
        second = await user_repo.save(make_user("second", "second@example.com"))
        link = await service.link(first.id, WIDGET_IDENTITY)
        await service.unlink(first.id, link.id)

        relinked = await service.link(second.id, WIDGET_IDENTITY)

        assert relinked.user_id == second.id
        assert relinked.id != link.id
        assert relinked.is_primary is True


class TestPrimaryInvariant:
    """Exactly one live primary per user across mixed operation sequences."""

    IDENTITIES = [
        make_identity(
            provider=AuthProvider.WIDGET,
            provider_id=str(n),
            email=None,
            name=None,
            username=f"w{n}",
        )
        for n in range(3)
    ] + [make_identity(provider_id=f"g-{n}", email=f"g{n}@example.com") for n in range(2)]

    @staticmethod
    async def assert_single_primary(service, user_id):
        links = await service.list_links(user_id)
        primaries = [link for link in links if link.is_primary]
        assert len(primaries) == (1 if links else 0)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("seed", [1, 2, 3, 4])
    async def test_random_link_unlink_relink_sequence(
        self, service, user_repo, link_repo, seed
    ):
        # Arrange
        rng = random.Random(seed)
        users = [
            await user_repo.save(make_user("first", "first@example.com", "$h")),
            await user_repo.save(make_user("second", "second@example.com", "$h")),
        ]

        # Act / Assert
        for _ in range(200):
            user = rng.choice(users)
            links = await service.list_links(user.id)
            operation = rng.choice(["link", "link", "make_primary", "unlink"])

            if operation == "link":
                identity = rng.choice(self.IDENTITIES)
                holder = await link_repo.find_by_provider(
                    identity.provider, identity.provider_id
                )
                if holder and holder.user_id != user.id:
                    with pytest.raises(AlreadyLinkedElsewhereError):
                        await service.link(user.id, identity)
                else:
                    await service.link(
                        user.id, identity, make_primary=rng.random() < 0.3
                    )
            elif operation == "make_primary" and links:
                await service.make_primary(user.id, rng.choice(links).id)
            elif operation == "unlink" and links:
                await service.unlink(user.id, rng.choice(links).id)

            for each in users:
                await self.assert_single_primary(service, each.id)
