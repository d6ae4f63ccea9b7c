"""Unit tests for IdentityResolutionService."""

from uuid import uuid4

import pytest

from sociallink.domain.error import (
    DuplicateIdentifierError,
    DuplicateLinkError,
    FailureReason,
    NotFoundError,
    RoleConfigurationMissingError,
)
from sociallink.domain.model import SocialAccountLink
from sociallink.domain.service import (
    AccountLinkService,
    IdentityResolutionService,
    RoleService,
    UserService,
)
from sociallink.domain.service.identity_resolution_service import split_name
from sociallink.domain.value import (
    AuthProvider,
    RoleName,
    SocialAccountLinkId,
    UserId,
)
from sociallink.persistence.repository.inmemory import (
    InMemoryRoleRepository,
    InMemorySocialAccountLinkRepository,
    InMemoryUserRepository,
)
from tests.conftest import make_identity, make_user


class RacingLinkRepository(InMemorySocialAccountLinkRepository):
    """Link store where a concurrent login's link is not yet visible.

    The first ``blind_lookups`` provider lookups miss, while inserts
    still hit the uniqueness check, like two transactions racing.
    """

    def __init__(self, blind_lookups: int = 1) -> None:
        super().__init__()
        self.blind_lookups = blind_lookups

    async def find_by_provider(self, provider, provider_id):
        if self.blind_lookups > 0:
            self.blind_lookups -= 1
            return None
        return await super().find_by_provider(provider, provider_id)


class UncommittedWinnerUserRepository(InMemoryUserRepository):
    """User store where a concurrent login's user is not yet visible.

    The first ``blind_checks`` identifier checks report every identifier
    as free, while inserts still hit the uniqueness check, like a row
    another transaction has inserted but not committed.
    """

    def __init__(self, blind_checks: int = 1) -> None:
        super().__init__()
        self.blind_checks = blind_checks

    async def exists_by_identifier(self, identifier):
        if self.blind_checks > 0:
            self.blind_checks -= 1
            return False
        return await super().exists_by_identifier(identifier)


def make_service(
    user_repo: InMemoryUserRepository,
    link_repo: InMemorySocialAccountLinkRepository,
    role_repo: InMemoryRoleRepository | None = None,
    max_attempts: int = 3,
) -> IdentityResolutionService:
    return IdentityResolutionService(
        user_service=UserService(user_repo),
        user_repository=user_repo,
        role_service=RoleService(role_repo or InMemoryRoleRepository()),
        account_link_service=AccountLinkService(link_repo, user_repo),
        max_attempts=max_attempts,
    )


@pytest.fixture
def user_repo() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def link_repo() -> InMemorySocialAccountLinkRepository:
    return InMemorySocialAccountLinkRepository()


@pytest.fixture
def service(user_repo, link_repo) -> IdentityResolutionService:
    return make_service(user_repo, link_repo)


class TestNewUser:
    """Resolution of identities nobody has seen before."""

    @pytest.mark.asyncio
    async def test_widget_identity_without_username(self, service):
        """A bare widget identity gets a customer account named after its ID."""
        # Arrange
        identity = make_identity(
            provider=AuthProvider.WIDGET,
            provider_id="999",
            email=None,
            name=None,
            username=None,
        )

        # Act
        result = await service.resolve(identity)

        # Assert
        assert result.is_new_user is True
        assert result.user.identifier.root == "widget_999"
        assert result.user.roles == [RoleName.CUSTOMER]
        assert result.user.password_hash is None
        assert result.user.email is None
        assert result.link.is_primary is True
        assert result.link.user_id == result.user.id

    @pytest.mark.asyncio
    async def test_oauth2_identity_fills_profile(self, service):
        identity = make_identity(
            provider_id="g-1", email="Dara.Khan@example.com", name="Dara van Khan"
        )

        result = await service.resolve(identity)

        assert result.user.identifier.root == "darakhan"
        assert result.user.email == "Dara.Khan@example.com"
        assert result.user.first_name == "Dara"
        assert result.user.last_name == "van Khan"
        assert result.link.provider_username == "Dara.Khan@example.com"

    @pytest.mark.asyncio
    async def test_identifier_collision_gets_counter(self, service, user_repo):
        await user_repo.save(make_user("dara", "someone@example.com"))

        result = await service.resolve(make_identity(email="dara@example.com"))

        assert result.is_new_user is True
        assert result.user.identifier.root == "dara1"

    @pytest.mark.asyncio
    async def test_missing_customer_role(self, user_repo, link_repo):
        """Without a bootstrapped role nothing is created."""
        service = make_service(
            user_repo, link_repo, role_repo=InMemoryRoleRepository(names=())
        )

        with pytest.raises(RoleConfigurationMissingError) as exc_info:
            await service.resolve(make_identity())

        assert exc_info.value.reason == FailureReason.ROLE_CONFIGURATION_MISSING
        assert not await user_repo.exists_by_identifier("dara")
        assert await link_repo.find_by_provider(AuthProvider.OAUTH2, "oauth-42") is None


class TestExistingLink:
    """Resolution of identities that are already linked."""

    @pytest.mark.asyncio
    async def test_resolution_is_idempotent(self, service, link_repo):
        identity = make_identity(provider=AuthProvider.WIDGET, provider_id="5", email=None)

        first = await service.resolve(identity)
        second = await service.resolve(identity)

        assert first.is_new_user is True
        assert second.is_new_user is False
        assert second.user.id == first.user.id
        assert second.link.id == first.link.id
        assert len(await link_repo.find_all_by_user_id(first.user.id)) == 1

    @pytest.mark.asyncio
    async def test_refreshes_link_profile(self, service):
        identity = make_identity(provider=AuthProvider.WIDGET, provider_id="5", email=None)
        first = await service.resolve(identity)

        renamed = identity.model_copy(update={"name": "New Name", "username": "newname"})
        second = await service.resolve(renamed)

        assert second.link.provider_name == "New Name"
        assert second.link.provider_username == "newname"
        assert second.link.last_used_at >= first.link.last_used_at

    @pytest.mark.asyncio
    async def test_link_to_missing_user(self, service, link_repo):
        orphan = SocialAccountLink(
            id=SocialAccountLinkId(uuid4()),
            user_id=UserId(uuid4()),
            provider=AuthProvider.WIDGET,
            provider_id="5",
            is_primary=True,
        )
        await link_repo.save(orphan)

        with pytest.raises(NotFoundError):
            await service.resolve(
                make_identity(provider=AuthProvider.WIDGET, provider_id="5", email=None)
            )


class TestEmailMatch:
    """Linking new identities to existing users by email."""

    @pytest.mark.asyncio
    async def test_oauth2_email_links_existing_user(self, service, user_repo):
        existing = await user_repo.save(make_user("dara", "dara@example.com"))

        result = await service.resolve(make_identity(email="dara@example.com"))

        assert result.is_new_user is False
        assert result.user.id == existing.id
        assert result.link.user_id == existing.id
        assert result.link.is_primary is True

    @pytest.mark.asyncio
    async def test_widget_email_never_matches(self, service, user_repo):
        """Only the OAuth2 provider vouches for emails."""
        existing = await user_repo.save(make_user("dara", "dara@example.com"))
        identity = make_identity(
            provider=AuthProvider.WIDGET,
            provider_id="77",
            email="dara@example.com",
            username="dara",
        )

        result = await service.resolve(identity)

        assert result.is_new_user is True
        assert result.user.id != existing.id
        assert result.user.identifier.root == "dara1"


class TestConcurrentFirstLogin:
    """Two logins of the same new identity racing each other."""

    @pytest.mark.asyncio
    async def test_loser_undoes_its_user_and_joins_winner(self, user_repo):
        # Arrange
        link_repo = RacingLinkRepository(blind_lookups=1)
        service = make_service(user_repo, link_repo)
        winner = await user_repo.save(make_user("dara", "winner@example.com"))
        await AccountLinkService(link_repo, user_repo).create_link(
            winner.id, make_identity(email="dara@example.com")
        )

        # Act
        result = await service.resolve(make_identity(email="dara@example.com"))

        # Assert
        assert result.is_new_user is False
        assert result.user.id == winner.id
        assert not await user_repo.exists_by_identifier("dara1")

    @pytest.mark.asyncio
    async def test_gives_up_after_max_attempts(self, user_repo):
        link_repo = RacingLinkRepository(blind_lookups=10)
        service = make_service(user_repo, link_repo, max_attempts=3)
        winner = await user_repo.save(make_user("dara", "winner@example.com"))
        await AccountLinkService(link_repo, user_repo).create_link(
            winner.id, make_identity(email="dara@example.com")
        )

        with pytest.raises(DuplicateLinkError):
            await service.resolve(make_identity(email="dara@example.com"))

        assert link_repo.blind_lookups == 10 - 3
        assert not await user_repo.exists_by_identifier("dara1")

    def test_rejects_non_positive_max_attempts(self, user_repo, link_repo):
        with pytest.raises(ValueError):
            make_service(user_repo, link_repo, max_attempts=0)


class TestSplitName:
    """Tests for split_name()."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("Dara", ("Dara", None)),
            ("Dara Khan", ("Dara", "Khan")),
            ("  Dara   van Khan ", ("Dara", "van Khan")),
            ("", (None, None)),
            ("   ", (None, None)),
            (None, (None, None)),
        ],
    )
    def test_split(self, name, expected):
        assert split_name(name) == expected


class TestConcurrentIdentifierAllocation:
    """Racing logins that allocate the same identifier."""

    @staticmethod
    def widget_identity():
        return make_identity(
            provider=AuthProvider.WIDGET,
            provider_id="999",
            email=None,
            name=None,
            username=None,
        )

    @pytest.mark.asyncio
    async def test_loser_joins_winner_of_same_identity(self):
        """Both logins pick widget_999; the loser finds the winner's link."""
        # Arrange
        user_repo = UncommittedWinnerUserRepository(blind_checks=1)
        link_repo = RacingLinkRepository(blind_lookups=1)
        service = make_service(user_repo, link_repo)
        winner = await user_repo.save(make_user("widget_999", None))
        await AccountLinkService(link_repo, user_repo).create_link(
            winner.id, self.widget_identity()
        )

        # Act
        result = await service.resolve(self.widget_identity())

        # Assert
        assert result.is_new_user is False
        assert result.user.id == winner.id
        assert result.link.user_id == winner.id
        assert not await user_repo.exists_by_identifier("widget_9991")

    @pytest.mark.asyncio
    async def test_identifier_taken_by_other_identity_gets_counter(self):
        """A different identity claiming the same identifier first is skipped."""
        # Arrange
        user_repo = UncommittedWinnerUserRepository(blind_checks=1)
        service = make_service(user_repo, InMemorySocialAccountLinkRepository())
        other = await user_repo.save(make_user("dara", "other@example.com"))

        # Act
        result = await service.resolve(make_identity(email="dara@example.com"))

        # Assert
        assert result.is_new_user is True
        assert result.user.id != other.id
        assert result.user.identifier.root == "dara1"

    @pytest.mark.asyncio
    async def test_gives_up_after_max_attempts(self):
        user_repo = UncommittedWinnerUserRepository(blind_checks=10)
        link_repo = RacingLinkRepository(blind_lookups=10)
        service = make_service(user_repo, link_repo, max_attempts=3)
        winner = await user_repo.save(make_user("widget_999", None))
        await AccountLinkService(link_repo, user_repo).create_link(
            winner.id, self.widget_identity()
        )

        with pytest.raises(DuplicateIdentifierError):
            await service.resolve(self.widget_identity())

        assert user_repo.blind_checks == 10 - 3
        assert link_repo.blind_lookups == 10 - 3
