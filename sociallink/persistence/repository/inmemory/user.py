"""In-memory user repository for testing."""

from typing import Optional

from sociallink.domain.error import DuplicateIdentifierError
from sociallink.domain.model.user import User
from sociallink.domain.repository.user import UserRepository
from sociallink.domain.value import UserId


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing.

    Enforces the same live-identifier uniqueness as the database index.
    """

    def __init__(self) -> None:
        self._users: dict[UserId, User] = {}

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        user = self._users.get(user_id)
        return user if user and not user.is_deleted else None

    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by their email."""
        matches = [
            user
            for user in self._users.values()
            if user.email == email and not user.is_deleted
        ]
        return min(matches, key=lambda u: u.created_at) if matches else None

    async def exists_by_identifier(self, identifier: str) -> bool:
        """Check if a non-deleted user already uses an identifier."""
        return any(
            user.identifier.root == identifier and not user.is_deleted
            for user in self._users.values()
        )

    async def save(self, user: User) -> User:
        """Save or update a user, rejecting a second live holder of an identifier."""
        if not user.is_deleted:
            for other in self._users.values():
                if (
                    other.id != user.id
                    and other.identifier.root == user.identifier.root
                    and not other.is_deleted
                ):
                    raise DuplicateIdentifierError(user.identifier.root)

        self._users[user.id] = user
        return user

    async def delete(self, user_id: UserId) -> None:
        """Hard-delete a user."""
        self._users.pop(user_id, None)
