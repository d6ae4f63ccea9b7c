"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from sociallink.domain.model.user import User
from sociallink.domain.value import UserId


class UserRepository(ABC):
    """Repository for User aggregate.

    Defines the contract for user persistence operations.
    Soft-deleted users are invisible to every finder.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by their email.

        Args:
            email: The user's email address

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def exists_by_identifier(self, identifier: str) -> bool:
        """Check whether a local account identifier is taken.

        Args:
            identifier: Candidate account identifier

        Returns:
            True if a non-deleted user already uses it
        """
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Args:
            user: The user to save

        Returns:
            The saved user

        Raises:
            DuplicateIdentifierError: If another live user holds the identifier
        """
        pass

    @abstractmethod
    async def delete(self, user_id: UserId) -> None:
        """Hard-delete a user.

        Only used to undo a user created within a resolution attempt
        that lost a race; never as an account deletion feature.

        Args:
            user_id: The user to delete
        """
        pass
