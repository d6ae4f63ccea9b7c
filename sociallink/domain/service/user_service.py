"""User domain service."""

from datetime import datetime, timezone

import logfire

from sociallink.domain.error import NotFoundError
from sociallink.domain.model import User
from sociallink.domain.repository import UserRepository
from sociallink.domain.value import UserId

from .base import Service


class UserService(Service):
    """Domain service for user operations."""

    def __init__(self, user_repository: UserRepository) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
        """
        self.user_repository = user_repository

    async def get_by_id(self, user_id: UserId) -> User:
        """Get user by ID.

        Args:
            user_id: User ID

        Returns:
            User entity

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span("user_service.get_by_id", user_id=str(user_id)):
            user = await self.user_repository.find_by_id(user_id)
            if not user:
                logfire.warn("User not found", user_id=str(user_id))
                raise NotFoundError("User", str(user_id))
            return user

    async def get_user_by_email(self, email: str) -> User | None:
        """Get user by email.

        Args:
            email: User email

        Returns:
            User if found, None otherwise
        """
        with logfire.span("user_service.get_user_by_email"):
            user = await self.user_repository.find_by_email(email)
            if user:
                logfire.info("User found by email", user_id=str(user.id))
            return user

    async def identifier_exists(self, identifier: str) -> bool:
        """Check whether an account identifier is taken."""
        return await self.user_repository.exists_by_identifier(identifier)

    async def save(self, user: User) -> User:
        """Save user (create or update).

        Args:
            user: User to save

        Returns:
            Saved user

        Raises:
            DuplicateIdentifierError: If another live user holds the identifier
        """
        with logfire.span("user_service.save", user_id=str(user.id)):
            saved = await self.user_repository.save(user)
            logfire.info(
                "User saved", user_id=str(saved.id), identifier=saved.identifier.root
            )
            return saved

    async def delete(self, user_id: UserId) -> None:
        """Remove a user created by an aborted resolution attempt."""
        with logfire.span("user_service.delete", user_id=str(user_id)):
            await self.user_repository.delete(user_id)
            logfire.warn("User removed", user_id=str(user_id))

    async def set_password_hash(self, user_id: UserId, password_hash: str) -> User:
        """Store a local password credential for a user.

        Args:
            user_id: User ID
            password_hash: Already hashed password

        Returns:
            Updated user

        Raises:
            NotFoundError: If user not found
            ValueError: If the hash is empty
        """
        if not password_hash:
            raise ValueError("Password hash must not be empty")

        user = await self.get_by_id(user_id)
        updated = user.model_copy(
            update={
                "password_hash": password_hash,
                "updated_at": datetime.now(timezone.utc),
            }
        )
        saved = await self.user_repository.save(updated)
        logfire.info("Password set", user_id=str(user_id))
        return saved
