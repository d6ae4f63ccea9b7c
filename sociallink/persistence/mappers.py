"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict
from uuid import UUID

from sociallink.domain.model import Role, SocialAccountLink, User
from sociallink.domain.value import (
    AuthProvider,
    RoleId,
    RoleName,
    SocialAccountLinkId,
    UserId,
    UserIdentifier,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(
        id=UserId(_uuid(row["id"])),
        identifier=UserIdentifier(row["identifier"]),
        email=row.get("email"),
        first_name=row.get("first_name"),
        last_name=row.get("last_name"),
        password_hash=row.get("password_hash"),
        profile_image_url=row.get("profile_image_url"),
        roles=[RoleName(name) for name in row.get("roles") or []],
        is_deleted=row.get("is_deleted", False),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict.

    Args:
        user: User domain model

    Returns:
        Dict suitable for database insertion/update
    """
    data = user.model_dump()
    data["roles"] = [role.value for role in user.roles]
    return data


def row_to_role(row: Dict[str, Any]) -> Role:
    """Convert database row to Role domain model."""
    return Role(
        id=RoleId(_uuid(row["id"])),
        name=RoleName(row["name"]),
        created_at=row["created_at"],
    )


def role_to_dict(role: Role) -> Dict[str, Any]:
    """Convert Role domain model to database dict."""
    data = role.model_dump()
    data["name"] = role.name.value
    return data


def row_to_social_account_link(row: Dict[str, Any]) -> SocialAccountLink:
    """Convert database row to SocialAccountLink domain model.

    Args:
        row: Database row as dict

    Returns:
        SocialAccountLink domain model
    """
    return SocialAccountLink(
        id=SocialAccountLinkId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        provider=AuthProvider(row["provider"]),
        provider_id=row["provider_id"],
        provider_username=row.get("provider_username"),
        provider_email=row.get("provider_email"),
        provider_name=row.get("provider_name"),
        provider_avatar_url=row.get("provider_avatar_url"),
        provider_data=row.get("provider_data"),
        is_primary=row["is_primary"],
        is_deleted=row["is_deleted"],
        last_used_at=row.get("last_used_at"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def social_account_link_to_dict(link: SocialAccountLink) -> Dict[str, Any]:
    """Convert SocialAccountLink domain model to database dict.

    Args:
        link: SocialAccountLink domain model

    Returns:
        Dict suitable for database insertion/update
    """
    data = link.model_dump()
    data["provider"] = link.provider.value
    return data
