"""SQLAlchemy table definitions for social login.

These table definitions are used with SQLAlchemy Core.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    Column,
    ForeignKey,
    Index,
    MetaData,
    String,
    Table,
    Text,
    text,
)
from sqlalchemy.dialects.postgresql import ARRAY, TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# ROLES TABLE (Bootstrapped by migrations)
# ============================================================================
roles_table = Table(
    "roles",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("name", String(50), nullable=False, unique=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

# ============================================================================
# USERS TABLE (Provider-agnostic)
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("identifier", String(255), nullable=False),  # Local login name
    Column("email", String(255), nullable=True),
    Column("first_name", String(255), nullable=True),
    Column("last_name", String(255), nullable=True),
    Column("password_hash", Text, nullable=True),  # NULL for social-only users
    Column("profile_image_url", Text, nullable=True),
    Column("roles", ARRAY(String(50)), nullable=False, server_default="{}"),
    Column("is_deleted", Boolean, nullable=False, server_default="false"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index(
    "idx_users_identifier",
    users_table.c.identifier,
    unique=True,
    postgresql_where=text("is_deleted = false"),
)
Index("idx_users_email", users_table.c.email)

# ============================================================================
# SOCIAL ACCOUNT LINKS TABLE (Multi-provider authentication)
# ============================================================================
social_account_links_table = Table(
    "social_account_links",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("provider", String(50), nullable=False),  # 'widget', 'oauth2'
    Column("provider_id", String(255), nullable=False),
    Column("provider_username", String(255), nullable=True),
    Column("provider_email", String(255), nullable=True),
    Column("provider_name", String(255), nullable=True),
    Column("provider_avatar_url", Text, nullable=True),
    Column("provider_data", Text, nullable=True),  # Raw payload, audit only
    Column("is_primary", Boolean, nullable=False, server_default="false"),
    Column("is_deleted", Boolean, nullable=False, server_default="false"),
    Column("last_used_at", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_social_account_links_user_id", social_account_links_table.c.user_id)

# One live link per provider identity; unlinked rows stay for audit
Index(
    "uq_social_account_links_provider_identity",
    social_account_links_table.c.provider,
    social_account_links_table.c.provider_id,
    unique=True,
    postgresql_where=text("is_deleted = false"),
)
