"""initial_schema

Create the schema for social login:
- Roles (bootstrapped, new social users get 'customer')
- Users (local identifier, optional password)
- Social account links (one live link per provider identity)

Revision ID: 3c5d1f0a9b27
Revises:
Create Date: 2026-10-19 10:12:41.318207

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c5d1f0a9b27"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # Enable required extensions
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # ========================================================================
    # ROLES table
    # ========================================================================
    roles_table = op.create_table(
        "roles",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("name", sa.String(50), nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name", name="uq_role_name"),
    )

    # ========================================================================
    # USERS table (provider-agnostic)
    # ========================================================================
    op.create_table(
        "users",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("identifier", sa.String(255), nullable=False),  # Login name
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("first_name", sa.String(255), nullable=True),
        sa.Column("last_name", sa.String(255), nullable=True),
        sa.Column("password_hash", sa.Text(), nullable=True),  # NULL = social-only
        sa.Column("profile_image_url", sa.Text(), nullable=True),
        sa.Column(
            "roles",
            postgresql.ARRAY(sa.String(50)),
            nullable=False,
            server_default="{}",
        ),
        sa.Column("is_deleted", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_users_identifier",
        "users",
        ["identifier"],
        unique=True,
        postgresql_where=sa.text("is_deleted = false"),
    )
    op.create_index("idx_users_email", "users", ["email"])

    # ========================================================================
    # SOCIAL_ACCOUNT_LINKS table (multi-provider authentication)
    # ========================================================================
    op.create_table(
        "social_account_links",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("provider", sa.String(50), nullable=False),  # 'widget', 'oauth2'
        sa.Column("provider_id", sa.String(255), nullable=False),
        sa.Column("provider_username", sa.String(255), nullable=True),
        sa.Column("provider_email", sa.String(255), nullable=True),
        sa.Column("provider_name", sa.String(255), nullable=True),
        sa.Column("provider_avatar_url", sa.Text(), nullable=True),
        sa.Column("provider_data", sa.Text(), nullable=True),
        sa.Column("is_primary", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("is_deleted", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("last_used_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_social_account_links_user_id", "social_account_links", ["user_id"]
    )
    # Only live links take part; unlinked rows are kept for audit
    op.create_index(
        "uq_social_account_links_provider_identity",
        "social_account_links",
        ["provider", "provider_id"],
        unique=True,
        postgresql_where=sa.text("is_deleted = false"),
    )

    # ========================================================================
    # Bootstrap roles
    # ========================================================================
    op.bulk_insert(
        roles_table,
        [
            {"name": "customer"},
            {"name": "business_user"},
            {"name": "business_owner"},
            {"name": "platform_owner"},
        ],
    )


def downgrade() -> None:
    """Downgrade schema."""
    # Drop tables (in reverse order of dependencies)
    op.drop_table("social_account_links")
    op.drop_table("users")
    op.drop_table("roles")
