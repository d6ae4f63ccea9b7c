#!/usr/bin/env python3
"""Upgrade the social login schema, reporting failures to Logfire.

Usage:
    python scripts/run_migrations.py            # upgrade to head
    python scripts/run_migrations.py 3c5d1f0a9b27
"""

import sys

import logfire
from alembic import command
from alembic.config import Config
from sqlalchemy.engine import make_url

from sociallink.config import Settings
from sociallink.util.observability import configure_logfire


def main(argv: list[str]) -> int:
    """Upgrade the schema to the requested revision (default: head)."""
    settings = Settings()
    configure_logfire(settings)

    revision = argv[0] if argv else "head"
    # Password stays out of the logs
    database = make_url(settings.database_url).render_as_string(hide_password=True)

    with logfire.span("run_migrations", revision=revision, database=database):
        try:
            command.upgrade(Config("alembic.ini"), revision)
        except Exception as e:
            logfire.error(
                "Schema upgrade failed",
                revision=revision,
                error=str(e),
                error_type=type(e).__name__,
                _exc_info=sys.exc_info(),
            )
            # Fail the deploy instead of serving logins on a broken schema
            raise

        logfire.info("Schema upgraded", revision=revision)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
