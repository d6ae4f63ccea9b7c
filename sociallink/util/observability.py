"""Logfire setup for the social login service.

Domain services log through ``logfire`` directly; this module only decides
where those records go and which libraries get traced.
"""

import logfire
from sqlalchemy.ext.asyncio import AsyncEngine

from sociallink.config import Settings


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire once per process.

    Records are sent to the Logfire cloud when explicitly enabled, or when
    a token is present and sending was not explicitly disabled. Otherwise
    they only reach the console.

    Args:
        settings: Application settings
    """
    observability = settings.observability
    send_to_logfire = observability.send_to_logfire
    if send_to_logfire is None:
        send_to_logfire = bool(observability.logfire_token)

    logfire.configure(
        service_name="sociallink",
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        token=observability.logfire_token,
        console=logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    )

    # Never log the widget bot token or the OAuth2 client secret
    logfire.info(
        "Observability configured",
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        widget_max_auth_age=settings.social.widget.max_auth_age_seconds,
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace queries on the users, roles and link tables."""
    logfire.instrument_sqlalchemy(engine=engine.sync_engine, enable_commenter=True)
    logfire.info("SQLAlchemy instrumented")


def instrument_httpx() -> None:
    """Trace the OAuth2 token exchange and userinfo requests."""
    logfire.instrument_httpx()
    logfire.info("httpx instrumented")
