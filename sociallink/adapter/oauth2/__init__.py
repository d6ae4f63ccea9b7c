"""OAuth2 authorization-code adapter."""

from .client import (
    MockOAuth2ProfileResolver,
    OAuth2ProfileResolver,
    RealOAuth2ProfileResolver,
)

__all__ = ["OAuth2ProfileResolver", "RealOAuth2ProfileResolver", "MockOAuth2ProfileResolver"]
