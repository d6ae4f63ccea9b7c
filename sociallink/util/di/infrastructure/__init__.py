"""Infrastructure providers."""

# Import bases
from .oauth2 import OAuth2Provider
from .persistence import PersistenceProvider

# Import implementations (needed for __subclasses__())
from .oauth2 import ProdOAuth2Provider  # noqa: F401
from .persistence import ProdPersistenceProvider  # noqa: F401

__all__ = [
    "OAuth2Provider",
    "PersistenceProvider",
    "ProdOAuth2Provider",
    "ProdPersistenceProvider",
]
