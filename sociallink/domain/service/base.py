"""Base class for domain services."""


class Service:
    """Base class for all domain services.

    Services hold the login and linking rules that span users, roles
    and social account links.
    """

    pass
