"""Provider metadata shared by production and test containers."""

from typing import ClassVar, Literal

from dishka import Provider

# Infrastructure that tests swap for in-memory or scripted fakes
Component = Literal["oauth2", "persistence"]


class ProviderBase(Provider):
    """Base for every provider in the container.

    Attributes:
        __mock_component__: Name a swappable component answers to, None
            for providers that are always used as-is
        __is_mock__: Whether this is the test double of its component
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False
