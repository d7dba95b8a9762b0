"""Core DI providers (non-mockable)."""

from dishka import Scope, from_context

from tune.config import Settings
from tune.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are resolved once, before the container is built, and handed
    in as container context. A missing secret therefore stops startup
    instead of failing the first request that needs it.
    """

    settings = from_context(provides=Settings, scope=Scope.APP)
