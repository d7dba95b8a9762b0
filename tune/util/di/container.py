"""Dependency injection container."""

from dishka import AsyncContainer, make_async_container

from tune.config import Settings, load_settings
from tune.util.di import PROVIDERS, get_provider


def create_container(settings: Settings | None = None) -> AsyncContainer:
    """Build production container (all prod implementations).

    Settings are resolved here, eagerly, so missing configuration aborts
    startup.

    Args:
        settings: Pre-resolved settings (loaded from the environment if omitted)

    Returns:
        Configured DI container with production providers

    Raises:
        MissingConfigError: If required configuration is not set
    """
    if settings is None:
        settings = load_settings()

    provider_instances = [get_provider(base, use_mock=False)() for base in PROVIDERS]
    return make_async_container(*provider_instances, context={Settings: settings})
