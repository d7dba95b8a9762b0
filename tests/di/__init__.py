"""Mock providers for testing."""

from .persistence import MockPersistenceProvider
from .container import build_test_container, build_test_settings

__all__ = [
    "MockPersistenceProvider",
    "build_test_container",
    "build_test_settings",
]
