"""Authentication use cases."""

from .detach_provider import DetachProviderUseCase
from .login import LoginUseCase

__all__ = ["LoginUseCase", "DetachProviderUseCase"]
