"""Domain services."""

from .base import Service
from .identity_service import IdentityService
from .stream_token_service import StreamTokenService

__all__ = [
    "IdentityService",
    "Service",
    "StreamTokenService",
]
