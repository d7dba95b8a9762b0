"""Repository interfaces for the tune domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from tune.domain.repository.user import UserRepository

__all__ = [
    "UserRepository",
]
