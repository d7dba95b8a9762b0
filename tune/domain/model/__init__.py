"""Domain model entities for tune."""

from tune.domain.model.user import NewUser, User, UserPatch

__all__ = [
    "NewUser",
    "User",
    "UserPatch",
]
