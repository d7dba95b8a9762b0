"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we map rows by hand
instead of using SQLAlchemy's ORM mapping.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Mapping

from tune.domain.model import NewUser, User, UserPatch
from tune.domain.value import AuthProvider, ProviderCredential, UserId


def row_to_user(row: Mapping[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as mapping

    Returns:
        User domain model
    """
    credentials = {}
    for provider in AuthProvider:
        credential = ProviderCredential.from_fields(provider, row)
        if credential:
            credentials[provider] = credential

    return User(
        id=UserId(row["id"]),
        name=row.get("name"),
        avatar=row.get("avatar"),
        credentials=credentials,
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def new_user_to_dict(new_user: NewUser) -> Dict[str, Any]:
    """Convert NewUser to database dict for insertion.

    Args:
        new_user: User creation record

    Returns:
        Dict suitable for database insertion (no id column)
    """
    values: Dict[str, Any] = {"name": new_user.name, "avatar": new_user.avatar}
    for credential in new_user.credentials.values():
        values.update(credential.to_fields())
    return values


def patch_to_dict(patch: UserPatch) -> Dict[str, Any]:
    """Convert UserPatch to database dict for a partial update.

    Only the columns named by the patch are included. Clearing a provider
    sets every one of its columns to NULL.

    Args:
        patch: Partial update

    Returns:
        Dict suitable for database update
    """
    values: Dict[str, Any] = {}
    if patch.name is not None:
        values["name"] = patch.name
    if patch.avatar is not None:
        values["avatar"] = patch.avatar

    for provider, credential in patch.credentials.items():
        if credential is None:
            values.update(dict.fromkeys(ProviderCredential.field_names(provider)))
        else:
            values.update(credential.to_fields())

    values["updated_at"] = datetime.now(timezone.utc)
    return values
