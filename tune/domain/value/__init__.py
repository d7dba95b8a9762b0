"""Domain value objects for tune."""

from tune.domain.value.identifiers import UserId
from tune.domain.value.types import (
    CREDENTIAL_FIELDS,
    AuthProvider,
    ProfileHints,
    ProviderCredential,
)

__all__ = [
    # Identifiers
    "UserId",
    # Types
    "CREDENTIAL_FIELDS",
    "AuthProvider",
    "ProfileHints",
    "ProviderCredential",
]
