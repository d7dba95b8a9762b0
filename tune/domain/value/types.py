"""Domain value objects for tune.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and the persisted field naming
convention for provider credentials.
"""

from enum import Enum
from typing import Any, Mapping, Optional

from pydantic import field_validator

from tune.domain.value.common import ValueObject
from tune.domain.value.identifiers import UserId

# Per-provider credential fields, persisted as "<provider>_<field>"
CREDENTIAL_FIELDS = (
    "client_id",
    "access_token",
    "refresh_token",
    "refresh_token_expiry",
    "likes_id",
)


class AuthProvider(str, Enum):
    """Supported authentication providers."""

    YOUTUBE = "youtube"
    SOUNDCLOUD = "soundcloud"

    @property
    def field_prefix(self) -> str:
        """Prefix shared by every persisted field of this provider."""
        return f"{self.value}_"


class ProviderCredential(ValueObject):
    """Authentication result from a single provider.

    The client id is the provider's stable identifier for the linked
    account and is unique per provider across all users.
    """

    provider: AuthProvider
    client_id: str
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    refresh_token_expiry: Optional[int] = None  # Epoch seconds
    likes_id: Optional[str] = None  # Provider-side "likes" playlist

    @field_validator("client_id")
    @classmethod
    def validate_client_id(cls, v: str) -> str:
        """Validate client id is not empty."""
        if not v:
            raise ValueError("Client id must not be empty")
        return v

    @property
    def field_prefix(self) -> str:
        return self.provider.field_prefix

    @staticmethod
    def field_names(provider: AuthProvider) -> list[str]:
        """All persisted field names owned by a provider."""
        return [f"{provider.field_prefix}{name}" for name in CREDENTIAL_FIELDS]

    def to_fields(self) -> dict[str, Any]:
        """Flatten into persisted fields, e.g. youtube_client_id."""
        return {
            f"{self.field_prefix}{name}": getattr(self, name)
            for name in CREDENTIAL_FIELDS
        }

    @classmethod
    def from_fields(
        cls, provider: AuthProvider, fields: Mapping[str, Any]
    ) -> Optional["ProviderCredential"]:
        """Rebuild a credential from persisted fields.

        Args:
            provider: Provider whose fields to read
            fields: Flat mapping, typically a database row

        Returns:
            The credential, or None if the provider is not linked
        """
        prefix = provider.field_prefix
        if not fields.get(f"{prefix}client_id"):
            return None
        return cls(
            provider=provider,
            **{name: fields.get(f"{prefix}{name}") for name in CREDENTIAL_FIELDS},
        )


class ProfileHints(ValueObject):
    """Optional profile data supplied alongside a provider login.

    The id is untrusted input. It is only honoured as a request to link
    a credential to an existing user when it is a non-negative integral
    number (1 or 1.0, never "1").
    """

    id: Any = None
    name: Optional[str] = None
    avatar: Optional[str] = None

    @property
    def user_id_hint(self) -> Optional[UserId]:
        """The id hint if it can name a stored user, otherwise None."""
        hint = self.id
        # bool is an int subclass but never a stored id
        if isinstance(hint, bool):
            return None
        if isinstance(hint, int) and hint >= 0:
            return UserId(hint)
        if isinstance(hint, float) and hint.is_integer() and hint >= 0:
            return UserId(int(hint))
        return None
