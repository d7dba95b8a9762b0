"""User aggregate root.

A user is one person whose account may be linked to credentials from
several providers at once (YouTube, SoundCloud).
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from tune.domain.model.common import DomainModel
from tune.domain.value import AuthProvider, ProviderCredential, UserId


class User(DomainModel):
    """User aggregate root.

    Holds at most one credential per provider. Transformations return
    new instances; persisting them is the repository's job.
    """

    id: UserId
    name: Optional[str] = None
    avatar: Optional[str] = None
    credentials: dict[AuthProvider, ProviderCredential] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def providers(self) -> list[AuthProvider]:
        """Providers currently linked to this user."""
        return sorted(self.credentials, key=lambda provider: provider.value)

    def has_provider(self, provider: AuthProvider) -> bool:
        return provider in self.credentials

    def credential(self, provider: AuthProvider) -> Optional[ProviderCredential]:
        return self.credentials.get(provider)

    def with_credential(self, credential: ProviderCredential) -> "User":
        """Return a copy with the credential's provider fields replaced."""
        credentials = {**self.credentials, credential.provider: credential}
        return self.model_copy(update={"credentials": credentials})

    def without_provider(self, provider: AuthProvider) -> "User":
        """Return a copy with every field of the provider removed."""
        credentials = {
            linked: credential
            for linked, credential in self.credentials.items()
            if linked != provider
        }
        return self.model_copy(update={"credentials": credentials})


class NewUser(DomainModel):
    """Record used to create a user.

    Has no id field: ids are always assigned by the store.
    """

    name: Optional[str] = None
    avatar: Optional[str] = None
    credentials: dict[AuthProvider, ProviderCredential] = Field(default_factory=dict)


class UserPatch(DomainModel):
    """Partial update of a stored user.

    A credential value of None clears every field of that provider.
    Fields left as None (name, avatar) are not touched.
    """

    name: Optional[str] = None
    avatar: Optional[str] = None
    credentials: dict[AuthProvider, Optional[ProviderCredential]] = Field(
        default_factory=dict
    )

    @property
    def is_empty(self) -> bool:
        return self.name is None and self.avatar is None and not self.credentials

    @classmethod
    def link(cls, credential: ProviderCredential) -> "UserPatch":
        """Patch that sets one provider's credential."""
        return cls(credentials={credential.provider: credential})

    @classmethod
    def unlink(cls, provider: AuthProvider) -> "UserPatch":
        """Patch that clears one provider's credential."""
        return cls(credentials={provider: None})

    def apply(self, user: User) -> User:
        """Apply this patch to an in-memory user."""
        updated = user
        for provider, credential in self.credentials.items():
            if credential is None:
                updated = updated.without_provider(provider)
            else:
                updated = updated.with_credential(credential)
        changes = {
            key: value
            for key, value in (("name", self.name), ("avatar", self.avatar))
            if value is not None
        }
        return updated.model_copy(update=changes) if changes else updated
