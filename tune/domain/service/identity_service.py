"""Identity resolution domain service."""

import logfire

from tune.domain.error import DuplicateCredentialError, NotFoundError
from tune.domain.model import NewUser, User, UserPatch
from tune.domain.repository import UserRepository
from tune.domain.value import AuthProvider, ProfileHints, ProviderCredential, UserId

from .base import Service


class IdentityService(Service):
    """Domain service mapping provider logins onto local users.

    A login is resolved in three steps:

    1. A user already linked to the credential's client id wins and is
       returned untouched.
    2. Otherwise a numeric id hint links the credential to that user.
    3. Otherwise a new user is created from the hints and credential.

    Steps 2 and 3 can lose a race against a concurrent login for the same
    provider account. The store rejects the duplicate and the login is
    resolved again, so it converges on the user that won.
    """

    def __init__(
        self, user_repository: UserRepository, max_resolve_attempts: int = 3
    ) -> None:
        """Initialize identity service.

        Args:
            user_repository: User repository
            max_resolve_attempts: Resolutions tried before a credential
                conflict is surfaced to the caller
        """
        if max_resolve_attempts < 1:
            raise ValueError("max_resolve_attempts must be at least 1")
        self.user_repository = user_repository
        self.max_resolve_attempts = max_resolve_attempts

    async def resolve_or_create(
        self, credential: ProviderCredential, hints: ProfileHints | None = None
    ) -> User:
        """Find, link or create the user for a provider login.

        Args:
            credential: Authentication result from one provider
            hints: Optional display data and id hint

        Returns:
            The resolved user

        Raises:
            NotFoundError: If a numeric id hint names no stored user
            DuplicateCredentialError: If conflicts persist after all attempts
            StorageError: If the store fails
        """
        hints = hints or ProfileHints()

        with logfire.span(
            "identity_service.resolve_or_create",
            provider=credential.provider.value,
            client_id=credential.client_id,
        ):
            attempt = 1
            while True:
                try:
                    return await self._resolve(credential, hints)
                except DuplicateCredentialError as e:
                    if attempt >= self.max_resolve_attempts:
                        logfire.error(
                            "Credential conflict not resolved",
                            provider=e.provider,
                            client_id=e.client_id,
                            attempts=attempt,
                        )
                        raise
                    logfire.warn(
                        "Credential linked concurrently, resolving again",
                        provider=e.provider,
                        client_id=e.client_id,
                        attempt=attempt,
                    )
                    attempt += 1

    async def _resolve(
        self, credential: ProviderCredential, hints: ProfileHints
    ) -> User:
        existing = await self.user_repository.find_by_credential(
            credential.provider, credential.client_id
        )
        if existing:
            logfire.info(
                "Linked user found",
                user_id=existing.id,
                provider=credential.provider.value,
            )
            return existing

        user_id = hints.user_id_hint
        if user_id is not None:
            user = await self.user_repository.find_by_id(user_id)
            if not user:
                logfire.warn("User for id hint not found", user_id=user_id)
                raise NotFoundError("User", str(user_id))

            updated = await self.user_repository.update(
                user.id, UserPatch.link(credential)
            )
            logfire.info(
                "Provider linked to existing user",
                user_id=updated.id,
                provider=credential.provider.value,
            )
            return updated

        # Any id in the hints is dropped here: NewUser has no id field
        created = await self.user_repository.create(
            NewUser(
                name=hints.name,
                avatar=hints.avatar,
                credentials={credential.provider: credential},
            )
        )
        logfire.info(
            "New user created",
            user_id=created.id,
            provider=credential.provider.value,
        )
        return created

    async def detach_provider(self, user: User, provider: AuthProvider) -> User:
        """Remove every credential field of a provider from a user.

        Other providers and profile fields are left alone. Detaching a
        provider the user never linked still succeeds.

        Args:
            user: User to detach from
            provider: Provider to remove

        Returns:
            The updated user
        """
        with logfire.span(
            "identity_service.detach_provider",
            user_id=user.id,
            provider=provider.value,
        ):
            if not user.has_provider(provider):
                logfire.info(
                    "Provider not linked, nothing to clear",
                    user_id=user.id,
                    provider=provider.value,
                )
            updated = await self.user_repository.update(
                user.id, UserPatch.unlink(provider)
            )
            logfire.info(
                "Provider detached",
                user_id=updated.id,
                provider=provider.value,
                remaining=[linked.value for linked in updated.providers],
            )
            return updated

    async def get_by_id(self, user_id: UserId) -> User:
        """Get a user by ID.

        Args:
            user_id: User ID

        Returns:
            The stored user

        Raises:
            NotFoundError: If the user does not exist
        """
        user = await self.user_repository.find_by_id(user_id)
        if not user:
            raise NotFoundError("User", str(user_id))
        return user
