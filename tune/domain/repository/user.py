"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from tune.domain.model import NewUser, User, UserPatch
from tune.domain.value import AuthProvider, UserId


class UserRepository(ABC):
    """Repository for User aggregate.

    Defines the contract for user persistence operations. Each write is
    atomic for a single user; nothing stronger is assumed.

    Implementations must enforce that a (provider, client_id) pair is
    linked to at most one user and raise DuplicateCredentialError when a
    write would break that rule. Other persistence failures raise
    StorageError.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_credential(
        self, provider: AuthProvider, client_id: str
    ) -> Optional[User]:
        """Find the user linked to a provider account.

        Args:
            provider: The authentication provider
            client_id: The account's client id on that provider

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def create(self, new_user: NewUser) -> User:
        """Insert a user and assign its id.

        Args:
            new_user: Profile and credentials of the user to create

        Returns:
            The stored user, including its assigned id

        Raises:
            DuplicateCredentialError: If a credential is already linked
        """
        pass

    @abstractmethod
    async def update(self, user_id: UserId, patch: UserPatch) -> User:
        """Merge a partial update into a stored user.

        Args:
            user_id: The user to update
            patch: Fields to set or clear; last write wins per field

        Returns:
            The updated user

        Raises:
            NotFoundError: If the user does not exist
            DuplicateCredentialError: If a credential is already linked
        """
        pass
