"""In-memory user repository for testing."""

from datetime import datetime, timezone
from typing import Iterable, Optional

from tune.domain.error import DuplicateCredentialError, NotFoundError
from tune.domain.model import NewUser, User, UserPatch
from tune.domain.repository import UserRepository
from tune.domain.value import AuthProvider, ProviderCredential, UserId


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing.

    Assigns sequential ids starting at 1 and enforces the same
    (provider, client_id) uniqueness rule as the database.
    """

    def __init__(self) -> None:
        self._users: dict[UserId, User] = {}
        self._next_id = 1

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self._users.get(user_id)

    async def find_by_credential(
        self, provider: AuthProvider, client_id: str
    ) -> Optional[User]:
        """Find the user linked to a provider account."""
        for user in self._users.values():
            credential = user.credential(provider)
            if credential and credential.client_id == client_id:
                return user
        return None

    async def create(self, new_user: NewUser) -> User:
        """Store a new user under the next id."""
        self._check_unique(new_user.credentials.values(), owner=None)

        user = User(
            id=UserId(self._next_id),
            name=new_user.name,
            avatar=new_user.avatar,
            credentials=dict(new_user.credentials),
        )
        self._next_id += 1
        self._users[user.id] = user
        return user

    async def update(self, user_id: UserId, patch: UserPatch) -> User:
        """Merge a patch into a stored user."""
        user = self._users.get(user_id)
        if not user:
            raise NotFoundError("User", str(user_id))
        if patch.is_empty:
            return user

        linked = [credential for credential in patch.credentials.values() if credential]
        self._check_unique(linked, owner=user_id)

        updated = patch.apply(user).model_copy(
            update={"updated_at": datetime.now(timezone.utc)}
        )
        self._users[user_id] = updated
        return updated

    def _check_unique(
        self, credentials: Iterable[ProviderCredential], owner: Optional[UserId]
    ) -> None:
        for credential in credentials:
            for user in self._users.values():
                if user.id == owner:
                    continue
                existing = user.credential(credential.provider)
                if existing and existing.client_id == credential.client_id:
                    raise DuplicateCredentialError(
                        credential.provider.value, credential.client_id
                    )
