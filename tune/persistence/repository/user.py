"""PostgreSQL implementation of User repository."""

from typing import Any, Iterable, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from tune.domain.error import DuplicateCredentialError, NotFoundError, StorageError
from tune.domain.model import NewUser, User, UserPatch
from tune.domain.repository import UserRepository
from tune.domain.value import AuthProvider, ProviderCredential, UserId
from tune.persistence.mappers import new_user_to_dict, patch_to_dict, row_to_user
from tune.persistence.tables import client_id_constraint_name, users_table


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository.

    Writes run inside a SAVEPOINT so a rejected duplicate credential does
    not abort the surrounding request transaction.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: User ID to look up

        Returns:
            User if found, None otherwise
        """
        stmt = select(users_table).where(users_table.c.id == user_id)
        return await self._fetch_one(stmt)

    async def find_by_credential(
        self, provider: AuthProvider, client_id: str
    ) -> Optional[User]:
        """Find the user linked to a provider account.

        Args:
            provider: The authentication provider
            client_id: The account's client id on that provider

        Returns:
            User if found, None otherwise
        """
        column = users_table.c[f"{provider.field_prefix}client_id"]
        stmt = select(users_table).where(column == client_id)
        return await self._fetch_one(stmt)

    async def create(self, new_user: NewUser) -> User:
        """Insert a user; the database assigns the id.

        Args:
            new_user: User creation record

        Returns:
            The stored user
        """
        stmt = (
            users_table.insert()
            .values(**new_user_to_dict(new_user))
            .returning(*users_table.c)
        )
        row = await self._write(stmt, new_user.credentials.values())
        if row is None:
            raise StorageError("Insert into users returned no row")
        return row_to_user(row)

    async def update(self, user_id: UserId, patch: UserPatch) -> User:
        """Merge a partial update into a stored user.

        Args:
            user_id: User to update
            patch: Columns to set or clear

        Returns:
            The updated user
        """
        if patch.is_empty:
            user = await self.find_by_id(user_id)
            if not user:
                raise NotFoundError("User", str(user_id))
            return user

        stmt = (
            users_table.update()
            .where(users_table.c.id == user_id)
            .values(**patch_to_dict(patch))
            .returning(*users_table.c)
        )
        linked = [credential for credential in patch.credentials.values() if credential]
        row = await self._write(stmt, linked)
        if row is None:
            raise NotFoundError("User", str(user_id))
        return row_to_user(row)

    async def _fetch_one(self, stmt: Any) -> Optional[User]:
        try:
            result = await self.session.execute(stmt)
            row = result.mappings().first()
        except SQLAlchemyError as e:
            raise StorageError(str(e)) from e
        return row_to_user(dict(row)) if row else None

    async def _write(
        self, stmt: Any, credentials: Iterable[ProviderCredential]
    ) -> Optional[dict[str, Any]]:
        """Execute a write in a SAVEPOINT and return the resulting row.

        Raises:
            DuplicateCredentialError: If a client id constraint rejects the write
            StorageError: For any other database failure
        """
        try:
            async with self.session.begin_nested():
                result = await self.session.execute(stmt)
                row = result.mappings().first()
        except IntegrityError as e:
            message = str(e.orig)
            for credential in credentials:
                if client_id_constraint_name(credential.provider) in message:
                    raise DuplicateCredentialError(
                        credential.provider.value, credential.client_id
                    ) from e
            raise StorageError(message) from e
        except SQLAlchemyError as e:
            raise StorageError(str(e)) from e
        return dict(row) if row else None
