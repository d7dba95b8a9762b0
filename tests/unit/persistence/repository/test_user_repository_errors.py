"""Unit tests for PostgresUserRepository database error translation."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from tune.domain.error import DuplicateCredentialError, NotFoundError, StorageError
from tune.domain.model import NewUser, UserPatch
from tune.domain.value import AuthProvider, UserId
from tune.persistence.repository import PostgresUserRepository
from tests.conftest import make_credential


def mock_session(execute: AsyncMock) -> MagicMock:
    """Build an AsyncSession stand-in whose SAVEPOINT propagates errors."""
    session = MagicMock()
    session.execute = execute
    savepoint = session.begin_nested.return_value
    savepoint.__aenter__ = AsyncMock(return_value=None)
    savepoint.__aexit__ = AsyncMock(return_value=False)
    return session


def returning(row):
    """Execute mock whose result yields one mapping row (or none)."""
    result = MagicMock()
    result.mappings.return_value.first.return_value = row
    return AsyncMock(return_value=result)


def integrity_error(message: str) -> IntegrityError:
    return IntegrityError("INSERT INTO users", {}, Exception(message))


def user_row(**fields):
    now = datetime.now(timezone.utc)
    row = {
        "id": 1,
        "name": "Ann",
        "avatar": "a.png",
        "created_at": now,
        "updated_at": now,
    }
    row.update(fields)
    return row


class TestWriteErrors:
    """Writes map database failures onto domain errors."""

    @pytest.mark.asyncio
    async def test_client_id_conflict_on_create_is_duplicate_credential(self):
        # Arrange
        execute = AsyncMock(
            side_effect=integrity_error(
                'duplicate key value violates unique constraint "uq_users_youtube_client_id"'
            )
        )
        repo = PostgresUserRepository(mock_session(execute))
        credential = make_credential(AuthProvider.YOUTUBE, "yt1")

        # Act
        with pytest.raises(DuplicateCredentialError) as exc_info:
            await repo.create(NewUser(credentials={AuthProvider.YOUTUBE: credential}))

        # Assert
        assert exc_info.value.provider == "youtube"
        assert exc_info.value.client_id == "yt1"
        assert isinstance(exc_info.value.__cause__, IntegrityError)

    @pytest.mark.asyncio
    async def test_client_id_conflict_on_link_is_duplicate_credential(self):
        execute = AsyncMock(
            side_effect=integrity_error(
                'duplicate key value violates unique constraint "uq_users_soundcloud_client_id"'
            )
        )
        repo = PostgresUserRepository(mock_session(execute))
        credential = make_credential(AuthProvider.SOUNDCLOUD, "sc1")

        with pytest.raises(DuplicateCredentialError) as exc_info:
            await repo.update(UserId(1), UserPatch.link(credential))

        assert exc_info.value.provider == "soundcloud"
        assert exc_info.value.client_id == "sc1"

    @pytest.mark.asyncio
    async def test_other_integrity_error_is_storage_error(self):
        execute = AsyncMock(
            side_effect=integrity_error(
                'null value in column "created_at" violates not-null constraint'
            )
        )
        repo = PostgresUserRepository(mock_session(execute))
        credential = make_credential(AuthProvider.YOUTUBE, "yt1")

        with pytest.raises(StorageError) as exc_info:
            await repo.create(NewUser(credentials={AuthProvider.YOUTUBE: credential}))

        assert not isinstance(exc_info.value, DuplicateCredentialError)
        assert "created_at" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_conflict_on_unrelated_provider_is_storage_error(self):
        """Only the constraint of a credential being written counts as a conflict."""
        execute = AsyncMock(
            side_effect=integrity_error(
                'duplicate key value violates unique constraint "uq_users_soundcloud_client_id"'
            )
        )
        repo = PostgresUserRepository(mock_session(execute))
        credential = make_credential(AuthProvider.YOUTUBE, "yt1")

        with pytest.raises(StorageError) as exc_info:
            await repo.create(NewUser(credentials={AuthProvider.YOUTUBE: credential}))

        assert not isinstance(exc_info.value, DuplicateCredentialError)

    @pytest.mark.asyncio
    async def test_operational_error_is_storage_error(self):
        execute = AsyncMock(
            side_effect=OperationalError("UPDATE users", {}, Exception("connection lost"))
        )
        repo = PostgresUserRepository(mock_session(execute))

        with pytest.raises(StorageError) as exc_info:
            await repo.update(UserId(1), UserPatch.unlink(AuthProvider.YOUTUBE))

        assert isinstance(exc_info.value.__cause__, OperationalError)

    @pytest.mark.asyncio
    async def test_writes_run_in_savepoint(self):
        session = mock_session(returning(user_row(youtube_client_id="yt1")))
        repo = PostgresUserRepository(session)
        credential = make_credential(AuthProvider.YOUTUBE, "yt1")

        user = await repo.create(NewUser(credentials={AuthProvider.YOUTUBE: credential}))

        session.begin_nested.assert_called_once()
        assert user.id == 1
        assert user.credential(AuthProvider.YOUTUBE).client_id == "yt1"

    @pytest.mark.asyncio
    async def test_update_of_missing_user_is_not_found(self):
        repo = PostgresUserRepository(mock_session(returning(None)))

        with pytest.raises(NotFoundError) as exc_info:
            await repo.update(UserId(99), UserPatch.unlink(AuthProvider.YOUTUBE))

        assert exc_info.value.identifier == "99"

    @pytest.mark.asyncio
    async def test_empty_patch_reads_without_writing(self):
        session = mock_session(returning(user_row()))
        repo = PostgresUserRepository(session)

        user = await repo.update(UserId(1), UserPatch())

        assert user.id == 1
        session.begin_nested.assert_not_called()
        session.execute.assert_awaited_once()


class TestReadErrors:
    """Reads map database failures onto StorageError."""

    @pytest.mark.asyncio
    async def test_failed_lookup_is_storage_error(self):
        execute = AsyncMock(
            side_effect=OperationalError("SELECT", {}, Exception("connection refused"))
        )
        repo = PostgresUserRepository(mock_session(execute))

        with pytest.raises(StorageError):
            await repo.find_by_credential(AuthProvider.YOUTUBE, "yt1")

    @pytest.mark.asyncio
    async def test_missing_row_is_none(self):
        repo = PostgresUserRepository(mock_session(returning(None)))

        assert await repo.find_by_id(UserId(1)) is None
