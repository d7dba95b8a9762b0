"""Unit tests for row mappers and the users table layout."""

from datetime import datetime, timezone

from sqlalchemy import UniqueConstraint

from tune.domain.model import NewUser, UserPatch
from tune.domain.value import AuthProvider
from tune.persistence.mappers import new_user_to_dict, patch_to_dict, row_to_user
from tune.persistence.tables import users_table
from tests.conftest import make_credential

CREATED = datetime(2024, 1, 1, tzinfo=timezone.utc)


def make_row(**columns) -> dict:
    row = {column.name: None for column in users_table.columns}
    row.update(id=1, created_at=CREATED, updated_at=CREATED)
    row.update(columns)
    return row


class TestUsersTable:
    """Tests for the users table definition."""

    def test_has_column_group_per_provider(self):
        for name in (
            "youtube_client_id",
            "youtube_refresh_token_expiry",
            "youtube_likes_id",
            "soundcloud_client_id",
            "soundcloud_access_token",
        ):
            assert name in users_table.c

    def test_client_ids_are_unique_per_provider(self):
        unique_columns = {
            tuple(column.name for column in constraint.columns)
            for constraint in users_table.constraints
            if isinstance(constraint, UniqueConstraint)
        }

        assert ("youtube_client_id",) in unique_columns
        assert ("soundcloud_client_id",) in unique_columns


class TestRowToUser:
    """Tests for row_to_user."""

    def test_maps_linked_providers_only(self):
        row = make_row(
            name="A",
            avatar="a.png",
            youtube_client_id="yt1",
            youtube_access_token="tok",
            youtube_refresh_token_expiry=1700000000,
        )

        user = row_to_user(row)

        assert user.id == 1
        assert user.name == "A"
        assert user.providers == [AuthProvider.YOUTUBE]
        youtube = user.credential(AuthProvider.YOUTUBE)
        assert youtube.access_token == "tok"
        assert youtube.refresh_token_expiry == 1700000000


class TestNewUserToDict:
    """Tests for new_user_to_dict."""

    def test_has_no_id_column(self):
        values = new_user_to_dict(
            NewUser(
                name="B",
                credentials={
                    AuthProvider.YOUTUBE: make_credential(AuthProvider.YOUTUBE, "yt2")
                },
            )
        )

        assert "id" not in values
        assert values["name"] == "B"
        assert values["youtube_client_id"] == "yt2"
        assert "soundcloud_client_id" not in values


class TestPatchToDict:
    """Tests for patch_to_dict."""

    def test_unlink_clears_every_provider_column(self):
        values = patch_to_dict(UserPatch.unlink(AuthProvider.YOUTUBE))

        assert {key for key in values if key.startswith("youtube_")} == {
            "youtube_client_id",
            "youtube_access_token",
            "youtube_refresh_token",
            "youtube_refresh_token_expiry",
            "youtube_likes_id",
        }
        assert all(
            value is None for key, value in values.items() if key.startswith("youtube_")
        )
        assert not any(key.startswith("soundcloud_") for key in values)
        assert "name" not in values
        assert "updated_at" in values

    def test_link_sets_provider_columns(self):
        values = patch_to_dict(
            UserPatch.link(make_credential(AuthProvider.SOUNDCLOUD, "sc1"))
        )

        assert values["soundcloud_client_id"] == "sc1"
        assert values["soundcloud_access_token"] == "sc1-access"
        assert not any(key.startswith("youtube_") for key in values)
