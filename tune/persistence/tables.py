"""SQLAlchemy table definitions for tune.

Provider credentials are stored as flat column groups on the users table,
one group per provider, named "<provider>_<field>" (youtube_client_id,
soundcloud_access_token, ...). Each provider's client id is unique, which
is what lets concurrent first logins converge on a single user.
"""

from sqlalchemy import (
    BigInteger,
    Column,
    DateTime,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
    func,
)

from tune.domain.value import CREDENTIAL_FIELDS, AuthProvider

# Metadata object for all tables
metadata = MetaData()

_CREDENTIAL_COLUMN_TYPES = {
    "client_id": String(255),
    "access_token": Text,
    "refresh_token": Text,
    "refresh_token_expiry": BigInteger,
    "likes_id": String(255),
}


def client_id_constraint_name(provider: AuthProvider) -> str:
    """Name of the uniqueness constraint on a provider's client id."""
    return f"uq_users_{provider.value}_client_id"


def _credential_columns(provider: AuthProvider) -> list:
    columns: list = [
        Column(f"{provider.field_prefix}{field}", _CREDENTIAL_COLUMN_TYPES[field])
        for field in CREDENTIAL_FIELDS
    ]
    columns.append(
        UniqueConstraint(
            f"{provider.field_prefix}client_id",
            name=client_id_constraint_name(provider),
        )
    )
    return columns


# ============================================================================
# USERS TABLE
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(40), nullable=True),
    Column("avatar", String(255), nullable=True),
    *[
        column
        for provider in AuthProvider
        for column in _credential_columns(provider)
    ],
    Column(
        "created_at", DateTime(timezone=True), nullable=False, server_default=func.now()
    ),
    Column(
        "updated_at", DateTime(timezone=True), nullable=False, server_default=func.now()
    ),
)
