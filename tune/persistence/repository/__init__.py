"""PostgreSQL repository implementations."""

from tune.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresUserRepository",
]
