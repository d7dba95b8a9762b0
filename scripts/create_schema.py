#!/usr/bin/env python3
"""Create the users table with Logfire error tracking."""

import asyncio
import sys

import logfire

from tune.config import load_settings
from tune.persistence.database import create_engine
from tune.persistence.tables import metadata
from tune.util.logging import setup_logging
from tune.util.observability import configure_logfire


async def create_schema() -> None:
    """Create every table that does not exist yet."""
    # Fails here, before touching the database, if TOKEN_SECRET is unset
    settings = load_settings()

    setup_logging(settings)
    configure_logfire(settings)

    engine = create_engine(settings)
    try:
        logfire.info("Creating database schema")
        async with engine.begin() as conn:
            await conn.run_sync(metadata.create_all)
        logfire.info("Database schema created")
    except Exception as e:
        logfire.error(
            "Schema creation failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise
    finally:
        await engine.dispose()


def main() -> int:
    asyncio.run(create_schema())
    return 0


if __name__ == "__main__":
    sys.exit(main())
