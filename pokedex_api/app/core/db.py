"""
MongoDB integration.

This module owns the process-wide asyncio MongoDB client and exposes
helpers to reach the ``pokemons`` collection (``get_pokemon_collection``)
and to create its unique indexes on application start
(``init_db``).  The client is created lazily on first use and reused
for the lifetime of the process; ``close_db`` releases it on shutdown.
"""

import logging
from typing import Optional

from pymongo import ASCENDING, AsyncMongoClient

from .config import settings


POKEMON_COLLECTION = "pokemons"

logger = logging.getLogger(__name__)

_client: Optional[AsyncMongoClient] = None


def get_client() -> AsyncMongoClient:
    """Return the shared MongoDB client, creating it on first use.

    Creating the client does not open a connection; pymongo connects in
    the background when the first operation is awaited.
    """
    global _client
    if _client is None:
        _client = AsyncMongoClient(settings.mongodb_url)
    return _client


def get_database():
    """Return the configured database handle."""
    return get_client()[settings.database_name]


def get_pokemon_collection():
    """Return the collection storing Pokemon documents."""
    return get_database()[POKEMON_COLLECTION]


async def create_indexes(collection) -> None:
    """Create the unique indexes on ``name`` and ``no``.

    ``create_index`` is idempotent, so calling this on every start is
    safe.  Uniqueness of both fields is enforced by MongoDB, not by
    application code.
    """
    await collection.create_index([("name", ASCENDING)], unique=True)
    await collection.create_index([("no", ASCENDING)], unique=True)


async def init_db() -> None:
    """Prepare the database on application start."""
    await create_indexes(get_pokemon_collection())
    logger.info("Indexes ensured on %s.%s", settings.database_name, POKEMON_COLLECTION)


async def close_db() -> None:
    """Close the shared client, if one was created."""
    global _client
    if _client is not None:
        await _client.close()
        _client = None
