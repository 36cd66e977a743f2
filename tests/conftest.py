import asyncio
import uuid

import pytest
import pytest_asyncio
from mongomock_motor import AsyncMongoMockClient

from pokedex_api.app.core.db import POKEMON_COLLECTION, create_indexes
from pokedex_api.app.services.pokemon_service import PokemonService


def _fresh_collection():
    # A unique database per test keeps mongomock's shared server store isolated.
    client = AsyncMongoMockClient()
    return client[f"pokedex_test_{uuid.uuid4().hex}"][POKEMON_COLLECTION]


@pytest_asyncio.fixture
async def collection():
    collection = _fresh_collection()
    await create_indexes(collection)
    return collection


@pytest.fixture
def sync_collection():
    """Indexed collection for tests that drive the app through TestClient."""
    collection = _fresh_collection()
    asyncio.run(create_indexes(collection))
    return collection


@pytest.fixture
def service(collection):
    return PokemonService(collection, default_limit=3)
