"""
Shared FastAPI dependencies for API v1.

Services are built per request from the shared MongoDB collection and
the immutable settings.  Tests replace ``get_pokemon_service`` and
``get_seed_service`` through ``app.dependency_overrides``.
"""

from bson import ObjectId

from pokedex_api.app.core.config import settings
from pokedex_api.app.core.db import get_pokemon_collection
from pokedex_api.app.core.exceptions import InvalidIdError
from pokedex_api.app.services.pokemon_service import PokemonService
from pokedex_api.app.services.seed_service import SeedService


def get_pokemon_service() -> PokemonService:
    return PokemonService(get_pokemon_collection(), default_limit=settings.default_limit)


def get_seed_service() -> SeedService:
    return SeedService(
        get_pokemon_collection(),
        pokeapi_url=settings.pokeapi_url,
        limit=settings.seed_limit,
    )


def parse_mongo_id(pokemon_id: str) -> str:
    """Reject path ids that cannot be a MongoDB ObjectId with HTTP 400."""
    if not ObjectId.is_valid(pokemon_id):
        raise InvalidIdError(pokemon_id)
    return pokemon_id
