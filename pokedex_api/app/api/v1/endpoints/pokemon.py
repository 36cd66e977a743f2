"""
Pokemon endpoints for API v1.

These routes expose a CRUD API for Pokemon.  Single entries are looked
up by a ``term`` that may be the Pokedex number, the MongoDB id or the
name; deletion requires the MongoDB id.  Errors raised by the service
(404, 400, 500) are ``HTTPException`` subclasses and propagate as is.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query, status

from pokedex_api.app.api.v1.deps import get_pokemon_service, parse_mongo_id
from pokedex_api.app.schemas.pokemon import (
    PaginationParams,
    PokemonCreate,
    PokemonUpdate,
    serialize_pokemon,
)
from pokedex_api.app.services.pokemon_service import PokemonService

router = APIRouter()


@router.post("/", status_code=status.HTTP_201_CREATED)
async def create_pokemon(
    pokemon_in: PokemonCreate,
    service: PokemonService = Depends(get_pokemon_service),
) -> Dict[str, Any]:
    """Create a new Pokemon.

    Returns HTTP 400 if the name or number already exists.
    """
    pokemon = await service.create(pokemon_in)
    return serialize_pokemon(pokemon)


@router.get("/")
async def list_pokemon(
    limit: Optional[int] = Query(None, ge=1),
    offset: Optional[int] = Query(None, ge=0),
    service: PokemonService = Depends(get_pokemon_service),
) -> List[Dict[str, Any]]:
    """Return a page of Pokemon ordered by Pokedex number.

    ``limit`` defaults to the configured page size and ``offset`` to 0.
    """
    cursor = service.find_all(PaginationParams(limit=limit, offset=offset))
    return [serialize_pokemon(pokemon) async for pokemon in cursor]


@router.get("/{term}")
async def get_pokemon(
    term: str,
    service: PokemonService = Depends(get_pokemon_service),
) -> Dict[str, Any]:
    """Retrieve a single Pokemon by number, id or name."""
    pokemon = await service.find_one(term)
    return serialize_pokemon(pokemon)


@router.patch("/{term}")
async def update_pokemon(
    term: str,
    pokemon_in: PokemonUpdate,
    service: PokemonService = Depends(get_pokemon_service),
) -> Dict[str, Any]:
    """Partially update the Pokemon matching ``term``."""
    pokemon = await service.update(term, pokemon_in)
    return serialize_pokemon(pokemon)


@router.delete("/{pokemon_id}")
async def delete_pokemon(
    pokemon_id: str = Depends(parse_mongo_id),
    service: PokemonService = Depends(get_pokemon_service),
) -> Dict[str, Any]:
    """Delete a Pokemon by MongoDB id and return the removed entry."""
    removed = await service.remove(pokemon_id)
    return serialize_pokemon(removed)
