"""
Seed endpoint for API v1.

``GET /seed/`` wipes the Pokemon collection and reloads it from
PokeAPI.  Meant for development databases only.
"""

from fastapi import APIRouter, Depends

from pokedex_api.app.api.v1.deps import get_seed_service
from pokedex_api.app.schemas.seed import SeedResult
from pokedex_api.app.services.seed_service import SeedService

router = APIRouter()


@router.get("/", response_model=SeedResult)
async def run_seed(service: SeedService = Depends(get_seed_service)) -> SeedResult:
    """Repopulate the database from PokeAPI."""
    return await service.populate()
