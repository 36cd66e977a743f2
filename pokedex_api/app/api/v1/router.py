"""
Top‑level router for version 1 of the API.

This router aggregates domain‑specific routers under a unified prefix.
When new endpoints are added, update this file to include their
routers.
"""

from fastapi import APIRouter

from .endpoints import pokemon, seed

router = APIRouter()

router.include_router(pokemon.router, prefix="/pokemon", tags=["pokemon"])
router.include_router(seed.router, prefix="/seed", tags=["seed"])
