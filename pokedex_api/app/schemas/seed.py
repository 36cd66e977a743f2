"""Schemas for the seed endpoint."""

from pydantic import BaseModel


class SeedResult(BaseModel):
    """Summary returned after repopulating the collection."""

    message: str
    inserted: int
