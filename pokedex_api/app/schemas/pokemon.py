"""
Pydantic schemas for Pokemon entries.

A Pokemon is identified by a unique lowercase ``name`` and a unique
Pokedex number ``no``.  Any other attribute sent by the client (types,
stats, sprites, ...) is accepted as is and stored alongside, which is
why the payload models allow extra fields.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


# Extra keys with these prefixes are reserved by MongoDB (``_id``,
# operators) or by the service (``__v``).
RESERVED_PREFIXES = ("_", "$")


class PokemonPayload(BaseModel):
    """Base for Pokemon payloads that accept arbitrary extra attributes."""

    model_config = ConfigDict(extra="allow")

    @model_validator(mode="after")
    def reject_reserved_keys(self):
        reserved = sorted(
            key
            for key in (self.model_extra or {})
            if key.startswith(RESERVED_PREFIXES) or "." in key
        )
        if reserved:
            raise ValueError(f"Reserved attribute names are not allowed: {', '.join(reserved)}")
        return self


class PokemonCreate(PokemonPayload):
    """Schema for creating a new Pokemon."""

    name: str = Field(..., min_length=1, description="Pokemon name; stored lowercase")
    no: int = Field(..., ge=1, description="National Pokedex number")


class PokemonUpdate(PokemonPayload):
    """Schema for partially updating a Pokemon.

    All fields are optional; only values the client actually sent are
    applied.
    """

    name: Optional[str] = Field(None, min_length=1)
    no: Optional[int] = Field(None, ge=1)


class PaginationParams(BaseModel):
    """Query parameters accepted by the list endpoint.

    ``None`` means "use the default": the configured page size for
    ``limit`` and ``0`` for ``offset``.
    """

    limit: Optional[int] = Field(None, ge=1)
    offset: Optional[int] = Field(None, ge=0)


def serialize_pokemon(document: Dict[str, Any]) -> Dict[str, Any]:
    """Convert a stored document into a JSON friendly dictionary.

    The MongoDB ``_id`` is rendered as the string field ``id``; every
    other key is copied unchanged.
    """
    data = {key: value for key, value in document.items() if key != "_id"}
    if "_id" in document:
        data = {"id": str(document["_id"]), **data}
    return data
