"""
Service layer for Pokemon entries.

This module provides the CRUD operations behind the ``/pokemon``
endpoints.  Documents live in a single MongoDB collection with unique
indexes on ``name`` and ``no``; uniqueness is enforced by the store and
duplicate-key failures are translated into ``DuplicateResourceError``.

A single lookup ``term`` may be a Pokedex number, an ObjectId or a
name.  The candidates are tried in that order by the matchers below
and the first document found wins.
"""

from __future__ import annotations

import json
import logging
import math
from typing import Any, Callable, Dict, NamedTuple, NoReturn, Optional, Union

from bson import ObjectId
from pymongo.errors import DuplicateKeyError

from pokedex_api.app.core.exceptions import (
    DuplicateResourceError,
    InternalFailureError,
    NotFoundError,
)
from pokedex_api.app.schemas.pokemon import PaginationParams, PokemonCreate, PokemonUpdate


logger = logging.getLogger(__name__)

# MongoDB error code for a unique index violation.
DUPLICATE_KEY_ERROR = 11000

# Internal version field, written on insert and hidden from listings.
VERSION_FIELD = "__v"

# Bounds of a BSON int64.
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


def parse_number(term: str) -> Optional[Union[int, float]]:
    """Return ``term`` as a number, or ``None`` if it is not one.

    Integral values within the BSON int64 range come back as ``int`` so
    they match the integer ``no`` stored in MongoDB; larger ones stay
    ``float`` because BSON cannot encode them as integers.  ``nan`` and
    infinities are rejected.
    """
    try:
        value = float(term)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(value):
        return None
    if value.is_integer() and INT64_MIN <= value <= INT64_MAX:
        return int(value)
    return value


class Matcher(NamedTuple):
    """One way of resolving a lookup term into a query filter."""

    kind: str
    accepts: Callable[[str], bool]
    build_filter: Callable[[str], Dict[str, Any]]


MATCHERS = (
    Matcher(
        kind="no",
        accepts=lambda term: parse_number(term) is not None,
        build_filter=lambda term: {"no": parse_number(term)},
    ),
    Matcher(
        kind="id",
        accepts=ObjectId.is_valid,
        build_filter=lambda term: {"_id": ObjectId(term)},
    ),
    Matcher(
        kind="name",
        accepts=lambda term: True,
        build_filter=lambda term: {"name": term.lower().strip()},
    ),
)


class PokemonService:
    """Service class for managing Pokemon documents.

    Parameters
    ----------
    collection
        Async MongoDB collection (``pymongo.AsyncMongoClient`` or any
        object with the same coroutine methods).
    default_limit : int
        Page size used by :meth:`find_all` when none is requested.
    """

    def __init__(self, collection, default_limit: int) -> None:
        self.collection = collection
        self.default_limit = default_limit

    async def create(self, data: PokemonCreate) -> Dict[str, Any]:
        """Insert a new Pokemon and return the stored document.

        ``name`` is lowercased before the insert.  Extra attributes are
        stored unchanged.
        """
        document = data.model_dump()
        document["name"] = document["name"].lower()
        document[VERSION_FIELD] = 0
        try:
            result = await self.collection.insert_one(document)
        except Exception as err:
            self._handle_exceptions(err)
        document["_id"] = result.inserted_id
        logger.info("Created Pokemon %s (#%s)", document["name"], document["no"])
        return document

    def find_all(self, pagination: Optional[PaginationParams] = None):
        """Return a cursor over one page of Pokemon ordered by ``no``.

        The cursor is lazy: nothing is fetched until it is iterated or
        ``to_list`` is awaited.  The version field is projected out.
        """
        pagination = pagination or PaginationParams()
        limit = pagination.limit if pagination.limit is not None else self.default_limit
        offset = pagination.offset or 0
        return self.collection.find(
            {},
            {VERSION_FIELD: 0},
            sort=[("no", 1)],
            skip=offset,
            limit=limit,
        )

    async def find_one(self, term: str) -> Dict[str, Any]:
        """Resolve ``term`` as a Pokedex number, an ObjectId or a name.

        Raises ``NotFoundError`` when none of the matchers finds a
        document.
        """
        for matcher in MATCHERS:
            if not matcher.accepts(term):
                continue
            pokemon = await self.collection.find_one(matcher.build_filter(term))
            if pokemon is not None:
                logger.debug("Resolved '%s' by %s", term, matcher.kind)
                return pokemon
        raise NotFoundError(f"Pokemon with id, name or no '{term}' not found")

    async def update(self, term: str, data: PokemonUpdate) -> Dict[str, Any]:
        """Apply a partial update to the Pokemon resolved from ``term``.

        Returns the document as it was before the write overlaid with
        the applied fields; the store is not read again.
        """
        pokemon = await self.find_one(term)
        patch = data.model_dump(exclude_unset=True)
        if patch.get("name") is not None:
            patch["name"] = patch["name"].lower()
        if not patch:
            return pokemon
        try:
            await self.collection.update_one({"_id": pokemon["_id"]}, {"$set": patch})
        except Exception as err:
            self._handle_exceptions(err)
        logger.info("Updated Pokemon %s fields %s", pokemon["_id"], sorted(patch))
        return {**pokemon, **patch}

    async def remove(self, pokemon_id: str) -> Dict[str, Any]:
        """Delete a Pokemon by ObjectId and return the removed document."""
        removed = None
        if ObjectId.is_valid(pokemon_id):
            removed = await self.collection.find_one_and_delete({"_id": ObjectId(pokemon_id)})
        if removed is None:
            raise NotFoundError(f"Pokemon with id '{pokemon_id}' not found")
        logger.info("Deleted Pokemon %s", pokemon_id)
        return removed

    @staticmethod
    def _handle_exceptions(err: Exception) -> NoReturn:
        """Translate a store error into a domain error and raise it."""
        if isinstance(err, DuplicateKeyError) or getattr(err, "code", None) == DUPLICATE_KEY_ERROR:
            details = getattr(err, "details", None) or {}
            key_value = details.get("keyValue")
            message = "Pokemon exists in db"
            if key_value:
                message = f"{message} {json.dumps(key_value, default=str)}"
            raise DuplicateResourceError(message) from err

        logger.error("Unexpected database error", exc_info=err)
        raise InternalFailureError("Can't create Pokemon - check server logs") from err
