import logging
from unittest.mock import AsyncMock, MagicMock

import bson
import pytest
from bson import ObjectId
from pydantic import ValidationError
from pymongo.errors import DuplicateKeyError, ServerSelectionTimeoutError

from pokedex_api.app.core.exceptions import (
    DuplicateResourceError,
    InternalFailureError,
    NotFoundError,
)
from pokedex_api.app.schemas.pokemon import PaginationParams, PokemonCreate, PokemonUpdate
from pokedex_api.app.services.pokemon_service import PokemonService, parse_number

ALL_DIGIT_ID = ObjectId("123456789012345678901234")


async def _create(service, name, no, **attributes):
    return await service.create(PokemonCreate(name=name, no=no, **attributes))


def _failing_collection(**methods):
    collection = MagicMock()
    for name, side_effect in methods.items():
        setattr(collection, name, AsyncMock(side_effect=side_effect))
    return collection


class EncodingCollection:
    """Encodes lookup filters to BSON like the real driver, and records them."""

    def __init__(self, collection):
        self._collection = collection
        self.filters = []

    def __getattr__(self, name):
        return getattr(self._collection, name)

    async def find_one(self, filter, *args, **kwargs):
        bson.encode(filter)
        self.filters.append(filter)
        return await self._collection.find_one(filter, *args, **kwargs)


@pytest.mark.parametrize(
    "term, expected",
    [
        ("25", 25),
        (" 25 ", 25),
        ("25.0", 25),
        ("2.5", 2.5),
        ("99999999999999999999", 1e20),
        ("pikachu", None),
        ("", None),
        ("nan", None),
        ("inf", None),
    ],
)
def test_parse_number(term, expected):
    assert parse_number(term) == expected


@pytest.mark.parametrize("term", ["99999999999999999999", str(ALL_DIGIT_ID), "-99999999999999999999"])
def test_parse_number_keeps_values_beyond_int64_as_float(term):
    assert isinstance(parse_number(term), float)


async def test_find_one_beyond_int64_is_not_found(collection):
    service = PokemonService(EncodingCollection(collection), default_limit=3)

    with pytest.raises(NotFoundError):
        await service.find_one("99999999999999999999")


async def test_find_one_all_digit_object_id_tries_number_then_id(collection):
    await collection.insert_one({"_id": ALL_DIGIT_ID, "name": "mew", "no": 151, "__v": 0})
    encoding = EncodingCollection(collection)
    service = PokemonService(encoding, default_limit=3)

    found = await service.find_one(str(ALL_DIGIT_ID))

    assert found["name"] == "mew"
    assert encoding.filters == [
        {"no": float(str(ALL_DIGIT_ID))},
        {"_id": ALL_DIGIT_ID},
    ]


@pytest.mark.parametrize(
    "model, payload",
    [
        (PokemonCreate, {"name": "Pikachu", "no": 25, "_id": "abc"}),
        (PokemonCreate, {"name": "Pikachu", "no": 25, "__v": 3}),
        (PokemonCreate, {"name": "Pikachu", "no": 25, "$set": {"no": 1}}),
        (PokemonCreate, {"name": "Pikachu", "no": 25, "stats.hp": 35}),
        (PokemonUpdate, {"_id": "x"}),
        (PokemonUpdate, {"$inc": {"no": 1}}),
    ],
)
def test_reserved_attribute_names_are_rejected(model, payload):
    with pytest.raises(ValidationError) as exc_info:
        model(**payload)

    assert "Reserved attribute names" in str(exc_info.value)


async def test_create_lowercases_name_and_stores_document(service, collection):
    created = await _create(service, "Pikachu", 25, types=["electric"])

    assert created["name"] == "pikachu"
    assert isinstance(created["_id"], ObjectId)
    stored = await collection.find_one({"_id": created["_id"]})
    assert stored["name"] == "pikachu"
    assert stored["no"] == 25
    assert stored["types"] == ["electric"]
    assert stored["__v"] == 0


@pytest.mark.parametrize("name, no", [("PIKACHU", 99), ("raichu", 25)])
async def test_create_duplicate_name_or_number_is_rejected(service, name, no):
    await _create(service, "Pikachu", 25)

    with pytest.raises(DuplicateResourceError) as exc_info:
        await _create(service, name, no)

    assert exc_info.value.status_code == 400
    assert "Pokemon exists in db" in exc_info.value.detail


async def test_duplicate_message_includes_conflicting_key():
    error = DuplicateKeyError("E11000 duplicate key", 11000, {"keyValue": {"no": 25}})
    service = PokemonService(_failing_collection(insert_one=error), default_limit=3)

    with pytest.raises(DuplicateResourceError) as exc_info:
        await _create(service, "pikachu", 25)

    assert exc_info.value.detail == 'Pokemon exists in db {"no": 25}'


async def test_unexpected_store_error_is_logged_and_hidden(caplog):
    error = ServerSelectionTimeoutError("localhost:27017: connection refused")
    service = PokemonService(_failing_collection(insert_one=error), default_limit=3)

    with caplog.at_level(logging.ERROR, logger="pokedex_api.app.services.pokemon_service"):
        with pytest.raises(InternalFailureError) as exc_info:
            await _create(service, "pikachu", 25)

    assert exc_info.value.status_code == 500
    assert exc_info.value.detail == "Can't create Pokemon - check server logs"
    assert "connection refused" not in exc_info.value.detail
    assert exc_info.value.__cause__ is error
    assert any(record.exc_info for record in caplog.records)


async def test_find_all_paginates_sorted_by_number(service):
    for no in (4, 1, 5, 3, 2):
        await _create(service, f"pokemon-{no}", no)

    cursor = service.find_all(PaginationParams(limit=2, offset=1))
    page = [pokemon async for pokemon in cursor]

    assert [pokemon["no"] for pokemon in page] == [2, 3]
    assert all("__v" not in pokemon for pokemon in page)


async def test_find_all_uses_default_limit(service):
    for no in range(1, 6):
        await _create(service, f"pokemon-{no}", no)

    page = [pokemon async for pokemon in service.find_all()]

    assert [pokemon["no"] for pokemon in page] == [1, 2, 3]


async def test_find_one_by_number_id_and_name(service):
    created = await _create(service, "Pikachu", 25)

    by_number = await service.find_one("25")
    by_id = await service.find_one(str(created["_id"]))
    by_name = await service.find_one("  PikaChu ")

    assert by_number["_id"] == by_id["_id"] == by_name["_id"] == created["_id"]


async def test_find_one_prefers_number_over_name(service):
    await _create(service, "7", 1)
    squirtle = await _create(service, "squirtle", 7)

    found = await service.find_one("7")

    assert found["_id"] == squirtle["_id"]


async def test_find_one_falls_back_to_name_for_numeric_term(service):
    named = await _create(service, "151", 1)

    found = await service.find_one("151")

    assert found["_id"] == named["_id"]


async def test_find_one_unknown_term_raises_not_found(service):
    with pytest.raises(NotFoundError) as exc_info:
        await service.find_one("missingno")

    assert exc_info.value.status_code == 404
    assert exc_info.value.detail == "Pokemon with id, name or no 'missingno' not found"


async def test_update_lowercases_name_and_returns_merged_view(service, collection):
    created = await _create(service, "Pikachu", 25, types=["electric"])

    updated = await service.update("pikachu", PokemonUpdate(name="RAICHU", height=8))

    assert updated["_id"] == created["_id"]
    assert updated["name"] == "raichu"
    assert updated["no"] == 25
    assert updated["height"] == 8
    assert updated["types"] == ["electric"]
    stored = await collection.find_one({"_id": created["_id"]})
    assert stored["name"] == "raichu"
    assert stored["height"] == 8


async def test_update_with_empty_patch_returns_current_document(service):
    created = await _create(service, "Pikachu", 25)

    updated = await service.update("25", PokemonUpdate())

    assert updated == created


async def test_update_unknown_term_never_writes():
    collection = MagicMock()
    collection.find_one = AsyncMock(return_value=None)
    collection.update_one = AsyncMock()
    service = PokemonService(collection, default_limit=3)

    with pytest.raises(NotFoundError):
        await service.update("mew", PokemonUpdate(name="Mewtwo"))

    collection.update_one.assert_not_awaited()


async def test_update_duplicate_is_translated():
    collection = MagicMock()
    collection.find_one = AsyncMock(return_value={"_id": ObjectId(), "name": "pikachu", "no": 25})
    collection.update_one = AsyncMock(
        side_effect=DuplicateKeyError("E11000 duplicate key", 11000, {"keyValue": {"name": "raichu"}})
    )
    service = PokemonService(collection, default_limit=3)

    with pytest.raises(DuplicateResourceError) as exc_info:
        await service.update("pikachu", PokemonUpdate(name="Raichu"))

    assert exc_info.value.detail == 'Pokemon exists in db {"name": "raichu"}'


async def test_remove_returns_deleted_document(service):
    created = await _create(service, "Pikachu", 25)

    removed = await service.remove(str(created["_id"]))

    assert removed["name"] == "pikachu"
    with pytest.raises(NotFoundError):
        await service.find_one(str(created["_id"]))
    with pytest.raises(NotFoundError):
        await service.find_one("pikachu")


@pytest.mark.parametrize("pokemon_id", [str(ObjectId()), "not-an-object-id"])
async def test_remove_unknown_id_raises_not_found(service, pokemon_id):
    with pytest.raises(NotFoundError) as exc_info:
        await service.remove(pokemon_id)

    assert exc_info.value.detail == f"Pokemon with id '{pokemon_id}' not found"
