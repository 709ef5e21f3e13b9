from __future__ import annotations

import pytest

from services import InMemoryModelService, NotFoundError, NoteService, ValidationError
from services.contract import SERVICE_OPERATIONS, detect_operations


@pytest.fixture()
def service() -> NoteService:
    notes = NoteService()
    notes.seed(
        [
            {"id": "a", "title": "alpha", "rank": 1},
            {"id": "b", "title": "beta", "rank": 2},
            {"id": "c", "title": "alpha", "rank": 3},
        ]
    )
    return notes


def test_implements_every_operation() -> None:
    assert detect_operations(InMemoryModelService) == frozenset(SERVICE_OPERATIONS)


@pytest.mark.asyncio
async def test_list_filters_and_paginates(service: NoteService) -> None:
    assert [item["id"] for item in await service.list({})] == ["a", "b", "c"]
    assert [item["id"] for item in await service.list({"title": "alpha"})] == ["a", "c"]
    assert [item["id"] for item in await service.list({"rank": "2"})] == ["b"]
    assert [item["id"] for item in await service.list({"limit": "1", "offset": "1"})] == ["b"]


@pytest.mark.asyncio
async def test_list_rejects_bad_pagination(service: NoteService) -> None:
    with pytest.raises(ValidationError):
        await service.list({"limit": "-1"})


@pytest.mark.asyncio
async def test_reads_return_copies(service: NoteService) -> None:
    item = await service.get_by_id("a")
    item["title"] = "mutated"

    assert (await service.get_by_id("a"))["title"] == "alpha"


@pytest.mark.asyncio
async def test_create_one_assigns_id_when_missing(service: NoteService) -> None:
    created = await service.create_one({"title": "gamma"})

    assert created["id"]
    assert await service.get_by_id(created["id"]) == created


@pytest.mark.asyncio
async def test_create_one_keeps_given_id(service: NoteService) -> None:
    assert await service.create_one({"id": "z", "title": "zeta"}) == {"id": "z", "title": "zeta"}


@pytest.mark.asyncio
async def test_create_one_rejects_non_object_payload(service: NoteService) -> None:
    with pytest.raises(ValidationError):
        await service.create_one(["x"])


@pytest.mark.asyncio
async def test_replace_and_update_keep_the_path_identifier(service: NoteService) -> None:
    assert await service.replace_by_id("a", {"id": "other", "body": "x"}) == {"id": "a", "body": "x"}
    assert await service.update_by_id("a", {"title": "new"}) == {"id": "a", "body": "x", "title": "new"}


@pytest.mark.asyncio
@pytest.mark.parametrize("operation,args", [
    ("get_by_id", ("missing",)),
    ("replace_by_id", ("missing", {})),
    ("update_by_id", ("missing", {})),
    ("remove_by_id", ("missing",)),
])
async def test_missing_entities_raise_not_found(service: NoteService, operation: str, args: tuple) -> None:
    with pytest.raises(NotFoundError, match="Note with id=missing was not found."):
        await getattr(service, operation)(*args)


@pytest.mark.asyncio
async def test_remove_by_id_deletes(service: NoteService) -> None:
    assert await service.remove_by_id("b") is None
    assert [item["id"] for item in await service.list({})] == ["a", "c"]


@pytest.mark.asyncio
async def test_create_one_keeps_falsy_ids(service: NoteService) -> None:
    assert await service.create_one({"id": 0, "title": "zero"}) == {"id": "0", "title": "zero"}
    assert await service.create_one({"id": "", "title": "blank"}) == {"id": "", "title": "blank"}


@pytest.mark.asyncio
async def test_create_one_rejects_duplicate_ids(service: NoteService) -> None:
    with pytest.raises(ValidationError, match="Note with id=a already exists."):
        await service.create_one({"id": "a", "title": "again"})

    assert (await service.get_by_id("a"))["title"] == "alpha"
