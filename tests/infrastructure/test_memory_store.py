"""MemoryEntityStore unit-of-work semantics."""

import asyncio

import pytest

from app.application.dtos.user import UserUpsert
from app.infrastructure.memory import MemoryEntityStore


async def test_transaction_rolls_back_every_table_on_error(store: MemoryEntityStore):
    await store.users.upsert(UserUpsert(id="keep"))
    with pytest.raises(RuntimeError):
        async with store.transaction():
            await store.users.upsert(UserUpsert(id="gone"))
            await store.users.update_roles("keep", ["ADMIN"])
            raise RuntimeError("boom")
    assert await store.users.get_by_id("gone") is None
    assert (await store.users.get_by_id("keep")).roles == []


async def test_nested_transaction_joins_outer(store: MemoryEntityStore):
    async with store.transaction():
        await store.users.upsert(UserUpsert(id="outer"))
        async with store.transaction():
            await store.users.upsert(UserUpsert(id="inner"))
    assert await store.users.get_by_id("inner") is not None


async def test_inner_failure_rolls_back_whole_unit(store: MemoryEntityStore):
    with pytest.raises(ValueError):
        async with store.transaction():
            await store.users.upsert(UserUpsert(id="outer"))
            async with store.transaction():
                raise ValueError("inner")
    assert await store.users.get_by_id("outer") is None


async def test_concurrent_units_are_serialized(store: MemoryEntityStore):
    order: list[str] = []

    async def unit(name: str) -> None:
        async with store.transaction():
            order.append(f"{name}:start")
            await asyncio.sleep(0)
            order.append(f"{name}:end")

    await asyncio.gather(unit("a"), unit("b"))
    assert order in (
        ["a:start", "a:end", "b:start", "b:end"],
        ["b:start", "b:end", "a:start", "a:end"],
    )


async def test_reset_empties_store(store: MemoryEntityStore):
    await store.users.upsert(UserUpsert(id="u"))
    store.reset()
    assert await store.users.get_by_id("u") is None
