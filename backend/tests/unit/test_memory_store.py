"""Behaviour of the in-process store the API tests run against."""

from __future__ import annotations

from datetime import datetime, timezone
from uuid import uuid4

import pytest

from discuss_board.infra.memory import MemoryStore
from discuss_board.infra.store import (
	Ordering,
	UniqueKey,
	UniqueViolation,
	contains,
	eq,
	gte,
	is_null,
	lte,
	ne,
	not_null,
	one_of,
	search,
)


def _row(**values):
	return {"id": uuid4(), "deleted_at": None, **values}


@pytest.fixture
def mem() -> MemoryStore:
	return MemoryStore(
		unique_keys={
			"words": (UniqueKey(("expression",)),),
			"votes": (UniqueKey(("poll_id", "member_id"), live_only=False),),
		}
	)


@pytest.mark.asyncio
async def test_condition_operators(mem: MemoryStore):
	a = await mem.insert("posts", _row(title="Hello World", body="first", score=1))
	b = await mem.insert("posts", _row(title="second", body="HELLO again", score=5))
	c = await mem.insert("posts", _row(title="third", body="nothing", score=None))

	assert {r["id"] for r in await mem.find("posts", [contains("title", "hello")])} == {a["id"]}
	assert {r["id"] for r in await mem.find("posts", [search(("title", "body"), "hello")])} == {a["id"], b["id"]}
	assert {r["id"] for r in await mem.find("posts", [gte("score", 2)])} == {b["id"]}
	assert {r["id"] for r in await mem.find("posts", [lte("score", 1)])} == {a["id"]}
	assert {r["id"] for r in await mem.find("posts", [is_null("score")])} == {c["id"]}
	assert {r["id"] for r in await mem.find("posts", [not_null("score")])} == {a["id"], b["id"]}
	assert {r["id"] for r in await mem.find("posts", [one_of("title", ["second", "third"])])} == {b["id"], c["id"]}
	assert {r["id"] for r in await mem.find("posts", [ne("score", 1)])} == {b["id"], c["id"]}
	assert await mem.count("posts", [eq("score", None)]) == 1


@pytest.mark.asyncio
async def test_nulls_sort_last_ascending_and_first_descending(mem: MemoryStore):
	low = await mem.insert("rows", _row(rank=1))
	none = await mem.insert("rows", _row(rank=None))
	high = await mem.insert("rows", _row(rank=9))

	ascending = await mem.find("rows", order=Ordering("rank", "asc"))
	descending = await mem.find("rows", order=Ordering("rank", "desc"))

	assert [r["id"] for r in ascending] == [low["id"], high["id"], none["id"]]
	assert [r["id"] for r in descending] == [none["id"], high["id"], low["id"]]


@pytest.mark.asyncio
async def test_offset_and_limit(mem: MemoryStore):
	for rank in range(5):
		await mem.insert("rows", _row(rank=rank))
	window = await mem.find("rows", order=Ordering("rank", "asc"), offset=1, limit=2)
	assert [r["rank"] for r in window] == [1, 2]


@pytest.mark.asyncio
async def test_live_only_unique_key_ignores_soft_deleted_rows(mem: MemoryStore):
	first = await mem.insert("words", _row(expression="spam"))
	with pytest.raises(UniqueViolation):
		await mem.insert("words", _row(expression="spam"))
	await mem.update("words", first["id"], {"deleted_at": datetime.now(timezone.utc)})
	again = await mem.insert("words", _row(expression="spam"))
	assert again["expression"] == "spam"


@pytest.mark.asyncio
async def test_full_unique_key_counts_soft_deleted_rows(mem: MemoryStore):
	poll_id, member_id = uuid4(), uuid4()
	first = await mem.insert("votes", _row(poll_id=poll_id, member_id=member_id))
	await mem.update("votes", first["id"], {"deleted_at": datetime.now(timezone.utc)})
	with pytest.raises(UniqueViolation):
		await mem.insert("votes", _row(poll_id=poll_id, member_id=member_id))


@pytest.mark.asyncio
async def test_transaction_rolls_back_on_error(mem: MemoryStore):
	kept = await mem.insert("rows", _row(rank=1))
	with pytest.raises(RuntimeError):
		async with mem.transaction():
			await mem.insert("rows", _row(rank=2))
			await mem.update("rows", kept["id"], {"rank": 100})
			raise RuntimeError("boom")
	rows = await mem.find("rows")
	assert len(rows) == 1
	assert rows[0]["rank"] == 1


@pytest.mark.asyncio
async def test_nested_transaction_joins_outer(mem: MemoryStore):
	with pytest.raises(RuntimeError):
		async with mem.transaction():
			async with mem.transaction():
				await mem.insert("rows", _row(rank=1))
			raise RuntimeError("outer fails")
	assert await mem.count("rows") == 0


@pytest.mark.asyncio
async def test_update_and_delete_missing_rows(mem: MemoryStore):
	assert await mem.update("rows", uuid4(), {"rank": 1}) is None
	assert await mem.delete("rows", uuid4()) is False
