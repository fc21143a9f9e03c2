"""In-process ``Store`` used by tests and ``STORAGE_BACKEND=memory`` runs.

Mirrors the PostgreSQL semantics the board relies on: case-insensitive
substring filters, NULLs sorting last ascending and first descending, unique
keys that ignore soft-deleted rows, and transactions that roll back on error.
It is meant for a single process; transactions are serialised with a lock.
"""

from __future__ import annotations

import asyncio
import copy
from contextlib import asynccontextmanager
from contextvars import ContextVar
from typing import Any, AsyncIterator, Mapping, Optional, Sequence
from uuid import UUID

from discuss_board.infra.store import (
	Condition,
	Ordering,
	Row,
	Store,
	UniqueKey,
	UniqueViolation,
)

_IN_TRANSACTION: ContextVar[bool] = ContextVar("memory_store_tx", default=False)


def _text(value: Any) -> str:
	return "" if value is None else str(value).lower()


def matches(row: Mapping[str, Any], cond: Condition) -> bool:
	if cond.op == "search":
		needle = _text(cond.value)
		return any(needle in _text(row.get(column)) for column in cond.columns)
	value = row.get(cond.column)
	if cond.op == "is_null":
		return value is None
	if cond.op == "not_null":
		return value is not None
	if cond.op == "eq":
		return value is not None and value == cond.value
	if cond.op == "ne":
		return value != cond.value
	if cond.op == "contains":
		return value is not None and _text(cond.value) in _text(value)
	if cond.op == "one_of":
		return value is not None and value in cond.value
	if cond.op == "gte":
		return value is not None and value >= cond.value
	if cond.op == "lte":
		return value is not None and value <= cond.value
	raise ValueError(f"unsupported condition: {cond.op}")


def _sort_key(order: Ordering):
	def key(row: Mapping[str, Any]):
		value = row.get(order.column)
		return (value is None, value, row["id"])

	return key


class MemoryStore(Store):
	def __init__(self, unique_keys: Optional[Mapping[str, Sequence[UniqueKey]]] = None) -> None:
		self._tables: dict[str, dict[UUID, Row]] = {}
		self._unique_keys = {table: tuple(keys) for table, keys in (unique_keys or {}).items()}
		self._lock = asyncio.Lock()

	def _table(self, table: str) -> dict[UUID, Row]:
		return self._tables.setdefault(table, {})

	def _check_unique(self, table: str, row: Mapping[str, Any]) -> None:
		for key in self._unique_keys.get(table, ()):
			if key.live_only and row.get("deleted_at") is not None:
				continue
			values = tuple(row.get(column) for column in key.columns)
			if any(value is None for value in values):
				continue
			for other in self._table(table).values():
				if other["id"] == row["id"]:
					continue
				if key.live_only and other.get("deleted_at") is not None:
					continue
				if tuple(other.get(column) for column in key.columns) == values:
					raise UniqueViolation(table, key.columns)

	@asynccontextmanager
	async def transaction(self) -> AsyncIterator[None]:
		if _IN_TRANSACTION.get():
			yield
			return
		async with self._lock:
			snapshot = copy.deepcopy(self._tables)
			token = _IN_TRANSACTION.set(True)
			try:
				yield
			except BaseException:
				self._tables = snapshot
				raise
			finally:
				_IN_TRANSACTION.reset(token)

	async def insert(self, table: str, values: Mapping[str, Any]) -> Row:
		row = dict(values)
		self._check_unique(table, row)
		self._table(table)[row["id"]] = row
		return dict(row)

	async def get(self, table: str, row_id: UUID) -> Optional[Row]:
		row = self._table(table).get(row_id)
		return dict(row) if row is not None else None

	async def find(
		self,
		table: str,
		conditions: Sequence[Condition] = (),
		*,
		order: Optional[Ordering] = None,
		offset: int = 0,
		limit: Optional[int] = None,
	) -> list[Row]:
		order = order or Ordering()
		rows = [row for row in self._table(table).values() if all(matches(row, cond) for cond in conditions)]
		rows.sort(key=_sort_key(order), reverse=order.descending)
		end = None if limit is None else offset + limit
		return [dict(row) for row in rows[offset:end]]

	async def count(self, table: str, conditions: Sequence[Condition] = ()) -> int:
		return sum(1 for row in self._table(table).values() if all(matches(row, cond) for cond in conditions))

	async def update(self, table: str, row_id: UUID, values: Mapping[str, Any]) -> Optional[Row]:
		current = self._table(table).get(row_id)
		if current is None:
			return None
		candidate = {**current, **values}
		self._check_unique(table, candidate)
		self._table(table)[row_id] = candidate
		return dict(candidate)

	async def delete(self, table: str, row_id: UUID) -> bool:
		return self._table(table).pop(row_id, None) is not None
