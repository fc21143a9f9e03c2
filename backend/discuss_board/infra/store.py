"""Row storage used by the board repository.

A ``Store`` persists plain dict rows keyed by ``id``. Two implementations
share the interface: ``PostgresStore`` (asyncpg, raw SQL) and
``MemoryStore`` in ``discuss_board.infra.memory``. Filters are expressed as
``Condition`` values so both backends evaluate identical semantics.
"""

from __future__ import annotations

import re
from contextlib import asynccontextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Any, AsyncIterator, Iterable, Mapping, Optional, Sequence
from uuid import UUID

import asyncpg

from discuss_board.infra import postgres

Row = dict[str, Any]

_IDENTIFIER = re.compile(r"^[a-z_][a-z0-9_]*$")


class StoreError(Exception):
	"""Base class for storage failures surfaced to the repository."""


class UniqueViolation(StoreError):
	"""A write collided with a unique key."""

	def __init__(self, table: str, columns: Sequence[str] = ()) -> None:
		super().__init__(f"{table}:{','.join(columns)}")
		self.table = table
		self.columns = tuple(columns)


class ReferenceViolation(StoreError):
	"""A write or delete broke a foreign key."""


@dataclass(frozen=True, slots=True)
class UniqueKey:
	columns: tuple[str, ...]
	# When true only rows without deleted_at take part in the key
	live_only: bool = True


@dataclass(frozen=True, slots=True)
class Condition:
	column: str
	op: str
	value: Any = None
	columns: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class Ordering:
	column: str = "created_at"
	direction: str = "desc"

	@property
	def descending(self) -> bool:
		return self.direction.lower() == "desc"


def eq(column: str, value: Any) -> Condition:
	if value is None:
		return is_null(column)
	return Condition(column, "eq", value)


def ne(column: str, value: Any) -> Condition:
	return Condition(column, "ne", value)


def gte(column: str, value: Any) -> Condition:
	return Condition(column, "gte", value)


def lte(column: str, value: Any) -> Condition:
	return Condition(column, "lte", value)


def contains(column: str, text: str) -> Condition:
	"""Case-insensitive substring match."""
	return Condition(column, "contains", text)


def search(columns: Iterable[str], text: str) -> Condition:
	"""Case-insensitive substring match against any of ``columns``."""
	return Condition("", "search", text, tuple(columns))


def one_of(column: str, values: Iterable[Any]) -> Condition:
	return Condition(column, "one_of", tuple(values))


def is_null(column: str) -> Condition:
	return Condition(column, "is_null")


def not_null(column: str) -> Condition:
	return Condition(column, "not_null")


class Store:
	"""Interface shared by storage backends."""

	async def insert(self, table: str, values: Mapping[str, Any]) -> Row:
		raise NotImplementedError

	async def get(self, table: str, row_id: UUID) -> Optional[Row]:
		raise NotImplementedError

	async def find(
		self,
		table: str,
		conditions: Sequence[Condition] = (),
		*,
		order: Optional[Ordering] = None,
		offset: int = 0,
		limit: Optional[int] = None,
	) -> list[Row]:
		raise NotImplementedError

	async def find_one(self, table: str, conditions: Sequence[Condition] = ()) -> Optional[Row]:
		rows = await self.find(table, conditions, limit=1)
		return rows[0] if rows else None

	async def count(self, table: str, conditions: Sequence[Condition] = ()) -> int:
		raise NotImplementedError

	async def update(self, table: str, row_id: UUID, values: Mapping[str, Any]) -> Optional[Row]:
		raise NotImplementedError

	async def delete(self, table: str, row_id: UUID) -> bool:
		raise NotImplementedError

	def transaction(self):
		"""Async context manager grouping writes atomically."""
		raise NotImplementedError


def _ident(name: str) -> str:
	if not _IDENTIFIER.match(name):
		raise ValueError(f"invalid identifier: {name!r}")
	return name


def _like_pattern(text: str) -> str:
	escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
	return f"%{escaped}%"


def compile_conditions(conditions: Sequence[Condition], params: list[Any]) -> str:
	"""Render conditions as a SQL WHERE body, appending bind values to ``params``."""
	clauses: list[str] = []
	for cond in conditions:
		if cond.op == "is_null":
			clauses.append(f"{_ident(cond.column)} IS NULL")
			continue
		if cond.op == "not_null":
			clauses.append(f"{_ident(cond.column)} IS NOT NULL")
			continue
		if cond.op == "search":
			params.append(_like_pattern(str(cond.value)))
			idx = len(params)
			parts = [f"{_ident(column)} ILIKE ${idx}" for column in cond.columns]
			clauses.append("(" + " OR ".join(parts) + ")")
			continue
		column = _ident(cond.column)
		if cond.op == "contains":
			params.append(_like_pattern(str(cond.value)))
			clauses.append(f"{column} ILIKE ${len(params)}")
		elif cond.op == "one_of":
			params.append(list(cond.value))
			clauses.append(f"{column} = ANY(${len(params)})")
		elif cond.op == "eq":
			params.append(cond.value)
			clauses.append(f"{column} = ${len(params)}")
		elif cond.op == "ne":
			params.append(cond.value)
			clauses.append(f"{column} IS DISTINCT FROM ${len(params)}")
		elif cond.op == "gte":
			params.append(cond.value)
			clauses.append(f"{column} >= ${len(params)}")
		elif cond.op == "lte":
			params.append(cond.value)
			clauses.append(f"{column} <= ${len(params)}")
		else:
			raise ValueError(f"unsupported condition: {cond.op}")
	return " AND ".join(clauses) if clauses else "TRUE"


def compile_order(order: Optional[Ordering]) -> str:
	order = order or Ordering()
	direction = "DESC" if order.descending else "ASC"
	return f"ORDER BY {_ident(order.column)} {direction}, id {direction}"


_CONNECTION: ContextVar[Optional[asyncpg.Connection]] = ContextVar("store_connection", default=None)


class PostgresStore(Store):
	"""Store backed by the shared asyncpg pool."""

	@asynccontextmanager
	async def _connection(self) -> AsyncIterator[asyncpg.Connection]:
		conn = _CONNECTION.get()
		if conn is not None:
			yield conn
			return
		pool = await postgres.get_pool()
		async with pool.acquire() as conn:
			yield conn

	@asynccontextmanager
	async def transaction(self) -> AsyncIterator[None]:
		conn = _CONNECTION.get()
		if conn is not None:
			async with conn.transaction():
				yield
			return
		pool = await postgres.get_pool()
		async with pool.acquire() as conn:
			async with conn.transaction():
				token = _CONNECTION.set(conn)
				try:
					yield
				finally:
					_CONNECTION.reset(token)

	async def insert(self, table: str, values: Mapping[str, Any]) -> Row:
		columns = [_ident(column) for column in values]
		placeholders = ", ".join(f"${idx}" for idx in range(1, len(columns) + 1))
		sql = f"INSERT INTO {_ident(table)} ({', '.join(columns)}) VALUES ({placeholders}) RETURNING *"
		async with self._connection() as conn:
			try:
				record = await conn.fetchrow(sql, *values.values())
			except asyncpg.UniqueViolationError as exc:
				raise UniqueViolation(table, (exc.constraint_name or "",)) from exc
			except asyncpg.ForeignKeyViolationError as exc:
				raise ReferenceViolation(table) from exc
		return dict(record)

	async def get(self, table: str, row_id: UUID) -> Optional[Row]:
		async with self._connection() as conn:
			record = await conn.fetchrow(f"SELECT * FROM {_ident(table)} WHERE id = $1", row_id)
		return dict(record) if record else None

	async def find(
		self,
		table: str,
		conditions: Sequence[Condition] = (),
		*,
		order: Optional[Ordering] = None,
		offset: int = 0,
		limit: Optional[int] = None,
	) -> list[Row]:
		params: list[Any] = []
		where = compile_conditions(conditions, params)
		sql = f"SELECT * FROM {_ident(table)} WHERE {where} {compile_order(order)}"
		if limit is not None:
			params.append(limit)
			sql += f" LIMIT ${len(params)}"
		if offset:
			params.append(offset)
			sql += f" OFFSET ${len(params)}"
		async with self._connection() as conn:
			records = await conn.fetch(sql, *params)
		return [dict(record) for record in records]

	async def count(self, table: str, conditions: Sequence[Condition] = ()) -> int:
		params: list[Any] = []
		where = compile_conditions(conditions, params)
		async with self._connection() as conn:
			value = await conn.fetchval(f"SELECT COUNT(*) FROM {_ident(table)} WHERE {where}", *params)
		return int(value or 0)

	async def update(self, table: str, row_id: UUID, values: Mapping[str, Any]) -> Optional[Row]:
		if not values:
			return await self.get(table, row_id)
		assignments = [f"{_ident(column)} = ${idx}" for idx, column in enumerate(values, start=1)]
		params = [*values.values(), row_id]
		sql = f"UPDATE {_ident(table)} SET {', '.join(assignments)} WHERE id = ${len(params)} RETURNING *"
		async with self._connection() as conn:
			try:
				record = await conn.fetchrow(sql, *params)
			except asyncpg.UniqueViolationError as exc:
				raise UniqueViolation(table, (exc.constraint_name or "",)) from exc
			except asyncpg.ForeignKeyViolationError as exc:
				raise ReferenceViolation(table) from exc
		return dict(record) if record else None

	async def delete(self, table: str, row_id: UUID) -> bool:
		async with self._connection() as conn:
			try:
				status = await conn.execute(f"DELETE FROM {_ident(table)} WHERE id = $1", row_id)
			except asyncpg.ForeignKeyViolationError as exc:
				raise ReferenceViolation(table) from exc
		return status.endswith(" 1")


_store: Optional[Store] = None


def set_store(store: Optional[Store]) -> None:
	global _store
	_store = store


def get_store() -> Store:
	if _store is None:
		raise RuntimeError("store is not configured")
	return _store
