"""Unit tests for the SQL migration runner."""

from __future__ import annotations

from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

import pytest

from discuss_board import migrate


class FakeConnection:
	"""Lightweight asyncpg.Connection stand-in recording executed SQL."""

	def __init__(self, applied: set[str] | None = None) -> None:
		self.applied = set(applied or ())
		self.executed: list[str] = []

	async def execute(self, query: str, *params: object) -> str:
		if query.startswith("INSERT INTO schema_migrations"):
			self.applied.add(str(params[0]))
		else:
			self.executed.append(query)
		return "OK"

	async def fetch(self, query: str, *params: object) -> list[dict[str, Any]]:
		return [{"version": version} for version in sorted(self.applied)]

	def transaction(self):
		@asynccontextmanager
		async def _transaction():
			yield

		return _transaction()


@pytest.mark.asyncio
async def test_applies_pending_files_in_order(tmp_path: Path):
	(tmp_path / "0002_more.sql").write_text("SELECT 2;")
	(tmp_path / "0001_base.sql").write_text("SELECT 1;")
	conn = FakeConnection()

	applied = await migrate.apply_migrations(conn, tmp_path)  # type: ignore[arg-type]

	assert applied == ["0001", "0002"]
	assert conn.executed[1:] == ["SELECT 1;", "SELECT 2;"]


@pytest.mark.asyncio
async def test_skips_already_applied_versions(tmp_path: Path):
	(tmp_path / "0001_base.sql").write_text("SELECT 1;")
	(tmp_path / "0002_more.sql").write_text("SELECT 2;")
	conn = FakeConnection(applied={"0001"})

	applied = await migrate.apply_migrations(conn, tmp_path)  # type: ignore[arg-type]

	assert applied == ["0002"]
	assert "SELECT 1;" not in conn.executed


@pytest.mark.asyncio
async def test_missing_directory_contents_is_an_error(tmp_path: Path):
	with pytest.raises(FileNotFoundError):
		await migrate.apply_migrations(FakeConnection(), tmp_path)  # type: ignore[arg-type]


def test_bundled_schema_covers_every_table():
	from discuss_board.board.domain.repo import BoardRepository

	sql = (migrate.MIGRATIONS_DIR / "0001_discuss_board.sql").read_text()
	board = BoardRepository()
	tables = {value.name for value in vars(board).values() if hasattr(value, "model")}
	for table in tables:
		assert f"CREATE TABLE IF NOT EXISTS {table} (" in sql
