"""Apply the SQL files under ``backend/migrations`` in version order.

Run with ``python -m discuss_board.migrate``. Applied versions are recorded
in ``schema_migrations`` so reruns only pick up new files.
"""

from __future__ import annotations

import asyncio
import pathlib
from typing import Optional

import asyncpg

from discuss_board.obs import logging as obs_logging
from discuss_board.settings import settings

_LOG = obs_logging.get_logger(__name__)

MIGRATIONS_DIR = pathlib.Path(__file__).resolve().parent.parent / "migrations"


async def _connect(dsn: str, retries: int, delay: float) -> asyncpg.Connection:
	for attempt in range(1, retries + 1):
		try:
			return await asyncpg.connect(dsn)
		except (OSError, asyncpg.CannotConnectNowError):
			if attempt == retries:
				raise
			_LOG.info("database_waiting", extra={"attempt": attempt, "retries": retries})
			await asyncio.sleep(delay)
	raise RuntimeError("unreachable")


async def apply_migrations(
	conn: asyncpg.Connection,
	directory: pathlib.Path = MIGRATIONS_DIR,
) -> list[str]:
	"""Apply pending migrations on ``conn`` and return the versions applied."""
	paths = sorted(directory.glob("*.sql"))
	if not paths:
		raise FileNotFoundError(f"no migration files found in {directory}")
	await conn.execute(
		"""
		CREATE TABLE IF NOT EXISTS schema_migrations (
			version TEXT PRIMARY KEY,
			applied_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
		)
		"""
	)
	applied = {row["version"] for row in await conn.fetch("SELECT version FROM schema_migrations")}
	done: list[str] = []
	for path in paths:
		version = path.name.split("_", 1)[0]
		if version in applied:
			continue
		async with conn.transaction():
			await conn.execute(path.read_text())
			await conn.execute("INSERT INTO schema_migrations (version) VALUES ($1)", version)
		_LOG.info("migration_applied", extra={"migration": path.name})
		done.append(version)
	return done


async def run(dsn: Optional[str] = None, *, retries: int = 30, delay: float = 2.0) -> list[str]:
	conn = await _connect(dsn or settings.postgres_url, retries, delay)
	try:
		return await apply_migrations(conn)
	finally:
		await conn.close()


def main() -> None:
	obs_logging.configure_logging()
	applied = asyncio.run(run())
	_LOG.info("migrations_complete", extra={"applied": applied})


if __name__ == "__main__":
	main()
