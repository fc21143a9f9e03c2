"""Health check helpers for liveness and readiness probes."""

from __future__ import annotations

import asyncio
import logging
from time import perf_counter
from typing import Any, Dict, Tuple

import asyncpg
from redis.exceptions import RedisError

from discuss_board.infra import postgres
from discuss_board.infra.redis import redis_client
from discuss_board.obs import metrics
from discuss_board.settings import settings

LOGGER = logging.getLogger(__name__)


async def _redis_status(timeout: float = 0.2) -> Dict[str, Any]:
	start = perf_counter()
	try:
		await asyncio.wait_for(redis_client.ping(), timeout=timeout)
	except (RedisError, OSError, asyncio.TimeoutError) as exc:
		metrics.mark_dependency("redis", False)
		LOGGER.warning("Redis readiness check failed", exc_info=True)
		return {"ok": False, "error": str(exc) or exc.__class__.__name__}
	metrics.mark_dependency("redis", True)
	return {"ok": True, "latency_ms": round((perf_counter() - start) * 1000, 2)}


async def _postgres_status(timeout: float = 0.3) -> Dict[str, Any]:
	start = perf_counter()
	try:
		pool = await postgres.get_pool()
		async with pool.acquire() as conn:
			await asyncio.wait_for(conn.execute("SELECT 1"), timeout=timeout)
	except (asyncpg.PostgresError, OSError, asyncio.TimeoutError) as exc:
		metrics.mark_dependency("postgres", False)
		LOGGER.warning("Postgres readiness query failed", exc_info=True)
		return {"ok": False, "error": str(exc) or exc.__class__.__name__}
	metrics.mark_dependency("postgres", True)
	return {"ok": True, "latency_ms": round((perf_counter() - start) * 1000, 2)}


async def liveness() -> Dict[str, Any]:
	return {"status": "ok", "service": settings.service_name, "commit": settings.git_commit}


async def readiness() -> Tuple[int, Dict[str, Any]]:
	checks: Dict[str, Any] = {"redis": await _redis_status()}
	if settings.uses_memory_store():
		checks["storage"] = {"ok": True, "backend": "memory"}
	else:
		checks["storage"] = await _postgres_status()
	ok = all(check["ok"] for check in checks.values())
	return (200 if ok else 503), {"status": "ok" if ok else "degraded", "checks": checks}
