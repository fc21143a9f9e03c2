"""FastAPI application entrypoint."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from discuss_board.api import ops
from discuss_board.api.errors import install_error_handlers
from discuss_board.board import api as board_api
from discuss_board.board.domain import repo
from discuss_board.infra import postgres
from discuss_board.infra.store import set_store
from discuss_board.obs import init as obs_init
from discuss_board.obs import logging as obs_logging
from discuss_board.settings import settings

_LOG = obs_logging.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
	if not settings.uses_memory_store():
		await postgres.init_pool()
	set_store(repo.build_store())
	_LOG.info("startup", extra={"storage_backend": settings.storage_backend, "environment": settings.environment})
	try:
		yield
	finally:
		if not settings.uses_memory_store():
			await postgres.close_pool()


app = FastAPI(title="Discuss Board API", lifespan=lifespan)
install_error_handlers(app)

allow_origins = list(settings.cors_allow_origins)
if not allow_origins:
	allow_origins = ["http://localhost:3000"] if settings.is_dev() else []

# Starlette disallows wildcard '*' with allow_credentials=True.
allow_credentials = "*" not in allow_origins

app.add_middleware(
	CORSMiddleware,
	allow_origins=allow_origins,
	allow_credentials=allow_credentials,
	allow_methods=["*"],
	allow_headers=["*"],
)
obs_init(app)

app.include_router(ops.router)
app.include_router(board_api.router)
