"""Observability package bootstrap."""

from __future__ import annotations

from fastapi import FastAPI

from discuss_board.obs import logging as obs_logging
from discuss_board.obs import middleware
from discuss_board.settings import settings


def init(app: FastAPI) -> None:
	"""Install request instrumentation and configure JSON logging."""
	middleware.install(app, enabled=settings.obs_enabled)
	if settings.obs_enabled:
		obs_logging.configure_logging()


__all__ = ["init"]
