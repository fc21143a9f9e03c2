"""Typed async client for the discussion board REST API."""

from __future__ import annotations

from discuss_board.sdk.client import DiscussBoardClient
from discuss_board.sdk.connection import Connection, HttpError

__all__ = ["Connection", "DiscussBoardClient", "HttpError"]
