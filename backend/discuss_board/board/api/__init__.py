"""FastAPI routers for the discussion board."""

from __future__ import annotations

from fastapi import APIRouter

from discuss_board.board.api import (
	admin,
	appeals,
	auth,
	comments,
	members,
	moderation,
	notifications,
	polls,
	posts,
	reactions,
	reports,
	roles,
)

router = APIRouter()

router.include_router(auth.router)
router.include_router(members.router)
router.include_router(roles.router)
router.include_router(posts.router)
router.include_router(comments.router)
router.include_router(reactions.router)
router.include_router(reports.router)
router.include_router(moderation.router)
router.include_router(appeals.router)
router.include_router(notifications.router)
router.include_router(polls.router)
router.include_router(admin.router)

__all__ = ["router"]
