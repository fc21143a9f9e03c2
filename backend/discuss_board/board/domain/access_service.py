"""Checks that a token's actor still holds an active account and role."""

from __future__ import annotations

from discuss_board.board.domain import repo as repo_module
from discuss_board.board.domain.exceptions import ForbiddenError, UnauthorizedError
from discuss_board.infra.auth import ADMINISTRATOR, MODERATOR, AuthenticatedActor


class AccessService:
	def __init__(self, *, repository: repo_module.BoardRepository | None = None) -> None:
		self.repo = repository or repo_module.BoardRepository()

	async def verify(self, actor: AuthenticatedActor) -> AuthenticatedActor:
		member = await self.repo.members.get(actor.member_id)
		if member is None:
			raise UnauthorizedError("member_not_found")
		if member.status != "active":
			raise ForbiddenError("member_suspended")
		if actor.role == MODERATOR:
			moderator = await self.repo.moderators.get(actor.id)
			if moderator is None or moderator.status != "active" or moderator.member_id != member.id:
				raise ForbiddenError("moderator_inactive")
		elif actor.role == ADMINISTRATOR:
			admin = await self.repo.administrators.get(actor.id)
			if admin is None or admin.status != "active" or admin.member_id != member.id:
				raise ForbiddenError("administrator_inactive")
		return actor


__all__ = ["AccessService"]
