"""Route dependencies resolving the authenticated actor for each role tier."""

from __future__ import annotations

from fastapi import Depends, Request

from discuss_board.board.api._errors import to_http_error
from discuss_board.board.domain.access_service import AccessService
from discuss_board.board.domain.exceptions import BoardError
from discuss_board.infra.auth import ADMINISTRATOR, MEMBER, MODERATOR, AuthenticatedActor, require_roles
from discuss_board.obs import logging as obs_logging

_access = AccessService()


def _verified(role: str):
	requirement = require_roles(role)

	async def dependency(actor: AuthenticatedActor = Depends(requirement)) -> AuthenticatedActor:
		try:
			await _access.verify(actor)
		except BoardError as exc:
			raise to_http_error(exc) from exc
		obs_logging.bind_user(str(actor.member_id))
		return actor

	return dependency


member_actor = _verified(MEMBER)
moderator_actor = _verified(MODERATOR)
administrator_actor = _verified(ADMINISTRATOR)


def client_meta(request: Request) -> dict[str, str | None]:
	"""User agent and client address recorded on new sessions."""
	return {
		"user_agent": request.headers.get("user-agent"),
		"ip_address": request.client.host if request.client else None,
	}
