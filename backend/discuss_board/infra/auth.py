"""Authentication helpers for FastAPI endpoints.

Bearer access tokens are HS256 JWTs minted by the auth service. The decoded
actor carries the role it logged in with; ``require_roles`` gates routes and
treats higher roles as satisfying lower-role routes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from discuss_board.infra import jwt as jwt_helper

MEMBER = "member"
MODERATOR = "moderator"
ADMINISTRATOR = "administrator"

_ROLE_RANK = {MEMBER: 1, MODERATOR: 2, ADMINISTRATOR: 3}


@dataclass(slots=True)
class AuthenticatedActor:
	id: UUID
	role: str
	member_id: UUID
	user_account_id: UUID
	session_id: Optional[UUID] = None

	def has_role(self, role: str) -> bool:
		return _ROLE_RANK.get(self.role, 0) >= _ROLE_RANK.get(role, 99)

	@property
	def is_staff(self) -> bool:
		return self.has_role(MODERATOR)


_bearer_scheme = HTTPBearer(auto_error=False)


def verify_access_jwt(token: str) -> AuthenticatedActor:
	"""Decode an access JWT into an AuthenticatedActor or raise 401."""
	try:
		payload = jwt_helper.decode_access(token)
		role = str(payload["role"])
		if role not in _ROLE_RANK:
			raise ValueError(role)
		return AuthenticatedActor(
			id=UUID(str(payload["sub"])),
			role=role,
			member_id=UUID(str(payload["mid"])),
			user_account_id=UUID(str(payload["uid"])),
			session_id=UUID(str(payload["sid"])),
		)
	except (jwt_helper.InvalidTokenError, KeyError, ValueError) as exc:
		raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="invalid_token") from exc


async def get_current_actor(
	credentials: HTTPAuthorizationCredentials | None = Depends(_bearer_scheme),
) -> AuthenticatedActor:
	if credentials is None or credentials.scheme.lower() != "bearer" or not credentials.credentials:
		raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="missing_token")
	return verify_access_jwt(credentials.credentials)


def require_roles(role: str):
	"""Return a dependency enforcing ``role`` or any role ranked above it."""

	async def dependency(actor: AuthenticatedActor = Depends(get_current_actor)) -> AuthenticatedActor:
		if not actor.has_role(role):
			raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="insufficient_role")
		return actor

	return dependency
