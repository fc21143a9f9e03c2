"""Join, login and refresh flows for members, moderators and administrators.

Refresh tokens are JWTs bound to a ``jwt_sessions`` row. Only
sha256(pepper + token) is stored. Each refresh rotates the stored hash, so
presenting an already-rotated token revokes the session.
"""

from __future__ import annotations

import hashlib
import hmac
from typing import Optional
from uuid import UUID

from discuss_board.board.domain import models, policies
from discuss_board.board.domain import repo as repo_module
from discuss_board.board.domain.audit_service import AuditService
from discuss_board.board.domain.exceptions import (
	ConflictError,
	ForbiddenError,
	RateLimitedError,
	UnauthorizedError,
	ValidationError,
)
from discuss_board.board.schemas import auth as dto
from discuss_board.infra import jwt as jwt_helper
from discuss_board.infra import rate_limit
from discuss_board.infra.auth import ADMINISTRATOR, MEMBER, MODERATOR, AuthenticatedActor
from discuss_board.infra.password import hash_password, is_strong_admin_password, verify_password
from discuss_board.infra.store import eq
from discuss_board.obs import logging as obs_logging
from discuss_board.obs import metrics as obs_metrics
from discuss_board.settings import settings

_LOG = obs_logging.get_logger(__name__)


def hash_refresh_token(token: str) -> str:
	return hashlib.sha256(f"{settings.refresh_pepper}{token}".encode("utf-8")).hexdigest()


class AuthService:
	def __init__(self, *, repository: repo_module.BoardRepository | None = None) -> None:
		self.repo = repository or repo_module.BoardRepository()
		self.audit = AuditService(repository=self.repo)

	async def _issue(
		self,
		account: models.UserAccount,
		member: models.Member,
		role: str,
		role_entity_id: UUID,
		*,
		session: Optional[models.JwtSession] = None,
		user_agent: Optional[str] = None,
		ip_address: Optional[str] = None,
	) -> dto.TokenBundle:
		now = repo_module.utcnow()
		access_expires = jwt_helper.access_expiry(now)
		refresh_expires = jwt_helper.refresh_expiry(now)
		if session is None:
			session = await self.repo.sessions.insert(
				user_account_id=account.id,
				role=role,
				refresh_token_hash="",
				user_agent=user_agent,
				ip_address=ip_address,
				expires_at=refresh_expires,
				revoked_at=None,
			)
		claims: dict[str, object] = {
			"sub": str(role_entity_id),
			"role": role,
			"mid": str(member.id),
			"uid": str(account.id),
			"sid": str(session.id),
		}
		access = jwt_helper.encode_access(claims, expires_at=access_expires)
		refresh = jwt_helper.encode_refresh(claims, expires_at=refresh_expires)
		await self.repo.sessions.update(
			session.id,
			refresh_token_hash=hash_refresh_token(refresh),
			expires_at=refresh_expires,
		)
		return dto.TokenBundle(
			access=access,
			refresh=refresh,
			expired_at=access_expires,
			refreshable_until=refresh_expires,
		)

	async def _create_identity(self, email: str, password_hash: str, nickname: str) -> tuple[models.UserAccount, models.Member]:
		if await self.repo.user_accounts.find_one(eq("email", email)) is not None:
			raise ConflictError("email_taken")
		if await self.repo.members.find_one(eq("nickname", nickname)) is not None:
			raise ConflictError("nickname_taken")
		account = await self.repo.user_accounts.insert(
			email=email,
			password_hash=password_hash,
			email_verified=False,
			status="active",
			last_login_at=None,
		)
		member = await self.repo.members.insert(
			user_account_id=account.id,
			nickname=nickname,
			status="active",
		)
		return account, member

	async def member_join(
		self,
		payload: dto.MemberJoinRequest,
		*,
		user_agent: Optional[str] = None,
		ip_address: Optional[str] = None,
	) -> dto.MemberAuthorized:
		policies.ensure_required_consents((item.policy_type, item.consent_action) for item in payload.consent)
		password_hash = hash_password(payload.password)
		async with self.repo.transaction():
			account, member = await self._create_identity(payload.email.lower(), password_hash, payload.nickname)
			for item in payload.consent:
				await self.repo.consents.insert(
					user_account_id=account.id,
					policy_type=item.policy_type,
					policy_version=item.policy_version,
					consent_action=item.consent_action,
				)
			token = await self._issue(account, member, MEMBER, member.id, user_agent=user_agent, ip_address=ip_address)
		obs_metrics.inc_auth_event("join", MEMBER, "success")
		_LOG.info("member_joined", extra={"member_id": str(member.id)})
		return dto.MemberAuthorized(**dto.MemberResponse.model_validate(member).model_dump(), token=token)

	async def administrator_join(
		self,
		payload: dto.AdministratorJoinRequest,
		*,
		user_agent: Optional[str] = None,
		ip_address: Optional[str] = None,
	) -> dto.AdministratorAuthorized:
		if not settings.administrator_join_enabled:
			raise ForbiddenError("administrator_join_disabled")
		if not is_strong_admin_password(payload.password):
			raise ValidationError("weak_password")
		password_hash = hash_password(payload.password)
		async with self.repo.transaction():
			account, member = await self._create_identity(payload.email.lower(), password_hash, payload.nickname)
			admin = await self.repo.administrators.insert(
				member_id=member.id,
				escalated_by_administrator_id=None,
				escalated_at=repo_module.utcnow(),
				status="active",
				revoked_at=None,
			)
			token = await self._issue(account, member, ADMINISTRATOR, admin.id, user_agent=user_agent, ip_address=ip_address)
		obs_metrics.inc_auth_event("join", ADMINISTRATOR, "success")
		_LOG.info("administrator_joined", extra={"administrator_id": str(admin.id)})
		return dto.AdministratorAuthorized(**dto.AdministratorResponse.model_validate(admin).model_dump(), token=token)

	async def appoint_moderator(self, actor: AuthenticatedActor, payload: dto.ModeratorAppointRequest) -> dto.ModeratorResponse:
		member = await self.repo.members.require(payload.member_id)
		if member.status != "active":
			raise ForbiddenError("member_suspended")
		now = repo_module.utcnow()
		async with self.repo.transaction():
			existing = await self.repo.moderators.find_one(eq("member_id", member.id))
			if existing is not None and existing.status == "active":
				raise ConflictError("moderator_exists")
			if existing is not None:
				moderator = await self.repo.moderators.update(
					existing.id,
					status="active",
					revoked_at=None,
					assigned_at=now,
					assigned_by_administrator_id=actor.id,
				)
			else:
				moderator = await self.repo.moderators.insert(
					member_id=member.id,
					assigned_by_administrator_id=actor.id,
					assigned_at=now,
					status="active",
					revoked_at=None,
				)
			await self.audit.record(actor, "moderator_appointed", "moderator", moderator.id)
		return dto.ModeratorResponse.model_validate(moderator)

	async def _authenticate(self, email: str, password: str, role: str) -> tuple[models.UserAccount, models.Member]:
		email = email.lower()
		if not await rate_limit.allow("login", email, limit=settings.login_attempts_per_minute):
			obs_metrics.inc_auth_event("login", role, "rate_limited")
			raise RateLimitedError()
		account = await self.repo.user_accounts.find_one(eq("email", email))
		if account is None or not verify_password(account.password_hash, password):
			obs_metrics.inc_auth_event("login", role, "invalid_credentials")
			raise UnauthorizedError("invalid_credentials")
		if account.status != "active":
			raise ForbiddenError("account_inactive")
		member = await self.repo.members.find_one(eq("user_account_id", account.id))
		if member is None:
			raise UnauthorizedError("invalid_credentials")
		if member.status != "active":
			raise ForbiddenError("member_suspended")
		return account, member

	async def _role_entity(self, role: str, member: models.Member) -> UUID:
		if role == MEMBER:
			return member.id
		table = self.repo.moderators if role == MODERATOR else self.repo.administrators
		entity = await table.find_one(eq("member_id", member.id), eq("status", "active"))
		if entity is None:
			raise ForbiddenError(f"not_{role}")
		return entity.id

	async def login(
		self,
		role: str,
		payload: dto.LoginRequest,
		*,
		user_agent: Optional[str] = None,
		ip_address: Optional[str] = None,
	) -> tuple[models.Member, UUID, dto.TokenBundle]:
		account, member = await self._authenticate(payload.email, payload.password, role)
		entity_id = await self._role_entity(role, member)
		await self.repo.user_accounts.update(account.id, last_login_at=repo_module.utcnow())
		token = await self._issue(account, member, role, entity_id, user_agent=user_agent, ip_address=ip_address)
		obs_metrics.inc_auth_event("login", role, "success")
		return member, entity_id, token

	async def refresh(self, role: str, payload: dto.RefreshRequest) -> tuple[models.Member, UUID, dto.TokenBundle]:
		try:
			claims = jwt_helper.decode_refresh(payload.refresh_token)
			session_id = UUID(str(claims["sid"]))
		except (jwt_helper.InvalidTokenError, ValueError) as exc:
			obs_metrics.inc_auth_event("refresh", role, "invalid")
			raise UnauthorizedError("invalid_refresh_token") from exc
		if claims.get("role") != role:
			raise UnauthorizedError("invalid_refresh_token")
		now = repo_module.utcnow()
		session = await self.repo.sessions.get(session_id)
		if session is None or session.revoked_at is not None or session.expires_at <= now:
			raise UnauthorizedError("session_expired")
		if not hmac.compare_digest(session.refresh_token_hash, hash_refresh_token(payload.refresh_token)):
			await self.repo.sessions.update(session.id, revoked_at=now)
			obs_metrics.inc_auth_event("refresh", role, "reuse_detected")
			_LOG.warning("refresh_token_reuse", extra={"session_id": str(session.id)})
			raise UnauthorizedError("refresh_token_reused")
		account = await self.repo.user_accounts.get(session.user_account_id)
		if account is None or account.status != "active":
			raise UnauthorizedError("account_inactive")
		member = await self.repo.members.find_one(eq("user_account_id", account.id))
		if member is None or member.status != "active":
			raise ForbiddenError("member_suspended")
		entity_id = await self._role_entity(role, member)
		token = await self._issue(account, member, role, entity_id, session=session)
		obs_metrics.inc_auth_event("refresh", role, "success")
		return member, entity_id, token

	async def member_login(self, payload: dto.LoginRequest, **meta: Optional[str]) -> dto.MemberAuthorized:
		member, _, token = await self.login(MEMBER, payload, **meta)
		return dto.MemberAuthorized(**dto.MemberResponse.model_validate(member).model_dump(), token=token)

	async def member_refresh(self, payload: dto.RefreshRequest) -> dto.MemberAuthorized:
		member, _, token = await self.refresh(MEMBER, payload)
		return dto.MemberAuthorized(**dto.MemberResponse.model_validate(member).model_dump(), token=token)

	async def administrator_login(self, payload: dto.LoginRequest, **meta: Optional[str]) -> dto.AdministratorAuthorized:
		_, admin_id, token = await self.login(ADMINISTRATOR, payload, **meta)
		return await self._admin_authorized(admin_id, token)

	async def administrator_refresh(self, payload: dto.RefreshRequest) -> dto.AdministratorAuthorized:
		_, admin_id, token = await self.refresh(ADMINISTRATOR, payload)
		return await self._admin_authorized(admin_id, token)

	async def moderator_login(self, payload: dto.LoginRequest, **meta: Optional[str]) -> dto.ModeratorAuthorized:
		_, moderator_id, token = await self.login(MODERATOR, payload, **meta)
		return await self._moderator_authorized(moderator_id, token)

	async def moderator_refresh(self, payload: dto.RefreshRequest) -> dto.ModeratorAuthorized:
		_, moderator_id, token = await self.refresh(MODERATOR, payload)
		return await self._moderator_authorized(moderator_id, token)

	async def _admin_authorized(self, admin_id: UUID, token: dto.TokenBundle) -> dto.AdministratorAuthorized:
		admin = await self.repo.administrators.require(admin_id)
		return dto.AdministratorAuthorized(**dto.AdministratorResponse.model_validate(admin).model_dump(), token=token)

	async def _moderator_authorized(self, moderator_id: UUID, token: dto.TokenBundle) -> dto.ModeratorAuthorized:
		moderator = await self.repo.moderators.require(moderator_id)
		return dto.ModeratorAuthorized(**dto.ModeratorResponse.model_validate(moderator).model_dump(), token=token)


__all__ = ["AuthService", "hash_refresh_token"]
