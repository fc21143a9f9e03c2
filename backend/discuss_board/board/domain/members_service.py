"""Member profiles plus administrator-side account and role management."""

from __future__ import annotations

from uuid import UUID

from discuss_board.api.pagination import Page, build_page
from discuss_board.board.domain import repo as repo_module
from discuss_board.board.domain.audit_service import AuditService
from discuss_board.board.domain.exceptions import ConflictError, ForbiddenError
from discuss_board.board.schemas import auth as auth_dto
from discuss_board.board.schemas import members as dto
from discuss_board.infra.auth import AuthenticatedActor
from discuss_board.infra.store import contains, eq, ne
from discuss_board.obs import logging as obs_logging

_LOG = obs_logging.get_logger(__name__)


class MembersService:
	def __init__(self, *, repository: repo_module.BoardRepository | None = None) -> None:
		self.repo = repository or repo_module.BoardRepository()
		self.audit = AuditService(repository=self.repo)

	async def _ensure_nickname_free(self, nickname: str, member_id: UUID) -> None:
		existing = await self.repo.members.find_one(eq("nickname", nickname))
		if existing is not None and existing.id != member_id:
			raise ConflictError("nickname_taken")

	async def get_profile(self, member_id: UUID) -> dto.MemberProfile:
		return dto.MemberProfile.model_validate(await self.repo.members.require(member_id))

	async def update_own_profile(
		self,
		actor: AuthenticatedActor,
		member_id: UUID,
		payload: dto.ProfileUpdateRequest,
	) -> dto.MemberProfile:
		if member_id != actor.member_id:
			raise ForbiddenError("not_owner")
		await self._ensure_nickname_free(payload.nickname, member_id)
		member = await self.repo.members.update(member_id, nickname=payload.nickname)
		return dto.MemberProfile.model_validate(member)

	async def list_members(self, request: dto.MemberSearchRequest) -> Page[dto.MemberSummary]:
		conditions = repo_module.created_between(request.created_from, request.created_to)
		if request.nickname:
			conditions.append(contains("nickname", request.nickname))
		if request.status:
			conditions.append(eq("status", request.status))
		items, records = await self.repo.members.page(conditions, request)
		return build_page([dto.MemberSummary.model_validate(item) for item in items], request=request, records=records)

	async def get_member(self, member_id: UUID) -> auth_dto.MemberResponse:
		return auth_dto.MemberResponse.model_validate(await self.repo.members.require(member_id))

	async def update_member(
		self,
		actor: AuthenticatedActor,
		member_id: UUID,
		payload: dto.MemberUpdateRequest,
	) -> auth_dto.MemberResponse:
		await self.repo.members.require(member_id)
		changes = payload.model_dump(exclude_none=True)
		if "nickname" in changes:
			await self._ensure_nickname_free(changes["nickname"], member_id)
		if changes.get("status", "active") != "active" and member_id == actor.member_id:
			raise ForbiddenError("cannot_suspend_self")
		async with self.repo.transaction():
			member = await self.repo.members.update(member_id, **changes)
			await self.audit.record(actor, "member_updated", "member", member_id, ",".join(sorted(changes)))
		return auth_dto.MemberResponse.model_validate(member)

	async def erase_member(self, actor: AuthenticatedActor, member_id: UUID) -> None:
		member = await self.repo.members.require(member_id)
		if member_id == actor.member_id:
			raise ForbiddenError("cannot_erase_self")
		async with self.repo.transaction():
			await self.repo.members.soft_delete(member_id)
			await self.repo.user_accounts.soft_delete(member.user_account_id)
			await self.audit.record(actor, "member_erased", "member", member_id)
		_LOG.info("member_erased", extra={"member_id": str(member_id)})

	async def list_administrators(self, request: dto.AdministratorSearchRequest) -> Page[auth_dto.AdministratorResponse]:
		conditions = []
		if request.status:
			conditions.append(eq("status", request.status))
		if request.member_id:
			conditions.append(eq("member_id", request.member_id))
		items, records = await self.repo.administrators.page(conditions, request)
		return build_page([auth_dto.AdministratorResponse.model_validate(item) for item in items], request=request, records=records)

	async def get_administrator(self, administrator_id: UUID) -> auth_dto.AdministratorResponse:
		return auth_dto.AdministratorResponse.model_validate(await self.repo.administrators.require(administrator_id))

	async def _ensure_other_active_admin(self, administrator_id: UUID) -> None:
		others = await self.repo.administrators.count(eq("status", "active"), ne("id", administrator_id))
		if others == 0:
			raise ConflictError("last_administrator")

	async def update_administrator(
		self,
		actor: AuthenticatedActor,
		administrator_id: UUID,
		payload: dto.AdministratorUpdateRequest,
	) -> auth_dto.AdministratorResponse:
		admin = await self.repo.administrators.require(administrator_id)
		if payload.status != "active" and admin.status == "active":
			await self._ensure_other_active_admin(administrator_id)
		async with self.repo.transaction():
			admin = await self.repo.administrators.update(
				administrator_id,
				status=payload.status,
				revoked_at=repo_module.utcnow() if payload.status != "active" else None,
			)
			await self.audit.record(actor, "administrator_updated", "administrator", administrator_id, payload.status)
		return auth_dto.AdministratorResponse.model_validate(admin)

	async def erase_administrator(self, actor: AuthenticatedActor, administrator_id: UUID) -> None:
		admin = await self.repo.administrators.require(administrator_id)
		if admin.id == actor.id:
			raise ForbiddenError("cannot_erase_self")
		await self._ensure_other_active_admin(administrator_id)
		async with self.repo.transaction():
			await self.repo.administrators.update(
				administrator_id,
				status="suspended",
				revoked_at=repo_module.utcnow(),
				deleted_at=repo_module.utcnow(),
			)
			await self.audit.record(actor, "administrator_erased", "administrator", administrator_id)

	async def list_moderators(self, request: dto.ModeratorSearchRequest) -> Page[auth_dto.ModeratorResponse]:
		conditions = []
		if request.status:
			conditions.append(eq("status", request.status))
		if request.member_id:
			conditions.append(eq("member_id", request.member_id))
		items, records = await self.repo.moderators.page(conditions, request)
		return build_page([auth_dto.ModeratorResponse.model_validate(item) for item in items], request=request, records=records)

	async def get_moderator(self, moderator_id: UUID) -> auth_dto.ModeratorResponse:
		return auth_dto.ModeratorResponse.model_validate(await self.repo.moderators.require(moderator_id))

	async def update_moderator(
		self,
		actor: AuthenticatedActor,
		moderator_id: UUID,
		payload: dto.ModeratorUpdateRequest,
	) -> auth_dto.ModeratorResponse:
		await self.repo.moderators.require(moderator_id)
		async with self.repo.transaction():
			moderator = await self.repo.moderators.update(
				moderator_id,
				status=payload.status,
				revoked_at=repo_module.utcnow() if payload.status == "revoked" else None,
			)
			await self.audit.record(actor, "moderator_updated", "moderator", moderator_id, payload.status)
		return auth_dto.ModeratorResponse.model_validate(moderator)

	async def list_consents(self, request: dto.ConsentRecordSearchRequest) -> Page[dto.ConsentRecordResponse]:
		conditions = []
		if request.user_account_id:
			conditions.append(eq("user_account_id", request.user_account_id))
		if request.policy_type:
			conditions.append(eq("policy_type", request.policy_type))
		if request.consent_action:
			conditions.append(eq("consent_action", request.consent_action))
		items, records = await self.repo.consents.page(conditions, request)
		return build_page([dto.ConsentRecordResponse.model_validate(item) for item in items], request=request, records=records)

	async def get_consent(self, consent_id: UUID) -> dto.ConsentRecordResponse:
		return dto.ConsentRecordResponse.model_validate(await self.repo.consents.require(consent_id))


__all__ = ["MembersService"]
