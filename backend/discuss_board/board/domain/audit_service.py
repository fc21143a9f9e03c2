"""Audit trail for privileged actions."""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from discuss_board.api.pagination import Page, build_page
from discuss_board.board.domain import repo as repo_module
from discuss_board.board.schemas import admin as dto
from discuss_board.infra.auth import AuthenticatedActor
from discuss_board.infra.store import eq
from discuss_board.obs import logging as obs_logging

_LOG = obs_logging.get_logger(__name__)


class AuditService:
	"""Provides access to sensitive audit trail entries."""

	def __init__(self, *, repository: repo_module.BoardRepository | None = None) -> None:
		self.repo = repository or repo_module.BoardRepository()

	async def record(
		self,
		actor: AuthenticatedActor,
		action_type: str,
		target_type: str,
		target_id: Optional[UUID] = None,
		description: Optional[str] = None,
	) -> None:
		await self.repo.audit_logs.insert(
			actor_member_id=actor.member_id,
			actor_role=actor.role,
			action_type=action_type,
			target_type=target_type,
			target_id=target_id,
			description=description,
		)
		_LOG.info(
			"audit_recorded",
			extra={"action_type": action_type, "target_type": target_type, "target_id": str(target_id) if target_id else None},
		)

	async def list_logs(self, request: dto.AuditLogSearchRequest) -> Page[dto.AuditLogResponse]:
		conditions = repo_module.created_between(request.created_from, request.created_to)
		if request.actor_member_id:
			conditions.append(eq("actor_member_id", request.actor_member_id))
		if request.action_type:
			conditions.append(eq("action_type", request.action_type))
		if request.target_type:
			conditions.append(eq("target_type", request.target_type))
		items, records = await self.repo.audit_logs.page(conditions, request)
		return build_page([dto.AuditLogResponse.model_validate(item) for item in items], request=request, records=records)

	async def get_log(self, log_id: UUID) -> dto.AuditLogResponse:
		return dto.AuditLogResponse.model_validate(await self.repo.audit_logs.require(log_id))


__all__ = ["AuditService"]
