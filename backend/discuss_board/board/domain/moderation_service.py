"""Moderation actions, their effects on content and members, and moderation logs.

An ``active`` action applies its effect immediately. Moving it to ``revoked``
reverts that effect. ``warn`` and ``escalate`` carry no effect and only
notify the targeted member.
"""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from discuss_board.api.pagination import Page, build_page
from discuss_board.board.domain import models, policies
from discuss_board.board.domain import repo as repo_module
from discuss_board.board.domain.audit_service import AuditService
from discuss_board.board.domain.exceptions import ConflictError, ForbiddenError, NotFoundError
from discuss_board.board.domain.notifications_service import (
	MODERATION_ACTION,
	MODERATION_ACTION_REVOKED,
	NotificationService,
)
from discuss_board.board.schemas import moderation as dto
from discuss_board.infra.auth import ADMINISTRATOR, AuthenticatedActor
from discuss_board.infra.store import eq, ne
from discuss_board.obs import logging as obs_logging
from discuss_board.obs import metrics as obs_metrics

_LOG = obs_logging.get_logger(__name__)

_MEMBER_STATUS = {"suspend_member": "suspended", "ban_member": "banned"}


class ModerationService:
	def __init__(self, *, repository: repo_module.BoardRepository | None = None) -> None:
		self.repo = repository or repo_module.BoardRepository()
		self.audit = AuditService(repository=self.repo)
		self.notifications = NotificationService(repository=self.repo)

	async def _resolve_targets(self, payload: dto.ModerationActionCreateRequest) -> Optional[UUID]:
		"""Check every given target exists and derive the member the action concerns."""
		include_deleted = payload.action_type == "restore_content"
		member_id = payload.target_member_id
		if payload.target_comment_id is not None:
			comment = await self.repo.comments.require(payload.target_comment_id, include_deleted=include_deleted)
			member_id = member_id or comment.author_member_id
		if payload.target_post_id is not None:
			post = await self.repo.posts.require(payload.target_post_id, include_deleted=include_deleted)
			member_id = member_id or post.author_member_id
		if payload.target_member_id is not None:
			await self.repo.members.require(payload.target_member_id)
		return member_id

	async def _guard_administrator(self, actor: AuthenticatedActor, action_type: str, member_id: Optional[UUID]) -> None:
		"""Suspending an administrator needs an administrator and another active one."""
		if action_type not in _MEMBER_STATUS or member_id is None:
			return
		admin = await self.repo.administrators.find_one(eq("member_id", member_id), eq("status", "active"))
		if admin is None:
			return
		if not actor.has_role(ADMINISTRATOR):
			raise ForbiddenError("target_is_administrator")
		if await self.repo.administrators.count(eq("status", "active"), ne("id", admin.id)) == 0:
			raise ConflictError("last_administrator")

	async def _apply(self, actor: AuthenticatedActor, action: models.ModerationAction, *, revert: bool = False) -> None:
		kind = action.action_type
		if kind in ("remove_content", "restore_content"):
			hide = (kind == "remove_content") != revert
			if action.target_comment_id is not None:
				if hide:
					await self.repo.comments.soft_delete(action.target_comment_id)
					await self.repo.comment_deletion_logs.insert(
						comment_id=action.target_comment_id,
						deleted_by_member_id=actor.member_id,
						actor_role=actor.role,
						deletion_reason=action.action_reason,
					)
				else:
					await self.repo.comments.restore(action.target_comment_id)
			elif action.target_post_id is not None:
				if hide:
					await self.repo.posts.soft_delete(action.target_post_id)
				else:
					await self.repo.posts.restore(action.target_post_id)
		elif kind == "lock_content":
			if action.target_comment_id is not None:
				await self.repo.comments.update(action.target_comment_id, is_locked=not revert)
			elif action.target_post_id is not None and revert:
				await self.repo.posts.update(action.target_post_id, business_status=action.prior_post_status or "public")
			elif action.target_post_id is not None:
				post = await self.repo.posts.require(action.target_post_id)
				await self.repo.moderation_actions.update(action.id, prior_post_status=post.business_status)
				await self.repo.posts.update(action.target_post_id, business_status=policies.LOCKED)
		elif kind in _MEMBER_STATUS and action.target_member_id is not None:
			await self.repo.members.update(action.target_member_id, status="active" if revert else _MEMBER_STATUS[kind])

	async def _log(self, actor: AuthenticatedActor, action_id: UUID, event_type: str, details: Optional[str]) -> models.ModerationLog:
		return await self.repo.moderation_logs.insert(
			moderation_action_id=action_id,
			actor_member_id=actor.member_id,
			event_type=event_type,
			event_details=details,
		)

	async def create_action(
		self,
		actor: AuthenticatedActor,
		payload: dto.ModerationActionCreateRequest,
	) -> dto.ModerationActionResponse:
		policies.ensure_action_targets(
			payload.action_type,
			member_id=payload.target_member_id,
			post_id=payload.target_post_id,
			comment_id=payload.target_comment_id,
		)
		target_member_id = await self._resolve_targets(payload)
		await self._guard_administrator(actor, payload.action_type, target_member_id)
		if payload.related_report_id is not None:
			await self.repo.content_reports.require(payload.related_report_id)
		async with self.repo.transaction():
			action = await self.repo.moderation_actions.insert(
				actor_member_id=actor.member_id,
				actor_role=actor.role,
				target_member_id=target_member_id,
				target_post_id=payload.target_post_id,
				target_comment_id=payload.target_comment_id,
				related_report_id=payload.related_report_id,
				action_type=payload.action_type,
				action_reason=payload.action_reason,
				decision_narrative=payload.decision_narrative,
				status=payload.status,
				effective_from=payload.effective_from or repo_module.utcnow(),
				effective_until=payload.effective_until,
			)
			if action.status == "active":
				await self._apply(actor, action)
			if payload.related_report_id is not None:
				await self.repo.content_reports.update(payload.related_report_id, moderation_action_id=action.id)
			await self._log(actor, action.id, "action_taken", payload.action_reason)
			if target_member_id is not None:
				await self.notifications.notify(
					target_member_id,
					MODERATION_ACTION,
					"A moderation action concerns you",
					f"Action taken: {action.action_type}. Reason: {action.action_reason}",
					related_entity_id=action.id,
				)
			await self.audit.record(actor, "moderation_action_created", "moderation_action", action.id, action.action_type)
		obs_metrics.inc_moderation_action(action.action_type)
		_LOG.info("moderation_action_created", extra={"action_id": str(action.id), "action_type": action.action_type})
		return dto.ModerationActionResponse.model_validate(action)

	async def list_actions(self, request: dto.ModerationActionSearchRequest) -> Page[dto.ModerationActionSummary]:
		conditions = repo_module.created_between(request.created_from, request.created_to)
		for column in ("actor_member_id", "target_member_id", "target_post_id", "target_comment_id", "action_type", "status"):
			value = getattr(request, column)
			if value is not None:
				conditions.append(eq(column, value))
		items, records = await self.repo.moderation_actions.page(conditions, request)
		return build_page([dto.ModerationActionSummary.model_validate(item) for item in items], request=request, records=records)

	async def get_action(self, action_id: UUID) -> dto.ModerationActionResponse:
		return dto.ModerationActionResponse.model_validate(await self.repo.moderation_actions.require(action_id))

	async def _change_status(
		self,
		actor: AuthenticatedActor,
		action: models.ModerationAction,
		status: str,
		details: Optional[str],
	) -> None:
		if action.status == "revoked":
			raise ConflictError("action_revoked")
		if status == "pending":
			raise ConflictError("action_already_applied")
		if status == "revoked" and action.status in ("active", "completed"):
			await self._apply(actor, action, revert=True)
		elif status in ("active", "completed") and action.status == "pending":
			await self._guard_administrator(actor, action.action_type, action.target_member_id)
			await self._apply(actor, action)
		await self._log(actor, action.id, "status_change", details or f"{action.status} -> {status}")
		if status == "revoked" and action.target_member_id is not None:
			await self.notifications.notify(
				action.target_member_id,
				MODERATION_ACTION_REVOKED,
				"A moderation action was revoked",
				f"The {action.action_type} action against you was revoked.",
				related_entity_id=action.id,
			)

	async def update_action(
		self,
		actor: AuthenticatedActor,
		action_id: UUID,
		payload: dto.ModerationActionUpdateRequest,
	) -> dto.ModerationActionResponse:
		action = await self.repo.moderation_actions.require(action_id)
		changes = payload.model_dump(exclude_none=True)
		if not changes:
			return dto.ModerationActionResponse.model_validate(action)
		async with self.repo.transaction():
			if payload.status is not None and payload.status != action.status:
				await self._change_status(actor, action, payload.status, payload.decision_narrative)
			action = await self.repo.moderation_actions.update(action_id, **changes)
		return dto.ModerationActionResponse.model_validate(action)

	async def revoke_action(self, actor: AuthenticatedActor, action_id: UUID, details: Optional[str] = None) -> models.ModerationAction:
		"""Revoke an action and revert its effect; used when an appeal is accepted."""
		action = await self.repo.moderation_actions.require(action_id)
		if action.status == "revoked":
			return action
		async with self.repo.transaction():
			await self._change_status(actor, action, "revoked", details)
			return await self.repo.moderation_actions.update(action_id, status="revoked")

	async def erase_action(self, actor: AuthenticatedActor, action_id: UUID) -> None:
		await self.repo.moderation_actions.require(action_id)
		if await self.repo.appeals.count(eq("moderation_action_id", action_id), include_deleted=True) > 0:
			raise ConflictError("action_referenced")
		async with self.repo.transaction():
			for log in await self.repo.moderation_logs.find(eq("moderation_action_id", action_id), include_deleted=True):
				await self.repo.moderation_logs.delete(log.id)
			for report in await self.repo.content_reports.find(eq("moderation_action_id", action_id), include_deleted=True):
				await self.repo.content_reports.update(report.id, moderation_action_id=None)
			await self.repo.moderation_actions.delete(action_id)
			await self.audit.record(actor, "moderation_action_erased", "moderation_action", action_id)

	async def _log_on_action(self, action_id: UUID, log_id: UUID) -> models.ModerationLog:
		log = await self.repo.moderation_logs.require(log_id)
		if log.moderation_action_id != action_id:
			raise NotFoundError("moderation_log_not_found")
		return log

	async def create_log(
		self,
		actor: AuthenticatedActor,
		action_id: UUID,
		payload: dto.ModerationLogCreateRequest,
	) -> dto.ModerationLogResponse:
		await self.repo.moderation_actions.require(action_id)
		log = await self._log(actor, action_id, payload.event_type, payload.event_details)
		return dto.ModerationLogResponse.model_validate(log)

	async def list_logs(self, action_id: UUID, request: dto.ModerationLogSearchRequest) -> Page[dto.ModerationLogResponse]:
		await self.repo.moderation_actions.require(action_id)
		conditions = [eq("moderation_action_id", action_id), *repo_module.created_between(request.created_from, request.created_to)]
		if request.event_type:
			conditions.append(eq("event_type", request.event_type))
		if request.actor_member_id:
			conditions.append(eq("actor_member_id", request.actor_member_id))
		items, records = await self.repo.moderation_logs.page(conditions, request)
		return build_page([dto.ModerationLogResponse.model_validate(item) for item in items], request=request, records=records)

	async def get_log(self, action_id: UUID, log_id: UUID) -> dto.ModerationLogResponse:
		return dto.ModerationLogResponse.model_validate(await self._log_on_action(action_id, log_id))

	async def update_log(
		self,
		action_id: UUID,
		log_id: UUID,
		payload: dto.ModerationLogUpdateRequest,
	) -> dto.ModerationLogResponse:
		await self._log_on_action(action_id, log_id)
		log = await self.repo.moderation_logs.update(log_id, event_details=payload.event_details)
		return dto.ModerationLogResponse.model_validate(log)

	async def erase_log(self, actor: AuthenticatedActor, action_id: UUID, log_id: UUID) -> None:
		await self._log_on_action(action_id, log_id)
		async with self.repo.transaction():
			await self.repo.moderation_logs.soft_delete(log_id)
			await self.audit.record(actor, "moderation_log_erased", "moderation_log", log_id)


__all__ = ["ModerationService"]
