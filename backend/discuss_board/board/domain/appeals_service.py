"""Member appeals against moderation actions and their review."""

from __future__ import annotations

from uuid import UUID

from discuss_board.api.pagination import Page, build_page
from discuss_board.board.domain import models
from discuss_board.board.domain import repo as repo_module
from discuss_board.board.domain.audit_service import AuditService
from discuss_board.board.domain.exceptions import ConflictError, ForbiddenError
from discuss_board.board.domain.moderation_service import ModerationService
from discuss_board.board.domain.notifications_service import APPEAL_DECISION, NotificationService
from discuss_board.board.schemas import appeals as dto
from discuss_board.infra.auth import AuthenticatedActor
from discuss_board.infra.store import eq, one_of
from discuss_board.obs import logging as obs_logging
from discuss_board.obs import metrics as obs_metrics

_LOG = obs_logging.get_logger(__name__)

OPEN_STATUSES = ("pending", "in_review")
FINAL_STATUSES = frozenset({"accepted", "rejected", "withdrawn"})


class AppealsService:
	def __init__(self, *, repository: repo_module.BoardRepository | None = None) -> None:
		self.repo = repository or repo_module.BoardRepository()
		self.moderation = ModerationService(repository=self.repo)
		self.notifications = NotificationService(repository=self.repo)
		self.audit = AuditService(repository=self.repo)

	async def _is_subject(self, member_id: UUID, action: models.ModerationAction) -> bool:
		if action.target_member_id == member_id:
			return True
		if action.target_post_id is not None:
			post = await self.repo.posts.get(action.target_post_id, include_deleted=True)
			if post is not None and post.author_member_id == member_id:
				return True
		if action.target_comment_id is not None:
			comment = await self.repo.comments.get(action.target_comment_id, include_deleted=True)
			if comment is not None and comment.author_member_id == member_id:
				return True
		return False

	async def create_appeal(self, actor: AuthenticatedActor, payload: dto.AppealCreateRequest) -> dto.AppealResponse:
		action = await self.repo.moderation_actions.require(payload.moderation_action_id)
		if not await self._is_subject(actor.member_id, action):
			raise ForbiddenError("not_action_subject")
		open_appeal = await self.repo.appeals.find_one(
			eq("moderation_action_id", action.id),
			one_of("status", list(OPEN_STATUSES)),
		)
		if open_appeal is not None:
			raise ConflictError("appeal_exists")
		appeal = await self.repo.appeals.insert(
			appellant_member_id=actor.member_id,
			moderation_action_id=action.id,
			appeal_rationale=payload.appeal_rationale,
			status="pending",
		)
		_LOG.info("appeal_created", extra={"appeal_id": str(appeal.id), "action_id": str(action.id)})
		return dto.AppealResponse.model_validate(appeal)

	async def _own(self, actor: AuthenticatedActor, appeal_id: UUID) -> models.Appeal:
		appeal = await self.repo.appeals.require(appeal_id)
		if appeal.appellant_member_id != actor.member_id:
			raise ForbiddenError("not_owner")
		return appeal

	async def get_own_appeal(self, actor: AuthenticatedActor, appeal_id: UUID) -> dto.AppealResponse:
		return dto.AppealResponse.model_validate(await self._own(actor, appeal_id))

	async def update_own_appeal(
		self,
		actor: AuthenticatedActor,
		appeal_id: UUID,
		payload: dto.AppealUpdateRequest,
	) -> dto.AppealResponse:
		appeal = await self._own(actor, appeal_id)
		if appeal.status != "pending":
			raise ForbiddenError("appeal_not_pending")
		changes = payload.model_dump(exclude_none=True)
		if not changes:
			return dto.AppealResponse.model_validate(appeal)
		if changes.get("status") == "withdrawn":
			changes["resolved_at"] = repo_module.utcnow()
		appeal = await self.repo.appeals.update(appeal_id, **changes)
		return dto.AppealResponse.model_validate(appeal)

	async def list_appeals(self, request: dto.AppealSearchRequest) -> Page[dto.AppealResponse]:
		conditions = repo_module.created_between(request.created_from, request.created_to)
		if request.status:
			conditions.append(eq("status", request.status))
		if request.appellant_member_id:
			conditions.append(eq("appellant_member_id", request.appellant_member_id))
		if request.moderation_action_id:
			conditions.append(eq("moderation_action_id", request.moderation_action_id))
		items, records = await self.repo.appeals.page(conditions, request)
		return build_page([dto.AppealResponse.model_validate(item) for item in items], request=request, records=records)

	async def get_appeal(self, appeal_id: UUID) -> dto.AppealResponse:
		return dto.AppealResponse.model_validate(await self.repo.appeals.require(appeal_id))

	async def review_appeal(
		self,
		actor: AuthenticatedActor,
		appeal_id: UUID,
		payload: dto.AppealReviewRequest,
	) -> dto.AppealResponse:
		appeal = await self.repo.appeals.require(appeal_id)
		if appeal.status in FINAL_STATUSES:
			raise ConflictError("appeal_closed")
		decided = payload.status in FINAL_STATUSES
		async with self.repo.transaction():
			if payload.status == "accepted":
				await self.moderation.revoke_action(actor, appeal.moderation_action_id, payload.resolution_notes or "appeal accepted")
			appeal = await self.repo.appeals.update(
				appeal_id,
				status=payload.status,
				resolution_notes=payload.resolution_notes,
				reviewed_by_member_id=actor.member_id,
				resolved_at=repo_module.utcnow() if decided else None,
			)
			await self.repo.moderation_logs.insert(
				moderation_action_id=appeal.moderation_action_id,
				actor_member_id=actor.member_id,
				event_type="appeal",
				event_details=f"appeal {appeal.id} {payload.status}",
			)
			if decided:
				await self.notifications.notify(
					appeal.appellant_member_id,
					APPEAL_DECISION,
					"Your appeal was decided",
					f"Your appeal was {payload.status}.",
					related_entity_id=appeal.id,
				)
		if decided:
			obs_metrics.inc_appeal_decision(payload.status)
		_LOG.info("appeal_reviewed", extra={"appeal_id": str(appeal_id), "status": payload.status})
		return dto.AppealResponse.model_validate(appeal)

	async def erase_appeal(self, actor: AuthenticatedActor, appeal_id: UUID) -> None:
		await self.repo.appeals.require(appeal_id)
		async with self.repo.transaction():
			await self.repo.appeals.soft_delete(appeal_id)
			await self.audit.record(actor, "appeal_erased", "appeal", appeal_id)


__all__ = ["AppealsService"]
