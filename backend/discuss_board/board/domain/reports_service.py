"""Content reports filed by members and triaged by moderators."""

from __future__ import annotations

from uuid import UUID

from discuss_board.api.pagination import Page, build_page
from discuss_board.board.domain import models, policies
from discuss_board.board.domain import repo as repo_module
from discuss_board.board.domain.exceptions import ConflictError, ForbiddenError
from discuss_board.board.domain.notifications_service import REPORT_DECISION, NotificationService
from discuss_board.board.schemas import reports as dto
from discuss_board.infra.auth import AuthenticatedActor
from discuss_board.infra.store import contains, eq
from discuss_board.obs import logging as obs_logging
from discuss_board.obs import metrics as obs_metrics

_LOG = obs_logging.get_logger(__name__)

_DECIDED = frozenset({"resolved", "rejected"})


class ReportsService:
	def __init__(self, *, repository: repo_module.BoardRepository | None = None) -> None:
		self.repo = repository or repo_module.BoardRepository()
		self.notifications = NotificationService(repository=self.repo)

	@staticmethod
	def _to_response(report: models.ContentReport) -> dto.ContentReportResponse:
		return dto.ContentReportResponse.model_validate(report)

	async def create_report(
		self,
		actor: AuthenticatedActor,
		payload: dto.ContentReportCreateRequest,
	) -> dto.ContentReportResponse:
		policies.ensure_report_target(payload.content_type, payload.content_post_id, payload.content_comment_id)
		if payload.content_post_id is not None:
			await self.repo.posts.require(payload.content_post_id)
			target = eq("content_post_id", payload.content_post_id)
		else:
			await self.repo.comments.require(payload.content_comment_id)
			target = eq("content_comment_id", payload.content_comment_id)
		if await self.repo.content_reports.find_one(eq("reporter_member_id", actor.member_id), target) is not None:
			raise ConflictError("report_exists")
		report = await self.repo.content_reports.insert(
			reporter_member_id=actor.member_id,
			content_type=payload.content_type,
			content_post_id=payload.content_post_id,
			content_comment_id=payload.content_comment_id,
			reason=payload.reason,
			status="pending",
			moderation_action_id=None,
		)
		obs_metrics.inc_report_created(payload.content_type)
		_LOG.info("content_report_created", extra={"report_id": str(report.id), "content_type": payload.content_type})
		return self._to_response(report)

	async def erase_own_report(self, actor: AuthenticatedActor, report_id: UUID) -> None:
		report = await self.repo.content_reports.require(report_id)
		policies.ensure_owner(actor.member_id, report.reporter_member_id)
		if report.status != "pending":
			raise ForbiddenError("report_not_pending")
		await self.repo.content_reports.soft_delete(report_id)

	async def moderate_erase_report(self, report_id: UUID) -> None:
		await self.repo.content_reports.require(report_id)
		await self.repo.content_reports.soft_delete(report_id)

	async def list_reports(self, request: dto.ContentReportSearchRequest) -> Page[dto.ContentReportResponse]:
		conditions = repo_module.created_between(request.created_from, request.created_to)
		if request.reporter_member_id:
			conditions.append(eq("reporter_member_id", request.reporter_member_id))
		if request.content_type:
			conditions.append(eq("content_type", request.content_type))
		if request.status:
			conditions.append(eq("status", request.status))
		if request.reason:
			conditions.append(contains("reason", request.reason))
		items, records = await self.repo.content_reports.page(conditions, request)
		return build_page([self._to_response(item) for item in items], request=request, records=records)

	async def get_report(self, report_id: UUID) -> dto.ContentReportResponse:
		return self._to_response(await self.repo.content_reports.require(report_id))

	async def update_report(
		self,
		actor: AuthenticatedActor,
		report_id: UUID,
		payload: dto.ContentReportUpdateRequest,
	) -> dto.ContentReportResponse:
		report = await self.repo.content_reports.require(report_id)
		changes = payload.model_dump(exclude_none=True)
		if payload.moderation_action_id is not None:
			await self.repo.moderation_actions.require(payload.moderation_action_id)
		if not changes:
			return self._to_response(report)
		async with self.repo.transaction():
			updated = await self.repo.content_reports.update(report_id, **changes)
			if updated.status in _DECIDED and report.status != updated.status:
				await self.notifications.notify(
					report.reporter_member_id,
					REPORT_DECISION,
					"Your report was reviewed",
					f"Your report is now {updated.status}.",
					related_entity_id=report.id,
				)
		_LOG.info("content_report_updated", extra={"report_id": str(report_id), "status": updated.status, "moderator": str(actor.member_id)})
		return self._to_response(updated)


__all__ = ["ReportsService"]
