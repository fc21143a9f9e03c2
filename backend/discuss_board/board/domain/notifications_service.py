"""Service helpers for member notifications and notification preferences."""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from discuss_board.api.pagination import Page, build_page
from discuss_board.board.domain import repo as repo_module
from discuss_board.board.domain.exceptions import ForbiddenError
from discuss_board.board.domain.models import Notification, NotificationPreference
from discuss_board.board.schemas import members as member_dto
from discuss_board.board.schemas import notifications as dto
from discuss_board.infra.auth import AuthenticatedActor
from discuss_board.infra.store import eq
from discuss_board.obs import logging as obs_logging
from discuss_board.obs import metrics as obs_metrics

_LOG = obs_logging.get_logger(__name__)

COMMENT_CREATED = "comment_created"
MODERATION_ACTION = "moderation_action"
MODERATION_ACTION_REVOKED = "moderation_action_revoked"
REPORT_DECISION = "report_decision"
APPEAL_DECISION = "appeal_decision"

_CATEGORY = {
	COMMENT_CREATED: "comment_alerts",
	MODERATION_ACTION: "moderation_alerts",
	MODERATION_ACTION_REVOKED: "moderation_alerts",
	REPORT_DECISION: "moderation_alerts",
	APPEAL_DECISION: "moderation_alerts",
}


class NotificationService:
	"""Encapsulates notification persistence and queries."""

	def __init__(self, *, repository: repo_module.BoardRepository | None = None) -> None:
		self.repo = repository or repo_module.BoardRepository()

	async def _preferences(self, member_id: UUID) -> Optional[NotificationPreference]:
		return await self.repo.notification_preferences.find_one(eq("member_id", member_id))

	async def notify(
		self,
		recipient_member_id: UUID,
		event_type: str,
		subject: str,
		body: str,
		*,
		related_entity_id: Optional[UUID] = None,
	) -> Optional[Notification]:
		"""Persist an in-app notification unless the recipient opted out."""
		prefs = await self._preferences(recipient_member_id)
		if prefs is not None:
			category = _CATEGORY.get(event_type)
			if not prefs.in_app_enabled or (category and not getattr(prefs, category)):
				_LOG.info("notification_suppressed", extra={"event_type": event_type})
				return None
		now = repo_module.utcnow()
		notification = await self.repo.notifications.insert(
			recipient_member_id=recipient_member_id,
			event_type=event_type,
			subject=subject,
			body=body,
			delivery_channel="in_app",
			delivery_status="delivered",
			related_entity_id=related_entity_id,
			delivered_at=now,
			read_at=None,
		)
		obs_metrics.inc_notification(event_type)
		return notification

	async def list_own(self, actor: AuthenticatedActor, request: dto.NotificationSearchRequest) -> Page[dto.NotificationSummary]:
		return await self._list(request, recipient=actor.member_id)

	async def list_all(self, request: dto.NotificationSearchRequest) -> Page[dto.NotificationSummary]:
		return await self._list(request, recipient=request.recipient_member_id)

	async def _list(self, request: dto.NotificationSearchRequest, *, recipient: Optional[UUID]) -> Page[dto.NotificationSummary]:
		conditions = repo_module.created_between(request.created_from, request.created_to)
		if recipient is not None:
			conditions.append(eq("recipient_member_id", recipient))
		if request.event_type:
			conditions.append(eq("event_type", request.event_type))
		if request.delivery_status:
			conditions.append(eq("delivery_status", request.delivery_status))
		if request.delivery_channel:
			conditions.append(eq("delivery_channel", request.delivery_channel))
		items, records = await self.repo.notifications.page(conditions, request)
		return build_page([dto.NotificationSummary.model_validate(item) for item in items], request=request, records=records)

	async def get_own(self, actor: AuthenticatedActor, notification_id: UUID) -> dto.NotificationResponse:
		notification = await self.repo.notifications.require(notification_id)
		if notification.recipient_member_id != actor.member_id:
			raise ForbiddenError("not_recipient")
		return dto.NotificationResponse.model_validate(notification)

	async def mark_read(
		self,
		actor: AuthenticatedActor,
		notification_id: UUID,
		payload: dto.NotificationUpdateRequest,
	) -> dto.NotificationResponse:
		notification = await self.repo.notifications.require(notification_id)
		if notification.recipient_member_id != actor.member_id:
			raise ForbiddenError("not_recipient")
		if notification.read_at is None:
			notification = await self.repo.notifications.update(
				notification_id,
				delivery_status=payload.delivery_status,
				read_at=repo_module.utcnow(),
			)
		return dto.NotificationResponse.model_validate(notification)

	async def get_preferences(self, actor: AuthenticatedActor) -> member_dto.NotificationPreferenceResponse:
		prefs = await self._preferences(actor.member_id)
		if prefs is None:
			prefs = await self.repo.notification_preferences.insert(
				member_id=actor.member_id,
				in_app_enabled=True,
				email_enabled=False,
				comment_alerts=True,
				moderation_alerts=True,
			)
		return member_dto.NotificationPreferenceResponse.model_validate(prefs)

	async def update_preferences(
		self,
		actor: AuthenticatedActor,
		payload: member_dto.NotificationPreferenceUpdateRequest,
	) -> member_dto.NotificationPreferenceResponse:
		current = await self.get_preferences(actor)
		changes = payload.model_dump(exclude_none=True)
		prefs = await self.repo.notification_preferences.update(current.id, **changes)
		return member_dto.NotificationPreferenceResponse.model_validate(prefs)


__all__ = ["NotificationService"]
