"""Notification inbox routes."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends

from discuss_board.api.pagination import Page
from discuss_board.board.api._errors import to_http_error
from discuss_board.board.api.deps import administrator_actor, member_actor
from discuss_board.board.domain.exceptions import BoardError
from discuss_board.board.domain.notifications_service import NotificationService
from discuss_board.board.schemas import notifications as dto
from discuss_board.infra.auth import AuthenticatedActor

router = APIRouter(prefix="/discussBoard", tags=["notifications"])
_service = NotificationService()


@router.patch("/member/notifications", response_model=Page[dto.NotificationSummary])
async def index_notifications_endpoint(
	payload: dto.NotificationSearchRequest,
	actor: AuthenticatedActor = Depends(member_actor),
) -> Page[dto.NotificationSummary]:
	try:
		return await _service.list_own(actor, payload)
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.get("/member/notifications/{notification_id}", response_model=dto.NotificationResponse)
async def get_notification_endpoint(
	notification_id: UUID,
	actor: AuthenticatedActor = Depends(member_actor),
) -> dto.NotificationResponse:
	try:
		return await _service.get_own(actor, notification_id)
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.put("/member/notifications/{notification_id}", response_model=dto.NotificationResponse)
async def update_notification_endpoint(
	notification_id: UUID,
	payload: dto.NotificationUpdateRequest,
	actor: AuthenticatedActor = Depends(member_actor),
) -> dto.NotificationResponse:
	try:
		return await _service.mark_read(actor, notification_id, payload)
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.patch("/administrator/notifications", response_model=Page[dto.NotificationSummary])
async def index_all_notifications_endpoint(
	payload: dto.NotificationSearchRequest,
	actor: AuthenticatedActor = Depends(administrator_actor),
) -> Page[dto.NotificationSummary]:
	try:
		return await _service.list_all(payload)
	except BoardError as exc:
		raise to_http_error(exc) from exc
