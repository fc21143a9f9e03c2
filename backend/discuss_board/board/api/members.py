"""Member profile, notification preference and member administration routes."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from discuss_board.api.pagination import Page
from discuss_board.board.api._errors import to_http_error
from discuss_board.board.api.deps import administrator_actor, member_actor
from discuss_board.board.domain.exceptions import BoardError
from discuss_board.board.domain.members_service import MembersService
from discuss_board.board.domain.notifications_service import NotificationService
from discuss_board.board.schemas import auth as auth_dto
from discuss_board.board.schemas import members as dto
from discuss_board.infra.auth import AuthenticatedActor

router = APIRouter(prefix="/discussBoard", tags=["members"])
_service = MembersService()
_notifications = NotificationService()


@router.get("/members/{member_id}/profile", response_model=dto.MemberProfile)
async def get_profile_endpoint(member_id: UUID) -> dto.MemberProfile:
	try:
		return await _service.get_profile(member_id)
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.put("/member/members/{member_id}/profile", response_model=dto.MemberProfile)
async def update_profile_endpoint(
	member_id: UUID,
	payload: dto.ProfileUpdateRequest,
	actor: AuthenticatedActor = Depends(member_actor),
) -> dto.MemberProfile:
	try:
		return await _service.update_own_profile(actor, member_id, payload)
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.get("/member/notificationPreferences", response_model=dto.NotificationPreferenceResponse)
async def get_preferences_endpoint(actor: AuthenticatedActor = Depends(member_actor)) -> dto.NotificationPreferenceResponse:
	try:
		return await _notifications.get_preferences(actor)
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.put("/member/notificationPreferences", response_model=dto.NotificationPreferenceResponse)
async def update_preferences_endpoint(
	payload: dto.NotificationPreferenceUpdateRequest,
	actor: AuthenticatedActor = Depends(member_actor),
) -> dto.NotificationPreferenceResponse:
	try:
		return await _notifications.update_preferences(actor, payload)
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.patch("/administrator/members", response_model=Page[dto.MemberSummary])
async def index_members_endpoint(
	payload: dto.MemberSearchRequest,
	actor: AuthenticatedActor = Depends(administrator_actor),
) -> Page[dto.MemberSummary]:
	try:
		return await _service.list_members(payload)
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.get("/administrator/members/{member_id}", response_model=auth_dto.MemberResponse)
async def get_member_endpoint(
	member_id: UUID,
	actor: AuthenticatedActor = Depends(administrator_actor),
) -> auth_dto.MemberResponse:
	try:
		return await _service.get_member(member_id)
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.put("/administrator/members/{member_id}", response_model=auth_dto.MemberResponse)
async def update_member_endpoint(
	member_id: UUID,
	payload: dto.MemberUpdateRequest,
	actor: AuthenticatedActor = Depends(administrator_actor),
) -> auth_dto.MemberResponse:
	try:
		return await _service.update_member(actor, member_id, payload)
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.delete(
	"/administrator/members/{member_id}",
	status_code=status.HTTP_204_NO_CONTENT,
	response_class=Response,
	response_model=None,
)
async def erase_member_endpoint(
	member_id: UUID,
	actor: AuthenticatedActor = Depends(administrator_actor),
) -> None:
	try:
		await _service.erase_member(actor, member_id)
		return None
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.patch("/administrator/consentRecords", response_model=Page[dto.ConsentRecordResponse])
async def index_consents_endpoint(
	payload: dto.ConsentRecordSearchRequest,
	actor: AuthenticatedActor = Depends(administrator_actor),
) -> Page[dto.ConsentRecordResponse]:
	try:
		return await _service.list_consents(payload)
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.get("/administrator/consentRecords/{consent_id}", response_model=dto.ConsentRecordResponse)
async def get_consent_endpoint(
	consent_id: UUID,
	actor: AuthenticatedActor = Depends(administrator_actor),
) -> dto.ConsentRecordResponse:
	try:
		return await _service.get_consent(consent_id)
	except BoardError as exc:
		raise to_http_error(exc) from exc
