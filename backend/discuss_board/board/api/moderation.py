"""Moderation action and moderation log routes."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from discuss_board.api.pagination import Page
from discuss_board.board.api._errors import to_http_error
from discuss_board.board.api.deps import administrator_actor, moderator_actor
from discuss_board.board.domain.exceptions import BoardError
from discuss_board.board.domain.moderation_service import ModerationService
from discuss_board.board.schemas import moderation as dto
from discuss_board.infra.auth import AuthenticatedActor

router = APIRouter(prefix="/discussBoard", tags=["moderation"])
_service = ModerationService()


@router.post("/moderator/moderationActions", response_model=dto.ModerationActionResponse, status_code=status.HTTP_201_CREATED)
async def create_action_endpoint(
	payload: dto.ModerationActionCreateRequest,
	actor: AuthenticatedActor = Depends(moderator_actor),
) -> dto.ModerationActionResponse:
	try:
		return await _service.create_action(actor, payload)
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.patch("/moderator/moderationActions", response_model=Page[dto.ModerationActionSummary])
async def index_actions_endpoint(
	payload: dto.ModerationActionSearchRequest,
	actor: AuthenticatedActor = Depends(moderator_actor),
) -> Page[dto.ModerationActionSummary]:
	try:
		return await _service.list_actions(payload)
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.get("/moderator/moderationActions/{action_id}", response_model=dto.ModerationActionResponse)
async def get_action_endpoint(
	action_id: UUID,
	actor: AuthenticatedActor = Depends(moderator_actor),
) -> dto.ModerationActionResponse:
	try:
		return await _service.get_action(action_id)
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.put("/moderator/moderationActions/{action_id}", response_model=dto.ModerationActionResponse)
async def update_action_endpoint(
	action_id: UUID,
	payload: dto.ModerationActionUpdateRequest,
	actor: AuthenticatedActor = Depends(moderator_actor),
) -> dto.ModerationActionResponse:
	try:
		return await _service.update_action(actor, action_id, payload)
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.delete(
	"/administrator/moderationActions/{action_id}",
	status_code=status.HTTP_204_NO_CONTENT,
	response_class=Response,
	response_model=None,
)
async def erase_action_endpoint(
	action_id: UUID,
	actor: AuthenticatedActor = Depends(administrator_actor),
) -> None:
	try:
		await _service.erase_action(actor, action_id)
		return None
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.post(
	"/moderator/moderationActions/{action_id}/logs",
	response_model=dto.ModerationLogResponse,
	status_code=status.HTTP_201_CREATED,
)
async def create_log_endpoint(
	action_id: UUID,
	payload: dto.ModerationLogCreateRequest,
	actor: AuthenticatedActor = Depends(moderator_actor),
) -> dto.ModerationLogResponse:
	try:
		return await _service.create_log(actor, action_id, payload)
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.patch("/moderator/moderationActions/{action_id}/logs", response_model=Page[dto.ModerationLogResponse])
async def index_logs_endpoint(
	action_id: UUID,
	payload: dto.ModerationLogSearchRequest,
	actor: AuthenticatedActor = Depends(moderator_actor),
) -> Page[dto.ModerationLogResponse]:
	try:
		return await _service.list_logs(action_id, payload)
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.get("/moderator/moderationActions/{action_id}/logs/{log_id}", response_model=dto.ModerationLogResponse)
async def get_log_endpoint(
	action_id: UUID,
	log_id: UUID,
	actor: AuthenticatedActor = Depends(moderator_actor),
) -> dto.ModerationLogResponse:
	try:
		return await _service.get_log(action_id, log_id)
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.put("/moderator/moderationActions/{action_id}/logs/{log_id}", response_model=dto.ModerationLogResponse)
async def update_log_endpoint(
	action_id: UUID,
	log_id: UUID,
	payload: dto.ModerationLogUpdateRequest,
	actor: AuthenticatedActor = Depends(moderator_actor),
) -> dto.ModerationLogResponse:
	try:
		return await _service.update_log(action_id, log_id, payload)
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.delete(
	"/administrator/moderationActions/{action_id}/logs/{log_id}",
	status_code=status.HTTP_204_NO_CONTENT,
	response_class=Response,
	response_model=None,
)
async def erase_log_endpoint(
	action_id: UUID,
	log_id: UUID,
	actor: AuthenticatedActor = Depends(administrator_actor),
) -> None:
	try:
		await _service.erase_log(actor, action_id, log_id)
		return None
	except BoardError as exc:
		raise to_http_error(exc) from exc
