"""Administrator and moderator role management routes."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from discuss_board.api.pagination import Page
from discuss_board.board.api._errors import to_http_error
from discuss_board.board.api.deps import administrator_actor
from discuss_board.board.domain.exceptions import BoardError
from discuss_board.board.domain.members_service import MembersService
from discuss_board.board.schemas import auth as auth_dto
from discuss_board.board.schemas import members as dto
from discuss_board.infra.auth import AuthenticatedActor

router = APIRouter(prefix="/discussBoard/administrator", tags=["roles"])
_service = MembersService()


@router.patch("/administrators", response_model=Page[auth_dto.AdministratorResponse])
async def index_administrators_endpoint(
	payload: dto.AdministratorSearchRequest,
	actor: AuthenticatedActor = Depends(administrator_actor),
) -> Page[auth_dto.AdministratorResponse]:
	try:
		return await _service.list_administrators(payload)
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.get("/administrators/{administrator_id}", response_model=auth_dto.AdministratorResponse)
async def get_administrator_endpoint(
	administrator_id: UUID,
	actor: AuthenticatedActor = Depends(administrator_actor),
) -> auth_dto.AdministratorResponse:
	try:
		return await _service.get_administrator(administrator_id)
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.put("/administrators/{administrator_id}", response_model=auth_dto.AdministratorResponse)
async def update_administrator_endpoint(
	administrator_id: UUID,
	payload: dto.AdministratorUpdateRequest,
	actor: AuthenticatedActor = Depends(administrator_actor),
) -> auth_dto.AdministratorResponse:
	try:
		return await _service.update_administrator(actor, administrator_id, payload)
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.delete(
	"/administrators/{administrator_id}",
	status_code=status.HTTP_204_NO_CONTENT,
	response_class=Response,
	response_model=None,
)
async def erase_administrator_endpoint(
	administrator_id: UUID,
	actor: AuthenticatedActor = Depends(administrator_actor),
) -> None:
	try:
		await _service.erase_administrator(actor, administrator_id)
		return None
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.patch("/moderators", response_model=Page[auth_dto.ModeratorResponse])
async def index_moderators_endpoint(
	payload: dto.ModeratorSearchRequest,
	actor: AuthenticatedActor = Depends(administrator_actor),
) -> Page[auth_dto.ModeratorResponse]:
	try:
		return await _service.list_moderators(payload)
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.get("/moderators/{moderator_id}", response_model=auth_dto.ModeratorResponse)
async def get_moderator_endpoint(
	moderator_id: UUID,
	actor: AuthenticatedActor = Depends(administrator_actor),
) -> auth_dto.ModeratorResponse:
	try:
		return await _service.get_moderator(moderator_id)
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.put("/moderators/{moderator_id}", response_model=auth_dto.ModeratorResponse)
async def update_moderator_endpoint(
	moderator_id: UUID,
	payload: dto.ModeratorUpdateRequest,
	actor: AuthenticatedActor = Depends(administrator_actor),
) -> auth_dto.ModeratorResponse:
	try:
		return await _service.update_moderator(actor, moderator_id, payload)
	except BoardError as exc:
		raise to_http_error(exc) from exc
