"""Join, login and token refresh routes for every role."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request, status

from discuss_board.board.api._errors import to_http_error
from discuss_board.board.api.deps import administrator_actor, client_meta
from discuss_board.board.domain.auth_service import AuthService
from discuss_board.board.domain.exceptions import BoardError
from discuss_board.board.schemas import auth as dto
from discuss_board.infra.auth import AuthenticatedActor

router = APIRouter(prefix="/auth", tags=["auth"])
_service = AuthService()


@router.post("/member/join", response_model=dto.MemberAuthorized, status_code=status.HTTP_201_CREATED)
async def member_join_endpoint(payload: dto.MemberJoinRequest, request: Request) -> dto.MemberAuthorized:
	try:
		return await _service.member_join(payload, **client_meta(request))
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.post("/member/login", response_model=dto.MemberAuthorized)
async def member_login_endpoint(payload: dto.LoginRequest, request: Request) -> dto.MemberAuthorized:
	try:
		return await _service.member_login(payload, **client_meta(request))
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.post("/member/refresh", response_model=dto.MemberAuthorized)
async def member_refresh_endpoint(payload: dto.RefreshRequest) -> dto.MemberAuthorized:
	try:
		return await _service.member_refresh(payload)
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.post("/administrator/join", response_model=dto.AdministratorAuthorized, status_code=status.HTTP_201_CREATED)
async def administrator_join_endpoint(payload: dto.AdministratorJoinRequest, request: Request) -> dto.AdministratorAuthorized:
	try:
		return await _service.administrator_join(payload, **client_meta(request))
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.post("/administrator/login", response_model=dto.AdministratorAuthorized)
async def administrator_login_endpoint(payload: dto.LoginRequest, request: Request) -> dto.AdministratorAuthorized:
	try:
		return await _service.administrator_login(payload, **client_meta(request))
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.post("/administrator/refresh", response_model=dto.AdministratorAuthorized)
async def administrator_refresh_endpoint(payload: dto.RefreshRequest) -> dto.AdministratorAuthorized:
	try:
		return await _service.administrator_refresh(payload)
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.post("/moderator/join", response_model=dto.ModeratorResponse, status_code=status.HTTP_201_CREATED)
async def moderator_join_endpoint(
	payload: dto.ModeratorAppointRequest,
	actor: AuthenticatedActor = Depends(administrator_actor),
) -> dto.ModeratorResponse:
	try:
		return await _service.appoint_moderator(actor, payload)
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.post("/moderator/login", response_model=dto.ModeratorAuthorized)
async def moderator_login_endpoint(payload: dto.LoginRequest, request: Request) -> dto.ModeratorAuthorized:
	try:
		return await _service.moderator_login(payload, **client_meta(request))
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.post("/moderator/refresh", response_model=dto.ModeratorAuthorized)
async def moderator_refresh_endpoint(payload: dto.RefreshRequest) -> dto.ModeratorAuthorized:
	try:
		return await _service.moderator_refresh(payload)
	except BoardError as exc:
		raise to_http_error(exc) from exc
