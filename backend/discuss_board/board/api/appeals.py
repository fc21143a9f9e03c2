"""Appeal routes for members, moderators and administrators."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from discuss_board.api.pagination import Page
from discuss_board.board.api._errors import to_http_error
from discuss_board.board.api.deps import administrator_actor, member_actor, moderator_actor
from discuss_board.board.domain.appeals_service import AppealsService
from discuss_board.board.domain.exceptions import BoardError
from discuss_board.board.schemas import appeals as dto
from discuss_board.infra.auth import AuthenticatedActor

router = APIRouter(prefix="/discussBoard", tags=["appeals"])
_service = AppealsService()


@router.post("/member/appeals", response_model=dto.AppealResponse, status_code=status.HTTP_201_CREATED)
async def create_appeal_endpoint(
	payload: dto.AppealCreateRequest,
	actor: AuthenticatedActor = Depends(member_actor),
) -> dto.AppealResponse:
	try:
		return await _service.create_appeal(actor, payload)
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.get("/member/appeals/{appeal_id}", response_model=dto.AppealResponse)
async def get_own_appeal_endpoint(
	appeal_id: UUID,
	actor: AuthenticatedActor = Depends(member_actor),
) -> dto.AppealResponse:
	try:
		return await _service.get_own_appeal(actor, appeal_id)
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.put("/member/appeals/{appeal_id}", response_model=dto.AppealResponse)
async def update_own_appeal_endpoint(
	appeal_id: UUID,
	payload: dto.AppealUpdateRequest,
	actor: AuthenticatedActor = Depends(member_actor),
) -> dto.AppealResponse:
	try:
		return await _service.update_own_appeal(actor, appeal_id, payload)
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.patch("/moderator/appeals", response_model=Page[dto.AppealResponse])
async def index_appeals_endpoint(
	payload: dto.AppealSearchRequest,
	actor: AuthenticatedActor = Depends(moderator_actor),
) -> Page[dto.AppealResponse]:
	try:
		return await _service.list_appeals(payload)
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.get("/moderator/appeals/{appeal_id}", response_model=dto.AppealResponse)
async def get_appeal_endpoint(
	appeal_id: UUID,
	actor: AuthenticatedActor = Depends(moderator_actor),
) -> dto.AppealResponse:
	try:
		return await _service.get_appeal(appeal_id)
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.put("/moderator/appeals/{appeal_id}", response_model=dto.AppealResponse)
async def review_appeal_endpoint(
	appeal_id: UUID,
	payload: dto.AppealReviewRequest,
	actor: AuthenticatedActor = Depends(moderator_actor),
) -> dto.AppealResponse:
	try:
		return await _service.review_appeal(actor, appeal_id, payload)
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.delete(
	"/administrator/appeals/{appeal_id}",
	status_code=status.HTTP_204_NO_CONTENT,
	response_class=Response,
	response_model=None,
)
async def erase_appeal_endpoint(
	appeal_id: UUID,
	actor: AuthenticatedActor = Depends(administrator_actor),
) -> None:
	try:
		await _service.erase_appeal(actor, appeal_id)
		return None
	except BoardError as exc:
		raise to_http_error(exc) from exc
