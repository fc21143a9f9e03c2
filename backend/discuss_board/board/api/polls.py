"""Poll and poll vote routes."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from discuss_board.api.pagination import Page
from discuss_board.board.api._errors import to_http_error
from discuss_board.board.api.deps import member_actor
from discuss_board.board.domain.exceptions import BoardError
from discuss_board.board.domain.polls_service import PollsService
from discuss_board.board.schemas import polls as dto
from discuss_board.infra.auth import AuthenticatedActor

router = APIRouter(prefix="/discussBoard", tags=["polls"])
_service = PollsService()


@router.post("/member/posts/{post_id}/polls", response_model=dto.PollResponse, status_code=status.HTTP_201_CREATED)
async def create_poll_endpoint(
	post_id: UUID,
	payload: dto.PollCreateRequest,
	actor: AuthenticatedActor = Depends(member_actor),
) -> dto.PollResponse:
	try:
		return await _service.create_poll(actor, post_id, payload)
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.patch("/posts/{post_id}/polls", response_model=Page[dto.PollSummary])
async def index_polls_endpoint(post_id: UUID, payload: dto.PollSearchRequest) -> Page[dto.PollSummary]:
	try:
		return await _service.list_polls(post_id, payload)
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.get("/posts/{post_id}/polls/{poll_id}", response_model=dto.PollResponse)
async def get_poll_endpoint(post_id: UUID, poll_id: UUID) -> dto.PollResponse:
	try:
		return await _service.get_poll(post_id, poll_id)
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.put("/member/posts/{post_id}/polls/{poll_id}", response_model=dto.PollResponse)
async def update_poll_endpoint(
	post_id: UUID,
	poll_id: UUID,
	payload: dto.PollUpdateRequest,
	actor: AuthenticatedActor = Depends(member_actor),
) -> dto.PollResponse:
	try:
		return await _service.update_poll(actor, post_id, poll_id, payload)
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.post(
	"/member/posts/{post_id}/polls/{poll_id}/votes",
	response_model=list[dto.PollVoteResponse],
	status_code=status.HTTP_201_CREATED,
)
async def vote_endpoint(
	post_id: UUID,
	poll_id: UUID,
	payload: dto.PollVoteCreateRequest,
	actor: AuthenticatedActor = Depends(member_actor),
) -> list[dto.PollVoteResponse]:
	try:
		return await _service.vote(actor, post_id, poll_id, payload)
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.patch("/member/posts/{post_id}/polls/{poll_id}/votes", response_model=Page[dto.PollVoteResponse])
async def index_votes_endpoint(
	post_id: UUID,
	poll_id: UUID,
	payload: dto.PollVoteSearchRequest,
	actor: AuthenticatedActor = Depends(member_actor),
) -> Page[dto.PollVoteResponse]:
	try:
		return await _service.list_own_votes(actor, post_id, poll_id, payload)
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.delete(
	"/member/posts/{post_id}/polls/{poll_id}/votes",
	status_code=status.HTTP_204_NO_CONTENT,
	response_class=Response,
	response_model=None,
)
async def retract_votes_endpoint(
	post_id: UUID,
	poll_id: UUID,
	actor: AuthenticatedActor = Depends(member_actor),
) -> None:
	try:
		await _service.retract_votes(actor, post_id, poll_id)
		return None
	except BoardError as exc:
		raise to_http_error(exc) from exc
