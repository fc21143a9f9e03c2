"""Post and comment reaction routes."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from discuss_board.api.pagination import Page
from discuss_board.board.api._errors import to_http_error
from discuss_board.board.api.deps import member_actor
from discuss_board.board.domain.exceptions import BoardError
from discuss_board.board.domain.reactions_service import ReactionsService
from discuss_board.board.schemas import reactions as dto
from discuss_board.infra.auth import AuthenticatedActor

router = APIRouter(prefix="/discussBoard/member", tags=["reactions"])
_service = ReactionsService()


@router.post("/postReactions", response_model=dto.PostReactionResponse, status_code=status.HTTP_201_CREATED)
async def create_post_reaction_endpoint(
	payload: dto.PostReactionCreateRequest,
	actor: AuthenticatedActor = Depends(member_actor),
) -> dto.PostReactionResponse:
	try:
		return await _service.create_post_reaction(actor, payload)
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.patch("/postReactions", response_model=Page[dto.PostReactionResponse])
async def index_post_reactions_endpoint(
	payload: dto.PostReactionSearchRequest,
	actor: AuthenticatedActor = Depends(member_actor),
) -> Page[dto.PostReactionResponse]:
	try:
		return await _service.list_post_reactions(actor, payload)
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.get("/postReactions/{reaction_id}", response_model=dto.PostReactionResponse)
async def get_post_reaction_endpoint(
	reaction_id: UUID,
	actor: AuthenticatedActor = Depends(member_actor),
) -> dto.PostReactionResponse:
	try:
		return await _service.get_post_reaction(actor, reaction_id)
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.put("/postReactions/{reaction_id}", response_model=dto.PostReactionResponse)
async def update_post_reaction_endpoint(
	reaction_id: UUID,
	payload: dto.ReactionUpdateRequest,
	actor: AuthenticatedActor = Depends(member_actor),
) -> dto.PostReactionResponse:
	try:
		return await _service.update_post_reaction(actor, reaction_id, payload)
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.delete(
	"/postReactions/{reaction_id}",
	status_code=status.HTTP_204_NO_CONTENT,
	response_class=Response,
	response_model=None,
)
async def erase_post_reaction_endpoint(
	reaction_id: UUID,
	actor: AuthenticatedActor = Depends(member_actor),
) -> None:
	try:
		await _service.erase_post_reaction(actor, reaction_id)
		return None
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.post("/commentReactions", response_model=dto.CommentReactionResponse, status_code=status.HTTP_201_CREATED)
async def create_comment_reaction_endpoint(
	payload: dto.CommentReactionCreateRequest,
	actor: AuthenticatedActor = Depends(member_actor),
) -> dto.CommentReactionResponse:
	try:
		return await _service.create_comment_reaction(actor, payload)
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.patch("/commentReactions", response_model=Page[dto.CommentReactionResponse])
async def index_comment_reactions_endpoint(
	payload: dto.CommentReactionSearchRequest,
	actor: AuthenticatedActor = Depends(member_actor),
) -> Page[dto.CommentReactionResponse]:
	try:
		return await _service.list_comment_reactions(actor, payload)
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.get("/commentReactions/{reaction_id}", response_model=dto.CommentReactionResponse)
async def get_comment_reaction_endpoint(
	reaction_id: UUID,
	actor: AuthenticatedActor = Depends(member_actor),
) -> dto.CommentReactionResponse:
	try:
		return await _service.get_comment_reaction(actor, reaction_id)
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.put("/commentReactions/{reaction_id}", response_model=dto.CommentReactionResponse)
async def update_comment_reaction_endpoint(
	reaction_id: UUID,
	payload: dto.ReactionUpdateRequest,
	actor: AuthenticatedActor = Depends(member_actor),
) -> dto.CommentReactionResponse:
	try:
		return await _service.update_comment_reaction(actor, reaction_id, payload)
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.delete(
	"/commentReactions/{reaction_id}",
	status_code=status.HTTP_204_NO_CONTENT,
	response_class=Response,
	response_model=None,
)
async def erase_comment_reaction_endpoint(
	reaction_id: UUID,
	actor: AuthenticatedActor = Depends(member_actor),
) -> None:
	try:
		await _service.erase_comment_reaction(actor, reaction_id)
		return None
	except BoardError as exc:
		raise to_http_error(exc) from exc
