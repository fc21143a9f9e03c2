"""Comment, comment edit history and deletion log routes."""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from discuss_board.api.pagination import Page
from discuss_board.board.api._errors import to_http_error
from discuss_board.board.api.deps import member_actor, moderator_actor
from discuss_board.board.domain.comments_service import CommentsService
from discuss_board.board.domain.exceptions import BoardError
from discuss_board.board.schemas import comments as dto
from discuss_board.infra.auth import AuthenticatedActor

router = APIRouter(prefix="/discussBoard", tags=["comments"])
_service = CommentsService()


@router.patch("/posts/{post_id}/comments", response_model=Page[dto.CommentResponse])
async def index_comments_endpoint(post_id: UUID, payload: dto.CommentSearchRequest) -> Page[dto.CommentResponse]:
	try:
		return await _service.list_comments(post_id, payload)
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.get("/posts/{post_id}/comments/{comment_id}", response_model=dto.CommentResponse)
async def get_comment_endpoint(post_id: UUID, comment_id: UUID) -> dto.CommentResponse:
	try:
		return await _service.get_comment(post_id, comment_id)
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.post("/member/posts/{post_id}/comments", response_model=dto.CommentResponse, status_code=status.HTTP_201_CREATED)
async def create_comment_endpoint(
	post_id: UUID,
	payload: dto.CommentCreateRequest,
	actor: AuthenticatedActor = Depends(member_actor),
) -> dto.CommentResponse:
	try:
		return await _service.create_comment(actor, post_id, payload)
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.put("/member/posts/{post_id}/comments/{comment_id}", response_model=dto.CommentResponse)
async def update_comment_endpoint(
	post_id: UUID,
	comment_id: UUID,
	payload: dto.CommentUpdateRequest,
	actor: AuthenticatedActor = Depends(member_actor),
) -> dto.CommentResponse:
	try:
		return await _service.update_own_comment(actor, post_id, comment_id, payload)
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.delete(
	"/member/posts/{post_id}/comments/{comment_id}",
	status_code=status.HTTP_204_NO_CONTENT,
	response_class=Response,
	response_model=None,
)
async def erase_comment_endpoint(
	post_id: UUID,
	comment_id: UUID,
	actor: AuthenticatedActor = Depends(member_actor),
) -> None:
	try:
		await _service.erase_own_comment(actor, post_id, comment_id)
		return None
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.delete(
	"/moderator/posts/{post_id}/comments/{comment_id}",
	status_code=status.HTTP_204_NO_CONTENT,
	response_class=Response,
	response_model=None,
)
async def moderate_erase_comment_endpoint(
	post_id: UUID,
	comment_id: UUID,
	reason: Optional[str] = Query(default=None, max_length=500),
	actor: AuthenticatedActor = Depends(moderator_actor),
) -> None:
	try:
		await _service.moderate_erase_comment(actor, post_id, comment_id, reason)
		return None
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.patch(
	"/member/posts/{post_id}/comments/{comment_id}/editHistories",
	response_model=Page[dto.CommentEditHistoryResponse],
)
async def index_comment_edit_histories_endpoint(
	post_id: UUID,
	comment_id: UUID,
	payload: dto.CommentEditHistorySearchRequest,
	actor: AuthenticatedActor = Depends(member_actor),
) -> Page[dto.CommentEditHistoryResponse]:
	try:
		return await _service.list_edit_histories(actor, post_id, comment_id, payload)
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.get(
	"/member/posts/{post_id}/comments/{comment_id}/editHistories/{history_id}",
	response_model=dto.CommentEditHistoryResponse,
)
async def get_comment_edit_history_endpoint(
	post_id: UUID,
	comment_id: UUID,
	history_id: UUID,
	actor: AuthenticatedActor = Depends(member_actor),
) -> dto.CommentEditHistoryResponse:
	try:
		return await _service.get_edit_history(actor, post_id, comment_id, history_id)
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.patch(
	"/moderator/posts/{post_id}/comments/{comment_id}/deletionLogs",
	response_model=Page[dto.CommentDeletionLogResponse],
)
async def index_deletion_logs_endpoint(
	post_id: UUID,
	comment_id: UUID,
	payload: dto.CommentDeletionLogSearchRequest,
	actor: AuthenticatedActor = Depends(moderator_actor),
) -> Page[dto.CommentDeletionLogResponse]:
	try:
		return await _service.list_deletion_logs(post_id, comment_id, payload)
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.get(
	"/member/posts/{post_id}/comments/{comment_id}/deletionLogs/{log_id}",
	response_model=dto.CommentDeletionLogResponse,
)
async def get_deletion_log_endpoint(
	post_id: UUID,
	comment_id: UUID,
	log_id: UUID,
	actor: AuthenticatedActor = Depends(member_actor),
) -> dto.CommentDeletionLogResponse:
	try:
		return await _service.get_deletion_log(actor, post_id, comment_id, log_id)
	except BoardError as exc:
		raise to_http_error(exc) from exc
