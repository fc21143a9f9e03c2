"""Post, post tag and post edit history routes."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from discuss_board.api.pagination import Page
from discuss_board.board.api._errors import to_http_error
from discuss_board.board.api.deps import member_actor, moderator_actor
from discuss_board.board.domain.exceptions import BoardError
from discuss_board.board.domain.posts_service import PostsService
from discuss_board.board.schemas import posts as dto
from discuss_board.infra.auth import AuthenticatedActor

router = APIRouter(prefix="/discussBoard", tags=["posts"])
_service = PostsService()


@router.patch("/posts", response_model=Page[dto.PostSummary])
async def index_posts_endpoint(payload: dto.PostSearchRequest) -> Page[dto.PostSummary]:
	try:
		return await _service.list_posts(payload)
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.get("/posts/{post_id}", response_model=dto.PostResponse)
async def get_post_endpoint(post_id: UUID) -> dto.PostResponse:
	try:
		return await _service.get_post(post_id)
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.post("/member/posts", response_model=dto.PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post_endpoint(
	payload: dto.PostCreateRequest,
	actor: AuthenticatedActor = Depends(member_actor),
) -> dto.PostResponse:
	try:
		return await _service.create_post(actor, payload)
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.put("/member/posts/{post_id}", response_model=dto.PostResponse)
async def update_post_endpoint(
	post_id: UUID,
	payload: dto.PostUpdateRequest,
	actor: AuthenticatedActor = Depends(member_actor),
) -> dto.PostResponse:
	try:
		return await _service.update_own_post(actor, post_id, payload)
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.delete(
	"/member/posts/{post_id}",
	status_code=status.HTTP_204_NO_CONTENT,
	response_class=Response,
	response_model=None,
)
async def erase_post_endpoint(
	post_id: UUID,
	actor: AuthenticatedActor = Depends(member_actor),
) -> None:
	try:
		await _service.erase_own_post(actor, post_id)
		return None
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.put("/moderator/posts/{post_id}", response_model=dto.PostResponse)
async def moderate_post_endpoint(
	post_id: UUID,
	payload: dto.PostUpdateRequest,
	actor: AuthenticatedActor = Depends(moderator_actor),
) -> dto.PostResponse:
	try:
		return await _service.moderate_post(actor, post_id, payload)
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.delete(
	"/moderator/posts/{post_id}",
	status_code=status.HTTP_204_NO_CONTENT,
	response_class=Response,
	response_model=None,
)
async def moderate_erase_post_endpoint(
	post_id: UUID,
	actor: AuthenticatedActor = Depends(moderator_actor),
) -> None:
	try:
		await _service.moderate_erase_post(actor, post_id)
		return None
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.patch("/posts/{post_id}/tags", response_model=Page[dto.PostTagResponse])
async def index_tags_endpoint(post_id: UUID, payload: dto.PostTagSearchRequest) -> Page[dto.PostTagResponse]:
	try:
		return await _service.list_tags(post_id, payload)
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.post("/member/posts/{post_id}/tags", response_model=dto.PostTagResponse, status_code=status.HTTP_201_CREATED)
async def add_tag_endpoint(
	post_id: UUID,
	payload: dto.PostTagCreateRequest,
	actor: AuthenticatedActor = Depends(member_actor),
) -> dto.PostTagResponse:
	try:
		return await _service.add_tag(actor, post_id, payload)
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.delete(
	"/member/posts/{post_id}/tags/{tag_id}",
	status_code=status.HTTP_204_NO_CONTENT,
	response_class=Response,
	response_model=None,
)
async def remove_tag_endpoint(
	post_id: UUID,
	tag_id: UUID,
	actor: AuthenticatedActor = Depends(member_actor),
) -> None:
	try:
		await _service.remove_tag(actor, post_id, tag_id)
		return None
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.post("/moderator/posts/{post_id}/tags", response_model=dto.PostTagResponse, status_code=status.HTTP_201_CREATED)
async def moderate_add_tag_endpoint(
	post_id: UUID,
	payload: dto.PostTagCreateRequest,
	actor: AuthenticatedActor = Depends(moderator_actor),
) -> dto.PostTagResponse:
	try:
		return await _service.add_tag(actor, post_id, payload, as_staff=True)
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.delete(
	"/moderator/posts/{post_id}/tags/{tag_id}",
	status_code=status.HTTP_204_NO_CONTENT,
	response_class=Response,
	response_model=None,
)
async def moderate_remove_tag_endpoint(
	post_id: UUID,
	tag_id: UUID,
	actor: AuthenticatedActor = Depends(moderator_actor),
) -> None:
	try:
		await _service.remove_tag(actor, post_id, tag_id, as_staff=True)
		return None
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.patch("/member/posts/{post_id}/editHistories", response_model=Page[dto.PostEditHistoryResponse])
async def index_edit_histories_endpoint(
	post_id: UUID,
	payload: dto.PostEditHistorySearchRequest,
	actor: AuthenticatedActor = Depends(member_actor),
) -> Page[dto.PostEditHistoryResponse]:
	try:
		return await _service.list_edit_histories(actor, post_id, payload)
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.get("/member/posts/{post_id}/editHistories/{history_id}", response_model=dto.PostEditHistoryResponse)
async def get_edit_history_endpoint(
	post_id: UUID,
	history_id: UUID,
	actor: AuthenticatedActor = Depends(member_actor),
) -> dto.PostEditHistoryResponse:
	try:
		return await _service.get_edit_history(actor, post_id, history_id)
	except BoardError as exc:
		raise to_http_error(exc) from exc
