"""Comments, comment edit histories and comment deletion logs."""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from discuss_board.api.pagination import Page, build_page
from discuss_board.board.domain import models, policies
from discuss_board.board.domain import repo as repo_module
from discuss_board.board.domain.audit_service import AuditService
from discuss_board.board.domain.catalog_service import CatalogService
from discuss_board.board.domain.exceptions import NotFoundError, ValidationError
from discuss_board.board.domain.notifications_service import COMMENT_CREATED, NotificationService
from discuss_board.board.schemas import comments as dto
from discuss_board.infra.auth import AuthenticatedActor
from discuss_board.infra.store import contains, eq
from discuss_board.obs import logging as obs_logging
from discuss_board.obs import metrics as obs_metrics
from discuss_board.settings import settings

_LOG = obs_logging.get_logger(__name__)

# thread levels, so depths run from 0 to MAX_DEPTH - 1
MAX_DEPTH = 8


class CommentsService:
	def __init__(self, *, repository: repo_module.BoardRepository | None = None) -> None:
		self.repo = repository or repo_module.BoardRepository()
		self.catalog = CatalogService(repository=self.repo)
		self.audit = AuditService(repository=self.repo)
		self.notifications = NotificationService(repository=self.repo)

	async def _comment_on_post(self, post_id: UUID, comment_id: UUID, *, include_deleted: bool = False) -> models.Comment:
		comment = await self.repo.comments.require(comment_id, include_deleted=include_deleted)
		if comment.post_id != post_id:
			raise NotFoundError("comment_not_found")
		return comment

	async def list_comments(self, post_id: UUID, request: dto.CommentSearchRequest) -> Page[dto.CommentResponse]:
		await self.repo.posts.require(post_id)
		conditions = [eq("post_id", post_id), *repo_module.created_between(request.created_from, request.created_to)]
		if request.author_member_id:
			conditions.append(eq("author_member_id", request.author_member_id))
		if request.parent_id:
			conditions.append(eq("parent_id", request.parent_id))
		if request.keyword:
			conditions.append(contains("content", request.keyword))
		items, records = await self.repo.comments.page(conditions, request)
		return build_page([dto.CommentResponse.model_validate(item) for item in items], request=request, records=records)

	async def get_comment(self, post_id: UUID, comment_id: UUID) -> dto.CommentResponse:
		await self.repo.posts.require(post_id)
		return dto.CommentResponse.model_validate(await self._comment_on_post(post_id, comment_id))

	async def create_comment(
		self,
		actor: AuthenticatedActor,
		post_id: UUID,
		payload: dto.CommentCreateRequest,
	) -> dto.CommentResponse:
		post = await self.repo.posts.require(post_id)
		policies.ensure_post_open(post)
		depth = 0
		if payload.parent_id is not None:
			parent = await self.repo.comments.get(payload.parent_id)
			if parent is None or parent.post_id != post_id:
				raise NotFoundError("parent_not_found")
			depth = parent.depth + 1
			if depth >= MAX_DEPTH:
				raise ValidationError("max_depth_exceeded")
		policies.ensure_clean_text((payload.content,), await self.catalog.active_expressions())
		async with self.repo.transaction():
			comment = await self.repo.comments.insert(
				post_id=post_id,
				author_member_id=actor.member_id,
				parent_id=payload.parent_id,
				content=payload.content,
				depth=depth,
				is_locked=False,
			)
			if post.author_member_id != actor.member_id:
				await self.notifications.notify(
					post.author_member_id,
					COMMENT_CREATED,
					"New comment on your post",
					f"Someone commented on \"{post.title[:80]}\".",
					related_entity_id=comment.id,
				)
		obs_metrics.inc_comments_created()
		_LOG.info("comment_created", extra={"comment_id": str(comment.id), "post_id": str(post_id)})
		return dto.CommentResponse.model_validate(comment)

	async def update_own_comment(
		self,
		actor: AuthenticatedActor,
		post_id: UUID,
		comment_id: UUID,
		payload: dto.CommentUpdateRequest,
	) -> dto.CommentResponse:
		comment = await self._comment_on_post(post_id, comment_id)
		policies.ensure_owner(actor.member_id, comment.author_member_id)
		policies.ensure_comment_open(comment)
		policies.ensure_edit_window(comment.created_at, repo_module.utcnow(), minutes=settings.edit_window_minutes)
		policies.ensure_clean_text((payload.content,), await self.catalog.active_expressions())
		if payload.content == comment.content:
			return dto.CommentResponse.model_validate(comment)
		async with self.repo.transaction():
			await self.repo.comment_edit_histories.insert(
				comment_id=comment.id,
				editor_member_id=actor.member_id,
				previous_content=comment.content,
			)
			comment = await self.repo.comments.update(comment.id, content=payload.content)
		return dto.CommentResponse.model_validate(comment)

	async def _erase(self, actor: AuthenticatedActor, comment: models.Comment, reason: str) -> None:
		async with self.repo.transaction():
			await self.repo.comments.soft_delete(comment.id)
			await self.repo.comment_deletion_logs.insert(
				comment_id=comment.id,
				deleted_by_member_id=actor.member_id,
				actor_role=actor.role,
				deletion_reason=reason,
			)

	async def erase_own_comment(self, actor: AuthenticatedActor, post_id: UUID, comment_id: UUID) -> None:
		comment = await self._comment_on_post(post_id, comment_id)
		policies.ensure_owner(actor.member_id, comment.author_member_id)
		policies.ensure_edit_window(comment.created_at, repo_module.utcnow(), minutes=settings.edit_window_minutes)
		await self._erase(actor, comment, "author")

	async def moderate_erase_comment(
		self,
		actor: AuthenticatedActor,
		post_id: UUID,
		comment_id: UUID,
		reason: Optional[str] = None,
	) -> None:
		comment = await self._comment_on_post(post_id, comment_id)
		await self._erase(actor, comment, reason or "moderation")
		await self.audit.record(actor, "comment_removed", "comment", comment_id, reason)

	async def _readable_comment(self, actor: AuthenticatedActor, post_id: UUID, comment_id: UUID) -> models.Comment:
		comment = await self._comment_on_post(post_id, comment_id, include_deleted=True)
		if not actor.is_staff:
			policies.ensure_owner(actor.member_id, comment.author_member_id)
		return comment

	async def list_edit_histories(
		self,
		actor: AuthenticatedActor,
		post_id: UUID,
		comment_id: UUID,
		request: dto.CommentEditHistorySearchRequest,
	) -> Page[dto.CommentEditHistoryResponse]:
		await self._readable_comment(actor, post_id, comment_id)
		conditions = [eq("comment_id", comment_id), *repo_module.created_between(request.created_from, request.created_to)]
		items, records = await self.repo.comment_edit_histories.page(conditions, request)
		return build_page([dto.CommentEditHistoryResponse.model_validate(item) for item in items], request=request, records=records)

	async def get_edit_history(
		self,
		actor: AuthenticatedActor,
		post_id: UUID,
		comment_id: UUID,
		history_id: UUID,
	) -> dto.CommentEditHistoryResponse:
		await self._readable_comment(actor, post_id, comment_id)
		history = await self.repo.comment_edit_histories.require(history_id)
		if history.comment_id != comment_id:
			raise NotFoundError("edit_history_not_found")
		return dto.CommentEditHistoryResponse.model_validate(history)

	async def list_deletion_logs(
		self,
		post_id: UUID,
		comment_id: UUID,
		request: dto.CommentDeletionLogSearchRequest,
	) -> Page[dto.CommentDeletionLogResponse]:
		await self._comment_on_post(post_id, comment_id, include_deleted=True)
		conditions = [eq("comment_id", comment_id)]
		if request.actor_role:
			conditions.append(eq("actor_role", request.actor_role))
		items, records = await self.repo.comment_deletion_logs.page(conditions, request)
		return build_page([dto.CommentDeletionLogResponse.model_validate(item) for item in items], request=request, records=records)

	async def get_deletion_log(
		self,
		actor: AuthenticatedActor,
		post_id: UUID,
		comment_id: UUID,
		log_id: UUID,
	) -> dto.CommentDeletionLogResponse:
		await self._readable_comment(actor, post_id, comment_id)
		log = await self.repo.comment_deletion_logs.require(log_id)
		if log.comment_id != comment_id:
			raise NotFoundError("deletion_log_not_found")
		return dto.CommentDeletionLogResponse.model_validate(log)


__all__ = ["CommentsService"]
