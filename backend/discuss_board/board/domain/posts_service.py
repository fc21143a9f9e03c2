"""Posts, post tags and post edit histories."""

from __future__ import annotations

from uuid import UUID

from discuss_board.api.pagination import Page, build_page
from discuss_board.board.domain import models, policies
from discuss_board.board.domain import repo as repo_module
from discuss_board.board.domain.audit_service import AuditService
from discuss_board.board.domain.catalog_service import CatalogService
from discuss_board.board.domain.exceptions import ConflictError, ForbiddenError, NotFoundError
from discuss_board.board.schemas import posts as dto
from discuss_board.infra.auth import AuthenticatedActor
from discuss_board.infra.store import eq, one_of, search
from discuss_board.obs import logging as obs_logging
from discuss_board.obs import metrics as obs_metrics
from discuss_board.settings import settings

_LOG = obs_logging.get_logger(__name__)

_MEMBER_STATUSES = frozenset({"public", "limited"})


class PostsService:
	def __init__(self, *, repository: repo_module.BoardRepository | None = None) -> None:
		self.repo = repository or repo_module.BoardRepository()
		self.catalog = CatalogService(repository=self.repo)
		self.audit = AuditService(repository=self.repo)

	@staticmethod
	def _to_response(post: models.Post) -> dto.PostResponse:
		return dto.PostResponse.model_validate(post)

	async def list_posts(self, request: dto.PostSearchRequest) -> Page[dto.PostSummary]:
		conditions = repo_module.created_between(request.created_from, request.created_to)
		if request.author_member_id:
			conditions.append(eq("author_member_id", request.author_member_id))
		if request.business_status:
			conditions.append(eq("business_status", request.business_status))
		if request.keyword:
			conditions.append(search(("title", "body"), request.keyword))
		if request.tag_id:
			tagged = await self.repo.post_tags.find(eq("tag_id", request.tag_id))
			conditions.append(one_of("id", [tag.post_id for tag in tagged]))
		items, records = await self.repo.posts.page(conditions, request)
		return build_page([dto.PostSummary.model_validate(item) for item in items], request=request, records=records)

	async def get_post(self, post_id: UUID) -> dto.PostResponse:
		return self._to_response(await self.repo.posts.require(post_id))

	async def create_post(self, actor: AuthenticatedActor, payload: dto.PostCreateRequest) -> dto.PostResponse:
		policies.ensure_clean_text((payload.title, payload.body), await self.catalog.active_expressions())
		post = await self.repo.posts.insert(
			author_member_id=actor.member_id,
			title=payload.title,
			body=payload.body,
			business_status=payload.business_status,
		)
		obs_metrics.inc_posts_created()
		_LOG.info("post_created", extra={"post_id": str(post.id)})
		return self._to_response(post)

	async def _apply_update(self, actor: AuthenticatedActor, post: models.Post, payload: dto.PostUpdateRequest) -> models.Post:
		changes = payload.model_dump(exclude_none=True, exclude={"edit_reason"})
		if not changes:
			return post
		policies.ensure_clean_text((changes.get("title"), changes.get("body")), await self.catalog.active_expressions())
		text_changed = ("title" in changes and changes["title"] != post.title) or ("body" in changes and changes["body"] != post.body)
		async with self.repo.transaction():
			if text_changed:
				await self.repo.post_edit_histories.insert(
					post_id=post.id,
					editor_member_id=actor.member_id,
					previous_title=post.title,
					previous_body=post.body,
					edit_reason=payload.edit_reason,
				)
			return await self.repo.posts.update(post.id, **changes)

	async def update_own_post(
		self,
		actor: AuthenticatedActor,
		post_id: UUID,
		payload: dto.PostUpdateRequest,
	) -> dto.PostResponse:
		post = await self.repo.posts.require(post_id)
		policies.ensure_owner(actor.member_id, post.author_member_id)
		policies.ensure_post_open(post)
		policies.ensure_edit_window(post.created_at, repo_module.utcnow(), minutes=settings.edit_window_minutes)
		if payload.business_status is not None and payload.business_status not in _MEMBER_STATUSES:
			raise ForbiddenError("status_requires_moderator")
		return self._to_response(await self._apply_update(actor, post, payload))

	async def moderate_post(
		self,
		actor: AuthenticatedActor,
		post_id: UUID,
		payload: dto.PostUpdateRequest,
	) -> dto.PostResponse:
		post = await self.repo.posts.require(post_id)
		updated = await self._apply_update(actor, post, payload)
		await self.audit.record(actor, "post_updated", "post", post_id, payload.edit_reason)
		return self._to_response(updated)

	async def erase_own_post(self, actor: AuthenticatedActor, post_id: UUID) -> None:
		post = await self.repo.posts.require(post_id)
		policies.ensure_owner(actor.member_id, post.author_member_id)
		policies.ensure_edit_window(post.created_at, repo_module.utcnow(), minutes=settings.edit_window_minutes)
		await self.repo.posts.soft_delete(post_id)

	async def moderate_erase_post(self, actor: AuthenticatedActor, post_id: UUID) -> None:
		await self.repo.posts.require(post_id)
		async with self.repo.transaction():
			await self.repo.posts.soft_delete(post_id)
			await self.audit.record(actor, "post_removed", "post", post_id)

	async def list_tags(self, post_id: UUID, request: dto.PostTagSearchRequest) -> Page[dto.PostTagResponse]:
		await self.repo.posts.require(post_id)
		items, records = await self.repo.post_tags.page([eq("post_id", post_id)], request)
		return build_page([dto.PostTagResponse.model_validate(item) for item in items], request=request, records=records)

	async def add_tag(
		self,
		actor: AuthenticatedActor,
		post_id: UUID,
		payload: dto.PostTagCreateRequest,
		*,
		as_staff: bool = False,
	) -> dto.PostTagResponse:
		post = await self.repo.posts.require(post_id)
		if not as_staff:
			policies.ensure_owner(actor.member_id, post.author_member_id)
		if await self.repo.post_tags.find_one(eq("post_id", post_id), eq("tag_id", payload.tag_id)) is not None:
			raise ConflictError("tag_already_assigned")
		assigned = await self.repo.post_tags.count(eq("post_id", post_id))
		policies.ensure_tag_capacity(assigned, limit=settings.max_tags_per_post)
		tag = await self.repo.post_tags.insert(post_id=post_id, tag_id=payload.tag_id)
		return dto.PostTagResponse.model_validate(tag)

	async def remove_tag(
		self,
		actor: AuthenticatedActor,
		post_id: UUID,
		tag_id: UUID,
		*,
		as_staff: bool = False,
	) -> None:
		post = await self.repo.posts.require(post_id)
		if not as_staff:
			policies.ensure_owner(actor.member_id, post.author_member_id)
		assignment = await self.repo.post_tags.find_one(eq("post_id", post_id), eq("tag_id", tag_id))
		if assignment is None:
			raise NotFoundError("post_tag_not_found")
		await self.repo.post_tags.delete(assignment.id)

	async def _readable_history_post(self, actor: AuthenticatedActor, post_id: UUID) -> models.Post:
		post = await self.repo.posts.require(post_id, include_deleted=actor.is_staff)
		if not actor.is_staff:
			policies.ensure_owner(actor.member_id, post.author_member_id)
		return post

	async def list_edit_histories(
		self,
		actor: AuthenticatedActor,
		post_id: UUID,
		request: dto.PostEditHistorySearchRequest,
	) -> Page[dto.PostEditHistoryResponse]:
		await self._readable_history_post(actor, post_id)
		conditions = [eq("post_id", post_id), *repo_module.created_between(request.created_from, request.created_to)]
		if request.editor_member_id:
			conditions.append(eq("editor_member_id", request.editor_member_id))
		items, records = await self.repo.post_edit_histories.page(conditions, request)
		return build_page([dto.PostEditHistoryResponse.model_validate(item) for item in items], request=request, records=records)

	async def get_edit_history(self, actor: AuthenticatedActor, post_id: UUID, history_id: UUID) -> dto.PostEditHistoryResponse:
		await self._readable_history_post(actor, post_id)
		history = await self.repo.post_edit_histories.require(history_id)
		if history.post_id != post_id:
			raise NotFoundError("edit_history_not_found")
		return dto.PostEditHistoryResponse.model_validate(history)


__all__ = ["PostsService"]
