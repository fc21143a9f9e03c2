"""Like/dislike reactions on posts and comments.

A member holds at most one reaction per target. Erasing soft-deletes the row.
Reacting again later revives the same row.
"""

from __future__ import annotations

from typing import Any
from uuid import UUID

from discuss_board.api.pagination import Page, build_page
from discuss_board.board.domain import policies
from discuss_board.board.domain import repo as repo_module
from discuss_board.board.domain.exceptions import ConflictError, ForbiddenError
from discuss_board.board.schemas import reactions as dto
from discuss_board.infra.auth import AuthenticatedActor
from discuss_board.infra.store import eq
from discuss_board.obs import metrics as obs_metrics


class ReactionsService:
	def __init__(self, *, repository: repo_module.BoardRepository | None = None) -> None:
		self.repo = repository or repo_module.BoardRepository()

	async def _upsert(self, table: repo_module.Table, actor: AuthenticatedActor, column: str, target_id: UUID, reaction_type: str) -> Any:
		existing = await table.find_one(eq("member_id", actor.member_id), eq(column, target_id), include_deleted=True)
		if existing is not None and existing.deleted_at is None:
			raise ConflictError("duplicate_reaction")
		if existing is not None:
			return await table.update(existing.id, reaction_type=reaction_type, deleted_at=None)
		return await table.insert(member_id=actor.member_id, reaction_type=reaction_type, **{column: target_id})

	async def _owned(self, table: repo_module.Table, actor: AuthenticatedActor, reaction_id: UUID) -> Any:
		reaction = await table.require(reaction_id)
		if reaction.member_id != actor.member_id:
			raise ForbiddenError("not_owner")
		return reaction

	async def create_post_reaction(
		self,
		actor: AuthenticatedActor,
		payload: dto.PostReactionCreateRequest,
	) -> dto.PostReactionResponse:
		post = await self.repo.posts.require(payload.post_id)
		policies.ensure_not_self(actor.member_id, post.author_member_id)
		reaction = await self._upsert(self.repo.post_reactions, actor, "post_id", post.id, payload.reaction_type)
		obs_metrics.inc_reaction("post", payload.reaction_type)
		return dto.PostReactionResponse.model_validate(reaction)

	async def list_post_reactions(
		self,
		actor: AuthenticatedActor,
		request: dto.PostReactionSearchRequest,
	) -> Page[dto.PostReactionResponse]:
		conditions = [eq("member_id", actor.member_id)]
		if request.post_id:
			conditions.append(eq("post_id", request.post_id))
		if request.reaction_type:
			conditions.append(eq("reaction_type", request.reaction_type))
		items, records = await self.repo.post_reactions.page(conditions, request)
		return build_page([dto.PostReactionResponse.model_validate(item) for item in items], request=request, records=records)

	async def get_post_reaction(self, actor: AuthenticatedActor, reaction_id: UUID) -> dto.PostReactionResponse:
		return dto.PostReactionResponse.model_validate(await self._owned(self.repo.post_reactions, actor, reaction_id))

	async def update_post_reaction(
		self,
		actor: AuthenticatedActor,
		reaction_id: UUID,
		payload: dto.ReactionUpdateRequest,
	) -> dto.PostReactionResponse:
		await self._owned(self.repo.post_reactions, actor, reaction_id)
		reaction = await self.repo.post_reactions.update(reaction_id, reaction_type=payload.reaction_type)
		return dto.PostReactionResponse.model_validate(reaction)

	async def erase_post_reaction(self, actor: AuthenticatedActor, reaction_id: UUID) -> None:
		await self._owned(self.repo.post_reactions, actor, reaction_id)
		await self.repo.post_reactions.soft_delete(reaction_id)

	async def create_comment_reaction(
		self,
		actor: AuthenticatedActor,
		payload: dto.CommentReactionCreateRequest,
	) -> dto.CommentReactionResponse:
		comment = await self.repo.comments.require(payload.comment_id)
		policies.ensure_comment_open(comment)
		policies.ensure_not_self(actor.member_id, comment.author_member_id)
		reaction = await self._upsert(self.repo.comment_reactions, actor, "comment_id", comment.id, payload.reaction_type)
		obs_metrics.inc_reaction("comment", payload.reaction_type)
		return dto.CommentReactionResponse.model_validate(reaction)

	async def list_comment_reactions(
		self,
		actor: AuthenticatedActor,
		request: dto.CommentReactionSearchRequest,
	) -> Page[dto.CommentReactionResponse]:
		conditions = [eq("member_id", actor.member_id)]
		if request.comment_id:
			conditions.append(eq("comment_id", request.comment_id))
		if request.reaction_type:
			conditions.append(eq("reaction_type", request.reaction_type))
		items, records = await self.repo.comment_reactions.page(conditions, request)
		return build_page([dto.CommentReactionResponse.model_validate(item) for item in items], request=request, records=records)

	async def get_comment_reaction(self, actor: AuthenticatedActor, reaction_id: UUID) -> dto.CommentReactionResponse:
		return dto.CommentReactionResponse.model_validate(await self._owned(self.repo.comment_reactions, actor, reaction_id))

	async def update_comment_reaction(
		self,
		actor: AuthenticatedActor,
		reaction_id: UUID,
		payload: dto.ReactionUpdateRequest,
	) -> dto.CommentReactionResponse:
		await self._owned(self.repo.comment_reactions, actor, reaction_id)
		reaction = await self.repo.comment_reactions.update(reaction_id, reaction_type=payload.reaction_type)
		return dto.CommentReactionResponse.model_validate(reaction)

	async def erase_comment_reaction(self, actor: AuthenticatedActor, reaction_id: UUID) -> None:
		await self._owned(self.repo.comment_reactions, actor, reaction_id)
		await self.repo.comment_reactions.soft_delete(reaction_id)


__all__ = ["ReactionsService"]
