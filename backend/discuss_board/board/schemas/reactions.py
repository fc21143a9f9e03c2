"""DTOs for post and comment reactions."""

from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from discuss_board.api.pagination import PageRequest

ReactionType = Literal["like", "dislike"]


class PostReactionCreateRequest(BaseModel):
	post_id: UUID
	reaction_type: ReactionType


class CommentReactionCreateRequest(BaseModel):
	comment_id: UUID
	reaction_type: ReactionType


class ReactionUpdateRequest(BaseModel):
	reaction_type: ReactionType


class PostReactionSearchRequest(PageRequest):
	post_id: Optional[UUID] = None
	reaction_type: Optional[ReactionType] = None
	sort_by: Optional[Literal["created_at", "updated_at"]] = None


class CommentReactionSearchRequest(PageRequest):
	comment_id: Optional[UUID] = None
	reaction_type: Optional[ReactionType] = None
	sort_by: Optional[Literal["created_at", "updated_at"]] = None


class PostReactionResponse(BaseModel):
	id: UUID
	member_id: UUID
	post_id: UUID
	reaction_type: str
	created_at: datetime
	updated_at: datetime
	deleted_at: Optional[datetime] = None

	model_config = ConfigDict(from_attributes=True)


class CommentReactionResponse(BaseModel):
	id: UUID
	member_id: UUID
	comment_id: UUID
	reaction_type: str
	created_at: datetime
	updated_at: datetime
	deleted_at: Optional[datetime] = None

	model_config = ConfigDict(from_attributes=True)
