"""DTOs for comments, comment edit histories and deletion logs."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Literal, Optional
from uuid import UUID

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field

from discuss_board.api.pagination import PageRequest

CONTENT = Annotated[str, Field(min_length=1, max_length=5000)]


class CommentCreateRequest(BaseModel):
	content: CONTENT
	parent_id: Optional[UUID] = None


class CommentUpdateRequest(BaseModel):
	content: CONTENT


class CommentSearchRequest(PageRequest):
	author_member_id: Optional[UUID] = None
	parent_id: Optional[UUID] = None
	keyword: Optional[Annotated[str, Field(min_length=1, max_length=200)]] = None
	created_from: Optional[AwareDatetime] = None
	created_to: Optional[AwareDatetime] = None
	sort_by: Optional[Literal["created_at", "updated_at"]] = None


class CommentResponse(BaseModel):
	id: UUID
	post_id: UUID
	author_member_id: UUID
	parent_id: Optional[UUID] = None
	content: str
	depth: int
	is_locked: bool
	created_at: datetime
	updated_at: datetime
	deleted_at: Optional[datetime] = None

	model_config = ConfigDict(from_attributes=True)


class CommentEditHistorySearchRequest(PageRequest):
	created_from: Optional[AwareDatetime] = None
	created_to: Optional[AwareDatetime] = None
	sort_by: Optional[Literal["created_at"]] = None


class CommentEditHistoryResponse(BaseModel):
	id: UUID
	comment_id: UUID
	editor_member_id: UUID
	previous_content: str
	created_at: datetime

	model_config = ConfigDict(from_attributes=True)


class CommentDeletionLogSearchRequest(PageRequest):
	actor_role: Optional[Literal["member", "moderator", "administrator"]] = None
	sort_by: Optional[Literal["created_at"]] = None


class CommentDeletionLogResponse(BaseModel):
	id: UUID
	comment_id: UUID
	deleted_by_member_id: UUID
	actor_role: str
	deletion_reason: str
	created_at: datetime

	model_config = ConfigDict(from_attributes=True)
