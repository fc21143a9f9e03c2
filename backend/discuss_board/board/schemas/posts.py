"""DTOs for posts, tags and post edit histories."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Literal, Optional
from uuid import UUID

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field

from discuss_board.api.pagination import PageRequest

TITLE = Annotated[str, Field(min_length=1, max_length=300)]
BODY = Annotated[str, Field(min_length=1, max_length=20000)]
BusinessStatus = Literal["public", "limited", "locked"]


class PostCreateRequest(BaseModel):
	title: TITLE
	body: BODY
	business_status: Literal["public", "limited"] = "public"


class PostUpdateRequest(BaseModel):
	title: Optional[TITLE] = None
	body: Optional[BODY] = None
	business_status: Optional[BusinessStatus] = None
	edit_reason: Optional[Annotated[str, Field(max_length=500)]] = None


class PostSearchRequest(PageRequest):
	author_member_id: Optional[UUID] = None
	business_status: Optional[BusinessStatus] = None
	tag_id: Optional[UUID] = None
	keyword: Optional[Annotated[str, Field(min_length=1, max_length=200)]] = None
	created_from: Optional[AwareDatetime] = None
	created_to: Optional[AwareDatetime] = None
	sort_by: Optional[Literal["created_at", "updated_at", "title"]] = None


class PostResponse(BaseModel):
	id: UUID
	author_member_id: UUID
	title: str
	body: str
	business_status: str
	created_at: datetime
	updated_at: datetime
	deleted_at: Optional[datetime] = None

	model_config = ConfigDict(from_attributes=True)


class PostSummary(BaseModel):
	id: UUID
	author_member_id: UUID
	title: str
	business_status: str
	created_at: datetime
	updated_at: datetime
	deleted_at: Optional[datetime] = None

	model_config = ConfigDict(from_attributes=True)


class PostTagCreateRequest(BaseModel):
	tag_id: UUID


class PostTagSearchRequest(PageRequest):
	sort_by: Optional[Literal["created_at"]] = None


class PostTagResponse(BaseModel):
	id: UUID
	post_id: UUID
	tag_id: UUID
	created_at: datetime

	model_config = ConfigDict(from_attributes=True)


class PostEditHistorySearchRequest(PageRequest):
	editor_member_id: Optional[UUID] = None
	created_from: Optional[AwareDatetime] = None
	created_to: Optional[AwareDatetime] = None
	sort_by: Optional[Literal["created_at"]] = None


class PostEditHistoryResponse(BaseModel):
	id: UUID
	post_id: UUID
	editor_member_id: UUID
	previous_title: str
	previous_body: str
	edit_reason: Optional[str] = None
	created_at: datetime

	model_config = ConfigDict(from_attributes=True)
