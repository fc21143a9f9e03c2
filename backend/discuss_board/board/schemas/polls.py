"""DTOs for polls attached to posts."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Literal, Optional
from uuid import UUID

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field

from discuss_board.api.pagination import PageRequest

LABEL = Annotated[str, Field(min_length=1, max_length=200)]


class PollCreateRequest(BaseModel):
	title: Annotated[str, Field(min_length=1, max_length=300)]
	description: Optional[Annotated[str, Field(max_length=2000)]] = None
	multi_choice: bool = False
	closed_at: Optional[AwareDatetime] = None
	options: Annotated[list[LABEL], Field(min_length=2, max_length=10)]


class PollUpdateRequest(BaseModel):
	title: Optional[Annotated[str, Field(min_length=1, max_length=300)]] = None
	description: Optional[Annotated[str, Field(max_length=2000)]] = None
	closed_at: Optional[AwareDatetime] = None


class PollSearchRequest(PageRequest):
	keyword: Optional[Annotated[str, Field(min_length=1, max_length=200)]] = None
	sort_by: Optional[Literal["created_at", "title", "closed_at"]] = None


class PollOptionResponse(BaseModel):
	id: UUID
	poll_id: UUID
	label: str
	sequence: int
	vote_count: int = 0


class PollResponse(BaseModel):
	id: UUID
	post_id: UUID
	created_by_member_id: UUID
	title: str
	description: Optional[str] = None
	multi_choice: bool
	opened_at: datetime
	closed_at: Optional[datetime] = None
	created_at: datetime
	updated_at: datetime
	deleted_at: Optional[datetime] = None
	options: list[PollOptionResponse] = Field(default_factory=list)


class PollSummary(BaseModel):
	id: UUID
	post_id: UUID
	title: str
	multi_choice: bool
	opened_at: datetime
	closed_at: Optional[datetime] = None
	created_at: datetime

	model_config = ConfigDict(from_attributes=True)


class PollVoteCreateRequest(BaseModel):
	option_ids: Annotated[list[UUID], Field(min_length=1, max_length=10)]


class PollVoteSearchRequest(PageRequest):
	sort_by: Optional[Literal["created_at"]] = None


class PollVoteResponse(BaseModel):
	id: UUID
	poll_id: UUID
	option_id: UUID
	member_id: UUID
	created_at: datetime

	model_config = ConfigDict(from_attributes=True)
