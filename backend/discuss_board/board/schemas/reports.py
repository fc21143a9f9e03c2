"""DTOs for content reports."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Literal, Optional
from uuid import UUID

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field

from discuss_board.api.pagination import PageRequest

ReportStatus = Literal["pending", "under_review", "resolved", "rejected", "escalated"]


class ContentReportCreateRequest(BaseModel):
	content_type: Literal["post", "comment"]
	content_post_id: Optional[UUID] = None
	content_comment_id: Optional[UUID] = None
	reason: Annotated[str, Field(min_length=1, max_length=2000)]


class ContentReportUpdateRequest(BaseModel):
	status: Optional[ReportStatus] = None
	moderation_action_id: Optional[UUID] = None


class ContentReportSearchRequest(PageRequest):
	reporter_member_id: Optional[UUID] = None
	content_type: Optional[Literal["post", "comment"]] = None
	status: Optional[ReportStatus] = None
	reason: Optional[Annotated[str, Field(min_length=1, max_length=200)]] = None
	created_from: Optional[AwareDatetime] = None
	created_to: Optional[AwareDatetime] = None
	sort_by: Optional[Literal["created_at", "status", "reason"]] = None


class ContentReportResponse(BaseModel):
	id: UUID
	reporter_member_id: UUID
	content_type: str
	content_post_id: Optional[UUID] = None
	content_comment_id: Optional[UUID] = None
	reason: str
	status: str
	moderation_action_id: Optional[UUID] = None
	created_at: datetime
	updated_at: datetime
	deleted_at: Optional[datetime] = None

	model_config = ConfigDict(from_attributes=True)
