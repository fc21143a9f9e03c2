"""DTOs for appeals against moderation actions."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Literal, Optional
from uuid import UUID

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field

from discuss_board.api.pagination import PageRequest

AppealStatus = Literal["pending", "in_review", "accepted", "rejected", "withdrawn"]
RATIONALE = Annotated[str, Field(min_length=1, max_length=4000)]


class AppealCreateRequest(BaseModel):
	moderation_action_id: UUID
	appeal_rationale: RATIONALE


class AppealUpdateRequest(BaseModel):
	appeal_rationale: Optional[RATIONALE] = None
	status: Optional[Literal["withdrawn"]] = None


class AppealReviewRequest(BaseModel):
	status: Literal["in_review", "accepted", "rejected"]
	resolution_notes: Optional[Annotated[str, Field(max_length=4000)]] = None


class AppealSearchRequest(PageRequest):
	status: Optional[AppealStatus] = None
	appellant_member_id: Optional[UUID] = None
	moderation_action_id: Optional[UUID] = None
	created_from: Optional[AwareDatetime] = None
	created_to: Optional[AwareDatetime] = None
	sort_by: Optional[Literal["created_at", "updated_at", "status"]] = None


class AppealResponse(BaseModel):
	id: UUID
	appellant_member_id: UUID
	moderation_action_id: UUID
	appeal_rationale: str
	status: str
	resolution_notes: Optional[str] = None
	reviewed_by_member_id: Optional[UUID] = None
	resolved_at: Optional[datetime] = None
	created_at: datetime
	updated_at: datetime
	deleted_at: Optional[datetime] = None

	model_config = ConfigDict(from_attributes=True)
