"""DTOs for moderation actions and moderation logs."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Literal, Optional
from uuid import UUID

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field

from discuss_board.api.pagination import PageRequest

ActionType = Literal[
	"warn",
	"escalate",
	"remove_content",
	"restore_content",
	"lock_content",
	"suspend_member",
	"ban_member",
]
ActionStatus = Literal["active", "pending", "revoked", "completed"]
LogEventType = Literal["action_taken", "status_change", "escalation", "appeal", "note"]


class ModerationActionCreateRequest(BaseModel):
	action_type: ActionType
	action_reason: Annotated[str, Field(min_length=1, max_length=2000)]
	decision_narrative: Optional[Annotated[str, Field(max_length=5000)]] = None
	target_member_id: Optional[UUID] = None
	target_post_id: Optional[UUID] = None
	target_comment_id: Optional[UUID] = None
	related_report_id: Optional[UUID] = None
	status: Literal["active", "pending"] = "active"
	effective_from: Optional[AwareDatetime] = None
	effective_until: Optional[AwareDatetime] = None


class ModerationActionUpdateRequest(BaseModel):
	status: Optional[ActionStatus] = None
	decision_narrative: Optional[Annotated[str, Field(max_length=5000)]] = None
	effective_until: Optional[AwareDatetime] = None


class ModerationActionSearchRequest(PageRequest):
	actor_member_id: Optional[UUID] = None
	target_member_id: Optional[UUID] = None
	target_post_id: Optional[UUID] = None
	target_comment_id: Optional[UUID] = None
	action_type: Optional[ActionType] = None
	status: Optional[ActionStatus] = None
	created_from: Optional[AwareDatetime] = None
	created_to: Optional[AwareDatetime] = None
	sort_by: Optional[Literal["created_at", "updated_at", "action_type", "status"]] = None


class ModerationActionResponse(BaseModel):
	id: UUID
	actor_member_id: UUID
	actor_role: str
	target_member_id: Optional[UUID] = None
	target_post_id: Optional[UUID] = None
	target_comment_id: Optional[UUID] = None
	related_report_id: Optional[UUID] = None
	action_type: str
	action_reason: str
	decision_narrative: Optional[str] = None
	status: str
	effective_from: datetime
	effective_until: Optional[datetime] = None
	created_at: datetime
	updated_at: datetime

	model_config = ConfigDict(from_attributes=True)


class ModerationActionSummary(BaseModel):
	id: UUID
	actor_member_id: UUID
	target_member_id: Optional[UUID] = None
	target_post_id: Optional[UUID] = None
	target_comment_id: Optional[UUID] = None
	action_type: str
	status: str
	created_at: datetime

	model_config = ConfigDict(from_attributes=True)


class ModerationLogCreateRequest(BaseModel):
	event_type: LogEventType
	event_details: Optional[Annotated[str, Field(max_length=5000)]] = None


class ModerationLogUpdateRequest(BaseModel):
	event_details: Annotated[str, Field(max_length=5000)]


class ModerationLogSearchRequest(PageRequest):
	event_type: Optional[LogEventType] = None
	actor_member_id: Optional[UUID] = None
	created_from: Optional[AwareDatetime] = None
	created_to: Optional[AwareDatetime] = None
	sort_by: Optional[Literal["created_at", "event_type"]] = None


class ModerationLogResponse(BaseModel):
	id: UUID
	moderation_action_id: UUID
	actor_member_id: UUID
	event_type: str
	event_details: Optional[str] = None
	created_at: datetime
	updated_at: datetime
	deleted_at: Optional[datetime] = None

	model_config = ConfigDict(from_attributes=True)
