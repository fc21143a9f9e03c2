"""DTOs for member, administrator and moderator management."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Literal, Optional
from uuid import UUID

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field

from discuss_board.api.pagination import PageRequest


class MemberSearchRequest(PageRequest):
	nickname: Optional[str] = None
	status: Optional[Literal["active", "suspended", "banned"]] = None
	created_from: Optional[AwareDatetime] = None
	created_to: Optional[AwareDatetime] = None
	sort_by: Optional[Literal["created_at", "updated_at", "nickname", "status"]] = None


class MemberSummary(BaseModel):
	id: UUID
	user_account_id: UUID
	nickname: str
	status: str
	created_at: datetime

	model_config = ConfigDict(from_attributes=True)


class MemberUpdateRequest(BaseModel):
	nickname: Optional[Annotated[str, Field(min_length=1, max_length=80)]] = None
	status: Optional[Literal["active", "suspended", "banned"]] = None


class MemberProfile(BaseModel):
	id: UUID
	nickname: str
	status: str
	created_at: datetime

	model_config = ConfigDict(from_attributes=True)


class ProfileUpdateRequest(BaseModel):
	nickname: Annotated[str, Field(min_length=1, max_length=80)]


class NotificationPreferenceResponse(BaseModel):
	id: UUID
	member_id: UUID
	in_app_enabled: bool
	email_enabled: bool
	comment_alerts: bool
	moderation_alerts: bool
	created_at: datetime
	updated_at: datetime

	model_config = ConfigDict(from_attributes=True)


class NotificationPreferenceUpdateRequest(BaseModel):
	in_app_enabled: Optional[bool] = None
	email_enabled: Optional[bool] = None
	comment_alerts: Optional[bool] = None
	moderation_alerts: Optional[bool] = None


class AdministratorSearchRequest(PageRequest):
	status: Optional[Literal["active", "suspended"]] = None
	member_id: Optional[UUID] = None
	sort_by: Optional[Literal["created_at", "updated_at", "status"]] = None


class AdministratorUpdateRequest(BaseModel):
	status: Literal["active", "suspended"]


class ModeratorSearchRequest(PageRequest):
	status: Optional[Literal["active", "suspended", "revoked"]] = None
	member_id: Optional[UUID] = None
	sort_by: Optional[Literal["created_at", "updated_at", "assigned_at", "status"]] = None


class ModeratorUpdateRequest(BaseModel):
	status: Literal["active", "suspended", "revoked"]


class ConsentRecordResponse(BaseModel):
	id: UUID
	user_account_id: UUID
	policy_type: str
	policy_version: str
	consent_action: str
	created_at: datetime

	model_config = ConfigDict(from_attributes=True)


class ConsentRecordSearchRequest(PageRequest):
	user_account_id: Optional[UUID] = None
	policy_type: Optional[str] = None
	consent_action: Optional[Literal["granted", "revoked"]] = None
	sort_by: Optional[Literal["created_at", "policy_type"]] = None
