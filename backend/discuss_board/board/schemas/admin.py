"""DTOs for the administrator catalogue: forbidden words, settings, audit logs."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Literal, Optional
from uuid import UUID

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field

from discuss_board.api.pagination import PageRequest

SETTING_KEY_PATTERN = r"^[a-z0-9_.]{1,100}$"


class ForbiddenWordCreateRequest(BaseModel):
	expression: Annotated[str, Field(min_length=1, max_length=100)]
	description: Optional[Annotated[str, Field(max_length=500)]] = None


class ForbiddenWordUpdateRequest(BaseModel):
	expression: Optional[Annotated[str, Field(min_length=1, max_length=100)]] = None
	description: Optional[Annotated[str, Field(max_length=500)]] = None


class ForbiddenWordSearchRequest(PageRequest):
	keyword: Optional[Annotated[str, Field(min_length=1, max_length=100)]] = None
	sort_by: Optional[Literal["created_at", "expression"]] = None


class ForbiddenWordResponse(BaseModel):
	id: UUID
	expression: str
	description: Optional[str] = None
	created_at: datetime
	updated_at: datetime
	deleted_at: Optional[datetime] = None

	model_config = ConfigDict(from_attributes=True)


class SettingCreateRequest(BaseModel):
	key: Annotated[str, Field(pattern=SETTING_KEY_PATTERN)]
	value: Annotated[str, Field(max_length=2000)]
	description: Optional[Annotated[str, Field(max_length=500)]] = None


class SettingUpdateRequest(BaseModel):
	value: Optional[Annotated[str, Field(max_length=2000)]] = None
	description: Optional[Annotated[str, Field(max_length=500)]] = None


class SettingSearchRequest(PageRequest):
	key: Optional[Annotated[str, Field(min_length=1, max_length=100)]] = None
	sort_by: Optional[Literal["created_at", "updated_at", "key"]] = None


class SettingResponse(BaseModel):
	id: UUID
	key: str
	value: str
	description: Optional[str] = None
	created_at: datetime
	updated_at: datetime

	model_config = ConfigDict(from_attributes=True)


class AuditLogSearchRequest(PageRequest):
	actor_member_id: Optional[UUID] = None
	action_type: Optional[str] = None
	target_type: Optional[str] = None
	created_from: Optional[AwareDatetime] = None
	created_to: Optional[AwareDatetime] = None
	sort_by: Optional[Literal["created_at", "action_type"]] = None


class AuditLogResponse(BaseModel):
	id: UUID
	actor_member_id: UUID
	actor_role: str
	action_type: str
	target_type: str
	target_id: Optional[UUID] = None
	description: Optional[str] = None
	created_at: datetime

	model_config = ConfigDict(from_attributes=True)
