"""DTOs for join, login and token refresh flows."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Literal, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field

NICKNAME = Annotated[str, Field(min_length=1, max_length=80)]


class TokenBundle(BaseModel):
	access: str
	refresh: str
	expired_at: datetime
	refreshable_until: datetime


class ConsentInput(BaseModel):
	policy_type: Annotated[str, Field(min_length=1, max_length=64)]
	policy_version: Annotated[str, Field(min_length=1, max_length=32)]
	consent_action: Literal["granted", "revoked"]


class MemberJoinRequest(BaseModel):
	email: EmailStr
	password: Annotated[str, Field(min_length=8, max_length=128)]
	nickname: NICKNAME
	consent: Annotated[list[ConsentInput], Field(min_length=1)]


class AdministratorJoinRequest(BaseModel):
	email: EmailStr
	password: Annotated[str, Field(min_length=1, max_length=128)]
	nickname: NICKNAME


class LoginRequest(BaseModel):
	email: EmailStr
	password: Annotated[str, Field(min_length=1, max_length=128)]


class RefreshRequest(BaseModel):
	refresh_token: Annotated[str, Field(min_length=1)]


class ModeratorAppointRequest(BaseModel):
	member_id: UUID


class MemberResponse(BaseModel):
	id: UUID
	user_account_id: UUID
	nickname: str
	status: str
	created_at: datetime
	updated_at: datetime
	deleted_at: Optional[datetime] = None

	model_config = ConfigDict(from_attributes=True)


class MemberAuthorized(MemberResponse):
	token: TokenBundle


class AdministratorResponse(BaseModel):
	id: UUID
	member_id: UUID
	escalated_by_administrator_id: Optional[UUID] = None
	escalated_at: datetime
	status: str
	revoked_at: Optional[datetime] = None
	created_at: datetime
	updated_at: datetime
	deleted_at: Optional[datetime] = None

	model_config = ConfigDict(from_attributes=True)


class AdministratorAuthorized(AdministratorResponse):
	token: TokenBundle


class ModeratorResponse(BaseModel):
	id: UUID
	member_id: UUID
	assigned_by_administrator_id: Optional[UUID] = None
	assigned_at: datetime
	status: str
	revoked_at: Optional[datetime] = None
	created_at: datetime
	updated_at: datetime
	deleted_at: Optional[datetime] = None

	model_config = ConfigDict(from_attributes=True)


class ModeratorAuthorized(ModeratorResponse):
	token: TokenBundle
