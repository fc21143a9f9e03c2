"""Domain models for discussion board entities."""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class UserAccount(BaseModel):
	"""Login identity shared by the member, moderator and administrator roles."""

	id: UUID
	email: str
	password_hash: str
	email_verified: bool = False
	status: str = "active"
	last_login_at: Optional[datetime] = None
	created_at: datetime
	updated_at: datetime
	deleted_at: Optional[datetime] = None

	model_config = ConfigDict(from_attributes=True)


class Member(BaseModel):
	id: UUID
	user_account_id: UUID
	nickname: str
	status: str = "active"
	created_at: datetime
	updated_at: datetime
	deleted_at: Optional[datetime] = None

	model_config = ConfigDict(from_attributes=True)


class Administrator(BaseModel):
	id: UUID
	member_id: UUID
	escalated_by_administrator_id: Optional[UUID] = None
	escalated_at: datetime
	status: str = "active"
	revoked_at: Optional[datetime] = None
	created_at: datetime
	updated_at: datetime
	deleted_at: Optional[datetime] = None

	model_config = ConfigDict(from_attributes=True)


class Moderator(BaseModel):
	id: UUID
	member_id: UUID
	assigned_by_administrator_id: Optional[UUID] = None
	assigned_at: datetime
	status: str = "active"
	revoked_at: Optional[datetime] = None
	created_at: datetime
	updated_at: datetime
	deleted_at: Optional[datetime] = None

	model_config = ConfigDict(from_attributes=True)


class JwtSession(BaseModel):
	"""Refresh-token session; the token itself is never stored, only its hash."""

	id: UUID
	user_account_id: UUID
	role: str
	refresh_token_hash: str = ""
	user_agent: Optional[str] = None
	ip_address: Optional[str] = None
	expires_at: datetime
	revoked_at: Optional[datetime] = None
	created_at: datetime
	updated_at: datetime

	model_config = ConfigDict(from_attributes=True)


class ConsentRecord(BaseModel):
	id: UUID
	user_account_id: UUID
	policy_type: str
	policy_version: str
	consent_action: str
	created_at: datetime

	model_config = ConfigDict(from_attributes=True)


class NotificationPreference(BaseModel):
	id: UUID
	member_id: UUID
	in_app_enabled: bool = True
	email_enabled: bool = False
	comment_alerts: bool = True
	moderation_alerts: bool = True
	created_at: datetime
	updated_at: datetime

	model_config = ConfigDict(from_attributes=True)


class Post(BaseModel):
	id: UUID
	author_member_id: UUID
	title: str
	body: str
	business_status: str = "public"
	created_at: datetime
	updated_at: datetime
	deleted_at: Optional[datetime] = None

	model_config = ConfigDict(from_attributes=True)


class PostTag(BaseModel):
	id: UUID
	post_id: UUID
	tag_id: UUID
	created_at: datetime

	model_config = ConfigDict(from_attributes=True)


class PostEditHistory(BaseModel):
	id: UUID
	post_id: UUID
	editor_member_id: UUID
	previous_title: str
	previous_body: str
	edit_reason: Optional[str] = None
	created_at: datetime

	model_config = ConfigDict(from_attributes=True)


class Comment(BaseModel):
	id: UUID
	post_id: UUID
	author_member_id: UUID
	parent_id: Optional[UUID] = None
	content: str
	depth: int = 0
	is_locked: bool = False
	created_at: datetime
	updated_at: datetime
	deleted_at: Optional[datetime] = None

	model_config = ConfigDict(from_attributes=True)


class CommentEditHistory(BaseModel):
	id: UUID
	comment_id: UUID
	editor_member_id: UUID
	previous_content: str
	created_at: datetime

	model_config = ConfigDict(from_attributes=True)


class CommentDeletionLog(BaseModel):
	id: UUID
	comment_id: UUID
	deleted_by_member_id: UUID
	actor_role: str
	deletion_reason: str
	created_at: datetime

	model_config = ConfigDict(from_attributes=True)


class PostReaction(BaseModel):
	id: UUID
	member_id: UUID
	post_id: UUID
	reaction_type: str
	created_at: datetime
	updated_at: datetime
	deleted_at: Optional[datetime] = None

	model_config = ConfigDict(from_attributes=True)


class CommentReaction(BaseModel):
	id: UUID
	member_id: UUID
	comment_id: UUID
	reaction_type: str
	created_at: datetime
	updated_at: datetime
	deleted_at: Optional[datetime] = None

	model_config = ConfigDict(from_attributes=True)


class ContentReport(BaseModel):
	id: UUID
	reporter_member_id: UUID
	content_type: str
	content_post_id: Optional[UUID] = None
	content_comment_id: Optional[UUID] = None
	reason: str
	status: str = "pending"
	moderation_action_id: Optional[UUID] = None
	created_at: datetime
	updated_at: datetime
	deleted_at: Optional[datetime] = None

	model_config = ConfigDict(from_attributes=True)


class ModerationAction(BaseModel):
	"""A moderator or administrator decision; erased by hard delete only."""

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
	status: str = "active"
	effective_from: datetime
	effective_until: Optional[datetime] = None
	# business_status of the target post before a lock_content took effect
	prior_post_status: Optional[str] = None
	created_at: datetime
	updated_at: datetime

	model_config = ConfigDict(from_attributes=True)


class ModerationLog(BaseModel):
	id: UUID
	moderation_action_id: UUID
	actor_member_id: UUID
	event_type: str
	event_details: Optional[str] = None
	created_at: datetime
	updated_at: datetime
	deleted_at: Optional[datetime] = None

	model_config = ConfigDict(from_attributes=True)


class Appeal(BaseModel):
	id: UUID
	appellant_member_id: UUID
	moderation_action_id: UUID
	appeal_rationale: str
	status: str = "pending"
	resolution_notes: Optional[str] = None
	reviewed_by_member_id: Optional[UUID] = None
	resolved_at: Optional[datetime] = None
	created_at: datetime
	updated_at: datetime
	deleted_at: Optional[datetime] = None

	model_config = ConfigDict(from_attributes=True)


class Notification(BaseModel):
	id: UUID
	recipient_member_id: UUID
	event_type: str
	subject: str
	body: str
	delivery_channel: str = "in_app"
	delivery_status: str = "delivered"
	related_entity_id: Optional[UUID] = None
	delivered_at: Optional[datetime] = None
	read_at: Optional[datetime] = None
	created_at: datetime
	updated_at: datetime
	deleted_at: Optional[datetime] = None

	model_config = ConfigDict(from_attributes=True)


class Poll(BaseModel):
	id: UUID
	post_id: UUID
	created_by_member_id: UUID
	title: str
	description: Optional[str] = None
	multi_choice: bool = False
	opened_at: datetime
	closed_at: Optional[datetime] = None
	created_at: datetime
	updated_at: datetime
	deleted_at: Optional[datetime] = None

	model_config = ConfigDict(from_attributes=True)


class PollOption(BaseModel):
	id: UUID
	poll_id: UUID
	label: str
	sequence: int
	created_at: datetime

	model_config = ConfigDict(from_attributes=True)


class PollVote(BaseModel):
	id: UUID
	poll_id: UUID
	option_id: UUID
	member_id: UUID
	created_at: datetime

	model_config = ConfigDict(from_attributes=True)


class ForbiddenWord(BaseModel):
	id: UUID
	expression: str
	description: Optional[str] = None
	created_at: datetime
	updated_at: datetime
	deleted_at: Optional[datetime] = None

	model_config = ConfigDict(from_attributes=True)


class Setting(BaseModel):
	id: UUID
	key: str
	value: str
	description: Optional[str] = None
	created_at: datetime
	updated_at: datetime

	model_config = ConfigDict(from_attributes=True)


class AuditLog(BaseModel):
	id: UUID
	actor_member_id: UUID
	actor_role: str
	action_type: str
	target_type: str
	target_id: Optional[UUID] = None
	description: Optional[str] = None
	created_at: datetime

	model_config = ConfigDict(from_attributes=True)
