"""DTOs for in-app notifications."""

from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional
from uuid import UUID

from pydantic import AwareDatetime, BaseModel, ConfigDict

from discuss_board.api.pagination import PageRequest

DeliveryStatus = Literal["pending", "delivered", "read", "failed"]


class NotificationSearchRequest(PageRequest):
	event_type: Optional[str] = None
	delivery_status: Optional[DeliveryStatus] = None
	delivery_channel: Optional[Literal["in_app", "email"]] = None
	recipient_member_id: Optional[UUID] = None
	created_from: Optional[AwareDatetime] = None
	created_to: Optional[AwareDatetime] = None
	sort_by: Optional[Literal["created_at", "event_type", "delivery_status"]] = None


class NotificationUpdateRequest(BaseModel):
	delivery_status: Literal["read"]


class NotificationResponse(BaseModel):
	id: UUID
	recipient_member_id: UUID
	event_type: str
	subject: str
	body: str
	delivery_channel: str
	delivery_status: str
	related_entity_id: Optional[UUID] = None
	delivered_at: Optional[datetime] = None
	read_at: Optional[datetime] = None
	created_at: datetime
	updated_at: datetime
	deleted_at: Optional[datetime] = None

	model_config = ConfigDict(from_attributes=True)


class NotificationSummary(BaseModel):
	id: UUID
	recipient_member_id: UUID
	event_type: str
	subject: str
	delivery_status: str
	related_entity_id: Optional[UUID] = None
	created_at: datetime

	model_config = ConfigDict(from_attributes=True)
