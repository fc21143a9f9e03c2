"""Persistence layer for the discussion board.

Each ``Table`` wraps one relation of the schema in
``migrations/0001_discuss_board.sql``. It fills audit columns and hides
soft-deleted rows unless asked. It also turns storage uniqueness violations
into ``ConflictError``. The active ``Store`` is looked up per call so tests
can swap it.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Generic, Iterable, Optional, Sequence, Type, TypeVar
from uuid import UUID, uuid4

from pydantic import BaseModel

from discuss_board.api.pagination import PageRequest
from discuss_board.board.domain import models
from discuss_board.board.domain.exceptions import ConflictError, NotFoundError
from discuss_board.infra import store as storage
from discuss_board.infra.memory import MemoryStore
from discuss_board.infra.store import (
	Condition,
	Ordering,
	PostgresStore,
	ReferenceViolation,
	Store,
	UniqueKey,
	UniqueViolation,
)
from discuss_board.settings import settings

ModelT = TypeVar("ModelT", bound=BaseModel)


def utcnow() -> datetime:
	return datetime.now(timezone.utc)


UNIQUE_KEYS: dict[str, tuple[UniqueKey, ...]] = {
	"user_accounts": (UniqueKey(("email",)),),
	"members": (UniqueKey(("nickname",)), UniqueKey(("user_account_id",))),
	"administrators": (UniqueKey(("member_id",)),),
	"moderators": (UniqueKey(("member_id",)),),
	"notification_preferences": (UniqueKey(("member_id",), live_only=False),),
	"post_tags": (UniqueKey(("post_id", "tag_id"), live_only=False),),
	"post_reactions": (UniqueKey(("member_id", "post_id"), live_only=False),),
	"comment_reactions": (UniqueKey(("member_id", "comment_id"), live_only=False),),
	"poll_options": (UniqueKey(("poll_id", "label"), live_only=False),),
	"poll_votes": (UniqueKey(("poll_id", "option_id", "member_id"), live_only=False),),
	"forbidden_words": (UniqueKey(("expression",)),),
	"board_settings": (UniqueKey(("key",), live_only=False),),
}


def build_store() -> Store:
	"""Create the store selected by ``settings.storage_backend``."""
	if settings.uses_memory_store():
		return MemoryStore(unique_keys=UNIQUE_KEYS)
	return PostgresStore()


class Table(Generic[ModelT]):
	def __init__(self, name: str, model: Type[ModelT], *, conflict: Optional[str] = None, missing: Optional[str] = None) -> None:
		self.name = name
		self.model = model
		fields = model.model_fields
		self.soft_deletes = "deleted_at" in fields
		self._has_updated_at = "updated_at" in fields
		self._conflict = conflict or f"{name}_conflict"
		self._missing = missing or "not_found"

	@property
	def store(self) -> Store:
		return storage.get_store()

	def _conditions(self, conditions: Iterable[Condition], include_deleted: bool) -> list[Condition]:
		result = list(conditions)
		if self.soft_deletes and not include_deleted:
			result.append(storage.is_null("deleted_at"))
		return result

	def _model(self, row: Optional[dict[str, Any]]) -> Optional[ModelT]:
		if row is None:
			return None
		return self.model.model_validate(row)

	async def insert(self, **values: Any) -> ModelT:
		now = utcnow()
		row: dict[str, Any] = {"id": uuid4(), "created_at": now}
		if self._has_updated_at:
			row["updated_at"] = now
		row.update(values)
		try:
			record = await self.store.insert(self.name, row)
		except UniqueViolation as exc:
			raise ConflictError(self._conflict) from exc
		except ReferenceViolation as exc:
			raise ConflictError(f"{self.name}_reference") from exc
		return self.model.model_validate(record)

	async def get(self, row_id: UUID, *, include_deleted: bool = False) -> Optional[ModelT]:
		row = await self.store.get(self.name, row_id)
		if row is None:
			return None
		if self.soft_deletes and not include_deleted and row.get("deleted_at") is not None:
			return None
		return self._model(row)

	async def require(self, row_id: UUID, *, detail: Optional[str] = None, include_deleted: bool = False) -> ModelT:
		item = await self.get(row_id, include_deleted=include_deleted)
		if item is None:
			raise NotFoundError(detail or self._missing)
		return item

	async def find_one(self, *conditions: Condition, include_deleted: bool = False) -> Optional[ModelT]:
		return self._model(await self.store.find_one(self.name, self._conditions(conditions, include_deleted)))

	async def find(
		self,
		*conditions: Condition,
		order: Optional[Ordering] = None,
		offset: int = 0,
		limit: Optional[int] = None,
		include_deleted: bool = False,
	) -> list[ModelT]:
		rows = await self.store.find(
			self.name,
			self._conditions(conditions, include_deleted),
			order=order,
			offset=offset,
			limit=limit,
		)
		return [self.model.model_validate(row) for row in rows]

	async def count(self, *conditions: Condition, include_deleted: bool = False) -> int:
		return await self.store.count(self.name, self._conditions(conditions, include_deleted))

	async def page(
		self,
		conditions: Sequence[Condition],
		request: PageRequest,
		*,
		default_sort: str = "created_at",
		include_deleted: bool = False,
	) -> tuple[list[ModelT], int]:
		"""Return one page of rows plus the total number of matching rows."""
		order = Ordering(request.sort_by or default_sort, request.sort_direction)
		records = await self.count(*conditions, include_deleted=include_deleted)
		items = await self.find(
			*conditions,
			order=order,
			offset=request.offset,
			limit=request.limit,
			include_deleted=include_deleted,
		)
		return items, records

	async def update(self, row_id: UUID, **values: Any) -> ModelT:
		if self._has_updated_at:
			values.setdefault("updated_at", utcnow())
		try:
			record = await self.store.update(self.name, row_id, values)
		except UniqueViolation as exc:
			raise ConflictError(self._conflict) from exc
		except ReferenceViolation as exc:
			raise ConflictError(f"{self.name}_reference") from exc
		if record is None:
			raise NotFoundError(self._missing)
		return self.model.model_validate(record)

	async def soft_delete(self, row_id: UUID) -> ModelT:
		return await self.update(row_id, deleted_at=utcnow())

	async def restore(self, row_id: UUID) -> ModelT:
		return await self.update(row_id, deleted_at=None)

	async def delete(self, row_id: UUID) -> bool:
		try:
			return await self.store.delete(self.name, row_id)
		except ReferenceViolation as exc:
			raise ConflictError(f"{self.name}_referenced") from exc


class BoardRepository:
	"""All board relations behind one object so services can share a transaction."""

	def __init__(self) -> None:
		self.user_accounts = Table("user_accounts", models.UserAccount, conflict="email_taken", missing="account_not_found")
		self.members = Table("members", models.Member, conflict="nickname_taken", missing="member_not_found")
		self.administrators = Table("administrators", models.Administrator, conflict="administrator_exists", missing="administrator_not_found")
		self.moderators = Table("moderators", models.Moderator, conflict="moderator_exists", missing="moderator_not_found")
		self.sessions = Table("jwt_sessions", models.JwtSession, missing="session_not_found")
		self.consents = Table("consent_records", models.ConsentRecord, missing="consent_not_found")
		self.notification_preferences = Table("notification_preferences", models.NotificationPreference)
		self.posts = Table("posts", models.Post, missing="post_not_found")
		self.post_tags = Table("post_tags", models.PostTag, conflict="tag_already_assigned", missing="post_tag_not_found")
		self.post_edit_histories = Table("post_edit_histories", models.PostEditHistory, missing="edit_history_not_found")
		self.comments = Table("comments", models.Comment, missing="comment_not_found")
		self.comment_edit_histories = Table("comment_edit_histories", models.CommentEditHistory, missing="edit_history_not_found")
		self.comment_deletion_logs = Table("comment_deletion_logs", models.CommentDeletionLog, missing="deletion_log_not_found")
		self.post_reactions = Table("post_reactions", models.PostReaction, conflict="duplicate_reaction", missing="reaction_not_found")
		self.comment_reactions = Table("comment_reactions", models.CommentReaction, conflict="duplicate_reaction", missing="reaction_not_found")
		self.content_reports = Table("content_reports", models.ContentReport, missing="report_not_found")
		self.moderation_actions = Table("moderation_actions", models.ModerationAction, missing="moderation_action_not_found")
		self.moderation_logs = Table("moderation_logs", models.ModerationLog, missing="moderation_log_not_found")
		self.appeals = Table("appeals", models.Appeal, missing="appeal_not_found")
		self.notifications = Table("notifications", models.Notification, missing="notification_not_found")
		self.polls = Table("polls", models.Poll, missing="poll_not_found")
		self.poll_options = Table("poll_options", models.PollOption, conflict="duplicate_option")
		self.poll_votes = Table("poll_votes", models.PollVote, conflict="already_voted", missing="vote_not_found")
		self.forbidden_words = Table("forbidden_words", models.ForbiddenWord, conflict="forbidden_word_exists", missing="forbidden_word_not_found")
		self.settings = Table("board_settings", models.Setting, conflict="setting_exists", missing="setting_not_found")
		self.audit_logs = Table("audit_logs", models.AuditLog, missing="audit_log_not_found")

	def transaction(self):
		return storage.get_store().transaction()


def created_between(created_from: Optional[datetime], created_to: Optional[datetime], *, column: str = "created_at") -> list[Condition]:
	conditions: list[Condition] = []
	if created_from is not None:
		conditions.append(storage.gte(column, created_from))
	if created_to is not None:
		conditions.append(storage.lte(column, created_to))
	return conditions
