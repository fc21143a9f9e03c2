"""Business rules shared by discussion board services."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Iterable, Optional, Sequence
from uuid import UUID

from discuss_board.board.domain import models
from discuss_board.board.domain.exceptions import ConflictError, ForbiddenError, ValidationError

REQUIRED_CONSENTS = frozenset({"privacy_policy", "terms_of_service"})

CONTENT_ACTIONS = frozenset({"remove_content", "restore_content", "lock_content"})
MEMBER_ACTIONS = frozenset({"suspend_member", "ban_member"})

LOCKED = "locked"


def ensure_owner(member_id: UUID, owner_id: UUID, *, detail: str = "not_owner") -> None:
	if member_id != owner_id:
		raise ForbiddenError(detail)


def ensure_edit_window(created_at: datetime, now: datetime, *, minutes: int) -> None:
	"""Authors may only change their content shortly after writing it."""
	if now - created_at > timedelta(minutes=minutes):
		raise ForbiddenError("edit_window_closed")


def ensure_tag_capacity(assigned: int, *, limit: int) -> None:
	if assigned >= limit:
		raise ValidationError("tag_limit")


def ensure_post_open(post: models.Post) -> None:
	if post.business_status == LOCKED:
		raise ForbiddenError("post_locked")


def ensure_comment_open(comment: models.Comment) -> None:
	if comment.is_locked:
		raise ForbiddenError("comment_locked")


def find_forbidden_word(texts: Iterable[Optional[str]], expressions: Sequence[str]) -> Optional[str]:
	lowered = [text.lower() for text in texts if text]
	for expression in expressions:
		needle = expression.lower()
		if any(needle in text for text in lowered):
			return expression
	return None


def ensure_clean_text(texts: Iterable[Optional[str]], expressions: Sequence[str]) -> None:
	if find_forbidden_word(texts, expressions) is not None:
		raise ValidationError("forbidden_word")


def ensure_required_consents(consents: Iterable[tuple[str, str]]) -> None:
	"""Joining requires the privacy policy and terms of service to be granted."""
	granted = {policy for policy, action in consents if action == "granted"}
	if not REQUIRED_CONSENTS.issubset(granted):
		raise ValidationError("consent_required")


def ensure_report_target(content_type: str, post_id: Optional[UUID], comment_id: Optional[UUID]) -> None:
	if (post_id is None) == (comment_id is None):
		raise ValidationError("exactly_one_target")
	if content_type == "post" and post_id is None:
		raise ValidationError("content_type_mismatch")
	if content_type == "comment" and comment_id is None:
		raise ValidationError("content_type_mismatch")


def ensure_action_targets(
	action_type: str,
	*,
	member_id: Optional[UUID],
	post_id: Optional[UUID],
	comment_id: Optional[UUID],
) -> None:
	if action_type in CONTENT_ACTIONS and post_id is None and comment_id is None:
		raise ValidationError("content_target_required")
	if action_type in MEMBER_ACTIONS and member_id is None:
		raise ValidationError("member_target_required")


def poll_is_open(poll: models.Poll, now: datetime) -> bool:
	return poll.closed_at is None or poll.closed_at > now


def ensure_poll_open(poll: models.Poll, now: datetime) -> None:
	if not poll_is_open(poll, now):
		raise ConflictError("poll_closed")


def ensure_vote_selection(poll: models.Poll, option_ids: Sequence[UUID], valid_ids: Iterable[UUID]) -> None:
	if len(set(option_ids)) != len(option_ids):
		raise ValidationError("duplicate_option")
	if not poll.multi_choice and len(option_ids) != 1:
		raise ValidationError("single_choice_poll")
	known = set(valid_ids)
	if any(option_id not in known for option_id in option_ids):
		raise ValidationError("option_not_in_poll")


def ensure_not_self(member_id: UUID, author_id: UUID, *, detail: str = "own_content") -> None:
	if member_id == author_id:
		raise ForbiddenError(detail)
