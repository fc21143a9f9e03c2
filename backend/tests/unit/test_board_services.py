"""Service-level tests running against the in-memory store."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from discuss_board.board.domain import repo as repo_module
from discuss_board.board.domain.appeals_service import AppealsService
from discuss_board.board.domain.exceptions import ConflictError, ForbiddenError, NotFoundError, ValidationError
from discuss_board.board.domain.moderation_service import ModerationService
from discuss_board.board.domain.polls_service import PollsService
from discuss_board.board.schemas import appeals as appeal_dto
from discuss_board.board.schemas import moderation as moderation_dto
from discuss_board.board.schemas import polls as poll_dto
from discuss_board.infra.auth import ADMINISTRATOR, MEMBER, MODERATOR, AuthenticatedActor
from discuss_board.infra.store import eq


@pytest.fixture
def board() -> repo_module.BoardRepository:
	return repo_module.BoardRepository()


async def _actor(board: repo_module.BoardRepository, nickname: str, role: str = MEMBER) -> AuthenticatedActor:
	account = await board.user_accounts.insert(email=f"{nickname}@example.com", password_hash="x", email_verified=False, status="active")
	member = await board.members.insert(user_account_id=account.id, nickname=nickname, status="active")
	entity_id = member.id
	if role == MODERATOR:
		moderator = await board.moderators.insert(member_id=member.id, assigned_at=repo_module.utcnow(), status="active")
		entity_id = moderator.id
	elif role == ADMINISTRATOR:
		admin = await board.administrators.insert(member_id=member.id, escalated_at=repo_module.utcnow(), status="active")
		entity_id = admin.id
	return AuthenticatedActor(id=entity_id, role=role, member_id=member.id, user_account_id=account.id)


async def _post(board: repo_module.BoardRepository, author: AuthenticatedActor, status: str = "public"):
	return await board.posts.insert(author_member_id=author.member_id, title="Weekly thread", body="Say hi", business_status=status)


@pytest.mark.asyncio
async def test_lock_then_revoke_restores_post(board):
	author = await _actor(board, "author")
	mod = await _actor(board, "moderator", MODERATOR)
	post = await _post(board, author)
	service = ModerationService(repository=board)

	action = await service.create_action(
		mod,
		moderation_dto.ModerationActionCreateRequest(action_type="lock_content", action_reason="flame war", target_post_id=post.id),
	)
	assert action.target_member_id == author.member_id
	assert (await board.posts.require(post.id)).business_status == "locked"

	await service.update_action(mod, action.id, moderation_dto.ModerationActionUpdateRequest(status="revoked"))
	assert (await board.posts.require(post.id)).business_status == "public"

	logs = await board.moderation_logs.find(eq("moderation_action_id", action.id))
	assert sorted(log.event_type for log in logs) == ["action_taken", "status_change"]
	notices = await board.notifications.find(eq("recipient_member_id", author.member_id))
	assert {n.event_type for n in notices} == {"moderation_action", "moderation_action_revoked"}


@pytest.mark.asyncio
async def test_revoked_action_cannot_change_again(board):
	author = await _actor(board, "author")
	mod = await _actor(board, "moderator", MODERATOR)
	service = ModerationService(repository=board)
	action = await service.create_action(
		mod,
		moderation_dto.ModerationActionCreateRequest(action_type="suspend_member", action_reason="spam", target_member_id=author.member_id),
	)
	assert (await board.members.require(author.member_id)).status == "suspended"
	await service.update_action(mod, action.id, moderation_dto.ModerationActionUpdateRequest(status="revoked"))
	assert (await board.members.require(author.member_id)).status == "active"
	with pytest.raises(ConflictError):
		await service.update_action(mod, action.id, moderation_dto.ModerationActionUpdateRequest(status="active"))


@pytest.mark.asyncio
async def test_lock_revoke_restores_prior_status(board):
	author = await _actor(board, "author")
	mod = await _actor(board, "moderator", MODERATOR)
	post = await _post(board, author, "limited")
	service = ModerationService(repository=board)

	action = await service.create_action(
		mod,
		moderation_dto.ModerationActionCreateRequest(action_type="lock_content", action_reason="heated", target_post_id=post.id),
	)
	assert (await board.posts.require(post.id)).business_status == "locked"
	assert (await board.moderation_actions.require(action.id)).prior_post_status == "limited"

	await service.update_action(mod, action.id, moderation_dto.ModerationActionUpdateRequest(status="revoked"))
	assert (await board.posts.require(post.id)).business_status == "limited"


@pytest.mark.asyncio
async def test_applied_action_cannot_return_to_pending(board):
	author = await _actor(board, "author")
	mod = await _actor(board, "moderator", MODERATOR)
	service = ModerationService(repository=board)
	action = await service.create_action(
		mod,
		moderation_dto.ModerationActionCreateRequest(action_type="suspend_member", action_reason="spam", target_member_id=author.member_id),
	)

	with pytest.raises(ConflictError) as exc:
		await service.update_action(mod, action.id, moderation_dto.ModerationActionUpdateRequest(status="pending"))
	assert exc.value.detail == "action_already_applied"
	assert (await board.moderation_actions.require(action.id)).status == "active"
	logs = await board.moderation_logs.find(eq("moderation_action_id", action.id))
	assert [log.event_type for log in logs] == ["action_taken"]


@pytest.mark.asyncio
async def test_pending_action_against_administrator(board):
	admin = await _actor(board, "admin", ADMINISTRATOR)
	mod = await _actor(board, "moderator", MODERATOR)
	service = ModerationService(repository=board)
	request = moderation_dto.ModerationActionCreateRequest(
		action_type="ban_member", action_reason="abuse", target_member_id=admin.member_id, status="pending"
	)

	with pytest.raises(ForbiddenError):
		await service.create_action(mod, request)

	# a second administrator may act once another one stays active
	other = await _actor(board, "deputy", ADMINISTRATOR)
	action = await service.create_action(other, request)
	assert (await board.members.require(admin.member_id)).status == "active"

	await board.administrators.update(other.id, status="revoked")
	with pytest.raises(ConflictError) as exc:
		await service.update_action(other, action.id, moderation_dto.ModerationActionUpdateRequest(status="active"))
	assert exc.value.detail == "last_administrator"
	assert (await board.members.require(admin.member_id)).status == "active"


@pytest.mark.asyncio
async def test_pending_action_applies_when_activated(board):
	author = await _actor(board, "author")
	mod = await _actor(board, "moderator", MODERATOR)
	post = await _post(board, author)
	service = ModerationService(repository=board)
	action = await service.create_action(
		mod,
		moderation_dto.ModerationActionCreateRequest(
			action_type="remove_content",
			action_reason="off topic",
			target_post_id=post.id,
			status="pending",
		),
	)
	assert await board.posts.get(post.id) is not None
	await service.update_action(mod, action.id, moderation_dto.ModerationActionUpdateRequest(status="active"))
	assert await board.posts.get(post.id) is None
	assert await board.posts.get(post.id, include_deleted=True) is not None


@pytest.mark.asyncio
async def test_erase_action_blocked_by_appeal(board):
	author = await _actor(board, "author")
	mod = await _actor(board, "moderator", MODERATOR)
	service = ModerationService(repository=board)
	action = await service.create_action(
		mod,
		moderation_dto.ModerationActionCreateRequest(action_type="warn", action_reason="tone", target_member_id=author.member_id),
	)
	await AppealsService(repository=board).create_appeal(
		author,
		appeal_dto.AppealCreateRequest(moderation_action_id=action.id, appeal_rationale="I was polite"),
	)
	with pytest.raises(ConflictError) as exc:
		await service.erase_action(mod, action.id)
	assert exc.value.detail == "action_referenced"


@pytest.mark.asyncio
async def test_erase_action_removes_logs(board):
	author = await _actor(board, "author")
	mod = await _actor(board, "moderator", MODERATOR)
	service = ModerationService(repository=board)
	action = await service.create_action(
		mod,
		moderation_dto.ModerationActionCreateRequest(action_type="warn", action_reason="tone", target_member_id=author.member_id),
	)
	await service.erase_action(mod, action.id)
	assert await board.moderation_actions.get(action.id) is None
	assert await board.moderation_logs.count(eq("moderation_action_id", action.id), include_deleted=True) == 0


@pytest.mark.asyncio
async def test_accepted_appeal_revokes_action(board):
	author = await _actor(board, "author")
	mod = await _actor(board, "moderator", MODERATOR)
	post = await _post(board, author)
	moderation = ModerationService(repository=board)
	appeals = AppealsService(repository=board)
	action = await moderation.create_action(
		mod,
		moderation_dto.ModerationActionCreateRequest(action_type="remove_content", action_reason="spam", target_post_id=post.id),
	)
	appeal = await appeals.create_appeal(
		author, appeal_dto.AppealCreateRequest(moderation_action_id=action.id, appeal_rationale="not spam")
	)
	with pytest.raises(ConflictError):
		await appeals.create_appeal(author, appeal_dto.AppealCreateRequest(moderation_action_id=action.id, appeal_rationale="again"))

	reviewed = await appeals.review_appeal(mod, appeal.id, appeal_dto.AppealReviewRequest(status="accepted", resolution_notes="fair"))
	assert reviewed.status == "accepted"
	assert reviewed.resolved_at is not None
	assert (await board.moderation_actions.require(action.id)).status == "revoked"
	assert await board.posts.get(post.id) is not None

	with pytest.raises(ConflictError):
		await appeals.review_appeal(mod, appeal.id, appeal_dto.AppealReviewRequest(status="rejected"))


@pytest.mark.asyncio
async def test_only_subject_may_appeal(board):
	author = await _actor(board, "author")
	bystander = await _actor(board, "bystander")
	mod = await _actor(board, "moderator", MODERATOR)
	action = await ModerationService(repository=board).create_action(
		mod,
		moderation_dto.ModerationActionCreateRequest(action_type="warn", action_reason="tone", target_member_id=author.member_id),
	)
	with pytest.raises(ForbiddenError):
		await AppealsService(repository=board).create_appeal(
			bystander, appeal_dto.AppealCreateRequest(moderation_action_id=action.id, appeal_rationale="me too")
		)


@pytest.mark.asyncio
async def test_poll_votes_and_counts(board):
	author = await _actor(board, "author")
	voter = await _actor(board, "voter")
	post = await _post(board, author)
	polls = PollsService(repository=board)

	poll = await polls.create_poll(author, post.id, poll_dto.PollCreateRequest(title="Lunch", options=["Pizza", "Sushi"]))
	assert [option.sequence for option in poll.options] == [1, 2]

	pizza = poll.options[0].id
	await polls.vote(voter, post.id, poll.id, poll_dto.PollVoteCreateRequest(option_ids=[pizza]))
	with pytest.raises(ConflictError):
		await polls.vote(voter, post.id, poll.id, poll_dto.PollVoteCreateRequest(option_ids=[pizza]))

	counted = await polls.get_poll(post.id, poll.id)
	assert {option.label: option.vote_count for option in counted.options} == {"Pizza": 1, "Sushi": 0}

	await polls.retract_votes(voter, post.id, poll.id)
	with pytest.raises(NotFoundError):
		await polls.retract_votes(voter, post.id, poll.id)


@pytest.mark.asyncio
async def test_poll_validation(board):
	author = await _actor(board, "author")
	other = await _actor(board, "other")
	post = await _post(board, author)
	polls = PollsService(repository=board)

	with pytest.raises(ValidationError):
		await polls.create_poll(author, post.id, poll_dto.PollCreateRequest(title="Dup", options=["Yes", "yes "]))
	with pytest.raises(ValidationError):
		await polls.create_poll(
			author,
			post.id,
			poll_dto.PollCreateRequest(title="Late", options=["a", "b"], closed_at=datetime.now(timezone.utc) - timedelta(hours=1)),
		)
	with pytest.raises(ForbiddenError):
		await polls.create_poll(other, post.id, poll_dto.PollCreateRequest(title="Mine", options=["a", "b"]))
