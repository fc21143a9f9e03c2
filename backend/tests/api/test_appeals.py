import pytest
import pytest_asyncio

from discuss_board.board.schemas import appeals as dto
from discuss_board.board.schemas import moderation as moderation_dto
from discuss_board.board.schemas import notifications as notification_dto
from discuss_board.board.schemas import posts as post_dto
from discuss_board.sdk import HttpError


@pytest_asyncio.fixture
async def removed_post(join_member, moderator):
	author, author_member = await join_member("author")
	mod_client, _ = moderator
	post = await author.posts.create(post_dto.PostCreateRequest(title="Deals", body="Half price widgets"))
	action = await mod_client.moderation.create(
		moderation_dto.ModerationActionCreateRequest(action_type="remove_content", action_reason="advertising", target_post_id=post.id)
	)
	return author, author_member, mod_client, post, action


@pytest.mark.asyncio
async def test_accepted_appeal_restores_content(removed_post, new_client):
	author, author_member, mod_client, post, action = removed_post
	with pytest.raises(HttpError):
		await new_client().posts.at(post.id)

	appeal = await author.appeals.create(dto.AppealCreateRequest(moderation_action_id=action.id, appeal_rationale="Not an ad"))
	assert appeal.status == "pending"
	assert appeal.appellant_member_id == author_member.id

	with pytest.raises(HttpError) as exc:
		await author.appeals.create(dto.AppealCreateRequest(moderation_action_id=action.id, appeal_rationale="Really not"))
	assert exc.value.status == 409
	assert exc.value.detail == "appeal_exists"

	queue = await mod_client.appeals.index(dto.AppealSearchRequest(status="pending"))
	assert [item.id for item in queue.data] == [appeal.id]

	in_review = await mod_client.appeals.review(appeal.id, dto.AppealReviewRequest(status="in_review"))
	assert in_review.resolved_at is None

	accepted = await mod_client.appeals.review(appeal.id, dto.AppealReviewRequest(status="accepted", resolution_notes="Fair enough"))
	assert accepted.status == "accepted"
	assert accepted.resolved_at is not None
	assert accepted.resolution_notes == "Fair enough"

	assert (await new_client().posts.at(post.id)).id == post.id
	assert (await mod_client.moderation.at(action.id)).status == "revoked"

	logs = await mod_client.moderation.logs(action.id, moderation_dto.ModerationLogSearchRequest(event_type="appeal"))
	assert logs.pagination.records == 2

	decisions = await author.notifications.index(notification_dto.NotificationSearchRequest(event_type="appeal_decision"))
	assert decisions.pagination.records == 1

	with pytest.raises(HttpError) as exc:
		await mod_client.appeals.review(appeal.id, dto.AppealReviewRequest(status="rejected"))
	assert exc.value.status == 409
	assert exc.value.detail == "appeal_closed"


@pytest.mark.asyncio
async def test_rejected_appeal_keeps_action(removed_post):
	author, _, mod_client, _, action = removed_post
	appeal = await author.appeals.create(dto.AppealCreateRequest(moderation_action_id=action.id, appeal_rationale="Please"))
	rejected = await mod_client.appeals.review(appeal.id, dto.AppealReviewRequest(status="rejected"))
	assert rejected.status == "rejected"
	assert (await mod_client.moderation.at(action.id)).status == "active"

	second = await author.appeals.create(dto.AppealCreateRequest(moderation_action_id=action.id, appeal_rationale="New evidence"))
	assert second.id != appeal.id


@pytest.mark.asyncio
async def test_appellant_edits_and_withdraws(removed_post, join_member):
	author, _, mod_client, _, action = removed_post
	stranger, _ = await join_member("stranger")
	appeal = await author.appeals.create(dto.AppealCreateRequest(moderation_action_id=action.id, appeal_rationale="first"))

	with pytest.raises(HttpError) as exc:
		await stranger.appeals.create(dto.AppealCreateRequest(moderation_action_id=action.id, appeal_rationale="me too"))
	assert exc.value.status == 403
	assert exc.value.detail == "not_action_subject"

	with pytest.raises(HttpError) as exc:
		await stranger.appeals.own(appeal.id)
	assert exc.value.detail == "not_owner"

	edited = await author.appeals.update(appeal.id, dto.AppealUpdateRequest(appeal_rationale="clearer"))
	assert edited.appeal_rationale == "clearer"
	assert (await author.appeals.own(appeal.id)).appeal_rationale == "clearer"

	withdrawn = await author.appeals.update(appeal.id, dto.AppealUpdateRequest(status="withdrawn"))
	assert withdrawn.status == "withdrawn"
	assert withdrawn.resolved_at is not None

	with pytest.raises(HttpError) as exc:
		await author.appeals.update(appeal.id, dto.AppealUpdateRequest(appeal_rationale="changed my mind"))
	assert exc.value.status == 403
	assert exc.value.detail == "appeal_not_pending"

	with pytest.raises(HttpError) as exc:
		await mod_client.appeals.review(appeal.id, dto.AppealReviewRequest(status="accepted"))
	assert exc.value.detail == "appeal_closed"


@pytest.mark.asyncio
async def test_appealed_action_cannot_be_erased(removed_post, administrator):
	author, _, mod_client, _, action = removed_post
	admin_client, _ = administrator
	appeal = await author.appeals.create(dto.AppealCreateRequest(moderation_action_id=action.id, appeal_rationale="why"))

	await admin_client.appeals.erase(appeal.id)
	with pytest.raises(HttpError) as exc:
		await mod_client.appeals.at(appeal.id)
	assert exc.value.status == 404

	with pytest.raises(HttpError) as exc:
		await admin_client.moderation.erase(action.id)
	assert exc.value.status == 409
	assert exc.value.detail == "action_referenced"
