import pytest

from discuss_board.board.schemas import comments as comment_dto
from discuss_board.board.schemas import members as member_dto
from discuss_board.board.schemas import notifications as dto
from discuss_board.board.schemas import posts as post_dto
from discuss_board.sdk import HttpError


async def _commented(author, commenter, content: str = "Nice post"):
	post = await author.posts.create(post_dto.PostCreateRequest(title="Photos", body="From the hike"))
	await commenter.comments.create(post.id, comment_dto.CommentCreateRequest(content=content))
	return post


@pytest.mark.asyncio
async def test_mark_notification_read(join_member):
	author, _ = await join_member("alice")
	commenter, _ = await join_member("bob")
	await _commented(author, commenter)

	inbox = await author.notifications.index(dto.NotificationSearchRequest())
	notice_id = inbox.data[0].id
	detail = await author.notifications.at(notice_id)
	assert detail.delivery_channel == "in_app"
	assert detail.delivery_status == "delivered"
	assert detail.read_at is None

	read = await author.notifications.update(notice_id, dto.NotificationUpdateRequest(delivery_status="read"))
	assert read.delivery_status == "read"
	assert read.read_at is not None

	again = await author.notifications.update(notice_id, dto.NotificationUpdateRequest(delivery_status="read"))
	assert again.read_at == read.read_at

	unread = await author.notifications.index(dto.NotificationSearchRequest(delivery_status="delivered"))
	assert unread.pagination.records == 0


@pytest.mark.asyncio
async def test_notifications_are_private(join_member):
	author, _ = await join_member("carol")
	commenter, _ = await join_member("dave")
	await _commented(author, commenter)
	notice_id = (await author.notifications.index(dto.NotificationSearchRequest())).data[0].id

	with pytest.raises(HttpError) as exc:
		await commenter.notifications.at(notice_id)
	assert exc.value.status == 403
	assert exc.value.detail == "not_recipient"

	with pytest.raises(HttpError) as exc:
		await commenter.notifications.update(notice_id, dto.NotificationUpdateRequest(delivery_status="read"))
	assert exc.value.detail == "not_recipient"


@pytest.mark.asyncio
async def test_preferences_suppress_comment_alerts(join_member):
	author, _ = await join_member("erin")
	commenter, _ = await join_member("frank")

	defaults = await author.members.preferences()
	assert defaults.in_app_enabled is True
	assert defaults.comment_alerts is True

	updated = await author.members.update_preferences(member_dto.NotificationPreferenceUpdateRequest(comment_alerts=False))
	assert updated.comment_alerts is False
	assert updated.id == defaults.id

	await _commented(author, commenter)
	assert (await author.notifications.index(dto.NotificationSearchRequest())).pagination.records == 0

	await author.members.update_preferences(member_dto.NotificationPreferenceUpdateRequest(comment_alerts=True, in_app_enabled=False))
	await _commented(author, commenter)
	assert (await author.notifications.index(dto.NotificationSearchRequest())).pagination.records == 0


@pytest.mark.asyncio
async def test_administrator_sees_all_notifications(join_member, administrator):
	admin_client, _ = administrator
	author, author_member = await join_member("gina")
	commenter, _ = await join_member("hank")
	await _commented(author, commenter)

	everything = await admin_client.notifications.index_all(dto.NotificationSearchRequest())
	assert everything.pagination.records == 1

	for_author = await admin_client.notifications.index_all(dto.NotificationSearchRequest(recipient_member_id=author_member.id))
	assert [item.recipient_member_id for item in for_author.data] == [author_member.id]

	with pytest.raises(HttpError) as exc:
		await author.notifications.index_all(dto.NotificationSearchRequest())
	assert exc.value.status == 403
