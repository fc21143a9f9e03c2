import pytest

from discuss_board.board.schemas import comments as dto
from discuss_board.board.schemas import notifications as notification_dto
from discuss_board.board.schemas import posts as post_dto
from discuss_board.sdk import HttpError
from discuss_board.settings import settings


async def _thread(client):
	return await client.posts.create(post_dto.PostCreateRequest(title="Book club", body="What are you reading?"))


@pytest.mark.asyncio
async def test_comment_notifies_post_author(join_member):
	author, author_member = await join_member("alice")
	reader, reader_member = await join_member("bob")
	post = await _thread(author)

	comment = await reader.comments.create(post.id, dto.CommentCreateRequest(content="Dune, again"))
	assert comment.depth == 0
	assert comment.author_member_id == reader_member.id
	assert comment.is_locked is False

	inbox = await author.notifications.index(notification_dto.NotificationSearchRequest())
	assert inbox.pagination.records == 1
	notice = inbox.data[0]
	assert notice.event_type == "comment_created"
	assert notice.related_entity_id == comment.id
	assert notice.recipient_member_id == author_member.id

	assert (await reader.notifications.index(notification_dto.NotificationSearchRequest())).pagination.records == 0


@pytest.mark.asyncio
async def test_own_comment_does_not_notify(join_member):
	author, _ = await join_member("carol")
	post = await _thread(author)
	await author.comments.create(post.id, dto.CommentCreateRequest(content="Starting us off"))
	assert (await author.notifications.index(notification_dto.NotificationSearchRequest())).pagination.records == 0


@pytest.mark.asyncio
async def test_replies_track_depth(join_member):
	client, _ = await join_member("dana")
	post = await _thread(client)

	parent = await client.comments.create(post.id, dto.CommentCreateRequest(content="level 0"))
	for level in range(1, 8):
		parent = await client.comments.create(post.id, dto.CommentCreateRequest(content=f"level {level}", parent_id=parent.id))
	assert parent.depth == 7

	with pytest.raises(HttpError) as exc:
		await client.comments.create(post.id, dto.CommentCreateRequest(content="too deep", parent_id=parent.id))
	assert exc.value.status == 422
	assert exc.value.detail == "max_depth_exceeded"

	replies = await client.comments.index(post.id, dto.CommentSearchRequest(parent_id=parent.parent_id))
	assert [item.id for item in replies.data] == [parent.id]


@pytest.mark.asyncio
async def test_new_comment_after_soft_delete(join_member):
	client, _ = await join_member("kim")
	post = await _thread(client)
	first = await client.comments.create(post.id, dto.CommentCreateRequest(content="one"))
	await client.comments.erase(post.id, first.id)

	second = await client.comments.create(post.id, dto.CommentCreateRequest(content="two"))
	assert second.depth == 0

	listing = await client.comments.index(post.id, dto.CommentSearchRequest())
	assert [item.content for item in listing.data] == ["two"]
	assert listing.pagination.records == 1

	with pytest.raises(HttpError) as exc:
		await client.comments.at(post.id, first.id)
	assert exc.value.status == 404


@pytest.mark.asyncio
async def test_reply_parent_must_belong_to_post(join_member):
	client, _ = await join_member("eve")
	first = await _thread(client)
	second = await _thread(client)
	parent = await client.comments.create(first.id, dto.CommentCreateRequest(content="on the first post"))

	with pytest.raises(HttpError) as exc:
		await client.comments.create(second.id, dto.CommentCreateRequest(content="wrong post", parent_id=parent.id))
	assert exc.value.status == 404

	with pytest.raises(HttpError) as exc:
		await client.comments.at(second.id, parent.id)
	assert exc.value.status == 404


@pytest.mark.asyncio
async def test_edit_history_and_owner_checks(join_member):
	author, _ = await join_member("fay")
	other, _ = await join_member("gus")
	post = await _thread(author)
	comment = await author.comments.create(post.id, dto.CommentCreateRequest(content="first draft"))

	updated = await author.comments.update(post.id, comment.id, dto.CommentUpdateRequest(content="second draft"))
	assert updated.content == "second draft"
	unchanged = await author.comments.update(post.id, comment.id, dto.CommentUpdateRequest(content="second draft"))
	assert unchanged.content == "second draft"

	histories = await author.comments.edit_histories(post.id, comment.id, dto.CommentEditHistorySearchRequest())
	assert [item.previous_content for item in histories.data] == ["first draft"]
	single = await author.comments.edit_history(post.id, comment.id, histories.data[0].id)
	assert single.previous_content == "first draft"

	with pytest.raises(HttpError) as exc:
		await other.comments.update(post.id, comment.id, dto.CommentUpdateRequest(content="mine now"))
	assert exc.value.status == 403
	assert exc.value.detail == "not_owner"

	settings.edit_window_minutes = 0
	with pytest.raises(HttpError) as exc:
		await author.comments.update(post.id, comment.id, dto.CommentUpdateRequest(content="third draft"))
	assert exc.value.detail == "edit_window_closed"


@pytest.mark.asyncio
async def test_deletion_logs_record_actor(join_member, moderator):
	author, author_member = await join_member("hal")
	mod_client, mod = moderator
	post = await _thread(author)
	own = await author.comments.create(post.id, dto.CommentCreateRequest(content="regret this"))
	rude = await author.comments.create(post.id, dto.CommentCreateRequest(content="rude remark"))

	await author.comments.erase(post.id, own.id)
	await mod_client.comments.moderate_erase(post.id, rude.id, reason="harassment")

	listed = await author.comments.index(post.id, dto.CommentSearchRequest())
	assert listed.pagination.records == 0

	own_logs = await mod_client.comments.deletion_logs(post.id, own.id, dto.CommentDeletionLogSearchRequest())
	assert [(log.actor_role, log.deletion_reason) for log in own_logs.data] == [("member", "author")]
	assert own_logs.data[0].deleted_by_member_id == author_member.id

	rude_logs = await mod_client.comments.deletion_logs(post.id, rude.id, dto.CommentDeletionLogSearchRequest(actor_role="moderator"))
	assert rude_logs.pagination.records == 1
	log = rude_logs.data[0]
	assert log.deletion_reason == "harassment"
	assert log.deleted_by_member_id == mod.member_id

	seen_by_author = await author.comments.deletion_log(post.id, rude.id, log.id)
	assert seen_by_author.id == log.id

	with pytest.raises(HttpError) as exc:
		await author.comments.deletion_logs(post.id, rude.id, dto.CommentDeletionLogSearchRequest())
	assert exc.value.status == 403


@pytest.mark.asyncio
async def test_locked_post_rejects_comments(join_member, moderator):
	author, _ = await join_member("ivy")
	mod_client, _ = moderator
	post = await _thread(author)
	await mod_client.posts.moderate(post.id, post_dto.PostUpdateRequest(business_status="locked"))

	with pytest.raises(HttpError) as exc:
		await author.comments.create(post.id, dto.CommentCreateRequest(content="anyone?"))
	assert exc.value.status == 403
	assert exc.value.detail == "post_locked"


@pytest.mark.asyncio
async def test_comment_search_by_keyword(join_member, new_client):
	client, _ = await join_member("jon")
	post = await _thread(client)
	for content in ("Loved the ending", "the ENDING was rushed", "middle chapters"):
		await client.comments.create(post.id, dto.CommentCreateRequest(content=content))

	found = await new_client().comments.index(post.id, dto.CommentSearchRequest(keyword="ending"))
	assert found.pagination.records == 2
