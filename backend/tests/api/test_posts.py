from uuid import uuid4

import pytest

from discuss_board.board.schemas import admin as admin_dto
from discuss_board.board.schemas import posts as dto
from discuss_board.sdk import HttpError
from discuss_board.settings import settings


async def _post(client, title: str = "Weekly thread", body: str = "Say hi to everyone", **extra) -> dto.PostResponse:
	return await client.posts.create(dto.PostCreateRequest(title=title, body=body, **extra))


@pytest.mark.asyncio
async def test_create_read_and_search_posts(join_member, new_client):
	client, member = await join_member("alice")
	first = await _post(client, title="Gardening tips", body="Water early")
	await _post(client, title="Cooking", body="Slow roast gardening vegetables", business_status="limited")

	fetched = await new_client().posts.at(first.id)
	assert fetched.title == "Gardening tips"
	assert fetched.author_member_id == member.id
	assert fetched.business_status == "public"

	everything = await client.posts.index(dto.PostSearchRequest())
	assert everything.pagination.records == 2
	assert everything.pagination.pages == 1

	matching = await client.posts.index(dto.PostSearchRequest(keyword="GARDEN", sort_by="title", sort_direction="asc"))
	assert [post.title for post in matching.data] == ["Cooking", "Gardening tips"]

	limited = await client.posts.index(dto.PostSearchRequest(business_status="limited"))
	assert [post.title for post in limited.data] == ["Cooking"]


@pytest.mark.asyncio
async def test_pagination_envelope(join_member):
	client, _ = await join_member("pager")
	for index in range(5):
		await _post(client, title=f"post {index}")

	page = await client.posts.index(dto.PostSearchRequest(page=2, limit=2, sort_by="title", sort_direction="asc"))
	assert page.pagination.current == 2
	assert page.pagination.limit == 2
	assert page.pagination.records == 5
	assert page.pagination.pages == 3
	assert [post.title for post in page.data] == ["post 2", "post 3"]

	beyond = await client.posts.index(dto.PostSearchRequest(page=9, limit=2))
	assert beyond.data == []
	assert beyond.pagination.records == 5


@pytest.mark.asyncio
async def test_members_cannot_create_locked_posts(join_member):
	client, _ = await join_member("bob")
	forged = dto.PostCreateRequest.model_construct(title="Locked", body="Nobody may reply", business_status="locked")
	with pytest.raises(HttpError) as exc:
		await client.posts.create(forged)
	assert exc.value.status == 422
	assert exc.value.detail == "validation_error"


@pytest.mark.asyncio
async def test_update_records_edit_history(join_member):
	client, member = await join_member("carol")
	post = await _post(client)

	updated = await client.posts.update(post.id, dto.PostUpdateRequest(body="Say hello", edit_reason="typo"))
	assert updated.body == "Say hello"

	histories = await client.posts.edit_histories(post.id, dto.PostEditHistorySearchRequest())
	assert histories.pagination.records == 1
	history = histories.data[0]
	assert history.previous_body == "Say hi to everyone"
	assert history.edit_reason == "typo"
	assert history.editor_member_id == member.id

	single = await client.posts.edit_history(post.id, history.id)
	assert single.id == history.id

	await client.posts.update(post.id, dto.PostUpdateRequest(business_status="limited"))
	again = await client.posts.edit_histories(post.id, dto.PostEditHistorySearchRequest())
	assert again.pagination.records == 1


@pytest.mark.asyncio
async def test_only_the_author_edits_within_the_window(join_member):
	author, _ = await join_member("dana")
	other, _ = await join_member("eve")
	post = await _post(author)

	with pytest.raises(HttpError) as exc:
		await other.posts.update(post.id, dto.PostUpdateRequest(title="Hijacked"))
	assert exc.value.status == 403
	assert exc.value.detail == "not_owner"

	with pytest.raises(HttpError) as exc:
		await other.posts.edit_histories(post.id, dto.PostEditHistorySearchRequest())
	assert exc.value.status == 403

	with pytest.raises(HttpError) as exc:
		await author.posts.update(post.id, dto.PostUpdateRequest(business_status="locked"))
	assert exc.value.detail == "status_requires_moderator"

	settings.edit_window_minutes = 0
	with pytest.raises(HttpError) as exc:
		await author.posts.update(post.id, dto.PostUpdateRequest(title="Too late"))
	assert exc.value.status == 403
	assert exc.value.detail == "edit_window_closed"
	with pytest.raises(HttpError) as exc:
		await author.posts.erase(post.id)
	assert exc.value.detail == "edit_window_closed"


@pytest.mark.asyncio
async def test_erase_hides_post(join_member, new_client):
	client, _ = await join_member("fay")
	post = await _post(client)
	await client.posts.erase(post.id)

	with pytest.raises(HttpError) as exc:
		await new_client().posts.at(post.id)
	assert exc.value.status == 404
	assert (await client.posts.index(dto.PostSearchRequest())).pagination.records == 0


@pytest.mark.asyncio
async def test_moderator_locks_and_erases_posts(join_member, moderator):
	author, _ = await join_member("gus")
	mod_client, _ = moderator
	post = await _post(author)

	with pytest.raises(HttpError) as exc:
		await author.posts.moderate(post.id, dto.PostUpdateRequest(business_status="locked"))
	assert exc.value.status == 403
	assert exc.value.detail == "insufficient_role"

	locked = await mod_client.posts.moderate(post.id, dto.PostUpdateRequest(business_status="locked", edit_reason="heated"))
	assert locked.business_status == "locked"

	with pytest.raises(HttpError) as exc:
		await author.posts.update(post.id, dto.PostUpdateRequest(title="Unlock me"))
	assert exc.value.detail == "post_locked"

	await mod_client.posts.moderate_erase(post.id)
	with pytest.raises(HttpError) as exc:
		await author.posts.at(post.id)
	assert exc.value.status == 404


@pytest.mark.asyncio
async def test_tags_limit_and_duplicates(join_member, moderator):
	client, _ = await join_member("hal")
	mod_client, _ = moderator
	post = await _post(client)
	tags = [uuid4() for _ in range(settings.max_tags_per_post)]

	for tag_id in tags:
		await client.post_tags.create(post.id, dto.PostTagCreateRequest(tag_id=tag_id))

	with pytest.raises(HttpError) as exc:
		await client.post_tags.create(post.id, dto.PostTagCreateRequest(tag_id=tags[0]))
	assert exc.value.status == 409
	assert exc.value.detail == "tag_already_assigned"

	with pytest.raises(HttpError) as exc:
		await mod_client.post_tags.create(post.id, dto.PostTagCreateRequest(tag_id=uuid4()), as_moderator=True)
	assert exc.value.status == 422
	assert exc.value.detail == "tag_limit"

	listed = await client.post_tags.index(post.id, dto.PostTagSearchRequest())
	assert listed.pagination.records == len(tags)

	tagged = await client.posts.index(dto.PostSearchRequest(tag_id=tags[1]))
	assert [item.id for item in tagged.data] == [post.id]

	await mod_client.post_tags.erase(post.id, tags[0], as_moderator=True)
	await client.post_tags.erase(post.id, tags[1])
	assert (await client.post_tags.index(post.id, dto.PostTagSearchRequest())).pagination.records == len(tags) - 2

	with pytest.raises(HttpError) as exc:
		await client.post_tags.erase(post.id, tags[1])
	assert exc.value.status == 404


@pytest.mark.asyncio
async def test_forbidden_words_block_posts(administrator, join_member):
	admin_client, _ = administrator
	client, _ = await join_member("ivy")
	await admin_client.admin.create_forbidden_word(admin_dto.ForbiddenWordCreateRequest(expression="Spoiler"))

	with pytest.raises(HttpError) as exc:
		await _post(client, title="Big SPOILER inside")
	assert exc.value.status == 422
	assert exc.value.detail == "forbidden_word"

	post = await _post(client)
	with pytest.raises(HttpError) as exc:
		await client.posts.update(post.id, dto.PostUpdateRequest(body="contains a spoiler"))
	assert exc.value.detail == "forbidden_word"
