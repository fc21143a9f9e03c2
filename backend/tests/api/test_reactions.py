import pytest
import pytest_asyncio

from discuss_board.board.schemas import comments as comment_dto
from discuss_board.board.schemas import posts as post_dto
from discuss_board.board.schemas import reactions as dto
from discuss_board.sdk import HttpError


@pytest_asyncio.fixture
async def thread(join_member):
	author, _ = await join_member("author")
	fan, _ = await join_member("fan")
	post = await author.posts.create(post_dto.PostCreateRequest(title="Show and tell", body="Post your projects"))
	comment = await author.comments.create(post.id, comment_dto.CommentCreateRequest(content="Mine is a birdhouse"))
	return author, fan, post, comment


@pytest.mark.asyncio
async def test_post_reaction_lifecycle(thread):
	author, fan, post, _ = thread

	reaction = await fan.reactions.create_post_reaction(dto.PostReactionCreateRequest(post_id=post.id, reaction_type="like"))
	assert reaction.reaction_type == "like"

	with pytest.raises(HttpError) as exc:
		await fan.reactions.create_post_reaction(dto.PostReactionCreateRequest(post_id=post.id, reaction_type="dislike"))
	assert exc.value.status == 409
	assert exc.value.detail == "duplicate_reaction"

	changed = await fan.reactions.update_post_reaction(reaction.id, dto.ReactionUpdateRequest(reaction_type="dislike"))
	assert changed.reaction_type == "dislike"

	with pytest.raises(HttpError) as exc:
		await author.reactions.post_reaction(reaction.id)
	assert exc.value.status == 403
	assert exc.value.detail == "not_owner"

	await fan.reactions.erase_post_reaction(reaction.id)
	listed = await fan.reactions.index_post_reactions(dto.PostReactionSearchRequest(post_id=post.id))
	assert listed.pagination.records == 0

	revived = await fan.reactions.create_post_reaction(dto.PostReactionCreateRequest(post_id=post.id, reaction_type="like"))
	assert revived.id == reaction.id
	assert revived.deleted_at is None
	assert (await fan.reactions.post_reaction(reaction.id)).reaction_type == "like"


@pytest.mark.asyncio
async def test_members_cannot_react_to_own_content(thread):
	author, _, post, comment = thread

	with pytest.raises(HttpError) as exc:
		await author.reactions.create_post_reaction(dto.PostReactionCreateRequest(post_id=post.id, reaction_type="like"))
	assert exc.value.status == 403
	assert exc.value.detail == "own_content"

	with pytest.raises(HttpError) as exc:
		await author.reactions.create_comment_reaction(dto.CommentReactionCreateRequest(comment_id=comment.id, reaction_type="like"))
	assert exc.value.detail == "own_content"


@pytest.mark.asyncio
async def test_comment_reactions(thread):
	_, fan, _, comment = thread

	reaction = await fan.reactions.create_comment_reaction(dto.CommentReactionCreateRequest(comment_id=comment.id, reaction_type="dislike"))
	assert reaction.comment_id == comment.id

	likes = await fan.reactions.index_comment_reactions(dto.CommentReactionSearchRequest(reaction_type="like"))
	assert likes.pagination.records == 0
	dislikes = await fan.reactions.index_comment_reactions(dto.CommentReactionSearchRequest(reaction_type="dislike"))
	assert [item.id for item in dislikes.data] == [reaction.id]

	updated = await fan.reactions.update_comment_reaction(reaction.id, dto.ReactionUpdateRequest(reaction_type="like"))
	assert updated.reaction_type == "like"
	assert (await fan.reactions.comment_reaction(reaction.id)).reaction_type == "like"

	await fan.reactions.erase_comment_reaction(reaction.id)
	with pytest.raises(HttpError) as exc:
		await fan.reactions.comment_reaction(reaction.id)
	assert exc.value.status == 404


@pytest.mark.asyncio
async def test_reacting_to_missing_post(join_member):
	client, _ = await join_member("lost")
	with pytest.raises(HttpError) as exc:
		await client.reactions.create_post_reaction(
			dto.PostReactionCreateRequest(post_id="00000000-0000-0000-0000-000000000000", reaction_type="like")
		)
	assert exc.value.status == 404
