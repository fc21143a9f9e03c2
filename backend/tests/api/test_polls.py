from datetime import datetime, timedelta, timezone

import pytest

from discuss_board.board.schemas import polls as dto
from discuss_board.board.schemas import posts as post_dto
from discuss_board.sdk import HttpError


async def _post(client):
	return await client.posts.create(post_dto.PostCreateRequest(title="Team lunch", body="Where should we go?"))


@pytest.mark.asyncio
async def test_single_choice_poll(join_member, new_client):
	author, _ = await join_member("host")
	voter, voter_member = await join_member("guest")
	post = await _post(author)

	poll = await author.polls.create(post.id, dto.PollCreateRequest(title="Cuisine", options=["Thai", "Tacos", "Ramen"]))
	assert [option.label for option in poll.options] == ["Thai", "Tacos", "Ramen"]
	assert poll.multi_choice is False

	thai, tacos, _ = (option.id for option in poll.options)
	with pytest.raises(HttpError) as exc:
		await voter.polls.vote(post.id, poll.id, dto.PollVoteCreateRequest(option_ids=[thai, tacos]))
	assert exc.value.status == 422
	assert exc.value.detail == "single_choice_poll"

	votes = await voter.polls.vote(post.id, poll.id, dto.PollVoteCreateRequest(option_ids=[tacos]))
	assert [(vote.option_id, vote.member_id) for vote in votes] == [(tacos, voter_member.id)]

	with pytest.raises(HttpError) as exc:
		await voter.polls.vote(post.id, poll.id, dto.PollVoteCreateRequest(option_ids=[thai]))
	assert exc.value.status == 409
	assert exc.value.detail == "already_voted"

	tally = await new_client().polls.at(post.id, poll.id)
	assert {option.label: option.vote_count for option in tally.options} == {"Thai": 0, "Tacos": 1, "Ramen": 0}

	mine = await voter.polls.votes(post.id, poll.id, dto.PollVoteSearchRequest())
	assert mine.pagination.records == 1

	await voter.polls.retract(post.id, poll.id)
	with pytest.raises(HttpError) as exc:
		await voter.polls.retract(post.id, poll.id)
	assert exc.value.status == 404
	assert exc.value.detail == "vote_not_found"


@pytest.mark.asyncio
async def test_multi_choice_poll_rejects_bad_selections(join_member):
	author, _ = await join_member("planner")
	voter, _ = await join_member("attendee")
	post = await _post(author)
	poll = await author.polls.create(post.id, dto.PollCreateRequest(title="Days", options=["Mon", "Tue", "Wed"], multi_choice=True))
	other = await author.polls.create(post.id, dto.PollCreateRequest(title="Times", options=["Noon", "One"]))
	mon, tue, _ = (option.id for option in poll.options)

	with pytest.raises(HttpError) as exc:
		await voter.polls.vote(post.id, poll.id, dto.PollVoteCreateRequest(option_ids=[mon, mon]))
	assert exc.value.detail == "duplicate_option"

	with pytest.raises(HttpError) as exc:
		await voter.polls.vote(post.id, poll.id, dto.PollVoteCreateRequest(option_ids=[other.options[0].id]))
	assert exc.value.detail == "option_not_in_poll"

	votes = await voter.polls.vote(post.id, poll.id, dto.PollVoteCreateRequest(option_ids=[mon, tue]))
	assert len(votes) == 2

	listed = await voter.polls.index(post.id, dto.PollSearchRequest(keyword="day"))
	assert [item.id for item in listed.data] == [poll.id]


@pytest.mark.asyncio
async def test_closed_poll_rejects_votes(join_member):
	author, _ = await join_member("closer")
	voter, _ = await join_member("late")
	post = await _post(author)
	poll = await author.polls.create(
		post.id,
		dto.PollCreateRequest(title="Quick", options=["Yes", "No"], closed_at=datetime.now(timezone.utc) + timedelta(days=1)),
	)

	closed = await author.polls.update(post.id, poll.id, dto.PollUpdateRequest(closed_at=datetime.now(timezone.utc) - timedelta(minutes=1)))
	assert closed.closed_at is not None

	with pytest.raises(HttpError) as exc:
		await voter.polls.vote(post.id, poll.id, dto.PollVoteCreateRequest(option_ids=[poll.options[0].id]))
	assert exc.value.status == 409
	assert exc.value.detail == "poll_closed"


@pytest.mark.asyncio
async def test_poll_creation_rules(join_member):
	author, _ = await join_member("owner")
	other, _ = await join_member("intruder")
	post = await _post(author)

	with pytest.raises(HttpError) as exc:
		await author.polls.create(post.id, dto.PollCreateRequest(title="Dup", options=["Yes", " YES"]))
	assert exc.value.status == 422
	assert exc.value.detail == "duplicate_option"

	with pytest.raises(HttpError) as exc:
		await author.polls.create(
			post.id,
			dto.PollCreateRequest(title="Past", options=["a", "b"], closed_at=datetime.now(timezone.utc) - timedelta(hours=1)),
		)
	assert exc.value.detail == "closed_at_in_past"

	with pytest.raises(HttpError) as exc:
		await other.polls.create(post.id, dto.PollCreateRequest(title="Mine", options=["a", "b"]))
	assert exc.value.status == 403

	poll = await author.polls.create(post.id, dto.PollCreateRequest(title="Fine", options=["a", "b"]))
	with pytest.raises(HttpError) as exc:
		await other.polls.update(post.id, poll.id, dto.PollUpdateRequest(title="Renamed"))
	assert exc.value.status == 403
