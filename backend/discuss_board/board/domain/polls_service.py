"""Polls attached to posts, their options and member votes."""

from __future__ import annotations

from collections import Counter
from uuid import UUID

from discuss_board.api.pagination import Page, build_page
from discuss_board.board.domain import models, policies
from discuss_board.board.domain import repo as repo_module
from discuss_board.board.domain.exceptions import ConflictError, NotFoundError, ValidationError
from discuss_board.board.schemas import polls as dto
from discuss_board.infra.auth import AuthenticatedActor
from discuss_board.infra.store import Ordering, contains, eq
from discuss_board.obs import logging as obs_logging
from discuss_board.obs import metrics as obs_metrics

_LOG = obs_logging.get_logger(__name__)


class PollsService:
	def __init__(self, *, repository: repo_module.BoardRepository | None = None) -> None:
		self.repo = repository or repo_module.BoardRepository()

	async def _poll_on_post(self, post_id: UUID, poll_id: UUID) -> models.Poll:
		await self.repo.posts.require(post_id)
		poll = await self.repo.polls.require(poll_id)
		if poll.post_id != post_id:
			raise NotFoundError("poll_not_found")
		return poll

	async def _options(self, poll_id: UUID) -> list[models.PollOption]:
		return await self.repo.poll_options.find(eq("poll_id", poll_id), order=Ordering("sequence", "asc"))

	async def _to_response(self, poll: models.Poll) -> dto.PollResponse:
		options = await self._options(poll.id)
		counts = Counter(vote.option_id for vote in await self.repo.poll_votes.find(eq("poll_id", poll.id)))
		data = poll.model_dump()
		data["options"] = [
			dto.PollOptionResponse(
				id=option.id,
				poll_id=option.poll_id,
				label=option.label,
				sequence=option.sequence,
				vote_count=counts.get(option.id, 0),
			)
			for option in options
		]
		return dto.PollResponse(**data)

	async def create_poll(
		self,
		actor: AuthenticatedActor,
		post_id: UUID,
		payload: dto.PollCreateRequest,
	) -> dto.PollResponse:
		post = await self.repo.posts.require(post_id)
		if not actor.is_staff:
			policies.ensure_owner(actor.member_id, post.author_member_id)
		policies.ensure_post_open(post)
		labels = [label.strip() for label in payload.options]
		if len({label.lower() for label in labels}) != len(labels):
			raise ValidationError("duplicate_option")
		now = repo_module.utcnow()
		if payload.closed_at is not None and payload.closed_at <= now:
			raise ValidationError("closed_at_in_past")
		async with self.repo.transaction():
			poll = await self.repo.polls.insert(
				post_id=post_id,
				created_by_member_id=actor.member_id,
				title=payload.title,
				description=payload.description,
				multi_choice=payload.multi_choice,
				opened_at=now,
				closed_at=payload.closed_at,
			)
			for sequence, label in enumerate(labels, start=1):
				await self.repo.poll_options.insert(poll_id=poll.id, label=label, sequence=sequence)
		_LOG.info("poll_created", extra={"poll_id": str(poll.id), "post_id": str(post_id)})
		return await self._to_response(poll)

	async def list_polls(self, post_id: UUID, request: dto.PollSearchRequest) -> Page[dto.PollSummary]:
		await self.repo.posts.require(post_id)
		conditions = [eq("post_id", post_id)]
		if request.keyword:
			conditions.append(contains("title", request.keyword))
		items, records = await self.repo.polls.page(conditions, request)
		return build_page([dto.PollSummary.model_validate(item) for item in items], request=request, records=records)

	async def get_poll(self, post_id: UUID, poll_id: UUID) -> dto.PollResponse:
		return await self._to_response(await self._poll_on_post(post_id, poll_id))

	async def update_poll(
		self,
		actor: AuthenticatedActor,
		post_id: UUID,
		poll_id: UUID,
		payload: dto.PollUpdateRequest,
	) -> dto.PollResponse:
		poll = await self._poll_on_post(post_id, poll_id)
		post = await self.repo.posts.require(post_id)
		if not actor.is_staff:
			policies.ensure_owner(actor.member_id, poll.created_by_member_id)
		policies.ensure_post_open(post)
		changes = payload.model_dump(exclude_none=True)
		if changes:
			poll = await self.repo.polls.update(poll_id, **changes)
		return await self._to_response(poll)

	async def vote(
		self,
		actor: AuthenticatedActor,
		post_id: UUID,
		poll_id: UUID,
		payload: dto.PollVoteCreateRequest,
	) -> list[dto.PollVoteResponse]:
		poll = await self._poll_on_post(post_id, poll_id)
		policies.ensure_poll_open(poll, repo_module.utcnow())
		options = await self._options(poll_id)
		policies.ensure_vote_selection(poll, payload.option_ids, (option.id for option in options))
		if await self.repo.poll_votes.count(eq("poll_id", poll_id), eq("member_id", actor.member_id)) > 0:
			raise ConflictError("already_voted")
		async with self.repo.transaction():
			votes = [
				await self.repo.poll_votes.insert(poll_id=poll_id, option_id=option_id, member_id=actor.member_id)
				for option_id in payload.option_ids
			]
		obs_metrics.inc_poll_votes(len(votes))
		return [dto.PollVoteResponse.model_validate(vote) for vote in votes]

	async def list_own_votes(
		self,
		actor: AuthenticatedActor,
		post_id: UUID,
		poll_id: UUID,
		request: dto.PollVoteSearchRequest,
	) -> Page[dto.PollVoteResponse]:
		await self._poll_on_post(post_id, poll_id)
		conditions = [eq("poll_id", poll_id), eq("member_id", actor.member_id)]
		items, records = await self.repo.poll_votes.page(conditions, request)
		return build_page([dto.PollVoteResponse.model_validate(item) for item in items], request=request, records=records)

	async def retract_votes(self, actor: AuthenticatedActor, post_id: UUID, poll_id: UUID) -> None:
		poll = await self._poll_on_post(post_id, poll_id)
		policies.ensure_poll_open(poll, repo_module.utcnow())
		votes = await self.repo.poll_votes.find(eq("poll_id", poll_id), eq("member_id", actor.member_id))
		if not votes:
			raise NotFoundError("vote_not_found")
		async with self.repo.transaction():
			for vote in votes:
				await self.repo.poll_votes.delete(vote.id)


__all__ = ["PollsService"]
