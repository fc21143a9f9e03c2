"""Namespaced API functions mirroring the REST routes.

Each namespace method sends a request DTO and returns the parsed response
DTO. Join, login and refresh calls store the fresh access token on the
connection so later calls are authenticated as that actor.
"""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from discuss_board.api.pagination import Page
from discuss_board.board.schemas import admin as admin_dto
from discuss_board.board.schemas import appeals as appeal_dto
from discuss_board.board.schemas import auth as auth_dto
from discuss_board.board.schemas import comments as comment_dto
from discuss_board.board.schemas import members as member_dto
from discuss_board.board.schemas import moderation as moderation_dto
from discuss_board.board.schemas import notifications as notification_dto
from discuss_board.board.schemas import polls as poll_dto
from discuss_board.board.schemas import posts as post_dto
from discuss_board.board.schemas import reactions as reaction_dto
from discuss_board.board.schemas import reports as report_dto
from discuss_board.sdk.connection import Connection

_BOARD = "/discussBoard"


class _Namespace:
	def __init__(self, connection: Connection) -> None:
		self._conn = connection


class AuthApi(_Namespace):
	async def _authorized(self, path: str, body, model):
		result = model.model_validate(await self._conn.request("POST", path, body=body))
		self._conn.authorize(result.token.access)
		return result

	async def member_join(self, body: auth_dto.MemberJoinRequest) -> auth_dto.MemberAuthorized:
		return await self._authorized("/auth/member/join", body, auth_dto.MemberAuthorized)

	async def member_login(self, body: auth_dto.LoginRequest) -> auth_dto.MemberAuthorized:
		return await self._authorized("/auth/member/login", body, auth_dto.MemberAuthorized)

	async def member_refresh(self, body: auth_dto.RefreshRequest) -> auth_dto.MemberAuthorized:
		return await self._authorized("/auth/member/refresh", body, auth_dto.MemberAuthorized)

	async def administrator_join(self, body: auth_dto.AdministratorJoinRequest) -> auth_dto.AdministratorAuthorized:
		return await self._authorized("/auth/administrator/join", body, auth_dto.AdministratorAuthorized)

	async def administrator_login(self, body: auth_dto.LoginRequest) -> auth_dto.AdministratorAuthorized:
		return await self._authorized("/auth/administrator/login", body, auth_dto.AdministratorAuthorized)

	async def administrator_refresh(self, body: auth_dto.RefreshRequest) -> auth_dto.AdministratorAuthorized:
		return await self._authorized("/auth/administrator/refresh", body, auth_dto.AdministratorAuthorized)

	async def moderator_join(self, body: auth_dto.ModeratorAppointRequest) -> auth_dto.ModeratorResponse:
		return auth_dto.ModeratorResponse.model_validate(await self._conn.request("POST", "/auth/moderator/join", body=body))

	async def moderator_login(self, body: auth_dto.LoginRequest) -> auth_dto.ModeratorAuthorized:
		return await self._authorized("/auth/moderator/login", body, auth_dto.ModeratorAuthorized)

	async def moderator_refresh(self, body: auth_dto.RefreshRequest) -> auth_dto.ModeratorAuthorized:
		return await self._authorized("/auth/moderator/refresh", body, auth_dto.ModeratorAuthorized)


class MembersApi(_Namespace):
	async def profile(self, member_id: UUID) -> member_dto.MemberProfile:
		data = await self._conn.request("GET", f"{_BOARD}/members/{member_id}/profile")
		return member_dto.MemberProfile.model_validate(data)

	async def update_profile(self, member_id: UUID, body: member_dto.ProfileUpdateRequest) -> member_dto.MemberProfile:
		data = await self._conn.request("PUT", f"{_BOARD}/member/members/{member_id}/profile", body=body)
		return member_dto.MemberProfile.model_validate(data)

	async def preferences(self) -> member_dto.NotificationPreferenceResponse:
		data = await self._conn.request("GET", f"{_BOARD}/member/notificationPreferences")
		return member_dto.NotificationPreferenceResponse.model_validate(data)

	async def update_preferences(self, body: member_dto.NotificationPreferenceUpdateRequest) -> member_dto.NotificationPreferenceResponse:
		data = await self._conn.request("PUT", f"{_BOARD}/member/notificationPreferences", body=body)
		return member_dto.NotificationPreferenceResponse.model_validate(data)

	async def index(self, body: member_dto.MemberSearchRequest) -> Page[member_dto.MemberSummary]:
		data = await self._conn.request("PATCH", f"{_BOARD}/administrator/members", body=body)
		return Page[member_dto.MemberSummary].model_validate(data)

	async def at(self, member_id: UUID) -> auth_dto.MemberResponse:
		data = await self._conn.request("GET", f"{_BOARD}/administrator/members/{member_id}")
		return auth_dto.MemberResponse.model_validate(data)

	async def update(self, member_id: UUID, body: member_dto.MemberUpdateRequest) -> auth_dto.MemberResponse:
		data = await self._conn.request("PUT", f"{_BOARD}/administrator/members/{member_id}", body=body)
		return auth_dto.MemberResponse.model_validate(data)

	async def erase(self, member_id: UUID) -> None:
		await self._conn.request("DELETE", f"{_BOARD}/administrator/members/{member_id}")

	async def consents(self, body: member_dto.ConsentRecordSearchRequest) -> Page[member_dto.ConsentRecordResponse]:
		data = await self._conn.request("PATCH", f"{_BOARD}/administrator/consentRecords", body=body)
		return Page[member_dto.ConsentRecordResponse].model_validate(data)

	async def consent(self, consent_id: UUID) -> member_dto.ConsentRecordResponse:
		data = await self._conn.request("GET", f"{_BOARD}/administrator/consentRecords/{consent_id}")
		return member_dto.ConsentRecordResponse.model_validate(data)


class AdministratorsApi(_Namespace):
	_path = f"{_BOARD}/administrator/administrators"

	async def index(self, body: member_dto.AdministratorSearchRequest) -> Page[auth_dto.AdministratorResponse]:
		return Page[auth_dto.AdministratorResponse].model_validate(await self._conn.request("PATCH", self._path, body=body))

	async def at(self, administrator_id: UUID) -> auth_dto.AdministratorResponse:
		return auth_dto.AdministratorResponse.model_validate(await self._conn.request("GET", f"{self._path}/{administrator_id}"))

	async def update(self, administrator_id: UUID, body: member_dto.AdministratorUpdateRequest) -> auth_dto.AdministratorResponse:
		data = await self._conn.request("PUT", f"{self._path}/{administrator_id}", body=body)
		return auth_dto.AdministratorResponse.model_validate(data)

	async def erase(self, administrator_id: UUID) -> None:
		await self._conn.request("DELETE", f"{self._path}/{administrator_id}")


class ModeratorsApi(_Namespace):
	_path = f"{_BOARD}/administrator/moderators"

	async def index(self, body: member_dto.ModeratorSearchRequest) -> Page[auth_dto.ModeratorResponse]:
		return Page[auth_dto.ModeratorResponse].model_validate(await self._conn.request("PATCH", self._path, body=body))

	async def at(self, moderator_id: UUID) -> auth_dto.ModeratorResponse:
		return auth_dto.ModeratorResponse.model_validate(await self._conn.request("GET", f"{self._path}/{moderator_id}"))

	async def update(self, moderator_id: UUID, body: member_dto.ModeratorUpdateRequest) -> auth_dto.ModeratorResponse:
		data = await self._conn.request("PUT", f"{self._path}/{moderator_id}", body=body)
		return auth_dto.ModeratorResponse.model_validate(data)


class PostsApi(_Namespace):
	async def index(self, body: post_dto.PostSearchRequest) -> Page[post_dto.PostSummary]:
		return Page[post_dto.PostSummary].model_validate(await self._conn.request("PATCH", f"{_BOARD}/posts", body=body))

	async def at(self, post_id: UUID) -> post_dto.PostResponse:
		return post_dto.PostResponse.model_validate(await self._conn.request("GET", f"{_BOARD}/posts/{post_id}"))

	async def create(self, body: post_dto.PostCreateRequest) -> post_dto.PostResponse:
		return post_dto.PostResponse.model_validate(await self._conn.request("POST", f"{_BOARD}/member/posts", body=body))

	async def update(self, post_id: UUID, body: post_dto.PostUpdateRequest) -> post_dto.PostResponse:
		data = await self._conn.request("PUT", f"{_BOARD}/member/posts/{post_id}", body=body)
		return post_dto.PostResponse.model_validate(data)

	async def erase(self, post_id: UUID) -> None:
		await self._conn.request("DELETE", f"{_BOARD}/member/posts/{post_id}")

	async def moderate(self, post_id: UUID, body: post_dto.PostUpdateRequest) -> post_dto.PostResponse:
		data = await self._conn.request("PUT", f"{_BOARD}/moderator/posts/{post_id}", body=body)
		return post_dto.PostResponse.model_validate(data)

	async def moderate_erase(self, post_id: UUID) -> None:
		await self._conn.request("DELETE", f"{_BOARD}/moderator/posts/{post_id}")

	async def edit_histories(
		self,
		post_id: UUID,
		body: post_dto.PostEditHistorySearchRequest,
	) -> Page[post_dto.PostEditHistoryResponse]:
		data = await self._conn.request("PATCH", f"{_BOARD}/member/posts/{post_id}/editHistories", body=body)
		return Page[post_dto.PostEditHistoryResponse].model_validate(data)

	async def edit_history(self, post_id: UUID, history_id: UUID) -> post_dto.PostEditHistoryResponse:
		data = await self._conn.request("GET", f"{_BOARD}/member/posts/{post_id}/editHistories/{history_id}")
		return post_dto.PostEditHistoryResponse.model_validate(data)


class PostTagsApi(_Namespace):
	async def index(self, post_id: UUID, body: post_dto.PostTagSearchRequest) -> Page[post_dto.PostTagResponse]:
		data = await self._conn.request("PATCH", f"{_BOARD}/posts/{post_id}/tags", body=body)
		return Page[post_dto.PostTagResponse].model_validate(data)

	async def create(self, post_id: UUID, body: post_dto.PostTagCreateRequest, *, as_moderator: bool = False) -> post_dto.PostTagResponse:
		role = "moderator" if as_moderator else "member"
		data = await self._conn.request("POST", f"{_BOARD}/{role}/posts/{post_id}/tags", body=body)
		return post_dto.PostTagResponse.model_validate(data)

	async def erase(self, post_id: UUID, tag_id: UUID, *, as_moderator: bool = False) -> None:
		role = "moderator" if as_moderator else "member"
		await self._conn.request("DELETE", f"{_BOARD}/{role}/posts/{post_id}/tags/{tag_id}")


class CommentsApi(_Namespace):
	async def index(self, post_id: UUID, body: comment_dto.CommentSearchRequest) -> Page[comment_dto.CommentResponse]:
		data = await self._conn.request("PATCH", f"{_BOARD}/posts/{post_id}/comments", body=body)
		return Page[comment_dto.CommentResponse].model_validate(data)

	async def at(self, post_id: UUID, comment_id: UUID) -> comment_dto.CommentResponse:
		data = await self._conn.request("GET", f"{_BOARD}/posts/{post_id}/comments/{comment_id}")
		return comment_dto.CommentResponse.model_validate(data)

	async def create(self, post_id: UUID, body: comment_dto.CommentCreateRequest) -> comment_dto.CommentResponse:
		data = await self._conn.request("POST", f"{_BOARD}/member/posts/{post_id}/comments", body=body)
		return comment_dto.CommentResponse.model_validate(data)

	async def update(self, post_id: UUID, comment_id: UUID, body: comment_dto.CommentUpdateRequest) -> comment_dto.CommentResponse:
		data = await self._conn.request("PUT", f"{_BOARD}/member/posts/{post_id}/comments/{comment_id}", body=body)
		return comment_dto.CommentResponse.model_validate(data)

	async def erase(self, post_id: UUID, comment_id: UUID) -> None:
		await self._conn.request("DELETE", f"{_BOARD}/member/posts/{post_id}/comments/{comment_id}")

	async def moderate_erase(self, post_id: UUID, comment_id: UUID, reason: Optional[str] = None) -> None:
		params = {"reason": reason} if reason else None
		await self._conn.request("DELETE", f"{_BOARD}/moderator/posts/{post_id}/comments/{comment_id}", params=params)

	async def edit_histories(
		self,
		post_id: UUID,
		comment_id: UUID,
		body: comment_dto.CommentEditHistorySearchRequest,
	) -> Page[comment_dto.CommentEditHistoryResponse]:
		path = f"{_BOARD}/member/posts/{post_id}/comments/{comment_id}/editHistories"
		return Page[comment_dto.CommentEditHistoryResponse].model_validate(await self._conn.request("PATCH", path, body=body))

	async def edit_history(self, post_id: UUID, comment_id: UUID, history_id: UUID) -> comment_dto.CommentEditHistoryResponse:
		path = f"{_BOARD}/member/posts/{post_id}/comments/{comment_id}/editHistories/{history_id}"
		return comment_dto.CommentEditHistoryResponse.model_validate(await self._conn.request("GET", path))

	async def deletion_logs(
		self,
		post_id: UUID,
		comment_id: UUID,
		body: comment_dto.CommentDeletionLogSearchRequest,
	) -> Page[comment_dto.CommentDeletionLogResponse]:
		path = f"{_BOARD}/moderator/posts/{post_id}/comments/{comment_id}/deletionLogs"
		return Page[comment_dto.CommentDeletionLogResponse].model_validate(await self._conn.request("PATCH", path, body=body))

	async def deletion_log(self, post_id: UUID, comment_id: UUID, log_id: UUID) -> comment_dto.CommentDeletionLogResponse:
		path = f"{_BOARD}/member/posts/{post_id}/comments/{comment_id}/deletionLogs/{log_id}"
		return comment_dto.CommentDeletionLogResponse.model_validate(await self._conn.request("GET", path))


class ReactionsApi(_Namespace):
	_post_path = f"{_BOARD}/member/postReactions"
	_comment_path = f"{_BOARD}/member/commentReactions"

	async def create_post_reaction(self, body: reaction_dto.PostReactionCreateRequest) -> reaction_dto.PostReactionResponse:
		return reaction_dto.PostReactionResponse.model_validate(await self._conn.request("POST", self._post_path, body=body))

	async def index_post_reactions(self, body: reaction_dto.PostReactionSearchRequest) -> Page[reaction_dto.PostReactionResponse]:
		return Page[reaction_dto.PostReactionResponse].model_validate(await self._conn.request("PATCH", self._post_path, body=body))

	async def post_reaction(self, reaction_id: UUID) -> reaction_dto.PostReactionResponse:
		return reaction_dto.PostReactionResponse.model_validate(await self._conn.request("GET", f"{self._post_path}/{reaction_id}"))

	async def update_post_reaction(self, reaction_id: UUID, body: reaction_dto.ReactionUpdateRequest) -> reaction_dto.PostReactionResponse:
		data = await self._conn.request("PUT", f"{self._post_path}/{reaction_id}", body=body)
		return reaction_dto.PostReactionResponse.model_validate(data)

	async def erase_post_reaction(self, reaction_id: UUID) -> None:
		await self._conn.request("DELETE", f"{self._post_path}/{reaction_id}")

	async def create_comment_reaction(self, body: reaction_dto.CommentReactionCreateRequest) -> reaction_dto.CommentReactionResponse:
		return reaction_dto.CommentReactionResponse.model_validate(await self._conn.request("POST", self._comment_path, body=body))

	async def index_comment_reactions(
		self,
		body: reaction_dto.CommentReactionSearchRequest,
	) -> Page[reaction_dto.CommentReactionResponse]:
		return Page[reaction_dto.CommentReactionResponse].model_validate(await self._conn.request("PATCH", self._comment_path, body=body))

	async def comment_reaction(self, reaction_id: UUID) -> reaction_dto.CommentReactionResponse:
		return reaction_dto.CommentReactionResponse.model_validate(await self._conn.request("GET", f"{self._comment_path}/{reaction_id}"))

	async def update_comment_reaction(self, reaction_id: UUID, body: reaction_dto.ReactionUpdateRequest) -> reaction_dto.CommentReactionResponse:
		data = await self._conn.request("PUT", f"{self._comment_path}/{reaction_id}", body=body)
		return reaction_dto.CommentReactionResponse.model_validate(data)

	async def erase_comment_reaction(self, reaction_id: UUID) -> None:
		await self._conn.request("DELETE", f"{self._comment_path}/{reaction_id}")


class ReportsApi(_Namespace):
	async def create(self, body: report_dto.ContentReportCreateRequest) -> report_dto.ContentReportResponse:
		data = await self._conn.request("POST", f"{_BOARD}/member/contentReports", body=body)
		return report_dto.ContentReportResponse.model_validate(data)

	async def erase(self, report_id: UUID) -> None:
		await self._conn.request("DELETE", f"{_BOARD}/member/contentReports/{report_id}")

	async def index(self, body: report_dto.ContentReportSearchRequest) -> Page[report_dto.ContentReportResponse]:
		data = await self._conn.request("PATCH", f"{_BOARD}/moderator/contentReports", body=body)
		return Page[report_dto.ContentReportResponse].model_validate(data)

	async def at(self, report_id: UUID) -> report_dto.ContentReportResponse:
		data = await self._conn.request("GET", f"{_BOARD}/moderator/contentReports/{report_id}")
		return report_dto.ContentReportResponse.model_validate(data)

	async def update(self, report_id: UUID, body: report_dto.ContentReportUpdateRequest) -> report_dto.ContentReportResponse:
		data = await self._conn.request("PUT", f"{_BOARD}/moderator/contentReports/{report_id}", body=body)
		return report_dto.ContentReportResponse.model_validate(data)

	async def moderate_erase(self, report_id: UUID) -> None:
		await self._conn.request("DELETE", f"{_BOARD}/moderator/contentReports/{report_id}")


class ModerationApi(_Namespace):
	_path = f"{_BOARD}/moderator/moderationActions"

	async def create(self, body: moderation_dto.ModerationActionCreateRequest) -> moderation_dto.ModerationActionResponse:
		return moderation_dto.ModerationActionResponse.model_validate(await self._conn.request("POST", self._path, body=body))

	async def index(self, body: moderation_dto.ModerationActionSearchRequest) -> Page[moderation_dto.ModerationActionSummary]:
		return Page[moderation_dto.ModerationActionSummary].model_validate(await self._conn.request("PATCH", self._path, body=body))

	async def at(self, action_id: UUID) -> moderation_dto.ModerationActionResponse:
		return moderation_dto.ModerationActionResponse.model_validate(await self._conn.request("GET", f"{self._path}/{action_id}"))

	async def update(
		self,
		action_id: UUID,
		body: moderation_dto.ModerationActionUpdateRequest,
	) -> moderation_dto.ModerationActionResponse:
		data = await self._conn.request("PUT", f"{self._path}/{action_id}", body=body)
		return moderation_dto.ModerationActionResponse.model_validate(data)

	async def erase(self, action_id: UUID) -> None:
		await self._conn.request("DELETE", f"{_BOARD}/administrator/moderationActions/{action_id}")

	async def create_log(self, action_id: UUID, body: moderation_dto.ModerationLogCreateRequest) -> moderation_dto.ModerationLogResponse:
		data = await self._conn.request("POST", f"{self._path}/{action_id}/logs", body=body)
		return moderation_dto.ModerationLogResponse.model_validate(data)

	async def logs(self, action_id: UUID, body: moderation_dto.ModerationLogSearchRequest) -> Page[moderation_dto.ModerationLogResponse]:
		data = await self._conn.request("PATCH", f"{self._path}/{action_id}/logs", body=body)
		return Page[moderation_dto.ModerationLogResponse].model_validate(data)

	async def log(self, action_id: UUID, log_id: UUID) -> moderation_dto.ModerationLogResponse:
		data = await self._conn.request("GET", f"{self._path}/{action_id}/logs/{log_id}")
		return moderation_dto.ModerationLogResponse.model_validate(data)

	async def update_log(
		self,
		action_id: UUID,
		log_id: UUID,
		body: moderation_dto.ModerationLogUpdateRequest,
	) -> moderation_dto.ModerationLogResponse:
		data = await self._conn.request("PUT", f"{self._path}/{action_id}/logs/{log_id}", body=body)
		return moderation_dto.ModerationLogResponse.model_validate(data)

	async def erase_log(self, action_id: UUID, log_id: UUID) -> None:
		await self._conn.request("DELETE", f"{_BOARD}/administrator/moderationActions/{action_id}/logs/{log_id}")


class AppealsApi(_Namespace):
	async def create(self, body: appeal_dto.AppealCreateRequest) -> appeal_dto.AppealResponse:
		return appeal_dto.AppealResponse.model_validate(await self._conn.request("POST", f"{_BOARD}/member/appeals", body=body))

	async def own(self, appeal_id: UUID) -> appeal_dto.AppealResponse:
		return appeal_dto.AppealResponse.model_validate(await self._conn.request("GET", f"{_BOARD}/member/appeals/{appeal_id}"))

	async def update(self, appeal_id: UUID, body: appeal_dto.AppealUpdateRequest) -> appeal_dto.AppealResponse:
		data = await self._conn.request("PUT", f"{_BOARD}/member/appeals/{appeal_id}", body=body)
		return appeal_dto.AppealResponse.model_validate(data)

	async def index(self, body: appeal_dto.AppealSearchRequest) -> Page[appeal_dto.AppealResponse]:
		data = await self._conn.request("PATCH", f"{_BOARD}/moderator/appeals", body=body)
		return Page[appeal_dto.AppealResponse].model_validate(data)

	async def at(self, appeal_id: UUID) -> appeal_dto.AppealResponse:
		return appeal_dto.AppealResponse.model_validate(await self._conn.request("GET", f"{_BOARD}/moderator/appeals/{appeal_id}"))

	async def review(self, appeal_id: UUID, body: appeal_dto.AppealReviewRequest) -> appeal_dto.AppealResponse:
		data = await self._conn.request("PUT", f"{_BOARD}/moderator/appeals/{appeal_id}", body=body)
		return appeal_dto.AppealResponse.model_validate(data)

	async def erase(self, appeal_id: UUID) -> None:
		await self._conn.request("DELETE", f"{_BOARD}/administrator/appeals/{appeal_id}")


class NotificationsApi(_Namespace):
	async def index(self, body: notification_dto.NotificationSearchRequest) -> Page[notification_dto.NotificationSummary]:
		data = await self._conn.request("PATCH", f"{_BOARD}/member/notifications", body=body)
		return Page[notification_dto.NotificationSummary].model_validate(data)

	async def at(self, notification_id: UUID) -> notification_dto.NotificationResponse:
		data = await self._conn.request("GET", f"{_BOARD}/member/notifications/{notification_id}")
		return notification_dto.NotificationResponse.model_validate(data)

	async def update(
		self,
		notification_id: UUID,
		body: notification_dto.NotificationUpdateRequest,
	) -> notification_dto.NotificationResponse:
		data = await self._conn.request("PUT", f"{_BOARD}/member/notifications/{notification_id}", body=body)
		return notification_dto.NotificationResponse.model_validate(data)

	async def index_all(self, body: notification_dto.NotificationSearchRequest) -> Page[notification_dto.NotificationSummary]:
		data = await self._conn.request("PATCH", f"{_BOARD}/administrator/notifications", body=body)
		return Page[notification_dto.NotificationSummary].model_validate(data)


class PollsApi(_Namespace):
	async def create(self, post_id: UUID, body: poll_dto.PollCreateRequest) -> poll_dto.PollResponse:
		data = await self._conn.request("POST", f"{_BOARD}/member/posts/{post_id}/polls", body=body)
		return poll_dto.PollResponse.model_validate(data)

	async def index(self, post_id: UUID, body: poll_dto.PollSearchRequest) -> Page[poll_dto.PollSummary]:
		data = await self._conn.request("PATCH", f"{_BOARD}/posts/{post_id}/polls", body=body)
		return Page[poll_dto.PollSummary].model_validate(data)

	async def at(self, post_id: UUID, poll_id: UUID) -> poll_dto.PollResponse:
		return poll_dto.PollResponse.model_validate(await self._conn.request("GET", f"{_BOARD}/posts/{post_id}/polls/{poll_id}"))

	async def update(self, post_id: UUID, poll_id: UUID, body: poll_dto.PollUpdateRequest) -> poll_dto.PollResponse:
		data = await self._conn.request("PUT", f"{_BOARD}/member/posts/{post_id}/polls/{poll_id}", body=body)
		return poll_dto.PollResponse.model_validate(data)

	async def vote(self, post_id: UUID, poll_id: UUID, body: poll_dto.PollVoteCreateRequest) -> list[poll_dto.PollVoteResponse]:
		data = await self._conn.request("POST", f"{_BOARD}/member/posts/{post_id}/polls/{poll_id}/votes", body=body)
		return [poll_dto.PollVoteResponse.model_validate(item) for item in data]

	async def votes(self, post_id: UUID, poll_id: UUID, body: poll_dto.PollVoteSearchRequest) -> Page[poll_dto.PollVoteResponse]:
		data = await self._conn.request("PATCH", f"{_BOARD}/member/posts/{post_id}/polls/{poll_id}/votes", body=body)
		return Page[poll_dto.PollVoteResponse].model_validate(data)

	async def retract(self, post_id: UUID, poll_id: UUID) -> None:
		await self._conn.request("DELETE", f"{_BOARD}/member/posts/{post_id}/polls/{poll_id}/votes")


class AdminApi(_Namespace):
	_path = f"{_BOARD}/administrator"

	async def create_forbidden_word(self, body: admin_dto.ForbiddenWordCreateRequest) -> admin_dto.ForbiddenWordResponse:
		data = await self._conn.request("POST", f"{self._path}/forbiddenWords", body=body)
		return admin_dto.ForbiddenWordResponse.model_validate(data)

	async def forbidden_words(self, body: admin_dto.ForbiddenWordSearchRequest) -> Page[admin_dto.ForbiddenWordResponse]:
		data = await self._conn.request("PATCH", f"{self._path}/forbiddenWords", body=body)
		return Page[admin_dto.ForbiddenWordResponse].model_validate(data)

	async def forbidden_word(self, word_id: UUID) -> admin_dto.ForbiddenWordResponse:
		return admin_dto.ForbiddenWordResponse.model_validate(await self._conn.request("GET", f"{self._path}/forbiddenWords/{word_id}"))

	async def update_forbidden_word(self, word_id: UUID, body: admin_dto.ForbiddenWordUpdateRequest) -> admin_dto.ForbiddenWordResponse:
		data = await self._conn.request("PUT", f"{self._path}/forbiddenWords/{word_id}", body=body)
		return admin_dto.ForbiddenWordResponse.model_validate(data)

	async def erase_forbidden_word(self, word_id: UUID) -> None:
		await self._conn.request("DELETE", f"{self._path}/forbiddenWords/{word_id}")

	async def create_setting(self, body: admin_dto.SettingCreateRequest) -> admin_dto.SettingResponse:
		return admin_dto.SettingResponse.model_validate(await self._conn.request("POST", f"{self._path}/settings", body=body))

	async def settings(self, body: admin_dto.SettingSearchRequest) -> Page[admin_dto.SettingResponse]:
		return Page[admin_dto.SettingResponse].model_validate(await self._conn.request("PATCH", f"{self._path}/settings", body=body))

	async def setting(self, setting_id: UUID) -> admin_dto.SettingResponse:
		return admin_dto.SettingResponse.model_validate(await self._conn.request("GET", f"{self._path}/settings/{setting_id}"))

	async def update_setting(self, setting_id: UUID, body: admin_dto.SettingUpdateRequest) -> admin_dto.SettingResponse:
		data = await self._conn.request("PUT", f"{self._path}/settings/{setting_id}", body=body)
		return admin_dto.SettingResponse.model_validate(data)

	async def audit_logs(self, body: admin_dto.AuditLogSearchRequest) -> Page[admin_dto.AuditLogResponse]:
		return Page[admin_dto.AuditLogResponse].model_validate(await self._conn.request("PATCH", f"{self._path}/auditLogs", body=body))

	async def audit_log(self, log_id: UUID) -> admin_dto.AuditLogResponse:
		return admin_dto.AuditLogResponse.model_validate(await self._conn.request("GET", f"{self._path}/auditLogs/{log_id}"))


class DiscussBoardClient:
	"""Entry point bundling one namespace per API area over a shared connection."""

	def __init__(self, connection: Connection) -> None:
		self.connection = connection
		self.auth = AuthApi(connection)
		self.members = MembersApi(connection)
		self.administrators = AdministratorsApi(connection)
		self.moderators = ModeratorsApi(connection)
		self.posts = PostsApi(connection)
		self.post_tags = PostTagsApi(connection)
		self.comments = CommentsApi(connection)
		self.reactions = ReactionsApi(connection)
		self.reports = ReportsApi(connection)
		self.moderation = ModerationApi(connection)
		self.appeals = AppealsApi(connection)
		self.notifications = NotificationsApi(connection)
		self.polls = PollsApi(connection)
		self.admin = AdminApi(connection)


__all__ = ["DiscussBoardClient"]
