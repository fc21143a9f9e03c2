"""Administrator catalogue: forbidden words and board settings."""

from __future__ import annotations

from uuid import UUID

from discuss_board.api.pagination import Page, build_page
from discuss_board.board.domain import repo as repo_module
from discuss_board.board.domain.audit_service import AuditService
from discuss_board.board.domain.exceptions import ConflictError
from discuss_board.board.schemas import admin as dto
from discuss_board.infra.auth import AuthenticatedActor
from discuss_board.infra.store import contains, eq


def _normalise_expression(expression: str) -> str:
	return " ".join(expression.split()).lower()


class CatalogService:
	def __init__(self, *, repository: repo_module.BoardRepository | None = None) -> None:
		self.repo = repository or repo_module.BoardRepository()
		self.audit = AuditService(repository=self.repo)

	async def active_expressions(self) -> list[str]:
		words = await self.repo.forbidden_words.find()
		return [word.expression for word in words]

	async def _ensure_expression_free(self, expression: str, word_id: UUID | None = None) -> None:
		existing = await self.repo.forbidden_words.find_one(eq("expression", expression))
		if existing is not None and existing.id != word_id:
			raise ConflictError("forbidden_word_exists")

	async def create_forbidden_word(
		self,
		actor: AuthenticatedActor,
		payload: dto.ForbiddenWordCreateRequest,
	) -> dto.ForbiddenWordResponse:
		expression = _normalise_expression(payload.expression)
		await self._ensure_expression_free(expression)
		async with self.repo.transaction():
			word = await self.repo.forbidden_words.insert(expression=expression, description=payload.description)
			await self.audit.record(actor, "forbidden_word_created", "forbidden_word", word.id, expression)
		return dto.ForbiddenWordResponse.model_validate(word)

	async def list_forbidden_words(self, request: dto.ForbiddenWordSearchRequest) -> Page[dto.ForbiddenWordResponse]:
		conditions = []
		if request.keyword:
			conditions.append(contains("expression", request.keyword))
		items, records = await self.repo.forbidden_words.page(conditions, request)
		return build_page([dto.ForbiddenWordResponse.model_validate(item) for item in items], request=request, records=records)

	async def get_forbidden_word(self, word_id: UUID) -> dto.ForbiddenWordResponse:
		return dto.ForbiddenWordResponse.model_validate(await self.repo.forbidden_words.require(word_id))

	async def update_forbidden_word(
		self,
		actor: AuthenticatedActor,
		word_id: UUID,
		payload: dto.ForbiddenWordUpdateRequest,
	) -> dto.ForbiddenWordResponse:
		await self.repo.forbidden_words.require(word_id)
		changes = payload.model_dump(exclude_none=True)
		if "expression" in changes:
			changes["expression"] = _normalise_expression(changes["expression"])
			await self._ensure_expression_free(changes["expression"], word_id)
		async with self.repo.transaction():
			word = await self.repo.forbidden_words.update(word_id, **changes)
			await self.audit.record(actor, "forbidden_word_updated", "forbidden_word", word_id)
		return dto.ForbiddenWordResponse.model_validate(word)

	async def erase_forbidden_word(self, actor: AuthenticatedActor, word_id: UUID) -> None:
		await self.repo.forbidden_words.require(word_id)
		async with self.repo.transaction():
			await self.repo.forbidden_words.soft_delete(word_id)
			await self.audit.record(actor, "forbidden_word_erased", "forbidden_word", word_id)

	async def create_setting(self, actor: AuthenticatedActor, payload: dto.SettingCreateRequest) -> dto.SettingResponse:
		if await self.repo.settings.find_one(eq("key", payload.key)) is not None:
			raise ConflictError("setting_exists")
		async with self.repo.transaction():
			setting = await self.repo.settings.insert(key=payload.key, value=payload.value, description=payload.description)
			await self.audit.record(actor, "setting_created", "setting", setting.id, payload.key)
		return dto.SettingResponse.model_validate(setting)

	async def list_settings(self, request: dto.SettingSearchRequest) -> Page[dto.SettingResponse]:
		conditions = []
		if request.key:
			conditions.append(contains("key", request.key))
		items, records = await self.repo.settings.page(conditions, request)
		return build_page([dto.SettingResponse.model_validate(item) for item in items], request=request, records=records)

	async def get_setting(self, setting_id: UUID) -> dto.SettingResponse:
		return dto.SettingResponse.model_validate(await self.repo.settings.require(setting_id))

	async def update_setting(
		self,
		actor: AuthenticatedActor,
		setting_id: UUID,
		payload: dto.SettingUpdateRequest,
	) -> dto.SettingResponse:
		current = await self.repo.settings.require(setting_id)
		async with self.repo.transaction():
			setting = await self.repo.settings.update(setting_id, **payload.model_dump(exclude_none=True))
			await self.audit.record(actor, "setting_updated", "setting", setting_id, current.key)
		return dto.SettingResponse.model_validate(setting)


__all__ = ["CatalogService"]
