"""Forbidden word, settings and audit log routes for administrators."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from discuss_board.api.pagination import Page
from discuss_board.board.api._errors import to_http_error
from discuss_board.board.api.deps import administrator_actor
from discuss_board.board.domain.audit_service import AuditService
from discuss_board.board.domain.catalog_service import CatalogService
from discuss_board.board.domain.exceptions import BoardError
from discuss_board.board.schemas import admin as dto
from discuss_board.infra.auth import AuthenticatedActor

router = APIRouter(prefix="/discussBoard/administrator", tags=["admin"])
_catalog = CatalogService()
_audit = AuditService()


@router.post("/forbiddenWords", response_model=dto.ForbiddenWordResponse, status_code=status.HTTP_201_CREATED)
async def create_forbidden_word_endpoint(
	payload: dto.ForbiddenWordCreateRequest,
	actor: AuthenticatedActor = Depends(administrator_actor),
) -> dto.ForbiddenWordResponse:
	try:
		return await _catalog.create_forbidden_word(actor, payload)
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.patch("/forbiddenWords", response_model=Page[dto.ForbiddenWordResponse])
async def index_forbidden_words_endpoint(
	payload: dto.ForbiddenWordSearchRequest,
	actor: AuthenticatedActor = Depends(administrator_actor),
) -> Page[dto.ForbiddenWordResponse]:
	try:
		return await _catalog.list_forbidden_words(payload)
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.get("/forbiddenWords/{word_id}", response_model=dto.ForbiddenWordResponse)
async def get_forbidden_word_endpoint(
	word_id: UUID,
	actor: AuthenticatedActor = Depends(administrator_actor),
) -> dto.ForbiddenWordResponse:
	try:
		return await _catalog.get_forbidden_word(word_id)
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.put("/forbiddenWords/{word_id}", response_model=dto.ForbiddenWordResponse)
async def update_forbidden_word_endpoint(
	word_id: UUID,
	payload: dto.ForbiddenWordUpdateRequest,
	actor: AuthenticatedActor = Depends(administrator_actor),
) -> dto.ForbiddenWordResponse:
	try:
		return await _catalog.update_forbidden_word(actor, word_id, payload)
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.delete(
	"/forbiddenWords/{word_id}",
	status_code=status.HTTP_204_NO_CONTENT,
	response_class=Response,
	response_model=None,
)
async def erase_forbidden_word_endpoint(
	word_id: UUID,
	actor: AuthenticatedActor = Depends(administrator_actor),
) -> None:
	try:
		await _catalog.erase_forbidden_word(actor, word_id)
		return None
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.post("/settings", response_model=dto.SettingResponse, status_code=status.HTTP_201_CREATED)
async def create_setting_endpoint(
	payload: dto.SettingCreateRequest,
	actor: AuthenticatedActor = Depends(administrator_actor),
) -> dto.SettingResponse:
	try:
		return await _catalog.create_setting(actor, payload)
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.patch("/settings", response_model=Page[dto.SettingResponse])
async def index_settings_endpoint(
	payload: dto.SettingSearchRequest,
	actor: AuthenticatedActor = Depends(administrator_actor),
) -> Page[dto.SettingResponse]:
	try:
		return await _catalog.list_settings(payload)
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.get("/settings/{setting_id}", response_model=dto.SettingResponse)
async def get_setting_endpoint(
	setting_id: UUID,
	actor: AuthenticatedActor = Depends(administrator_actor),
) -> dto.SettingResponse:
	try:
		return await _catalog.get_setting(setting_id)
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.put("/settings/{setting_id}", response_model=dto.SettingResponse)
async def update_setting_endpoint(
	setting_id: UUID,
	payload: dto.SettingUpdateRequest,
	actor: AuthenticatedActor = Depends(administrator_actor),
) -> dto.SettingResponse:
	try:
		return await _catalog.update_setting(actor, setting_id, payload)
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.patch("/auditLogs", response_model=Page[dto.AuditLogResponse])
async def index_audit_logs_endpoint(
	payload: dto.AuditLogSearchRequest,
	actor: AuthenticatedActor = Depends(administrator_actor),
) -> Page[dto.AuditLogResponse]:
	try:
		return await _audit.list_logs(payload)
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.get("/auditLogs/{log_id}", response_model=dto.AuditLogResponse)
async def get_audit_log_endpoint(
	log_id: UUID,
	actor: AuthenticatedActor = Depends(administrator_actor),
) -> dto.AuditLogResponse:
	try:
		return await _audit.get_log(log_id)
	except BoardError as exc:
		raise to_http_error(exc) from exc
