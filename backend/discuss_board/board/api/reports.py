"""Content report routes for members and moderators."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from discuss_board.api.pagination import Page
from discuss_board.board.api._errors import to_http_error
from discuss_board.board.api.deps import member_actor, moderator_actor
from discuss_board.board.domain.exceptions import BoardError
from discuss_board.board.domain.reports_service import ReportsService
from discuss_board.board.schemas import reports as dto
from discuss_board.infra.auth import AuthenticatedActor

router = APIRouter(prefix="/discussBoard", tags=["reports"])
_service = ReportsService()


@router.post("/member/contentReports", response_model=dto.ContentReportResponse, status_code=status.HTTP_201_CREATED)
async def create_report_endpoint(
	payload: dto.ContentReportCreateRequest,
	actor: AuthenticatedActor = Depends(member_actor),
) -> dto.ContentReportResponse:
	try:
		return await _service.create_report(actor, payload)
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.delete(
	"/member/contentReports/{report_id}",
	status_code=status.HTTP_204_NO_CONTENT,
	response_class=Response,
	response_model=None,
)
async def erase_report_endpoint(
	report_id: UUID,
	actor: AuthenticatedActor = Depends(member_actor),
) -> None:
	try:
		await _service.erase_own_report(actor, report_id)
		return None
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.patch("/moderator/contentReports", response_model=Page[dto.ContentReportResponse])
async def index_reports_endpoint(
	payload: dto.ContentReportSearchRequest,
	actor: AuthenticatedActor = Depends(moderator_actor),
) -> Page[dto.ContentReportResponse]:
	try:
		return await _service.list_reports(payload)
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.get("/moderator/contentReports/{report_id}", response_model=dto.ContentReportResponse)
async def get_report_endpoint(
	report_id: UUID,
	actor: AuthenticatedActor = Depends(moderator_actor),
) -> dto.ContentReportResponse:
	try:
		return await _service.get_report(report_id)
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.put("/moderator/contentReports/{report_id}", response_model=dto.ContentReportResponse)
async def update_report_endpoint(
	report_id: UUID,
	payload: dto.ContentReportUpdateRequest,
	actor: AuthenticatedActor = Depends(moderator_actor),
) -> dto.ContentReportResponse:
	try:
		return await _service.update_report(actor, report_id, payload)
	except BoardError as exc:
		raise to_http_error(exc) from exc


@router.delete(
	"/moderator/contentReports/{report_id}",
	status_code=status.HTTP_204_NO_CONTENT,
	response_class=Response,
	response_model=None,
)
async def moderate_erase_report_endpoint(
	report_id: UUID,
	actor: AuthenticatedActor = Depends(moderator_actor),
) -> None:
	try:
		await _service.moderate_erase_report(report_id)
		return None
	except BoardError as exc:
		raise to_http_error(exc) from exc
