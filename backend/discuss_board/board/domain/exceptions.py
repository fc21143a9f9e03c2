"""Custom exceptions for discussion board services."""

from __future__ import annotations

from fastapi import status

if hasattr(status, "HTTP_422_UNPROCESSABLE_CONTENT"):
	_HTTP_422 = status.HTTP_422_UNPROCESSABLE_CONTENT
else:  # pragma: no cover - older Starlette builds
	_HTTP_422 = status.HTTP_422_UNPROCESSABLE_ENTITY


class BoardError(Exception):
	"""Base class for board related errors."""

	status_code: int = status.HTTP_400_BAD_REQUEST
	detail: str = "board_error"

	def __init__(self, detail: str | None = None) -> None:
		super().__init__(detail or self.detail)
		if detail:
			self.detail = detail


class UnauthorizedError(BoardError):
	"""Raised when credentials or tokens are missing, wrong or expired."""

	status_code = status.HTTP_401_UNAUTHORIZED
	detail = "unauthorized"


class NotFoundError(BoardError):
	"""Thrown when a resource is not visible or missing."""

	status_code = status.HTTP_404_NOT_FOUND
	detail = "not_found"


class ForbiddenError(BoardError):
	"""Raised when authorization fails."""

	status_code = status.HTTP_403_FORBIDDEN
	detail = "forbidden"


class ConflictError(BoardError):
	"""Raised for conflicting operations (e.g., duplicate reaction)."""

	status_code = status.HTTP_409_CONFLICT
	detail = "conflict"


class ValidationError(BoardError):
	"""Raised for validation errors not covered by FastAPI schema validation."""

	status_code = _HTTP_422
	detail = "validation_error"


class RateLimitedError(BoardError):
	status_code = status.HTTP_429_TOO_MANY_REQUESTS
	detail = "rate_limited"
