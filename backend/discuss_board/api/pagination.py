"""Offset pagination envelope shared by every list endpoint.

Responses take the shape ``{"pagination": {...}, "data": [...]}`` where
``pages == ceil(records / limit)`` and ``len(data) <= limit``.
"""

from __future__ import annotations

import math
from typing import Generic, Literal, Optional, Sequence, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")

DEFAULT_LIMIT = 100
MAX_LIMIT = 1000


class Pagination(BaseModel):
	current: int = Field(ge=1)
	limit: int = Field(ge=1)
	records: int = Field(ge=0)
	pages: int = Field(ge=0)


class Page(BaseModel, Generic[T]):
	pagination: Pagination
	data: list[T]


class PageRequest(BaseModel):
	"""Base body for PATCH list endpoints; subclasses add filters and narrow sort_by."""

	page: int = Field(default=1, ge=1)
	limit: int = Field(default=DEFAULT_LIMIT, ge=1, le=MAX_LIMIT)
	sort_by: Optional[str] = None
	sort_direction: Literal["asc", "desc"] = "desc"

	@property
	def offset(self) -> int:
		return (self.page - 1) * self.limit


def page_count(records: int, limit: int) -> int:
	if records <= 0:
		return 0
	return math.ceil(records / limit)


def build_page(items: Sequence[T], *, request: PageRequest, records: int) -> Page[T]:
	return Page(
		pagination=Pagination(
			current=request.page,
			limit=request.limit,
			records=records,
			pages=page_count(records, request.limit),
		),
		data=list(items),
	)
