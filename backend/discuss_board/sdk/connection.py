"""HTTP plumbing shared by every SDK namespace."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

import httpx
from pydantic import BaseModel


class HttpError(Exception):
	"""Raised for every non-2xx response."""

	def __init__(self, status: int, detail: Any, body: Any) -> None:
		super().__init__(f"HTTP {status}: {detail}")
		self.status = status
		self.detail = detail
		self.body = body


@dataclass
class Connection:
	"""Target host plus headers sent with every call.

	``client`` may be handed in (for example an ``ASGITransport`` client in
	tests); otherwise one is created on first use and closed by ``aclose``.
	"""

	host: str
	headers: dict[str, str] = field(default_factory=dict)
	client: Optional[httpx.AsyncClient] = None
	timeout_seconds: float = 30.0
	_owns_client: bool = field(default=False, init=False, repr=False)

	def _client(self) -> httpx.AsyncClient:
		if self.client is None:
			self.client = httpx.AsyncClient(timeout=httpx.Timeout(self.timeout_seconds))
			self._owns_client = True
		return self.client

	def authorize(self, access_token: str) -> None:
		self.headers["Authorization"] = f"Bearer {access_token}"

	async def request(self, method: str, path: str, *, body: Optional[BaseModel] = None, params: Optional[dict[str, Any]] = None) -> Any:
		payload = body.model_dump(mode="json", exclude_none=True) if body is not None else None
		response = await self._client().request(
			method,
			self.host.rstrip("/") + path,
			json=payload,
			params=params,
			headers=self.headers,
		)
		if response.status_code >= 400:
			try:
				data = response.json()
			except ValueError:
				data = response.text
			detail = data.get("detail") if isinstance(data, dict) else data
			raise HttpError(response.status_code, detail, data)
		if response.status_code == 204 or not response.content:
			return None
		return response.json()

	async def aclose(self) -> None:
		if self.client is not None and self._owns_client:
			await self.client.aclose()
			self.client = None
