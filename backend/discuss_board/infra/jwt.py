"""Centralised JWT helpers for access and refresh tokens.

Uses HS256 with the application's secret key. Validates standard claims
and the configured issuer/audience values.
"""

from __future__ import annotations

import secrets
import time
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

import jwt
from jwt import InvalidTokenError

from discuss_board.settings import settings

ACCESS = "access"
REFRESH = "refresh"
_REQUIRED_CLAIMS = ("sub", "sid", "role", "mid", "uid")


def _encode(payload: dict[str, object], *, token_type: str, expires_at: datetime) -> str:
	body: Dict[str, Any] = {
		"iss": settings.jwt_issuer,
		"aud": settings.jwt_audience,
		"iat": int(time.time()),
		"exp": int(expires_at.timestamp()),
		"typ": token_type,
	}
	body.update(payload)
	return jwt.encode(body, settings.secret_key, algorithm="HS256")


def access_expiry(now: datetime | None = None) -> datetime:
	now = now or datetime.now(timezone.utc)
	return now + timedelta(minutes=settings.access_ttl_minutes)


def refresh_expiry(now: datetime | None = None) -> datetime:
	now = now or datetime.now(timezone.utc)
	return now + timedelta(days=settings.refresh_ttl_days)


def encode_access(payload: dict[str, object], *, expires_at: datetime) -> str:
	"""Encode an access token with issuer/audience defaults."""
	return _encode(payload, token_type=ACCESS, expires_at=expires_at)


def encode_refresh(payload: dict[str, object], *, expires_at: datetime) -> str:
	"""Encode a refresh token; a random jti keeps rotated tokens distinct."""
	body = dict(payload)
	body["jti"] = secrets.token_urlsafe(16)
	return _encode(body, token_type=REFRESH, expires_at=expires_at)


def _decode(token: str, token_type: str) -> dict[str, object]:
	options = {"require": ["exp", "iat", "iss", "aud"]}
	payload = jwt.decode(
		token,
		settings.secret_key,
		algorithms=["HS256"],
		audience=settings.jwt_audience,
		issuer=settings.jwt_issuer,
		leeway=5,
		options=options,
	)
	if payload.get("typ") != token_type:
		raise InvalidTokenError("wrong_token_type")
	for k in _REQUIRED_CLAIMS:
		if not payload.get(k):
			raise InvalidTokenError(f"missing_claim:{k}")
	return payload  # type: ignore[return-value]


def decode_access(token: str) -> dict[str, object]:
	"""Decode and validate an access token.

	Raises jwt.InvalidTokenError subclasses on failure.
	"""
	return _decode(token, ACCESS)


def decode_refresh(token: str) -> dict[str, object]:
	return _decode(token, REFRESH)
