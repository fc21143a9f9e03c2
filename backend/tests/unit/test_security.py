"""JWT helpers, bearer verification and password hashing."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest
from fastapi import HTTPException

from discuss_board.infra import jwt as jwt_helper
from discuss_board.infra.auth import ADMINISTRATOR, MEMBER, MODERATOR, AuthenticatedActor, verify_access_jwt
from discuss_board.infra.password import hash_password, is_strong_admin_password, verify_password


def _claims(role: str = MEMBER) -> dict[str, object]:
	return {"sub": str(uuid4()), "role": role, "mid": str(uuid4()), "uid": str(uuid4()), "sid": str(uuid4())}


def test_access_token_round_trip_builds_actor():
	claims = _claims(MODERATOR)
	token = jwt_helper.encode_access(claims, expires_at=jwt_helper.access_expiry())
	actor = verify_access_jwt(token)
	assert str(actor.id) == claims["sub"]
	assert str(actor.member_id) == claims["mid"]
	assert actor.role == MODERATOR
	assert actor.is_staff


def test_refresh_token_is_not_an_access_token():
	token = jwt_helper.encode_refresh(_claims(), expires_at=jwt_helper.refresh_expiry())
	with pytest.raises(HTTPException) as exc:
		verify_access_jwt(token)
	assert exc.value.status_code == 401


def test_refresh_tokens_are_unique_per_issue():
	claims = _claims()
	expires = jwt_helper.refresh_expiry()
	assert jwt_helper.encode_refresh(claims, expires_at=expires) != jwt_helper.encode_refresh(claims, expires_at=expires)


def test_expired_access_token_rejected():
	token = jwt_helper.encode_access(_claims(), expires_at=datetime.now(timezone.utc) - timedelta(minutes=5))
	with pytest.raises(HTTPException):
		verify_access_jwt(token)


def test_unknown_role_rejected():
	token = jwt_helper.encode_access(_claims("guest"), expires_at=jwt_helper.access_expiry())
	with pytest.raises(HTTPException) as exc:
		verify_access_jwt(token)
	assert exc.value.detail == "invalid_token"


def test_role_ranking():
	def actor(role: str) -> AuthenticatedActor:
		return AuthenticatedActor(id=uuid4(), role=role, member_id=uuid4(), user_account_id=uuid4())

	assert actor(ADMINISTRATOR).has_role(MODERATOR)
	assert actor(MODERATOR).has_role(MEMBER)
	assert not actor(MEMBER).has_role(MODERATOR)
	assert not actor(MEMBER).is_staff


def test_password_hash_and_verify():
	hashed = hash_password("correct horse")
	assert hashed != "correct horse"
	assert verify_password(hashed, "correct horse")
	assert not verify_password(hashed, "wrong horse")
	assert not verify_password("not-a-hash", "correct horse")


@pytest.mark.parametrize(
	("password", "strong"),
	[("Adm1n!Secret#", True), ("short1!A", False), ("alllowercase1!", False), ("NoDigitsHere!!", False), ("NoSymbols123A", False)],
)
def test_admin_password_strength(password, strong):
	assert is_strong_admin_password(password) is strong
