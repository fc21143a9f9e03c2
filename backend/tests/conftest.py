import sys
from pathlib import Path
from typing import Awaitable, Callable

import pytest
import pytest_asyncio
from fakeredis.aioredis import FakeRedis
from httpx import ASGITransport, AsyncClient

# Ensure backend package is importable when tests run from repo root
BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
	sys.path.insert(0, str(BACKEND_ROOT))

from discuss_board.board.domain import repo
from discuss_board.board.schemas import auth as auth_dto
from discuss_board.infra import store
from discuss_board.infra.redis import redis_client, set_redis_client
from discuss_board.main import app
from discuss_board.sdk import Connection, DiscussBoardClient
from discuss_board.settings import settings

ADMIN_PASSWORD = "Adm1n!Secret#"
MEMBER_PASSWORD = "member-pass-123"

REQUIRED_CONSENT = [
	auth_dto.ConsentInput(policy_type="privacy_policy", policy_version="2024-01", consent_action="granted"),
	auth_dto.ConsentInput(policy_type="terms_of_service", policy_version="2024-01", consent_action="granted"),
]


@pytest.fixture(autouse=True)
def force_test_settings():
	"""Run against the in-memory store with cheap password hashing."""
	original = {
		"storage_backend": settings.storage_backend,
		"password_time_cost": settings.password_time_cost,
		"password_memory_cost": settings.password_memory_cost,
		"administrator_join_enabled": settings.administrator_join_enabled,
		"edit_window_minutes": settings.edit_window_minutes,
		"max_tags_per_post": settings.max_tags_per_post,
		"login_attempts_per_minute": settings.login_attempts_per_minute,
	}
	settings.storage_backend = "memory"
	settings.password_time_cost = 1
	settings.password_memory_cost = 256
	settings.administrator_join_enabled = True
	settings.edit_window_minutes = 30
	settings.max_tags_per_post = 5
	settings.login_attempts_per_minute = 10
	try:
		yield
	finally:
		for key, value in original.items():
			setattr(settings, key, value)


@pytest.fixture(autouse=True)
def memory_store(force_test_settings):
	fresh = repo.build_store()
	store.set_store(fresh)
	try:
		yield fresh
	finally:
		store.set_store(None)


@pytest_asyncio.fixture(autouse=True)
async def fake_redis():
	original = redis_client._client
	client = FakeRedis(decode_responses=True)
	set_redis_client(client)
	try:
		yield client
	finally:
		set_redis_client(original)
		await client.flushall()


@pytest_asyncio.fixture
async def api_client():
	transport = ASGITransport(app=app)
	async with AsyncClient(transport=transport, base_url="http://testserver") as client:
		yield client


@pytest.fixture
def new_client(api_client: AsyncClient) -> Callable[[], DiscussBoardClient]:
	"""Each call returns an SDK client with its own authorization header."""

	def _factory() -> DiscussBoardClient:
		return DiscussBoardClient(Connection(host="http://testserver", client=api_client))

	return _factory


@pytest.fixture
def join_member(new_client) -> Callable[..., Awaitable[tuple[DiscussBoardClient, auth_dto.MemberAuthorized]]]:
	async def _join(nickname: str, *, email: str | None = None) -> tuple[DiscussBoardClient, auth_dto.MemberAuthorized]:
		client = new_client()
		member = await client.auth.member_join(
			auth_dto.MemberJoinRequest(
				email=email or f"{nickname}@example.com",
				password=MEMBER_PASSWORD,
				nickname=nickname,
				consent=REQUIRED_CONSENT,
			)
		)
		return client, member

	return _join


@pytest_asyncio.fixture
async def administrator(new_client) -> tuple[DiscussBoardClient, auth_dto.AdministratorAuthorized]:
	client = new_client()
	admin = await client.auth.administrator_join(
		auth_dto.AdministratorJoinRequest(email="admin@example.com", password=ADMIN_PASSWORD, nickname="admin")
	)
	return client, admin


@pytest_asyncio.fixture
async def moderator(administrator, join_member) -> tuple[DiscussBoardClient, auth_dto.ModeratorAuthorized]:
	admin_client, _ = administrator
	client, member = await join_member("mod")
	await admin_client.auth.moderator_join(auth_dto.ModeratorAppointRequest(member_id=member.id))
	moderator = await client.auth.moderator_login(
		auth_dto.LoginRequest(email="mod@example.com", password=MEMBER_PASSWORD)
	)
	return client, moderator


@pytest.fixture
def member_password() -> str:
	return MEMBER_PASSWORD


@pytest.fixture
def admin_password() -> str:
	return ADMIN_PASSWORD


@pytest.fixture
def required_consent() -> list[auth_dto.ConsentInput]:
	return list(REQUIRED_CONSENT)
