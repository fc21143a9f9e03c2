import pytest

from discuss_board.settings import settings


@pytest.mark.asyncio
async def test_liveness(api_client):
	response = await api_client.get("/ops/health")
	assert response.status_code == 200
	body = response.json()
	assert body["status"] == "ok"
	assert body["service"] == settings.service_name


@pytest.mark.asyncio
async def test_readiness_with_memory_store(api_client):
	response = await api_client.get("/ops/health/ready")
	assert response.status_code == 200
	body = response.json()
	assert body["status"] == "ok"
	assert body["checks"]["redis"]["ok"] is True
	assert body["checks"]["storage"] == {"ok": True, "backend": "memory"}


@pytest.mark.asyncio
async def test_metrics_exposition(api_client):
	await api_client.get("/ops/health")
	response = await api_client.get("/ops/metrics")
	assert response.status_code == 200
	assert "discuss_board_http_requests_total" in response.text


@pytest.mark.asyncio
async def test_request_id_is_echoed(api_client):
	response = await api_client.get("/ops/health", headers={"X-Request-Id": "req-abc"})
	assert response.headers["X-Request-Id"] == "req-abc"

	generated = await api_client.get("/ops/health")
	assert generated.headers["X-Request-Id"]


@pytest.mark.asyncio
async def test_validation_errors_use_envelope(api_client):
	response = await api_client.post("/auth/member/join", json={"email": "not-an-email"}, headers={"X-Request-Id": "req-422"})
	assert response.status_code == 422
	body = response.json()
	assert body["detail"] == "validation_error"
	assert body["request_id"] == "req-422"
	assert {tuple(error["loc"])[-1] for error in body["errors"]} >= {"email", "password", "nickname", "consent"}


@pytest.mark.asyncio
async def test_http_errors_carry_request_id(api_client):
	response = await api_client.get(
		"/discussBoard/posts/00000000-0000-0000-0000-000000000000",
		headers={"X-Request-Id": "req-404"},
	)
	assert response.status_code == 404
	assert response.json() == {"detail": "post_not_found", "request_id": "req-404"}
