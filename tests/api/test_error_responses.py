"""API tests for error mapping: storage failures, missing database, bad input."""

import pytest
from httpx import AsyncClient
from sqlalchemy.exc import OperationalError

from app.api.v1 import dependencies as deps
from app.core.config import get_settings
from app.main import app


class _DownService:
    async def list_keys(self, message_store_id: int):
        raise OperationalError("SELECT 1", {}, ConnectionRefusedError("refused"))


async def test_storage_failure_is_503(client: AsyncClient) -> None:
    app.dependency_overrides[deps.get_message_key_service] = lambda: _DownService()
    response = await client.get("/api/v1/message-stores/1/message-keys")
    assert response.status_code == 503
    body = response.json()
    assert body["error"] == "STORAGE_ERROR"
    assert body["details"]["reason"] == "OperationalError"


async def test_database_not_configured_is_503(client: AsyncClient) -> None:
    if get_settings().database_url:
        pytest.skip("DATABASE_URL is configured")
    response = await client.get("/api/v1/message-stores/1/message-keys")
    assert response.status_code == 503
    assert response.json()["error"] == "SERVICE_UNAVAILABLE"


async def test_unknown_route_is_json_404(client: AsyncClient) -> None:
    response = await client.get("/api/v1/nope")
    assert response.status_code == 404
    assert response.json()["error"] == "HTTP_ERROR"


async def test_runtime_key_with_separator_is_400(client: AsyncClient, api_services) -> None:
    response = await client.get("/api/v1/runtime/message-stores/7/messages/A:B/en")
    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "VALIDATION_ERROR"
    assert body["details"] == {"field": "messageKey"}
