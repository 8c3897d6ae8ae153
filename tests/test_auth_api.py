import pytest
from unittest.mock import patch, AsyncMock

from src.exceptions import AuthenticationError


async def test_login_returns_authorization_url(api_client):
    response = await api_client.get("/api/v1/auth/login")

    assert response.status_code == 200
    assert response.json()["auth_url"].startswith("https://accounts.google.com/o/oauth2/auth?")


async def test_callback_requires_code(api_client):
    response = await api_client.get("/api/v1/auth/callback")

    assert response.status_code == 400
    assert response.json()["detail"] == "Authorization code is required"


async def test_callback_returns_token_and_user(api_client, token_service, mock_current_user):
    with patch(
        "src.services.auth_service.AuthService.handle_callback",
        new=AsyncMock(return_value=("signed.jwt.token", mock_current_user)),
    ):
        response = await api_client.get("/api/v1/auth/callback", params={"code": "auth-code"})

    assert response.status_code == 200
    body = response.json()
    assert body["token"] == "signed.jwt.token"
    assert body["user"]["id"] == mock_current_user.id
    assert body["user"]["email"] == "test@example.com"


async def test_callback_failure_is_generic_500(api_client):
    with patch(
        "src.services.auth_service.AuthService.handle_callback",
        new=AsyncMock(side_effect=AuthenticationError("Failed to exchange code for token")),
    ):
        response = await api_client.get("/api/v1/auth/callback", params={"code": "bad-code"})

    assert response.status_code == 500
    assert response.json()["detail"] == "Failed to authenticate user"


async def test_me_requires_bearer_token(api_client):
    response = await api_client.get("/api/v1/auth/me")

    assert response.status_code == 401


async def test_me_rejects_invalid_token(api_client):
    response = await api_client.get("/api/v1/auth/me", headers={"Authorization": "Bearer garbage"})

    assert response.status_code == 401


async def test_me_with_valid_token(api_client, token_service, mock_current_user):
    token = token_service.issue_token(mock_current_user.id)

    response = await api_client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200
    assert response.json()["id"] == mock_current_user.id
    assert response.json()["name"] == "Test User"


async def test_me_for_deleted_user_is_500(api_client, token_service):
    token = token_service.issue_token("00000000-0000-0000-0000-000000000000")

    response = await api_client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 500


async def test_logout_is_stateless(async_client):
    response = await async_client.post("/api/v1/auth/logout")

    assert response.status_code == 200
    assert response.json() == {"message": "Logged out successfully"}


async def test_health_is_public(api_client):
    response = await api_client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


async def test_services_status_reports_live_state(api_client):
    response = await api_client.get("/api/v1/services/status")

    assert response.status_code == 200
    body = response.json()
    assert body["openai"]["available"] is True
    assert body["database"]["status"] == "connected"
