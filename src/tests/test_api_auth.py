"""Tests for JWT authentication endpoints."""
import pytest


@pytest.mark.django_db
def test_token_obtain_returns_tokens_and_profile(api_client, admin_user):
    resp = api_client.post(
        "/api/v1/auth/token/",
        {"email": "ADMIN@test.com", "password": "TestPass123!"},
        format="json",
    )
    assert resp.status_code == 200, resp.data
    assert "access" in resp.data
    assert "refresh" in resp.data
    assert resp.data["user"]["email"] == "admin@test.com"
    assert resp.data["user"]["role"] == "Admin"
    assert "password" not in resp.data["user"]


@pytest.mark.django_db
def test_token_obtain_rejects_bad_password(api_client, admin_user):
    resp = api_client.post(
        "/api/v1/auth/token/",
        {"email": "admin@test.com", "password": "wrong"},
        format="json",
    )
    assert resp.status_code == 401


@pytest.mark.django_db
def test_bearer_token_authenticates_requests(api_client, admin_user):
    token = api_client.post(
        "/api/v1/auth/token/",
        {"email": "admin@test.com", "password": "TestPass123!"},
        format="json",
    ).data["access"]

    api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")
    resp = api_client.get("/api/v1/auth/me/")
    assert resp.status_code == 200
    assert resp.data["name"] == "Admin User"


@pytest.mark.django_db
def test_refresh_issues_new_access_token(api_client, admin_user):
    refresh = api_client.post(
        "/api/v1/auth/token/",
        {"email": "admin@test.com", "password": "TestPass123!"},
        format="json",
    ).data["refresh"]

    resp = api_client.post("/api/v1/auth/token/refresh/", {"refresh": refresh}, format="json")
    assert resp.status_code == 200
    assert "access" in resp.data


@pytest.mark.django_db
@pytest.mark.parametrize(
    "url",
    [
        "/api/v1/accounts/",
        "/api/v1/quotations/",
        "/api/v1/users/",
        "/api/v1/teams/",
        "/api/v1/zones/",
        "/api/v1/auth/me/",
    ],
)
def test_endpoints_require_authentication(api_client, url):
    assert api_client.get(url).status_code == 401
