"""Integration tests for /api/auth/google and /api/profile/me."""

from typing import Any

from fastapi.testclient import TestClient

from backend.app.auth.tokens import JwtTokenService
from backend.app.models.auth import GoogleIdentity


def test_exchange_valid_google_token(client: TestClient, valid_id_token: str) -> None:
    """Test a verified Google token is exchanged for a session token."""
    response = client.post("/api/auth/google", json={"idToken": valid_id_token})

    assert response.status_code == 200
    data = response.json()
    assert data["tokenType"] == "Bearer"
    assert data["expiresInSeconds"] == 3600
    assert data["accessToken"]


def test_issued_token_authenticates_profile(
    client: TestClient, valid_id_token: str, alice: GoogleIdentity
) -> None:
    """Test the issued session token works on protected routes."""
    token = client.post("/api/auth/google", json={"idToken": valid_id_token}).json()["accessToken"]

    response = client.get("/api/profile/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200
    assert response.json() == {
        "userId": alice.subject,
        "name": alice.name,
        "email": alice.email,
        "pictureUrl": alice.picture,
    }


def test_exchange_invalid_google_token(client: TestClient, verifier: Any) -> None:
    """Test unverifiable Google tokens return 401."""
    response = client.post("/api/auth/google", json={"idToken": "forged"})

    assert response.status_code == 401
    assert verifier.calls == ["forged"]


def test_exchange_blank_google_token(client: TestClient, verifier: Any) -> None:
    """Test blank tokens return 401 without calling the verifier."""
    response = client.post("/api/auth/google", json={"idToken": "   "})

    assert response.status_code == 401
    assert verifier.calls == []


def test_exchange_missing_body_field(client: TestClient) -> None:
    """Test a body without idToken is treated as a blank token."""
    response = client.post("/api/auth/google", json={})

    assert response.status_code == 401


def test_exchange_malformed_body(client: TestClient) -> None:
    """Test a non-JSON body is a 400."""
    response = client.post(
        "/api/auth/google", content=b"not json", headers={"Content-Type": "application/json"}
    )

    assert response.status_code == 400


def test_profile_requires_auth(client: TestClient) -> None:
    """Test /api/profile/me without a token returns 401."""
    response = client.get("/api/profile/me")

    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == "Bearer"


def test_profile_without_name_uses_email(
    client: TestClient, bob_headers: dict[str, str], bob: GoogleIdentity
) -> None:
    """Test name claim falls back to email for identities without a name."""
    response = client.get("/api/profile/me", headers=bob_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["userId"] == bob.subject
    assert data["name"] == bob.email
    assert data["pictureUrl"] is None


def test_profile_rejects_foreign_token(client: TestClient, alice: GoogleIdentity) -> None:
    """Test tokens signed by someone else are rejected."""
    forger = JwtTokenService(
        signing_key="not-the-server-key-0123456789abcdef",
        issuer="clipboard-api-test",
        audience="clipboard-web-test",
    )
    token, _ = forger.create_access_token(alice)

    response = client.get("/api/profile/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401
