"""Shared pytest fixtures for all test suites."""

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from backend.app.api.auth import get_identity_verifier
from backend.app.auth.google import IdentityVerificationError
from backend.app.auth.tokens import JwtTokenService
from backend.app.config import Settings, get_settings
from backend.app.main import app
from backend.app.models.auth import GoogleIdentity
from backend.app.storage.factory import get_clipboard_store
from backend.app.storage.inmemory import InMemoryClipboardStore

VALID_ID_TOKEN = "valid-google-id-token"

ALICE = GoogleIdentity(
    subject="google-sub-alice",
    name="Alice Example",
    email="alice@example.com",
    picture="https://example.com/alice.png",
)
BOB = GoogleIdentity(subject="google-sub-bob", name=None, email="bob@example.com")


class FakeIdentityVerifier:
    """Accepts VALID_ID_TOKEN and rejects everything else."""

    def __init__(self, identity: GoogleIdentity = ALICE) -> None:
        self.identity = identity
        self.calls: list[str] = []

    def verify(self, id_token: str) -> GoogleIdentity:
        self.calls.append(id_token)
        if id_token != VALID_ID_TOKEN:
            raise IdentityVerificationError("bad token")
        return self.identity


def bearer(token_service: JwtTokenService, identity: GoogleIdentity = ALICE) -> dict[str, str]:
    """Authorization header for a freshly issued session token."""
    token, _ = token_service.create_access_token(identity)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def settings() -> Settings:
    """Settings seeded by the root conftest."""
    return get_settings()


@pytest.fixture
def token_service(settings: Settings) -> JwtTokenService:
    """Token service sharing the app's signing configuration."""
    return JwtTokenService.from_settings(settings)


@pytest.fixture
def store() -> InMemoryClipboardStore:
    """Fresh in-memory clipboard store."""
    return InMemoryClipboardStore()


@pytest.fixture
def verifier() -> FakeIdentityVerifier:
    return FakeIdentityVerifier()


@pytest.fixture
def client(
    store: InMemoryClipboardStore, verifier: FakeIdentityVerifier
) -> Generator[TestClient, None, None]:
    """Test client with storage and Google verification overridden."""
    app.dependency_overrides[get_clipboard_store] = lambda: store
    app.dependency_overrides[get_identity_verifier] = lambda: verifier

    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def alice_headers(token_service: JwtTokenService) -> dict[str, str]:
    return bearer(token_service, ALICE)


@pytest.fixture
def bob_headers(token_service: JwtTokenService) -> dict[str, str]:
    return bearer(token_service, BOB)


@pytest.fixture
def alice() -> GoogleIdentity:
    return ALICE


@pytest.fixture
def bob() -> GoogleIdentity:
    return BOB


@pytest.fixture
def valid_id_token() -> str:
    return VALID_ID_TOKEN
