"""Unit tests for session token issuance and validation."""

from datetime import UTC, datetime, timedelta

import jwt
import pytest

from backend.app.auth.tokens import ALGORITHM, InvalidSessionTokenError, JwtTokenService
from backend.app.models.auth import GoogleIdentity

SIGNING_KEY = "unit-test-signing-key-0123456789abcdef"


@pytest.fixture
def service() -> JwtTokenService:
    return JwtTokenService(
        signing_key=SIGNING_KEY,
        issuer="clipboard-api",
        audience="clipboard-web",
        expiration_minutes=30,
    )


@pytest.fixture
def identity() -> GoogleIdentity:
    return GoogleIdentity(
        subject="sub-123",
        name="Test User",
        email="test@example.com",
        picture="https://example.com/p.png",
    )


def test_create_access_token_returns_lifetime(service: JwtTokenService, identity: GoogleIdentity) -> None:
    """Test token lifetime matches configured expiration."""
    token, expires_in = service.create_access_token(identity)

    assert token
    assert expires_in == 30 * 60


def test_token_claims(service: JwtTokenService, identity: GoogleIdentity) -> None:
    """Test issued token carries identity, issuer and audience claims."""
    token, _ = service.create_access_token(identity)

    claims = jwt.decode(token, SIGNING_KEY, algorithms=[ALGORITHM], audience="clipboard-web")

    assert claims["sub"] == "sub-123"
    assert claims["name"] == "Test User"
    assert claims["email"] == "test@example.com"
    assert claims["picture"] == "https://example.com/p.png"
    assert claims["iss"] == "clipboard-api"
    assert claims["aud"] == "clipboard-web"
    assert claims["exp"] - claims["iat"] == 30 * 60


def test_name_falls_back_to_email(service: JwtTokenService) -> None:
    """Test name claim uses email when Google returns no name."""
    token, _ = service.create_access_token(GoogleIdentity(subject="s", email="e@example.com"))

    claims = jwt.decode(token, SIGNING_KEY, algorithms=[ALGORITHM], audience="clipboard-web")

    assert claims["name"] == "e@example.com"
    assert "picture" not in claims


def test_name_and_email_empty_when_absent(service: JwtTokenService) -> None:
    """Test name and email default to empty strings."""
    token, _ = service.create_access_token(GoogleIdentity(subject="s"))

    claims = jwt.decode(token, SIGNING_KEY, algorithms=[ALGORITHM], audience="clipboard-web")

    assert claims["name"] == ""
    assert claims["email"] == ""


def test_decode_round_trip(service: JwtTokenService, identity: GoogleIdentity) -> None:
    """Test decoding an issued token yields the principal."""
    token, _ = service.create_access_token(identity)

    principal = service.decode_access_token(token)

    assert principal.user_id == "sub-123"
    assert principal.name == "Test User"
    assert principal.email == "test@example.com"
    assert principal.picture_url == "https://example.com/p.png"
    assert principal.expires_at > datetime.now(UTC)


def test_decode_maps_empty_claims_to_none(service: JwtTokenService) -> None:
    """Test empty name/email claims decode to None."""
    token, _ = service.create_access_token(GoogleIdentity(subject="s"))

    principal = service.decode_access_token(token)

    assert principal.name is None
    assert principal.email is None
    assert principal.picture_url is None


def test_decode_rejects_expired_token(service: JwtTokenService, identity: GoogleIdentity) -> None:
    """Test expired tokens are rejected."""
    issued = datetime.now(UTC) - timedelta(hours=2)
    token, _ = service.create_access_token(identity, now=issued)

    with pytest.raises(InvalidSessionTokenError):
        service.decode_access_token(token)


def test_decode_rejects_wrong_audience(identity: GoogleIdentity) -> None:
    """Test tokens minted for another audience are rejected."""
    other = JwtTokenService(signing_key=SIGNING_KEY, issuer="clipboard-api", audience="someone-else")
    token, _ = other.create_access_token(identity)

    service = JwtTokenService(signing_key=SIGNING_KEY, issuer="clipboard-api", audience="clipboard-web")
    with pytest.raises(InvalidSessionTokenError):
        service.decode_access_token(token)


def test_decode_rejects_wrong_issuer(identity: GoogleIdentity) -> None:
    """Test tokens from another issuer are rejected."""
    other = JwtTokenService(signing_key=SIGNING_KEY, issuer="evil", audience="clipboard-web")
    token, _ = other.create_access_token(identity)

    service = JwtTokenService(signing_key=SIGNING_KEY, issuer="clipboard-api", audience="clipboard-web")
    with pytest.raises(InvalidSessionTokenError):
        service.decode_access_token(token)


def test_decode_rejects_tampered_signature(service: JwtTokenService, identity: GoogleIdentity) -> None:
    """Test tokens signed with a different key are rejected."""
    forger = JwtTokenService(
        signing_key="another-signing-key-0123456789abcdef",
        issuer="clipboard-api",
        audience="clipboard-web",
    )
    token, _ = forger.create_access_token(identity)

    with pytest.raises(InvalidSessionTokenError):
        service.decode_access_token(token)


def test_decode_rejects_garbage(service: JwtTokenService) -> None:
    """Test malformed tokens are rejected."""
    with pytest.raises(InvalidSessionTokenError):
        service.decode_access_token("not.a.jwt")

    with pytest.raises(InvalidSessionTokenError):
        service.decode_access_token("completely_invalid")


def test_decode_rejects_token_without_subject(service: JwtTokenService) -> None:
    """Test tokens missing the sub claim are rejected."""
    now = datetime.now(UTC)
    token = jwt.encode(
        {"iss": "clipboard-api", "aud": "clipboard-web", "iat": now, "exp": now + timedelta(minutes=5)},
        SIGNING_KEY,
        algorithm=ALGORITHM,
    )

    with pytest.raises(InvalidSessionTokenError):
        service.decode_access_token(token)


def test_signing_key_required() -> None:
    """Test an empty signing key is refused."""
    with pytest.raises(ValueError):
        JwtTokenService(signing_key="", issuer="i", audience="a")
